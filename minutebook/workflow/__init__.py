"""Workflows over minutes and meeting series.

- TopicsFinalizer: merges a minutes snapshot into the series ledger
- Finalizer: finalize / unfinalize minutes
- MinutesWorkflow: create series, add and remove minutes, sync visibility
- EditLockService: advisory soft locks
"""

from minutebook.workflow.edit_lock import EditLockService
from minutebook.workflow.finalizer import Finalizer, compile_finalized_info
from minutebook.workflow.minutes_workflow import MinutesWorkflow
from minutebook.workflow.topics_finalizer import (
    TopicsFinalizer,
    merge_minutes_into_ledger,
    stamp_lineage,
)

__all__ = [
    "EditLockService",
    "Finalizer",
    "MinutesWorkflow",
    "TopicsFinalizer",
    "compile_finalized_info",
    "merge_minutes_into_ledger",
    "stamp_lineage",
]
