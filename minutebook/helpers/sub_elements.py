"""Lookups into lists of sub-documents (topics, items, labels)."""

from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def _attr(element: Any, attr: str) -> Any:
    if isinstance(element, dict):
        return element.get(attr)
    return getattr(element, attr, None)


def find_index_by_id(element_id: str, elements: Sequence[Any], attr: str = "id") -> int | None:
    """Return the index of the first element whose ``attr`` equals element_id."""
    for index, element in enumerate(elements):
        if _attr(element, attr) == element_id:
            return index
    return None


def get_element_by_id(element_id: str, elements: Sequence[T], attr: str = "id") -> T | None:
    """Return the first element whose ``attr`` equals element_id, else None."""
    index = find_index_by_id(element_id, elements, attr)
    return elements[index] if index is not None else None
