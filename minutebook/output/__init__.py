"""Document export of minutes (Markdown and HTML)."""

from minutebook.output.renderer import MinutesRenderer, TemplateNotFound
from minutebook.output.schemas import (
    DetailData,
    ItemData,
    MinutesContext,
    RenderedMinutes,
    TopicData,
)

__all__ = [
    "DetailData",
    "ItemData",
    "MinutesContext",
    "MinutesRenderer",
    "RenderedMinutes",
    "TemplateNotFound",
    "TopicData",
]
