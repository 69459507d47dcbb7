"""Label documents available within a meeting series."""

import re
from typing import Any

from pydantic import Field, field_validator, model_validator

from minutebook.config import settings
from minutebook.helpers.color import is_dark_color, is_valid_hex_color_string
from minutebook.models.base import Document

_NAME_AND_COLOR = re.compile(r"(.*)(#([a-f\d][a-f\d][a-f\d]){1,2})$")


def separate_name_and_color(value: str) -> tuple[str, str | None]:
    """Split ``"name#color"`` into its parts.

    Returns:
        (name, color) where color is None if value has no color suffix
    """
    match = _NAME_AND_COLOR.match(value)
    if match:
        return match.group(1), match.group(2)
    return value, None


class LabelDoc(Document):
    """A colored label that topics and items reference by id."""

    name: str = Field(description="Label name, may contain spaces")
    color: str = Field(default_factory=lambda: settings.default_label_color)
    is_default_label: bool = Field(default=False)
    is_disabled: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def _split_name_and_color(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            name, color = separate_name_and_color(data["name"])
            if color is not None:
                data = {**data, "name": name, "color": color}
        return data

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        if not is_valid_hex_color_string(value):
            msg = "Label color must be a valid hex code"
            raise ValueError(msg)
        return value

    @property
    def has_dark_background(self) -> bool:
        return is_dark_color(self.color)
