"""Small helpers shared by models, aggregates and workflows."""

from minutebook.helpers.color import hex_to_rgb, is_dark_color, is_valid_hex_color_string
from minutebook.helpers.dates import (
    current_date_plus_delta_days,
    extract_date_from_string,
    format_date_iso8601,
    format_datetime_iso8601_time,
)
from minutebook.helpers.sub_elements import find_index_by_id, get_element_by_id
from minutebook.helpers.strings import erase_substring, extract_email_addresses

__all__ = [
    "hex_to_rgb",
    "is_dark_color",
    "is_valid_hex_color_string",
    "current_date_plus_delta_days",
    "extract_date_from_string",
    "format_date_iso8601",
    "format_datetime_iso8601_time",
    "find_index_by_id",
    "get_element_by_id",
    "erase_substring",
    "extract_email_addresses",
]
