"""Hex color parsing for label colors."""

import re

_SHORTHAND = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])$", re.IGNORECASE)
_FULL = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int] | None:
    """Convert ``#RGB`` or ``#RRGGBB`` into an (r, g, b) tuple.

    The leading ``#`` is optional. Returns None if the string is not a
    hex color.
    """
    expanded = _SHORTHAND.sub(lambda m: "".join(c * 2 for c in m.groups()), hex_color)
    match = _FULL.match(expanded)
    if not match:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def is_dark_color(color: str | tuple[int, int, int]) -> bool:
    """Return True if text on this background should be light.

    Uses the YIQ perceived brightness with a threshold of 125.
    """
    rgb = hex_to_rgb(color) if isinstance(color, str) else color
    if rgb is None:
        msg = f"Not a hex color: {color!r}"
        raise ValueError(msg)
    r, g, b = rgb
    brightness = round((r * 299 + g * 587 + b * 114) / 1000)
    return brightness < 125


def is_valid_hex_color_string(value: str | None) -> bool:
    """Accept ``#RGB``/``#RRGGBB``; reject None, ``""`` and ``"#"``."""
    if value is None or value in ("", "#"):
        return False
    return hex_to_rgb(value) is not None
