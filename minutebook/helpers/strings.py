"""String helpers."""

import re

EMAIL_ADDRESS_PATTERN = re.compile(
    r"([a-z0-9._-]+@[a-z0-9._-]{2,}\.[a-z0-9._-]{2,})", re.IGNORECASE
)


def erase_substring(text: str, substring: str) -> str:
    """Remove one occurrence of substring together with one adjacent space."""
    text = text.replace(f"{substring} ", "", 1)
    text = text.replace(f" {substring}", "", 1)
    return text.replace(substring, "", 1)


def extract_email_addresses(text: str) -> list[str]:
    """Return all email-like substrings in free text, in order."""
    return EMAIL_ADDRESS_PATTERN.findall(text or "")
