#!/usr/bin/env python3
"""
text.py
-------------------
Helpers for turning free text into entry fields.

Used by the capture flows, where only a blob of text is known.
"""
from __future__ import annotations

from typing import Optional

MAX_TITLE_LENGTH = 80
DEFAULT_TITLE = "quick note"
URL_PREFIXES = ("http://", "https://")
URL_TRAILING_PUNCTUATION = ")]},.;"


def summarize_title(text: str) -> str:
    """
    First line of ``text``, trimmed and cut to 80 characters.

    Examples:
        >>> summarize_title("Read Pluto vol.1\\nGreat pacing")
        'Read Pluto vol.1'
        >>> summarize_title("   ")
        'quick note'
    """
    lines = (text or "").splitlines()
    first_line = lines[0].strip() if lines else ""
    return first_line[:MAX_TITLE_LENGTH] or DEFAULT_TITLE


def extract_url_from_text(text: str) -> Optional[str]:
    """
    First http(s) token in ``text``, without trailing punctuation.

    Examples:
        >>> extract_url_from_text("save this https://example.com/path?x=1, thanks")
        'https://example.com/path?x=1'
    """
    for part in (text or "").split():
        if part.startswith(URL_PREFIXES):
            return part.rstrip(URL_TRAILING_PUNCTUATION)
    return None
