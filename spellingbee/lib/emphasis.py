"""Locate a target word inside free text for bold/italic emphasis"""

from __future__ import annotations

import re


def locate(haystack: str, needle: str) -> tuple[int, int] | None:
    """
    Find the first case-insensitive occurrence of needle in haystack.

    Offsets index the original haystack and the end is exclusive, so
    haystack[start:end] is the matched text in its original casing.

    Returns:
        (start, end) or None when needle is empty or absent
    """
    if not needle or not haystack:
        return None
    match = re.search(re.escape(needle), haystack, re.IGNORECASE)
    if match is None:
        return None
    return match.start(), match.end()
