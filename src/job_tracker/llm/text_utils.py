"""
Text processing utilities for the LLM layer.
"""

import re

ELLIPSIS = "..."

_WHITESPACE_RUN = re.compile(r"\s+")


def truncate_text(text: str, max_chars: int) -> str:
    """
    Cut text to ``max_chars`` characters, marking the cut with an ellipsis.

    Plain character cut, not word- or sentence-aware.

    Examples:
        >>> truncate_text("abcdef", 3)
        'abc...'
        >>> truncate_text("abc", 3)
        'abc'
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def clean_text(text: str) -> str:
    """Collapse whitespace runs to a single space and strip both ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()
