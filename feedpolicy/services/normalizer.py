"""
Text normalisation shared by every check.

Two forms are produced from the same input:
- the sanitized form, safe to persist and display
- the analysis form, lowercased with diacritics folded, used for matching only
"""
from __future__ import annotations

import re
import unicodedata
from typing import Any, Optional

_ZERO_WIDTH_PATTERN = re.compile("[\u200b-\u200d\ufeff]")
_MARKUP_PATTERN = re.compile(r"</?[A-Za-z!][^<>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_COMBINING_MARKS_PATTERN = re.compile("[\u0300-\u036f]")


def coerce_text(value: Any) -> Optional[str]:
    """Strings pass through, plain scalars are stringified, anything else is None."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    return None


def sanitize(text: Any) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        text = coerce_text(text) or ""

    # Removing a tag can expose another one ("<a<b>>"), so run to a fixed point
    previous = None
    while previous != text:
        previous = text
        text = _ZERO_WIDTH_PATTERN.sub("", text)
        text = _MARKUP_PATTERN.sub(" ", text)

    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def analysis_form(text: Any) -> str:
    folded = unicodedata.normalize("NFKD", sanitize(text).lower())
    return _COMBINING_MARKS_PATTERN.sub("", folded)


def word_count(text: str) -> int:
    return len(text.split()) if text else 0
