"""
Banned vocabulary detection.

Each term is checked twice:
1. literal word-boundary match on the sanitized text (exact usage)
2. separator-tolerant match on the analysis text, so "p.o.r.n" or
   "p_o_r_n" still hit "porn"
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Tuple

from feedpolicy.services.normalizer import analysis_form

_SEPARATOR = r"[^a-z0-9]*"


@lru_cache(maxsize=1024)
def compile_term(term: str) -> Optional[Tuple[Pattern, Pattern]]:
    """Compile (literal, obfuscated) patterns for one term, cached per term."""
    term = term.strip()
    if not term:
        return None
    literal = re.compile(r"\b" + re.escape(term) + r"\b", re.IGNORECASE)
    folded = analysis_form(term)
    obfuscated = re.compile(_SEPARATOR.join(re.escape(char) for char in folded))
    return literal, obfuscated


def match(raw_text: str, analysis_text: str, terms: Iterable[str]) -> List[str]:
    matched: List[str] = []
    for term in terms:
        if not isinstance(term, str):
            continue
        compiled = compile_term(term)
        if compiled is None:
            continue
        term = term.strip()
        if term in matched:
            continue
        literal, obfuscated = compiled
        if literal.search(raw_text or "") or obfuscated.search(analysis_text or ""):
            matched.append(term)
    return matched
