"""
Spam heuristics over the combined post text.

Every check runs independently and contributes its own Signal; nothing here
decides the outcome, the decision engine does.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Tuple

import ahocorasick

from feedpolicy.models import Signal
from feedpolicy.rules import RuleSet
from feedpolicy.services.normalizer import analysis_form, sanitize

HIGH = "high"
MEDIUM = "medium"

_LINK_PATTERN = re.compile(r"https?://", re.IGNORECASE)
_MENTION_PATTERN = re.compile(r"@[a-z0-9_.-]{2,}", re.IGNORECASE)

# Shouting is only meaningful once there is enough text to judge
_SHOUTING_MIN_LENGTH = 32


@lru_cache(maxsize=64)
def _phrase_automaton(phrases: Tuple[str, ...]) -> Optional[ahocorasick.Automaton]:
    automaton = ahocorasick.Automaton()
    for index, phrase in enumerate(phrases):
        key = analysis_form(phrase)
        if key and not automaton.exists(key):
            automaton.add_word(key, (index, phrase))
    if len(automaton) == 0:
        return None
    automaton.make_automaton()
    return automaton


@lru_cache(maxsize=16)
def _run_pattern(run: int):
    # run of N identical characters = one char + (N - 1) repeats
    return re.compile(r"(.)\1{%d,}" % max(run - 1, 1), re.DOTALL)


def check_repetition(analysis_text: str, rules: RuleSet) -> Optional[Signal]:
    tokens = [token for token in analysis_text.split() if len(token) > 2]
    if len(tokens) < 4:
        return None
    ratio = len(set(tokens)) / len(tokens)
    if ratio < rules.min_unique_word_ratio:
        return Signal(
            "repetitive_content",
            MEDIUM,
            "The post repeats the same words too often. Vary your wording before publishing.",
        )
    return None


def check_repeated_characters(raw_text: str, rules: RuleSet) -> Optional[Signal]:
    if _run_pattern(rules.max_repeated_character_run).search(raw_text):
        return Signal(
            "repeated_characters",
            HIGH,
            "Remove long runs of repeated characters before publishing.",
        )
    return None


def check_links(raw_text: str, link: Optional[str], rules: RuleSet) -> Optional[Signal]:
    total = len(_LINK_PATTERN.findall(raw_text)) + (1 if link else 0)
    if total > rules.max_links:
        return Signal(
            "excessive_links",
            HIGH,
            f"Posts can include at most {rules.max_links} links.",
        )
    return None


def check_mentions(raw_text: str, rules: RuleSet) -> Optional[Signal]:
    if len(_MENTION_PATTERN.findall(raw_text)) > rules.max_mentions:
        return Signal(
            "excessive_mentions",
            MEDIUM,
            f"Mention at most {rules.max_mentions} members in a single post.",
        )
    return None


def check_shouting(raw_text: str, rules: RuleSet) -> Optional[Signal]:
    letters = [char for char in raw_text if char.isalpha()]
    if not letters or len(raw_text) <= _SHOUTING_MIN_LENGTH:
        return None
    uppercase = sum(1 for char in letters if char.isupper())
    if uppercase / len(letters) > rules.max_uppercase_ratio:
        return Signal(
            "shouting",
            MEDIUM,
            "Avoid writing the post mostly in capital letters.",
        )
    return None


def check_spam_phrases(analysis_text: str, rules: RuleSet) -> List[Signal]:
    automaton = _phrase_automaton(rules.spam_phrases)
    if automaton is None or not analysis_text:
        return []
    hits = sorted({value for _, value in automaton.iter(analysis_text)})
    return [
        Signal("spam_phrase", HIGH, f'The phrase "{phrase}" looks like spam and is not allowed.')
        for _, phrase in hits
    ]


def analyze(
    content: Optional[str],
    summary: Optional[str],
    title: Optional[str],
    link: Optional[str],
    rules: RuleSet,
) -> List[Signal]:
    combined = sanitize(f"{content or ''} {summary or ''} {title or ''}")
    folded = analysis_form(combined)

    signals: List[Signal] = []
    for signal in (
        check_repetition(folded, rules),
        check_repeated_characters(combined, rules),
        check_links(combined, link, rules),
        check_mentions(combined, rules),
        check_shouting(combined, rules),
    ):
        if signal is not None:
            signals.append(signal)
    signals.extend(check_spam_phrases(folded, rules))
    return signals
