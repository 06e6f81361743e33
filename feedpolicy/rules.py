"""
Rule set configuration for the feed policy engine.

DEFAULT_RULES is built once from config.py and never mutated. Per-call
overrides produce a new RuleSet value through RuleSet.merge().
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import config
from feedpolicy.models import ModerationOptions

logger = logging.getLogger("feedpolicy")

_TERM_FIELDS = ("banned_terms", "spam_phrases", "blocked_domains")
_INT_FIELDS = ("max_links", "max_mentions", "max_characters", "min_word_count", "max_repeated_character_run")
_FLOAT_FIELDS = ("min_unique_word_ratio", "max_uppercase_ratio")

# API layer sends camelCase
_ALIASES = {
    "bannedTerms": "banned_terms",
    "spamPhrases": "spam_phrases",
    "blockedDomains": "blocked_domains",
    "maxLinks": "max_links",
    "maxMentions": "max_mentions",
    "maxCharacters": "max_characters",
    "minWordCount": "min_word_count",
    "minUniqueWordRatio": "min_unique_word_ratio",
    "maxUppercaseRatio": "max_uppercase_ratio",
    "maxRepeatedCharacterRun": "max_repeated_character_run",
}


def _unique(values: Iterable[Any]) -> Tuple[str, ...]:
    """Trimmed, non-empty strings in first-seen order."""
    seen = []
    for value in values:
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class RuleSet:
    banned_terms: Tuple[str, ...] = ()
    spam_phrases: Tuple[str, ...] = ()
    blocked_domains: Tuple[str, ...] = ()
    max_links: int = 3
    max_mentions: int = 8
    max_characters: int = 5000
    min_word_count: int = 3
    min_unique_word_ratio: float = 0.35
    max_uppercase_ratio: float = 0.7
    max_repeated_character_run: int = 6

    def merge(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        banned_terms: Iterable[str] = (),
        spam_phrases: Iterable[str] = (),
        blocked_domains: Iterable[str] = (),
    ) -> "RuleSet":
        """
        Return a new RuleSet with overrides applied.

        Entries in ``overrides`` replace fields outright; the extra term lists
        are appended to whatever the (possibly replaced) lists hold.
        """
        changes: Dict[str, Any] = {}

        for key, value in (overrides or {}).items():
            name = _ALIASES.get(key, key)
            if name in _TERM_FIELDS:
                if isinstance(value, str):
                    value = [value]
                if isinstance(value, (list, tuple, set, frozenset)):
                    changes[name] = _unique(value)
                else:
                    logger.warning(f"Ignoring rule override {key}: expected a list of strings")
            elif name in _INT_FIELDS or name in _FLOAT_FIELDS:
                cast = int if name in _INT_FIELDS else float
                try:
                    if isinstance(value, bool):
                        raise TypeError("boolean threshold")
                    changes[name] = cast(value)
                except (TypeError, ValueError):
                    logger.warning(f"Ignoring rule override {key}={value!r}: not a number")
            else:
                logger.debug(f"Ignoring unknown rule override: {key}")

        extras = {
            "banned_terms": banned_terms,
            "spam_phrases": spam_phrases,
            "blocked_domains": blocked_domains,
        }
        for name, extra in extras.items():
            extra = tuple(extra or ())
            if extra:
                current = changes.get(name, getattr(self, name))
                changes[name] = _unique(current + extra)

        if not changes:
            return self
        logger.debug(f"Rule overrides applied: {sorted(changes)}")
        return dataclasses.replace(self, **changes)


DEFAULT_RULES = RuleSet(
    banned_terms=_unique(config.BANNED_TERMS),
    spam_phrases=_unique(config.SPAM_PHRASES),
    blocked_domains=_unique(config.BLOCKED_DOMAINS),
    max_links=config.MAX_LINKS,
    max_mentions=config.MAX_MENTIONS,
    max_characters=config.MAX_CHARACTERS,
    min_word_count=config.MIN_WORD_COUNT,
    min_unique_word_ratio=config.MIN_UNIQUE_WORD_RATIO,
    max_uppercase_ratio=config.MAX_UPPERCASE_RATIO,
    max_repeated_character_run=config.MAX_REPEATED_CHARACTER_RUN,
)


def resolve_rules(options: Optional[ModerationOptions] = None, base: RuleSet = DEFAULT_RULES) -> RuleSet:
    """Transient rule set for one call; ``base`` is left untouched."""
    if options is None:
        return base
    return base.merge(
        options.rules,
        banned_terms=options.banned_terms,
        spam_phrases=options.spam_phrases,
        blocked_domains=options.blocked_domains,
    )
