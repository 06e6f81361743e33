"""
Feed policy decision engine.

One pass, first matching rule wins:
  1. empty post               -> reject
  2. over the character limit -> reject
  3. banned terms             -> reject (one reason per term)
  4. high severity signals    -> reject
  5. any signal, no opt-in    -> reject
  6. too few words            -> reject
  7. otherwise                -> approve (signals kept as warnings)
"""
from __future__ import annotations

from typing import List

import config
from feedpolicy.models import APPROVE, REJECT, CandidatePost, EvaluationResult, Signal
from feedpolicy.rules import RuleSet
from feedpolicy.services import attachments as attachment_sanitizer
from feedpolicy.services import banned_terms, spam
from feedpolicy.services.links import extract_hostname, is_blocked_domain, sanitize_link
from feedpolicy.services.normalizer import analysis_form, sanitize, word_count


def _blocked_domain_signal(link: str) -> Signal:
    host = extract_hostname(link) or link
    return Signal(
        "blocked_domain",
        spam.HIGH,
        f"Posts cannot include links to {host}. Share a direct link instead.",
    )


def decide(candidate: CandidatePost, rules: RuleSet, allow_warnings: bool = False) -> EvaluationResult:
    content = sanitize(candidate.content)
    summary = sanitize(candidate.summary)
    title = sanitize(candidate.title)
    link = sanitize_link(candidate.link)
    attachments = attachment_sanitizer.sanitize(candidate.attachments)

    def result(decision: str, reasons: List[str], signals: List[Signal]) -> EvaluationResult:
        return EvaluationResult(
            decision=decision,
            reasons=reasons,
            signals=signals,
            content=content,
            summary=summary,
            title=title,
            link=link,
            attachments=attachments,
        )

    if not content and not summary:
        return result(REJECT, [config.EMPTY_POST_MESSAGE], [])

    if len(content) > rules.max_characters:
        return result(REJECT, [config.TOO_LONG_MESSAGE.format(limit=rules.max_characters)], [])

    combined = f"{content} {summary} {title}"
    matched = banned_terms.match(combined, analysis_form(combined), rules.banned_terms)
    if matched:
        return result(REJECT, [config.BANNED_TERM_MESSAGE.format(term=term) for term in matched], [])

    signals = spam.analyze(content, summary, title, link, rules)
    if link and is_blocked_domain(link, rules.blocked_domains):
        signals.append(_blocked_domain_signal(link))

    high = [signal.message for signal in signals if signal.severity == spam.HIGH]
    if high:
        return result(REJECT, high, signals)

    if signals and not allow_warnings:
        return result(REJECT, [signal.message for signal in signals], signals)

    if word_count(content) < rules.min_word_count:
        return result(REJECT, [config.TOO_SHORT_MESSAGE], signals)

    return result(APPROVE, [], signals)
