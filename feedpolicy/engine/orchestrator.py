from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping, Optional, Union

import config
from feedpolicy.engine.decision import decide
from feedpolicy.errors import ModerationError
from feedpolicy.models import CandidatePost, EvaluationResult, ModerationOptions
from feedpolicy.rules import resolve_rules
from feedpolicy.services.normalizer import coerce_text

logger = logging.getLogger("feedpolicy")


def evaluate(candidate: Any, options: Any = None) -> EvaluationResult:
    """
    Run the feed policy over a candidate post and return the evaluation.

    Never raises: a rejection is a normal, fully described outcome.
    ``candidate`` may be a CandidatePost or a loosely-typed request mapping.
    """
    post = CandidatePost.from_payload(candidate)
    opts = ModerationOptions.from_mapping(options)
    rules = resolve_rules(opts)

    evaluation = decide(post, rules, allow_warnings=opts.allow_warnings)
    logger.info(
        f"Feed policy decision={evaluation.decision} role={opts.role or '-'} "
        f"reasons={len(evaluation.reasons)} signals={[s.type for s in evaluation.signals]}"
    )
    return evaluation


def enforce(candidate: Union[EvaluationResult, Any], options: Any = None) -> EvaluationResult:
    """
    Fail-fast variant of evaluate().

    Accepts either a candidate (evaluated here) or an EvaluationResult from an
    earlier evaluate() call, which is checked as-is. Raises ModerationError on
    rejection, otherwise returns the evaluation unchanged.
    """
    opts = ModerationOptions.from_mapping(options)
    if isinstance(candidate, EvaluationResult):
        evaluation = candidate
    else:
        evaluation = evaluate(candidate, opts)

    if not evaluation.approved:
        message = opts.error_message or config.DEFAULT_ERROR_MESSAGE
        logger.warning(f"Feed post blocked: {len(evaluation.reasons)} reason(s), role={opts.role or '-'}")
        raise ModerationError(message, reasons=evaluation.reasons, signals=evaluation.signals)
    return evaluation


def _comment_candidate(comment: Any) -> CandidatePost:
    if isinstance(comment, Mapping):
        body = comment.get("body", comment.get("content"))
    else:
        body = comment
    return CandidatePost(content=coerce_text(body))


def _comment_options(options: Any) -> ModerationOptions:
    opts = ModerationOptions.from_mapping(options)
    if "min_word_count" in opts.rules or "minWordCount" in opts.rules:
        return opts
    rules = dict(opts.rules, min_word_count=config.COMMENT_MIN_WORD_COUNT)
    return dataclasses.replace(opts, rules=rules)


def evaluate_comment(comment: Any, options: Any = None) -> EvaluationResult:
    """Comments are plain bodies: no title, summary, link or attachments."""
    return evaluate(_comment_candidate(comment), _comment_options(options))


def enforce_comment(comment: Any, options: Optional[Any] = None) -> EvaluationResult:
    return enforce(_comment_candidate(comment), _comment_options(options))
