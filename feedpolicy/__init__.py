"""
feedpolicy - inline content policy enforcement for feed posts and comments.
"""
from feedpolicy.engine.orchestrator import enforce, enforce_comment, evaluate, evaluate_comment
from feedpolicy.errors import ModerationError
from feedpolicy.models import CandidatePost, EvaluationResult, ModerationOptions, Signal
from feedpolicy.rules import DEFAULT_RULES, RuleSet

__all__ = [
    'CandidatePost',
    'DEFAULT_RULES',
    'EvaluationResult',
    'ModerationError',
    'ModerationOptions',
    'RuleSet',
    'Signal',
    'enforce',
    'enforce_comment',
    'evaluate',
    'evaluate_comment',
]
