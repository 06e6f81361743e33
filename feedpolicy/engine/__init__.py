"""
Feed policy engine package.
"""
from feedpolicy.engine.orchestrator import enforce, enforce_comment, evaluate, evaluate_comment

__all__ = ['enforce', 'enforce_comment', 'evaluate', 'evaluate_comment']
