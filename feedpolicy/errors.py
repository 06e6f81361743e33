from __future__ import annotations

from typing import List, Optional

from feedpolicy.models import Signal


class ModerationError(Exception):
    """Raised by enforce() when a post is rejected."""

    def __init__(self, message: str, reasons: Optional[List[str]] = None, signals: Optional[List[Signal]] = None):
        super().__init__(message)
        self.message = message
        self.reasons = list(reasons or [])
        self.signals = list(signals or [])

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "reasons": list(self.reasons),
            "signals": [signal.to_dict() for signal in self.signals],
        }
