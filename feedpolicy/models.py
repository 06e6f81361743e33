from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from feedpolicy.services.normalizer import coerce_text


APPROVE = "approve"
REJECT = "reject"


@dataclass(frozen=True)
class Signal:
    type: str
    severity: str  # "high" | "medium" | "low"
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "severity": self.severity, "message": self.message}


@dataclass(frozen=True)
class Attachment:
    id: str
    type: str
    url: Optional[str] = None
    alt: Optional[str] = None
    caption: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "id": self.id,
            "type": self.type,
            "url": self.url,
            "alt": self.alt,
            "caption": self.caption,
        }


def _pick(payload: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def _flag(value: Any) -> bool:
    """Only an explicit true (bool or "true"/"1"/"yes" string) opts in."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return False


@dataclass
class CandidatePost:
    content: Optional[str] = None
    summary: Optional[str] = None
    title: Optional[str] = None
    link: Optional[str] = None
    attachments: List[Any] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "CandidatePost":
        """
        Build a candidate from a loosely-typed request payload.

        Text fields that are not strings (or plain scalars) become None and
        a non-list attachments value becomes an empty list. Never raises.
        """
        if isinstance(payload, CandidatePost):
            return payload
        if not isinstance(payload, Mapping):
            return cls()
        attachments = _pick(payload, "attachments")
        return cls(
            content=coerce_text(_pick(payload, "content", "body")),
            summary=coerce_text(_pick(payload, "summary")),
            title=coerce_text(_pick(payload, "title")),
            link=coerce_text(_pick(payload, "link", "url")),
            attachments=list(attachments) if isinstance(attachments, (list, tuple)) else [],
        )


@dataclass
class ModerationOptions:
    rules: Dict[str, Any] = field(default_factory=dict)
    banned_terms: List[str] = field(default_factory=list)
    spam_phrases: List[str] = field(default_factory=list)
    blocked_domains: List[str] = field(default_factory=list)
    allow_warnings: bool = False
    role: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_mapping(cls, options: Any) -> "ModerationOptions":
        """Accept camelCase (API layer) or snake_case keys."""
        if isinstance(options, ModerationOptions):
            return options
        if not isinstance(options, Mapping):
            return cls()
        rules = _pick(options, "rules")

        def _strings(*keys: str) -> List[str]:
            value = _pick(options, *keys)
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, (list, tuple, set, frozenset)):
                return []
            return [item for item in (coerce_text(v) for v in value) if item]

        return cls(
            rules=dict(rules) if isinstance(rules, Mapping) else {},
            banned_terms=_strings("banned_terms", "bannedTerms"),
            spam_phrases=_strings("spam_phrases", "spamPhrases"),
            blocked_domains=_strings("blocked_domains", "blockedDomains"),
            allow_warnings=_flag(_pick(options, "allow_warnings", "allowWarnings")),
            role=coerce_text(_pick(options, "role")),
            error_message=coerce_text(_pick(options, "error_message", "errorMessage")),
        )


@dataclass
class EvaluationResult:
    decision: str
    reasons: List[str]
    signals: List[Signal]
    content: str
    summary: str
    title: str
    link: Optional[str]
    attachments: List[Attachment]

    @property
    def approved(self) -> bool:
        return self.decision == APPROVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "decision": self.decision,
            "reasons": list(self.reasons),
            "signals": [signal.to_dict() for signal in self.signals],
            "content": self.content,
            "summary": self.summary,
            "title": self.title,
            "link": self.link,
            "attachments": [attachment.to_dict() for attachment in self.attachments],
        }
