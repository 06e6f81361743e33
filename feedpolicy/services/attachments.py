from __future__ import annotations

import uuid
from typing import Any, List, Mapping, Optional

import config
from feedpolicy.models import Attachment
from feedpolicy.services.links import sanitize_link
from feedpolicy.services.normalizer import sanitize as sanitize_text


def _clean_text(value: Any) -> Optional[str]:
    text = sanitize_text(value)[: config.ATTACHMENT_TEXT_LIMIT].strip()
    return text or None


def _attachment_id(value: Any) -> str:
    if isinstance(value, bool):
        value = None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return f"attachment-{uuid.uuid4().hex}"


def _attachment_type(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in config.ATTACHMENT_TYPES:
        return value.strip().lower()
    return "image"


def sanitize(attachments: Any) -> List[Attachment]:
    """Cap, filter and clean attachment metadata. Non-list input yields []."""
    if not isinstance(attachments, (list, tuple)):
        return []

    entries = [entry for entry in attachments if isinstance(entry, Mapping)]
    return [
        Attachment(
            id=_attachment_id(entry.get("id")),
            type=_attachment_type(entry.get("type")),
            url=sanitize_link(entry.get("url")),
            alt=_clean_text(entry.get("alt")),
            caption=_clean_text(entry.get("caption")),
        )
        for entry in entries[: config.MAX_ATTACHMENTS]
    ]
