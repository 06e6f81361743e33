"""
URL policy: link field sanitisation and blocked-domain lookups.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

from feedpolicy.services.normalizer import coerce_text

_ALLOWED_SCHEMES = ("http", "https")


def _strip_www(host: str) -> str:
    host = host.strip().lower().rstrip(".")
    return host[4:] if host.startswith("www.") else host


def extract_hostname(link: Any) -> Optional[str]:
    """Hostname without a leading ``www.``, or None when the link cannot be parsed."""
    if not isinstance(link, str) or not link.strip():
        return None
    try:
        host = urlsplit(link.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None
    return _strip_www(host)


def sanitize_link(value: Any) -> Optional[str]:
    """Keep only well-formed http(s) URLs; everything else becomes None."""
    link = coerce_text(value)
    if link is None:
        return None
    link = link.strip()
    if not link:
        return None
    try:
        parts = urlsplit(link)
        host = parts.hostname
    except ValueError:
        return None
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not host:
        return None
    return link


def is_blocked_domain(link: Any, blocked_domains: Iterable[str]) -> bool:
    host = extract_hostname(link)
    if host is None:
        return False
    for domain in blocked_domains:
        if not isinstance(domain, str):
            continue
        domain = _strip_www(domain)
        if not domain:
            continue
        if host == domain or host.endswith("." + domain):
            return True
    return False
