"""Hostname parsing and allowlist matching shared by the analyzers."""

import re
from collections.abc import Iterable
from urllib.parse import urlparse

_HOST_RE = re.compile(r"^[a-z0-9.-]+$")


def extract_domain(url: str) -> str:
    """
    Return the lowercase hostname of ``url`` without a leading ``www.``.

    Malformed input yields an empty string instead of raising.
    """
    raw = (url or "").strip()
    if not raw:
        return ""
    if "://" not in raw:
        raw = f"http://{raw}"

    try:
        hostname = urlparse(raw).hostname
    except ValueError:
        return ""

    if not hostname:
        return ""
    hostname = hostname.lower().removeprefix("www.")
    if not _HOST_RE.match(hostname) or "." not in hostname:
        return ""
    return hostname


def matches_domain(domain: str, candidates: Iterable[str]) -> bool:
    """True when ``domain`` equals a candidate or is a subdomain of one."""
    if not domain:
        return False
    return any(domain == c or domain.endswith(f".{c}") for c in candidates)


def has_suffix(domain: str, suffixes: Iterable[str]) -> bool:
    if not domain:
        return False
    return any(domain.endswith(s) for s in suffixes)
