"""Helpers to tell product URLs from product names and to clean URLs up."""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_DOMAIN_LIKE = re.compile(r"^([a-z0-9-]+\.)+[a-z]{2,}(/.*)?$", re.IGNORECASE)
_HOST = re.compile(r"^[a-z0-9-]+(\.[a-z0-9-]+)*$", re.IGNORECASE)


def _has_valid_host(url: str) -> bool:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    return bool(hostname and _HOST.match(hostname))


def is_valid_url(value: str | None) -> bool:
    """Whether ``value`` is an http(s) URL, with or without its scheme."""
    if not value or not isinstance(value, str):
        return False

    candidate = value.strip()
    if _SCHEME.match(candidate):
        return bool(_HTTP_SCHEME.match(candidate)) and _has_valid_host(candidate)
    if ":" in candidate.split("/", 1)[0] and not re.match(
        r"^[^:/]+:\d+", candidate
    ):
        # "javascript:alert(1)" and friends
        return False
    return _has_valid_host(f"https://{candidate}")


def normalize_url(url: str | None) -> str:
    """Return ``url`` with an http(s) scheme and at least a root path.

    Raises:
        ValueError: for empty input, non-http schemes or unparseable hosts.
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise ValueError("Invalid URL: URL must be a non-empty string")

    normalized = url.strip()
    if _SCHEME.match(normalized):
        if not _HTTP_SCHEME.match(normalized):
            raise ValueError(f"Invalid protocol in URL: {normalized}")
    elif re.match(r"^[a-z][a-z0-9+.-]*:(?!\d)", normalized, re.IGNORECASE):
        raise ValueError(f"Invalid protocol in URL: {normalized}")
    else:
        normalized = f"https://{normalized}"

    if not _has_valid_host(normalized):
        raise ValueError(f"Failed to normalize URL: {normalized}")

    parts = urlsplit(normalized)
    return urlunsplit(
        (
            parts.scheme.lower(),
            parts.netloc.lower(),
            parts.path or "/",
            parts.query,
            parts.fragment,
        )
    )


def is_url(value: str | None) -> bool:
    """Whether user input looks like a URL rather than a product name."""
    if not value or not isinstance(value, str):
        return False

    candidate = value.strip()
    if _HTTP_SCHEME.match(candidate):
        return True
    return bool(_DOMAIN_LIKE.match(candidate))
