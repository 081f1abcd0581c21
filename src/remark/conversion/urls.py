"""Resolution of href/src attribute values against a page URL."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

logger = logging.getLogger(__name__)


def _strip_query_and_fragment(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def resolve_url(raw: str, page_url: Optional[str] = None) -> str:
    """
    Resolve an attribute URL against the page URL.

    Handles:
    - Absolute URLs (http:// or https://), returned unchanged
    - Protocol-relative URLs (//host/path), given the page scheme
    - Root-relative URLs (/path), given the page host
    - Relative URLs, resolved against the page URL

    Root-relative and relative results have their query and fragment removed.
    Never raises: a value that cannot be resolved is returned as-is.

    Args:
        raw: The href/src value to resolve
        page_url: Absolute URL of the page, or None

    Returns:
        The resolved URL string
    """
    if page_url is None or not raw:
        return raw

    if raw.startswith(("http://", "https://")):
        return raw

    try:
        base = urlsplit(page_url)

        if raw.startswith("//"):
            return f"{base.scheme}:{raw}"

        if raw.startswith("/"):
            path = urlsplit(raw).path
            return urlunsplit((base.scheme, base.netloc, path, "", ""))

        return _strip_query_and_fragment(urljoin(page_url, raw))

    except ValueError as e:
        logger.debug(f"Could not resolve {raw!r} against {page_url!r}: {e}")
        return raw
