"""Link extraction from raw HTML."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

from .conversion.link_text import extract_link_text
from .conversion.parsing import parse_html
from .conversion.urls import resolve_url
from .models.content import Link

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https", "ftp", "sftp", "ssh", "git", "news", "irc", "ws", "wss"})


def _is_allowed_href(href: str) -> bool:
    if not href:
        return False
    try:
        scheme = urlsplit(href).scheme
    except ValueError:
        return False
    return scheme.lower() in ALLOWED_SCHEMES


def extract_links(html: str, page_url: Optional[str] = None) -> list[Link]:
    """
    Extract links with an accepted scheme from HTML.

    Anchors without an href, with an unparseable href, or with a scheme
    outside ALLOWED_SCHEMES (javascript:, mailto:, relative paths...) are
    skipped. Duplicates are kept in document order.

    Args:
        html: Raw HTML
        page_url: Page URL used to resolve links and text fallbacks

    Returns:
        Links in document order

    Raises:
        ParseError: If the HTML cannot be parsed
    """
    soup = parse_html(html)
    links: list[Link] = []

    for anchor in soup.find_all("a"):
        href = str(anchor.get("href") or "")
        if not _is_allowed_href(href):
            continue

        text = extract_link_text(anchor, page_url)
        if not text:
            continue

        links.append(Link(url=resolve_url(href, page_url), text=text))

    logger.debug(f"Extracted {len(links)} links")
    return links
