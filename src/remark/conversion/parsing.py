"""HTML parsing and masking ahead of conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from ..errors import ParseError

logger = logging.getLogger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    """
    Parse an HTML document.

    Args:
        html: Decoded HTML text

    Returns:
        Parsed document tree

    Raises:
        ParseError: If the input is not text or the parser rejects it
    """
    if not isinstance(html, str):
        raise ParseError(f"Expected HTML text, got {type(html).__name__}")

    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Failed to parse HTML: {e}") from e


def mask_tags(soup: BeautifulSoup, mask: Iterable[str]) -> int:
    """
    Remove every element matching the given tag names (or CSS selectors).

    Args:
        soup: Parsed document, modified in place
        mask: Tag names or selectors to remove with their subtrees

    Returns:
        Number of elements removed
    """
    removed = 0
    for selector in mask:
        for el in soup.select(selector):
            # Already gone with a masked ancestor
            if el.decomposed:
                continue
            el.decompose()
            removed += 1
    if removed:
        logger.debug(f"Masked {removed} elements")
    return removed


def find_body(soup: BeautifulSoup) -> Tag:
    """
    Return the document body.

    html.parser does not create a missing <body>, so for documents without
    one the root is returned with its <head> removed. Read metadata first.
    """
    body = soup.find("body")
    if isinstance(body, Tag):
        return body
    head = soup.find("head")
    if isinstance(head, Tag):
        head.extract()
    return soup
