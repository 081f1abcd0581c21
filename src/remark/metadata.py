"""Page metadata extraction: title, description and Open Graph tags."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

_DESCRIPTION_NAME = re.compile(r"^description$", re.IGNORECASE)


@dataclass(frozen=True)
class PageMetadata:
    """Metadata found in a document's head."""

    title: str = ""
    description: str = ""
    og_data: dict[str, str] = field(default_factory=dict)


def extract_title(soup: BeautifulSoup) -> str:
    """Return the whitespace-normalised <title> text, or an empty string."""
    title = soup.find("title")
    if not isinstance(title, Tag):
        return ""
    return " ".join(title.get_text().split())


def extract_description(soup: BeautifulSoup) -> str:
    """Return the content of the first meta description, or an empty string."""
    meta = soup.find("meta", attrs={"name": _DESCRIPTION_NAME})
    if not isinstance(meta, Tag):
        return ""
    content = meta.get("content")
    return str(content) if content is not None else ""


def extract_og_data(soup: BeautifulSoup) -> dict[str, str]:
    """
    Collect Open Graph properties.

    Keys are renamed from og:* to og_*; when a property repeats, the last
    value wins.

    Args:
        soup: Parsed document

    Returns:
        Dictionary of og_* keys to content values
    """
    og_data: dict[str, str] = {}
    for meta in soup.select('meta[property^="og:"]'):
        key = str(meta.get("property", "")).replace("og:", "og_")
        content = meta.get("content")
        og_data[key] = str(content) if content is not None else ""
    return og_data


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Extract title, description and Open Graph data from a parsed document."""
    metadata = PageMetadata(
        title=extract_title(soup),
        description=extract_description(soup),
        og_data=extract_og_data(soup),
    )
    logger.debug(f"Extracted metadata: title={metadata.title!r}, {len(metadata.og_data)} og properties")
    return metadata
