"""Display text selection for anchor-like elements."""

from __future__ import annotations

from typing import Optional

from bs4 import Tag

from .urls import resolve_url


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if value is None:
        return ""
    # Multi-valued attributes (class, rel) come back as lists
    if isinstance(value, list):
        value = " ".join(value)
    return str(value)


def element_text(element: Tag) -> str:
    """Return the element's descendant text with whitespace collapsed and trimmed."""
    return " ".join(element.get_text().split())


def extract_link_text(element: Tag, page_url: Optional[str] = None) -> str:
    """
    Pick the display text for a link.

    Priority, first non-empty value wins:
    1. aria-label attribute
    2. alt text of the first descendant image that has one
    3. title attribute
    4. text content
    5. the resolved href (fallback)

    Args:
        element: The anchor element
        page_url: Page URL used to resolve the href fallback

    Returns:
        The display text
    """
    aria_label = _attr(element, "aria-label").strip()
    if aria_label:
        return aria_label

    for img in element.find_all("img"):
        alt = _attr(img, "alt").strip()
        if alt:
            return alt

    title = _attr(element, "title").strip()
    if title:
        return title

    text = element_text(element)
    if text:
        return text

    return resolve_url(_attr(element, "href"), page_url)
