"""Closed classification of HTML tags for Markdown conversion."""

from enum import Enum


class TagKind(str, Enum):
    """How the converter treats an element."""

    SEMANTIC = "semantic"  # children rendered, wrapped in marker comments
    LEAF = "leaf"  # rendered directly, children never visited
    FORMATTING = "formatting"  # dedicated rule over shallow inline children
    BUTTON = "button"  # transparent only when it contains a link
    TRANSPARENT = "transparent"  # children rendered, no markup of its own


SEMANTIC_TAGS = frozenset(
    {
        "main",
        "section",
        "nav",
        "article",
        "aside",
        "header",
        "footer",
        "figure",
        "details",
        "summary",
    }
)

LEAF_TAGS = frozenset({"a", "img", "video", "hr", "dialog"})

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

FORMATTING_TAGS = HEADING_TAGS | frozenset(
    {
        "p",
        "blockquote",
        "pre",
        "code",
        "strong",
        "b",
        "em",
        "i",
        "ul",
        "ol",
        "table",
    }
)

# Removed from the document before conversion unless the caller overrides it
DEFAULT_MASK = ("header", "footer", "aside", "nav", "noscript")


def classify(tag_name: str) -> TagKind:
    """Classify a tag name; unknown tags are transparent."""
    name = tag_name.lower()
    if name in SEMANTIC_TAGS:
        return TagKind.SEMANTIC
    if name in LEAF_TAGS:
        return TagKind.LEAF
    if name in FORMATTING_TAGS:
        return TagKind.FORMATTING
    if name == "button":
        return TagKind.BUTTON
    return TagKind.TRANSPARENT
