"""Content conversion for remark (HTML to Markdown, front matter)."""

from .link_text import element_text, extract_link_text
from .markdown import (
    ConversionContext,
    FrontmatterBuilder,
    HtmlToMarkdown,
    convert_node,
    render_list,
    render_table,
)
from .parsing import find_body, mask_tags, parse_html
from .tags import DEFAULT_MASK, TagKind, classify
from .urls import resolve_url

__all__ = [
    # Traversal
    "ConversionContext",
    "convert_node",
    "render_list",
    "render_table",
    # Tags
    "DEFAULT_MASK",
    "TagKind",
    "classify",
    # Helpers
    "element_text",
    "extract_link_text",
    "resolve_url",
    "parse_html",
    "mask_tags",
    "find_body",
    # Document-level
    "HtmlToMarkdown",
    "FrontmatterBuilder",
]
