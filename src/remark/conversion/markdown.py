"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from bs4.element import NavigableString, PageElement, PreformattedString, Script, Stylesheet, Tag

from .link_text import extract_link_text
from .parsing import find_body, mask_tags, parse_html
from .tags import DEFAULT_MASK, TagKind, classify
from .urls import resolve_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionContext:
    """
    State passed down the traversal.

    Attributes:
        quote_level: Current blockquote nesting depth
        page_url: Absolute page URL used to resolve links, or None
    """

    quote_level: int = 0
    page_url: Optional[str] = None

    def at_quote_level(self, quote_level: int) -> ConversionContext:
        return replace(self, quote_level=quote_level)


@dataclass(frozen=True)
class _CloseSemantic:
    """Worklist marker closing a semantic container opened at ``start``."""

    tag_name: str
    start: int


_WorkItem = Union[tuple[PageElement, ConversionContext], _CloseSemantic]


def _is_text(node: PageElement) -> bool:
    # Comments, doctypes and script/style bodies are strings too
    return isinstance(node, NavigableString) and not isinstance(
        node, (PreformattedString, Script, Stylesheet)
    )


def _text_fragment(node: PageElement) -> str:
    """
    Trimmed text of a text node.

    Whitespace next to a sibling collapses to one space, so inline
    neighbours like "Hello <b>world</b>" stay separated.
    """
    raw = str(node)
    text = raw.strip()
    if not text:
        return ""
    if raw[0].isspace() and node.previous_sibling is not None:
        text = " " + text
    if raw[-1].isspace() and node.next_sibling is not None:
        text = text + " "
    return text


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return str(value)


def convert_node(node: PageElement, context: Optional[ConversionContext] = None) -> str:
    """
    Convert a node and its subtree to Markdown.

    Transparent and semantic containers are walked with an explicit
    worklist, so arbitrarily deep wrapper nesting (div, span, section...)
    does not grow the call stack. Formatting elements recurse into their
    children, whose depth is bounded by the inline content model.

    Args:
        node: Element or text node to convert
        context: Quote level and page URL (defaults to top level, no URL)

    Returns:
        Markdown fragment
    """
    if context is None:
        context = ConversionContext()

    parts: list[str] = []
    stack: list[_WorkItem] = [(node, context)]

    while stack:
        item = stack.pop()

        if isinstance(item, _CloseSemantic):
            content = "".join(parts[item.start :])
            del parts[item.start :]
            if content.strip():
                parts.append(f"\n<!-- {item.tag_name} -->\n{content}\n<!-- /{item.tag_name} -->\n")
            continue

        current, ctx = item

        if _is_text(current):
            text = _text_fragment(current)
            if text:
                parts.append(text)
            continue

        if not isinstance(current, Tag):
            continue

        tag_name = current.name.lower()
        kind = classify(tag_name)

        if kind is TagKind.SEMANTIC:
            stack.append(_CloseSemantic(tag_name, len(parts)))
        elif kind is TagKind.LEAF:
            parts.append(LEAF_RULES[tag_name](current, ctx))
            continue
        elif kind is TagKind.FORMATTING:
            parts.append(FORMATTING_RULES[tag_name](current, ctx))
            continue
        elif kind is TagKind.BUTTON and current.find("a") is None:
            continue

        stack.extend((child, ctx) for child in reversed(current.contents))

    return "".join(parts)


def _children_markdown(element: Tag, context: ConversionContext) -> str:
    return "".join(convert_node(child, context) for child in element.contents)


# Leaf elements: output comes from attributes, children are never visited


def _render_anchor(element: Tag, ctx: ConversionContext) -> str:
    href = resolve_url(_attr(element, "href"), ctx.page_url)
    text = extract_link_text(element, ctx.page_url)
    return f"[{text}]({href})"


def _render_image(element: Tag, ctx: ConversionContext) -> str:
    src = resolve_url(_attr(element, "src"), ctx.page_url)
    return f"![{_attr(element, 'alt')}]({src})"


def _render_video(element: Tag, ctx: ConversionContext) -> str:
    src = _attr(element, "src")
    if not src:
        source = element.find("source")
        if isinstance(source, Tag):
            src = _attr(source, "src")
    title = _attr(element, "title") or "video"
    return f"[{title}]({resolve_url(src, ctx.page_url)})"


def _render_rule(element: Tag, ctx: ConversionContext) -> str:
    return "\n---\n"


def _render_nothing(element: Tag, ctx: ConversionContext) -> str:
    return ""


# Formatting elements


def _render_heading(element: Tag, ctx: ConversionContext) -> str:
    level = int(element.name[1])
    return "\n" + "#" * level + " " + _children_markdown(element, ctx) + "\n"


def _render_paragraph(element: Tag, ctx: ConversionContext) -> str:
    content = _children_markdown(element, ctx).strip()
    if not content:
        return ""
    return f"\n{content}\n"


def _render_blockquote(element: Tag, ctx: ConversionContext) -> str:
    # Nested blockquotes prefix themselves relative to this one
    inner = _children_markdown(element, ctx.at_quote_level(0))
    prefix = "> " * (ctx.quote_level + 1)
    lines = [prefix + line for line in inner.split("\n") if line]
    return "\n" + "\n".join(lines) + "\n"


def _render_pre(element: Tag, ctx: ConversionContext) -> str:
    return f"\n```\n{element.get_text()}\n```\n"


def _wrap(marker: str) -> Callable[[Tag, ConversionContext], str]:
    def render(element: Tag, ctx: ConversionContext) -> str:
        return marker + _children_markdown(element, ctx) + marker

    return render


def _render_unordered(element: Tag, ctx: ConversionContext) -> str:
    return render_list(element, ordered=False, page_url=ctx.page_url)


def _render_ordered(element: Tag, ctx: ConversionContext) -> str:
    return render_list(element, ordered=True, page_url=ctx.page_url)


def _render_table(element: Tag, ctx: ConversionContext) -> str:
    return render_table(element, page_url=ctx.page_url)


_Rule = Callable[[Tag, ConversionContext], str]

LEAF_RULES: Mapping[str, _Rule] = {
    "a": _render_anchor,
    "img": _render_image,
    "video": _render_video,
    "hr": _render_rule,
    "dialog": _render_nothing,
}

FORMATTING_RULES: Mapping[str, _Rule] = {
    **{f"h{level}": _render_heading for level in range(1, 7)},
    "p": _render_paragraph,
    "blockquote": _render_blockquote,
    "pre": _render_pre,
    "code": _wrap("`"),
    "strong": _wrap("**"),
    "b": _wrap("**"),
    "em": _wrap("*"),
    "i": _wrap("*"),
    "ul": _render_unordered,
    "ol": _render_ordered,
    "table": _render_table,
}


def render_list(
    element: Tag,
    ordered: bool,
    indent_level: int = 0,
    page_url: Optional[str] = None,
) -> str:
    """
    Convert a ul/ol element to Markdown.

    Only direct li children are items. Nested lists inside an item are
    rendered after the item's own text, one level deeper, and number
    from 1 again.

    Args:
        element: The list element
        ordered: Number items instead of using "- "
        indent_level: Nesting depth (2 spaces per level)
        page_url: Page URL for link resolution

    Returns:
        Markdown for the list
    """
    items = element.find_all("li", recursive=False)
    indent = "  " * indent_level
    context = ConversionContext(page_url=page_url)

    markdown = "\n" if indent_level == 0 else ""

    for index, item in enumerate(items):
        prefix = f"{index + 1}. " if ordered else "- "

        own_nodes = [
            child for child in item.contents if not (isinstance(child, Tag) and child.name in ("ul", "ol"))
        ]
        content = "".join(convert_node(child, context) for child in own_nodes).strip()
        if not content:
            continue

        block = f"{indent}{prefix}{content}"

        child_lists = item.find_all(["ul", "ol"], recursive=False)
        if child_lists:
            block += "\n"
            for child_list in child_lists:
                block += (
                    render_list(
                        child_list,
                        ordered=child_list.name == "ol",
                        indent_level=indent_level + 1,
                        page_url=page_url,
                    )
                    + "\n"
                )

        markdown += block
        if index < len(items) - 1 and not block.endswith("\n"):
            markdown += "\n"

    if indent_level == 0:
        markdown += "\n"
    return markdown


def render_table(element: Tag, page_url: Optional[str] = None) -> str:
    """
    Convert a table element to a pipe table.

    Rows inside thead/tbody/tfoot are flattened in document order and the
    header separator follows the first row.

    Args:
        element: The table element
        page_url: Page URL for link resolution

    Returns:
        Markdown for the table
    """
    context = ConversionContext(page_url=page_url)
    markdown = "\n"

    for row_index, row in enumerate(element.find_all("tr")):
        cells = [
            convert_node(cell, context).strip().replace("\n", " ") for cell in row.find_all(["th", "td"])
        ]
        if cells:
            markdown += "| " + " | ".join(cells) + " |\n"
        else:
            markdown += "| |\n"
        if row_index == 0:
            markdown += "|" + " --- |" * len(cells) + "\n"

    return markdown + "\n"


class HtmlToMarkdown:
    """
    Converts a whole HTML document to Markdown.

    Masked tags are removed first, then the body is converted.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://docs.example.com/page")
    """

    def __init__(self, mask: Iterable[str] = DEFAULT_MASK):
        """
        Initialize the Markdown converter.

        Args:
            mask: Tag names removed with their subtrees before conversion
        """
        self._mask = tuple(mask)

    def convert(self, html: str, url: Optional[str] = None) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links

        Returns:
            Markdown string

        Raises:
            ParseError: If the HTML cannot be parsed
        """
        soup = parse_html(html)
        mask_tags(soup, self._mask)
        markdown = convert_node(find_body(soup), ConversionContext(page_url=url))
        logger.debug(f"Converted {len(html)} chars of HTML to {len(markdown)} chars of Markdown")
        return markdown


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class FrontmatterBuilder:
    """
    Builds YAML front matter for a converted page.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(
            title="Getting Started",
            description="How to get started with our product",
            og_data={"og_title": "Getting Started"},
        )
    """

    def build(
        self,
        title: str = "",
        description: str = "",
        og_data: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Build the front matter block.

        Title and description are always present. Values are double-quoted
        with backslashes, quotes and newlines escaped.

        Args:
            title: Page title
            description: Page description
            og_data: Open Graph values keyed og_*

        Returns:
            Front matter string (with --- delimiters and trailing newline)
        """
        lines = ["---", f"title: {_quote(title)}", f"description: {_quote(description)}"]

        for key, value in sorted((og_data or {}).items()):
            lines.append(f"{key}: {_quote(value)}")

        lines.append("---")
        return "\n".join(lines) + "\n"
