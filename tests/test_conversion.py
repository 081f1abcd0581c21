"""Tests for HTML to Markdown conversion."""

import pytest

from remark.conversion import (
    DEFAULT_MASK,
    ConversionContext,
    HtmlToMarkdown,
    TagKind,
    classify,
    convert_node,
    parse_html,
)
from remark.errors import ParseError


def to_markdown(html: str, url=None) -> str:
    """Convert without masking anything."""
    return HtmlToMarkdown(mask=()).convert(html, url)


class TestClassify:
    """Tests for the tag classification."""

    def test_kinds(self):
        """Test each kind of tag."""
        assert classify("article") is TagKind.SEMANTIC
        assert classify("a") is TagKind.LEAF
        assert classify("h3") is TagKind.FORMATTING
        assert classify("button") is TagKind.BUTTON
        assert classify("div") is TagKind.TRANSPARENT
        assert classify("custom-element") is TagKind.TRANSPARENT

    def test_case_insensitive(self):
        """Test that upper-case names classify the same."""
        assert classify("TABLE") is TagKind.FORMATTING

    def test_default_mask(self):
        """Test the tags removed by default."""
        assert set(DEFAULT_MASK) == {"header", "footer", "aside", "nav", "noscript"}


class TestTextAndHeadings:
    """Tests for text, headings and paragraphs."""

    def test_heading_and_paragraph(self):
        """Test a heading followed by a paragraph with bold text."""
        result = to_markdown("<h1>Title</h1><p>Hello <strong>world</strong>.</p>")
        assert "\n# Title\n" in result
        assert "\nHello **world**.\n" in result
        assert result == "\n# Title\n\nHello **world**.\n"

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level):
        """Test that each heading level gets its number of hashes."""
        assert to_markdown(f"<h{level}>T</h{level}>") == "\n" + "#" * level + " T\n"

    def test_empty_paragraph_dropped(self):
        """Test that a paragraph with only whitespace produces nothing."""
        assert to_markdown("<p>   </p><p>Kept</p>") == "\nKept\n"

    def test_whitespace_text_nodes_dropped(self):
        """Test that formatting whitespace between blocks is ignored."""
        assert to_markdown("<div>\n  <p>A</p>\n  <p>B</p>\n</div>") == "\nA\n\nB\n"

    def test_inline_formatting(self):
        """Test emphasis and bold markers."""
        assert to_markdown("<p><em>a</em> and <b>b</b> or <i>c</i></p>") == "\n*a* and **b** or *c*\n"

    def test_inline_code(self):
        """Test inline code in non-Latin text."""
        html = "<p>このコードは<code>print('Hello')</code>です。</p>"
        assert to_markdown(html) == "\nこのコードは`print('Hello')`です。\n"

    def test_pre_uses_raw_text(self):
        """Test that pre blocks become fenced code with raw text."""
        html = '<pre><code>print("Hello, World!")</code></pre>'
        assert to_markdown(html) == '\n```\nprint("Hello, World!")\n```\n'

    def test_scripts_styles_and_comments_ignored(self):
        """Test that non-content strings never reach the output."""
        html = "<script>var x = 1;</script><style>p {}</style><!-- note --><p>A</p>"
        assert to_markdown(html) == "\nA\n"


class TestLeafElements:
    """Tests for links, images, video, rules and dialogs."""

    def test_aria_label_link(self):
        """Test that a link uses its aria-label as text."""
        assert to_markdown('<a href="https://x.com" aria-label="X">link</a>') == "[X](https://x.com)"

    def test_relative_link_resolved(self):
        """Test that relative hrefs resolve against the page URL."""
        result = to_markdown('<a href="/about">About</a>', "https://ex.com/page")
        assert result == "[About](https://ex.com/about)"

    def test_link_children_not_visited(self):
        """Test that markup inside a link is not converted separately."""
        result = to_markdown('<a href="https://x.com"><strong>Bold</strong> link</a>')
        assert result == "[Bold link](https://x.com)"

    def test_image(self):
        """Test image conversion with a resolved source."""
        result = to_markdown('<img src="/a.png" alt="A">', "https://ex.com/page")
        assert result == "![A](https://ex.com/a.png)"

    def test_image_without_alt(self):
        """Test that a missing alt gives empty brackets."""
        assert to_markdown('<img src="https://ex.com/a.png">') == "![](https://ex.com/a.png)"

    def test_video_with_title(self):
        """Test video conversion from its src and title."""
        result = to_markdown('<video src="v.mp4" title="Demo"></video>', "https://ex.com/dir/page")
        assert result == "[Demo](https://ex.com/dir/v.mp4)"

    def test_video_source_child(self):
        """Test that a video without src uses its first source."""
        result = to_markdown('<video><source src="https://cdn.com/v.mp4"></video>')
        assert result == "[video](https://cdn.com/v.mp4)"

    def test_horizontal_rule(self):
        """Test hr conversion."""
        assert to_markdown("<hr>") == "\n---\n"

    def test_dialog_dropped(self):
        """Test that dialogs and their content are skipped."""
        assert to_markdown("<dialog><p>Hidden</p></dialog><p>Shown</p>") == "\nShown\n"

    def test_button_without_link_dropped(self):
        """Test that plain buttons produce nothing."""
        assert to_markdown("<button>Click me</button>") == ""

    def test_button_with_link_kept(self):
        """Test that a button wrapping a link renders the link."""
        assert to_markdown('<button><a href="https://x.com">Go</a></button>') == "[Go](https://x.com)"


class TestBlockquotes:
    """Tests for blockquote conversion."""

    def test_single_quote(self):
        """Test a single level blockquote."""
        assert to_markdown("<blockquote><p>Quote</p></blockquote>") == "\n> Quote\n"

    def test_nested_quotes(self):
        """Test that nested quotes gain one prefix per level."""
        html = "<blockquote><p>Outer</p><blockquote><p>Inner</p></blockquote></blockquote>"
        assert to_markdown(html) == "\n> Outer\n> > Inner\n"

    def test_starting_quote_level(self):
        """Test that the context quote level adds prefixes."""
        soup = parse_html("<blockquote><p>Q</p></blockquote>")
        result = convert_node(soup.find("blockquote"), ConversionContext(quote_level=1))
        assert result == "\n> > Q\n"


class TestLists:
    """Tests for list conversion."""

    def test_unordered(self):
        """Test a flat unordered list."""
        assert to_markdown("<ul><li>One</li><li>Two</li></ul>") == "\n- One\n- Two\n"

    def test_ordered(self):
        """Test a flat ordered list."""
        assert to_markdown("<ol><li>One</li><li>Two</li></ol>") == "\n1. One\n2. Two\n"

    def test_nested_unordered(self):
        """Test that a nested list is indented under its parent item."""
        assert to_markdown("<ul><li>P<ul><li>C</li></ul></li></ul>") == "\n- P\n  - C\n\n"

    def test_nested_numbering_restarts(self):
        """Test that nested ordered lists number from 1 again."""
        html = "<ol><li>A<ol><li>x</li><li>y</li></ol></li><li>B</li></ol>"
        assert to_markdown(html) == "\n1. A\n  1. x\n  2. y\n2. B\n"

    def test_empty_items_skipped(self):
        """Test that items without content are left out."""
        assert to_markdown("<ul><li> </li><li>X</li></ul>") == "\n- X\n"

    def test_links_in_items(self):
        """Test that items are converted with the page URL."""
        result = to_markdown('<ul><li><a href="/a">A</a></li></ul>', "https://ex.com/")
        assert result == "\n- [A](https://ex.com/a)\n"

    def test_only_direct_items(self):
        """Test that items of nested lists are not counted twice."""
        result = to_markdown("<ul><li>P<ol><li>C</li></ol></li><li>Q</li></ul>")
        assert result == "\n- P\n  1. C\n- Q\n"


class TestTables:
    """Tests for table conversion."""

    def test_simple_table(self):
        """Test a header row and a data row."""
        html = "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        result = to_markdown(html)
        assert "| A | B |\n| --- | --- |\n| 1 | 2 |\n" in result
        assert result == "\n| A | B |\n| --- | --- |\n| 1 | 2 |\n\n"

    def test_sections_flattened(self):
        """Test that thead and tbody rows are read in order."""
        html = (
            "<table><thead><tr><th>Name</th></tr></thead>"
            "<tbody><tr><td>x</td></tr><tr><td>y</td></tr></tbody></table>"
        )
        assert to_markdown(html) == "\n| Name |\n| --- |\n| x |\n| y |\n\n"

    def test_empty_row(self):
        """Test that a row without cells still emits a line."""
        html = "<table><tr><th>A</th></tr><tr></tr></table>"
        assert to_markdown(html) == "\n| A |\n| --- |\n| |\n\n"

    def test_cells_converted(self):
        """Test that cell content goes through the converter."""
        html = '<table><tr><td><a href="/x">X</a> and <b>bold</b></td></tr></table>'
        result = to_markdown(html, "https://ex.com/")
        assert "| [X](https://ex.com/x) and **bold** |" in result


class TestSemanticContainers:
    """Tests for semantic marker comments."""

    def test_wrapped_in_markers(self):
        """Test that semantic containers are wrapped in marker comments."""
        result = to_markdown("<article><p>Body</p></article>")
        assert result == "\n<!-- article -->\n\nBody\n\n<!-- /article -->\n"

    def test_empty_container_dropped(self):
        """Test that containers without content produce nothing."""
        assert to_markdown("<section>  <div> </div></section><p>A</p>") == "\nA\n"

    def test_nested_containers(self):
        """Test that inner markers sit inside outer ones."""
        result = to_markdown("<main><section><p>X</p></section></main>")
        assert result.index("<!-- main -->") < result.index("<!-- section -->")
        assert result.index("<!-- /section -->") < result.index("<!-- /main -->")

    def test_siblings_after_container(self):
        """Test that content after a container stays outside it."""
        result = to_markdown("<figure><img src='https://a.com/i.png'></figure><p>After</p>")
        assert result.endswith("<!-- /figure -->\n\nAfter\n")


class TestHtmlToMarkdown:
    """Tests for whole-document conversion."""

    def test_default_mask(self):
        """Test that navigation, header and footer are removed by default."""
        html = """<html><body>
            <header>Site header</header>
            <nav><a href="/x">Nav</a></nav>
            <p>Keep</p>
            <footer>Footer</footer>
        </body></html>"""
        assert HtmlToMarkdown().convert(html) == "\nKeep\n"

    def test_custom_mask(self):
        """Test masking by CSS selector."""
        html = '<body><div class="ad">Buy</div><p>Keep</p></body>'
        assert HtmlToMarkdown(mask=[".ad"]).convert(html) == "\nKeep\n"

    def test_only_body_converted(self):
        """Test that head content does not leak into the Markdown."""
        html = "<html><head><title>T</title></head><body><p>B</p></body></html>"
        assert to_markdown(html) == "\nB\n"

    def test_missing_body_skips_head(self):
        """Test that a document without a body tag does not convert its head."""
        html = "<html><head><title>T</title><style>p {}</style></head><p>B</p></html>"
        assert to_markdown(html) == "\nB\n"

    def test_deep_nesting(self):
        """Test that very deep wrapper nesting converts without recursion errors."""
        depth = 5000
        html = "<div>" * depth + "<p>Deep</p>" + "</div>" * depth
        assert to_markdown(html) == "\nDeep\n"

    def test_deep_span_nesting(self):
        """Test deep nesting of inline wrappers."""
        depth = 3000
        html = "<span>" * depth + "text" + "</span>" * depth
        assert to_markdown(html) == "text"

    def test_rejects_non_text(self):
        """Test that bytes input raises ParseError."""
        with pytest.raises(ParseError):
            HtmlToMarkdown().convert(b"<p>x</p>")
