"""Tests for the Remark document."""

import pytest

from remark import FrontmatterBuilder, ParseError, Remark
from remark.metadata import PageMetadata

PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>  My
        Page </title>
    <meta name="Description" content="A short summary">
    <meta property="og:title" content="OG Title">
    <meta property="og:image" content="https://ex.com/og.png">
</head>
<body>
    <header><h1>Site</h1></header>
    <h1>Heading</h1>
    <p>Read <a href="/about">About</a> now.</p>
    <footer>Footer text</footer>
</body>
</html>"""


@pytest.fixture
def remark():
    """A converted sample page."""
    return Remark.from_html(PAGE, url="https://ex.com/page")


class TestFromHtml:
    """Tests for Remark.from_html."""

    def test_metadata(self, remark):
        """Test title, description and Open Graph extraction."""
        assert remark.title == "My Page"
        assert remark.description == "A short summary"
        assert remark.og_data == {"og_title": "OG Title", "og_image": "https://ex.com/og.png"}

    def test_metadata_property(self, remark):
        """Test the grouped metadata view."""
        assert remark.metadata == PageMetadata(
            title="My Page",
            description="A short summary",
            og_data={"og_title": "OG Title", "og_image": "https://ex.com/og.png"},
        )

    def test_markdown_masks_header_and_footer(self, remark):
        """Test that masked tags are absent from the Markdown."""
        assert remark.markdown == "\n# Heading\n\nRead [About](https://ex.com/about) now.\n"

    def test_body_text(self, remark):
        """Test the plain body text after masking."""
        assert remark.body == "Heading Read About now."

    def test_keeps_url_and_html(self, remark):
        """Test that the inputs are kept on the document."""
        assert remark.url == "https://ex.com/page"
        assert remark.html == PAGE

    def test_missing_metadata(self):
        """Test defaults when the head is empty."""
        remark = Remark.from_html("<p>x</p>")
        assert remark.title == ""
        assert remark.description == ""
        assert remark.og_data == {}
        assert remark.url is None

    def test_custom_mask(self):
        """Test that the mask can be overridden."""
        remark = Remark.from_html("<nav><p>Menu</p></nav><p>Body</p>", mask=())
        assert "Menu" in remark.markdown

    def test_document_without_body(self):
        """Test that head content stays out of a page that omits the body tag."""
        remark = Remark.from_html("<html><head><title>Site Title</title></head><h1>A</h1><p>x</p></html>")
        assert remark.title == "Site Title"
        assert remark.markdown == "\n# A\n\nx\n"
        assert remark.body == "A x"

    def test_og_data_read_only(self, remark):
        """Test that the Open Graph mapping cannot be changed after construction."""
        with pytest.raises(TypeError):
            remark.og_data["og_title"] = "Changed"
        assert remark.og_data["og_title"] == "OG Title"

    def test_og_data_copied(self):
        """Test that later changes to the caller's dict do not leak in."""
        data = {"og_title": "A"}
        remark = Remark(url=None, title="", description="", og_data=data)
        data["og_title"] = "B"
        assert remark.og_data == {"og_title": "A"}

    def test_rejects_bytes(self):
        """Test that non-text input raises ParseError."""
        with pytest.raises(ParseError):
            Remark.from_html(b"<p>x</p>")


class TestFrontMatter:
    """Tests for front matter generation."""

    def test_generate_front_matter(self, remark):
        """Test the block built from the page metadata."""
        assert remark.generate_front_matter() == (
            "---\n"
            'title: "My Page"\n'
            'description: "A short summary"\n'
            'og_image: "https://ex.com/og.png"\n'
            'og_title: "OG Title"\n'
            "---\n"
        )

    def test_empty_values_present(self):
        """Test that title and description are emitted even when empty."""
        assert FrontmatterBuilder().build() == '---\ntitle: ""\ndescription: ""\n---\n'

    def test_escaping(self):
        """Test that quotes, backslashes and newlines are escaped."""
        result = FrontmatterBuilder().build(title='Say "hi"', description="a\\b\nc")
        assert 'title: "Say \\"hi\\""' in result
        assert 'description: "a\\\\b\\nc"' in result

    def test_page(self, remark):
        """Test that the page is front matter, a blank line, then Markdown."""
        assert remark.page == remark.generate_front_matter() + "\n" + remark.markdown


class TestViews:
    """Tests for plain text and sections."""

    def test_plain_text_strips_links(self, remark):
        """Test that links are replaced by their text."""
        assert remark.plain_text == "\n# Heading\n\nRead About now.\n"

    def test_plain_text_stable(self, remark):
        """Test that text without links passes through unchanged."""
        once = Remark.from_html("<p>No links here</p>")
        assert once.plain_text == once.markdown

    def test_plain_text_idempotent(self, remark):
        """Test that stripping links twice gives the same text."""
        html = '<p>See <a href="/a">A</a> and <a href="https://b.com">B</a>.</p><img src="/i.png" alt="I">'
        once = Remark.from_html(html, url="https://ex.com/").plain_text
        twice = Remark(url=None, title="", description="", markdown=once).plain_text

        assert "](" not in once
        assert twice == once

    def test_sections(self, remark):
        """Test sections of the converted page."""
        sections = remark.sections()
        assert [s.content for s in sections] == ["# Heading\nRead [About](https://ex.com/about) now."]
