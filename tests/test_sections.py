"""Tests for section splitting and media detection."""

import pytest

from remark import Remark
from remark.models import Media, MediaKind, Section
from remark.sections import detect_media, heading_level, normalize_markdown, split_sections


class TestHeadingLevel:
    """Tests for heading detection."""

    @pytest.mark.parametrize(
        "line,level",
        [
            ("# Title", 1),
            ("### Three", 3),
            ("###### Six", 6),
            ("#Invalid", None),
            ("####### Seven", None),
            ("#   ", None),
            ("text # not heading", None),
        ],
    )
    def test_levels(self, line, level):
        """Test which lines count as headings."""
        assert heading_level(line) == level


class TestDetectMedia:
    """Tests for detect_media."""

    def test_image_anywhere_on_line(self):
        """Test that an image is found mid-line."""
        assert detect_media("see ![Alt](https://ex.com/a.png) here") == Media.image("https://ex.com/a.png", "Alt")

    def test_bare_link_line_is_video(self):
        """Test that a line holding only a link counts as a video."""
        media = detect_media("[Demo](https://ex.com/v.mp4)")
        assert media.kind is MediaKind.VIDEO
        assert media.url == "https://ex.com/v.mp4"

    def test_inline_link_is_not_media(self):
        """Test that a link inside a sentence is ignored."""
        assert detect_media("read [this](https://ex.com) first") is None


class TestNormalizeMarkdown:
    """Tests for normalize_markdown."""

    def test_removes_markers_and_blank_lines(self):
        """Test comment removal, newline collapsing and trimming."""
        text = "\n# A\n<!-- article -->\n\nBody\n\n<!-- /article -->\n"
        assert normalize_markdown(text) == "# A\nBody"


class TestSplitSections:
    """Tests for split_sections."""

    def test_two_sections_with_image(self):
        """Test that each top-level heading starts a section and the image is recorded."""
        markdown = "\n# First\n\nIntro\n\n# Second\n\n![Alt](https://ex.com/a.png)\n"
        sections = split_sections(markdown)

        assert sections == [
            Section(content="# First\nIntro"),
            Section(content="# Second\n![Alt](https://ex.com/a.png)", media=Media.image("https://ex.com/a.png", "Alt")),
        ]
        assert sections[0].media.is_none

    def test_from_html(self):
        """Test sectioning a converted document."""
        html = '<h1>First</h1><p>Intro</p><h1>Second</h1><img src="/a.png" alt="Alt">'
        sections = Remark.from_html(html, url="https://ex.com/").sections()

        assert len(sections) == 2
        assert sections[1].media == Media.image("https://ex.com/a.png", "Alt")

    def test_invalid_heading_not_a_boundary(self):
        """Test that a hash without a space does not start a section."""
        sections = split_sections("#Invalid\n# Valid\ntext")
        assert [s.content for s in sections] == ["# Valid\ntext"]

    def test_content_before_first_heading_dropped(self):
        """Test that preface text belongs to no section."""
        assert [s.content for s in split_sections("preface\n# A\nx")] == ["# A\nx"]

    def test_max_level(self):
        """Test that deeper headings stay inside their section."""
        markdown = "# A\n## B\ntext\n# C"
        assert [s.content for s in split_sections(markdown, max_level=1)] == ["# A\n## B\ntext", "# C"]
        assert [s.content for s in split_sections(markdown, max_level=2)] == ["# A", "## B\ntext", "# C"]

    def test_first_media_wins(self):
        """Test that only the first media reference is kept."""
        sections = split_sections("# A\n[Clip](https://ex.com/v.mp4)\n![one](1.png)\n![two](2.png)")
        assert sections[0].media == Media.video("https://ex.com/v.mp4")

    def test_no_headings(self):
        """Test that Markdown without headings has no sections."""
        assert split_sections("just text\nmore") == []
