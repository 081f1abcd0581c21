"""Heading-based splitting of Markdown into sections."""

from __future__ import annotations

import re
from typing import Optional

from .models.content import Media, Section

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+\S")
IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
LINK_LINE_PATTERN = re.compile(r"^\[(.*?)\]\((.*?)\)$")

_COMMENT_PATTERN = re.compile(r"<!--[^>]*-->")
_NEWLINES_PATTERN = re.compile(r"\n{2,}")


def heading_level(line: str) -> Optional[int]:
    """Return the level (1-6) of a Markdown heading line, or None."""
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    return len(match.group(1))


def detect_media(line: str) -> Optional[Media]:
    """
    Detect a media reference on a line.

    An image anywhere on the line wins; otherwise a line that is nothing
    but a link counts as a video.
    """
    image = IMAGE_PATTERN.search(line)
    if image:
        return Media.image(url=image.group(2), alt=image.group(1))

    link = LINK_LINE_PATTERN.match(line)
    if link:
        return Media.video(url=link.group(2))

    return None


def normalize_markdown(text: str) -> str:
    """Drop marker comments, collapse blank lines and trim."""
    text = _COMMENT_PATTERN.sub("", text)
    text = _NEWLINES_PATTERN.sub("\n", text)
    return text.strip()


class _SectionBuilder:
    """Accumulates the lines of the section being read."""

    def __init__(self, heading: str):
        self.lines = [heading]
        self.media = Media.none()

    def add(self, line: str) -> None:
        if self.media.is_none:
            media = detect_media(line)
            if media is not None:
                self.media = media
        self.lines.append(line)

    def build(self) -> Optional[Section]:
        content = normalize_markdown("\n".join(self.lines))
        if not content:
            return None
        return Section(content=content, media=self.media)


def split_sections(markdown: str, max_level: int = 1) -> list[Section]:
    """
    Split Markdown into sections at headings.

    A section starts at every heading of level <= max_level and runs up to
    the next such heading. Content before the first one is dropped. Each
    section records the first image (or bare link line, as a video) it
    contains.

    Args:
        markdown: Markdown text
        max_level: Deepest heading level that starts a section

    Returns:
        Sections in document order
    """
    sections: list[Section] = []
    current: Optional[_SectionBuilder] = None

    for line in markdown.splitlines():
        level = heading_level(line)
        if level is not None and level <= max_level:
            if current is not None:
                section = current.build()
                if section is not None:
                    sections.append(section)
            current = _SectionBuilder(line)
            continue

        if current is not None:
            current.add(line)

    if current is not None:
        section = current.build()
        if section is not None:
            sections.append(section)

    return sections
