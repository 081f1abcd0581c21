"""The converted document and its derived views."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from .conversion.markdown import ConversionContext, FrontmatterBuilder, convert_node
from .conversion.parsing import find_body, mask_tags, parse_html
from .conversion.tags import DEFAULT_MASK
from .links import extract_links
from .metadata import PageMetadata, extract_metadata
from .models.content import Link, Section
from .sections import split_sections

logger = logging.getLogger(__name__)

_LINK_PATTERN = re.compile(r"\[(.*?)\]\(.*?\)")


@dataclass(frozen=True)
class Remark:
    """
    A page converted to Markdown, with its metadata.

    Attributes:
        url: Page URL the document was resolved against, or None
        title: Text of the <title> element
        description: Content of the meta description
        og_data: Open Graph properties keyed og_* (read-only)
        body: Plain text of the body after masking
        markdown: Markdown for the body after masking
        html: The raw HTML as given

    Example:
        remark = Remark.from_html(html, url="https://example.com/post")
        print(remark.page)
        for section in remark.sections(max_level=2):
            print(section.content, section.media)
    """

    url: Optional[str]
    title: str
    description: str
    og_data: Mapping[str, str] = field(default_factory=dict)
    body: str = ""
    markdown: str = ""
    html: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "og_data", MappingProxyType(dict(self.og_data)))

    @classmethod
    def from_html(
        cls,
        html: str,
        url: Optional[str] = None,
        mask: Iterable[str] = DEFAULT_MASK,
    ) -> Remark:
        """
        Parse HTML and convert its body to Markdown.

        Metadata is read before masking, so masked tags never hide head data.

        Args:
            html: Decoded HTML document
            url: Absolute page URL for link resolution
            mask: Tag names removed with their subtrees before conversion

        Returns:
            The converted document

        Raises:
            ParseError: If the HTML cannot be parsed
        """
        soup = parse_html(html)
        metadata = extract_metadata(soup)

        mask_tags(soup, mask)

        body = find_body(soup)
        markdown = convert_node(body, ConversionContext(page_url=url))
        text = " ".join(body.get_text(" ").split())

        logger.debug(f"Converted {url or 'document'}: {len(html)} chars HTML -> {len(markdown)} chars Markdown")

        return cls(
            url=url,
            title=metadata.title,
            description=metadata.description,
            og_data=metadata.og_data,
            body=text,
            markdown=markdown,
            html=html,
        )

    @property
    def metadata(self) -> PageMetadata:
        return PageMetadata(title=self.title, description=self.description, og_data=dict(self.og_data))

    def generate_front_matter(self) -> str:
        """Build the YAML front matter block from title, description and OG data."""
        return FrontmatterBuilder().build(
            title=self.title,
            description=self.description,
            og_data=self.og_data,
        )

    @property
    def page(self) -> str:
        """Front matter, a blank line, then the Markdown."""
        return self.generate_front_matter() + "\n" + self.markdown

    @property
    def plain_text(self) -> str:
        """The Markdown with every [text](url) replaced by its text."""
        return _LINK_PATTERN.sub(lambda match: match.group(1), self.markdown)

    def sections(self, max_level: int = 1) -> list[Section]:
        """Split the Markdown at headings of level <= max_level."""
        return split_sections(self.markdown, max_level)

    def extract_links(self) -> list[Link]:
        """Re-parse the raw HTML and return its links, resolved against the page URL."""
        return extract_links(self.html, self.url)
