"""
remark - Convert HTML pages to Markdown with metadata.

Usage:
    from remark import Remark

    remark = Remark.from_html(html, url="https://example.com/post")
    print(remark.page)

    for section in remark.sections(max_level=2):
        print(section.content, section.media)

    async def main():
        remark = await fetch_remark("https://example.com/post")
"""

__version__ = "1.0.0"

from .conversion import FrontmatterBuilder, HtmlToMarkdown, resolve_url
from .document import Remark
from .errors import FetchError, FetchTimeoutError, ParseError, RemarkError
from .fetch import fetch_blocking, fetch_remark, stream_remarks
from .links import extract_links
from .metadata import PageMetadata
from .models import (
    ConversionConfig,
    FetchConfig,
    FetchMethod,
    Link,
    Media,
    MediaKind,
    RemarkConfig,
    Section,
)
from .sections import split_sections

__all__ = [
    "__version__",
    # Core
    "Remark",
    "HtmlToMarkdown",
    "FrontmatterBuilder",
    "resolve_url",
    "split_sections",
    "extract_links",
    # Fetching
    "fetch_remark",
    "stream_remarks",
    "fetch_blocking",
    # Config
    "RemarkConfig",
    "ConversionConfig",
    "FetchConfig",
    "FetchMethod",
    # Values
    "PageMetadata",
    "Link",
    "Media",
    "MediaKind",
    "Section",
    # Errors
    "RemarkError",
    "ParseError",
    "FetchError",
    "FetchTimeoutError",
]
