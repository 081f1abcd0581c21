"""HTML fetching for remark (plain HTTP and headless browser)."""

from .browser import PLAYWRIGHT_AVAILABLE, BrowserHtmlFetcher
from .client import HttpHtmlFetcher, decode_content
from .fetcher import convert_with, create_fetcher, fetch_blocking, fetch_remark, stream_remarks
from .protocols import HtmlFetcher
from .resources import RESOURCE_GROUPS, ResourceType, parse_resource_types

__all__ = [
    # Protocols
    "HtmlFetcher",
    # Implementations
    "HttpHtmlFetcher",
    "BrowserHtmlFetcher",
    "PLAYWRIGHT_AVAILABLE",
    "decode_content",
    # Resource blocking
    "ResourceType",
    "RESOURCE_GROUPS",
    "parse_resource_types",
    # Entry points
    "create_fetcher",
    "convert_with",
    "fetch_remark",
    "stream_remarks",
    "fetch_blocking",
]
