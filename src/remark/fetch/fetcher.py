"""High-level entry points: fetch a URL and convert it."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Optional

from ..document import Remark
from ..models.config import FetchConfig, FetchMethod, RemarkConfig
from .browser import BrowserHtmlFetcher
from .client import HttpHtmlFetcher
from .protocols import HtmlFetcher
from .resources import parse_resource_types

logger = logging.getLogger(__name__)


def create_fetcher(config: FetchConfig) -> HttpHtmlFetcher | BrowserHtmlFetcher:
    """
    Build the fetcher for the configured method.

    The result is an async context manager; enter it before fetching.

    Args:
        config: Fetch configuration

    Returns:
        An HTTP fetcher for the default method, a browser fetcher for interactive
    """
    if config.method is FetchMethod.DEFAULT:
        return HttpHtmlFetcher(
            max_retries=config.max_retries,
            default_timeout=config.timeout,
            user_agent=config.user_agent,
            headers=config.headers,
        )

    return BrowserHtmlFetcher(
        blocked_resources=parse_resource_types(config.blocked_resources),
        user_agent=config.user_agent,
        default_timeout=config.timeout,
        check_interval=config.check_interval,
        stable_checks=config.stable_checks,
        headers=config.headers,
    )


async def convert_with(fetcher: HtmlFetcher, url: str, config: RemarkConfig) -> Remark:
    """Fetch ``url`` with an already-entered fetcher and convert it."""
    html = await fetcher.fetch(url, timeout=config.fetch.timeout)
    logger.info(f"Fetched {url}: {len(html)} chars")
    return Remark.from_html(html, url=url, mask=config.conversion.mask)


async def fetch_remark(url: str, config: Optional[RemarkConfig] = None) -> Remark:
    """
    Fetch a page and convert it to a Remark.

    Example:
        remark = await fetch_remark(
            "https://example.com/post",
            RemarkConfig(fetch=FetchConfig(method=FetchMethod.DEFAULT)),
        )

    Args:
        url: Absolute page URL
        config: Fetch and conversion settings (defaults if None)

    Returns:
        The converted page

    Raises:
        FetchError: If the page could not be fetched
        ParseError: If the HTML could not be parsed
    """
    config = config or RemarkConfig()
    async with create_fetcher(config.fetch) as fetcher:
        return await convert_with(fetcher, url, config)


async def stream_remarks(url: str, config: Optional[RemarkConfig] = None) -> AsyncIterator[Remark]:
    """
    Load a page in the browser and yield a Remark each time its content changes.

    Stops once the content is stable or the fetch timeout elapses. Parse
    failures propagate and end the stream.

    Example:
        async for remark in stream_remarks("https://spa.example.com"):
            print(remark.title)

    Args:
        url: Absolute page URL
        config: Fetch and conversion settings (defaults if None)

    Yields:
        One Remark per distinct snapshot
    """
    config = config or RemarkConfig()
    fetch_config = config.fetch
    async with BrowserHtmlFetcher(
        blocked_resources=parse_resource_types(fetch_config.blocked_resources),
        user_agent=fetch_config.user_agent,
        default_timeout=fetch_config.timeout,
        check_interval=fetch_config.check_interval,
        stable_checks=fetch_config.stable_checks,
        headers=fetch_config.headers,
    ) as fetcher:
        async for html in fetcher.watch(url):
            yield Remark.from_html(html, url=url, mask=config.conversion.mask)


def fetch_blocking(url: str, **kwargs: object) -> Remark:
    """
    Blocking fetch for sync code.

    WARNING: Do not call from within an existing event loop (e.g., Jupyter,
    asyncio-based frameworks). Use fetch_remark instead.

    Args:
        url: Absolute page URL
        **kwargs: Config options passed to RemarkConfig

    Returns:
        The converted page
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("fetch_blocking() called from async context. Use 'await fetch_remark()' instead.")

    config = RemarkConfig(**kwargs)  # type: ignore[arg-type]
    return asyncio.run(fetch_remark(url, config))
