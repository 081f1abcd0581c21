"""Headless browser fetching for JavaScript-rendered pages."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Iterable
from types import TracebackType
from typing import TYPE_CHECKING

from ..errors import FetchError, FetchTimeoutError
from .client import DEFAULT_USER_AGENT
from .resources import ResourceType, playwright_resource_types

logger = logging.getLogger(__name__)

# Check for Playwright availability
PLAYWRIGHT_AVAILABLE = False
try:
    from playwright.async_api import Error as PlaywrightError
    from playwright.async_api import TimeoutError as PlaywrightTimeoutError
    from playwright.async_api import async_playwright

    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    pass

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page, Playwright, Route


class BrowserHtmlFetcher:
    """
    Fetch pages with a headless browser and wait for their content to settle.

    The browser is owned by this object: it is launched on enter and torn
    down on exit. Each fetch gets its own isolated browser context.

    Content is considered stable once ``stable_checks`` consecutive
    snapshots of the DOM, taken every ``check_interval`` seconds, are
    identical. If the timeout elapses first, the latest snapshot is used.

    Example:
        async with BrowserHtmlFetcher(blocked_resources=parse_resource_types(["nonessential"])) as fetcher:
            html = await fetcher.fetch("https://spa.example.com")

    Requires: pip install remark-markdown[js]
    """

    def __init__(
        self,
        blocked_resources: Iterable[ResourceType] = (),
        headless: bool = True,
        user_agent: str | None = None,
        default_timeout: float = 15.0,
        check_interval: float = 0.2,
        stable_checks: int = 3,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize the browser fetcher.

        Args:
            blocked_resources: Resource types the browser must not load
            headless: Run browser in headless mode
            user_agent: Custom user agent string
            default_timeout: Default timeout per fetch (seconds)
            check_interval: Seconds between content snapshots
            stable_checks: Identical consecutive snapshots that mean "stable"
            headers: Headers sent with every request
        """
        if not PLAYWRIGHT_AVAILABLE:
            raise ImportError(
                "Playwright is required for interactive fetching. " "Install with: pip install remark-markdown[js]"
            )

        self._blocked_types = frozenset(blocked_resources)
        self._blocked_requests = playwright_resource_types(self._blocked_types)
        self._headless = headless
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._default_timeout = default_timeout
        self._check_interval = check_interval
        self._stable_checks = stable_checks
        self._headers = dict(headers or {})

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> BrowserHtmlFetcher:
        """Start Playwright and launch the browser."""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self._headless)
        logger.debug("Browser launched")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the browser and stop Playwright."""
        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser shut down")

    async def _route(self, route: Route) -> None:
        if route.request.resource_type in self._blocked_requests:
            await route.abort()
        else:
            await route.continue_()

    @contextlib.asynccontextmanager
    async def _open_page(
        self,
        url: str,
        timeout: float,
        headers: dict[str, str] | None,
    ) -> AsyncIterator[Page]:
        if self._browser is None:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        context = await self._browser.new_context(
            user_agent=self._user_agent,
            extra_http_headers={**self._headers, **(headers or {})},
            java_script_enabled=True,
        )
        try:
            page = await context.new_page()
            if self._blocked_requests:
                await page.route("**/*", self._route)
            if ResourceType.POPUP in self._blocked_types:
                context.on("page", lambda popup: asyncio.ensure_future(popup.close()))

            try:
                response = await page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
            except PlaywrightTimeoutError as e:
                raise FetchTimeoutError(f"Timed out loading {url}", url=url) from e
            except PlaywrightError as e:
                raise FetchError(f"Browser navigation failed for {url}: {e}", url=url) from e

            if response is not None and response.status >= 400:
                raise FetchError(f"Bad response for {url}", url=url, status_code=response.status)

            yield page
        finally:
            with contextlib.suppress(Exception):
                await context.close()

    async def watch(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> AsyncIterator[str]:
        """
        Yield each new DOM snapshot until the content is stable or time runs out.

        Args:
            url: URL to load
            timeout: Total seconds to wait, including navigation
            headers: Optional additional request headers

        Yields:
            Serialized HTML, once per change
        """
        timeout_val = timeout or self._default_timeout
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_val

        async with self._open_page(url, timeout_val, headers) as page:
            previous: str | None = None
            consecutive = 0

            while True:
                try:
                    html = await page.content()
                except PlaywrightError as e:
                    raise FetchError(f"Could not read content of {url}: {e}", url=url) from e

                if html == previous:
                    consecutive += 1
                else:
                    previous = html
                    consecutive = 1
                    yield html

                if consecutive >= self._stable_checks:
                    logger.debug(f"Content of {url} stable after {consecutive} checks")
                    return

                if loop.time() >= deadline:
                    logger.warning(f"Content of {url} did not settle within {timeout_val}s")
                    return

                await asyncio.sleep(self._check_interval)

    async def fetch(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """
        Fetch a page once its rendered content has settled.

        Args:
            url: URL to fetch
            timeout: Total seconds to wait
            headers: Optional additional request headers

        Returns:
            The last HTML snapshot

        Raises:
            FetchTimeoutError: If no content was captured before the timeout
            FetchError: If navigation failed
        """
        html: str | None = None
        async for snapshot in self.watch(url, timeout=timeout, headers=headers):
            html = snapshot

        if html is None:
            raise FetchTimeoutError(f"Timeout waiting for content from {url}", url=url)
        return html
