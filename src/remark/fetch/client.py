"""Plain HTTP fetching with retry logic."""

from __future__ import annotations

import asyncio
import logging
import random
from types import TracebackType

import aiohttp
from charset_normalizer import from_bytes as detect_encoding

from ..errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Safari/605.1.15"
)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def decode_content(content: bytes, content_type: str) -> str:
    """
    Decode a response body.

    Fallback chain:
    1. Content-Type header charset
    2. charset-normalizer detection
    3. UTF-8 with replacement

    Args:
        content: Raw bytes content
        content_type: Content-Type header value

    Returns:
        Decoded string
    """
    encoding = None
    if content_type:
        for part in content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

    if encoding:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with declared encoding: {encoding}")

    best_match = detect_encoding(content).best()
    if best_match is not None:
        logger.debug(f"Detected encoding: {best_match.encoding}")
        return str(best_match)

    return content.decode("utf-8", errors="replace")


class HttpHtmlFetcher:
    """
    Fetches HTML over plain HTTP with retries.

    Features:
    - Exponential backoff retry for transient failures
    - Browser-like default headers, overridable per request
    - Content size limit to prevent memory exhaustion
    - Encoding detection

    Example:
        async with HttpHtmlFetcher() as fetcher:
            html = await fetcher.fetch("https://example.com")
    """

    MAX_CONTENT_SIZE = 50 * 1024 * 1024  # 50 MB

    # Status codes that warrant a retry
    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    # Exceptions that warrant a retry
    RETRYABLE_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
    )

    def __init__(
        self,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        default_timeout: float = 15.0,
        user_agent: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            max_retries: Maximum retry attempts for failed requests
            retry_base_delay: Base delay for exponential backoff (seconds)
            default_timeout: Default request timeout in seconds
            user_agent: Custom User-Agent string
            headers: Headers sent with every request
        """
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._default_timeout = default_timeout
        self._headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT, **DEFAULT_HEADERS}
        if headers:
            self._headers.update(headers)

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> HttpHtmlFetcher:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(headers=self._headers)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter for the given 0-indexed attempt."""
        delay: float = self._retry_base_delay * (2**attempt)
        return delay + random.uniform(0, 1)

    async def fetch(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """
        Fetch a page with retry logic.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            Decoded HTML

        Raises:
            FetchError: On non-2xx status, oversized content, or network
                errors after retries are exhausted
        """
        if self._session is None:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout

        for attempt in range(self._max_retries + 1):
            try:
                async with self._session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=timeout_val),
                    headers=headers,
                    allow_redirects=True,
                ) as response:
                    if response.status in self.RETRYABLE_STATUS_CODES and attempt < self._max_retries:
                        delay = self._calculate_retry_delay(attempt)
                        logger.warning(
                            f"Got {response.status} for {url}, retrying in {delay:.1f}s "
                            f"(attempt {attempt + 1}/{self._max_retries + 1})"
                        )
                        await asyncio.sleep(delay)
                        continue

                    if not 200 <= response.status < 300:
                        raise FetchError(f"Bad response for {url}", url=url, status_code=response.status)

                    content = b""
                    async for chunk in response.content.iter_chunked(8192):
                        content += chunk
                        if len(content) > self.MAX_CONTENT_SIZE:
                            raise FetchError(f"Content size limit exceeded: >{self.MAX_CONTENT_SIZE} bytes", url=url)

                    return decode_content(content, response.headers.get("Content-Type", ""))

            except self.RETRYABLE_EXCEPTIONS as e:
                if attempt < self._max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Error fetching {url}: {e}, retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{self._max_retries + 1})"
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"HTTP fetch error for {url} after {self._max_retries + 1} attempts: {e}")
                    raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

        raise FetchError(f"Failed to fetch {url}", url=url)
