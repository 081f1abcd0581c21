"""Protocol definitions for HTML fetching."""

from __future__ import annotations

from typing import Protocol


class HtmlFetcher(Protocol):
    """
    Protocol for fetching a page as decoded HTML.

    This abstraction allows for:
    - Mock implementations in tests
    - A plain HTTP backend and a headless browser backend
    - One entry point (fetch_remark) over both
    """

    async def fetch(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """
        Fetch a page.

        Args:
            url: The URL to fetch
            timeout: Timeout in seconds (fetcher default if None)
            headers: Optional additional request headers

        Returns:
            The page HTML

        Raises:
            FetchError: On network errors, bad status or undecodable content
        """
        ...
