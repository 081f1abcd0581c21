"""Exceptions raised by remark."""

from __future__ import annotations


class RemarkError(Exception):
    """Base class for all remark errors."""


class ParseError(RemarkError):
    """
    Raised when HTML cannot be parsed into a document tree.

    Parsing is deterministic, so retrying the same input will fail again.
    """


class FetchError(RemarkError):
    """
    Raised when HTML cannot be fetched from a URL.

    Covers network errors, non-2xx responses, decode failures and
    browser navigation failures.
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        """
        Initialize the FetchError.

        Args:
            message: Error message describing the failure
            url: URL that was being fetched
            status_code: HTTP status code if applicable
        """
        self.message = message
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} (status {status_code})" if status_code is not None else message)


class FetchTimeoutError(FetchError):
    """Raised when a dynamic fetch produced no content before its timeout."""
