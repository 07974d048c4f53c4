"""
Error types raised by seo_inspector.

Only the fetch and parse stages can fail; every extractor is total over a
parsed document and degrades to empty facts instead of raising.
"""

from enum import Enum
from typing import Optional


class SEOInspectorError(Exception):
    """Base class for all errors raised by this package."""


class FetchErrorKind(str, Enum):
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"


class FetchError(SEOInspectorError):
    """The target page could not be retrieved. Never retried."""

    def __init__(
        self,
        kind: FetchErrorKind,
        url: str,
        status_code: Optional[int] = None,
    ):
        self.kind = kind
        self.url = url
        self.status_code = status_code
        if kind == FetchErrorKind.TIMEOUT:
            message = f"Request timeout for URL: {url}"
        else:
            status = status_code if status_code is not None else "unknown status"
            message = f"Failed to fetch URL ({status}): {url}"
        super().__init__(message)


class ParseError(SEOInspectorError):
    """The fetched body could not be parsed as an HTML document at all."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not parse HTML document for URL: {url}")


class InvalidURLError(SEOInspectorError, ValueError):
    """The URL handed to the HTTP API is not an absolute http(s) URL."""

    def __init__(self, url: object):
        self.url = url
        super().__init__(
            "Invalid URL format. Please enter a valid URL including http:// or https://."
        )
