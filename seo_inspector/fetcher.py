"""
Page fetcher.

Single GET of the target URL with a timeout and a bot user-agent. Failures
map onto FetchError kinds; nothing is retried.
"""

import logging
from typing import Optional

import httpx

from .config import DEFAULT_USER_AGENT
from .errors import FetchError, FetchErrorKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10000


def fetch_page(
    url: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    user_agent: str = DEFAULT_USER_AGENT,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Fetch ``url`` and return the response body as text.

    Args:
        url: Absolute http(s) URL, already validated.
        timeout_ms: Overall timeout for connect and read, in milliseconds.
        user_agent: User-Agent header value.
        client: Optional pre-built httpx.Client (its own timeout applies).

    Raises:
        FetchError: on timeout, non-2xx status, or any transport failure.
    """
    headers = {"User-Agent": user_agent}
    logger.info(f"Fetching {url} (timeout={timeout_ms}ms)")
    try:
        if client is not None:
            response = client.get(url, headers=headers, follow_redirects=True)
        else:
            with httpx.Client(timeout=timeout_ms / 1000) as own_client:
                response = own_client.get(url, headers=headers, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise FetchError(FetchErrorKind.TIMEOUT, url) from e
    except httpx.HTTPStatusError as e:
        raise FetchError(
            FetchErrorKind.HTTP_STATUS, url, status_code=e.response.status_code
        ) from e
    except httpx.RequestError as e:
        raise FetchError(FetchErrorKind.NETWORK, url) from e

    html = response.text
    logger.info(f"Fetched {url}: status={response.status_code} chars={len(html)}")
    return html


class PageFetcher:
    """Callable fetcher bound to one timeout / user-agent pair."""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.Client] = None,
    ):
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        self.client = client

    def __call__(self, url: str) -> str:
        return fetch_page(
            url,
            timeout_ms=self.timeout_ms,
            user_agent=self.user_agent,
            client=self.client,
        )
