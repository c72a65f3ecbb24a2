"""Page markup client.

Fetches the HTML for a URL over plain HTTP(S). No retries; the analyzer
falls back to simulated features whenever this raises.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LandingAnalyzer/0.1)"

HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "fa,en-US;q=0.8,en;q=0.6",
}


class RetrievalError(Exception):
    """The page could not be retrieved (network error, timeout, or error status)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not retrieve {url}: {reason}")
        self.url = url
        self.reason = reason


async def fetch_markup(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Fetch the full markup of a page.

    Args:
        url: Page URL, already validated by the caller.
        timeout: Overall request timeout in seconds.
        user_agent: User-Agent header to send.
        transport: Optional httpx transport, used to stub the network in tests.

    Returns:
        The decoded response body.

    Raises:
        RetrievalError: On any transport failure or non-2xx status.
    """
    headers = {**HEADERS, "User-Agent": user_agent}
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    ) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RetrievalError(url, f"HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RetrievalError(url, str(exc) or type(exc).__name__) from exc

    logger.debug("Fetched %s (%d bytes, status %d)", url, len(response.content), response.status_code)
    return response.text
