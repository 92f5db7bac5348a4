"""
Plain-HTTP fetch collaborator.

The analysis engine only consumes DocumentModel objects; this module is the
minimal default producer of them. Browser rendering is left to other
``DocumentFetcher`` implementations.
"""

import logging
import time
from typing import Optional, Protocol

import httpx

from .extract import build_document
from .helpers import is_valid_url
from .models import DocumentModel

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "AEO-Audit-Bot/1.0 (SEO Analysis)"
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}
MAX_PAGE_SIZE_BYTES = 5_000_000


class FetchError(Exception):
    """The page could not be retrieved."""


class DocumentFetcher(Protocol):
    async def fetch(self, url: str) -> DocumentModel: ...


class HttpxFetcher:
    """Fetches a page with a single GET and builds its DocumentModel."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent, **DEFAULT_HEADERS}
        self._transport = transport

    async def fetch(self, url: str) -> DocumentModel:
        if not is_valid_url(url):
            raise ValueError(f"Invalid URL provided: {url!r}")

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(f"Request timeout fetching {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        load_time_ms = (time.perf_counter() - start) * 1000
        html = resp.text
        if len(resp.content) > MAX_PAGE_SIZE_BYTES:
            logger.warning(
                f"{url} is {len(resp.content)} bytes, truncating to {MAX_PAGE_SIZE_BYTES}"
            )
            html = html[:MAX_PAGE_SIZE_BYTES]

        logger.info(f"Fetched {url} ({resp.status_code}, {load_time_ms:.0f}ms)")
        return build_document(str(resp.url), html, load_time_ms=load_time_ms)
