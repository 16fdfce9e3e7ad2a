# ABOUTME: HTTP fetcher abstraction for catalog page requests.
# ABOUTME: Holds a cookie-carrying session with browser-like headers and an injectable transport.

import gzip
import logging
import threading
import zlib
from typing import Any, Protocol, runtime_checkable

import httpx

from bookinfo.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "Pragma": "no-cache",
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/67.0.3396.87 Safari/537.36"
    ),
}

_GZIP_MAGIC = b"\x1f\x8b"


@runtime_checkable
class HttpFetcher(Protocol):
    """Protocol for fetching the raw body of a catalog page."""

    def fetch(self, url: str) -> bytes: ...


class DushuHttpClient:
    """HTTP client that keeps one cookie session across catalog requests.

    Wraps httpx.Client with a fixed browser-like header set. Caller-supplied
    headers override the defaults once, at construction. Requests go through
    a lock so the cookie jar can be shared between threads.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        merged = {**DEFAULT_HEADERS, **(headers or {})}
        client_kwargs: dict[str, Any] = {
            "headers": merged,
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._lock = threading.Lock()

    @property
    def headers(self) -> httpx.Headers:
        """The headers sent with every request."""
        return self._client.headers

    def fetch(self, url: str) -> bytes:
        """Send a single GET request and return the decompressed body.

        Args:
            url: Absolute URL to request.

        Returns:
            The response body. A gzip body is decompressed even when the
            server omits the Content-Encoding header.

        Raises:
            FetchError: On transport errors, HTTP status >= 400, or a corrupt
                gzip body.
        """
        logger.debug("GET %s", url)
        with self._lock:
            try:
                response = self._client.get(url)
            except httpx.HTTPError as exc:
                raise FetchError(f"Request failed: {url}: {exc}") from exc

        if response.status_code >= 400:
            raise FetchError(f"HTTP {response.status_code} from {url}")

        body = response.content
        if body.startswith(_GZIP_MAGIC):
            try:
                body = gzip.decompress(body)
            except (OSError, EOFError, zlib.error) as exc:
                raise FetchError(f"Corrupt gzip body from {url}: {exc}") from exc
        return body

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._client.close()
