# ABOUTME: dushu.com metadata provider implementation.
# ABOUTME: Searches the catalog by ISBN, follows the first result, and extracts the detail page.

import logging
from urllib.parse import quote, urljoin, urlparse

from bookinfo.errors import NotFoundError, URLError
from bookinfo.metadata.extract import extract_book_info
from bookinfo.metadata.http import HttpFetcher
from bookinfo.metadata.markup import parse, select
from bookinfo.metadata.types import BookInfo

logger = logging.getLogger(__name__)

ROOT_URL = "https://www.dushu.com/"
SEARCH_URL = "https://www.dushu.com/search.aspx?wd={isbn}"

_RESULT_LINK_SELECTOR = "div.book-info > h3 > a"


class DushuProvider:
    """Book metadata provider backed by the dushu.com catalog.

    Lookup is two requests: the search page, whose first result links to the
    book's detail page, and the detail page itself. Uses a
    dependency-injected HttpFetcher for testability. No retries.
    """

    def __init__(self, fetcher: HttpFetcher, *, root_url: str = ROOT_URL) -> None:
        self._fetcher = fetcher
        self._root_url = root_url

    @property
    def name(self) -> str:
        return "dushu"

    def search(self, isbn: str) -> str:
        """Find the detail page URL for an ISBN.

        Returns:
            Absolute URL of the first search result.

        Raises:
            NotFoundError: If the search returns no result.
            FetchError: If the search request fails.
            ParseError: If the search page cannot be parsed.
            URLError: If the first result has no usable link.
        """
        url = SEARCH_URL.format(isbn=quote(isbn, safe=""))
        document = parse(self._fetcher.fetch(url))
        links = select(document, _RESULT_LINK_SELECTOR)
        if not links:
            raise NotFoundError(f"no book for isbn {isbn}")

        href = links[0].get("href")
        if not isinstance(href, str) or not href.strip():
            raise URLError(f"search result for isbn {isbn} has no link")
        try:
            detail_url = urljoin(self._root_url, href.strip())
            parsed = urlparse(detail_url)
        except ValueError as exc:
            raise URLError(f"bad result link {href!r} for isbn {isbn}: {exc}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise URLError(f"bad result link {href!r} for isbn {isbn}")

        logger.debug("isbn %s resolved to %s", isbn, detail_url)
        return detail_url

    def get_book_info(self, url: str) -> BookInfo:
        """Fetch one detail page and extract every field from it.

        Raises:
            FetchError: If the request fails.
            ParseError: If the page is malformed or a present price, page
                count or word count cannot be parsed.
        """
        document = parse(self._fetcher.fetch(url))
        return extract_book_info(document)

    def crawl(self, isbn: str) -> BookInfo:
        """Search for an ISBN and extract its detail page."""
        return self.get_book_info(self.search(isbn))
