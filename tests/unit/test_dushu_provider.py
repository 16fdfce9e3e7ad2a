# ABOUTME: Unit tests for DushuProvider.
# ABOUTME: Uses a FakeFetcher to test ISBN search, detail extraction, and error propagation.

import pytest

from bookinfo.errors import FetchError, NotFoundError, ParseError, URLError
from bookinfo.metadata.dushu import DushuProvider
from bookinfo.metadata.provider import BookInfoProvider
from tests.fixtures.dushu_pages import (
    DETAIL_PAGE,
    DETAIL_URL,
    SEARCH_PAGE,
    SEARCH_PAGE_EMPTY,
    SEARCH_PAGE_NO_HREF,
)


class FakeFetcher:
    """Fake fetcher that returns canned bodies based on URL patterns."""

    def __init__(self, responses: dict[str, str | Exception] | None = None) -> None:
        self._responses = responses or {}
        self.request_log: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.request_log.append(url)
        for pattern, response in self._responses.items():
            if pattern in url:
                if isinstance(response, Exception):
                    raise response
                return response.encode()
        return b"<html></html>"


class TestDushuProviderProtocol:
    """Tests that DushuProvider satisfies BookInfoProvider."""

    def test_satisfies_protocol(self) -> None:
        provider = DushuProvider(fetcher=FakeFetcher())
        assert isinstance(provider, BookInfoProvider)

    def test_name_property(self) -> None:
        assert DushuProvider(fetcher=FakeFetcher()).name == "dushu"


class TestSearch:
    """Tests for resolving an ISBN to a detail page URL."""

    def test_returns_absolute_url_of_first_result(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE})
        provider = DushuProvider(fetcher=fetcher)
        assert provider.search("9787544258609") == DETAIL_URL

    def test_search_url_contains_isbn(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE})
        DushuProvider(fetcher=fetcher).search("9787544258609")
        assert fetcher.request_log == ["https://www.dushu.com/search.aspx?wd=9787544258609"]

    def test_isbn_is_url_quoted(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE})
        DushuProvider(fetcher=fetcher).search("978 7544&x")
        assert fetcher.request_log[0].endswith("wd=978%207544%26x")

    def test_no_results_raises_not_found(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE_EMPTY})
        provider = DushuProvider(fetcher=fetcher)
        with pytest.raises(NotFoundError, match="no book for isbn 9787544258609"):
            provider.search("9787544258609")

    def test_result_without_href_raises_url_error(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE_NO_HREF})
        with pytest.raises(URLError):
            DushuProvider(fetcher=fetcher).search("9787544258609")

    def test_only_direct_result_links_match(self) -> None:
        """Links nested deeper inside a result block are not search results."""
        page = (
            '<div class="book-info"><div class="promo"><h3><a href="/promo/1/">广告</a></h3>'
            "</div></div>"
            '<div class="book-info"><h3><span><a href="/book/2/">嵌套</a></span></h3></div>'
            '<div class="book-info"><h3><a href="/book/13730379/">白夜行</a></h3></div>'
        )
        fetcher = FakeFetcher({"search.aspx": page})
        assert DushuProvider(fetcher=fetcher).search("9787544258609") == DETAIL_URL

    def test_nested_link_only_is_not_found(self) -> None:
        page = '<div class="book-info"><p><h3><a href="/book/1/">x</a></h3></p></div>'
        fetcher = FakeFetcher({"search.aspx": page})
        with pytest.raises(NotFoundError):
            DushuProvider(fetcher=fetcher).search("9787544258609")

    def test_non_http_link_raises_url_error(self) -> None:
        page = '<div class="book-info"><h3><a href="javascript:void(0)">x</a></h3></div>'
        fetcher = FakeFetcher({"search.aspx": page})
        with pytest.raises(URLError):
            DushuProvider(fetcher=fetcher).search("9787544258609")

    def test_absolute_link_is_kept(self) -> None:
        page = '<div class="book-info"><h3><a href="https://m.dushu.com/book/7/">x</a></h3></div>'
        fetcher = FakeFetcher({"search.aspx": page})
        assert DushuProvider(fetcher=fetcher).search("1") == "https://m.dushu.com/book/7/"

    def test_custom_root_url(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE})
        provider = DushuProvider(fetcher=fetcher, root_url="https://mirror.example/")
        assert provider.search("1") == "https://mirror.example/book/13730379/"

    def test_fetch_error_propagates(self) -> None:
        fetcher = FakeFetcher({"search.aspx": FetchError("connection refused")})
        with pytest.raises(FetchError, match="connection refused"):
            DushuProvider(fetcher=fetcher).search("9787544258609")


class TestGetBookInfo:
    """Tests for extracting a detail page."""

    def test_extracts_record(self) -> None:
        fetcher = FakeFetcher({"/book/": DETAIL_PAGE})
        info = DushuProvider(fetcher=fetcher).get_book_info(DETAIL_URL)
        assert info.title == "白夜行 & 幻夜"
        assert info.isbn == "9787544258609"
        assert info.price == 3980
        assert fetcher.request_log == [DETAIL_URL]

    def test_malformed_price_raises(self) -> None:
        fetcher = FakeFetcher({"/book/": DETAIL_PAGE.replace("¥39.80", "¥三十九")})
        with pytest.raises(ParseError, match="price"):
            DushuProvider(fetcher=fetcher).get_book_info(DETAIL_URL)


class TestCrawl:
    """Tests for the search-then-extract pipeline."""

    def test_crawl_fetches_search_then_detail(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE, "/book/13730379/": DETAIL_PAGE})
        info = DushuProvider(fetcher=fetcher).crawl("9787544258609")
        assert info.author == "东野圭吾 著，刘姿君 译"
        assert fetcher.request_log == [
            "https://www.dushu.com/search.aspx?wd=9787544258609",
            DETAIL_URL,
        ]

    def test_not_found_never_fetches_detail(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE_EMPTY, "/book/": DETAIL_PAGE})
        with pytest.raises(NotFoundError):
            DushuProvider(fetcher=fetcher).crawl("9787544258609")
        assert len(fetcher.request_log) == 1

    def test_detail_fetch_error_propagates(self) -> None:
        fetcher = FakeFetcher({"search.aspx": SEARCH_PAGE, "/book/": FetchError("HTTP 500")})
        with pytest.raises(FetchError, match="500"):
            DushuProvider(fetcher=fetcher).crawl("9787544258609")
