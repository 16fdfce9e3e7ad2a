# ABOUTME: Metadata package for live book lookups against the dushu.com catalog.
# ABOUTME: Exports the BookInfo record and the provider used on store misses.

from bookinfo.metadata.dushu import DushuProvider
from bookinfo.metadata.http import DushuHttpClient, HttpFetcher
from bookinfo.metadata.provider import BookInfoProvider
from bookinfo.metadata.types import BookInfo

__all__ = [
    "BookInfo",
    "BookInfoProvider",
    "DushuHttpClient",
    "DushuProvider",
    "HttpFetcher",
]
