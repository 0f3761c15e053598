"""新闻源抓取器模块。"""

from src.modules.news.infrastructure.fetchers.base import (
    BaseFetcher,
    FetchedItem,
    FetchResult,
    FetchStatus,
)
from src.modules.news.infrastructure.fetchers.factory import FetcherFactory
from src.modules.news.infrastructure.fetchers.rss import RSSFetcher

__all__ = [
    "BaseFetcher",
    "FetchedItem",
    "FetchResult",
    "FetchStatus",
    "FetcherFactory",
    "RSSFetcher",
]
