"""抓取器工厂。

根据新闻源配置创建抓取器实例。
"""

from src.core.config import settings
from src.modules.news.infrastructure.fetchers.base import BaseFetcher
from src.modules.news.infrastructure.fetchers.rss import RSSFetcher
from src.modules.settings.domain.entities import NewsSource


class FetcherFactory:
    """抓取器工厂类。"""

    @staticmethod
    def create(source: NewsSource, max_items: int | None = None) -> BaseFetcher:
        """根据新闻源创建抓取器。

        目前所有新闻源都是 RSS/Atom。
        """
        if max_items is None:
            max_items = settings.NEWS_ITEMS_PER_SOURCE
        return RSSFetcher(config={"feed_url": source.url}, max_items=max_items)
