"""News module dependencies."""

from src.core.config import settings
from src.modules.news.application.news_service import NewsAggregator
from src.modules.news.infrastructure.fetchers import FetcherFactory
from src.modules.settings.application.dependencies import settings_store

# 单例：按 settings 版本缓存的结果集需要跨请求保留
news_aggregator = NewsAggregator(
    settings_store=settings_store,
    fetcher_factory=FetcherFactory.create,
    items_per_source=settings.NEWS_ITEMS_PER_SOURCE,
    max_concurrent_fetches=settings.NEWS_FETCH_CONCURRENCY,
    result_ttl_sec=settings.NEWS_RESULT_TTL_SEC,
)


def get_news_aggregator() -> NewsAggregator:
    return news_aggregator
