"""Astronomy news aggregation.

从所有启用的新闻源并发抓取，去重、关键词过滤、打分并排序。
单个源失败只记录日志，不影响其他源。
"""

import asyncio
import hashlib
import time
from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.news.domain.entities import NewsArticle
from src.modules.news.domain.scoring import calculate_relevance, is_astronomy_content
from src.modules.news.infrastructure.fetchers import BaseFetcher, FetchedItem
from src.modules.settings.application.services import SettingsStore
from src.modules.settings.domain.entities import AppSettings, NewsSource

FetcherFactoryFn = Callable[[NewsSource, int], BaseFetcher]


def make_article_id(link: str) -> str:
    """同一 link 在任意进程、任意次调用中得到同一 ID。"""
    digest = hashlib.blake2b(link.encode("utf-8"), digest_size=8).hexdigest()
    return f"article_{digest}"


class NewsAggregator:
    """News Aggregator.

    Behaviour is parameterized entirely by the shared ``SettingsStore``;
    ``get_article_by_id`` reuses the last result set while the settings
    version is unchanged and the result is younger than ``result_ttl_sec``.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        fetcher_factory: FetcherFactoryFn,
        items_per_source: int = 10,
        max_concurrent_fetches: int = 4,
        result_ttl_sec: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings_store = settings_store
        self.fetcher_factory = fetcher_factory
        self.items_per_source = items_per_source
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)
        self.result_ttl_sec = result_ttl_sec
        self._clock = clock
        # (settings version, 生成时刻, 结果)
        self._last_result: tuple[int, float, list[NewsArticle]] | None = None

    async def fetch_filtered_news(self) -> list[NewsArticle]:
        """Fetch, filter, score and rank articles from all enabled sources."""
        start_time = time.time()
        version = self.settings_store.version
        current = self.settings_store.get()

        sources = [s for s in current.news_filtering.sources if s.enabled]
        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)

        async def fetch_source(source: NewsSource) -> list[FetchedItem]:
            async with semaphore:
                return await self._fetch_source(source)

        fetched = await asyncio.gather(*(fetch_source(s) for s in sources))
        articles = self._build_articles(current, sources, fetched)

        self._last_result = (version, self._clock(), articles)
        BusinessEvents.news_aggregated(
            sources=len(sources),
            articles=len(articles),
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return list(articles)

    async def _fetch_source(self, source: NewsSource) -> list[FetchedItem]:
        logger.info(f"Fetching from {source.name}...")
        try:
            fetcher = self.fetcher_factory(source, self.items_per_source)
            result = await fetcher.fetch()
        except Exception as e:
            logger.exception(f"Fetcher for {source.name} raised: {e}")
            BusinessEvents.source_fetch_failed(source_id=source.id, error=str(e))
            return []

        if not result.is_success:
            logger.warning(f"Failed to fetch from {source.name}: {result.error_message}")
            BusinessEvents.source_fetch_failed(
                source_id=source.id,
                error=result.error_message or "Unknown error",
            )
            return []
        return result.items[: self.items_per_source]

    def _build_articles(
        self,
        current: AppSettings,
        sources: list[NewsSource],
        fetched: list[list[FetchedItem]],
    ) -> list[NewsArticle]:
        filtering = current.news_filtering
        fetched_at = datetime.now(UTC)
        seen_links: set[str] = set()
        articles: list[NewsArticle] = []

        # 按源列表顺序处理，跨源去重时先出现的源优先
        for source, items in zip(sources, fetched, strict=True):
            for item in items:
                if not item.url or item.url in seen_links:
                    continue

                title = item.title
                description = item.snippet or item.description or ""
                if not is_astronomy_content(title, description, filtering):
                    BusinessEvents.article_filtered(source_id=source.id, title=title)
                    continue

                seen_links.add(item.url)
                articles.append(
                    NewsArticle(
                        id=make_article_id(item.url),
                        title=title,
                        link=item.url,
                        source=source.name,
                        source_id=source.id,
                        pub_date=item.published_at or fetched_at,
                        description=description,
                        category=source.category,
                        relevance_score=calculate_relevance(
                            title, description, filtering.keywords
                        ),
                    )
                )

        # 相关度降序，同分按发布时间降序
        articles.sort(key=lambda a: (a.relevance_score, a.pub_date), reverse=True)
        return articles

    def get_news_sources(self) -> list[NewsSource]:
        """全部配置的新闻源（含已禁用）。"""
        return self.settings_store.get().news_filtering.sources

    async def get_article_by_id(self, article_id: str) -> NewsArticle | None:
        articles = self._fresh_result()
        if articles is None:
            articles = await self.fetch_filtered_news()
        return next((a for a in articles if a.id == article_id), None)

    def _fresh_result(self) -> list[NewsArticle] | None:
        if self._last_result is None or self.result_ttl_sec <= 0:
            return None
        version, produced_at, articles = self._last_result
        if version != self.settings_store.version:
            return None
        if self._clock() - produced_at >= self.result_ttl_sec:
            return None
        return articles

    def update_settings(self, partial: dict) -> AppSettings:
        """校验并合并配置，只影响之后的聚合。"""
        return self.settings_store.update(partial)
