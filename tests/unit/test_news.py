"""天文新闻聚合单元测试。

测试覆盖：
- 相关度打分（上下界、单调性、按出现与否计数）
- 天文内容判定（包含/排除关键词）
- RSS 条目解析与配置校验
- 聚合流程（去重、过滤、排序、部分失败、结果复用）
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import feedparser
import httpx
import pytest

from src.modules.news.application.news_service import NewsAggregator, make_article_id
from src.modules.news.domain.scoring import calculate_relevance, is_astronomy_content
from src.modules.news.infrastructure.fetchers import FetcherFactory, RSSFetcher
from src.modules.news.infrastructure.fetchers.base import FetchResult, FetchStatus
from src.modules.settings.domain.entities import (
    DEFAULT_KEYWORDS,
    NewsFiltering,
    NewsSource,
)
from tests.fakes import FakeClock, FeedBook, make_item, two_source_store

pytestmark = pytest.mark.anyio

T0 = datetime(2025, 1, 6, 9, 0, tzinfo=UTC)


# ============================================
# 相关度打分
# ============================================


class TestRelevanceScore:
    """calculate_relevance 测试。"""

    def test_title_and_description_weights(self):
        """标题每个命中 +15，描述每个命中 +5。"""
        score = calculate_relevance(
            "New comet discovery", "astronomy", DEFAULT_KEYWORDS
        )
        # 标题: comet, discovery；描述: astronomy
        assert score == 2 * 15 + 1 * 5

    def test_presence_not_frequency(self):
        """同一关键词重复出现只计一次。"""
        once = calculate_relevance("comet", "", ["comet"])
        many = calculate_relevance("comet comet COMET", "", ["comet"])
        assert once == many == 15

    def test_description_contribution_capped(self):
        """描述部分最多 50 分。"""
        keywords = [f"kw{i}" for i in range(20)]
        description = " ".join(keywords)
        assert calculate_relevance("", description, keywords) == 50

    def test_total_capped_at_100(self):
        keywords = [f"kw{i}" for i in range(20)]
        text = " ".join(keywords)
        assert calculate_relevance(text, text, keywords) == 100

    def test_case_insensitive(self):
        assert calculate_relevance("NASA Mission", "", ["nasa", "MISSION"]) == 30

    @pytest.mark.parametrize(
        ("title", "description"),
        [
            ("", ""),
            ("planet planet", "moon"),
            ("Solar System exoplanet NASA ESA JPL", "astronomy " * 30),
            ("unrelated", "nothing relevant here"),
        ],
    )
    def test_score_bounds(self, title, description):
        score = calculate_relevance(title, description, DEFAULT_KEYWORDS)
        assert 0 <= score <= 100

    def test_adding_title_keyword_never_decreases_score(self):
        title = "Mission update"
        base = calculate_relevance(title, "", DEFAULT_KEYWORDS)
        extended = calculate_relevance(title + " from NASA", "", DEFAULT_KEYWORDS)
        assert extended >= base
        assert extended == base + 15


class TestAstronomyContent:
    """is_astronomy_content 测试。"""

    def _filtering(self, **overrides) -> NewsFiltering:
        data = {
            "enabled": True,
            "keywords": ["comet", "planet"],
            "exclude_keywords": ["stock"],
        }
        data.update(overrides)
        return NewsFiltering(**data)

    def test_requires_include_keyword(self):
        filtering = self._filtering()
        assert is_astronomy_content("A comet appears", "", filtering) is True
        assert is_astronomy_content("Weather report", "rain", filtering) is False

    def test_exclude_keyword_wins(self):
        filtering = self._filtering()
        assert is_astronomy_content("Comet", "stock prices", filtering) is False

    def test_keyword_may_appear_in_description(self):
        filtering = self._filtering()
        assert is_astronomy_content("Tonight", "a PLANET rises", filtering) is True

    def test_disabled_accepts_everything(self):
        filtering = self._filtering(enabled=False)
        assert is_astronomy_content("Stock market rally", "finance", filtering) is True


# ============================================
# RSS 抓取器
# ============================================

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Space News</title>
    <item>
      <title>  Comet   spotted </title>
      <link>https://example.com/comet</link>
      <description>&lt;p&gt;A &lt;b&gt;bright&lt;/b&gt; comet &amp;amp; friends&lt;/p&gt;</description>
      <pubDate>Mon, 06 Jan 2025 10:00:00 +0100</pubDate>
    </item>
    <item>
      <title>No link item</title>
      <description>orphan</description>
    </item>
  </channel>
</rss>
"""


class TestRSSFetcher:
    """RSSFetcher 测试。"""

    def test_parse_entries(self):
        fetcher = RSSFetcher(config={"feed_url": "https://example.com/rss"})

        items = fetcher.parse_entries(feedparser.parse(RSS_FEED).entries)

        assert len(items) == 2
        first = items[0]
        assert first.url == "https://example.com/comet"
        assert first.title == "Comet spotted"
        assert first.snippet == "A bright comet & friends"
        assert first.published_at == datetime(2025, 1, 6, 9, 0, tzinfo=UTC)
        # 缺少 link 的条目保留，由聚合器丢弃
        assert items[1].url == ""

    @pytest.mark.parametrize(
        "feed_url",
        [
            None,
            "ftp://example.com/feed",
            "http://localhost/feed",
            "http://127.0.0.1/feed",
            "http://10.0.0.5/feed",
            "http://192.168.1.10/rss",
            "http://169.254.169.254/latest/meta-data",
        ],
    )
    async def test_rejects_unsafe_urls(self, feed_url):
        fetcher = RSSFetcher(config={"feed_url": feed_url})

        valid, _ = fetcher.validate_config()
        result = await fetcher.fetch()

        assert valid is False
        assert result.status == FetchStatus.FAILED

    async def test_http_error_returns_failed_result(self):
        fetcher = RSSFetcher(config={"feed_url": "https://example.com/rss"})
        request = httpx.Request("GET", "https://example.com/rss")
        response = httpx.Response(503, request=request)

        with patch(
            "httpx.AsyncClient.get", new=AsyncMock(return_value=response)
        ):
            result = await fetcher.fetch()

        assert result.is_success is False
        assert result.error_message == "HTTP 503"

    async def test_timeout_returns_failed_result(self):
        fetcher = RSSFetcher(config={"feed_url": "https://example.com/rss"})

        with patch(
            "httpx.AsyncClient.get",
            new=AsyncMock(side_effect=httpx.ReadTimeout("slow")),
        ):
            result = await fetcher.fetch()

        assert result.status == FetchStatus.FAILED
        assert result.error_message.startswith("Timeout")

    async def test_fetch_truncates_to_max_items(self):
        fetcher = RSSFetcher(config={"feed_url": "https://example.com/rss"}, max_items=1)
        request = httpx.Request("GET", "https://example.com/rss")
        response = httpx.Response(200, content=RSS_FEED.encode(), request=request)

        with patch(
            "httpx.AsyncClient.get", new=AsyncMock(return_value=response)
        ):
            result = await fetcher.fetch()

        assert result.status == FetchStatus.SUCCESS
        assert result.items_count == 1
        assert result.metadata["total_found"] == 2

    def test_factory_builds_rss_fetcher(self):
        source = NewsSource(
            id="nasa-news",
            name="NASA News",
            url="https://www.nasa.gov/news-and-events/feed/",
            category="astronomy",
        )

        fetcher = FetcherFactory.create(source, max_items=5)

        assert isinstance(fetcher, RSSFetcher)
        assert fetcher.max_items == 5
        assert fetcher.config == {"feed_url": source.url}


# ============================================
# 聚合流程
# ============================================


def _aggregator(store, feeds, **kwargs) -> NewsAggregator:
    return NewsAggregator(
        settings_store=store,
        fetcher_factory=FeedBook(feeds),
        **kwargs,
    )


class TestNewsAggregator:
    """NewsAggregator 测试。"""

    async def test_concrete_scenario_filters_finance(self):
        """A（彗星发现）保留且分数 >= 15，B（股市）被排除。"""
        store = two_source_store(
            keywords=list(DEFAULT_KEYWORDS),
            excludeKeywords=["finance", "stock", "crypto", "politics"],
        )
        aggregator = _aggregator(
            store,
            {
                "alpha": [make_item("A", "New comet discovery", "astronomy", T0)],
                "beta": [make_item("B", "Stock market rally", "finance stock", T0)],
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert [a.link for a in articles] == ["A"]
        assert articles[0].relevance_score >= 15
        assert articles[0].source == "Alpha News"
        assert articles[0].source_id == "alpha"
        assert articles[0].category == "astronomy"

    async def test_dedup_across_and_within_sources(self):
        """重复 link 只保留一篇，先出现的源优先。"""
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": [
                    make_item("https://x/1", "Planet news", published_at=T0),
                    make_item("https://x/1", "Planet news again", published_at=T0),
                ],
                "beta": [make_item("https://x/1", "Planet copy", published_at=T0)],
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert len(articles) == 1
        assert articles[0].source_id == "alpha"
        assert articles[0].title == "Planet news"

    async def test_filtered_link_can_reappear_in_later_source(self):
        """被过滤掉的条目不占用 link。"""
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": [make_item("https://x/1", "Weather today", published_at=T0)],
                "beta": [make_item("https://x/1", "Comet today", published_at=T0)],
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert [a.source_id for a in articles] == ["beta"]

    async def test_items_without_link_skipped(self):
        store = two_source_store()
        aggregator = _aggregator(
            store, {"alpha": [make_item("", "Comet without link", published_at=T0)]}
        )

        assert await aggregator.fetch_filtered_news() == []

    async def test_filtering_excludes_non_matching_and_excluded(self):
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": [
                    make_item("https://x/1", "Cooking tips", "recipes", T0),
                    make_item("https://x/2", "Planet crypto scheme", "", T0),
                    make_item("https://x/3", "Moon landing", "", T0),
                ]
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert [a.link for a in articles] == ["https://x/3"]

    async def test_sorted_by_score_then_date(self):
        """相关度降序，同分时较新的在前。"""
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": [
                    make_item("https://x/old", "Comet", published_at=T0),
                    make_item("https://x/best", "Comet planet moon", published_at=T0),
                ],
                "beta": [
                    make_item(
                        "https://x/new", "Comet", published_at=T0 + timedelta(hours=1)
                    ),
                ],
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert [a.link for a in articles] == [
            "https://x/best",
            "https://x/new",
            "https://x/old",
        ]
        scores = [a.relevance_score for a in articles]
        assert scores == sorted(scores, reverse=True)

    async def test_description_prefers_snippet(self):
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": [
                    make_item(
                        "https://x/1",
                        "Comet",
                        snippet="clean text",
                        description="<p>raw</p>",
                        published_at=T0,
                    ),
                    make_item(
                        "https://x/2", "Planet", description="raw only", published_at=T0
                    ),
                    make_item("https://x/3", "Moon", published_at=T0),
                ]
            },
        )

        articles = {a.link: a for a in await aggregator.fetch_filtered_news()}

        assert articles["https://x/1"].description == "clean text"
        assert articles["https://x/2"].description == "raw only"
        assert articles["https://x/3"].description == ""

    async def test_missing_pub_date_uses_fetch_time(self):
        store = two_source_store()
        aggregator = _aggregator(store, {"alpha": [make_item("https://x/1", "Comet")]})

        before = datetime.now(UTC)
        articles = await aggregator.fetch_filtered_news()

        assert articles[0].pub_date >= before

    async def test_takes_first_items_per_source(self):
        store = two_source_store()
        items = [
            make_item(f"https://x/{i}", f"Comet {i}", published_at=T0) for i in range(15)
        ]
        aggregator = _aggregator(store, {"alpha": items}, items_per_source=10)

        articles = await aggregator.fetch_filtered_news()

        assert len(articles) == 10
        assert {a.link for a in articles} == {f"https://x/{i}" for i in range(10)}

    async def test_partial_failure_keeps_other_sources(self):
        """一个源失败不影响其他源。"""
        store = two_source_store()
        aggregator = _aggregator(
            store,
            {
                "alpha": FetchResult.failed("HTTP 500"),
                "beta": [make_item("https://x/1", "Comet", published_at=T0)],
            },
        )

        articles = await aggregator.fetch_filtered_news()

        assert [a.source_id for a in articles] == ["beta"]

    async def test_raising_fetcher_is_isolated(self):
        store = two_source_store()
        book = FeedBook({"beta": [make_item("https://x/1", "Comet", published_at=T0)]})

        def factory(source, max_items):
            fetcher = book(source, max_items)
            if source.id == "alpha":
                fetcher.fetch = AsyncMock(side_effect=RuntimeError("parser crashed"))
            return fetcher

        aggregator = NewsAggregator(settings_store=store, fetcher_factory=factory)

        articles = await aggregator.fetch_filtered_news()

        assert [a.source_id for a in articles] == ["beta"]

    async def test_raising_fetcher_factory_is_isolated(self):
        """抓取器构造失败只影响该源。"""
        store = two_source_store()
        book = FeedBook({"beta": [make_item("https://x/1", "Comet", published_at=T0)]})

        def factory(source, max_items):
            if source.id == "alpha":
                raise ValueError("unsupported feed type")
            return book(source, max_items)

        aggregator = NewsAggregator(settings_store=store, fetcher_factory=factory)

        articles = await aggregator.fetch_filtered_news()

        assert [a.source_id for a in articles] == ["beta"]

    async def test_disabled_sources_not_fetched(self):
        store = two_source_store()
        sources = store.get().model_dump(by_alias=True)["newsFiltering"]["sources"]
        sources[1]["enabled"] = False
        store.update({"newsFiltering": {"enabled": True, "sources": sources}})
        book = FeedBook({})
        aggregator = NewsAggregator(settings_store=store, fetcher_factory=book)

        await aggregator.fetch_filtered_news()

        assert book.created == ["alpha"]

    async def test_article_id_is_stable(self):
        store = two_source_store()
        feeds = {"alpha": [make_item("https://x/1", "Comet", published_at=T0)]}

        first = await _aggregator(store, feeds).fetch_filtered_news()
        second = await _aggregator(store, feeds).fetch_filtered_news()

        assert first[0].id == second[0].id == make_article_id("https://x/1")
        assert first[0].id.startswith("article_")
        assert len(first[0].id) == len("article_") + 16

    async def test_get_news_sources_includes_disabled(self, settings_store):
        aggregator = NewsAggregator(settings_store=settings_store, fetcher_factory=FeedBook({}))
        sources = aggregator.get_news_sources()

        assert [s.id for s in sources] == [
            "nasa-news",
            "esa-news",
            "space-astronomy",
            "arxiv-astro",
        ]


class TestArticleLookup:
    """get_article_by_id 与结果复用测试。"""

    async def test_lookup_reuses_recent_result(self):
        store = two_source_store()
        book = FeedBook({"alpha": [make_item("https://x/1", "Comet", published_at=T0)]})
        clock = FakeClock()
        aggregator = NewsAggregator(
            settings_store=store, fetcher_factory=book, result_ttl_sec=60, clock=clock
        )

        articles = await aggregator.fetch_filtered_news()
        found = await aggregator.get_article_by_id(articles[0].id)

        assert found == articles[0]
        assert book.created == ["alpha", "beta"]

    async def test_lookup_reaggregates_after_ttl(self):
        store = two_source_store()
        book = FeedBook({"alpha": [make_item("https://x/1", "Comet", published_at=T0)]})
        clock = FakeClock()
        aggregator = NewsAggregator(
            settings_store=store, fetcher_factory=book, result_ttl_sec=60, clock=clock
        )

        await aggregator.fetch_filtered_news()
        clock.advance(60)
        await aggregator.get_article_by_id("article_missing")

        assert book.created == ["alpha", "beta", "alpha", "beta"]

    async def test_lookup_reaggregates_after_settings_change(self):
        store = two_source_store()
        book = FeedBook({"alpha": [make_item("https://x/1", "Comet", published_at=T0)]})
        aggregator = NewsAggregator(
            settings_store=store, fetcher_factory=book, result_ttl_sec=60
        )

        articles = await aggregator.fetch_filtered_news()
        aggregator.update_settings({"newsFiltering": {"enabled": True, "keywords": ["nebula"]}})

        assert await aggregator.get_article_by_id(articles[0].id) is None
        assert book.created == ["alpha", "beta", "alpha", "beta"]

    async def test_zero_ttl_always_reaggregates(self):
        store = two_source_store()
        book = FeedBook({"alpha": [make_item("https://x/1", "Comet", published_at=T0)]})
        aggregator = NewsAggregator(
            settings_store=store, fetcher_factory=book, result_ttl_sec=0
        )

        articles = await aggregator.fetch_filtered_news()
        found = await aggregator.get_article_by_id(articles[0].id)

        assert found is not None
        assert book.created == ["alpha", "beta", "alpha", "beta"]

    async def test_unknown_id_returns_none(self):
        store = two_source_store()
        aggregator = _aggregator(store, {})

        assert await aggregator.get_article_by_id("article_0000000000000000") is None
