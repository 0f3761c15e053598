"""RSS 抓取器实现。

支持标准的 RSS 2.0 和 Atom 格式，解析交给 feedparser。
"""

import html
import re
import time
from datetime import UTC, datetime
from typing import Any

import feedparser
import httpx
from loguru import logger

from src.core.config import settings
from src.core.domain.validation import is_valid_url
from src.modules.news.infrastructure.fetchers.base import (
    BaseFetcher,
    FetchedItem,
    FetchResult,
)

_TAG_RE = re.compile(r"<[^>]+>")


class RSSFetcher(BaseFetcher):
    """RSS 抓取器。

    配置格式：
    {
        "feed_url": "https://example.com/feed.xml"
    }
    """

    USER_AGENT = "Mozilla/5.0 (compatible; Esther/1.0; astronomy news reader)"

    def __init__(
        self,
        config: dict[str, Any],
        max_items: int = 10,
        timeout: float | None = None,
    ):
        super().__init__(config, max_items)
        self.timeout = timeout or settings.NEWS_FETCH_TIMEOUT_SEC

    def validate_config(self) -> tuple[bool, str | None]:
        """验证配置。"""
        feed_url = self.config.get("feed_url")
        if not feed_url:
            return False, "Missing feed_url in config"
        if not is_valid_url(feed_url):
            return False, f"feed_url is not an allowed public HTTP(S) URL: {feed_url}"
        return True, None

    async def fetch(self) -> FetchResult:
        """执行抓取。"""
        start_time = time.time()

        valid, error = self.validate_config()
        if not valid:
            return FetchResult.failed(error or "Invalid config")

        feed_url = self.config["feed_url"]

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(
                    feed_url,
                    headers={
                        "User-Agent": self.USER_AGENT,
                        "Accept": "application/rss+xml, application/atom+xml, application/xml, text/xml, */*",
                    },
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.warning(f"RSS fetch timeout for {feed_url}: {e}")
            return FetchResult.failed(f"Timeout: {e}", duration_ms=duration_ms)
        except httpx.HTTPStatusError as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.warning(
                f"RSS fetch HTTP error for {feed_url}: {e.response.status_code}"
            )
            return FetchResult.failed(
                f"HTTP {e.response.status_code}", duration_ms=duration_ms
            )
        except httpx.HTTPError as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.warning(f"RSS fetch error for {feed_url}: {e}")
            return FetchResult.failed(f"Error: {e}", duration_ms=duration_ms)

        feed = feedparser.parse(response.content)
        duration_ms = int((time.time() - start_time) * 1000)

        if feed.bozo and not feed.entries:
            logger.warning(f"Malformed feed at {feed_url}: {feed.get('bozo_exception')}")
            return FetchResult.failed(
                f"Malformed feed: {feed.get('bozo_exception')}",
                duration_ms=duration_ms,
            )

        items = self.parse_entries(feed.entries)
        return FetchResult.success(
            items=items[: self.max_items],
            duration_ms=duration_ms,
            metadata={
                "feed_url": feed_url,
                "total_found": len(items),
                "content_type": response.headers.get("content-type", ""),
            },
        )

    def parse_entries(self, entries: list[Any]) -> list[FetchedItem]:
        """将 feedparser entries 转换为 FetchedItem，保持 feed 原顺序。

        缺少 link 的条目也会保留（url 为空），由上层决定是否丢弃。
        """
        items: list[FetchedItem] = []
        for entry in entries:
            url = entry.get("link", "")
            if not url:
                # Atom 格式可能有多个 link
                for link in entry.get("links", []):
                    if link.get("rel") in ("alternate", None):
                        url = link.get("href", "")
                        break

            summary = entry.get("summary") or entry.get("description") or None
            items.append(
                FetchedItem(
                    url=url,
                    title=self._clean_title(entry.get("title", "")),
                    snippet=self._strip_html(summary) if summary else None,
                    description=summary,
                    published_at=self._parse_feed_date(entry),
                )
            )
        return items

    def _parse_feed_date(self, entry: Any) -> datetime | None:
        """feedparser 已将日期规范化为 UTC struct_time。"""
        for field in ("published_parsed", "updated_parsed", "created_parsed"):
            parsed = entry.get(field)
            if parsed:
                try:
                    return datetime(*parsed[:6], tzinfo=UTC)
                except (TypeError, ValueError) as e:
                    logger.debug(f"Failed to parse {field}: {e}")
        return None

    def _strip_html(self, text: str) -> str:
        """移除 HTML 标签并还原实体。"""
        text = html.unescape(_TAG_RE.sub("", text))
        return " ".join(text.split())
