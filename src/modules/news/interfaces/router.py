"""News API routes."""

import math
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query
from loguru import logger

from src.core.domain.validation import validate_number_in_range
from src.core.interfaces.http.timeouts import bounded
from src.modules.news.application.dependencies import get_news_aggregator
from src.modules.news.application.news_service import NewsAggregator
from src.modules.news.domain.exceptions import ArticleNotFoundError
from src.modules.news.interfaces.schemas import (
    NewsArticleResponse,
    NewsFilters,
    NewsListResponse,
    NewsSourcesResponse,
    Pagination,
)

router = APIRouter(prefix="/news", tags=["news"])

DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0
DEFAULT_MIN_SCORE = 30


def _int_param(raw: str | None, min_value: int, max_value: int, default: int) -> int:
    """查询参数永不报错：非法或越界时使用默认值。"""
    if raw is None:
        return default
    value = validate_number_in_range(raw, min_value, max_value)
    return default if value is None else value


@router.get(
    "",
    response_model=NewsListResponse,
    summary="获取过滤后的天文新闻",
)
async def list_news(
    limit: str | None = Query(None, description="1-100，默认 50"),
    offset: str | None = Query(None, description="0-10000，默认 0"),
    min_score: str | None = Query(None, alias="minScore", description="0-100，默认 30"),
    source: str | None = Query(None, description="按 sourceId 过滤"),
    aggregator: NewsAggregator = Depends(get_news_aggregator),
) -> NewsListResponse:
    page_limit = _int_param(limit, 1, 100, DEFAULT_LIMIT)
    page_offset = _int_param(offset, 0, 10_000, DEFAULT_OFFSET)
    threshold = _int_param(min_score, 0, 100, DEFAULT_MIN_SCORE)

    logger.info(
        f"Fetching filtered astronomy news: limit={page_limit}, offset={page_offset}, "
        f"minScore={threshold}, source={source}"
    )
    articles = await bounded(aggregator.fetch_filtered_news(), "News aggregation")

    relevant = [
        article
        for article in articles
        if (not source or article.source_id == source)
        and article.relevance_score >= threshold
    ]

    return NewsListResponse(
        articles=relevant[page_offset : page_offset + page_limit],
        pagination=Pagination(
            limit=page_limit,
            offset=page_offset,
            total=len(relevant),
            pages=math.ceil(len(relevant) / page_limit),
        ),
        filters=NewsFilters(min_score=threshold, source=source or "all"),
        timestamp=datetime.now(UTC),
        source="NASA, ESA, Space.com, ArXiv Astronomy",
    )


@router.get(
    "/sources",
    response_model=NewsSourcesResponse,
    summary="获取新闻源列表",
)
async def list_news_sources(
    aggregator: NewsAggregator = Depends(get_news_aggregator),
) -> NewsSourcesResponse:
    sources = aggregator.get_news_sources()
    return NewsSourcesResponse(
        sources=sources,
        count=len(sources),
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/{article_id}",
    response_model=NewsArticleResponse,
    summary="按 ID 获取文章",
    responses={404: {"description": "文章不存在"}},
)
async def get_article(
    article_id: str,
    aggregator: NewsAggregator = Depends(get_news_aggregator),
) -> NewsArticleResponse:
    logger.info(f"Fetching article details: {article_id}")
    article = await bounded(
        aggregator.get_article_by_id(article_id), f"Article lookup {article_id}"
    )
    if article is None:
        logger.warning(f"Article not found: {article_id}")
        raise ArticleNotFoundError(article_id)
    return NewsArticleResponse(article=article, timestamp=datetime.now(UTC))
