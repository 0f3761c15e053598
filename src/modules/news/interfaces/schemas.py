"""News API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.modules.news.domain.entities import NewsArticle
from src.modules.settings.domain.entities import NewsSource


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int
    pages: int


class NewsFilters(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    min_score: int
    source: str = Field(default="all", description="sourceId，未指定时为 all")


class NewsListResponse(BaseModel):
    """新闻列表（已过滤、排序、分页）。"""

    articles: list[NewsArticle]
    pagination: Pagination
    filters: NewsFilters
    timestamp: datetime
    source: str


class NewsSourcesResponse(BaseModel):
    sources: list[NewsSource]
    count: int
    timestamp: datetime


class NewsArticleResponse(BaseModel):
    article: NewsArticle
    timestamp: datetime
