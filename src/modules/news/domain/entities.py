"""News domain entities."""

from datetime import datetime

from pydantic import Field

from src.core.domain.base_entity import DomainModel


class NewsArticle(DomainModel):
    """聚合后的新闻条目。

    每次聚合重新计算，不做持久化；同一结果集中 link 唯一。
    """

    id: str = Field(..., description="由 link 派生的稳定 ID")
    title: str
    link: str
    source: str = Field(..., description="来源名称")
    source_id: str
    pub_date: datetime
    description: str = ""
    category: str
    relevance_score: int = Field(..., ge=0, le=100)
