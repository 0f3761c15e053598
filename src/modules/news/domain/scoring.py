"""Keyword relevance scoring.

纯函数，不依赖任何 I/O。关键词按"是否出现"计数，不按出现次数。
"""

from collections.abc import Iterable

from src.modules.settings.domain.entities import NewsFiltering

TITLE_WEIGHT = 15
DESCRIPTION_WEIGHT = 5
DESCRIPTION_CAP = 50
MAX_SCORE = 100


def _count_hits(text: str, keywords: Iterable[str]) -> int:
    text = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in text)


def calculate_relevance(title: str, description: str, keywords: Iterable[str]) -> int:
    """计算 0-100 的相关度分数。

    标题命中每个关键词 +15；描述命中每个 +5，描述部分最多 50。
    """
    keywords = list(keywords)
    title_hits = _count_hits(title, keywords)
    description_hits = _count_hits(description, keywords)
    score = title_hits * TITLE_WEIGHT + min(
        description_hits * DESCRIPTION_WEIGHT, DESCRIPTION_CAP
    )
    return min(score, MAX_SCORE)


def is_astronomy_content(title: str, description: str, filtering: NewsFiltering) -> bool:
    """至少命中一个包含关键词，且不命中任何排除关键词。"""
    if not filtering.enabled:
        return True

    text = f"{title} {description}".lower()
    has_keyword = any(keyword.lower() in text for keyword in filtering.keywords)
    has_excluded = any(
        keyword.lower() in text for keyword in filtering.exclude_keywords
    )
    return has_keyword and not has_excluded
