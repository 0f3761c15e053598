"""News module application dependencies."""

from typing import NoReturn

from src.modules.news.application.news_service import NewsAggregator


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_news_aggregator() -> NewsAggregator:
    _missing_dependency("NewsAggregator")
