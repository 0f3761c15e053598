"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    # 本地开发使用人类可读格式，其他环境输出 JSON
    if settings.is_development:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if not settings.is_development:
        logger.add(
            "logs/esther_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.news_aggregated(sources=4, articles=12, duration_ms=830)
        BusinessEvents.ephemeris_fallback_used(body="mars", reason="Timeout")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def ephemeris_fetched(
        cls,
        body: str,
        duration_ms: int,
        **extra: Any,
    ) -> None:
        """记录星历抓取成功事件。"""
        cls._log.info(
            "ephemeris_fetched",
            event_type="ephemeris",
            body=body,
            duration_ms=duration_ms,
            **extra,
        )

    @classmethod
    def ephemeris_fallback_used(
        cls,
        body: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录星历降级为内置数据事件。"""
        cls._log.warning(
            "ephemeris_fallback_used",
            event_type="ephemeris_fallback",
            body=body,
            reason=reason,
            **extra,
        )

    @classmethod
    def gateway_call_timed_out(
        cls,
        label: str,
        timeout_sec: float,
        **extra: Any,
    ) -> None:
        """记录外部调用超时事件。"""
        cls._log.warning(
            "gateway_call_timed_out",
            event_type="gateway",
            label=label,
            timeout_sec=timeout_sec,
            **extra,
        )

    @classmethod
    def news_aggregated(
        cls,
        sources: int,
        articles: int,
        duration_ms: int,
        **extra: Any,
    ) -> None:
        """记录新闻聚合完成事件。"""
        cls._log.info(
            "news_aggregated",
            event_type="news",
            sources=sources,
            articles=articles,
            duration_ms=duration_ms,
            **extra,
        )

    @classmethod
    def source_fetch_failed(
        cls,
        source_id: str,
        error: str,
        **extra: Any,
    ) -> None:
        """记录源抓取失败事件。"""
        cls._log.warning(
            "source_fetch_failed",
            event_type="news_error",
            source_id=source_id,
            error=error,
            **extra,
        )

    @classmethod
    def article_filtered(
        cls,
        source_id: str,
        title: str,
        **extra: Any,
    ) -> None:
        """记录被关键词过滤掉的条目。"""
        cls._log.debug(
            "article_filtered",
            event_type="news_filter",
            source_id=source_id,
            title=title,
            **extra,
        )

    @classmethod
    def settings_updated(
        cls,
        changes: list[str],
        version: int,
        **extra: Any,
    ) -> None:
        """记录配置更新事件。"""
        cls._log.info(
            "settings_updated",
            event_type="settings",
            changes=changes,
            version=version,
            **extra,
        )

    @classmethod
    def settings_reset(cls, version: int, **extra: Any) -> None:
        """记录配置重置事件。"""
        cls._log.info(
            "settings_reset",
            event_type="settings",
            version=version,
            **extra,
        )

    @classmethod
    def feature_degraded(
        cls,
        feature: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录功能降级事件。"""
        cls._log.warning(
            "feature_degraded",
            event_type="degradation",
            feature=feature,
            reason=reason,
            **extra,
        )
