"""Request-level time bounds for handlers that fan out to upstream services."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from src.core.config import settings
from src.core.domain.exceptions import GatewayTimeoutError

T = TypeVar("T")


async def bounded(awaitable: Awaitable[T], label: str) -> T:
    """在 REQUEST_TIMEOUT_SEC 内等待结果，超时映射为 504。"""
    try:
        return await asyncio.wait_for(awaitable, timeout=settings.REQUEST_TIMEOUT_SEC)
    except TimeoutError as e:
        raise GatewayTimeoutError(label, settings.REQUEST_TIMEOUT_SEC) from e
