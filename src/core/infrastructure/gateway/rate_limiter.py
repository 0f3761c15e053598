"""外部 API 调用网关。

所有对外部数据服务（JPL Horizons、SBDB）的调用都经由此网关：
- 并发上限：同时进行中的调用不超过 concurrency
- 滑动窗口配额：任意 interval_sec 窗口内启动的调用不超过 interval_cap
- 单次调用超时：超时抛出 GatewayTimeoutError，不自动重试
- 超出容量的调用按提交顺序（FIFO）排队等待
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import GatewayTimeoutError
from src.core.infrastructure.logging import BusinessEvents

T = TypeVar("T")


class RateLimitedGateway:
    """Bounded-concurrency, interval-quota call gateway."""

    def __init__(
        self,
        concurrency: int = 2,
        interval_sec: float = 60.0,
        interval_cap: int = 50,
        timeout_sec: float = 15.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if concurrency < 1 or interval_cap < 1:
            raise ValueError("concurrency and interval_cap must be >= 1")
        self.concurrency = concurrency
        self.interval_sec = interval_sec
        self.interval_cap = interval_cap
        self.timeout_sec = timeout_sec
        self._clock = clock

        self._waiters: deque[asyncio.Future[None]] = deque()
        self._starts: deque[float] = deque()
        self._in_flight = 0
        self._timer: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> int:
        """排队中的调用数。"""
        return sum(1 for waiter in self._waiters if not waiter.done())

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def started_in_window(self) -> int:
        self._prune()
        return len(self._starts)

    async def enqueue(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str = "API Call",
    ) -> T:
        """提交一次外部调用并等待结果。

        operation 抛出的异常原样向上传播；超时转换为 GatewayTimeoutError。
        """
        logger.debug(f"Queued: {label} (pending={self.pending})")
        await self._acquire()
        logger.debug(f"Started: {label} (in_flight={self._in_flight})")
        try:
            return await asyncio.wait_for(operation(), timeout=self.timeout_sec)
        except TimeoutError as e:
            BusinessEvents.gateway_call_timed_out(label=label, timeout_sec=self.timeout_sec)
            raise GatewayTimeoutError(label, self.timeout_sec) from e
        finally:
            self._release()
            logger.debug(f"Finished: {label}")

    async def _acquire(self) -> None:
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        self._pump()
        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # 名额已分配但调用方被取消，归还名额
                self._release()
            elif waiter in self._waiters:
                self._waiters.remove(waiter)
                self._pump()
            raise

    def _release(self) -> None:
        self._in_flight -= 1
        self._pump()

    def _start(self) -> None:
        self._in_flight += 1
        self._starts.append(self._clock())

    def _prune(self) -> None:
        cutoff = self._clock() - self.interval_sec
        while self._starts and self._starts[0] <= cutoff:
            self._starts.popleft()

    def _has_capacity(self) -> bool:
        self._prune()
        return (
            self._in_flight < self.concurrency
            and len(self._starts) < self.interval_cap
        )

    def _pump(self) -> None:
        while self._waiters:
            head = self._waiters[0]
            if head.done():
                self._waiters.popleft()
                continue
            if not self._has_capacity():
                break
            self._waiters.popleft()
            self._start()
            head.set_result(None)

        if self._waiters and self._in_flight < self.concurrency:
            self._schedule_wakeup()

    def _schedule_wakeup(self) -> None:
        """配额耗尽时，在最早一次启动滑出窗口后唤醒队列。"""
        if self._timer is not None or not self._starts:
            return
        delay = max(self._starts[0] + self.interval_sec - self._clock(), 0.0)
        self._timer = asyncio.get_running_loop().call_later(delay, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._pump()


def create_gateway() -> RateLimitedGateway:
    """按配置创建网关。"""
    return RateLimitedGateway(
        concurrency=settings.GATEWAY_CONCURRENCY,
        interval_sec=settings.GATEWAY_INTERVAL_SEC,
        interval_cap=settings.GATEWAY_INTERVAL_CAP,
        timeout_sec=settings.GATEWAY_TIMEOUT_SEC,
    )
