"""External call gateway port."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

T = TypeVar("T")


class CallGateway(Protocol):
    """Port for submitting rate-limited calls to external services."""

    async def enqueue(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str = "API Call",
    ) -> T: ...
