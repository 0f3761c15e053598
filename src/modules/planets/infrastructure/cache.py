"""Per-body position cache."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.modules.planets.domain.entities import PlanetPosition


@dataclass
class _CacheEntry:
    position: PlanetPosition
    stored_at: float


class PositionCache:
    """按天体名称缓存位置，过期条目在下次查询时惰性淘汰。

    条目在 now - stored_at >= ttl_sec 时视为不存在。
    """

    def __init__(
        self,
        ttl_sec: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def normalize_key(body_name: str) -> str:
        return body_name.strip().lower()

    def get(self, body_name: str) -> PlanetPosition | None:
        key = self.normalize_key(body_name)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self.ttl_sec:
                del self._entries[key]
                return None
            return entry.position

    def put(self, body_name: str, position: PlanetPosition) -> None:
        key = self.normalize_key(body_name)
        with self._lock:
            self._entries[key] = _CacheEntry(position=position, stored_at=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
