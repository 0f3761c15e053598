"""抓取器基类定义。

提供统一的抓取接口，新闻源抓取器都继承此基类。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FetchStatus(str, Enum):
    """抓取状态枚举。"""

    SUCCESS = "success"
    FAILED = "failed"
    EMPTY = "empty"  # 成功但无数据


class FetchedItem(BaseModel):
    """抓取到的条目数据模型。"""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default="", description="原文URL，可能为空")
    title: str = Field(default="", description="标题")
    snippet: str | None = Field(default=None, description="去除 HTML 的摘要片段")
    description: str | None = Field(default=None, description="原始摘要")
    published_at: datetime | None = Field(default=None, description="发布时间（UTC）")


@dataclass
class FetchResult:
    """抓取结果封装。"""

    status: FetchStatus
    items: list[FetchedItem] = field(default_factory=list)
    error_message: str | None = None
    duration_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status in (FetchStatus.SUCCESS, FetchStatus.EMPTY)

    @property
    def items_count(self) -> int:
        return len(self.items)

    @classmethod
    def success(
        cls,
        items: list[FetchedItem],
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult":
        """创建成功结果。"""
        status = FetchStatus.EMPTY if not items else FetchStatus.SUCCESS
        return cls(
            status=status,
            items=items,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def failed(
        cls,
        error_message: str,
        duration_ms: int = 0,
        metadata: dict[str, Any] | None = None,
    ) -> "FetchResult":
        """创建失败结果。"""
        return cls(
            status=FetchStatus.FAILED,
            items=[],
            error_message=error_message,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )


class BaseFetcher(ABC):
    """抓取器基类。

    fetch 永不抛出异常，失败时返回 FetchResult.failed。
    """

    def __init__(self, config: dict[str, Any], max_items: int = 10):
        """初始化抓取器。

        Args:
            config: 源配置
            max_items: 单次抓取最大条目数（按源自身顺序截取）
        """
        self.config = config
        self.max_items = max_items

    @abstractmethod
    async def fetch(self) -> FetchResult:
        """执行抓取操作。"""

    @abstractmethod
    def validate_config(self) -> tuple[bool, str | None]:
        """验证配置是否有效。

        Returns:
            (是否有效, 错误信息)
        """

    def _clean_title(self, title: str | None) -> str:
        """清理标题文本。"""
        if not title:
            return ""
        return " ".join(title.split())
