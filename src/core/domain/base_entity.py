"""Base model for domain objects exposed over the JSON API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Base class for domain value objects.

    字段在 Python 中使用 snake_case，序列化为 JSON 时使用 camelCase
    （rightAscension、relevanceScore 等），两种写法均可用于构造。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_dict(self) -> dict:
        """转换为字典（用于 API 响应）。"""
        return self.model_dump(mode="json", by_alias=True)
