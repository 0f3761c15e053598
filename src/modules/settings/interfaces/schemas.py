"""Settings API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.modules.settings.domain.entities import AppSettings, SettingRange


class SettingsResponse(BaseModel):
    """当前配置及取值范围。"""

    settings: AppSettings
    ranges: dict[str, SettingRange]
    timestamp: datetime


class SettingsChangedResponse(BaseModel):
    """配置更新/重置结果。"""

    settings: AppSettings
    message: str = Field(..., description="操作说明")
    timestamp: datetime


class SettingRangesResponse(BaseModel):
    ranges: dict[str, SettingRange]
    timestamp: datetime
