"""Settings API routes."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger

from src.modules.settings.application.dependencies import get_settings_store
from src.modules.settings.application.services import SettingsStore
from src.modules.settings.interfaces.schemas import (
    SettingRangesResponse,
    SettingsChangedResponse,
    SettingsResponse,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get(
    "",
    response_model=SettingsResponse,
    summary="获取当前配置",
)
async def get_settings(
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    """Get current application settings."""
    return SettingsResponse(
        settings=store.get(),
        ranges=store.ranges,
        timestamp=datetime.now(UTC),
    )


@router.post(
    "",
    response_model=SettingsChangedResponse,
    summary="更新配置",
    description="部分更新，校验失败时整体拒绝并返回 400",
)
async def update_settings(
    payload: dict[str, Any] = Body(...),
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsChangedResponse:
    """Update application settings with validation."""
    logger.info(f"Updating settings: {list(payload.keys())}")
    updated = store.update(payload)
    return SettingsChangedResponse(
        settings=updated,
        message="Settings updated successfully",
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/ranges",
    response_model=SettingRangesResponse,
    summary="获取数值配置的取值范围",
)
async def get_setting_ranges(
    store: SettingsStore = Depends(get_settings_store),
) -> SettingRangesResponse:
    return SettingRangesResponse(ranges=store.ranges, timestamp=datetime.now(UTC))


@router.post(
    "/reset",
    response_model=SettingsChangedResponse,
    summary="重置为默认配置",
)
async def reset_settings(
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsChangedResponse:
    """Reset settings to defaults."""
    return SettingsChangedResponse(
        settings=store.reset(),
        message="Settings reset to defaults",
        timestamp=datetime.now(UTC),
    )
