"""Settings store service.

进程内唯一的可变配置实例，由新闻聚合与星历两条管线共享读取。
更新采用"先完整校验、后整体替换"的方式，任何一项校验失败都不会留下部分修改。
"""

import threading
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from src.core.domain.validation import validate_number_in_range
from src.core.infrastructure.logging import BusinessEvents
from src.modules.settings.domain.entities import (
    SETTING_RANGES,
    AppSettings,
    SettingRange,
    default_settings,
)
from src.modules.settings.domain.exceptions import SettingsValidationError

# 顶层浅合并时按子字段合并的对象
_NESTED_SECTIONS = ("dataSourcePreferences", "ui")


class SettingsStore:
    """Validated, range-checked runtime settings.

    partial 更新使用 JSON（camelCase）键名，未知的顶层键被忽略。
    """

    def __init__(self, defaults: AppSettings | None = None):
        self._defaults = (defaults or default_settings()).model_copy(deep=True)
        self._settings = self._defaults.model_copy(deep=True)
        self._version = 0
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        """每次成功 update/reset 后递增。"""
        return self._version

    @property
    def ranges(self) -> dict[str, SettingRange]:
        return dict(SETTING_RANGES)

    def get(self) -> AppSettings:
        """返回当前配置的副本。"""
        with self._lock:
            return self._settings.model_copy(deep=True)

    def update(self, partial: dict[str, Any]) -> AppSettings:
        """校验并合并部分配置。

        Raises:
            SettingsValidationError: 第一个非法字段；此时配置保持不变
        """
        if not isinstance(partial, dict):
            raise SettingsValidationError("Settings payload must be a JSON object")

        with self._lock:
            merged = self._settings.model_dump(by_alias=True)
            changes: list[str] = []

            for key, spec in SETTING_RANGES.items():
                if key not in partial:
                    continue
                value = validate_number_in_range(partial[key], spec.min, spec.max)
                if value is None:
                    raise SettingsValidationError(
                        f"{key} must be between {spec.min} and {spec.max}ms"
                    )
                merged[key] = value
                changes.append(key)

            if "newsFiltering" in partial:
                news_filtering = partial["newsFiltering"]
                if not isinstance(news_filtering, dict) or not isinstance(
                    news_filtering.get("enabled"), bool
                ):
                    raise SettingsValidationError(
                        "newsFiltering.enabled must be a boolean"
                    )
                merged["newsFiltering"] = {**merged["newsFiltering"], **news_filtering}
                changes.append("newsFiltering")

            for key in _NESTED_SECTIONS:
                if key not in partial:
                    continue
                section = partial[key]
                if not isinstance(section, dict):
                    raise SettingsValidationError(f"{key} must be an object")
                merged[key] = {**merged[key], **section}
                changes.append(key)

            try:
                candidate = AppSettings.model_validate(merged)
            except PydanticValidationError as e:
                raise SettingsValidationError(_describe_first_error(e)) from e

            self._settings = candidate
            self._version += 1
            version = self._version
            result = candidate.model_copy(deep=True)

        logger.info(f"Settings updated: {changes}")
        BusinessEvents.settings_updated(changes=changes, version=version)
        return result

    def reset(self) -> AppSettings:
        """恢复为编译期默认配置。"""
        with self._lock:
            self._settings = self._defaults.model_copy(deep=True)
            self._version += 1
            version = self._version
            result = self._settings.model_copy(deep=True)

        logger.info("Settings reset to defaults")
        BusinessEvents.settings_reset(version=version)
        return result


def _describe_first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message
