"""Settings module application dependencies."""

from src.modules.settings.application.services import SettingsStore

# 全局配置实例，新闻与星历管线通过依赖注入共享
settings_store = SettingsStore()


def get_settings_store() -> SettingsStore:
    """获取配置存储依赖。"""
    return settings_store
