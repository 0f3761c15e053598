"""Settings domain entities.

运行时可调整的应用配置：刷新间隔、数据源偏好、新闻过滤规则与 UI 偏好。
"""

from typing import Literal

from pydantic import Field

from src.core.domain.base_entity import DomainModel

NewsCategory = Literal["astronomy", "space-missions", "exoplanets", "solar-system"]


class NewsSource(DomainModel):
    """新闻源。"""

    id: str = Field(..., description="源ID（唯一）")
    name: str = Field(..., description="源名称")
    url: str = Field(..., description="RSS/Atom 地址")
    category: NewsCategory = Field(..., description="源分类")
    enabled: bool = Field(default=True, description="是否启用")


class DataSourcePreferences(DomainModel):
    """外部数据源开关。"""

    use_jpl_horizons: bool = Field(default=True, alias="useJPLHorizons")
    use_nasa_fact_sheets: bool = Field(default=True, alias="useNASAFactSheets")
    use_minor_planet_center: bool = Field(default=True, alias="useMinorPlanetCenter")
    use_esa_data: bool = Field(default=True, alias="useESAData")


class NewsFiltering(DomainModel):
    """新闻关键词过滤配置。"""

    enabled: bool = Field(default=True, description="是否启用关键词过滤")
    keywords: list[str] = Field(default_factory=list, description="包含关键词")
    exclude_keywords: list[str] = Field(default_factory=list, description="排除关键词")
    sources: list[NewsSource] = Field(default_factory=list, description="新闻源列表")


class UIPreferences(DomainModel):
    """界面偏好。"""

    theme: Literal["retro-dark", "retro-light"] = "retro-dark"
    update_notifications: bool = True
    auto_refresh: bool = True


class AppSettings(DomainModel):
    """应用配置根对象。

    间隔字段单位均为毫秒。
    """

    planet_update_interval: int = Field(default=15 * 60 * 1000)
    news_update_interval: int = Field(default=30 * 60 * 1000)
    asteroid_update_interval: int = Field(default=60 * 60 * 1000)
    data_source_preferences: DataSourcePreferences = Field(
        default_factory=DataSourcePreferences
    )
    news_filtering: NewsFiltering = Field(default_factory=NewsFiltering)
    ui: UIPreferences = Field(default_factory=UIPreferences)


class SettingRange(DomainModel):
    """数值配置的取值范围（毫秒）。"""

    min: int
    max: int
    step: int


# 键为 JSON 字段名；step 仅供前端展示，不做校验
SETTING_RANGES: dict[str, SettingRange] = {
    "planetUpdateInterval": SettingRange(min=60_000, max=3_600_000, step=60_000),
    "newsUpdateInterval": SettingRange(min=300_000, max=3_600_000, step=300_000),
    "asteroidUpdateInterval": SettingRange(min=600_000, max=3_600_000, step=600_000),
}


DEFAULT_KEYWORDS = [
    "planet",
    "asteroid",
    "comet",
    "spacecraft",
    "mission",
    "discovery",
    "solar system",
    "exoplanet",
    "moon",
    "nasa",
    "esa",
    "jpl",
    "astronomy",
]

DEFAULT_EXCLUDE_KEYWORDS = ["finance", "stock", "crypto", "politics"]

DEFAULT_SOURCES = [
    NewsSource(
        id="nasa-news",
        name="NASA News",
        url="https://www.nasa.gov/news-and-events/feed/",
        category="astronomy",
    ),
    NewsSource(
        id="esa-news",
        name="ESA News",
        url="https://www.esa.int/rssfeed.php",
        category="space-missions",
    ),
    NewsSource(
        id="space-astronomy",
        name="Space.com Astronomy",
        url="https://www.space.com/xml/rss-feeds/astronomy.xml",
        category="astronomy",
    ),
    NewsSource(
        id="arxiv-astro",
        name="ArXiv Astronomy",
        url="https://arxiv.org/list/astro-ph/recent?skip=0&size=100",
        category="astronomy",
    ),
]


def default_settings() -> AppSettings:
    """编译期默认配置（每次返回新对象）。"""
    return AppSettings(
        news_filtering=NewsFiltering(
            enabled=True,
            keywords=list(DEFAULT_KEYWORDS),
            exclude_keywords=list(DEFAULT_EXCLUDE_KEYWORDS),
            sources=[source.model_copy() for source in DEFAULT_SOURCES],
        ),
    )
