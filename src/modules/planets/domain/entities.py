"""Planet domain entities."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import Field

from src.core.domain.base_entity import DomainModel


class BodyCategory(StrEnum):
    """天体分类。"""

    TERRESTRIAL = "terrestrial"
    GAS_GIANT = "gas_giant"
    ICE_GIANT = "ice_giant"
    DWARF = "dwarf"
    MOON = "moon"
    ASTEROID = "asteroid"


class PlanetPosition(DomainModel):
    """天体在某一时刻的位置。

    赤经/赤纬单位为度，距离单位为天文单位（AU），星等越小越亮。
    """

    name: str
    right_ascension: float = Field(..., ge=0, lt=360, description="赤经（度）")
    declination: float = Field(..., ge=-90, le=90, description="赤纬（度）")
    distance: float = Field(..., ge=0, description="距离（AU）")
    illumination: float = Field(..., ge=0, le=100, description="照亮比例（%）")
    magnitude: float = Field(..., description="视星等")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Temperature(DomainModel):
    """表面温度（K）。"""

    min: float = 0
    avg: float = 0
    max: float = 0


class PlanetProfile(DomainModel):
    """天体档案（NASA Fact Sheet / JPL SBDB）。"""

    name: str
    type: str = Field(..., description="planet / dwarf planet / moon / asteroid")
    category: BodyCategory
    diameter: float = Field(0, description="直径（km）")
    mass: str = Field("Unknown", description="质量（kg，科学计数法字符串）")
    orbital_period: float = Field(0, description="公转周期（天）")
    avg_distance: float = Field(0, description="平均日距（AU）")
    composition: list[str] = Field(default_factory=list)
    atmosphere_composition: list[str] = Field(default_factory=list)
    temperature: Temperature = Field(default_factory=Temperature)
    moons: list[str] = Field(default_factory=list)
    source_url: str | None = None
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
