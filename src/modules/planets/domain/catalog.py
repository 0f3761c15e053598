"""Built-in planetary reference data.

- 星历降级表：外部星历不可用时返回的固定位置
- 天体档案表：取自 NASA Planetary Fact Sheets（公有领域）
"""

from dataclasses import dataclass

from src.modules.planets.domain.entities import (
    BodyCategory,
    PlanetPosition,
    PlanetProfile,
    Temperature,
)

# 追踪的天体（太阳 + 八大行星），顺序即 get_all_positions 的输出顺序
TRACKED_BODIES: tuple[str, ...] = (
    "sun",
    "mercury",
    "venus",
    "earth",
    "mars",
    "jupiter",
    "saturn",
    "uranus",
    "neptune",
)

# JPL Horizons 主要天体编号
HORIZONS_BODY_IDS: dict[str, str] = {
    "sun": "10",
    "mercury": "199",
    "venus": "299",
    "earth": "399",
    "moon": "301",
    "mars": "499",
    "jupiter": "599",
    "saturn": "699",
    "uranus": "799",
    "neptune": "899",
    "pluto": "999",
}


@dataclass(frozen=True)
class FallbackPosition:
    """降级位置条目（不含时间戳）。"""

    name: str
    right_ascension: float
    declination: float
    distance: float
    illumination: float
    magnitude: float


FALLBACK_POSITIONS: dict[str, FallbackPosition] = {
    "sun": FallbackPosition("Sun", 0.0, 0.0, 0.0, 100, -26.7),
    "mercury": FallbackPosition("Mercury", 187.45, -15.3, 0.72, 88, 1.2),
    "venus": FallbackPosition("Venus", 225.67, 12.8, 1.12, 92, -4.1),
    "earth": FallbackPosition("Earth", 0.0, 0.0, 1.0, 100, -3.99),
    "mars": FallbackPosition("Mars", 45.23, 18.5, 1.89, 95, 1.5),
    "jupiter": FallbackPosition("Jupiter", 112.34, 8.2, 5.2, 100, -2.7),
    "saturn": FallbackPosition("Saturn", 298.56, -22.1, 10.3, 100, 0.9),
    "uranus": FallbackPosition("Uranus", 25.78, 14.3, 19.8, 100, 5.9),
    "neptune": FallbackPosition("Neptune", 345.12, -5.6, 29.1, 100, 7.8),
}


def fallback_position(body_name: str) -> PlanetPosition:
    """按小写名称查找降级位置，未知天体返回 earth 条目。"""
    entry = FALLBACK_POSITIONS.get(
        body_name.strip().lower(), FALLBACK_POSITIONS["earth"]
    )
    return PlanetPosition(
        name=entry.name,
        right_ascension=entry.right_ascension,
        declination=entry.declination,
        distance=entry.distance,
        illumination=entry.illumination,
        magnitude=entry.magnitude,
    )


_FACT_SHEET = "https://nssdc.gsfc.nasa.gov/planetary/factsheet"


PLANET_PROFILES: dict[str, PlanetProfile] = {
    "mercury": PlanetProfile(
        name="Mercury",
        type="planet",
        category=BodyCategory.TERRESTRIAL,
        diameter=4879,
        mass="3.3011e23",
        orbital_period=87.969,
        avg_distance=0.387,
        composition=["Iron", "Nickel", "Silicates"],
        atmosphere_composition=["Oxygen", "Sodium", "Hydrogen", "Helium"],
        temperature=Temperature(min=90, avg=440, max=700),
        source_url=f"{_FACT_SHEET}/mercuryfact.html",
    ),
    "venus": PlanetProfile(
        name="Venus",
        type="planet",
        category=BodyCategory.TERRESTRIAL,
        diameter=12104,
        mass="4.8675e24",
        orbital_period=224.701,
        avg_distance=0.723,
        composition=["Silicates", "Iron"],
        atmosphere_composition=["Carbon Dioxide", "Nitrogen", "Sulfur Dioxide"],
        temperature=Temperature(min=735, avg=735, max=735),
        source_url=f"{_FACT_SHEET}/venusfact.html",
    ),
    "earth": PlanetProfile(
        name="Earth",
        type="planet",
        category=BodyCategory.TERRESTRIAL,
        diameter=12756,
        mass="5.9724e24",
        orbital_period=365.256,
        avg_distance=1.0,
        composition=["Iron", "Oxygen", "Silicon", "Magnesium"],
        atmosphere_composition=["Nitrogen", "Oxygen", "Argon"],
        temperature=Temperature(min=184, avg=288, max=330),
        moons=["Moon"],
        source_url=f"{_FACT_SHEET}/earthfact.html",
    ),
    "mars": PlanetProfile(
        name="Mars",
        type="planet",
        category=BodyCategory.TERRESTRIAL,
        diameter=6779,
        mass="6.4171e23",
        orbital_period=686.971,
        avg_distance=1.524,
        composition=["Iron Oxide", "Silicates"],
        atmosphere_composition=["Carbon Dioxide", "Nitrogen", "Argon"],
        temperature=Temperature(min=143, avg=210, max=308),
        moons=["Phobos", "Deimos"],
        source_url=f"{_FACT_SHEET}/marsfact.html",
    ),
    "jupiter": PlanetProfile(
        name="Jupiter",
        type="planet",
        category=BodyCategory.GAS_GIANT,
        diameter=139820,
        mass="1.8982e27",
        orbital_period=4332.59,
        avg_distance=5.203,
        composition=["Hydrogen", "Helium"],
        temperature=Temperature(min=110, avg=165, max=165),
        moons=["Io", "Europa", "Ganymede", "Callisto"],
        source_url=f"{_FACT_SHEET}/jupiterfact.html",
    ),
    "saturn": PlanetProfile(
        name="Saturn",
        type="planet",
        category=BodyCategory.GAS_GIANT,
        diameter=116460,
        mass="5.6834e26",
        orbital_period=10759.22,
        avg_distance=9.537,
        composition=["Hydrogen", "Helium"],
        temperature=Temperature(min=110, avg=134, max=134),
        moons=["Titan", "Rhea", "Iapetus", "Enceladus"],
        source_url=f"{_FACT_SHEET}/saturnfact.html",
    ),
    "uranus": PlanetProfile(
        name="Uranus",
        type="planet",
        category=BodyCategory.ICE_GIANT,
        diameter=50724,
        mass="8.6810e25",
        orbital_period=30688.5,
        avg_distance=19.191,
        composition=["Water", "Methane", "Ammonia"],
        temperature=Temperature(min=49, avg=59, max=76),
        moons=["Titania", "Oberon", "Umbriel", "Ariel"],
        source_url=f"{_FACT_SHEET}/uranusfact.html",
    ),
    "neptune": PlanetProfile(
        name="Neptune",
        type="planet",
        category=BodyCategory.ICE_GIANT,
        diameter=49244,
        mass="1.02413e26",
        orbital_period=60182,
        avg_distance=30.07,
        composition=["Water", "Methane", "Ammonia"],
        temperature=Temperature(min=55, avg=72, max=72),
        moons=["Triton", "Proteus"],
        source_url=f"{_FACT_SHEET}/neptunefact.html",
    ),
    "pluto": PlanetProfile(
        name="Pluto",
        type="dwarf planet",
        category=BodyCategory.DWARF,
        diameter=2376,
        mass="1.303e22",
        orbital_period=90560,
        avg_distance=39.48,
        composition=["Rock", "Water Ice"],
        atmosphere_composition=["Nitrogen", "Methane", "Carbon Monoxide"],
        temperature=Temperature(min=33, avg=44, max=55),
        moons=["Charon", "Nix", "Hydra", "Kerberos", "Styx"],
        source_url=f"{_FACT_SHEET}/plutofact.html",
    ),
    "ceres": PlanetProfile(
        name="Ceres",
        type="dwarf planet",
        category=BodyCategory.DWARF,
        diameter=939.4,
        mass="9.38e20",
        orbital_period=1680,
        avg_distance=2.77,
        composition=["Rock", "Water Ice", "Clays"],
        temperature=Temperature(min=110, avg=168, max=235),
        source_url="https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr=1",
    ),
    "moon": PlanetProfile(
        name="Moon",
        type="moon",
        category=BodyCategory.MOON,
        diameter=3475,
        mass="7.346e22",
        orbital_period=27.3217,
        avg_distance=1.0,
        composition=["Silicates", "Iron"],
        temperature=Temperature(min=100, avg=250, max=390),
        source_url=f"{_FACT_SHEET}/moonfact.html",
    ),
    "vesta": PlanetProfile(
        name="Vesta",
        type="asteroid",
        category=BodyCategory.ASTEROID,
        diameter=525.4,
        mass="2.59e20",
        orbital_period=1325.75,
        avg_distance=2.36,
        composition=["Basalt", "Iron-Nickel Core"],
        temperature=Temperature(min=85, avg=180, max=270),
        source_url="https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr=4",
    ),
}
