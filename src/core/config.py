"""Application configuration."""

from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Esther"
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5001
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: Annotated[list[str] | str, BeforeValidator(parse_cors)] = [
        "http://localhost:3001"
    ]
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = ["Content-Type", "Authorization"]

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "local"

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # External API gateway（Horizons / SBDB 共用）
    GATEWAY_CONCURRENCY: int = 2
    GATEWAY_INTERVAL_SEC: float = 60.0
    GATEWAY_INTERVAL_CAP: int = 50  # 每个窗口内最多启动的调用数
    GATEWAY_TIMEOUT_SEC: float = 15.0

    # Ephemeris
    EPHEMERIS_CACHE_TTL_SEC: float = 300.0  # 5 minutes
    EPHEMERIS_PROVIDER: Literal["horizons", "static"] = "horizons"
    HORIZONS_API_URL: str = "https://ssd.jpl.nasa.gov/api/horizons.api"
    SBDB_API_URL: str = "https://ssd-api.jpl.nasa.gov/sbdb.api"
    UPSTREAM_HTTP_TIMEOUT_SEC: float = 10.0

    # News
    NEWS_ITEMS_PER_SOURCE: int = 10
    NEWS_FETCH_CONCURRENCY: int = 4
    NEWS_FETCH_TIMEOUT_SEC: float = 10.0
    NEWS_RESULT_TTL_SEC: float = 60.0  # 0 表示每次按 id 查询都重新聚合

    # HTTP handlers
    REQUEST_TIMEOUT_SEC: float = 30.0


settings = Settings()
