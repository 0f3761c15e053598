"""Esther Backend - 天文数据服务入口。"""

from datetime import UTC, datetime

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from src.core.application import dependencies as core_app_deps
from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.gateway import get_api_gateway
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from src.core.interfaces.http.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from src.core.interfaces.http.routers import api_router
from src.modules.news.application import dependencies as news_app_deps
from src.modules.news.infrastructure import dependencies as news_infra_deps
from src.modules.planets.application import dependencies as planets_app_deps
from src.modules.planets.infrastructure import dependencies as planets_infra_deps


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting Esther backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Ephemeris provider: {settings.EPHEMERIS_PROVIDER}")
    logger.info(f"CORS origins: {settings.all_cors_origins}")

    yield

    logger.info("Shutting down Esther backend...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "天文数据服务 - 星历、天体档案与天文新闻聚合\n\n"
        "- **Planets**: NASA JPL Horizons 实时位置（限流 + 缓存 + 内置回退）\n"
        "- **News**: 多源 RSS/Atom 聚合、关键词过滤与相关度排序\n"
        "- **Settings**: 运行时可调整的刷新间隔与过滤规则"
    ),
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[core_app_deps.get_call_gateway] = get_api_gateway

app.dependency_overrides[planets_app_deps.get_ephemeris_service] = (
    planets_infra_deps.get_ephemeris_service
)
app.dependency_overrides[planets_app_deps.get_planetary_data_service] = (
    planets_infra_deps.get_planetary_data_service
)

app.dependency_overrides[news_app_deps.get_news_aggregator] = (
    news_infra_deps.get_news_aggregator
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Middleware（后添加的在外层）
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"])
async def health_check():
    """Liveness probe."""
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Esther API",
        "docs": f"{settings.API_PREFIX}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
    )
