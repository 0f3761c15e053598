"""API router configuration."""

from fastapi import APIRouter

from src.modules.news.interfaces.router import router as news_router
from src.modules.planets.interfaces.router import router as planets_router
from src.modules.settings.interfaces.router import router as settings_router

api_router = APIRouter()

# Ephemeris and planetary profiles
api_router.include_router(planets_router)

# Astronomy news
api_router.include_router(news_router)

# Runtime settings
api_router.include_router(settings_router)
