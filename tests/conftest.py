"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不访问外部网络）

使用方法：
    # 运行所有测试
    uv run pytest

    # 只运行单元测试
    uv run pytest tests/unit/
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.modules.settings.application.services import SettingsStore
from tests.fakes import DirectGateway, FakeClock


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 基础 Fixtures
# ============================================


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings_store() -> SettingsStore:
    """每个测试独立的配置存储（默认配置）。"""
    return SettingsStore()


@pytest.fixture
def direct_gateway() -> DirectGateway:
    return DirectGateway()


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试）。

    测试通过 app.dependency_overrides 注入替身，结束后恢复默认覆盖。
    """
    from main import app

    original_overrides = dict(app.dependency_overrides)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
