"""外部 API 调用网关。"""

from src.core.infrastructure.gateway.rate_limiter import (
    RateLimitedGateway,
    create_gateway,
)

# 全局网关实例（Horizons / SBDB 共享配额）
api_gateway = create_gateway()


def get_api_gateway() -> RateLimitedGateway:
    """获取网关依赖。"""
    return api_gateway


__all__ = [
    "RateLimitedGateway",
    "api_gateway",
    "create_gateway",
    "get_api_gateway",
]
