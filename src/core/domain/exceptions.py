"""Base domain exceptions.

所有领域异常都应继承自 DomainException，并可以通过定义 http_status_code、
error_code 和 error 类属性来指定 HTTP 响应细节。
"""

from typing import Any

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors.

    子类可以通过定义以下类属性来自定义 HTTP 响应：
    - http_status_code: HTTP 状态码（默认 400）
    - error_code: 错误代码字符串（默认 "DOMAIN_ERROR"）
    - error: 响应体中的错误标题
    """

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"
    error: str = "Bad Request"

    def __init__(
        self,
        message: str = "A domain error occurred",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    error = "Not Found"

    def __init__(
        self,
        entity_type: str,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = f"{entity_type} not found"
        if entity_id:
            message = f"No data available for {entity_type.lower()} '{entity_id}'"
        self.error = f"{entity_type} not found"
        super().__init__(message, details)


class ValidationError(DomainException):
    """Raised when validation fails."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    error = "Validation failed"


class UpstreamError(DomainException):
    """Raised when an external data provider fails."""

    http_status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "UPSTREAM_ERROR"
    error = "Upstream service failed"


class GatewayTimeoutError(UpstreamError):
    """Raised when an external call exceeds its time budget."""

    http_status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error_code = "UPSTREAM_TIMEOUT"
    error = "Upstream service timed out"

    def __init__(self, label: str, timeout_sec: float):
        self.label = label
        self.timeout_sec = timeout_sec
        super().__init__(f"{label} timed out after {timeout_sec:g}s")
