"""Boundary input validation helpers."""

import ipaddress
import re
from typing import Any
from urllib.parse import urlparse

from loguru import logger

BODY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9\s\-()]{1,100}$")

_BLOCKED_HOSTS = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}


def validate_body_name(body_name: Any) -> bool:
    """Letters, digits, whitespace, hyphens and parentheses; 1-100 chars."""
    if not isinstance(body_name, str):
        return False
    return BODY_NAME_PATTERN.fullmatch(body_name) is not None


def validate_number_in_range(value: Any, min_value: int, max_value: int) -> int | None:
    """解析整数并做范围校验。

    接受 int、整数值的 float 以及整数字符串；bool、小数、非数字字符串
    以及越界值都返回 None，由调用方决定是报错还是回退到默认值。
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            logger.debug(f"Invalid number: {value}")
            return None
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            logger.debug(f"Invalid number: {value!r}")
            return None
    else:
        return None

    if number < min_value or number > max_value:
        logger.debug(f"Number out of range: {number} ({min_value}-{max_value})")
        return None

    return number


def is_valid_url(url: str) -> bool:
    """SSRF 防护：只允许 http(s)，拒绝本机、内网与保留地址。"""
    try:
        parsed = urlparse(url)
    except ValueError:
        logger.warning(f"Invalid URL format: {url}")
        return False

    if parsed.scheme not in ("http", "https"):
        logger.warning(f"Invalid protocol: {parsed.scheme}")
        return False

    hostname = (parsed.hostname or "").lower()
    if not hostname:
        return False
    if hostname in _BLOCKED_HOSTS:
        logger.warning(f"Blocked private hostname: {hostname}")
        return False

    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        # 域名，不做 DNS 解析
        return True

    if (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
    ):
        logger.warning(f"Blocked private IP: {hostname}")
        return False
    return True
