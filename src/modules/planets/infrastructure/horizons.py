"""NASA JPL Horizons 星历客户端。

通过 Horizons API 获取观测者星历表（CSV 格式），解析 $$SOE/$$EOE 之间的第一行：
- R.A. / DEC：天体测量赤经赤纬（度）
- APmag：视星等
- Illu%：照亮比例
- delta：观测者距离（AU）
"""

import time
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import UpstreamError
from src.core.infrastructure.logging import BusinessEvents
from src.modules.planets.domain.catalog import HORIZONS_BODY_IDS, fallback_position
from src.modules.planets.domain.entities import PlanetPosition

_TIME_FORMAT = "%Y-%m-%d %H:%M"


class HorizonsEphemerisProvider:
    """JPL Horizons 星历提供者（地心观测者视角）。"""

    USER_AGENT = "Esther/1.0 (+https://github.com/esther-astronomy)"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url or settings.HORIZONS_API_URL
        self.timeout = timeout or settings.UPSTREAM_HTTP_TIMEOUT_SEC

    async def fetch_position(self, body_name: str) -> PlanetPosition:
        """Fetch the current position of one body.

        Raises:
            UpstreamError: HTTP 失败、API 返回错误或结果中没有星历行
        """
        start_time = time.time()
        params = self.build_params(body_name, datetime.now(UTC))

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(
                    self.base_url,
                    params=params,
                    headers={"User-Agent": self.USER_AGENT},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Horizons request timed out for {body_name}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Horizons HTTP {e.response.status_code} for {body_name}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Horizons request failed for {body_name}: {e}") from e

        position = self.parse_result(body_name, payload)
        duration_ms = int((time.time() - start_time) * 1000)
        BusinessEvents.ephemeris_fetched(body=body_name.lower(), duration_ms=duration_ms)
        return position

    @staticmethod
    def build_params(body_name: str, now: datetime) -> dict[str, str]:
        key = body_name.strip().lower()
        command = HORIZONS_BODY_IDS.get(key, body_name.strip())
        # 地球本身以日心为观测点，其余天体地心观测
        center = "500@10" if key == "earth" else "500@399"
        start = now.strftime(_TIME_FORMAT)
        stop = (now + timedelta(minutes=1)).strftime(_TIME_FORMAT)
        return {
            "format": "json",
            "COMMAND": f"'{command}'",
            "OBJ_DATA": "'NO'",
            "MAKE_EPHEM": "'YES'",
            "EPHEM_TYPE": "'OBSERVER'",
            "CENTER": f"'{center}'",
            "START_TIME": f"'{start}'",
            "STOP_TIME": f"'{stop}'",
            "STEP_SIZE": "'1 m'",
            "QUANTITIES": "'1,9,10,20'",
            "ANG_FORMAT": "'DEG'",
            "CSV_FORMAT": "'YES'",
        }

    @classmethod
    def parse_result(cls, body_name: str, payload: dict[str, Any]) -> PlanetPosition:
        """解析 Horizons JSON 响应中的 result 文本。"""
        if payload.get("error"):
            raise UpstreamError(f"Horizons error for {body_name}: {payload['error']}")

        result = payload.get("result")
        if not isinstance(result, str):
            raise UpstreamError(f"Horizons returned no result for {body_name}")

        lines = result.splitlines()
        try:
            soe = next(i for i, line in enumerate(lines) if line.strip() == "$$SOE")
        except StopIteration as e:
            raise UpstreamError(f"No ephemeris rows for {body_name}") from e

        header = next(
            (
                line
                for line in reversed(lines[:soe])
                if "R.A." in line and "DEC" in line
            ),
            None,
        )
        if header is None or soe + 1 >= len(lines) or lines[soe + 1].strip() == "$$EOE":
            raise UpstreamError(f"No ephemeris rows for {body_name}")

        columns = [cell.strip() for cell in header.split(",")]
        row = [cell.strip() for cell in lines[soe + 1].split(",")]

        def value(prefix: str) -> str | None:
            for index, column in enumerate(columns):
                if column.startswith(prefix) and index < len(row):
                    return row[index]
            return None

        right_ascension = _to_float(value("R.A."))
        declination = _to_float(value("DEC"))
        if right_ascension is None or declination is None:
            raise UpstreamError(f"Unparseable ephemeris row for {body_name}")

        distance = _to_float(value("delta"))
        magnitude = _to_float(value("APmag"))
        illumination = _to_float(value("Illu%"))

        display_name = body_name.strip()
        if display_name.lower() in HORIZONS_BODY_IDS:
            display_name = display_name.capitalize()

        logger.debug(
            f"Parsed Horizons row for {body_name}: ra={right_ascension} dec={declination}"
        )
        return PlanetPosition(
            name=display_name,
            right_ascension=right_ascension % 360.0,
            declination=max(-90.0, min(90.0, declination)),
            distance=max(distance or 0.0, 0.0),
            illumination=max(0.0, min(100.0, 100.0 if illumination is None else illumination)),
            magnitude=0.0 if magnitude is None else magnitude,
        )


class StaticEphemerisProvider:
    """返回内置降级表的星历提供者（离线开发模式）。"""

    async def fetch_position(self, body_name: str) -> PlanetPosition:
        logger.debug(f"Using static ephemeris data for {body_name}")
        return fallback_position(body_name)


def _to_float(raw: str | None) -> float | None:
    if raw is None or raw in ("", "n.a."):
        return None
    try:
        return float(raw)
    except ValueError:
        return None
