from __future__ import annotations

from typing import Any, Dict, Optional

from arbpath.adapters.http.json_client import JsonHttpClient
from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.errors import DataSourceError
from arbpath.ports.fiat_rate_port import FiatRatePort

logger = get_logger(__name__)


class ExchangeRateAdapter(FiatRatePort):
    """
    ExchangeRate-API v6 ``/latest/{base}`` endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = settings.EXCHANGERATE_BASE_URL,
        client: Optional[JsonHttpClient] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.EXCHANGERATE_API_KEY
        self._base_url = base_url.rstrip("/")
        self._client = client or JsonHttpClient("ExchangeRate-API")

    def get_rates(self, base: str) -> Dict[str, float]:
        if not self._api_key:
            logger.error("EXCHANGERATE_API_KEY is missing; no fiat rates for %s", base)
            return {}

        url = f"{self._base_url}/{self._api_key}/latest/{base.upper()}"
        try:
            data = self._client.get_json(url)
        except DataSourceError as exc:
            logger.warning("Failed to fetch fiat rates for %s: %s", base, exc)
            return {}

        if not isinstance(data, dict) or not isinstance(data.get("conversion_rates"), dict):
            logger.warning("Invalid ExchangeRate-API response for %s: %s", base, data)
            return {}

        return self._parse_rates(data["conversion_rates"])

    @staticmethod
    def _parse_rates(raw: Dict[str, Any]) -> Dict[str, float]:
        out: Dict[str, float] = {}
        for code, val in raw.items():
            try:
                rate = float(val)
            except (TypeError, ValueError):
                continue
            if rate > 0:
                out[str(code).upper()] = rate
        return out
