from __future__ import annotations

from typing import List, Optional

from arbpath.adapters.http.json_client import JsonHttpClient
from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.dto import TickerPrice
from arbpath.core.errors import DataSourceError
from arbpath.ports.crypto_rate_port import CryptoRatePort

logger = get_logger(__name__)


class BinanceTickerAdapter(CryptoRatePort):
    def __init__(
        self,
        url: str = settings.BINANCE_TICKER_URL,
        client: Optional[JsonHttpClient] = None,
    ) -> None:
        self._url = url
        self._client = client or JsonHttpClient("Binance")

    def get_tickers(self) -> List[TickerPrice]:
        try:
            data = self._client.get_json(self._url)
        except DataSourceError as exc:
            logger.warning("Failed to fetch crypto rates: %s", exc)
            return []

        if not isinstance(data, list):
            logger.warning("Invalid Binance ticker response: %s", data)
            return []

        out: List[TickerPrice] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            symbol = str(item.get("symbol") or "").upper()
            try:
                price = float(item.get("price"))
            except (TypeError, ValueError):
                continue
            if symbol and price > 0:
                out.append(TickerPrice(symbol=symbol, price=price))
        return out
