from __future__ import annotations

from typing import FrozenSet, Optional

from arbpath.adapters.http.json_client import JsonHttpClient
from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.errors import DataSourceError
from arbpath.ports.legality_port import LegalityReferencePort

logger = get_logger(__name__)


class GeminiSymbolsAdapter(LegalityReferencePort):
    """Pairs listed by Gemini count as legally supported."""

    def __init__(
        self,
        url: str = settings.GEMINI_SYMBOLS_URL,
        client: Optional[JsonHttpClient] = None,
    ) -> None:
        self._url = url
        self._client = client or JsonHttpClient("Gemini")

    def get_reference_pairs(self) -> FrozenSet[str]:
        try:
            data = self._client.get_json(self._url)
        except DataSourceError as exc:
            logger.warning("Failed to fetch Gemini pairs: %s", exc)
            return frozenset()

        if not isinstance(data, list):
            logger.warning("Invalid Gemini symbols response: %s", data)
            return frozenset()

        return frozenset(str(s).upper() for s in data if isinstance(s, str) and s)
