from __future__ import annotations

from typing import Any, Optional

import requests

from arbpath.adapters.http.rate_limiter import SimpleRateLimiter, backoff_sleep
from arbpath.config import settings
from arbpath.core.errors import DataSourceError, RateLimitError


class JsonHttpClient:
    """
    GET-and-decode helper shared by the rate source adapters.

    Every request carries a bounded timeout. Failures are retried with
    jittered backoff, then surfaced as DataSourceError.
    """

    def __init__(
        self,
        name: str,
        timeout_sec: float = settings.RATE_TIMEOUT_SEC,
        max_retries: int = settings.RATE_MAX_RETRIES,
        requests_per_sec: float = settings.RATE_REQUESTS_PER_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.name = name
        self._timeout = timeout_sec
        self._max_retries = max(1, int(max_retries))
        self._rl = SimpleRateLimiter(requests_per_sec)
        self._session = session or requests.Session()

    def get_json(self, url: str, params: Optional[dict] = None) -> Any:
        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._rl.wait()
                resp = self._session.get(url, params=params, timeout=self._timeout)
            except requests.RequestException as e:
                last_err = e
                self._pause(attempt)
                continue

            if resp.status_code == 429:
                last_err = RateLimitError(f"{self.name} rate limited")
                self._pause(attempt)
                continue

            # 4xx other than 429 fails without retry
            if 400 <= resp.status_code < 500:
                raise DataSourceError(f"{self.name} rejected request: HTTP {resp.status_code}")

            try:
                resp.raise_for_status()
                return resp.json()
            except (requests.RequestException, ValueError) as e:
                last_err = e
                self._pause(attempt)

        raise DataSourceError(f"{self.name} failed after retries: {last_err}")

    def _pause(self, attempt: int) -> None:
        if attempt + 1 < self._max_retries:
            backoff_sleep(attempt)
