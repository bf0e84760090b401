from __future__ import annotations

from typing import Iterable, List

from arbpath.config import settings
from arbpath.core.models import PathResult


class ResultRanker:
    def __init__(self, top_n: int = settings.TOP_RESULTS) -> None:
        self.top_n = top_n

    def rank(self, results: Iterable[PathResult], top_n: int | None = None) -> List[PathResult]:
        n = self.top_n if top_n is None else top_n
        if n <= 0:
            return []
        # sorted() is stable: equal multipliers keep DFS discovery order
        return sorted(results, key=lambda r: r.multiplier, reverse=True)[:n]


def rank(results: Iterable[PathResult], top_n: int = settings.TOP_RESULTS) -> List[PathResult]:
    return ResultRanker().rank(results, top_n)
