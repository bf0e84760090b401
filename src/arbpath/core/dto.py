from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List


@dataclass(frozen=True)
class TickerPrice:
    symbol: str          # base+quote, no separator (e.g. BTCUSDT)
    price: float


@dataclass(frozen=True)
class RateSnapshot:
    """
    Raw rates as returned by the sources, before graph construction.
    """

    fiat_rates: Dict[str, Dict[str, float]] = field(default_factory=dict)   # base -> {dst: rate}
    tickers: List[TickerPrice] = field(default_factory=list)
    reference_pairs: FrozenSet[str] = frozenset()
    fetched_at: int = 0

    def is_empty(self) -> bool:
        return not self.fiat_rates and not self.tickers
