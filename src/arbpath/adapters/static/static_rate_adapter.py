from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from arbpath.core.dto import RateSnapshot, TickerPrice
from arbpath.ports.crypto_rate_port import CryptoRatePort
from arbpath.ports.fiat_rate_port import FiatRatePort
from arbpath.ports.legality_port import LegalityReferencePort


class StaticRateAdapter(FiatRatePort, CryptoRatePort, LegalityReferencePort):
    def __init__(self,
                 fiat_rates: Optional[Dict[str, Dict[str, float]]] = None,
                 tickers: Optional[Iterable[Tuple[str, float]]] = None,
                 reference_pairs: Optional[Iterable[str]] = None,
                 ):
        self._fiat = {k.upper(): {d.upper(): float(r) for d, r in v.items()}
                      for k, v in (fiat_rates or {}).items()}
        self._tickers = [TickerPrice(s.upper(), float(p)) for s, p in (tickers or [])]
        self._pairs = frozenset(p.upper() for p in (reference_pairs or []))

    @classmethod
    def from_snapshot(cls, snapshot: RateSnapshot) -> "StaticRateAdapter":
        return cls(
            fiat_rates=snapshot.fiat_rates,
            tickers=[(t.symbol, t.price) for t in snapshot.tickers],
            reference_pairs=snapshot.reference_pairs,
        )

    def get_rates(self, base):
        return dict(self._fiat.get(base.upper(), {}))

    def get_tickers(self) -> List[TickerPrice]:
        return list(self._tickers)

    def get_reference_pairs(self) -> FrozenSet[str]:
        return self._pairs
