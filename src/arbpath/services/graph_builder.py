from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, TypeVar

from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.dto import RateSnapshot, TickerPrice
from arbpath.core.models import Edge, Graph
from arbpath.ports.crypto_rate_port import CryptoRatePort
from arbpath.ports.fiat_rate_port import FiatRatePort
from arbpath.ports.legality_port import LegalityReferencePort
from arbpath.ports.progress_port import ProgressObserver, as_observer
from arbpath.services.legality import LegalityClassifier

logger = get_logger(__name__)

T = TypeVar("T")


class GraphBuilder:
    """
    Merges fiat cross-rates and crypto tickers into one directed rate graph.

    Passes run in a fixed order (fiat, crypto, reciprocal) so the result does
    not depend on fetch completion order:

    - fiat:       every known base -> fiat rate
    - crypto:     every ticker whose symbol splits into two known codes
    - reciprocal: 1/rate for each direct edge whose reverse is missing
    """

    def __init__(
        self,
        fiat: FiatRatePort,
        crypto: CryptoRatePort,
        legality_ref: LegalityReferencePort,
        classifier: Optional[LegalityClassifier] = None,
        fee: float = settings.FEE,
        fiats: Optional[Iterable[str]] = None,
        cryptos: Optional[Iterable[str]] = None,
        max_workers: int = settings.FETCH_WORKERS,
    ) -> None:
        self.fiat = fiat
        self.crypto = crypto
        self.legality_ref = legality_ref
        self.fee = fee
        self.fiats = [c.upper() for c in (settings.FIATS if fiats is None else fiats)]
        self.cryptos = [c.upper() for c in (settings.CRYPTOS if cryptos is None else cryptos)]
        self.universe = self.fiats + [c for c in self.cryptos if c not in self.fiats]
        self.classifier = classifier or LegalityClassifier(universe=self.universe)
        self.max_workers = max(1, int(max_workers))

    # -------------------------
    # Fetching
    # -------------------------

    def fetch_snapshot(
        self,
        concurrent: bool = True,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
    ) -> RateSnapshot:
        observer = as_observer(on_progress)
        observer.notify("stage", {"message": "Fetching exchange rates..."})

        if concurrent:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                fiat_futures = [(base, pool.submit(self.fiat.get_rates, base)) for base in self.fiats]
                tickers_future = pool.submit(self.crypto.get_tickers)
                pairs_future = pool.submit(self.legality_ref.get_reference_pairs)

                fiat_results = [
                    (base, self._settle(f.result, {}, f"fiat rates for {base}"))
                    for base, f in fiat_futures
                ]
                tickers = self._settle(tickers_future.result, [], "crypto tickers")
                pairs = self._settle(pairs_future.result, frozenset(), "legal pairs")
        else:
            fiat_results = [
                (base, self._settle(lambda b=base: self.fiat.get_rates(b), {}, f"fiat rates for {base}"))
                for base in self.fiats
            ]
            tickers = self._settle(self.crypto.get_tickers, [], "crypto tickers")
            pairs = self._settle(self.legality_ref.get_reference_pairs, frozenset(), "legal pairs")

        fiat_rates = {base: rates for base, rates in fiat_results if rates}
        logger.info(
            "Fetched %d/%d fiat bases, %d tickers, %d legal pairs",
            len(fiat_rates), len(self.fiats), len(tickers), len(pairs),
        )

        return RateSnapshot(
            fiat_rates=fiat_rates,
            tickers=list(tickers),
            reference_pairs=frozenset(p.upper() for p in pairs),
            fetched_at=int(time.time()),
        )

    @staticmethod
    def _settle(fetch: Callable[[], T], empty: T, what: str) -> T:
        # ports should not raise; contain the ones that do
        try:
            return fetch()
        except Exception as exc:
            logger.warning("Source failed for %s: %s", what, exc)
            return empty

    # -------------------------
    # Construction
    # -------------------------

    def build(
        self,
        snapshot: RateSnapshot,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
    ) -> Graph:
        observer = as_observer(on_progress)
        graph = Graph(built_at=time.time())
        ref = snapshot.reference_pairs

        observer.notify("stage", {"message": "Building fiat-to-fiat edges..."})
        for src in self.fiats:
            rates = snapshot.fiat_rates.get(src)
            if not rates:
                continue
            for dst in self.fiats:
                if src == dst:
                    continue
                rate = rates.get(dst)
                if rate is None or rate <= 0:
                    continue
                self._add_edge(graph, src, dst, rate, ref)

        observer.notify("stage", {"message": "Building crypto edges..."})
        for (src, dst), rate in self.crypto_pairs(snapshot.tickers).items():
            self._add_edge(graph, src, dst, rate, ref)

        observer.notify("stage", {"message": "Adding reciprocal edges..."})
        to_add: List[Tuple[str, str, float]] = []
        for src, dst, edge in graph.iter_edges():
            if not graph.has_edge(dst, src) and edge.rate != 0:
                to_add.append((dst, src, 1.0 / edge.rate))
        for src, dst, rate in to_add:
            self._add_edge(graph, src, dst, rate, ref)

        msg = f"Graph ready: {len(graph.nodes)} currencies, {graph.edge_count} edges"
        observer.notify("stage", {"message": msg})
        logger.info(msg)
        return graph

    def build_live(
        self,
        concurrent: bool = True,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
    ) -> Tuple[Graph, RateSnapshot]:
        snapshot = self.fetch_snapshot(concurrent=concurrent, on_progress=on_progress)
        return self.build(snapshot, on_progress=on_progress), snapshot

    # -------------------------
    # Helpers
    # -------------------------

    def crypto_pairs(self, tickers: Iterable[TickerPrice]) -> Dict[Tuple[str, str], float]:
        """Split ticker symbols into (base, quote) pairs of known codes."""
        out: Dict[Tuple[str, str], float] = {}
        for t in tickers:
            if t.price is None or t.price <= 0:
                continue
            symbol = t.symbol.upper()
            for c1 in self.universe:
                if not symbol.startswith(c1):
                    continue
                c2 = symbol[len(c1):]
                if c2 != c1 and c2 in self.universe:
                    out[(c1, c2)] = t.price
        return out

    def _add_edge(self, graph: Graph, src: str, dst: str, rate: float, ref: FrozenSet[str]) -> None:
        legal = self.classifier.is_legal(src, dst, ref)
        graph.add_edge(src, dst, Edge(rate=rate, effective=rate * (1 - self.fee), legal=legal))
