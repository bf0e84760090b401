from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Iterable, Optional

from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.dto import RateSnapshot
from arbpath.core.errors import EmptyGraphError, InvalidQueryError
from arbpath.core.models import Graph, SearchOutcome, SearchQuery
from arbpath.ports.progress_port import ProgressObserver, as_observer
from arbpath.services.graph_builder import GraphBuilder
from arbpath.services.path_search import CancelToken, PathSearch
from arbpath.services.ranker import ResultRanker

logger = get_logger(__name__)


def normalize_query(query: SearchQuery) -> SearchQuery:
    return SearchQuery(
        source=query.source.strip().upper(),
        target=query.target.strip().upper(),
        amount=query.amount,
        hops=query.hops,
        top_n=query.top_n,
    )


def validate_query(query: SearchQuery, universe: Optional[Iterable[str]] = None) -> None:
    known = set(universe or settings.ALL_CURRENCIES)
    if query.source not in known:
        raise InvalidQueryError(f"Unknown source currency: {query.source}")
    if query.target not in known:
        raise InvalidQueryError(f"Unknown target currency: {query.target}")
    if query.source == query.target:
        raise InvalidQueryError("Source and target currencies must differ")
    if not query.amount > 0:
        raise InvalidQueryError(f"Amount must be positive, got {query.amount}")
    if not _is_int(query.hops) or not 1 <= query.hops <= settings.HOPS_LIMIT:
        raise InvalidQueryError(f"Hops must be an integer between 1 and {settings.HOPS_LIMIT}, got {query.hops}")
    if not _is_int(query.top_n) or query.top_n < 1:
        raise InvalidQueryError(f"top_n must be an integer >= 1, got {query.top_n}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ArbitrageService:
    """
    Finds the best legal conversion paths for a query.

    - Graph: built from the rate sources and cached for ``max_age_sec``
    - Search: exhaustive DFS, then ranked by multiplier
    - A refresh always swaps in a new Graph; running searches keep the old one
    """

    def __init__(
        self,
        builder: GraphBuilder,
        search: Optional[PathSearch] = None,
        ranker: Optional[ResultRanker] = None,
        max_age_sec: float = settings.GRAPH_MAX_AGE_SEC,
        concurrent_fetch: bool = True,
    ) -> None:
        self.builder = builder
        self.search_engine = search or PathSearch()
        self.ranker = ranker or ResultRanker()
        self.max_age_sec = max_age_sec
        self.concurrent_fetch = concurrent_fetch

        self._graph: Optional[Graph] = None
        self._snapshot: Optional[RateSnapshot] = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        return self._snapshot

    def get_graph(
        self,
        refresh: bool = False,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
    ) -> Graph:
        with self._lock:
            graph = self._graph
            if graph is None or refresh or self._is_stale(graph):
                graph, snapshot = self.builder.build_live(
                    concurrent=self.concurrent_fetch, on_progress=on_progress
                )
                # an empty graph is never cached; the next query fetches again
                if not graph.is_empty():
                    self._graph = graph
                    self._snapshot = snapshot

        if graph.is_empty():
            raise EmptyGraphError("Could not build exchange data: no rates from any source")
        return graph

    def _is_stale(self, graph: Graph) -> bool:
        if self.max_age_sec <= 0:
            return True
        return time.time() - graph.built_at > self.max_age_sec

    def search(
        self,
        query: SearchQuery,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
        cancel: Optional[CancelToken] = None,
        refresh: bool = False,
        validate: bool = True,
    ) -> SearchOutcome:
        query = normalize_query(query)
        if validate:
            validate_query(query, self.builder.universe)

        observer = as_observer(on_progress)
        graph = self.get_graph(refresh=refresh, on_progress=observer)

        observer.notify(
            "stage",
            {"message": f"Searching for legal paths from {query.source} to {query.target}..."},
        )
        # fresh engine per call so concurrent searches keep separate counters
        engine = PathSearch(
            progress_every=self.search_engine.progress_every,
            cancel_check_every=self.search_engine.cancel_check_every,
        )
        found = engine.find_paths(
            graph, query.source, query.target, int(query.hops), on_progress=observer, cancel=cancel
        )
        ranked = self.ranker.rank(found, int(query.top_n))
        logger.info(
            "%s->%s: %d path(s) found, %d kept", query.source, query.target, len(found), len(ranked)
        )

        return SearchOutcome(
            query=query,
            results=ranked,
            paths_checked=engine.checked,
            graph_nodes=len(graph.nodes),
            graph_edges=graph.edge_count,
        )
