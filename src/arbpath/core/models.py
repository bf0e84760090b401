from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from arbpath.config import settings



# Query model

@dataclass(frozen=True)
class SearchQuery:
    """
    User input for one conversion search.
    """

    source: str
    target: str
    amount: float = 1000.0
    hops: int = settings.MAX_HOPS
    top_n: int = settings.TOP_RESULTS



# Graph models

@dataclass(frozen=True)
class Edge:

    rate: float
    effective: float       # rate after the per-hop fee
    legal: bool


@dataclass
class Graph:
    """
    Directed rate graph: src -> {dst: Edge}.

    Built once by GraphBuilder and treated as read-only afterwards;
    rebuilding always produces a new instance.
    """

    nodes: Set[str] = field(default_factory=set)
    edges: Dict[str, Dict[str, Edge]] = field(default_factory=dict)
    built_at: float = 0.0

    def add_edge(self, src: str, dst: str, edge: Edge) -> None:
        # last write wins per ordered pair
        self.edges.setdefault(src, {})[dst] = edge
        self.nodes.add(src)
        self.nodes.add(dst)

    def get_edge(self, src: str, dst: str) -> Optional[Edge]:
        return self.edges.get(src, {}).get(dst)

    def has_edge(self, src: str, dst: str) -> bool:
        return dst in self.edges.get(src, {})

    def neighbors(self, src: str) -> Dict[str, Edge]:
        return self.edges.get(src, {})

    def iter_edges(self) -> Iterator[Tuple[str, str, Edge]]:
        for src, dst_map in self.edges.items():
            for dst, edge in dst_map.items():
                yield src, dst, edge

    @property
    def edge_count(self) -> int:
        return sum(len(m) for m in self.edges.values())

    def is_empty(self) -> bool:
        return not self.nodes



# Search results

@dataclass(frozen=True)
class TradeStep:

    from_currency: str
    to_currency: str
    rate: float
    effective: float
    legal: bool


@dataclass(frozen=True)
class PathResult:

    path: Tuple[str, ...]
    multiplier: float
    breakdown: Tuple[TradeStep, ...]

    @property
    def hops(self) -> int:
        return len(self.breakdown)

    def final_amount(self, start_amount: float) -> float:
        return start_amount * self.multiplier

    @property
    def gain_pct(self) -> float:
        return (self.multiplier - 1.0) * 100.0


@dataclass(frozen=True)
class SearchOutcome:

    query: SearchQuery
    results: List[PathResult]
    paths_checked: int
    graph_nodes: int
    graph_edges: int

    @property
    def best(self) -> Optional[PathResult]:
        return self.results[0] if self.results else None
