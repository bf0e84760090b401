from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from arbpath.config import settings
from arbpath.config.logger_config import get_logger
from arbpath.core.errors import SearchCancelled
from arbpath.core.models import Graph, PathResult, TradeStep
from arbpath.ports.progress_port import ProgressObserver, as_observer

logger = get_logger(__name__)


class CancelToken:
    """Cooperative cancellation, optionally with a deadline."""

    def __init__(self, timeout_sec: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout_sec if timeout_sec else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline


class PathSearch:
    """
    Exhaustive depth-first enumeration of simple legal paths.

    No score pruning: every legal path of at most ``max_hops`` edges that
    reaches the target is emitted, in discovery order. Ranking happens later.
    Each recursive call receives its own tuples, so sibling branches never
    share partial state.
    """

    def __init__(
        self,
        progress_every: int = settings.SEARCH_PROGRESS_EVERY,
        cancel_check_every: int = settings.SEARCH_CANCEL_CHECK_EVERY,
    ) -> None:
        self.progress_every = max(1, int(progress_every))
        self.cancel_check_every = max(1, int(cancel_check_every))
        self.checked = 0

    def find_paths(
        self,
        graph: Graph,
        source: str,
        target: str,
        max_hops: int,
        on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> List[PathResult]:
        observer = as_observer(on_progress)
        results: List[PathResult] = []
        self.checked = 0
        expansions = 0

        def dfs(path: Tuple[str, ...], multiplier: float, breakdown: Tuple[TradeStep, ...]) -> None:
            nonlocal expansions
            if len(breakdown) >= max_hops:
                return

            last = path[-1]
            for nxt, edge in graph.neighbors(last).items():
                expansions += 1
                if cancel is not None and expansions % self.cancel_check_every == 0 and cancel.cancelled:
                    raise SearchCancelled(f"search {source}->{target} cancelled after {self.checked} checks")

                closes_cycle = nxt == target == path[0]
                if nxt in path and not closes_cycle:
                    continue
                if not edge.legal:
                    continue

                self.checked += 1
                if self.checked % self.progress_every == 0:
                    observer.notify("checked", {"checked": self.checked})

                step = TradeStep(
                    from_currency=last,
                    to_currency=nxt,
                    rate=edge.rate,
                    effective=edge.effective,
                    legal=edge.legal,
                )
                new_path = path + (nxt,)
                new_multiplier = multiplier * edge.effective
                new_breakdown = breakdown + (step,)

                if nxt == target:
                    results.append(PathResult(path=new_path, multiplier=new_multiplier, breakdown=new_breakdown))

                # a closed cycle cannot be extended without revisiting
                if not closes_cycle:
                    dfs(new_path, new_multiplier, new_breakdown)

        if max_hops > 0 and source in graph.nodes:
            dfs((source,), 1.0, ())

        observer.notify("checked", {"checked": self.checked})
        logger.debug("Search %s->%s: %d checked, %d paths", source, target, self.checked, len(results))
        return results


def find_paths(
    graph: Graph,
    source: str,
    target: str,
    max_hops: int,
    on_progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]] = None,
    cancel: Optional[CancelToken] = None,
) -> List[PathResult]:
    return PathSearch().find_paths(graph, source, target, max_hops, on_progress=on_progress, cancel=cancel)
