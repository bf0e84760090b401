from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from typing import Optional, Sequence

from arbpath.config import settings
from arbpath.config.logger_config import setup_logging
from arbpath.core.errors import DataSourceError, EmptyGraphError, InvalidQueryError, SearchCancelled
from arbpath.core.models import SearchQuery
from arbpath.io.output_writer import write_graph_json, write_results_json, write_summary_md
from arbpath.io.snapshot_store import load_snapshot, write_snapshot
from arbpath.services.arbitrage_service import ArbitrageService
from arbpath.services.graph_builder import GraphBuilder
from arbpath.services.path_search import CancelToken

from arbpath.adapters.crypto.binance_adapter import BinanceTickerAdapter
from arbpath.adapters.fiat.exchangerate_adapter import ExchangeRateAdapter
from arbpath.adapters.legality.gemini_adapter import GeminiSymbolsAdapter
from arbpath.adapters.static.static_rate_adapter import StaticRateAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="arbpath", description="Legal multi-hop currency conversion paths")
    p.add_argument("--source", required=True, help=f"Source currency ({', '.join(settings.ALL_CURRENCIES)})")
    p.add_argument("--target", required=True, help="Target currency")
    p.add_argument("--amount", type=float, default=1000.0, help="Starting amount in source currency")
    p.add_argument("--hops", type=int, default=settings.MAX_HOPS, help="Maximum number of trades")
    p.add_argument("--top", type=int, default=settings.TOP_RESULTS, help="Number of paths to keep")
    p.add_argument("--out", default="out", help="Output folder")
    p.add_argument("--snapshot", help="Search a saved rate snapshot (JSON) instead of live sources")
    p.add_argument("--save-snapshot", action="store_true", help="Write the fetched rates to snapshot.json")
    p.add_argument("--graph", action="store_true", help="Write graph.json alongside the results")
    p.add_argument("--sequential", action="store_true", help="Fetch sources one at a time")
    p.add_argument("--search-timeout", type=float, default=0, help="Cancel the search after N seconds (0=never)")
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return p


def _make_progress_reporter(query: SearchQuery):
    start_time = time.time()
    last_print = 0.0
    is_tty = sys.stdout.isatty()

    def _ts() -> str:
        return dt.datetime.now().strftime("%H:%M:%S")

    def _print_line(message: str) -> None:
        if is_tty:
            sys.stdout.write("\r" + message.ljust(88))
            sys.stdout.flush()
        else:
            print(message)

    def _clear_line() -> None:
        if is_tty:
            sys.stdout.write("\r" + (" " * 88) + "\r")
            sys.stdout.flush()

    def progress(event: str, data: dict) -> None:
        nonlocal last_print
        now = time.time()
        if event == "start":
            print(f"[{_ts()}] {query.source} -> {query.target} • {query.amount:.2f} • {query.hops} trade(s)")
            return
        if event == "stage":
            _print_line(str(data.get("message", "")))
            last_print = now
            return
        if event == "checked":
            checked = data.get("checked", 0)
            if not is_tty and checked % 500 != 0:
                return
            if is_tty and now - last_print < 0.2:
                return
            _print_line(f"Checked {checked} potential paths...")
            last_print = now
            return
        if event == "done":
            _clear_line()
            elapsed = time.time() - start_time
            print(f"[{_ts()}] Done in {elapsed:.1f}s • {data['found']} path(s) • {data['checked']} checked")
            return
        if event == "error":
            _clear_line()
            print(f"[{_ts()}] Error: {data.get('message', 'Unknown error')}", file=sys.stderr)

    return progress


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    query = SearchQuery(
        source=args.source,
        target=args.target,
        amount=args.amount,
        hops=args.hops,
        top_n=args.top,
    )
    progress = _make_progress_reporter(query)

    # Ports
    if args.snapshot:
        try:
            snapshot = load_snapshot(args.snapshot)
        except DataSourceError as exc:
            progress("error", {"message": str(exc)})
            return 2
        static = StaticRateAdapter.from_snapshot(snapshot)
        fiat, crypto, legality = static, static, static
        adapter_label = f"StaticRateAdapter ({args.snapshot})"
    else:
        fiat = ExchangeRateAdapter()
        crypto = BinanceTickerAdapter()
        legality = GeminiSymbolsAdapter()
        adapter_label = "ExchangeRate-API + Binance + Gemini"

    # Service
    builder = GraphBuilder(fiat=fiat, crypto=crypto, legality_ref=legality)
    svc = ArbitrageService(builder, concurrent_fetch=not args.sequential)
    cancel = CancelToken(timeout_sec=args.search_timeout) if args.search_timeout > 0 else None

    print(f"Adapter: {adapter_label}")
    progress("start", {})
    try:
        outcome = svc.search(query, on_progress=progress, cancel=cancel)
    except InvalidQueryError as exc:
        progress("error", {"message": str(exc)})
        return 2
    except EmptyGraphError as exc:
        progress("error", {"message": f"Failed to build exchange graph. {exc}"})
        return 1
    except SearchCancelled as exc:
        progress("error", {"message": f"Search cancelled: {exc}"})
        return 1
    progress("done", {"found": len(outcome.results), "checked": outcome.paths_checked})

    if not outcome.results:
        print(f"No legal paths found from {outcome.query.source} to {outcome.query.target} "
              f"within {outcome.query.hops} trade(s).")
    else:
        best = outcome.best
        print(f"Best: {' -> '.join(best.path)} • "
              f"{best.final_amount(outcome.query.amount):.6f} {outcome.query.target} "
              f"({best.multiplier:.6f}x)")

    # Outputs
    print("Writing outputs...")
    written = [
        write_results_json(outcome, args.out),
        write_summary_md(outcome, args.out),
    ]
    if args.graph:
        written.append(write_graph_json(svc.get_graph(), args.out))
    if args.save_snapshot and svc.snapshot is not None:
        written.append(write_snapshot(svc.snapshot, args.out))

    for path in written:
        print(f"Wrote: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
