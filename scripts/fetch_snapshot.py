from __future__ import annotations

import argparse

from arbpath.adapters.crypto.binance_adapter import BinanceTickerAdapter
from arbpath.adapters.fiat.exchangerate_adapter import ExchangeRateAdapter
from arbpath.adapters.legality.gemini_adapter import GeminiSymbolsAdapter
from arbpath.config.logger_config import setup_logging
from arbpath.io.snapshot_store import write_snapshot
from arbpath.services.graph_builder import GraphBuilder


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", default="out", help="Output folder")
    parser.add_argument("--sequential", action="store_true", help="Fetch sources one at a time")
    args = parser.parse_args()

    setup_logging()
    builder = GraphBuilder(
        fiat=ExchangeRateAdapter(),
        crypto=BinanceTickerAdapter(),
        legality_ref=GeminiSymbolsAdapter(),
    )
    snapshot = builder.fetch_snapshot(concurrent=not args.sequential)
    if snapshot.is_empty():
        print("No rates fetched from any source")
    print("Wrote:", write_snapshot(snapshot, args.out))


if __name__ == "__main__":
    main()
