import json
import os
import tempfile
import unittest

from arbpath.core.dto import RateSnapshot, TickerPrice
from arbpath.core.errors import DataSourceError
from arbpath.core.models import Edge, Graph, PathResult, SearchOutcome, SearchQuery, TradeStep
from arbpath.io.output_writer import render_summary_md, write_graph_json, write_results_json
from arbpath.io.snapshot_store import load_snapshot, write_snapshot


def _outcome(results) -> SearchOutcome:
    return SearchOutcome(
        query=SearchQuery(source="USD", target="GBP", amount=1000.0, hops=3, top_n=3),
        results=results,
        paths_checked=42,
        graph_nodes=3,
        graph_edges=6,
    )


def _two_hop() -> PathResult:
    s1 = TradeStep("USD", "EUR", 0.9, 0.8991, True)
    s2 = TradeStep("EUR", "GBP", 0.85, 0.84915, True)
    return PathResult(path=("USD", "EUR", "GBP"), multiplier=0.8991 * 0.84915, breakdown=(s1, s2))


class SnapshotStoreTests(unittest.TestCase):
    def test_write_then_load(self) -> None:
        snapshot = RateSnapshot(
            fiat_rates={"USD": {"EUR": 0.9}},
            tickers=[TickerPrice("BTCUSDT", 65000.0)],
            reference_pairs=frozenset({"BTCUSD"}),
            fetched_at=1700000000,
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = write_snapshot(snapshot, tmp)
            loaded = load_snapshot(path)

        self.assertEqual(loaded, snapshot)

    def test_load_rejects_bad_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DataSourceError):
                load_snapshot(os.path.join(tmp, "missing.json"))

            bad = os.path.join(tmp, "bad.json")
            with open(bad, "w", encoding="utf-8") as f:
                f.write("[1, 2, 3]")
            with self.assertRaises(DataSourceError):
                load_snapshot(bad)

            broken = os.path.join(tmp, "broken.json")
            with open(broken, "w", encoding="utf-8") as f:
                json.dump({"fiat_rates": {"USD": {"EUR": "abc"}}}, f)
            with self.assertRaises(DataSourceError):
                load_snapshot(broken)


class OutputWriterTests(unittest.TestCase):
    def test_results_json_has_amounts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = write_results_json(_outcome([_two_hop()]), tmp)
            with open(path, encoding="utf-8") as f:
                data = json.load(f)

        self.assertEqual(data["query"]["source"], "USD")
        self.assertEqual(data["paths_checked"], 42)
        r = data["results"][0]
        self.assertEqual(r["path"], ["USD", "EUR", "GBP"])
        self.assertEqual(r["hops"], 2)
        self.assertAlmostEqual(r["final_amount"], 1000.0 * 0.8991 * 0.84915)
        self.assertEqual(r["breakdown"][1]["from"], "EUR")

    def test_graph_json(self) -> None:
        g = Graph()
        g.add_edge("USD", "EUR", Edge(0.9, 0.8991, True))
        with tempfile.TemporaryDirectory() as tmp:
            with open(write_graph_json(g, tmp), encoding="utf-8") as f:
                data = json.load(f)

        self.assertEqual(data["nodes"], ["EUR", "USD"])
        self.assertEqual(data["edges"][0]["to"], "EUR")

    def test_summary_lists_paths(self) -> None:
        md = render_summary_md(_outcome([_two_hop()]))

        self.assertIn("## Top 1 Legal Paths", md)
        self.assertIn("USD -> EUR -> GBP", md)
        self.assertIn("## Best Path Result", md)

    def test_summary_without_paths(self) -> None:
        md = render_summary_md(_outcome([]))

        self.assertIn("No legal paths found from USD to GBP", md)
        self.assertNotIn("Best Path Result", md)


if __name__ == "__main__":
    unittest.main()
