from __future__ import annotations

from typing import Any, Dict, List

from arbpath.core.dto import RateSnapshot, TickerPrice
from arbpath.core.models import Graph, PathResult, SearchOutcome


def step_to_dict(s) -> Dict[str, Any]:
    return {
        "from": s.from_currency,
        "to": s.to_currency,
        "rate": s.rate,
        "effective": s.effective,
        "legal": s.legal,
    }


def path_result_to_dict(r: PathResult, start_amount: float) -> Dict[str, Any]:
    return {
        "path": list(r.path),
        "hops": r.hops,
        "multiplier": r.multiplier,
        "gain_pct": r.gain_pct,
        "start_amount": start_amount,
        "final_amount": r.final_amount(start_amount),
        "breakdown": [step_to_dict(s) for s in r.breakdown],
    }


def outcome_to_dict(o: SearchOutcome) -> Dict[str, Any]:
    q = o.query
    return {
        "query": {
            "source": q.source,
            "target": q.target,
            "amount": q.amount,
            "hops": q.hops,
            "top_n": q.top_n,
        },
        "graph": {"nodes": o.graph_nodes, "edges": o.graph_edges},
        "paths_checked": o.paths_checked,
        "results": [path_result_to_dict(r, q.amount) for r in o.results],
    }


def graph_to_dict(g: Graph) -> Dict[str, Any]:
    return {
        "nodes": sorted(g.nodes),
        "edges": [
            {
                "from": src,
                "to": dst,
                "rate": e.rate,
                "effective": e.effective,
                "legal": e.legal,
            }
            for src, dst, e in g.iter_edges()
        ],
    }


def snapshot_to_dict(s: RateSnapshot) -> Dict[str, Any]:
    return {
        "fetched_at": s.fetched_at,
        "fiat_rates": s.fiat_rates,
        "tickers": [{"symbol": t.symbol, "price": t.price} for t in s.tickers],
        "reference_pairs": sorted(s.reference_pairs),
    }


def snapshot_from_dict(data: Dict[str, Any]) -> RateSnapshot:
    fiat: Dict[str, Dict[str, float]] = {}
    for base, rates in (data.get("fiat_rates") or {}).items():
        if isinstance(rates, dict):
            fiat[str(base).upper()] = {str(k).upper(): float(v) for k, v in rates.items()}

    tickers: List[TickerPrice] = []
    for t in data.get("tickers") or []:
        if isinstance(t, dict) and t.get("symbol"):
            tickers.append(TickerPrice(symbol=str(t["symbol"]).upper(), price=float(t.get("price", 0))))

    return RateSnapshot(
        fiat_rates=fiat,
        tickers=tickers,
        reference_pairs=frozenset(str(p).upper() for p in data.get("reference_pairs") or []),
        fetched_at=int(data.get("fetched_at") or 0),
    )
