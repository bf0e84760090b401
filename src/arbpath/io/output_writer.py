from __future__ import annotations

import json
from pathlib import Path

from arbpath.core.models import Graph, SearchOutcome
from arbpath.io.schemas import graph_to_dict, outcome_to_dict


def write_results_json(outcome: SearchOutcome, out_dir: str, filename: str = "results.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(outcome_to_dict(outcome), f, indent=2)

    return str(out_path)


def write_graph_json(graph: Graph, out_dir: str, filename: str = "graph.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(graph_to_dict(graph), f, indent=2)

    return str(out_path)


def render_summary_md(outcome: SearchOutcome) -> str:
    q = outcome.query
    lines = []
    lines.append("# Conversion Path Summary\n")
    lines.append(f"- Route: **{q.source} -> {q.target}**\n")
    lines.append(f"- Amount: **{q.amount:.2f} {q.source}**\n")
    lines.append(f"- Max trades: **{q.hops}**\n")
    lines.append(f"- Graph: **{outcome.graph_nodes}** currencies, **{outcome.graph_edges}** edges\n")
    lines.append(f"- Paths checked: **{outcome.paths_checked}**\n")
    lines.append("\n")

    if not outcome.results:
        lines.append(
            f"_No legal paths found from {q.source} to {q.target} "
            f"within {q.hops} trade(s). Try different currencies._\n"
        )
        return "".join(lines)

    lines.append(f"## Top {len(outcome.results)} Legal Paths\n\n")
    for idx, r in enumerate(outcome.results, start=1):
        lines.append(f"### {idx}. {' -> '.join(r.path)}\n\n")
        lines.append(f"- Starting amount: {q.amount:.6f} {q.source}\n")
        lines.append(f"- Final amount: {r.final_amount(q.amount):.6f} {q.target}\n")
        lines.append(f"- Gain multiplier: {r.multiplier:.6f}x ({r.gain_pct:+.4f}%)\n\n")
        lines.append("| # | Trade | Rate | Effective |\n")
        lines.append("|---|-------|------|-----------|\n")
        for n, s in enumerate(r.breakdown, start=1):
            lines.append(
                f"| {n} | {s.from_currency} -> {s.to_currency} "
                f"| {s.rate:.6f} | {s.effective:.6f} |\n"
            )
        lines.append("\n")

    best = outcome.best
    lines.append("## Best Path Result\n\n")
    lines.append(
        f"**{best.final_amount(q.amount):.6f} {q.target}** from {q.amount:.2f} {q.source} "
        f"({best.multiplier:.6f}x multiplier)\n"
    )
    return "".join(lines)


def write_summary_md(outcome: SearchOutcome, out_dir: str, filename: str = "summary.md") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        f.write(render_summary_md(outcome))

    return str(out_path)
