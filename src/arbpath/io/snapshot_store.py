from __future__ import annotations

import json
from pathlib import Path

from arbpath.core.dto import RateSnapshot
from arbpath.core.errors import DataSourceError
from arbpath.io.schemas import snapshot_from_dict, snapshot_to_dict


def write_snapshot(snapshot: RateSnapshot, out_dir: str, filename: str = "snapshot.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2)

    return str(out_path)


def load_snapshot(path: str) -> RateSnapshot:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise DataSourceError(f"Cannot read snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise DataSourceError(f"Invalid snapshot file: {path}")
    try:
        return snapshot_from_dict(data)
    except (TypeError, ValueError) as e:
        raise DataSourceError(f"Invalid snapshot file {path}: {e}") from e
