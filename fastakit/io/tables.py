"""Tabular export of per-record results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ..logging_utils import get_logger

logger = get_logger("tables")


def records_frame(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Build a DataFrame from flat dictionaries, dropping nested values."""
    flat = [{key: value for key, value in row.items() if not isinstance(value, (list, dict))} for row in rows]
    return pd.DataFrame(flat)


def write_table(rows: Iterable[Mapping[str, Any]], path: Path) -> Path:
    """Write rows as CSV, or Parquet when the path ends in .parquet."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = records_frame(rows)
    if path.suffix.lower() == ".parquet":
        frame.to_parquet(path, index=False)
    else:
        frame.to_csv(path, index=False)
    logger.info("Wrote %s rows -> %s", len(frame), path)
    return path
