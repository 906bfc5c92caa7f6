"""
CSV export of record tables in the form the Bulk APIs accept.

The Bulk APIs treat an empty CSV cell as "leave the field unchanged";
clearing a field requires the literal ``#N/A``. Missing values in a
``RecordTable`` (``None``) are therefore written as ``#N/A``.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

from sfspine.core.logging import get_logger
from sfspine.core.table import RecordTable

logger = get_logger(__name__)

NA_VALUE = "#N/A"


def _render(value: Any) -> Any:
    if value is None:
        return NA_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def write_csv(table: RecordTable, path: Path | str) -> Path:
    """Write ``table`` to ``path`` with a header row; returns the path written."""
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, lineterminator="\n")
        writer.writerow(table.column_names)
        for row in table.rows():
            writer.writerow([_render(v) for v in row.values()])
    logger.debug("csv_written", path=str(path), n_rows=table.n_rows, n_cols=table.n_cols)
    return path


__all__ = ["NA_VALUE", "write_csv"]
