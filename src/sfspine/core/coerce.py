"""
Input coercion - arbitrary caller values to a ``RecordTable``.

Callers pass whatever they have: a single Id string, a list of Ids, a
dict describing one record, nested lists pulled from another API, or a
table they already built. ``coerce`` classifies the value once into a
closed set of shapes and hands it to exactly one converter.

Manifesto:
    Runtime type probing happens here and nowhere else. Downstream
    components receive a ``RecordTable`` and never ask what the caller
    originally passed.

Architecture:
    ::

        input ──► classify() ──► InputShape
                                   │
            ┌──────────┬───────────┼────────────┬──────────┐
            ▼          ▼           ▼            ▼          ▼
          TABLE     MAPPING     SEQUENCE      SCALAR    (opaque)
          as-is     key→column  one 'value'   1×1       CoercionError
                    (recycled)  column

Examples:
    >>> coerce("001A000001").to_dict()
    {'value': ['001A000001']}
    >>> coerce({"Name": "Acme", "Industry": "Retail"}).to_dict()
    {'Name': ['Acme'], 'Industry': ['Retail']}
    >>> coerce({"Id": ["001A", "001B"], "Type": "Account"}).to_dict()
    {'Id': ['001A', '001B'], 'Type': ['Account', 'Account']}
    >>> coerce([["a", "b"], ["c"]]).n_rows
    2

Tags:
    coercion, input-normalization, record-table, sforce-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from sfspine.core.errors import CoercionError
from sfspine.core.logging import get_logger
from sfspine.core.table import RecordTable

logger = get_logger(__name__)

# Column name given to values that arrive without names
VALUE_COLUMN = "value"

SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    Decimal,
    date,
    datetime,
    time,
)


class InputShape(str, Enum):
    """Closed set of input shapes recognised at the API boundary."""

    TABLE = "table"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, SCALAR_TYPES)


def classify(value: Any) -> InputShape:
    """Determine the shape of a caller-supplied value.

    Raises:
        CoercionError: The value is neither scalar, mapping nor iterable.
    """
    if isinstance(value, RecordTable):
        return InputShape.TABLE
    if _is_scalar(value):
        return InputShape.SCALAR
    if isinstance(value, Mapping):
        return InputShape.MAPPING
    if isinstance(value, Iterable):
        return InputShape.SEQUENCE
    raise CoercionError(
        f"Cannot enumerate input of type {type(value).__name__} into rows and columns",
        input_type=type(value).__name__,
    )


# =============================================================================
# Converters (one per shape)
# =============================================================================


def _from_table(value: RecordTable) -> RecordTable:
    return value


def _from_scalar(value: Any) -> RecordTable:
    return RecordTable({VALUE_COLUMN: [value]})


def _from_mapping(value: Mapping[Any, Any]) -> RecordTable:
    columns: dict[str, list[Any]] = {}
    for key, cell in value.items():
        if _is_scalar(cell) or isinstance(cell, Mapping) or not isinstance(cell, Iterable):
            columns[str(key)] = [cell]
        else:
            columns[str(key)] = list(cell)

    n_rows = max((len(cells) for cells in columns.values()), default=0)
    for name, cells in columns.items():
        if len(cells) == n_rows:
            continue
        if not cells or n_rows % len(cells):
            lengths = {k: len(v) for k, v in columns.items()}
            raise CoercionError(
                f"Mapping values cannot be recycled to {n_rows} rows: {lengths}",
                input_type=type(value).__name__,
            ).with_context(columns=list(columns))
        columns[name] = cells * (n_rows // len(cells))
    return RecordTable(columns)


def _from_sequence(value: Iterable[Any]) -> RecordTable:
    return RecordTable({VALUE_COLUMN: list(value)})


_CONVERTERS: dict[InputShape, Callable[[Any], RecordTable]] = {
    InputShape.TABLE: _from_table,
    InputShape.MAPPING: _from_mapping,
    InputShape.SEQUENCE: _from_sequence,
    InputShape.SCALAR: _from_scalar,
}


def coerce(value: Any) -> RecordTable:
    """Convert an arbitrary input value into a ``RecordTable``.

    - A ``RecordTable`` is returned unchanged.
    - A mapping is one logical record: each key becomes a column. Sequence
      values become multi-row columns; shorter values are recycled to the
      longest length when it is a multiple of theirs.
    - A scalar or an unnamed sequence becomes a single ``value`` column,
      one row per element. Nested elements stay whole as compound cells.

    Raises:
        CoercionError: The input cannot be enumerated at all.
    """
    shape = classify(value)
    table = _CONVERTERS[shape](value)
    logger.debug(
        "input_coerced",
        shape=shape.value,
        n_rows=table.n_rows,
        n_cols=table.n_cols,
    )
    return table


__all__ = [
    "InputShape",
    "VALUE_COLUMN",
    "classify",
    "coerce",
]
