"""
Record table - the canonical tabular form exchanged with callers.

A ``RecordTable`` is an ordered set of uniquely named columns that all
share one row count. Tables are treated as values: every transform
returns a new table and leaves the original untouched, so a table handed
to ``resolve`` or ``repair`` can be reused by the caller afterwards.

Manifesto:
    Callers hand over scalars, dicts, lists, or ready-made tables. Every
    component downstream of coercion works on exactly one shape, which
    keeps rename and drop rules simple to state and to test.

    - **Ordered:** column order and row order survive every transform
    - **Rectangular:** unequal column lengths are rejected at construction
    - **Immutable by convention:** transforms return copies

Examples:
    >>> t = RecordTable({"Id": ["001A", "001B"], "Name": ["Acme", "Globex"]})
    >>> t.n_rows, t.column_names
    (2, ['Id', 'Name'])
    >>> t.rename("Name", "AccountName").column_names
    ['Id', 'AccountName']

Tags:
    record-table, tabular, data-model, sforce-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from sfspine.core.errors import TableShapeError


class RecordTable:
    """Ordered, rectangular, named-column table."""

    __slots__ = ("_columns",)

    def __init__(self, columns: Mapping[str, Iterable[Any]] | None = None):
        built: dict[str, list[Any]] = {}
        for name, values in (columns or {}).items():
            built[str(name)] = list(values)

        lengths = {name: len(values) for name, values in built.items()}
        if len(set(lengths.values())) > 1:
            raise TableShapeError(
                f"Columns must have equal length, got {lengths}"
            ).with_context(columns=list(built))

        self._columns = built

    # -- Constructors -------------------------------------------------------

    @classmethod
    def empty(cls) -> RecordTable:
        return cls({})

    @classmethod
    def from_records(cls, rows: Iterable[Mapping[str, Any]]) -> RecordTable:
        """Build a table from row mappings.

        Columns are the union of the row keys in first-seen order; cells a
        row does not provide are filled with ``None``.
        """
        rows = list(rows)
        names: dict[str, None] = {}
        for row in rows:
            for key in row:
                names.setdefault(str(key), None)
        return cls({name: [row.get(name) for row in rows] for name in names})

    # -- Accessors ----------------------------------------------------------

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    @property
    def n_cols(self) -> int:
        return len(self._columns)

    @property
    def n_rows(self) -> int:
        for values in self._columns.values():
            return len(values)
        return 0

    def column(self, name: str) -> list[Any]:
        """Return a copy of one column's values."""
        return list(self._columns[name])

    def rows(self) -> Iterator[dict[str, Any]]:
        """Iterate rows as ``{column: value}`` dicts, in row order."""
        names = self.column_names
        for i in range(self.n_rows):
            yield {name: self._columns[name][i] for name in names}

    def to_dict(self) -> dict[str, list[Any]]:
        return {name: list(values) for name, values in self._columns.items()}

    # -- Transforms ---------------------------------------------------------

    def rename(self, old: str, new: str) -> RecordTable:
        """Return a copy with column ``old`` renamed to ``new`` in place."""
        if old not in self._columns:
            raise KeyError(f"Column '{old}' not found. Available: {', '.join(self._columns)}")
        if old == new:
            return RecordTable(self._columns)
        if new in self._columns:
            raise TableShapeError(
                f"Cannot rename '{old}' to '{new}': column already exists"
            ).with_context(columns=self.column_names)
        return RecordTable(
            {(new if name == old else name): values for name, values in self._columns.items()}
        )

    def drop(self, names: Iterable[str], *, missing_ok: bool = True) -> RecordTable:
        """Return a copy without the named columns."""
        to_drop = set(names)
        if not missing_ok:
            absent = sorted(to_drop - set(self._columns))
            if absent:
                raise KeyError(f"Columns not found: {', '.join(absent)}")
        return RecordTable(
            {name: values for name, values in self._columns.items() if name not in to_drop}
        )

    # -- Dunder -------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __len__(self) -> int:
        return self.n_rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordTable):
            return NotImplemented
        return list(self._columns.items()) == list(other._columns.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RecordTable(n_rows={self.n_rows}, columns={self.column_names})"


__all__ = ["RecordTable"]
