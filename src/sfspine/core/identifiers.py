"""
Identifier resolution - operation-aware renaming of the Id column.

Different operations address records differently: ``describeSObjects``
takes object type names, ``delete``/``retrieve`` take record Ids, and
``update`` needs an Id alongside the field values. Callers rarely name
their columns the way the service expects, so ``resolve`` applies an
ordered list of declarative rename rules and then enforces that the
operations which address existing records actually carry an ``Id``.

Manifesto:
    Precedence is data, not nested conditionals. Each ``RenameRule``
    states which operations it covers, when it applies, and what it
    renames to, and rules run in list order.

    A missing identifier is detected here, before any request is built,
    so a bad dataset never costs a round trip.

Architecture:
    ::

        RENAME_RULES (in order)
        ┌──────────────────────────────┬──────────────────┬─────────────┐
        │ operations                   │ applies when     │ target      │
        ├──────────────────────────────┼──────────────────┼─────────────┤
        │ describeSObjects             │ exactly 1 column │ sObjectType │
        │ delete, retrieve,            │ exactly 1 column │ Id          │
        │   findDuplicatesByIds        │                  │             │
        │ delete, update,              │ name ~ ^ids?$ /i │ Id          │
        │   findDuplicatesByIds        │                  │             │
        └──────────────────────────────┴──────────────────┴─────────────┘
        then: delete, update, findDuplicatesByIds require 'Id'

Examples:
    >>> from sfspine.core.table import RecordTable
    >>> t = RecordTable({"IDS": ["001A"], "Name": ["x"]})
    >>> resolve(t, "update").column_names
    ['Id', 'Name']

Tags:
    identifier, id-column, rename-rules, operation-policy, sforce-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from sfspine.core.enums import Operation, operation_name
from sfspine.core.errors import MissingIdentifierError
from sfspine.core.logging import get_logger
from sfspine.core.table import RecordTable

logger = get_logger(__name__)

ID_COLUMN = "Id"
SOBJECT_TYPE_COLUMN = "sObjectType"

_ID_NAME = re.compile(r"^IDS?$", re.IGNORECASE)


@dataclass(frozen=True)
class RenameRule:
    """One declarative rename step.

    ``select`` receives the current column names and returns the column
    to rename, or None when the rule does not apply.
    """

    name: str
    operations: frozenset[str]
    select: Callable[[list[str]], str | None]
    target: str

    def apply(self, table: RecordTable, operation: str) -> RecordTable:
        if operation not in self.operations:
            return table
        column = self.select(table.column_names)
        if column is None or column == self.target:
            return table
        if self.target in table:
            # An exact target column already exists; leave both alone.
            return table
        logger.debug(
            "identifier_resolved",
            rule=self.name,
            operation=operation,
            column=column,
            target=self.target,
        )
        return table.rename(column, self.target)


def _only_column(columns: list[str]) -> str | None:
    return columns[0] if len(columns) == 1 else None


def _id_like_column(columns: list[str]) -> str | None:
    for name in columns:
        if _ID_NAME.match(name):
            return name
    return None


def _ops(*operations: Operation) -> frozenset[str]:
    return frozenset(op.value for op in operations)


RENAME_RULES: tuple[RenameRule, ...] = (
    RenameRule(
        name="single_column_sobject_type",
        operations=_ops(Operation.DESCRIBE_SOBJECTS),
        select=_only_column,
        target=SOBJECT_TYPE_COLUMN,
    ),
    RenameRule(
        name="single_column_id",
        operations=_ops(Operation.DELETE, Operation.RETRIEVE, Operation.FIND_DUPLICATES_BY_IDS),
        select=_only_column,
        target=ID_COLUMN,
    ),
    RenameRule(
        name="id_like_column",
        operations=_ops(Operation.DELETE, Operation.UPDATE, Operation.FIND_DUPLICATES_BY_IDS),
        select=_id_like_column,
        target=ID_COLUMN,
    ),
)

# Operations that address existing records and cannot be sent without an Id
REQUIRES_ID: frozenset[str] = _ops(
    Operation.DELETE, Operation.UPDATE, Operation.FIND_DUPLICATES_BY_IDS
)


def resolve(table: RecordTable, operation: Operation | str | None) -> RecordTable:
    """Apply the rename rules for ``operation`` and enforce Id presence.

    Returns a new table; rows and column order are unchanged apart from
    at most one renamed column per rule.

    Raises:
        MissingIdentifierError: ``operation`` requires an ``Id`` column and
            none could be resolved.
    """
    op = operation_name(operation)
    resolved = RecordTable(table.to_dict())
    for rule in RENAME_RULES:
        resolved = rule.apply(resolved, op)

    if op in REQUIRES_ID and ID_COLUMN not in resolved:
        logger.warning(
            "identifier_missing",
            operation=op,
            columns=resolved.column_names,
        )
        raise MissingIdentifierError(op, resolved.column_names)
    return resolved


__all__ = [
    "ID_COLUMN",
    "SOBJECT_TYPE_COLUMN",
    "RenameRule",
    "RENAME_RULES",
    "REQUIRES_ID",
    "resolve",
]
