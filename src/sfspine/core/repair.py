"""
Linked-entity column repair for query result tables.

When a queried record has no related record (a Contact without an
Account, say), SOAP still emits an element for the relationship:
``<sf:Account xsi:nil="true"/>``. Flattened into a table this becomes a
column ``sf:Account`` that looks like a real, always-null field. The
related fields of records that *do* have an Account arrive as
``sf:Account.Name``, ``sf:Account.Industry``, ... REST responses never
contain the bare marker.

``repair`` finds entity names used as dotted prefixes and drops the bare
marker column of each, so SOAP and REST return the same schema for the
same query.

Examples:
    >>> from sfspine.core.table import RecordTable
    >>> t = RecordTable({
    ...     "sf:Id": ["003A", "003B"],
    ...     "sf:Account": [None, None],
    ...     "sf:Account.Name": ["Acme", None],
    ... })
    >>> repair(t, "SOAP").column_names
    ['sf:Id', 'sf:Account.Name']

Tags:
    response-repair, soap, relationships, null-columns, sforce-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from sfspine.core.enums import ApiDialect
from sfspine.core.errors import UnsupportedDialectError
from sfspine.core.logging import get_logger
from sfspine.core.table import RecordTable

logger = get_logger(__name__)

# namespace:Entity.Field - entity may be a custom relationship (Parent__r)
RELATIONSHIP_FIELD = re.compile(
    r"^(?P<ns>[A-Za-z_][A-Za-z0-9_]*):(?P<entity>[A-Za-z][A-Za-z0-9_]*)\.(?P<field>.+)$"
)


def relationship_prefixes(column_names: Iterable[str]) -> list[tuple[str, str]]:
    """Distinct ``(namespace, entity)`` pairs used as dotted column prefixes, in first-seen order."""
    seen: dict[tuple[str, str], None] = {}
    for name in column_names:
        match = RELATIONSHIP_FIELD.match(name)
        if match:
            seen.setdefault((match["ns"], match["entity"]), None)
    return list(seen)


def marker_columns(column_names: Iterable[str]) -> list[str]:
    """Bare relationship marker columns present in ``column_names``."""
    names = list(column_names)
    present = set(names)
    markers = [f"{ns}:{entity}" for ns, entity in relationship_prefixes(names)]
    return [m for m in markers if m in present]


def _repair_soap(table: RecordTable) -> RecordTable:
    to_drop = marker_columns(table.column_names)
    if not to_drop:
        return table
    logger.debug("linked_columns_dropped", columns=to_drop, n_rows=table.n_rows)
    return table.drop(to_drop)


def repair(table: RecordTable, dialect: ApiDialect | str) -> RecordTable:
    """Remove columns that are artifacts of null related-entity references.

    REST tables are returned as-is. SOAP tables lose every bare
    ``ns:Entity`` column for which some ``ns:Entity.Field`` column exists.

    Raises:
        UnsupportedDialectError: ``dialect`` is neither REST nor SOAP.
    """
    parsed = ApiDialect.parse(dialect)
    if parsed is ApiDialect.REST:
        return table
    if parsed is ApiDialect.SOAP:
        return _repair_soap(table)
    raise UnsupportedDialectError(dialect)


__all__ = [
    "RELATIONSHIP_FIELD",
    "relationship_prefixes",
    "marker_columns",
    "repair",
]
