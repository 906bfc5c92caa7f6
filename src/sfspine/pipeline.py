"""Request/response normalization pipeline.

Chains the core components in the order a per-operation dispatcher
needs them:

    prepare_request:   coerce -> resolve -> headers
    finalize_response: repair

Everything here runs before the request is sent or after the response
is parsed; a failure in ``prepare_request`` means nothing went over the
wire.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sfspine.core.coerce import coerce
from sfspine.core.enums import ApiDialect, Operation, operation_name
from sfspine.core.errors import UnsupportedDialectError
from sfspine.core.headers import HeaderBundle, headers
from sfspine.core.identifiers import resolve
from sfspine.core.logging import LogContext, get_logger
from sfspine.core.repair import repair
from sfspine.core.settings import get_settings
from sfspine.core.table import RecordTable

logger = get_logger(__name__)


@dataclass
class PreparedRequest:
    """Normalized input for one request, ready for a dialect request builder."""

    operation: str
    dialect: ApiDialect
    table: RecordTable
    headers: HeaderBundle = field(default_factory=dict)


def _dialect_or_default(dialect: ApiDialect | str | None) -> ApiDialect:
    if dialect is None:
        return get_settings().default_dialect
    parsed = ApiDialect.parse(dialect)
    if parsed is None:
        raise UnsupportedDialectError(dialect)
    return parsed


def prepare_request(
    input_data: Any,
    operation: Operation | str,
    dialect: ApiDialect | str | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> PreparedRequest:
    """Normalize caller input and negotiate headers for one request.

    Raises:
        CoercionError: ``input_data`` cannot be enumerated.
        MissingIdentifierError: ``operation`` needs an Id column and has none.
        UnsupportedDialectError: ``dialect`` is not a known tag.
    """
    op = operation_name(operation)
    resolved_dialect = _dialect_or_default(dialect)
    with LogContext(operation=op, dialect=resolved_dialect.value):
        table = resolve(coerce(input_data), op)
        bundle = headers(resolved_dialect, overrides)
        logger.info(
            "request_prepared",
            n_rows=table.n_rows,
            columns=table.column_names,
            headers=len(bundle),
        )
    return PreparedRequest(operation=op, dialect=resolved_dialect, table=table, headers=bundle)


def finalize_response(table: RecordTable, dialect: ApiDialect | str | None = None) -> RecordTable:
    """Repair a parsed response table before it is returned to the caller."""
    resolved_dialect = dialect if dialect is not None else get_settings().default_dialect
    repaired = repair(table, resolved_dialect)
    logger.info(
        "response_finalized",
        dialect=str(getattr(resolved_dialect, "value", resolved_dialect)),
        n_rows=repaired.n_rows,
        dropped=table.n_cols - repaired.n_cols,
    )
    return repaired


__all__ = [
    "PreparedRequest",
    "prepare_request",
    "finalize_response",
]
