"""
Operation and API dialect tags.

The operation tag drives identifier resolution; the dialect tag drives
header applicability and response repair.

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from enum import Enum


class Operation(str, Enum):
    """
    Semantic operation being prepared against the remote service.

    Only a handful of these change how identifiers are resolved; the rest
    are carried so callers can use one vocabulary. Any plain string is
    also accepted wherever an operation is expected and passes through
    untouched.
    """

    CREATE = "create"
    UPDATE = "update"
    UPSERT = "upsert"
    DELETE = "delete"
    HARD_DELETE = "hardDelete"
    UNDELETE = "undelete"
    RETRIEVE = "retrieve"
    QUERY = "query"
    QUERY_ALL = "queryAll"
    SEARCH = "search"
    MERGE = "merge"
    DESCRIBE_SOBJECTS = "describeSObjects"
    FIND_DUPLICATES = "findDuplicates"
    FIND_DUPLICATES_BY_IDS = "findDuplicatesByIds"


def operation_name(operation: Operation | str | None) -> str:
    """Return the wire name of an operation (enum value or the string as given)."""
    if operation is None:
        return ""
    if isinstance(operation, Operation):
        return operation.value
    return str(operation)


class ApiDialect(str, Enum):
    """
    Wire dialect of the remote service.

    Values match the tags used throughout the package; ``parse`` also
    accepts the long bulk names (``"Bulk 1.0"``, ``"Bulk 2.0"``).
    """

    REST = "REST"
    SOAP = "SOAP"
    BULK1 = "Bulk1"
    BULK2 = "Bulk2"
    METADATA = "Metadata"

    @classmethod
    def parse(cls, value: ApiDialect | str | None) -> ApiDialect | None:
        """Resolve a dialect tag, returning None when it is not recognised."""
        if value is None:
            return None
        if isinstance(value, ApiDialect):
            return value
        if not isinstance(value, str):
            return None
        return _DIALECT_ALIASES.get(value.strip().lower())


_DIALECT_ALIASES: dict[str, ApiDialect] = {
    **{d.value.lower(): d for d in ApiDialect},
    "bulk 1.0": ApiDialect.BULK1,
    "bulk1.0": ApiDialect.BULK1,
    "bulk 2.0": ApiDialect.BULK2,
    "bulk2.0": ApiDialect.BULK2,
}


__all__ = [
    "Operation",
    "operation_name",
    "ApiDialect",
]
