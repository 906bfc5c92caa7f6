"""sforce-spine core -- normalization primitives for the record service dialects.

Manifesto:
    Each dialect of the remote service (REST, SOAP, Bulk 1.0, Bulk 2.0,
    Metadata) wants its input shaped a little differently and answers in
    a slightly different shape. Transport, auth and wire encoding are
    somebody else's problem. ``sfspine.core`` owns only the shape
    decisions in between, as pure, synchronous functions over in-memory
    tables.

Architecture::

    Layer 1 -- Types & Errors
        errors.py        Structured error hierarchy (SfSpineError, ...)
        enums.py         Operation and ApiDialect tags
        table.py         RecordTable (ordered, rectangular, named columns)

    Layer 2 -- Normalization
        coerce.py        Arbitrary input -> RecordTable
        identifiers.py   Operation-aware Id/sObjectType renaming
        headers.py       Dialect-scoped header registry and negotiation
        repair.py        SOAP null-relationship column repair

    Layer 3 -- Cross-Cutting
        logging.py       Structured logging (structlog)
        settings.py      SfSpineSettings (pydantic-settings)
        csv_export.py    Bulk-compatible CSV writer
"""

from sfspine.core.coerce import InputShape, classify, coerce
from sfspine.core.enums import ApiDialect, Operation
from sfspine.core.errors import (
    CoercionError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    MissingIdentifierError,
    SfSpineError,
    TableShapeError,
    UnsupportedDialectError,
    ValidationError,
)
from sfspine.core.headers import HEADER_REGISTRY, HeaderBundle, HeaderSpec, headers
from sfspine.core.identifiers import resolve
from sfspine.core.repair import repair
from sfspine.core.table import RecordTable

__all__ = [
    # Types
    "RecordTable",
    "Operation",
    "ApiDialect",
    "InputShape",
    "HeaderSpec",
    "HeaderBundle",
    "HEADER_REGISTRY",
    # Operations
    "classify",
    "coerce",
    "resolve",
    "headers",
    "repair",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "SfSpineError",
    "ValidationError",
    "CoercionError",
    "MissingIdentifierError",
    "TableShapeError",
    "ConfigError",
    "UnsupportedDialectError",
]
