"""
Header registry - dialect-scoped request option bundles with defaults.

Every dialect of the remote service accepts its own set of request
modifiers: SOAP has envelope headers (``AllOrNoneHeader``,
``AssignmentRuleHeader``, ...), REST has ``Sforce-*`` HTTP headers that
mirror a subset of them, and Bulk 1.0 has job-level HTTP headers such as
PK chunking. The registry is the single catalog of these bundles, their
documented defaults, and the dialects each one is meaningful for.

Manifesto:
    A request builder should never carry a function signature with
    twenty defaulted header parameters. It asks the registry for the
    bundle of one dialect and gets back defaults merged with whatever
    the caller overrode.

    - **Read-only catalog:** built once at import, never mutated
    - **Pure negotiation:** merge-and-filter, no session or user lookups
    - **Permissive:** unknown dialects or headers mean "no header", not
      an error

Architecture:
    ::

        HEADER_REGISTRY: name -> HeaderSpec(defaults, dialects)

        headers(dialect, overrides)
            │
            ├─ dialect unknown ───────────────► {}
            │
            ├─ filter: specs applicable to dialect
            │
            └─ merge: deepcopy(defaults) ◄── overrides (field by field,
                                              known fields only)

Examples:
    >>> bundle = headers("SOAP", {"QueryOptions": {"batchSize": 1000}})
    >>> bundle["QueryOptions"]
    {'batchSize': 1000}
    >>> "AssignmentRuleHeader" in headers("REST")
    False
    >>> headers("Carrier Pigeon")
    {}

Guardrails:
    ❌ DON'T: Fetch the user's locale or session inside the registry
    ✅ DO: Pass identity-dependent values as overrides

Tags:
    headers, options, registry, dialect, defaults, sforce-spine

Doc-Types:
    - API Reference
    - Dialect Header Matrix
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sfspine.core.enums import ApiDialect
from sfspine.core.logging import get_logger

logger = get_logger(__name__)

HeaderBundle = dict[str, dict[str, Any]]

SOAP = ApiDialect.SOAP
REST = ApiDialect.REST
BULK1 = ApiDialect.BULK1
BULK2 = ApiDialect.BULK2
METADATA = ApiDialect.METADATA


@dataclass(frozen=True)
class HeaderSpec:
    """A named header bundle with its default fields and applicable dialects."""

    name: str
    defaults: Mapping[str, Any]
    dialects: frozenset[ApiDialect]
    description: str = ""

    def applies_to(self, dialect: ApiDialect) -> bool:
        return dialect in self.dialects

    def merged(self, override: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return a fresh copy of the defaults with ``override`` applied per field."""
        values = copy.deepcopy(dict(self.defaults))
        for key, value in (override or {}).items():
            if key not in values:
                logger.debug("header_field_ignored", header=self.name, field=key)
                continue
            values[key] = copy.deepcopy(value)
        return values


@dataclass
class _Catalog:
    specs: dict[str, HeaderSpec] = field(default_factory=dict)

    def add(
        self,
        name: str,
        defaults: Mapping[str, Any],
        dialects: Iterable[ApiDialect],
        description: str = "",
    ) -> None:
        if name in self.specs:
            raise ValueError(f"Header '{name}' is already registered")
        self.specs[name] = HeaderSpec(
            name=name,
            defaults=MappingProxyType(dict(defaults)),
            dialects=frozenset(dialects),
            description=description,
        )


def _owner_change_defaults() -> list[dict[str, Any]]:
    return [
        {"execute": False, "type": "EnforceNewOwnerHasReadAccess"},
        {"execute": True, "type": "KeepSalesTeam"},
        {"execute": False, "type": "KeepSalesTeamGrantCurrentOwnerReadWriteAccess"},
        {"execute": True, "type": "TransferOpenActivities"},
        {"execute": False, "type": "TransferNotesAndAttachments"},
        {"execute": True, "type": "TransferOtherOpenOpportunities"},
        {"execute": True, "type": "TransferOwnedOpenOpportunities"},
        {"execute": True, "type": "TransferContracts"},
        {"execute": True, "type": "TransferOrders"},
        {"execute": True, "type": "TransferContacts"},
    ]


def _build_catalog() -> Mapping[str, HeaderSpec]:
    c = _Catalog()

    # -- SOAP envelope headers (some mirrored by REST / Metadata) ------------
    c.add("AllOrNoneHeader", {"allOrNone": False}, [SOAP, REST, METADATA],
          "Roll back all records in a call if any one fails")
    c.add("AllowFieldTruncationHeader", {"allowFieldTruncation": False}, [SOAP],
          "Truncate oversized string values instead of failing")
    c.add("AssignmentRuleHeader", {"useDefaultRule": True}, [SOAP],
          "Apply the default case/lead assignment rule")
    c.add("CallOptions", {"client": None, "defaultNamespace": None},
          [SOAP, REST, BULK1, BULK2, METADATA],
          "Client identifier and default package namespace")
    c.add("DisableFeedTrackingHeader", {"disableFeedTracking": False}, [SOAP],
          "Skip feed tracking for bulk-style changes")
    c.add("DuplicateRuleHeader",
          {"allowSave": False, "includeRecordDetails": False, "runAsCurrentUser": True},
          [SOAP, REST],
          "Duplicate rule enforcement for creates and updates")
    c.add("EmailHeader",
          {"triggerAutoResponseEmail": False, "triggerOtherEmail": False, "triggerUserEmail": True},
          [SOAP],
          "Which automatic emails the call may trigger")
    c.add("LimitInfoHeader", {"current": "20", "limit": "250", "type": "API REQUESTS"},
          [SOAP, REST],
          "API usage reported back by the service")
    c.add("LocaleOptions", {"language": None}, [SOAP],
          "Language for labels returned by describe calls")
    c.add("LoginScopeHeader", {"organizationId": None, "portalId": None}, [SOAP],
          "Organization/portal scope for self-service logins")
    c.add("MruHeader", {"updateMru": False}, [SOAP],
          "Update the most-recently-used list")
    c.add("OwnerChangeOptions", {"options": _owner_change_defaults()}, [SOAP],
          "Side effects of changing a record's owner")
    c.add("PackageVersionHeader", {"packageVersions": None}, [SOAP, REST],
          "Managed package versions to resolve references against")
    c.add("QueryOptions", {"batchSize": 500}, [SOAP, REST],
          "Records returned per query batch")
    c.add("SessionHeader", {"sessionId": None}, [SOAP, METADATA],
          "Session Id for envelope-authenticated calls")
    c.add("UserTerritoryDeleteHeader", {"transferToUserId": None}, [SOAP],
          "User who receives open opportunities on territory removal")

    # -- Bulk HTTP headers ----------------------------------------------------
    c.add("ContentTypeHeader", {"Content-Type": "application/xml"}, [BULK1],
          "Content type of job and batch payloads")
    c.add("BatchRetryHeader", {"Sforce-Disable-Batch-Retry": False}, [BULK1],
          "Disable automatic batch retries")
    c.add("LineEndingHeader", {"Sforce-Line-Ending": None}, [BULK1, BULK2],
          "Line ending of uploaded CSV data (LF or CRLF)")
    c.add("PKChunkingHeader", {"Sforce-Enable-PKChunking": False}, [BULK1],
          "Split bulk queries on primary key ranges")

    return MappingProxyType(c.specs)


HEADER_REGISTRY: Mapping[str, HeaderSpec] = _build_catalog()


def get_header_spec(name: str) -> HeaderSpec:
    """Get a header spec by name."""
    if name not in HEADER_REGISTRY:
        available = ", ".join(sorted(HEADER_REGISTRY))
        raise KeyError(f"Header '{name}' not found. Available: {available}")
    return HEADER_REGISTRY[name]


def list_headers(dialect: ApiDialect | str | None = None) -> list[str]:
    """List header names, optionally only those applicable to ``dialect``."""
    if dialect is None:
        return sorted(HEADER_REGISTRY)
    parsed = ApiDialect.parse(dialect)
    if parsed is None:
        return []
    return sorted(name for name, spec in HEADER_REGISTRY.items() if spec.applies_to(parsed))


def applicable_dialects(name: str) -> frozenset[ApiDialect]:
    return get_header_spec(name).dialects


def headers(
    dialect: ApiDialect | str | None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> HeaderBundle:
    """Negotiate the header bundle for ``dialect``.

    Returns every header applicable to the dialect with ``overrides``
    merged over its defaults field by field. Overrides for unknown or
    inapplicable headers, and for unknown fields, are ignored. An
    unrecognised dialect yields an empty bundle.
    """
    parsed = ApiDialect.parse(dialect)
    if parsed is None:
        logger.debug("headers_skipped", dialect=str(dialect), reason="unknown_dialect")
        return {}

    overrides = overrides or {}
    bundle: HeaderBundle = {}
    for name, spec in HEADER_REGISTRY.items():
        if spec.applies_to(parsed):
            bundle[name] = spec.merged(overrides.get(name))

    for name in overrides:
        if name not in bundle:
            logger.debug("header_override_ignored", header=name, dialect=parsed.value)

    logger.debug(
        "headers_negotiated",
        dialect=parsed.value,
        headers=list(bundle),
        overridden=[name for name in overrides if name in bundle],
    )
    return bundle


__all__ = [
    "HeaderBundle",
    "HeaderSpec",
    "HEADER_REGISTRY",
    "get_header_spec",
    "list_headers",
    "applicable_dialects",
    "headers",
]
