"""Tests for sfspine.core.headers module."""

import pytest

from sfspine.core.enums import ApiDialect
from sfspine.core.headers import (
    HEADER_REGISTRY,
    applicable_dialects,
    get_header_spec,
    headers,
    list_headers,
)

SOAP_ONLY = [
    name
    for name, spec in HEADER_REGISTRY.items()
    if spec.dialects == frozenset({ApiDialect.SOAP})
]


class TestRegistry:
    """Test the static header catalog."""

    def test_documented_defaults(self):
        """Spot-check defaults for well-known headers."""
        assert get_header_spec("AllOrNoneHeader").defaults == {"allOrNone": False}
        assert get_header_spec("AssignmentRuleHeader").defaults == {"useDefaultRule": True}
        assert get_header_spec("QueryOptions").defaults == {"batchSize": 500}
        assert get_header_spec("DisableFeedTrackingHeader").defaults == {"disableFeedTracking": False}
        assert get_header_spec("PKChunkingHeader").defaults == {"Sforce-Enable-PKChunking": False}

    def test_defaults_read_only(self):
        """Registry defaults cannot be mutated in place."""
        with pytest.raises(TypeError):
            get_header_spec("QueryOptions").defaults["batchSize"] = 1  # type: ignore[index]

    def test_unknown_header(self):
        """Looking up an unknown header lists what is available."""
        with pytest.raises(KeyError, match="Available"):
            get_header_spec("NoSuchHeader")

    def test_every_header_has_a_dialect(self):
        assert all(spec.dialects for spec in HEADER_REGISTRY.values())

    def test_soap_only_examples(self):
        """AssignmentRuleHeader and EmailHeader are SOAP-only."""
        assert "AssignmentRuleHeader" in SOAP_ONLY
        assert "EmailHeader" in SOAP_ONLY

    def test_applicable_dialects(self):
        assert applicable_dialects("PKChunkingHeader") == frozenset({ApiDialect.BULK1})

    def test_list_headers(self):
        assert list_headers() == sorted(HEADER_REGISTRY)
        assert list_headers("Metadata") == ["AllOrNoneHeader", "CallOptions", "SessionHeader"]
        assert list_headers("nope") == []


class TestNegotiation:
    """Test headers(dialect, overrides)."""

    def test_rest_excludes_soap_only(self):
        """REST never receives SOAP-only bundles."""
        bundle = headers("REST", {})
        assert bundle
        for name in SOAP_ONLY:
            assert name not in bundle

    def test_soap_override_merged_per_field(self):
        """An override replaces one field and the rest keep defaults."""
        bundle = headers("SOAP", {"QueryOptions": {"batchSize": 1000}})
        assert bundle["QueryOptions"] == {"batchSize": 1000}
        assert bundle["AllOrNoneHeader"] == {"allOrNone": False}
        assert bundle["EmailHeader"] == {
            "triggerAutoResponseEmail": False,
            "triggerOtherEmail": False,
            "triggerUserEmail": True,
        }

    def test_partial_override_keeps_other_fields(self):
        """Overriding one field of a multi-field header keeps the others."""
        bundle = headers(ApiDialect.SOAP, {"DuplicateRuleHeader": {"allowSave": True}})
        assert bundle["DuplicateRuleHeader"] == {
            "allowSave": True,
            "includeRecordDetails": False,
            "runAsCurrentUser": True,
        }

    def test_bulk1_headers(self):
        """Bulk 1.0 gets job HTTP headers and not envelope headers."""
        bundle = headers("Bulk 1.0")
        assert set(bundle) == {
            "CallOptions",
            "ContentTypeHeader",
            "BatchRetryHeader",
            "LineEndingHeader",
            "PKChunkingHeader",
        }

    def test_bulk2_headers(self):
        assert set(headers("Bulk2")) == {"CallOptions", "LineEndingHeader"}

    def test_unknown_dialect_is_empty(self):
        """Unrecognised dialects degrade to no headers."""
        assert headers("Carrier Pigeon", {"QueryOptions": {"batchSize": 1}}) == {}
        assert headers(None) == {}

    def test_inapplicable_override_ignored(self):
        """Overrides for headers outside the dialect are dropped silently."""
        bundle = headers("REST", {"AssignmentRuleHeader": {"useDefaultRule": False}})
        assert "AssignmentRuleHeader" not in bundle

    def test_unknown_header_and_field_ignored(self):
        """Unknown header names and unknown fields are not emitted."""
        bundle = headers("SOAP", {"Bogus": {"x": 1}, "QueryOptions": {"pageSize": 9}})
        assert "Bogus" not in bundle
        assert bundle["QueryOptions"] == {"batchSize": 500}

    def test_locale_only_from_override(self):
        """Locale is never looked up; it comes only from the caller."""
        assert headers("SOAP")["LocaleOptions"] == {"language": None}
        bundle = headers("SOAP", {"LocaleOptions": {"language": "de_DE"}})
        assert bundle["LocaleOptions"] == {"language": "de_DE"}

    def test_bundle_does_not_alias_registry(self):
        """Mutating a returned bundle does not leak into later calls."""
        first = headers("SOAP")
        first["OwnerChangeOptions"]["options"][0]["execute"] = True
        first["QueryOptions"]["batchSize"] = 1
        second = headers("SOAP")
        assert second["OwnerChangeOptions"]["options"][0]["execute"] is False
        assert second["QueryOptions"]["batchSize"] == 500

    def test_override_value_copied(self):
        """Override containers are copied, not shared."""
        versions = [{"namespace": "pkg", "majorNumber": 1}]
        bundle = headers("SOAP", {"PackageVersionHeader": {"packageVersions": versions}})
        versions.append({"namespace": "other"})
        assert len(bundle["PackageVersionHeader"]["packageVersions"]) == 1
