"""
Shared pytest fixtures and configuration for sforce-spine tests.

This module provides:
- Settings cache and logging reset for test isolation
- Sample record tables shaped like SOAP/REST query results
"""

import os
import sys
from pathlib import Path

import pytest
import structlog

# Ensure sfspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sfspine.core.logging import clear_context
from sfspine.core.settings import clear_settings_cache
from sfspine.core.table import RecordTable


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop cached settings and SFSPINE_* variables around each test."""
    for key in [k for k in os.environ if k.startswith("SFSPINE_")]:
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
    clear_context()


# =============================================================================
# Sample Tables
# =============================================================================


@pytest.fixture
def soap_contacts() -> RecordTable:
    """SOAP query result for Contacts, one without an Account."""
    return RecordTable({
        "sf:Id": ["003A", "003B", "003C"],
        "sf:LastName": ["Smith", "Jones", "Lee"],
        "sf:Account": [None, None, None],
        "sf:Account.Name": ["Acme", None, "Globex"],
        "sf:Account.Industry": ["Retail", None, "Energy"],
    })


@pytest.fixture
def rest_contacts() -> RecordTable:
    """REST query result for the same Contacts."""
    return RecordTable({
        "Id": ["003A", "003B", "003C"],
        "LastName": ["Smith", "Jones", "Lee"],
        "Account.Name": ["Acme", None, "Globex"],
        "Account.Industry": ["Retail", None, "Energy"],
    })
