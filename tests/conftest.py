"""
Shared test fixtures for the festival contract tests.

Provides:
- Sample payloads (healthy, unsorted, with missing text)
- Snapshot builders mirroring the page's DOM contract
- Settings isolation (cached settings cleared around every test)
"""

import os

import pytest

from festival_contract.core.config import get_settings
from festival_contract.schemas.snapshot import BandNode, FestivalNode, RenderedSnapshot


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Drop cached settings and FESTIVAL_CONTRACT_ env vars around each test."""
    for name in list(os.environ):
        if name.startswith("FESTIVAL_CONTRACT_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def glasto_payload() -> list:
    """Single festival, single band."""
    return [{"name": "Glasto", "bands": [{"name": "Echo", "recordLabel": "EMI"}]}]


@pytest.fixture
def unsorted_payload() -> list:
    """Festivals and bands in payload order that the page must re-sort."""
    return [
        {
            "name": "Omega Fest",
            "bands": [
                {"name": "Zeta", "recordLabel": "Sub Pop"},
                {"name": "alpha", "recordLabel": "XL"},
            ],
        },
        {"name": "", "bands": []},
        {
            "name": "Beach Days",
            "bands": [
                {"name": "", "recordLabel": "Warp"},
                {"name": "Moon", "recordLabel": ""},
            ],
        },
    ]


# =============================================================================
# Snapshot Builders
# =============================================================================


def band(name: str, record_label: str, visible: bool = True) -> BandNode:
    return BandNode(name=name, record_label=record_label, visible=visible)


def festival(name: str, *bands: BandNode) -> FestivalNode:
    return FestivalNode(name=name, bands=tuple(bands))


def snapshot(*festivals: FestivalNode, messages=()) -> RenderedSnapshot:
    return RenderedSnapshot(festivals=tuple(festivals), messages=tuple(messages))
