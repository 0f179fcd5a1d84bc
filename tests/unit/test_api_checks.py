"""
Unit tests for the API check runner.

Each test routes the festivals endpoint and its unknown sub-path through
httpx.MockTransport.
"""

import httpx
import pytest
from pydantic import ValidationError

from festival_contract.core.config import Settings
from festival_contract.services.api_checks import UNKNOWN_SUB_PATH, run_api_checks
from festival_contract.services.client import FestivalsClient

API_URL = "https://festivals.test/api/v1/festivals"


def routed_client(listing: httpx.Response, sub_path_status: int = 404, **settings) -> FestivalsClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith(UNKNOWN_SUB_PATH):
            return httpx.Response(sub_path_status)
        return listing

    return FestivalsClient(
        settings=Settings(festivals_api_url=API_URL, **settings),
        transport=httpx.MockTransport(handler),
    )


class TestRunApiChecks:
    """Tests for run_api_checks."""

    def test_healthy_endpoint_passes(self, glasto_payload):
        with routed_client(httpx.Response(200, json=glasto_payload)) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.valid is True
        assert report.summary() == {
            "health": True,
            "latency": True,
            "schema": True,
            "missing": True,
            "not_found": True,
        }
        assert report.missing_fields == []

    def test_missing_fields_are_warnings(self, unsorted_payload):
        with routed_client(httpx.Response(200, json=unsorted_payload)) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.valid is True
        assert [m.path for m in report.missing_fields] == [
            "[1].name",
            "[2].bands[0].name",
            "[2].bands[1].recordLabel",
        ]
        assert len(report.checks["missing"].warnings) == 3
        assert {w.code for w in report.checks["missing"].warnings} == {"missing_text"}

    def test_schema_violation_fails(self):
        with routed_client(httpx.Response(200, json=[{"name": "Glasto"}])) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.valid is False
        assert report.checks["schema"].errors[0].path == "[0].bands"
        assert "missing" not in report.checks

    def test_empty_listing_fails_health_and_schema(self):
        with routed_client(httpx.Response(200, json=[])) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.checks["health"].valid is False
        assert report.checks["schema"].errors[0].code == "empty_payload"

    def test_empty_listing_allowed(self):
        with routed_client(httpx.Response(200, json=[])) as client:
            report = run_api_checks(client, threshold_ms=60_000, require_non_empty=False)

        assert report.checks["schema"].valid is True

    def test_throttled_listing_skips_schema(self):
        with routed_client(httpx.Response(429, text="Too Many Requests")) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.gate.throttled is True
        assert report.checks["health"].valid is True
        assert "schema" not in report.checks

    def test_unknown_sub_path_must_be_404(self, glasto_payload):
        with routed_client(httpx.Response(200, json=glasto_payload), sub_path_status=200) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        assert report.checks["not_found"].valid is False
        assert report.checks["not_found"].errors[0].observed == 200

    def test_latency_budget_is_enforced(self, glasto_payload):
        with routed_client(httpx.Response(200, json=glasto_payload)) as client:
            report = run_api_checks(client, threshold_ms=0.000001)

        assert report.checks["latency"].valid is False

    def test_report_is_immutable(self, glasto_payload):
        with routed_client(httpx.Response(200, json=glasto_payload)) as client:
            report = run_api_checks(client, threshold_ms=60_000)

        with pytest.raises(ValidationError):
            report.url = "https://elsewhere.test"
