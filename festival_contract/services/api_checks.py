"""
API-level contract checks against a live festivals endpoint.

Runs the same checks as the original end-to-end suite, each one an
independent verdict:

- health:     200 with a non-empty array body (429 observed, not failed)
- latency:    single GET answers within the configured budget
- schema:     payload satisfies the structural contract
- missing:    absent or empty text fields (observations only)
- not_found:  an unknown sub-path answers 404
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from festival_contract.schemas.verdict import ContractIssue, GateReport, MissingField, ValidationResult

from .client import FestivalsClient
from .fallback import find_missing_fields
from .gate import evaluate_gate, is_not_found
from .schema_validator import parse_payload, validate_schema

logger = logging.getLogger(__name__)

UNKNOWN_SUB_PATH = "some-random-endpoint"


class ApiCheckReport(BaseModel):
    """Verdicts of one API check run, keyed by check name."""
    model_config = ConfigDict(frozen=True)

    url: str
    status_code: Optional[int] = None
    duration_ms: float = 0.0
    gate: GateReport
    checks: Dict[str, ValidationResult] = Field(default_factory=dict)
    missing_fields: List[MissingField] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(result.valid for result in self.checks.values())

    def summary(self) -> Dict[str, Any]:
        return {name: result.valid for name, result in self.checks.items()}


def run_api_checks(
    client: FestivalsClient,
    threshold_ms: Optional[float] = None,
    require_non_empty: Optional[bool] = None,
) -> ApiCheckReport:
    """
    Fetch the listing once (plus one unknown sub-path) and check it.

    Args:
        client: Transport to use
        threshold_ms: Latency budget override
        require_non_empty: Healthy-path mode override (settings default)
    """
    if require_non_empty is None:
        require_non_empty = client.settings.require_non_empty

    response = client.fetch()
    gate = evaluate_gate(response, threshold_ms)

    checks: Dict[str, ValidationResult] = {"health": gate.health, "latency": gate.latency}

    missing: List[MissingField] = []
    if response.is_success:
        schema_result = validate_schema(response.body, require_non_empty=require_non_empty)
        checks["schema"] = schema_result
        if schema_result.valid:
            missing = find_missing_fields(parse_payload(response.body))
            checks["missing"] = ValidationResult.from_issues(
                [],
                [
                    ContractIssue.of(
                        "missing_text",
                        f"Text field '{m.field}' is empty and renders as the fallback",
                        path=m.path,
                        field=m.field,
                        festival_index=m.festival_index,
                        band_index=m.band_index,
                    )
                    for m in missing
                ],
            )
    else:
        logger.info(f"Skipping schema checks, festivals request did not succeed (status={response.status_code})")

    not_found = client.fetch_path(UNKNOWN_SUB_PATH)
    not_found_errors = []
    if not is_not_found(not_found):
        not_found_errors.append(
            ContractIssue.of(
                "contract_violation",
                f"Unknown sub-path answered {not_found.status_code}, expected 404",
                path=UNKNOWN_SUB_PATH,
                expected=404,
                observed=not_found.status_code,
            )
        )
    checks["not_found"] = ValidationResult.from_issues(not_found_errors)

    return ApiCheckReport(
        url=client.settings.festivals_api_url,
        status_code=response.status_code,
        duration_ms=response.duration_ms,
        gate=gate,
        checks=checks,
        missing_fields=missing,
    )
