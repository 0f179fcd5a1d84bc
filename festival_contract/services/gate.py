"""
Latency and availability gate.

Pure predicates over a ResponseDescriptor, plus evaluate_gate() which runs
all of them and reports failed health or latency as contract violations.
Throttling (429) is an observation only and never fails the gate.
"""

import logging
from typing import List, Optional

from festival_contract.core.config import get_settings
from festival_contract.schemas.response import ResponseDescriptor
from festival_contract.schemas.verdict import ContractIssue, GateReport, ValidationResult

logger = logging.getLogger(__name__)


def is_healthy(response: ResponseDescriptor) -> bool:
    """Status 200 with a non-empty array body."""
    return (
        response.status_code == 200
        and isinstance(response.body, list)
        and len(response.body) > 0
    )


def is_throttled(response: ResponseDescriptor) -> bool:
    return response.status_code == 429


def is_not_found(response: ResponseDescriptor) -> bool:
    return response.status_code == 404


def is_within_latency_budget(
    response: ResponseDescriptor,
    threshold_ms: Optional[float] = None,
) -> bool:
    """
    Check the response duration against an exclusive upper bound.

    Args:
        response: Response to check
        threshold_ms: Budget in milliseconds (settings default, 800ms)
    """
    if threshold_ms is None:
        threshold_ms = get_settings().latency_threshold_ms
    return response.duration_ms < threshold_ms


def evaluate_gate(
    response: ResponseDescriptor,
    threshold_ms: Optional[float] = None,
) -> GateReport:
    """
    Run every gate predicate against one response.

    A throttled response is recorded as a warning and does not count as an
    unhealthy one, since the request was never served.
    """
    if threshold_ms is None:
        threshold_ms = get_settings().latency_threshold_ms

    healthy = is_healthy(response)
    throttled = is_throttled(response)
    fast_enough = is_within_latency_budget(response, threshold_ms)

    health_errors: List[ContractIssue] = []
    latency_errors: List[ContractIssue] = []
    warnings: List[ContractIssue] = []

    if throttled:
        logger.info("rate limit exceeded for festival data API")
        warnings.append(
            ContractIssue.of(
                "throttled",
                "Request was throttled (429); observed, not failed",
                observed=429,
            )
        )
    elif not healthy:
        health_errors.append(
            ContractIssue.of(
                "contract_violation",
                _describe_unhealthy(response),
                expected="200 with a non-empty array",
                observed=response.status_code,
            )
        )

    if not fast_enough:
        latency_errors.append(
            ContractIssue.of(
                "contract_violation",
                f"Response took {response.duration_ms:.0f}ms, budget is {threshold_ms:.0f}ms",
                expected=threshold_ms,
                observed=response.duration_ms,
            )
        )

    return GateReport(
        healthy=healthy,
        throttled=throttled,
        within_latency_budget=fast_enough,
        not_found=is_not_found(response),
        threshold_ms=threshold_ms,
        health=ValidationResult.from_issues(health_errors, warnings),
        latency=ValidationResult.from_issues(latency_errors),
    )


def _describe_unhealthy(response: ResponseDescriptor) -> str:
    if response.transport_error:
        return f"Request failed: {response.transport_error}"
    if response.status_code != 200:
        return f"Expected status 200, got {response.status_code}"
    if not isinstance(response.body, list):
        return f"Expected an array body, got {type(response.body).__name__}"
    return "Expected a non-empty array body"
