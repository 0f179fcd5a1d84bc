"""
Verdict models returned by every verification entry point.

Checks never raise for a contract violation; they return one of these
models so a single run can surface several independent violations.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Issue taxonomy
# =============================================================================

IssueCategory = Literal["schema", "ordering", "state", "contract", "observation"]

IssueCode = Literal[
    "not_array",
    "empty_payload",
    "missing_field",
    "ordering_violation",
    "state_mismatch",
    "contract_violation",
    "throttled",
    "missing_text",
]

ISSUE_CATEGORIES: dict[str, str] = {
    "not_array": "schema",
    "empty_payload": "schema",
    "missing_field": "schema",
    "ordering_violation": "ordering",
    "state_mismatch": "state",
    "contract_violation": "contract",
    # Tolerated conditions, only ever reported as warnings
    "throttled": "observation",
    "missing_text": "observation",
}


class ContractIssue(BaseModel):
    """A single detected contract violation or observation."""
    model_config = ConfigDict(frozen=True)

    category: IssueCategory = Field(..., description="Error family (schema, ordering, state, contract) or observation")
    code: IssueCode = Field(..., description="Error kind within the family")
    message: str = Field(..., description="Human-readable description")
    path: Optional[str] = Field(default=None, description="Payload or page path, e.g. '[0].bands[1].name'")
    field: Optional[str] = Field(default=None, description="Missing field name for missing_field")
    festival_index: Optional[int] = Field(default=None, description="Festival position, if scoped")
    band_index: Optional[int] = Field(default=None, description="Band position, if scoped")
    index: Optional[int] = Field(default=None, description="Offending position for ordering violations")
    expected: Optional[Any] = Field(default=None, description="Expected value or state")
    observed: Optional[Any] = Field(default=None, description="Observed value or state")

    @classmethod
    def of(cls, code: str, message: str, **kwargs: Any) -> "ContractIssue":
        """Build an issue with its category derived from the code."""
        return cls(category=ISSUE_CATEGORIES[code], code=code, message=message, **kwargs)


class ValidationResult(BaseModel):
    """Result of one verification check.

    `errors` are contract violations; `warnings` are observations that the
    contract tolerates (missing text fields, throttling).
    """
    model_config = ConfigDict(frozen=True)

    valid: bool = Field(..., description="Whether the check passed")
    errors: List[ContractIssue] = Field(default_factory=list, description="Contract violations")
    warnings: List[ContractIssue] = Field(default_factory=list, description="Tolerated observations")

    @classmethod
    def from_issues(
        cls,
        errors: List[ContractIssue],
        warnings: Optional[List[ContractIssue]] = None,
    ) -> "ValidationResult":
        return cls(valid=not errors, errors=errors, warnings=warnings or [])

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two independent verdicts into one."""
        return ValidationResult.from_issues(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )


# =============================================================================
# Component-specific findings
# =============================================================================


class MissingField(BaseModel):
    """A text field that is absent or empty and will render as the sentinel."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Payload path of the field")
    field: str = Field(..., description="Field name (name or recordLabel)")
    festival_index: int = Field(..., description="Festival position in the payload")
    band_index: Optional[int] = Field(default=None, description="Band position, None for a festival name")


class OrderingViolation(BaseModel):
    """First adjacent pair found out of order."""
    model_config = ConfigDict(frozen=True)

    sequence: str = Field(..., description="Label of the checked sequence")
    index: int = Field(..., description="Position of the later element of the inverted pair")
    previous: str = Field(..., description="Key at index - 1")
    current: str = Field(..., description="Key at index")

    def to_issue(self) -> ContractIssue:
        return ContractIssue.of(
            "ordering_violation",
            f"{self.sequence}: '{self.current}' at {self.index} sorts before "
            f"'{self.previous}' at {self.index - 1}",
            path=self.sequence,
            index=self.index,
            expected=self.previous,
            observed=self.current,
        )


class GateReport(BaseModel):
    """Outcome of every availability and latency predicate for one response."""
    model_config = ConfigDict(frozen=True)

    healthy: bool
    throttled: bool
    within_latency_budget: bool
    not_found: bool
    threshold_ms: float
    health: ValidationResult
    latency: ValidationResult

    @property
    def result(self) -> ValidationResult:
        return self.health.merge(self.latency)
