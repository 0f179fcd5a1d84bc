"""
Verification services.

Each module is one layer of the contract engine; all entry points are pure
functions of already-materialised inputs and return structured verdicts.
"""

from .client import FestivalsClient
from .collation import Collator, UnicodeCollator
from .fallback import SENTINEL, DisplayText, find_missing_fields, resolve_display_text
from .gate import (
    evaluate_gate,
    is_healthy,
    is_not_found,
    is_throttled,
    is_within_latency_budget,
)
from .ordering import (
    canonical_order,
    check_display_order,
    find_ordering_violation,
    is_non_decreasing,
)
from .page_state import (
    EMPTY_MESSAGE,
    ERROR_MESSAGE,
    Disclosure,
    PageModel,
    PageState,
    PageTransitionError,
    initial_page,
    observe_state,
    on_response,
    toggle_festival,
    verify_snapshot,
)
from .schema_validator import parse_payload, validate_schema

__all__ = [
    "Collator",
    "Disclosure",
    "DisplayText",
    "EMPTY_MESSAGE",
    "ERROR_MESSAGE",
    "FestivalsClient",
    "PageModel",
    "PageState",
    "PageTransitionError",
    "SENTINEL",
    "UnicodeCollator",
    "canonical_order",
    "check_display_order",
    "evaluate_gate",
    "find_missing_fields",
    "find_ordering_violation",
    "initial_page",
    "is_healthy",
    "is_non_decreasing",
    "is_not_found",
    "is_throttled",
    "is_within_latency_budget",
    "observe_state",
    "on_response",
    "parse_payload",
    "resolve_display_text",
    "toggle_festival",
    "validate_schema",
    "verify_snapshot",
]
