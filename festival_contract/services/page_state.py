"""
Page-state oracle for the festivals page.

The page is modelled as an explicit state machine:

    loading -> normal | empty | error

and, in the normal state, one disclosure per festival (collapsed or
expanded, initially collapsed) toggled by activating the festival header.

Usage:
    page = on_response(initial_page(), response)
    page = toggle_festival(page, 0)

    result = verify_snapshot(page, snapshot)
    if not result.valid:
        for error in result.errors:
            print(f"{error.code}: {error.message}")

The oracle owns the expected state; the caller supplies the observed
RenderedSnapshot read from the browser.
"""

import logging
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from festival_contract.schemas.festival import Festival
from festival_contract.schemas.response import ResponseDescriptor
from festival_contract.schemas.snapshot import FestivalNode, RenderedSnapshot
from festival_contract.schemas.verdict import ContractIssue, ValidationResult

from .collation import DEFAULT_COLLATOR
from .fallback import resolve_display_text
from .ordering import canonical_order, check_display_order, display_name
from .schema_validator import parse_payload, validate_schema

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No festivals available at this time"
ERROR_MESSAGE = "Something went wrong. Please try again later."


class PageState(str, Enum):
    LOADING = "loading"
    NORMAL = "normal"
    EMPTY = "empty"
    ERROR = "error"


class Disclosure(str, Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class PageTransitionError(ValueError):
    """Raised when the harness drives the oracle through an undefined transition."""


class PageModel(BaseModel):
    """Expected page state.

    `festivals` are in the order the page must display them, each with its
    bands in display order; `disclosure` is indexed the same way.
    """
    model_config = ConfigDict(frozen=True)

    state: PageState = Field(default=PageState.LOADING, description="Top-level page state")
    festivals: Tuple[Festival, ...] = Field(default=(), description="Festivals in display order")
    disclosure: Tuple[Disclosure, ...] = Field(default=(), description="Per-festival disclosure")


def initial_page() -> PageModel:
    return PageModel()


def on_response(page: PageModel, response: ResponseDescriptor) -> PageModel:
    """
    Apply the festivals response to a loading page.

    Transitions:
    - transport failure or non-2xx status -> error
    - 2xx with an empty array -> empty
    - 2xx with a body that violates the schema -> error
    - 2xx with a valid non-empty payload -> normal, every festival collapsed

    Raises:
        PageTransitionError: If the page is not loading
    """
    if page.state != PageState.LOADING:
        raise PageTransitionError(f"Cannot apply a response to a page in state '{page.state.value}'")

    if response.is_failure:
        logger.info(f"Festivals request failed (status={response.status_code}, error={response.transport_error})")
        return PageModel(state=PageState.ERROR)

    if isinstance(response.body, list) and not response.body:
        return PageModel(state=PageState.EMPTY)

    schema_result = validate_schema(response.body, require_non_empty=True)
    if not schema_result.valid:
        logger.warning(f"Festivals response violates the schema: {schema_result.errors[0].message}")
        return PageModel(state=PageState.ERROR)

    festivals = [
        festival.model_copy(update={"bands": tuple(canonical_order(festival.bands, key=display_name))})
        for festival in parse_payload(response.body)
    ]
    ordered = canonical_order(festivals, key=display_name)
    return PageModel(
        state=PageState.NORMAL,
        festivals=tuple(ordered),
        disclosure=tuple(Disclosure.COLLAPSED for _ in ordered),
    )


def toggle_festival(page: PageModel, index: int) -> PageModel:
    """
    Activate the header of the festival at a display position.

    Raises:
        PageTransitionError: If the page is not in the normal state or the
            index is out of range
    """
    if page.state != PageState.NORMAL:
        raise PageTransitionError(f"Festivals can only be toggled on a normal page, not '{page.state.value}'")
    if not 0 <= index < len(page.festivals):
        raise PageTransitionError(f"No festival at display position {index}")

    disclosure = list(page.disclosure)
    disclosure[index] = (
        Disclosure.EXPANDED if disclosure[index] == Disclosure.COLLAPSED else Disclosure.COLLAPSED
    )
    return page.model_copy(update={"disclosure": tuple(disclosure)})


def observe_state(snapshot: RenderedSnapshot) -> PageState:
    """Derive the page state a snapshot is showing."""
    if snapshot.shows_message(ERROR_MESSAGE):
        return PageState.ERROR
    if snapshot.festivals:
        return PageState.NORMAL
    if snapshot.shows_message(EMPTY_MESSAGE):
        return PageState.EMPTY
    return PageState.LOADING


def verify_snapshot(page: PageModel, snapshot: RenderedSnapshot) -> ValidationResult:
    """
    Verify a rendered snapshot against the expected page state.

    Every mismatch is reported; the check never stops at the first one.
    """
    errors: List[ContractIssue] = []

    observed = observe_state(snapshot)
    if observed != page.state:
        errors.append(_mismatch("page", f"Page shows '{observed.value}'", page.state.value, observed.value))

    if page.state == PageState.NORMAL:
        errors.extend(_verify_normal(page, snapshot))
    elif page.state == PageState.EMPTY:
        if snapshot.festivals:
            errors.append(
                _mismatch(
                    "festivals",
                    f"Empty page renders {len(snapshot.festivals)} festival container(s)",
                    0,
                    len(snapshot.festivals),
                )
            )
        if not snapshot.shows_message(EMPTY_MESSAGE):
            errors.append(_mismatch("messages", "Empty-state message is not visible", EMPTY_MESSAGE, None))
    elif page.state == PageState.ERROR:
        if not snapshot.shows_message(ERROR_MESSAGE):
            errors.append(_mismatch("messages", "Error message is not visible", ERROR_MESSAGE, None))
    else:
        for message in (EMPTY_MESSAGE, ERROR_MESSAGE):
            if snapshot.shows_message(message):
                errors.append(_mismatch("messages", "Loading page shows a final-state message", None, message))

    return ValidationResult.from_issues(errors)


# =========================================================================
# Private Helper Methods
# =========================================================================


def _verify_normal(page: PageModel, snapshot: RenderedSnapshot) -> List[ContractIssue]:
    errors: List[ContractIssue] = []

    if len(snapshot.festivals) != len(page.festivals):
        errors.append(
            _mismatch(
                "festivals",
                f"Expected {len(page.festivals)} festival container(s), found {len(snapshot.festivals)}",
                len(page.festivals),
                len(snapshot.festivals),
            )
        )

    for index, (festival, node) in enumerate(zip(page.festivals, snapshot.festivals)):
        errors.extend(_verify_festival(index, festival, page.disclosure[index], node))

    errors.extend(
        check_display_order(snapshot.festivals, key=_node_text, collator=DEFAULT_COLLATOR)
    )
    return errors


def _verify_festival(
    index: int,
    festival: Festival,
    disclosure: Disclosure,
    node: FestivalNode,
) -> List[ContractIssue]:
    errors: List[ContractIssue] = []
    prefix = f"festivals[{index}]"

    expected_name = resolve_display_text(festival.name).text
    if _node_text(node) != expected_name:
        errors.append(
            _mismatch(f"{prefix}.name", "Festival name text differs", expected_name, node.name, festival_index=index)
        )

    visible = node.visible_bands
    if disclosure == Disclosure.COLLAPSED:
        if visible:
            errors.append(
                _mismatch(
                    prefix,
                    f"Collapsed festival shows {len(visible)} band(s)",
                    Disclosure.COLLAPSED.value,
                    Disclosure.EXPANDED.value,
                    festival_index=index,
                )
            )
        return errors

    if len(visible) != len(festival.bands):
        errors.append(
            _mismatch(
                f"{prefix}.bands",
                f"Expanded festival shows {len(visible)} of {len(festival.bands)} band(s)",
                len(festival.bands),
                len(visible),
                festival_index=index,
            )
        )

    for band_index, (band, band_node) in enumerate(zip(festival.bands, visible)):
        band_prefix = f"{prefix}.bands[{band_index}]"
        for field, expected_value, shown in (
            ("name", band.name, band_node.name),
            ("recordLabel", band.record_label, band_node.record_label),
        ):
            expected_text = resolve_display_text(expected_value).text
            if shown.strip() != expected_text:
                errors.append(
                    _mismatch(
                        f"{band_prefix}.{field}",
                        f"Band {field} text differs",
                        expected_text,
                        shown,
                        festival_index=index,
                        band_index=band_index,
                    )
                )
    return errors


def _node_text(node) -> str:
    return node.name.strip()


def _mismatch(path: str, message: str, expected, observed, **kwargs) -> ContractIssue:
    return ContractIssue.of("state_mismatch", message, path=path, expected=expected, observed=observed, **kwargs)
