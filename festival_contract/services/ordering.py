"""
Ordering checks for festivals and bands.

Festivals must be non-decreasingly ordered by display name, and bands within
each festival likewise. Keys are the resolved display text, so entries that
fall back to "Unknown" are ordered by the sentinel, and several adjacent
"Unknown" entries are in order.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from festival_contract.schemas.festival import Festival
from festival_contract.schemas.verdict import ContractIssue, OrderingViolation

from .collation import DEFAULT_COLLATOR, Collator
from .fallback import resolve_display_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _identity(item):
    return item


def find_ordering_violation(
    sequence: Sequence[T],
    key: Optional[Callable[[T], str]] = None,
    collator: Optional[Collator] = None,
    label: str = "sequence",
) -> Optional[OrderingViolation]:
    """
    Find the first adjacent pair that is out of order.

    Args:
        sequence: Items in displayed order
        key: Maps an item to its comparison text (identity by default)
        collator: Comparator to use (UnicodeCollator by default)
        label: Name of the sequence, used in the violation

    Returns:
        OrderingViolation for the first pair with compare(prev, cur) > 0,
        None if the sequence is non-decreasing
    """
    key = key or _identity
    collator = collator or DEFAULT_COLLATOR

    keys = [key(item) for item in sequence]
    for index in range(1, len(keys)):
        if collator.compare(keys[index - 1], keys[index]) > 0:
            return OrderingViolation(
                sequence=label,
                index=index,
                previous=keys[index - 1],
                current=keys[index],
            )
    return None


def is_non_decreasing(
    sequence: Sequence[T],
    key: Optional[Callable[[T], str]] = None,
    collator: Optional[Collator] = None,
) -> bool:
    """True if every adjacent pair satisfies compare(a, b) <= 0."""
    return find_ordering_violation(sequence, key=key, collator=collator) is None


def canonical_order(
    items: Iterable[T],
    key: Callable[[T], str],
    collator: Optional[Collator] = None,
) -> List[T]:
    """Stable sort by collation key; ties keep their input order."""
    collator = collator or DEFAULT_COLLATOR
    return sorted(items, key=lambda item: collator.sort_key(key(item)))


def display_name(item) -> str:
    """Resolved display name of a festival or band."""
    return resolve_display_text(item.name).text


def check_display_order(
    festivals: Sequence[Festival],
    key: Callable[[object], str] = display_name,
    collator: Optional[Collator] = None,
) -> List[ContractIssue]:
    """
    Check festival order and, per festival, band order.

    Works on payload festivals and on rendered festival nodes alike, both
    expose `name` and `bands`.

    Returns:
        One ordering_violation issue per out-of-order sequence
    """
    issues: List[ContractIssue] = []

    violation = find_ordering_violation(festivals, key=key, collator=collator, label="festivals")
    if violation:
        issues.append(violation.to_issue())

    for festival_index, festival in enumerate(festivals):
        violation = find_ordering_violation(
            festival.bands,
            key=key,
            collator=collator,
            label=f"[{festival_index}].bands",
        )
        if violation:
            issues.append(violation.to_issue().model_copy(update={"festival_index": festival_index}))

    if issues:
        logger.debug(f"Found {len(issues)} ordering violation(s)")
    return issues
