"""
Fallback text resolution.

One rule decides what the page must display for any text field of the
payload: absent, empty or whitespace-only values render as the sentinel
"Unknown", anything else renders trimmed. The same rule backs payload-level
missing-field detection and page-level "must display sentinel" checks.
"""

import logging
from typing import Any, Iterable, List, NamedTuple

from festival_contract.schemas.festival import Festival
from festival_contract.schemas.verdict import MissingField

logger = logging.getLogger(__name__)

SENTINEL = "Unknown"


class DisplayText(NamedTuple):
    text: str
    was_fallback: bool


def resolve_display_text(value: Any) -> DisplayText:
    """
    Resolve the text the page must display for a payload field.

    Args:
        value: Raw field value (None, non-string, or text)

    Returns:
        DisplayText(SENTINEL, True) for missing values,
        DisplayText(trimmed value, False) otherwise

    Example:
        >>> resolve_display_text("  Echo ")
        DisplayText(text='Echo', was_fallback=False)
        >>> resolve_display_text("")
        DisplayText(text='Unknown', was_fallback=True)
    """
    if not isinstance(value, str) or not value.strip():
        return DisplayText(SENTINEL, True)
    return DisplayText(value.strip(), False)


def is_missing(value: Any) -> bool:
    return resolve_display_text(value).was_fallback


def find_missing_fields(festivals: Iterable[Festival]) -> List[MissingField]:
    """
    List every text field that will render as the sentinel.

    Missing fields are tolerated by the contract; each one is logged so a
    run makes them visible without failing.
    """
    missing: List[MissingField] = []
    for festival_index, festival in enumerate(festivals):
        if is_missing(festival.name):
            logger.info("Festival with missing name detected")
            missing.append(
                MissingField(path=f"[{festival_index}].name", field="name", festival_index=festival_index)
            )
        for band_index, band in enumerate(festival.bands):
            prefix = f"[{festival_index}].bands[{band_index}]"
            if is_missing(band.name):
                logger.info("Band with missing name detected")
                missing.append(
                    MissingField(
                        path=f"{prefix}.name",
                        field="name",
                        festival_index=festival_index,
                        band_index=band_index,
                    )
                )
            if is_missing(band.record_label):
                logger.info(f"Band {band.name} has no record label")
                missing.append(
                    MissingField(
                        path=f"{prefix}.recordLabel",
                        field="recordLabel",
                        festival_index=festival_index,
                        band_index=band_index,
                    )
                )
    return missing
