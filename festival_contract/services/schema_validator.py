"""
Schema validation for the festivals payload.

The structural contract lives in festivals.schema.json and is evaluated with
jsonschema's Draft7Validator. Raw jsonschema errors are mapped onto the
contract's error kinds (not_array, empty_payload, missing_field) with a
festival/band scoped path.

Usage:
    result = validate_schema(response.body)

    if not result.valid:
        for error in result.errors:
            print(f"{error.code}: {error.path}")

Empty strings are valid here. Whether they render correctly is the concern of
the fallback resolver and the page-state oracle.
"""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema

from festival_contract.schemas.festival import Festival
from festival_contract.schemas.verdict import ContractIssue, ValidationResult

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "festivals.schema.json"

FESTIVAL_FIELDS = ("name", "bands")
BAND_FIELDS = ("name", "recordLabel")

# Reporting order of fields within one element
_FIELD_ORDER = {"name": 0, "bands": 1, "recordLabel": 2}


def load_schema() -> Dict[str, Any]:
    """Load the festivals JSON schema shipped with the package."""
    with open(SCHEMA_PATH) as f:
        return json.load(f)


@lru_cache(maxsize=2)
def _get_validator(require_non_empty: bool) -> jsonschema.Draft7Validator:
    schema = copy.deepcopy(load_schema())
    if require_non_empty:
        schema["minItems"] = 1
    return jsonschema.Draft7Validator(schema)


def validate_schema(payload: Any, require_non_empty: bool = True) -> ValidationResult:
    """
    Validate a decoded payload against the festivals structural contract.

    Args:
        payload: Decoded JSON value claimed to be a festivals array
        require_non_empty: Healthy-path mode, an empty array is an error

    Returns:
        ValidationResult whose errors are ordered by festival, band, field
    """
    validator = _get_validator(require_non_empty)
    raw_errors = list(validator.iter_errors(payload))

    # Top-level failures short-circuit everything below them
    for error in raw_errors:
        if error.absolute_path:
            continue
        if error.validator == "type":
            logger.debug("Payload is not an array")
            return ValidationResult.from_issues([
                ContractIssue.of(
                    "not_array",
                    f"Payload must be an array, got {type(payload).__name__}",
                    path="$",
                    expected="array",
                    observed=type(payload).__name__,
                )
            ])
        if error.validator == "minItems":
            logger.debug("Payload is an empty array")
            return ValidationResult.from_issues([
                ContractIssue.of("empty_payload", "Payload must contain at least one festival", path="$")
            ])

    found: Dict[Tuple[int, int, int], ContractIssue] = {}
    for error in raw_errors:
        for issue in _map_error(error):
            key = (
                issue.festival_index,
                -1 if issue.band_index is None else issue.band_index,
                _FIELD_ORDER[issue.field],
            )
            found.setdefault(key, issue)

    errors = [found[key] for key in sorted(found)]
    if errors:
        logger.debug(f"Schema validation found {len(errors)} missing field(s)")
    return ValidationResult.from_issues(errors)


def parse_payload(payload: Any) -> List[Festival]:
    """
    Convert a structurally valid payload into immutable Festival models.

    Raises:
        ValueError: If the payload does not satisfy the schema
    """
    result = validate_schema(payload, require_non_empty=False)
    if not result.valid:
        raise ValueError(f"Payload violates the festivals schema: {result.errors[0].message}")
    return [Festival.model_validate(item) for item in payload]


# =========================================================================
# Private Helper Methods
# =========================================================================


def _map_error(error: jsonschema.ValidationError) -> List[ContractIssue]:
    """Translate one jsonschema error below the top level into missing_field issues."""
    path = list(error.absolute_path)
    festival_index = path[0]

    if len(path) == 1:
        return _element_issues(error, FESTIVAL_FIELDS, festival_index, None)

    if len(path) == 2:
        # [i, field]: the field exists but has the wrong type
        return [_missing(path[1], festival_index, None)]

    band_index = path[2]
    if len(path) == 3:
        return _element_issues(error, BAND_FIELDS, festival_index, band_index)

    return [_missing(path[3], festival_index, band_index)]


def _element_issues(
    error: jsonschema.ValidationError,
    fields: Tuple[str, ...],
    festival_index: int,
    band_index: Optional[int],
) -> List[ContractIssue]:
    if error.validator == "required":
        absent = [f for f in error.validator_value if f not in error.instance]
        return [_missing(f, festival_index, band_index) for f in absent]
    # The element itself is not an object, so none of its fields exist
    return [_missing(f, festival_index, band_index) for f in fields]


def _missing(field: str, festival_index: int, band_index: Optional[int]) -> ContractIssue:
    if band_index is None:
        path = f"[{festival_index}].{field}"
        message = f"Festival {festival_index} has no text field '{field}'"
        if field == "bands":
            message = f"Festival {festival_index} has no 'bands' array"
    else:
        path = f"[{festival_index}].bands[{band_index}].{field}"
        message = f"Band {band_index} of festival {festival_index} has no text field '{field}'"
    return ContractIssue.of(
        "missing_field",
        message,
        path=path,
        field=field,
        festival_index=festival_index,
        band_index=band_index,
    )
