"""
Analysis payload validation.

The analysis service is untrusted, so its JSON is checked before anything
touches the profile. Validation returns a tagged result instead of raising:
`Valid(result)` or `Invalid(field_path, reason)`.

Failures are reported in a fixed priority:
1. a missing top-level group
2. a numeric field outside its bounds, or not finite
3. a severity outside the enumeration
4. any other type or shape error
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from ..models.analysis import AnalysisResult, TOP_LEVEL_GROUPS

_BOUND_ERRORS = {
    "greater_than", "greater_than_equal", "less_than", "less_than_equal", "finite_number",
}
_ENUM_ERRORS = {"literal_error", "enum"}


@dataclass(frozen=True)
class Valid:
    result: AnalysisResult


@dataclass(frozen=True)
class Invalid:
    field_path: str
    reason: str


ValidationOutcome = Union[Valid, Invalid]


def _field_path(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _priority(error: Dict[str, Any]) -> int:
    if error["type"] == "missing" and len(error["loc"]) == 1:
        return 0
    if error["type"] in _BOUND_ERRORS:
        return 1
    if error["type"] in _ENUM_ERRORS:
        return 2
    return 3


def validate_analysis_payload(payload: Any) -> ValidationOutcome:
    """
    Check a raw analysis payload against the fixed schema.

    Args:
        payload: Decoded JSON from the analysis service

    Returns:
        Valid with the typed result, or Invalid naming the first failing field
    """
    if isinstance(payload, AnalysisResult):
        return Valid(payload)

    if not isinstance(payload, Mapping):
        return Invalid("<root>", f"expected an object, got {type(payload).__name__}")

    for group in TOP_LEVEL_GROUPS:
        if group not in payload or payload[group] is None:
            return Invalid(group, "required group is missing")

    try:
        result = AnalysisResult.model_validate(dict(payload))
    except PydanticValidationError as e:
        errors = e.errors()
        # sorted() is stable, so pydantic's field order breaks ties
        first = sorted(errors, key=_priority)[0]
        return Invalid(_field_path(first["loc"]), first["msg"])

    return Valid(result)
