"""Builds a ClassificationResult from the classifier's raw JSON answer.

Unknown categories and entity types fall back to OTROS / obra, unparseable
dates become None. Structural problems raise.
"""

from datetime import date
from typing import Any

from constructia.classification.exceptions import ClassificationValidationError
from constructia.classification.models import (
    CATEGORIES,
    ENTITY_TYPES,
    FALLBACK_CATEGORY,
    FALLBACK_ENTITY_TYPE,
    ClassificationResult,
    ExtractedFields,
)

_TEXT_FIELDS = (
    "id_number",
    "first_name",
    "last_name",
    "company",
    "rea_number",
    "policy_number",
    "prl_course_level",
    "machine_serial",
)
_DATE_FIELDS = ("issue_date", "expiry_date")
_MAX_TEXT_MATCHES = 20


def validate_and_build(data: dict[str, Any]) -> ClassificationResult:
    """Validate raw parsed JSON and build a ClassificationResult.

    Raises:
        ClassificationValidationError: on any structural failure.
    """
    for key in ("category", "entity_type", "fields", "confidence"):
        if key not in data:
            raise ClassificationValidationError(f"Missing required top-level field: {key}")

    category = _build_choice(data["category"], CATEGORIES, FALLBACK_CATEGORY)
    entity_type = _build_choice(data["entity_type"], ENTITY_TYPES, FALLBACK_ENTITY_TYPE)
    fields = _build_fields(data["fields"])
    field_confidence = _build_field_confidence(data["confidence"])
    confidence = round(field_confidence.get("category", 0.0) * 100)
    return ClassificationResult(
        category=category,
        entity_type=entity_type,
        confidence=confidence,
        fields=fields,
        field_confidence=field_confidence,
    )


def _build_choice(raw: Any, allowed: tuple[str, ...], fallback: str) -> str:
    if isinstance(raw, str) and raw in allowed:
        return raw
    return fallback


def _build_fields(raw: Any) -> ExtractedFields:
    if not isinstance(raw, dict):
        raise ClassificationValidationError("'fields' must be an object")

    values: dict[str, Any] = {}
    for name in _TEXT_FIELDS:
        value = raw.get(name)
        if value is not None and not isinstance(value, str):
            raise ClassificationValidationError(f"'fields.{name}' must be a string or null")
        values[name] = (value or "").strip() or None
    for name in _DATE_FIELDS:
        values[name] = _normalize_date(raw.get(name))

    matches = raw.get("text_matches", [])
    if not isinstance(matches, list):
        raise ClassificationValidationError("'fields.text_matches' must be a list")
    values["text_matches"] = [str(m) for m in matches[:_MAX_TEXT_MATCHES]]
    return ExtractedFields(**values)


def _normalize_date(raw: Any) -> str | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip()[:10]).isoformat()
    except ValueError:
        return None


def _build_field_confidence(raw: Any) -> dict[str, float]:
    if not isinstance(raw, dict):
        raise ClassificationValidationError("'confidence' must be an object")
    scores: dict[str, float] = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ClassificationValidationError(f"'confidence.{key}' must be a number")
        scores[str(key)] = min(1.0, max(0.0, float(value)))
    return scores
