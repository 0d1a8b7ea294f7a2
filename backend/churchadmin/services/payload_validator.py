"""
Pre-flight checks for uploaded legacy exports.

These run before a migration is started; record contents are not inspected
here since the transformer defaults whatever is missing.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional

from churchadmin.core.exceptions import PayloadError, ValidationError
from churchadmin.schemas.migration_models import PayloadPreview, PayloadValidation

RECOGNIZED_COLLECTIONS: tuple[str, ...] = ("assistidos", "membros", "eventos")


def parse_legacy_export(raw: bytes | str) -> Any:
    """
    Decode an uploaded export file.

    Args:
        raw: File content

    Returns:
        The decoded JSON value

    Raises:
        PayloadError: If the content is not UTF-8 encoded JSON
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadError(f"Could not read file: {e}") from e


def validate_legacy_payload(data: Any) -> PayloadValidation:
    """Check that ``data`` is an object holding at least one recognized collection."""
    errors: list[str] = []

    if not isinstance(data, Mapping):
        errors.append("Invalid data file")
        return PayloadValidation(valid=False, errors=errors)

    found = [key for key in data if key in RECOGNIZED_COLLECTIONS]
    if not found:
        errors.append("No valid collection found in the file")

    return PayloadValidation(valid=not errors, errors=errors)


def read_legacy_collection(payload: Mapping[str, Any], key: str) -> Optional[dict[str, Any]]:
    """
    Return a legacy collection as an ordered ``legacy_id -> record`` dict.

    Arrays (how Realtime Database exports sequential keys) are keyed by index,
    skipping null holes.

    Returns:
        The collection, or None when the key is absent or null

    Raises:
        PayloadError: If the collection is neither an object nor an array
    """
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, Mapping):
        return {str(legacy_id): record for legacy_id, record in value.items()}
    if isinstance(value, list):
        return {str(index): record for index, record in enumerate(value) if record is not None}
    raise PayloadError(
        f"Collection '{key}' is not readable",
        {"collection": key, "type": type(value).__name__},
    )


def preview_legacy_payload(data: Any) -> PayloadPreview:
    """Count records per recognized collection and list the keys that will be skipped."""
    if not isinstance(data, Mapping):
        raise PayloadError("Invalid data file", {"type": type(data).__name__})

    counts: dict[str, int] = {}
    for key in RECOGNIZED_COLLECTIONS:
        records = read_legacy_collection(data, key)
        if records is not None:
            counts[key] = len(records)

    ignored = [str(key) for key in data if key not in RECOGNIZED_COLLECTIONS]
    return PayloadPreview(collections=counts, ignored=ignored)


def ensure_valid_payload(data: Any) -> Mapping[str, Any]:
    """Return ``data`` when it can be migrated.

    Raises:
        ValidationError: Carrying the validation errors otherwise
    """
    validation = validate_legacy_payload(data)
    if not validation.valid:
        raise ValidationError("Legacy export is not valid", errors=validation.errors)
    return data
