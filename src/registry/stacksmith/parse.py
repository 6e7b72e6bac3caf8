"""Parsers for Stacksmith API response bodies.

Each parser takes an already-decoded JSON value and returns the parsed
result, or None if the value does not have the expected shape. A single
malformed item invalidates the whole result; partial results are never
returned.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog.models import EntityCategory, StackReference, VersionedEntity, sorted_entities
from versioning.models import BranchedVersion

logger = logging.getLogger(__name__)

# Shape errors raised while walking decoded JSON
PARSE_ERRORS = (KeyError, TypeError, ValueError, IndexError, AttributeError)


def _mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected JSON object, got {type(value).__name__}")
    return value


def _array(obj: Dict[str, Any], key: str) -> List[Any]:
    value = obj[key]
    if not isinstance(value, list):
        raise TypeError(f"expected JSON array for {key!r}, got {type(value).__name__}")
    return value


def _string(value: Any) -> str:
    """Coerce a JSON scalar to a string; objects, arrays and null are rejected."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"expected JSON string, got {type(value).__name__}")


def _get_string(obj: Dict[str, Any], key: str) -> str:
    return _string(obj[key])


def _parse_entity(item: Any) -> VersionedEntity:
    item = _mapping(item)
    versions = [
        BranchedVersion(_get_string(v, "version"), _get_string(v, "branch"))
        for v in map(_mapping, _array(item, "versions"))
    ]
    return VersionedEntity(
        id=_get_string(item, "id"),
        name=_get_string(item, "name"),
        category=EntityCategory.from_api_string(_get_string(item, "category")),
        versions=tuple(versions),
    )


def parse_entities(data: Any) -> Optional[List[VersionedEntity]]:
    """Parse a listing response ``{"items": [EntityItem, ...]}``.

    Returns:
        Entities sorted by their total order, an empty list for an empty
        ``items`` array, or None if the payload is malformed.
    """
    if data is None:
        logger.warning("Cannot parse entities from null JSON.")
        return None
    try:
        items = _array(_mapping(data), "items")
        return sorted_entities(_parse_entity(item) for item in items)
    except PARSE_ERRORS as exc:
        logger.warning("Malformed JSON while parsing entities: %r", exc)
        return None


def parse_dependency_ids(data: Any) -> Optional[List[str]]:
    """Parse ``{"items": ["id", ...]}`` into sorted, distinct ids."""
    if data is None:
        logger.warning("Cannot parse dependency IDs from null JSON.")
        return None
    try:
        items = _array(_mapping(data), "items")
        return sorted({_string(item) for item in items})
    except PARSE_ERRORS as exc:
        logger.warning("Malformed JSON while parsing dependency IDs: %r", exc)
        return None


def parse_flavor_ids(data: Any) -> Optional[List[str]]:
    """Parse ``{"items": [{"id": "..."}, ...]}`` into sorted, distinct ids."""
    if data is None:
        logger.warning("Cannot parse flavor IDs from null JSON.")
        return None
    try:
        items = _array(_mapping(data), "items")
        return sorted({_get_string(_mapping(item), "id") for item in items})
    except PARSE_ERRORS as exc:
        logger.warning("Malformed JSON while parsing flavor IDs: %r", exc)
        return None


def parse_stack_reference(data: Any) -> StackReference:
    """Parse ``{"id": "...", "stack_url": "..."}``.

    Unlike the list parsers this raises on malformed input so the caller can
    report the failure on the build log.

    Raises:
        KeyError, TypeError: if a field is missing or not a string.
    """
    obj = _mapping(data)
    return StackReference(id=_get_string(obj, "id"), stack_url=_get_string(obj, "stack_url"))
