"""Lenient parsing of multipart form values.

Admin forms send structured fields (lists, nested objects) as JSON-encoded
strings. A malformed value never fails the request: it is logged and replaced
with an empty default.
"""

import json
import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

EMPTY_MARKERS = ("", "null", "undefined")


def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() in EMPTY_MARKERS


def present_fields(raw: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Drop fields the client did not send or sent empty."""
    return {key: value for key, value in raw.items() if not is_blank(value)}


def _loads(name: str, value: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(value)
    except (TypeError, ValueError) as e:
        logger.warning("Failed to parse form field", extra={"field": name, "error": str(e)})
        return False, None


def parse_list(name: str, value: Optional[str], split_commas: bool = False) -> Optional[list]:
    """
    Parse a JSON list field.

    Returns None when the field is absent. With ``split_commas`` a value that is
    not JSON is read as comma-separated text; otherwise it becomes ``[]``.
    """
    if value is None:
        return None
    if is_blank(value):
        return []
    ok, parsed = _loads(name, value)
    if ok and isinstance(parsed, list):
        return parsed
    if split_commas:
        return [item.strip() for item in value.split(",") if item.strip()]
    if ok:
        logger.warning("Form field is not a list", extra={"field": name})
    return []


def parse_object(name: str, value: Optional[str]) -> Optional[dict]:
    """Parse a JSON object field; None when absent, ``{}`` when malformed."""
    if value is None:
        return None
    if is_blank(value):
        return {}
    ok, parsed = _loads(name, value)
    if ok and isinstance(parsed, dict):
        return parsed
    if ok:
        logger.warning("Form field is not an object", extra={"field": name})
    return {}


def parse_number(name: str, value: Optional[str]) -> Optional[float]:
    if is_blank(value):
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("Form field is not a number", extra={"field": name, "value": value})
        return None


def parse_refs(name: str, value: Optional[str]) -> Optional[list[str]]:
    """
    Parse a declared list of retained image URLs.

    Returns None when absent or unparseable so that the stored set is kept;
    a bad value must never cause remote assets to be deleted.
    """
    if value is None:
        return None
    if is_blank(value):
        return []
    ok, parsed = _loads(name, value)
    if not ok or not isinstance(parsed, list):
        return None
    return [str(item) for item in parsed if item]


def coerce_count(value: Any) -> Optional[int]:
    """Read a declared per-item upload count; None when absent or unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
