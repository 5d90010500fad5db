import math
from datetime import datetime
from typing import Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from .errors import BadRequest


def normalize_email(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def safe_float(value, default=None):
    if isinstance(value, bool):
        return default
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return default
    if math.isfinite(numeric):
        return numeric
    return default


def safe_int(value, default=None):
    numeric = safe_float(value)
    if numeric is None or not numeric.is_integer():
        return default
    return int(numeric)


def parse_object_id(value, label: str = "resource") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise BadRequest(f"Invalid {label} identifier.")


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document) -> Optional[Dict]:
    if document is None:
        return None
    return serialize_value(dict(document))


def serialize_insert(result) -> Dict:
    return {
        "acknowledged": result.acknowledged,
        "insertedId": str(result.inserted_id),
    }


def serialize_update(result) -> Dict:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
    }


def serialize_delete(result) -> Dict:
    return {
        "acknowledged": result.acknowledged,
        "deletedCount": result.deleted_count,
    }
