# core/repro.py
import hashlib
import json
from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


def _json_default_serializer(obj: Any) -> str:
    """Custom JSON serializer for deterministic hashing."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, UUID):
        return str(obj)
    raise TypeError(f"Type {type(obj)} not serializable")


def _canonical_string(request_model: BaseModel) -> str:
    # The calculation id is excluded so identical inputs share a fingerprint.
    payload = request_model.model_dump(mode="json", exclude={"calculation_id"})
    return json.dumps(
        payload,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=_json_default_serializer,
    )


def generate_canonical_hash(request_model: BaseModel, engine_version: str) -> tuple[str, str]:
    """
    Generates a deterministic hash for a given request model and engine version.

    Returns a tuple of (input_fingerprint, calculation_hash).
    """
    canonical_string = _canonical_string(request_model)
    input_fingerprint = f"sha256:{hashlib.sha256(canonical_string.encode('utf-8')).hexdigest()}"

    full_string_to_hash = canonical_string + engine_version
    calculation_hash = f"sha256:{hashlib.sha256(full_string_to_hash.encode('utf-8')).hexdigest()}"

    return input_fingerprint, calculation_hash
