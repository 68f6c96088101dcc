"""Serialization utilities."""

from dataclasses import asdict
from datetime import datetime


def _convert(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _convert(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_convert(v) for v in value]
    return value


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to dict, converting datetimes to ISO strings."""
    return {key: _convert(value) for key, value in asdict(obj).items()}
