"""Schema helpers for the table view properties file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DOWN_PRELOAD_COUNT, LOAD_MORE_THRESHOLD, UP_PRELOAD_COUNT

COLUMN_IDS: tuple[str, ...] = ("root", "commit", "author", "date", "hash", "refs")

PROPERTIES_SCHEMA: dict[str, Any] = {
    "$id": "commitgrid/properties.schema.json",
    "type": "object",
    "required": ["schema", "table"],
    "properties": {
        "schema": {"const": "commitgrid/properties@1"},
        "table": {
            "type": "object",
            "properties": {
                "columns": {
                    "type": "array",
                    "items": {"type": "string", "enum": list(COLUMN_IDS)},
                    "uniqueItems": True,
                    "minItems": 1,
                },
                "load_more_threshold": {"type": "integer", "minimum": 1},
                "show_root_names": {"type": "boolean"},
                "compact_refs": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
        "prefetch": {
            "type": "object",
            "properties": {
                "up": {"type": "integer", "minimum": 0},
                "down": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_PROPERTIES: dict[str, Any] = {
    "schema": "commitgrid/properties@1",
    "table": {
        "columns": ["root", "commit", "author", "date"],
        "load_more_threshold": LOAD_MORE_THRESHOLD,
        "show_root_names": True,
        "compact_refs": False,
    },
    "prefetch": {
        "up": UP_PRELOAD_COUNT,
        "down": DOWN_PRELOAD_COUNT,
    },
}

_validator = Draft202012Validator(PROPERTIES_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_PROPERTIES` and validate the result."""

    merged = deepcopy(DEFAULT_PROPERTIES)
    if data:
        for key, value in data.items():
            if key in ("table", "prefetch") and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_properties(data: dict[str, Any]) -> None:
    """Validate *data* against the properties schema."""

    _validator.validate(data)


__all__ = [
    "COLUMN_IDS",
    "DEFAULT_PROPERTIES",
    "PROPERTIES_SCHEMA",
    "merge_with_defaults",
    "validate_properties",
]
