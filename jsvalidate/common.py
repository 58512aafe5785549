"""
Common helpers for JSON values and schemas.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

# Keywords that mark a mapping as a schema rather than a name-indexed table
SCHEMA_KEYWORDS = frozenset([
    'type', 'properties', 'patternProperties', 'additionalProperties', 'items',
    'additionalItems', 'required', 'dependencies', 'enum', 'allOf', 'anyOf', 'oneOf',
    '$ref', 'minimum', 'maximum', 'exclusiveMinimum', 'exclusiveMaximum', 'multipleOf',
    'minLength', 'maxLength', 'pattern', 'format', 'minItems', 'maxItems', 'uniqueItems',
    'minProperties', 'maxProperties', 'definitions', 'title', 'description', 'default',
])


def is_object(value: Any) -> bool:
    """True for JSON objects."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    """True for JSON arrays."""
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    """True for JSON numbers; booleans are not numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    """True for integral JSON numbers, including floats such as ``3.0``."""
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def is_schema_like(value: Any) -> bool:
    """True for a mapping that is not a name-indexed table of schemas.

    A table is a non-empty mapping without schema keywords whose values are all
    mappings. Anything else, including `{'x-note': 'free'}`, is a schema.
    """
    if not is_object(value):
        return False
    if len(value) == 0 or any(key in SCHEMA_KEYWORDS for key in value):
        return True
    return not all(is_object(member) for member in value.values())


def _canonical(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if is_object(value):
        return {str(key): _canonical(item) for key, item in value.items()}
    if is_array(value):
        return [_canonical(item) for item in value]
    return value


def canonical_json(value: Any) -> str:
    """Serializes a value so that structurally equal values serialize identically.

    Object keys are sorted and integral floats are written as integers, so
    ``{"a": 1.0}`` and ``{"a": 1}`` compare equal while ``true`` and ``1`` do not.
    """
    return json.dumps(_canonical(value), sort_keys=True, separators=(',', ':'), default=str)


def json_equal(left: Any, right: Any) -> bool:
    """Deep structural equality of two JSON values."""
    return canonical_json(left) == canonical_json(right)


def short_repr(value: Any, limit: int = 60) -> str:
    """A compact rendering of a value for error messages."""
    text = canonical_json(value)
    if len(text) > limit:
        return text[:limit - 3] + '...'
    return text


def json_type_name(value: Any) -> str:
    """The JSON type name of a Python value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if is_array(value):
        return 'array'
    if is_object(value):
        return 'object'
    return type(value).__name__
