"""Selects the validator for a schema node.

Combinators take precedence over type checks, in the order enum, oneOf, allOf,
anyOf, $ref. Without a combinator the node's `type` decides; when `type` is
missing it is inferred from `properties` (object) or `items` (array). The
inferred type is returned, never written back onto the schema.
"""

# pylint: disable=line-too-long

import logging
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from jsvalidate import combinators, typevalidators
from jsvalidate.common import is_array, is_object, short_repr
from jsvalidate.definitions import ValidationContext
from jsvalidate.errors import ErrorKind, PathPart, ValidationError

logger = logging.getLogger(__name__)

Parts = Tuple[PathPart, ...]


class SchemaType(str, Enum):
    """The type names a schema may declare."""
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    INTEGER = 'integer'
    STRING = 'string'
    NULL = 'null'
    ANY = 'any'
    ARRAY = 'array'
    OBJECT = 'object'


COMBINATORS = (
    ('enum', combinators.validate_enum),
    ('oneOf', combinators.validate_one_of),
    ('allOf', combinators.validate_all_of),
    ('anyOf', combinators.validate_any_of),
    ('$ref', combinators.validate_ref),
)


def infer_type(schema: Mapping[str, Any]) -> Optional[Any]:
    """Returns the declared `type`, or the type implied by the schema's shape.

    Returns:
        The `type` value, 'object' or 'array' when inferred, or None
    """
    if 'type' in schema:
        return schema['type']
    if 'properties' in schema:
        return SchemaType.OBJECT.value
    if 'items' in schema:
        return SchemaType.ARRAY.value
    return None


def validate_node(schema: Any, value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates `value` against one schema node.

    A None or empty schema accepts anything. A sub-schema that is not a
    mapping is reported as `unknownSchema`. `definitions` declared on the
    node are visible to the node and everything below it.
    """
    if schema is None:
        return []
    if not is_object(schema):
        return [context.error(parts, ErrorKind.UNKNOWN_SCHEMA, schema, value, schema=short_repr(schema))]
    if not schema:
        return []
    definitions = schema.get('definitions')
    with context.scoped_definitions(definitions if is_object(definitions) else None):
        return _dispatch(schema, value, parts, context)


def _dispatch(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    for keyword, validator in COMBINATORS:
        if keyword in schema:
            return validator(schema, value, parts, context)

    schema_type = infer_type(schema)
    if schema_type is None:
        return []
    if is_array(schema_type):
        return validate_union(schema, schema_type, value, parts, context)
    return validate_type(schema, schema_type, value, parts, context)


def validate_union(schema: Mapping[str, Any], members: List[Any], value: Any, parts: Parts,
                   context: ValidationContext) -> List[ValidationError]:
    """The value must validate cleanly against one member of a `type` list.

    Members are type names or sub-schemas. A type name member is checked with
    the rest of the node's constraints.
    """
    with context.trial():
        for member in members:
            if is_object(member):
                errors = context.descend(member, value, parts)
            else:
                errors = validate_type(schema, member, value, parts, context)
            if not errors:
                return []
    names = [member if isinstance(member, str) else short_repr(member) for member in members]
    return [context.error(parts, ErrorKind.UNION_TYPE_NOT_VALID, schema, value, types=', '.join(names))]


def validate_type(schema: Mapping[str, Any], schema_type: Any, value: Any, parts: Parts,
                  context: ValidationContext) -> List[ValidationError]:
    """Runs the validator for a single type name."""
    try:
        kind = SchemaType(schema_type)
    except (ValueError, TypeError):
        kind = None

    if kind is SchemaType.BOOLEAN:
        return typevalidators.validate_boolean(schema, value, parts, context)
    elif kind is SchemaType.NUMBER:
        return typevalidators.validate_number(schema, value, parts, context)
    elif kind is SchemaType.INTEGER:
        return typevalidators.validate_integer(schema, value, parts, context)
    elif kind is SchemaType.STRING:
        return typevalidators.validate_string(schema, value, parts, context)
    elif kind is SchemaType.NULL:
        return typevalidators.validate_null(schema, value, parts, context)
    elif kind is SchemaType.ANY:
        return typevalidators.validate_any(schema, value, parts, context)
    elif kind is SchemaType.ARRAY:
        return typevalidators.validate_array(schema, value, parts, context)
    elif kind is SchemaType.OBJECT:
        return typevalidators.validate_object(schema, value, parts, context)
    else:
        logger.debug("Unknown schema type %r", schema_type)
        return [context.error(parts, ErrorKind.UNKNOWN_TYPE, schema, value, type=schema_type if isinstance(schema_type, str) else short_repr(schema_type))]
