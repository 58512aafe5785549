"""Creates placeholder values that match a schema's shape."""

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from jsvalidate.common import is_array, is_object
from jsvalidate.definitions import resolve_ref
from jsvalidate.dispatcher import SchemaType, infer_type

logger = logging.getLogger(__name__)

# Placeholder per type name
TYPE_DEFAULTS: Dict[str, Any] = {
    SchemaType.BOOLEAN.value: True,
    SchemaType.NUMBER.value: 0,
    SchemaType.INTEGER.value: 0,
    SchemaType.STRING.value: '',
    SchemaType.NULL.value: None,
    SchemaType.ANY.value: None,
}


def create_value(schema: Any, definitions: Optional[Mapping[str, Any]] = None) -> Any:
    """Creates a value for a schema.

    A `default` wins, then the first `enum` member. A `$ref` produces the value
    of the referenced schema, or {} when it cannot be resolved or loops back on
    itself. Objects get one entry per declared property; arrays are empty.
    `allOf`, `anyOf` and `oneOf` use their first member.

    Args:
        schema: The schema
        definitions: Extra definitions for `$ref`; the schema's own
            `definitions` are used as well

    Returns:
        The created value
    """
    table: Dict[str, Any] = {}
    if is_object(schema) and is_object(schema.get('definitions')):
        table.update(schema['definitions'])
    if definitions:
        table.update(definitions)
    return _create(schema, table, schema, set())


def _create(schema: Any, definitions: Mapping[str, Any], root: Any, active: Set[Tuple[str, int]]) -> Any:
    if not is_object(schema):
        return None
    if 'default' in schema:
        return copy.deepcopy(schema['default'])

    enum = schema.get('enum')
    if is_array(enum):
        return copy.deepcopy(enum[0]) if enum else None

    if '$ref' in schema:
        ref = schema['$ref']
        target = resolve_ref(ref, definitions, root)
        if target is None:
            return {}
        key = (ref, id(target))
        if key in active:
            logger.debug("Stopping at recursive $ref %s", ref)
            return {}
        active.add(key)
        try:
            return _create(target, definitions, root, active)
        finally:
            active.discard(key)

    for keyword in ('allOf', 'anyOf', 'oneOf'):
        if keyword in schema:
            members = schema[keyword]
            if not is_array(members) or not members:
                return None
            return _create(members[0], definitions, root, active)

    schema_type = infer_type(schema)
    if is_array(schema_type):
        schema_type = schema_type[0] if schema_type else None
        if is_object(schema_type):
            return _create(schema_type, definitions, root, active)

    if schema_type == SchemaType.OBJECT.value:
        properties = schema.get('properties')
        if not is_object(properties):
            return {}
        return {name: _create(sub_schema, definitions, root, active) for name, sub_schema in properties.items()}
    if schema_type == SchemaType.ARRAY.value:
        return []
    if isinstance(schema_type, str):
        return TYPE_DEFAULTS.get(schema_type)
    return None
