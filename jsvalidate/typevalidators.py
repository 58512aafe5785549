"""Validators for the JSON value types.

Each validator takes ``(schema, value, parts, context)`` and returns the list of
errors for that node. A type mismatch is reported alone; otherwise every
applicable constraint is checked and all failures are reported.
"""

# pylint: disable=too-many-branches, line-too-long

import logging
import re
from fractions import Fraction
from typing import Any, List, Mapping, Tuple

from jsvalidate.common import (canonical_json, is_array, is_integer, is_number, is_object,
                               is_schema_like, json_type_name)
from jsvalidate.definitions import ValidationContext
from jsvalidate.errors import ErrorKind, PathPart, ValidationError
from jsvalidate.formats import has_format, matches_format

logger = logging.getLogger(__name__)

Parts = Tuple[PathPart, ...]


def _type_error(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext,
                expected: str) -> List[ValidationError]:
    return [context.error(parts, ErrorKind.TYPE, schema, value, expected=expected, actual=json_type_name(value))]


def validate_boolean(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates a boolean."""
    if not isinstance(value, bool):
        return _type_error(schema, value, parts, context, 'boolean')
    return []


def validate_null(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates null."""
    if value is not None:
        return _type_error(schema, value, parts, context, 'null')
    return []


def validate_any(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Any value is valid."""
    return []


def validate_number(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates a number against multipleOf, minimum and maximum."""
    if not is_number(value):
        return _type_error(schema, value, parts, context, 'number')
    return _check_numeric(schema, value, parts, context)


def validate_integer(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates an integral number; ``3.0`` counts as an integer."""
    if not is_integer(value):
        return _type_error(schema, value, parts, context, 'integer')
    return _check_numeric(schema, value, parts, context)


def _is_multiple(value: Any, divisor: Any) -> bool:
    if not is_number(divisor) or divisor <= 0:
        return False
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    try:
        # decimal text avoids binary float remainders such as 0.3 % 0.1
        return Fraction(repr(value)) % Fraction(repr(divisor)) == 0
    except (ValueError, OverflowError):
        return False


def _check_numeric(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if 'multipleOf' in schema:
        divisor = schema['multipleOf']
        if not _is_multiple(value, divisor):
            errors.append(context.error(parts, ErrorKind.MULTIPLE_OF, schema, value, multipleOf=divisor))

    minimum = schema.get('minimum')
    exclusive_minimum = schema.get('exclusiveMinimum')
    if is_number(minimum):
        if exclusive_minimum is True and value <= minimum:
            errors.append(context.error(parts, ErrorKind.EXCLUSIVE_MINIMUM, schema, value, minimum=minimum))
        elif exclusive_minimum is not True and value < minimum:
            errors.append(context.error(parts, ErrorKind.MINIMUM, schema, value, minimum=minimum))
    if is_number(exclusive_minimum) and value <= exclusive_minimum:
        errors.append(context.error(parts, ErrorKind.EXCLUSIVE_MINIMUM, schema, value, minimum=exclusive_minimum))

    maximum = schema.get('maximum')
    exclusive_maximum = schema.get('exclusiveMaximum')
    if is_number(maximum):
        if exclusive_maximum is True and value >= maximum:
            errors.append(context.error(parts, ErrorKind.EXCLUSIVE_MAXIMUM, schema, value, maximum=maximum))
        elif exclusive_maximum is not True and value > maximum:
            errors.append(context.error(parts, ErrorKind.MAXIMUM, schema, value, maximum=maximum))
    if is_number(exclusive_maximum) and value >= exclusive_maximum:
        errors.append(context.error(parts, ErrorKind.EXCLUSIVE_MAXIMUM, schema, value, maximum=exclusive_maximum))

    return errors


def validate_string(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates a string against pattern, format, minLength and maxLength.

    `format` is only checked when the options enable format validation.
    """
    if not isinstance(value, str):
        return _type_error(schema, value, parts, context, 'string')

    errors: List[ValidationError] = []

    if 'pattern' in schema:
        pattern = schema['pattern']
        try:
            matched = re.search(pattern, value) is not None
        except (re.error, TypeError):
            logger.debug("Uncompilable pattern %r", pattern)
            matched = False
        if not matched:
            errors.append(context.error(parts, ErrorKind.PATTERN, schema, value, pattern=pattern))

    if context.options.validate_format and 'format' in schema:
        format_name = schema['format']
        if not has_format(format_name):
            logger.debug("Unknown format %r", format_name)
            errors.append(context.error(parts, ErrorKind.UNKNOWN_FORMAT, schema, value, format=format_name))
        elif not matches_format(format_name, value):
            errors.append(context.error(parts, ErrorKind.FORMAT, schema, value, format=format_name))

    min_length = schema.get('minLength')
    if is_number(min_length) and len(value) < min_length:
        errors.append(context.error(parts, ErrorKind.MIN_LENGTH, schema, value, minLength=min_length))

    max_length = schema.get('maxLength')
    if is_number(max_length) and len(value) > max_length:
        errors.append(context.error(parts, ErrorKind.MAX_LENGTH, schema, value, maxLength=max_length))

    return errors


def validate_array(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates an array against minItems, maxItems, uniqueItems and its items."""
    if not is_array(value):
        return _type_error(schema, value, parts, context, 'array')

    errors: List[ValidationError] = []

    min_items = schema.get('minItems')
    if is_number(min_items) and len(value) < min_items:
        errors.append(context.error(parts, ErrorKind.MIN_ITEMS, schema, value, minItems=min_items))

    max_items = schema.get('maxItems')
    if is_number(max_items) and len(value) > max_items:
        errors.append(context.error(parts, ErrorKind.MAX_ITEMS, schema, value, maxItems=max_items))

    if schema.get('uniqueItems') is True:
        seen = set()
        for item in value:
            key = canonical_json(item)
            if key in seen:
                errors.append(context.error(parts, ErrorKind.UNIQUE_ITEMS, schema, value))
                break
            seen.add(key)

    errors.extend(_check_items(schema, value, parts, context))
    return errors


def _check_items(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []
    additional = schema.get('additionalItems', context.options.additional_items)

    if 'items' not in schema:
        # without a tuple every element is additional, but only a schema constrains them
        if additional is None or isinstance(additional, bool):
            return errors
        tuple_items: List[Any] = []
    elif is_array(schema['items']):
        tuple_items = list(schema['items'])
    else:
        items = schema['items']
        for index, item in enumerate(value):
            errors.extend(context.descend(items, item, parts + (index,)))
        return errors

    for index, item in enumerate(value):
        item_parts = parts + (index,)
        if index < len(tuple_items):
            errors.extend(context.descend(tuple_items[index], item, item_parts))
        elif additional is None or additional is True:
            continue
        elif additional is False:
            errors.append(context.error(item_parts, ErrorKind.ADDITIONAL_ITEMS, schema, item, index=index))
        elif is_array(additional):
            with context.trial():
                matched = any(not context.descend(candidate, item, item_parts) for candidate in additional)
            if not matched:
                errors.append(context.error(item_parts, ErrorKind.ITEM_NOT_VALID, schema, item, index=index))
        else:
            errors.extend(context.descend(additional, item, item_parts))
    return errors


def validate_object(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates an object.

    Checks minProperties, maxProperties, required and dependencies, then walks
    the object's keys in order: declared properties recurse into their schema,
    the remaining keys go through patternProperties and additionalProperties.
    Keys listed in the `omit_properties` option are ignored throughout.
    """
    if not is_object(value) or is_array(value):
        return _type_error(schema, value, parts, context, 'object')

    options = context.options
    errors: List[ValidationError] = []
    keys = [key for key in value if not options.is_omitted(key)]
    properties = schema.get('properties')
    if not is_object(properties):
        properties = {}

    min_properties = schema.get('minProperties')
    if is_number(min_properties) and len(keys) < min_properties:
        errors.append(context.error(parts, ErrorKind.MIN_PROPERTIES, schema, value, minProperties=min_properties))

    max_properties = schema.get('maxProperties')
    if is_number(max_properties) and len(keys) > max_properties:
        errors.append(context.error(parts, ErrorKind.MAX_PROPERTIES, schema, value, maxProperties=max_properties))

    for name in _required_names(schema, properties):
        if name not in value and not options.is_omitted(name):
            errors.append(context.error(parts + (name,), ErrorKind.REQUIRED, schema, value, property=name))

    errors.extend(_check_dependencies(schema, value, parts, context))

    patterns, pattern_errors = _compile_patterns(schema, value, parts, context)
    errors.extend(pattern_errors)
    has_additional = 'additionalProperties' in schema
    additional = schema['additionalProperties'] if has_additional else options.additional_properties

    for key in keys:
        key_parts = parts + (key,)
        if key in properties:
            errors.extend(context.descend(properties[key], value[key], key_parts))
            continue
        if patterns is not None:
            match = next((sub for regex, sub in patterns if regex.search(key)), None)
            if match is not None:
                errors.extend(context.descend(match, value[key], key_parts))
                continue
            if not has_additional:
                errors.append(context.error(key_parts, ErrorKind.ADDITIONAL_PROPERTIES, schema, value, property=key))
                continue
        errors.extend(_check_additional_property(schema, additional, key, value, key_parts, context))

    return errors


def _required_names(schema: Mapping[str, Any], properties: Mapping[str, Any]) -> List[str]:
    required = schema.get('required')
    names = [name for name in required if isinstance(name, str)] if is_array(required) else []
    # legacy form: `required: true` inside the property's own schema
    for name, sub_schema in properties.items():
        if is_object(sub_schema) and sub_schema.get('required') is True and name not in names:
            names.append(name)
    return names


def _check_dependencies(schema: Mapping[str, Any], value: Mapping[str, Any], parts: Parts,
                        context: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []
    dependencies = schema.get('dependencies')
    if not is_object(dependencies):
        return errors

    for owner, declared in dependencies.items():
        if owner not in value or context.options.is_omitted(owner):
            continue
        if isinstance(declared, str) or is_object(declared):
            targets = [declared]
        elif is_array(declared):
            targets = list(declared)
        else:
            errors.append(context.error(parts, ErrorKind.DEPENDENCY_NO_PROP, schema, value, property=owner))
            continue
        for target in targets:
            if isinstance(target, str):
                if target not in value:
                    errors.append(context.error(parts, ErrorKind.DEPENDENCY, schema, value,
                                                property=owner, dependency=target))
            elif is_object(target):
                errors.extend(context.descend(target, value, parts))
            else:
                errors.append(context.error(parts, ErrorKind.DEPENDENCY_NO_PROP, schema, value, property=owner))
    return errors


def _compile_patterns(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext):
    pattern_properties = schema.get('patternProperties')
    if not is_object(pattern_properties):
        return None, []
    patterns = []
    errors: List[ValidationError] = []
    for pattern, sub_schema in pattern_properties.items():
        try:
            patterns.append((re.compile(pattern), sub_schema))
        except (re.error, TypeError):
            logger.debug("Uncompilable patternProperties key %r", pattern)
            errors.append(context.error(parts, ErrorKind.PATTERN, schema, value, pattern=pattern))
    return patterns, errors


def _check_additional_property(schema: Mapping[str, Any], additional: Any, key: str, value: Mapping[str, Any],
                               key_parts: Parts, context: ValidationContext) -> List[ValidationError]:
    if additional is None or additional is True:
        return []
    if additional is False:
        return [context.error(key_parts, ErrorKind.ADDITIONAL_PROPERTIES, schema, value, property=key)]
    if is_object(additional) and not is_schema_like(additional):
        # name-indexed table of schemas for residual keys
        if key in additional:
            return context.descend(additional[key], value[key], key_parts)
        return [context.error(key_parts, ErrorKind.ADDITIONAL_PROPERTIES, schema, value, property=key)]
    return context.descend(additional, value[key], key_parts)


