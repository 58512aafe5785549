"""Validators defined in terms of other schemas: enum, allOf, anyOf, oneOf and $ref."""

import logging
from typing import Any, List, Mapping, Tuple

from jsvalidate.common import is_array, json_equal, short_repr
from jsvalidate.definitions import ValidationContext
from jsvalidate.errors import ErrorKind, PathPart, ValidationError

logger = logging.getLogger(__name__)

Parts = Tuple[PathPart, ...]

MALFORMED_COMBINATOR = '{keyword} must be an array of schemas'


def validate_enum(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """The value must equal one of the `enum` members."""
    members = schema['enum']
    if not is_array(members):
        return [context.error(parts, ErrorKind.ENUM_NO_ARRAY, schema, value, enum=short_repr(members))]
    if any(json_equal(member, value) for member in members):
        return []
    return [context.error(parts, ErrorKind.ENUM, schema, value, value=short_repr(value))]


def _subschemas(keyword: str, schema: Mapping[str, Any], value: Any, parts: Parts,
                context: ValidationContext, kind: str):
    subschemas = schema[keyword]
    if not is_array(subschemas):
        return None, [context.error(parts, kind, schema, value, template=MALFORMED_COMBINATOR, keyword=keyword)]
    return subschemas, []


def validate_all_of(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """The value must validate against every sub-schema; all errors are kept."""
    subschemas, errors = _subschemas('allOf', schema, value, parts, context, ErrorKind.ALL_OF)
    if subschemas is None:
        return errors
    for subschema in subschemas:
        errors.extend(context.descend(subschema, value, parts))
    return errors


def validate_any_of(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """The value must validate against at least one sub-schema.

    Branch errors are discarded; a failure is reported as a single error.
    """
    subschemas, errors = _subschemas('anyOf', schema, value, parts, context, ErrorKind.ANY_OF)
    if subschemas is None:
        return errors
    with context.trial():
        matched = any(not context.descend(subschema, value, parts) for subschema in subschemas)
    if not matched:
        errors.append(context.error(parts, ErrorKind.ANY_OF, schema, value))
    return errors


def validate_one_of(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """The value must validate against exactly one sub-schema.

    No match is reported as `notOneOf`, more than one match as `oneOf`.
    """
    subschemas, errors = _subschemas('oneOf', schema, value, parts, context, ErrorKind.ONE_OF)
    if subschemas is None:
        return errors
    with context.trial():
        matches = sum(1 for subschema in subschemas if not context.descend(subschema, value, parts))
    if matches == 0:
        errors.append(context.error(parts, ErrorKind.NOT_ONE_OF, schema, value))
    elif matches > 1:
        errors.append(context.error(parts, ErrorKind.ONE_OF, schema, value, matches=matches))
    return errors


def validate_ref(schema: Mapping[str, Any], value: Any, parts: Parts, context: ValidationContext) -> List[ValidationError]:
    """Validates against the schema named by `$ref`, at the same path."""
    if context.options.omit_refs:
        return []
    ref = schema['$ref']
    target = context.resolve_ref(ref)
    if target is None:
        logger.debug("Unresolved $ref %r", ref)
        return [context.error(parts, ErrorKind.REF, schema, value, ref=ref)]
    with context.following(ref, target, parts):
        return context.descend(target, value, parts)
