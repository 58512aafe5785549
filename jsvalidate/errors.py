"""Error model for jsvalidate.

Validation failures are values: every violated constraint produces one
`ValidationError` carrying the path of the offending value, an error kind, a
rendered message and the data used to render it. Malformed schemas and other
programmer errors are raised as `SchemaError` exceptions instead.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from jsonpointer import JsonPointer

PathPart = Union[str, int]


class ErrorKind:
    """Names of the error kinds, one per constraint."""
    TYPE = 'type'
    UNKNOWN_TYPE = 'unknownType'
    UNION_TYPE_NOT_VALID = 'unionTypeNotValid'
    ENUM = 'enum'
    ENUM_NO_ARRAY = 'enumNoArray'
    PATTERN = 'pattern'
    FORMAT = 'format'
    UNKNOWN_FORMAT = 'unknownFormat'
    MIN_LENGTH = 'minLength'
    MAX_LENGTH = 'maxLength'
    MINIMUM = 'minimum'
    MAXIMUM = 'maximum'
    EXCLUSIVE_MINIMUM = 'exclusiveMinimum'
    EXCLUSIVE_MAXIMUM = 'exclusiveMaximum'
    MULTIPLE_OF = 'multipleOf'
    MIN_PROPERTIES = 'minProperties'
    MAX_PROPERTIES = 'maxProperties'
    DEPENDENCY = 'dependency'
    DEPENDENCY_NO_PROP = 'dependencyNoProp'
    REQUIRED = 'required'
    ADDITIONAL_PROPERTIES = 'additionalProperties'
    MIN_ITEMS = 'minItems'
    MAX_ITEMS = 'maxItems'
    UNIQUE_ITEMS = 'uniqueItems'
    ADDITIONAL_ITEMS = 'additionalItems'
    ITEM_NOT_VALID = 'itemNotValid'
    ALL_OF = 'allOf'
    ANY_OF = 'anyOf'
    ONE_OF = 'oneOf'
    NOT_ONE_OF = 'notOneOf'
    REF = '$ref'
    UNKNOWN_SCHEMA = 'unknownSchema'


MESSAGES: Mapping[str, str] = MappingProxyType({
    ErrorKind.TYPE: 'Value is not of type {expected}',
    ErrorKind.UNKNOWN_TYPE: 'Unknown type: {type}',
    ErrorKind.UNION_TYPE_NOT_VALID: 'Value does not match any type in union: {types}',
    ErrorKind.ENUM: 'Not a valid enumeration item: {value}',
    ErrorKind.ENUM_NO_ARRAY: 'Enumeration is not an array: {enum}',
    ErrorKind.PATTERN: 'Value does not match pattern: {pattern}',
    ErrorKind.FORMAT: 'Value does not match format: {format}',
    ErrorKind.UNKNOWN_FORMAT: 'Unknown format: {format}',
    ErrorKind.MIN_LENGTH: 'String is shorter than minimum length: {minLength}',
    ErrorKind.MAX_LENGTH: 'String is longer than maximum length: {maxLength}',
    ErrorKind.MINIMUM: 'Value is less than minimum: {minimum}',
    ErrorKind.MAXIMUM: 'Value is greater than maximum: {maximum}',
    ErrorKind.EXCLUSIVE_MINIMUM: 'Value is less than or equal to exclusive minimum: {minimum}',
    ErrorKind.EXCLUSIVE_MAXIMUM: 'Value is greater than or equal to exclusive maximum: {maximum}',
    ErrorKind.MULTIPLE_OF: 'Value is not a multiple of: {multipleOf}',
    ErrorKind.MIN_PROPERTIES: 'Number of properties is less than minimum: {minProperties}',
    ErrorKind.MAX_PROPERTIES: 'Number of properties is larger than maximum: {maxProperties}',
    ErrorKind.DEPENDENCY: 'Property {property} requires property: {dependency}',
    ErrorKind.DEPENDENCY_NO_PROP: 'Invalid dependency declared for property: {property}',
    ErrorKind.REQUIRED: 'Required property is missing: {property}',
    ErrorKind.ADDITIONAL_PROPERTIES: 'Additional property is not allowed: {property}',
    ErrorKind.MIN_ITEMS: 'Number of items is less than minimum: {minItems}',
    ErrorKind.MAX_ITEMS: 'Number of items is larger than maximum: {maxItems}',
    ErrorKind.UNIQUE_ITEMS: 'Array items are not unique',
    ErrorKind.ADDITIONAL_ITEMS: 'Array index outside tuple length: {index}',
    ErrorKind.ITEM_NOT_VALID: 'Additional item at index {index} matches none of the schemas',
    ErrorKind.ALL_OF: 'Value does not match all of the schemas',
    ErrorKind.ANY_OF: 'Value does not match any of the schemas',
    ErrorKind.ONE_OF: 'Value validates against more than one of the schemas',
    ErrorKind.NOT_ONE_OF: 'Value does not validate against one of the schemas',
    ErrorKind.REF: 'Definition of schema reference not found: {ref}',
    ErrorKind.UNKNOWN_SCHEMA: 'Schema is not an object: {schema}',
})


def format_path(parts: Tuple[PathPart, ...]) -> str:
    """Renders path parts in dot/bracket form, e.g. ``.items[2].name``."""
    return ''.join(f'[{part}]' if isinstance(part, int) else f'.{part}' for part in parts)


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure."""
    path: str
    kind: str
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)
    parts: Tuple[PathPart, ...] = ()

    @property
    def pointer(self) -> str:
        """The location of the failing value as an RFC 6901 JSON Pointer."""
        return JsonPointer.from_parts([str(part) for part in self.parts]).path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'path': self.path,
            'pointer': self.pointer,
            'kind': self.kind,
            'message': self.message,
            'context': dict(self.context),
        }

    def __str__(self) -> str:
        return f"{self.message} at {self.path or '<root>'}"


def render_message(kind: str, context: Mapping[str, Any], template: Optional[str] = None) -> str:
    """Renders the message template for an error kind.

    Missing interpolation keys fall back to the raw template.
    """
    if template is None:
        template = MESSAGES.get(kind, kind)
    try:
        return template.format(**context)
    except (KeyError, IndexError):
        return template


def make_error(parts: Tuple[PathPart, ...], kind: str, context: Optional[Mapping[str, Any]] = None,
               template: Optional[str] = None) -> ValidationError:
    """Creates a `ValidationError` for the value at `parts`.

    Args:
        parts: Path segments of the failing value
        kind: The error kind
        context: Interpolation data for the message
        template: Optional message template replacing the kind's default
    """
    context = MappingProxyType(dict(context or {}))
    return ValidationError(
        path=format_path(parts),
        kind=kind,
        message=render_message(kind, context, template),
        context=context,
        parts=tuple(parts),
    )


def add_errors(errors: List[ValidationError], new_errors: List[ValidationError]) -> List[ValidationError]:
    """Appends `new_errors` to `errors` in order and returns `errors`."""
    errors.extend(new_errors)
    return errors


class SchemaError(Exception):
    """
    Exception raised when a schema or the validation options are unusable.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
        cause: Optional underlying exception that caused this error
    """

    def __init__(self, message: str, context: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        self.message = message
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class SchemaCycleError(SchemaError):
    """
    Exception raised when `$ref` resolution loops without consuming the value.

    Attributes:
        cycle_path: List of reference names forming the cycle
    """

    def __init__(self, cycle_path: List[str], context: Optional[str] = None) -> None:
        self.cycle_path = cycle_path
        super().__init__(f"Circular schema reference: {' -> '.join(cycle_path)}", context)


class ValidationDepthError(SchemaError):
    """Exception raised when value nesting exceeds the configured depth."""

    def __init__(self, max_depth: int, context: Optional[str] = None) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum validation depth ({max_depth}) exceeded", context)
