"""Validates JSON values against JSON schemas.

This module provides the public entry points: `validate` returns the list of
violations, `validate_instance` wraps it in a `ValidationResult`, and
`validate_file` validates every instance stored in a JSON or JSONL file.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from jsvalidate.common import is_object
from jsvalidate.definitions import ValidationContext
from jsvalidate.dispatcher import validate_node
from jsvalidate.errors import SchemaError, ValidationError
from jsvalidate.options import DEFAULT_OPTIONS, ValidationOptions

logger = logging.getLogger(__name__)

Options = Union[None, ValidationOptions, Mapping[str, Any]]


def validate(schema: Any, value: Any, options: Options = None) -> List[ValidationError]:
    """Validates a value against a schema.

    Args:
        schema: The schema, a mapping; None and {} accept every value
        value: The JSON value to validate
        options: Overrides for the default `ValidationOptions`, as a mapping
            (snake_case or camelCase names) or a `ValidationOptions`

    Returns:
        All violations in the order they were found; empty when valid

    Raises:
        SchemaError: If the schema is not a mapping or the options are unusable
    """
    if schema is None:
        return []
    if not is_object(schema):
        raise SchemaError(f"Schema must be a mapping, got {type(schema).__name__}")
    opts = DEFAULT_OPTIONS.merge(options)
    if not schema:
        return []
    root_definitions = schema.get('definitions')
    if root_definitions is not None and not is_object(root_definitions):
        raise SchemaError("Schema definitions must be a mapping of names to schemas", context='definitions')
    opts = opts.with_definitions(root_definitions)
    context = ValidationContext(opts, schema, validate_node)
    return context.descend(schema, value, ())


def is_valid(schema: Any, value: Any, options: Options = None) -> bool:
    """Returns True if `value` conforms to `schema`."""
    return not validate(schema, value, options)


class ValidationResult:
    """Result of validating a JSON instance against a schema."""

    def __init__(self, is_valid: bool, errors: List[ValidationError] = None, instance_path: str = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.instance_path = instance_path

    @property
    def valid(self) -> bool:
        return self.is_valid

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        result: Dict[str, Any] = {
            'valid': self.is_valid,
            'errors': [error.to_dict() for error in self.errors],
        }
        if self.instance_path:
            result['instance'] = self.instance_path
        return result

    def __str__(self) -> str:
        if self.is_valid:
            return "Valid" + (f": {self.instance_path}" if self.instance_path else "")
        prefix = f"{self.instance_path}: " if self.instance_path else ""
        return f"Invalid: {prefix}" + "; ".join(str(error) for error in self.errors)

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"


def validate_instance(instance: Any, schema: Any, options: Options = None) -> ValidationResult:
    """Validates a JSON instance against a schema.

    Args:
        instance: The JSON value to validate
        schema: The JSON schema
        options: Validation options

    Returns:
        ValidationResult with validation status and any errors
    """
    errors = validate(schema, instance, options)
    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def _load_instances(instance_file: str, schema: Any) -> Tuple[List[Any], List[str]]:
    with open(instance_file, 'r', encoding='utf-8') as f:
        content = f.read().strip()

    instances: List[Any] = []
    instance_paths: List[str] = []

    # Check if schema expects an array at the root
    schema_is_array = is_object(schema) and (schema.get('type') == 'array' or ('type' not in schema and 'items' in schema))

    try:
        data = json.loads(content)
        if isinstance(data, list) and not schema_is_array:
            # Schema describes the elements, validate each one
            instances = data
            instance_paths = [f"{instance_file}[{i}]" for i in range(len(data))]
        else:
            instances = [data]
            instance_paths = [instance_file]
    except json.JSONDecodeError:
        # Try as JSONL
        for i, line in enumerate(content.split('\n')):
            line = line.strip()
            if not line:
                continue
            try:
                instances.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {i + 1} of {instance_file}") from e
            instance_paths.append(f"{instance_file}:{i + 1}")
    return instances, instance_paths


def validate_file(instance_file: str, schema_file: str, options: Options = None) -> List[ValidationResult]:
    """Validates JSON instance file(s) against a schema file.

    Args:
        instance_file: Path to JSON file (single value, array, or JSONL)
        schema_file: Path to the JSON schema file
        options: Validation options

    Returns:
        List of ValidationResult for each instance in the file

    Raises:
        ValueError: If a JSONL line is not valid JSON
    """
    with open(schema_file, 'r', encoding='utf-8') as f:
        schema = json.load(f)

    instances, instance_paths = _load_instances(instance_file, schema)
    logger.debug("Validating %d instance(s) from %s", len(instances), instance_file)

    results = []
    for instance, path in zip(instances, instance_paths):
        result = validate_instance(instance, schema, options)
        result.instance_path = path
        results.append(result)
    return results


def validate_json_instances(input_files: List[str], schema_file: str,
                            options: Optional[Options] = None) -> Tuple[int, int]:
    """Validates multiple JSON instance files against a schema.

    Returns:
        Tuple of (valid_count, invalid_count)
    """
    valid_count = 0
    invalid_count = 0
    for input_file in input_files:
        for result in validate_file(input_file, schema_file, options):
            if result.is_valid:
                valid_count += 1
            else:
                invalid_count += 1
                logger.info("%s", result)
    return valid_count, invalid_count
