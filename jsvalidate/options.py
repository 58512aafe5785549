"""Validation options threaded through a validation run."""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Union

from jsvalidate.errors import SchemaError

# Maximum value nesting (path length) for one validation run
MAX_VALIDATION_DEPTH = 100

# JSON-facing option names accepted in option mappings
OPTION_ALIASES = {
    'validateFormat': 'validate_format',
    'additionalProperties': 'additional_properties',
    'additionalItems': 'additional_items',
    'omitProperties': 'omit_properties',
    'omitRefs': 'omit_refs',
    'onError': 'on_error',
    'maxDepth': 'max_depth',
}

ErrorHook = Callable[[Any, Any, Any, str], None]


@dataclass(frozen=True)
class ValidationOptions:
    """Strictness toggles and the reference table for one validation run."""
    validate_format: bool = False
    additional_properties: bool = True
    additional_items: bool = True
    omit_properties: Optional[FrozenSet[str]] = None
    omit_refs: bool = False
    on_error: Optional[ErrorHook] = None
    definitions: Mapping[str, Any] = field(default_factory=dict)
    max_depth: int = MAX_VALIDATION_DEPTH

    def __post_init__(self):
        if self.omit_properties is not None and not isinstance(self.omit_properties, frozenset):
            if isinstance(self.omit_properties, str):
                raise SchemaError("omit_properties must be a collection of property names")
            object.__setattr__(self, 'omit_properties', frozenset(self.omit_properties))
        if self.definitions is None:
            object.__setattr__(self, 'definitions', {})
        if not isinstance(self.definitions, Mapping):
            raise SchemaError("definitions must be a mapping of names to schemas")
        object.__setattr__(self, 'definitions', MappingProxyType(dict(self.definitions)))
        if self.on_error is not None and not callable(self.on_error):
            raise SchemaError("on_error must be callable")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'ValidationOptions':
        """Builds options from a mapping of snake_case or camelCase names."""
        return cls(**_normalize(values))

    def merge(self, overrides: Union[None, 'ValidationOptions', Mapping[str, Any]]) -> 'ValidationOptions':
        """Returns a copy with `overrides` applied field by field."""
        if overrides is None:
            return self
        if isinstance(overrides, ValidationOptions):
            return overrides
        if not isinstance(overrides, Mapping):
            raise SchemaError(f"Options must be a mapping or ValidationOptions, got {type(overrides).__name__}")
        return dataclasses.replace(self, **_normalize(overrides))

    def with_definitions(self, extra: Optional[Mapping[str, Any]]) -> 'ValidationOptions':
        """Returns a copy whose definitions also contain `extra`.

        Names already present keep their current schema.
        """
        if not extra or all(name in self.definitions for name in extra):
            return self
        merged = dict(extra)
        merged.update(self.definitions)
        return dataclasses.replace(self, definitions=merged)

    def is_omitted(self, name: str) -> bool:
        """Returns True if object validation skips property `name`."""
        return self.omit_properties is not None and name in self.omit_properties


DEFAULT_OPTIONS = ValidationOptions()


def _normalize(values: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in dataclasses.fields(ValidationOptions)}
    normalized = {}
    for key, value in values.items():
        name = OPTION_ALIASES.get(key, key)
        if name not in names:
            raise SchemaError(f"Unknown validation option: {key}")
        normalized[name] = value
    return normalized
