"""Reference resolution and per-run validation state.

A `ValidationContext` is created for every top-level validation call. It carries
the options, the root schema, the active `$ref` chain and the value nesting limit;
validators recurse through `ValidationContext.descend`.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import unquote

import jsonpointer
from jsonpointer import JsonPointer, JsonPointerException

from jsvalidate.errors import (PathPart, SchemaCycleError, ValidationDepthError, ValidationError,
                               format_path, make_error)
from jsvalidate.options import ValidationOptions

logger = logging.getLogger(__name__)

Dispatch = Callable[[Any, Any, Tuple[PathPart, ...], 'ValidationContext'], List[ValidationError]]


class ValidationContext:
    """State of one validation run."""

    def __init__(self, options: ValidationOptions, root_schema: Any, dispatch: Dispatch):
        self.options = options
        self.root_schema = root_schema
        self._dispatch = dispatch
        self._trial = 0
        self._ref_chain: List[Tuple[str, int, Tuple[PathPart, ...]]] = []

    @property
    def in_trial(self) -> bool:
        """True while probing branches whose errors will be discarded."""
        return self._trial > 0

    def descend(self, schema: Any, value: Any, parts: Tuple[PathPart, ...]) -> List[ValidationError]:
        """Validates `value` at `parts` against a sub-schema.

        Only value nesting counts towards `max_depth`; `$ref` and combinator
        hops at the same path are bounded by the `$ref` cycle check.
        """
        if len(parts) > self.options.max_depth:
            logger.warning("Maximum validation depth exceeded at %s", format_path(parts) or '<root>')
            raise ValidationDepthError(self.options.max_depth, context=format_path(parts))
        return self._dispatch(schema, value, parts, self)

    def error(self, parts: Tuple[PathPart, ...], kind: str, schema: Any, value: Any, /,
              template: Optional[str] = None, **context: Any) -> ValidationError:
        """Creates an error and notifies the `on_error` hook."""
        err = make_error(parts, kind, context, template)
        if self.options.on_error is not None and not self.in_trial:
            self.options.on_error(err, schema, value, err.path)
        return err

    @contextmanager
    def trial(self) -> Iterator[None]:
        """Marks errors produced inside the block as discarded."""
        self._trial += 1
        try:
            yield
        finally:
            self._trial -= 1

    @contextmanager
    def scoped_definitions(self, definitions: Optional[Mapping[str, Any]]) -> Iterator[None]:
        """Extends the definitions table for the duration of the block."""
        previous = self.options
        scoped = previous.with_definitions(definitions)
        if scoped is not previous:
            logger.debug("Extending definitions with %s", sorted(set(definitions) - set(previous.definitions)))
        self.options = scoped
        try:
            yield
        finally:
            self.options = previous

    @contextmanager
    def following(self, ref: str, target: Any, parts: Tuple[PathPart, ...]) -> Iterator[None]:
        """Tracks a `$ref` on the active chain.

        Re-entering the same reference at the same value path can never
        terminate and raises `SchemaCycleError`.
        """
        key = (ref, id(target), tuple(parts))
        if key in self._ref_chain:
            start = self._ref_chain.index(key)
            cycle = [entry[0] for entry in self._ref_chain[start:]] + [ref]
            logger.warning("Circular schema reference detected: %s", ' -> '.join(cycle))
            raise SchemaCycleError(cycle, context=format_path(parts))
        self._ref_chain.append(key)
        try:
            yield
        finally:
            self._ref_chain.pop()

    def resolve_ref(self, ref: Any) -> Optional[Any]:
        """Looks up a `$ref` value.

        Plain names and ``#/definitions/<name>`` are looked up in the
        definitions table; other ``#/...`` fragments are resolved as JSON
        Pointers against the root schema.

        Returns:
            The referenced schema, or None if it cannot be resolved
        """
        return resolve_ref(ref, self.options.definitions, self.root_schema)


def resolve_ref(ref: Any, definitions: Mapping[str, Any], root_schema: Any = None) -> Optional[Any]:
    """Resolves a `$ref` against a definitions table and an optional root schema."""
    if not isinstance(ref, str):
        return None
    if ref in definitions:
        logger.debug("Resolved $ref %s from definitions", ref)
        return definitions[ref]
    if not ref.startswith('#'):
        return None
    try:
        pointer = JsonPointer(unquote(ref[1:]))
    except JsonPointerException:
        return None
    parts = pointer.parts
    if len(parts) == 2 and parts[0] == 'definitions' and parts[1] in definitions:
        logger.debug("Resolved $ref %s from definitions", ref)
        return definitions[parts[1]]
    if root_schema is None:
        return None
    try:
        resolved = jsonpointer.resolve_pointer(root_schema, pointer.path)
    except JsonPointerException:
        return None
    logger.debug("Resolved $ref %s as JSON pointer", ref)
    return resolved
