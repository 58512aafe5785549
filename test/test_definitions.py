"""Tests for definitions, reference resolution and recursion guards."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsvalidate.definitions import resolve_ref
from jsvalidate.errors import ErrorKind, SchemaCycleError, ValidationDepthError
from jsvalidate.validation import is_valid, validate


def kinds(errors):
    return [error.kind for error in errors]


class TestResolveRef(unittest.TestCase):
    """Test the lookup rules."""

    definitions = {'Foo': {'type': 'number'}}

    def test_plain_name(self):
        self.assertEqual(resolve_ref('Foo', self.definitions), {'type': 'number'})

    def test_definitions_fragment(self):
        self.assertEqual(resolve_ref('#/definitions/Foo', self.definitions), {'type': 'number'})

    def test_pointer_into_root(self):
        root = {'properties': {'a b': {'type': 'string'}}}
        self.assertEqual(resolve_ref('#/properties/a%20b', {}, root), {'type': 'string'})

    def test_unresolvable(self):
        self.assertIsNone(resolve_ref('Bar', self.definitions))
        self.assertIsNone(resolve_ref('#/definitions/Bar', self.definitions))
        self.assertIsNone(resolve_ref('#/definitions/Bar', self.definitions, {'definitions': {}}))
        self.assertIsNone(resolve_ref(42, self.definitions))
        self.assertIsNone(resolve_ref('#bad', self.definitions, {}))


class TestDefinitionsScope(unittest.TestCase):
    """Test where definitions are visible."""

    def test_root_definitions(self):
        schema = {'definitions': {'Name': {'type': 'string'}},
                  'type': 'object', 'properties': {'name': {'$ref': 'Name'}}}
        self.assertTrue(is_valid(schema, {'name': 'x'}))
        self.assertFalse(is_valid(schema, {'name': 1}))

    def test_caller_definitions_win(self):
        schema = {'definitions': {'Name': {'type': 'string'}}, '$ref': 'Name'}
        self.assertTrue(is_valid(schema, 1, {'definitions': {'Name': {'type': 'number'}}}))

    def test_nested_definitions_are_scoped(self):
        schema = {
            'type': 'object',
            'properties': {
                'inner': {
                    'definitions': {'Local': {'type': 'boolean'}},
                    'type': 'object',
                    'properties': {'flag': {'$ref': 'Local'}},
                },
                'outer': {'$ref': 'Local'},
            },
        }
        self.assertTrue(is_valid(schema, {'inner': {'flag': True}}))
        self.assertFalse(is_valid(schema, {'inner': {'flag': 1}}))
        self.assertEqual(kinds(validate(schema, {'outer': True})), [ErrorKind.REF])

    def test_schema_is_not_mutated(self):
        schema = {'definitions': {'A': {'type': 'string'}}, '$ref': 'A'}
        definitions = {'B': {'type': 'number'}}
        validate(schema, 'x', {'definitions': definitions})
        self.assertEqual(definitions, {'B': {'type': 'number'}})
        self.assertEqual(schema, {'definitions': {'A': {'type': 'string'}}, '$ref': 'A'})


class TestRecursionGuards(unittest.TestCase):
    """Test cycle detection and the depth limit."""

    def test_recursive_schema_consuming_value(self):
        definitions = {'Node': {
            'type': 'object',
            'properties': {'value': {'type': 'number'}, 'next': {'type': ['null', {'$ref': 'Node'}]}},
        }}
        value = {'value': 1, 'next': {'value': 2, 'next': {'value': 3, 'next': None}}}
        self.assertTrue(is_valid({'$ref': 'Node'}, value, {'definitions': definitions}))
        value['next']['next']['value'] = 'x'
        errors = validate({'$ref': 'Node'}, value, {'definitions': definitions})
        self.assertEqual(kinds(errors), [ErrorKind.UNION_TYPE_NOT_VALID])
        self.assertEqual(errors[0].path, '.next')

    def test_self_reference_cycle(self):
        with self.assertRaises(SchemaCycleError) as ctx:
            validate({'$ref': 'A'}, 1, {'definitions': {'A': {'$ref': 'A'}}})
        self.assertEqual(ctx.exception.cycle_path, ['A', 'A'])

    def test_indirect_cycle(self):
        definitions = {'A': {'$ref': 'B'}, 'B': {'allOf': [{'$ref': 'A'}]}}
        with self.assertRaises(SchemaCycleError) as ctx:
            validate({'$ref': 'A'}, 1, {'definitions': definitions})
        self.assertEqual(ctx.exception.cycle_path, ['A', 'B', 'A'])

    def test_depth_limit(self):
        schema = {'type': 'array', 'items': {'$ref': 'List'}}
        value = []
        for _ in range(20):
            value = [value]
        options = {'definitions': {'List': schema}, 'maxDepth': 10}
        with self.assertRaises(ValidationDepthError):
            validate(schema, value, options)
        self.assertTrue(is_valid(schema, value, {'definitions': {'List': schema}}))

    def test_ref_hops_do_not_count_towards_depth(self):
        definitions = {'L': {'type': 'array', 'items': {'$ref': 'L'}}}
        value = []
        for _ in range(60):
            value = [value]
        self.assertEqual(validate({'$ref': 'L'}, value, {'definitions': definitions}), [])

    def test_long_linked_list_with_default_depth(self):
        definitions = {'Node': {
            'type': 'object',
            'properties': {'value': {'type': 'number'}, 'next': {'type': ['null', {'$ref': 'Node'}]}},
        }}
        value = None
        for i in range(50):
            value = {'value': i, 'next': value}
        self.assertEqual(validate({'$ref': 'Node'}, value, {'definitions': definitions}), [])

    def test_depth_counts_value_nesting(self):
        definitions = {'L': {'type': 'array', 'items': {'$ref': 'L'}}}
        value = []
        for _ in range(5):
            value = [value]
        self.assertTrue(is_valid({'$ref': 'L'}, value, {'definitions': definitions, 'maxDepth': 5}))
        with self.assertRaises(ValidationDepthError):
            validate({'$ref': 'L'}, [value], {'definitions': definitions, 'maxDepth': 5})


if __name__ == '__main__':
    unittest.main()
