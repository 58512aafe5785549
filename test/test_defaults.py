"""Tests for creating values from schemas."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsvalidate.defaults import create_value
from jsvalidate.validation import is_valid


class TestCreateValue(unittest.TestCase):
    """Test value creation per schema shape."""

    def test_type_placeholders(self):
        cases = [
            ({'type': 'boolean'}, True),
            ({'type': 'number'}, 0),
            ({'type': 'integer'}, 0),
            ({'type': 'string'}, ''),
            ({'type': 'null'}, None),
            ({'type': 'any'}, None),
            ({'type': 'object'}, {}),
            ({'type': 'array'}, []),
        ]
        for schema, expected in cases:
            self.assertEqual(create_value(schema), expected, schema)

    def test_defaults_win(self):
        self.assertEqual(create_value({'type': 'boolean', 'default': False}), False)
        self.assertEqual(create_value({'type': 'number', 'default': 1.1}), 1.1)
        self.assertEqual(create_value({'type': 'string', 'default': 'hello'}), 'hello')
        self.assertEqual(create_value({'type': 'object', 'default': {'foo': 'bar'}}), {'foo': 'bar'})
        self.assertEqual(create_value({'type': 'array', 'default': [1, 2]}), [1, 2])
        self.assertEqual(create_value({'enum': [1, 2], 'default': 2}), 2)
        self.assertEqual(create_value({'$ref': 'Foo', 'default': {'id': 'bar'}}), {'id': 'bar'})

    def test_default_is_copied(self):
        schema = {'type': 'array', 'default': [1, 2]}
        value = create_value(schema)
        value.append(3)
        self.assertEqual(schema['default'], [1, 2])

    def test_enum(self):
        self.assertEqual(create_value({'enum': [1, 2]}), 1)
        self.assertIsNone(create_value({'enum': []}))

    def test_object_properties(self):
        schema = {'type': 'object', 'properties': {'foo': {'type': 'string'}, 'bar': {'type': 'boolean'}}}
        self.assertEqual(create_value(schema), {'foo': '', 'bar': True})
        self.assertEqual(create_value({'properties': {'foo': {'type': 'number'}}}), {'foo': 0})

    def test_array_with_items(self):
        self.assertEqual(create_value({'type': 'array', 'items': {'anyOf': []}}), [])

    def test_refs(self):
        self.assertEqual(create_value({'$ref': 'Foo'}), {})
        self.assertEqual(create_value({'$ref': 'Foo'}, {'Foo': {'type': 'number'}}), 0)
        schema = {'definitions': {'Name': {'type': 'string', 'default': 'n/a'}},
                  'type': 'object', 'properties': {'name': {'$ref': '#/definitions/Name'}}}
        self.assertEqual(create_value(schema), {'name': 'n/a'})

    def test_recursive_ref(self):
        definitions = {'Node': {'type': 'object', 'properties': {'child': {'$ref': 'Node'}}}}
        self.assertEqual(create_value({'$ref': 'Node'}, definitions), {'child': {}})

    def test_combinators_use_first_member(self):
        self.assertEqual(create_value({'anyOf': [{'type': 'string'}, {'type': 'number'}]}), '')
        self.assertEqual(create_value({'oneOf': [{'type': 'number'}]}), 0)
        self.assertEqual(create_value({'allOf': [{'type': 'boolean'}]}), True)
        self.assertIsNone(create_value({'anyOf': []}))

    def test_union_type_uses_first_member(self):
        self.assertIsNone(create_value({'type': ['null', 'string']}))
        self.assertEqual(create_value({'type': ['string', 'null']}), '')

    def test_empty_schema(self):
        self.assertIsNone(create_value({}))
        self.assertIsNone(create_value(None))

    def test_created_value_validates(self):
        schema = {
            'type': 'object',
            'properties': {
                'name': {'type': 'string'},
                'count': {'type': 'integer', 'minimum': 0},
                'kind': {'enum': ['a', 'b']},
                'tags': {'type': 'array', 'items': {'type': 'string'}},
                'flag': {'type': 'boolean'},
            },
            'required': ['name', 'count'],
        }
        self.assertTrue(is_valid(schema, create_value(schema)))


if __name__ == '__main__':
    unittest.main()
