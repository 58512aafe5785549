"""Tests for the format registry."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsvalidate.formats import FORMATS, has_format, matches_format


class TestFormatRegistry(unittest.TestCase):
    """Test registry lookup."""

    def test_standard_formats_registered(self):
        for name in ('email', 'ip-address', 'ipv6', 'date-time', 'date', 'time',
                     'color', 'host-name', 'utc-millisec', 'regex', 'url', 'slug'):
            self.assertTrue(has_format(name), name)

    def test_unknown_format(self):
        self.assertFalse(has_format('uuid'))
        self.assertFalse(has_format(None))
        with self.assertRaises(KeyError):
            matches_format('uuid', 'x')

    def test_registry_is_read_only(self):
        with self.assertRaises(TypeError):
            FORMATS['uuid'] = lambda value: True


class TestFormatPredicates(unittest.TestCase):
    """Test each predicate with a matching and a non-matching string."""

    def test_valid_values(self):
        cases = [
            ('email', 'tim.tim@tom.co.hk'),
            ('ip-address', '127.0.0.1'),
            ('ipv6', '2001:0db8:85a3:08d3:1319:8a2e:0370:7344'),
            ('date-time', '2011-03-12T08:04:10Z'),
            ('date-time', '2011-03-12T08:04:10.123Z'),
            ('date', '2011-21-01'),
            ('time', '12:33:11'),
            ('host-name', 'canada.org'),
            ('color', '#ff0000'),
            ('color', '#f00'),
            ('color', 'rgb(255, 0, 0)'),
            ('utc-millisec', '123'),
            ('regex', 'a'),
            ('url', 'https://localhost.com/bar/baz'),
            ('slug', 'hello-world-whats-up'),
        ]
        for name, value in cases:
            self.assertTrue(matches_format(name, value), f"{name}: {value}")

    def test_invalid_values(self):
        cases = [
            ('email', 'tim.tim@tom@co.hk'),
            ('ip-address', '127.0.0.1.1'),
            ('ip-address', '256.0.0.1'),
            ('ipv6', '2001:0db8:85a3:08d3:1319:8a2e:0370'),
            ('date-time', '2011-03-12TT08:04:10Z'),
            ('date', '2011-211-01'),
            ('time', '122:33:11'),
            ('host-name', 'canada.org/foo/bar'),
            ('color', '#ff00000'),
            ('utc-millisec', '123m3'),
            ('regex', '\\'),
            ('regex', '(unclosed'),
            ('url', 'http:/localhost/asd'),
            ('slug', '-9hello-world-whats-up-'),
        ]
        for name, value in cases:
            self.assertFalse(matches_format(name, value), f"{name}: {value}")

    def test_trailing_newline_rejected(self):
        cases = [
            ('date', '2012-12-12\n'),
            ('time', '12:00:00\n'),
            ('date-time', '2011-03-12T08:04:10Z\n'),
            ('utc-millisec', '123\n'),
            ('ip-address', '1.2.3.4\n'),
            ('ipv6', '2001:0db8:85a3:08d3:1319:8a2e:0370:7344\n'),
            ('color', '#fff\n'),
            ('host-name', 'canada.org\n'),
            ('url', 'http://localhost.org\n'),
            ('slug', 'abc\n'),
            ('email', 'a@b.org\n'),
        ]
        for name, value in cases:
            self.assertFalse(matches_format(name, value), f"{name}: {value!r}")
            self.assertTrue(matches_format(name, value.rstrip('\n')), f"{name}: {value!r}")


if __name__ == '__main__':
    unittest.main()
