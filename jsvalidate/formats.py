"""Format registry for the string `format` keyword.

Maps a format name to a predicate over strings. The table is built once at import
time and exposed read-only; the string validator consults it only when format
checking is enabled.
"""

import re
from types import MappingProxyType
from typing import Callable, Mapping

FormatPredicate = Callable[[str], bool]

# pylint: disable=line-too-long
# Non-ASCII letters allowed in addresses.
_UCS = r'\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF'
_EMAIL_REGEX = re.compile(
    r"^((([a-z]|\d|[!#\$%&'\*\+\-\/=\?\^_`{\|}~]|[UCS])+(\.([a-z]|\d|[!#\$%&'\*\+\-\/=\?\^_`{\|}~]|[UCS])+)*)|"
    r"((\x22)((((\x20|\x09)*(\x0d\x0a))?(\x20|\x09)+)?(([\x01-\x08\x0b\x0c\x0e-\x1f\x7f]|\x21|[\x23-\x5b]|[\x5d-\x7e]|[UCS])|"
    r"(\\([\x01-\x09\x0b\x0c\x0d-\x7f]|[UCS]))))*(((\x20|\x09)*(\x0d\x0a))?(\x20|\x09)+)?(\x22)))@"
    r"((([a-z]|\d|[UCS])|(([a-z]|\d|[UCS])([a-z]|\d|-|\.|_|~|[UCS])*([a-z]|\d|[UCS])))\.)+"
    r"(([a-z]|[UCS])|(([a-z]|[UCS])([a-z]|\d|-|\.|_|~|[UCS])*([a-z]|[UCS])))\.?\Z".replace('UCS', _UCS),
    re.IGNORECASE
)
_IP_ADDRESS_REGEX = re.compile(
    r'^(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\Z'
)
_IPV6_REGEX = re.compile(r'^([0-9A-Fa-f]{1,4}:){7}[0-9A-Fa-f]{1,4}\Z')
_DATETIME_REGEX = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:.\d{1,3})?Z\Z')
_DATE_REGEX = re.compile(r'^\d{4}-\d{2}-\d{2}\Z')
_TIME_REGEX = re.compile(r'^\d{2}:\d{2}:\d{2}\Z')
_COLOR_REGEX = re.compile(
    r'^#[a-z0-9]{6}\Z|^#[a-z0-9]{3}\Z|^(?:rgba?\(\s*(?:[+-]?\d+%?)\s*,\s*(?:[+-]?\d+%?)\s*,\s*(?:[+-]?\d+%?)\s*(?:,\s*(?:[+-]?\d+%?)\s*)?\))\Z',
    re.IGNORECASE
)
_HOSTNAME_REGEX = re.compile(
    r'^(([a-zA-Z]|[a-zA-Z][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*([A-Za-z]|[A-Za-z][A-Za-z0-9\-]*[A-Za-z0-9])\Z'
)
_UTC_MILLISEC_REGEX = re.compile(r'^\d+\Z')
_URL_REGEX = re.compile(
    r'^(http|ftp|https)://[\w\-_]+(\.[\w\-_]+)+([\w\-\.,@?^=%&amp;:/~\+#]*[\w\-\@?^=%&amp;/~\+#])?\Z'
)
_SLUG_REGEX = re.compile(r'^([a-zA-Z]|[a-zA-Z][a-zA-Z0-9\-]*[a-zA-Z0-9])*\Z')
# pylint: enable=line-too-long


def _regex_predicate(pattern: re.Pattern) -> FormatPredicate:
    return lambda value: pattern.search(value) is not None


def _is_regex(value: str) -> bool:
    """A string is a `regex` if it compiles."""
    try:
        re.compile(value)
    except re.error:
        return False
    return True


FORMATS: Mapping[str, FormatPredicate] = MappingProxyType({
    'email': _regex_predicate(_EMAIL_REGEX),
    'ip-address': _regex_predicate(_IP_ADDRESS_REGEX),
    'ipv6': _regex_predicate(_IPV6_REGEX),
    'date-time': _regex_predicate(_DATETIME_REGEX),
    'date': _regex_predicate(_DATE_REGEX),
    'time': _regex_predicate(_TIME_REGEX),
    'color': _regex_predicate(_COLOR_REGEX),
    'host-name': _regex_predicate(_HOSTNAME_REGEX),
    'utc-millisec': _regex_predicate(_UTC_MILLISEC_REGEX),
    'regex': _is_regex,
    # non-standard
    'url': _regex_predicate(_URL_REGEX),
    'slug': _regex_predicate(_SLUG_REGEX),
})


def has_format(name: str) -> bool:
    """Returns True if `name` is a registered format."""
    return isinstance(name, str) and name in FORMATS


def matches_format(name: str, value: str) -> bool:
    """Checks a string against a registered format.

    Args:
        name: The format name
        value: The string to check

    Returns:
        True if the string matches the format

    Raises:
        KeyError: If the format is not registered
    """
    return FORMATS[name](value)
