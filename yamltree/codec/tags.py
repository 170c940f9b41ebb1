"""YAML tags and implicit tag resolution.

A Tag pairs a canonical URI with the Python type it maps to and a pattern
that untyped (plain) scalars are matched against. A TagRepository holds an
ordered catalog of tags; the first tag whose pattern matches the whole
scalar wins, so catch-all tags must come last.

Example:
    >>> Yaml11Tags.REPOSITORY.for_input('42').uri
    'tag:yaml.org,2002:int'
"""

import datetime
import re
import urllib.parse

from yaml.constructor import SafeConstructor
from yaml.nodes import ScalarNode


class Tag:
    """A YAML 1.1/1.2 tag.

    Attributes:
        uri: Canonical tag URI. A leading '!' is stripped.
        native_type: Python type values of this tag are represented as
        target_pattern: Compiled pattern an untyped scalar must fully match
        construct: Optional callable turning matching text into native_type
    """

    __slots__ = ('_uri', '_native_type', '_target_pattern', '_construct')

    def __init__(self, uri, native_type, target_pattern, construct=None):
        if uri.startswith('!'):
            uri = uri[1:]
        if isinstance(target_pattern, str):
            target_pattern = re.compile(target_pattern)
        self._uri = uri
        self._native_type = native_type
        self._target_pattern = target_pattern
        self._construct = construct

    @property
    def uri(self):
        return self._uri

    @property
    def native_type(self):
        return self._native_type

    @property
    def target_pattern(self):
        return self._target_pattern

    @property
    def is_global(self):
        """True if this is a global tag (one with the ``tag:`` scheme)."""
        return urllib.parse.urlsplit(self._uri).scheme == 'tag'

    def matches(self, scalar):
        return self._target_pattern.fullmatch(scalar) is not None

    def construct(self, scalar):
        """Convert scalar text to this tag's native value.

        Returns the text unchanged if the tag has no constructor or the text
        cannot be converted.
        """
        if self._construct is None:
            return scalar
        try:
            return self._construct(scalar)
        except (ValueError, OverflowError, IndexError):
            return scalar

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return (self._uri == other._uri
                and self._native_type is other._native_type
                and self._target_pattern.pattern == other._target_pattern.pattern)

    def __hash__(self):
        return hash((self._uri, self._native_type))

    def __repr__(self):
        return 'Tag(%r, %s)' % (self._uri, self._native_type.__name__)


class TagRepository:
    """A collection of tags that are understood when reading a document.

    When two tags claim the same native type or URI, the lookup indices keep
    the first one in catalog order.
    """

    def __init__(self, tags):
        self._tags = tuple(tags)
        by_type = {}
        by_name = {}
        for tag in self._tags:
            by_type.setdefault(tag.native_type, tag)
            by_name.setdefault(tag.uri, tag)
        self._by_type = by_type
        self._by_name = by_name

    @classmethod
    def of(cls, tags):
        return cls(tags)

    def tags(self):
        return self._tags

    def for_input(self, scalar):
        """Return the first tag whose pattern matches all of scalar, or None."""
        for tag in self._tags:
            if tag.matches(scalar):
                return tag
        return None

    def for_type(self, native_type):
        return self._by_type.get(native_type)

    def named(self, uri):
        if uri.startswith('!'):
            uri = uri[1:]
        return self._by_name.get(uri)

    def __len__(self):
        return len(self._tags)

    def __iter__(self):
        return iter(self._tags)


# ============================================================================
# YAML 1.1 scalar constructors
# ============================================================================

# Numbers and timestamps are built by PyYAML's own constructors so that both
# readers agree on what a scalar means.
_CONSTRUCTOR = SafeConstructor()

_TRUE_VALUES = frozenset(('y', 'Y', 'yes', 'Yes', 'YES',
                          'true', 'True', 'TRUE', 'on', 'On', 'ON'))


def _construct_bool(value):
    return value in _TRUE_VALUES


def _construct_null(value):
    return None


def _construct_int(value):
    """Construct an int from a YAML 1.1 integer string."""
    if not value:
        raise ValueError("empty integer")
    return _CONSTRUCTOR.construct_yaml_int(ScalarNode(_yaml_org('int'), value))


def _construct_float(value):
    """Construct a float from a YAML 1.1 float string."""
    if not value:
        raise ValueError("empty float")
    return _CONSTRUCTOR.construct_yaml_float(ScalarNode(_yaml_org('float'), value))


def _construct_timestamp(value):
    """Construct a date or an aware/naive datetime from a YAML timestamp."""
    if SafeConstructor.timestamp_regexp.match(value) is None:
        raise ValueError("not a timestamp: %r" % value)
    return _CONSTRUCTOR.construct_yaml_timestamp(
        ScalarNode(_yaml_org('timestamp'), value))


def _yaml_org(specific):
    return 'tag:yaml.org,2002:' + specific


class Yaml11Tags:
    """Standard types defined on the yaml.org tag repository.

    See https://yaml.org/type/. Merge keys and binary scalars are not
    part of this catalog.
    """

    #: Canonically y|n in YAML 1.1 as well; true|false is what gets written.
    BOOL = Tag(
        _yaml_org('bool'), bool,
        r'y|Y|yes|Yes|YES|n|N|no|No|NO'
        r'|true|True|TRUE|false|False|FALSE'
        r'|on|On|ON|off|Off|OFF',
        _construct_bool)

    FLOAT = Tag(
        _yaml_org('float'), float,
        r'[-+]?([0-9][0-9_]*)?\.[0-9.]*([eE][-+][0-9]+)?'  # base 10
        r'|[-+]?[0-9][0-9_]*(:[0-5]?[0-9])+\.[0-9]*'  # base 60
        r'|[-+]?\.(inf|Inf|INF)'  # infinity
        r'|\.(nan|NaN|NAN)',  # not a number
        _construct_float)

    INT = Tag(
        _yaml_org('int'), int,
        r'[-+]?0b[0-1_]+'  # base 2
        r'|[-+]?0[0-7_]+'  # base 8
        r'|[-+]?(0|[1-9][0-9_]*)'  # base 10
        r'|[-+]?0x[0-9a-fA-F_]+'  # base 16
        r'|[-+]?[1-9][0-9_]*(:[0-5]?[0-9])+',  # base 60
        _construct_int)

    #: The tree has no separate null value, so this mostly shows up for
    #: empty scalars.
    NULL = Tag(
        _yaml_org('null'), type(None),
        r'~|null|Null|NULL|',
        _construct_null)

    #: Any non-empty string; the empty scalar is NULL.
    STR = Tag(_yaml_org('str'), str, r'.+', None)

    TIMESTAMP = Tag(
        _yaml_org('timestamp'), datetime.datetime,
        r'[0-9]{4}-[0-9]{2}-[0-9]{2}'  # YYYY-MM-DD
        r'|[0-9]{4}'  # year
        r'-[0-9]{1,2}'  # month
        r'-[0-9]{1,2}'  # day
        r'([Tt]|[ \t]+)[0-9]{1,2}'  # hour
        r':[0-9]{1,2}'  # minute
        r':[0-9]{2}'  # second
        r'(\.[0-9]*)?'  # fraction
        r'([ \t]*(Z|[-+][0-9]{1,2}(:[0-9]{2})?))?',  # time zone
        _construct_timestamp)

    REPOSITORY = None


Yaml11Tags.REPOSITORY = TagRepository.of([
    Yaml11Tags.NULL,
    Yaml11Tags.BOOL,
    Yaml11Tags.INT,
    Yaml11Tags.FLOAT,
    Yaml11Tags.TIMESTAMP,
    Yaml11Tags.STR,
])
