"""Mappings between yamltree styles and PyYAML's event style values.

PyYAML describes a scalar's quoting with a one-character string (None for
plain) and a collection's layout with a tri-state flow_style flag.
"""

import enum


class ScalarStyle(enum.Enum):
    """Style that can be used to represent a scalar."""

    #: "hello world"
    DOUBLE_QUOTED = '"'
    #: 'hello world'
    SINGLE_QUOTED = "'"
    UNQUOTED = None
    FOLDED = '>'
    LITERAL = '|'

    @staticmethod
    def as_pyyaml(style):
        """Return the PyYAML style for style, plain when style is None."""
        if style is None:
            return _SCALAR_TO_PYYAML[ScalarStyle.UNQUOTED]
        return _SCALAR_TO_PYYAML[style]

    @staticmethod
    def from_pyyaml(style):
        """Return the ScalarStyle for a PyYAML style, UNQUOTED if unknown."""
        return _SCALAR_FROM_PYYAML.get(style, ScalarStyle.UNQUOTED)


class NodeStyle(enum.Enum):
    """Layout of a mapping or sequence.

    FLOW is the compact, json-like representation::

        {value: [list, of, elements], another: value}

    BLOCK is expanded, traditional YAML::

        value:
        - list
        - of
        - elements
        another: value
    """

    FLOW = True
    BLOCK = False

    @staticmethod
    def as_pyyaml(style):
        """Return the PyYAML flow_style, None (let the emitter pick) for None."""
        if style is None:
            return None
        return _NODE_TO_PYYAML[style]

    @staticmethod
    def from_pyyaml(flow_style):
        """Return the NodeStyle for a PyYAML flow_style, BLOCK if unknown."""
        return _NODE_FROM_PYYAML.get(flow_style, NodeStyle.BLOCK)


_SCALAR_TO_PYYAML = {style: style.value for style in ScalarStyle}
_SCALAR_FROM_PYYAML = {value: style for style, value in _SCALAR_TO_PYYAML.items()}

_NODE_TO_PYYAML = {style: style.value for style in NodeStyle}
_NODE_FROM_PYYAML = {value: style for style, value in _NODE_TO_PYYAML.items()}
