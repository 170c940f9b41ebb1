"""Tests for the style tables."""

import pytest

from yamltree.codec.styles import ScalarStyle, NodeStyle


class TestScalarStyle:

    @pytest.mark.parametrize('style, value', [
        (ScalarStyle.DOUBLE_QUOTED, '"'),
        (ScalarStyle.SINGLE_QUOTED, "'"),
        (ScalarStyle.UNQUOTED, None),
        (ScalarStyle.FOLDED, '>'),
        (ScalarStyle.LITERAL, '|'),
    ])
    def test_both_directions(self, style, value):
        """Every style maps to one PyYAML style and back."""
        assert ScalarStyle.as_pyyaml(style) == value
        assert ScalarStyle.from_pyyaml(value) is style

    def test_unknown_is_unquoted(self):
        """Styles PyYAML may report that have no entry read as plain."""
        assert ScalarStyle.from_pyyaml('') is ScalarStyle.UNQUOTED
        assert ScalarStyle.from_pyyaml('?') is ScalarStyle.UNQUOTED

    def test_no_style_writes_plain(self):
        """An absent hint asks the emitter for a plain scalar."""
        assert ScalarStyle.as_pyyaml(None) is None


class TestNodeStyle:

    def test_both_directions(self):
        """FLOW and BLOCK map to PyYAML's flow_style flag."""
        assert NodeStyle.as_pyyaml(NodeStyle.FLOW) is True
        assert NodeStyle.as_pyyaml(NodeStyle.BLOCK) is False
        assert NodeStyle.from_pyyaml(True) is NodeStyle.FLOW
        assert NodeStyle.from_pyyaml(False) is NodeStyle.BLOCK

    def test_defaults(self):
        """Unset reads as BLOCK; no style lets the emitter choose."""
        assert NodeStyle.from_pyyaml(None) is NodeStyle.BLOCK
        assert NodeStyle.as_pyyaml(None) is None
