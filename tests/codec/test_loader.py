"""Tests for YamlConfigurationLoader."""

import io

import pytest

from yamltree.error import ParsingError
from yamltree.node import CommentedConfigurationNode
from yamltree.codec.hints import SCALAR_STYLE, NODE_STYLE
from yamltree.codec.loader import YamlConfigurationLoader
from yamltree.codec.styles import ScalarStyle, NodeStyle
from yamltree.codec.tags import TagRepository, Yaml11Tags


ROUND_TRIP_DOCUMENTS = [
    'a: 1\nb: text\n',
    'server:\n  host: example.com\n  ports: [80, 443]\n',
    '- 1\n- [a, b]\n- {k: v}\n- nested:\n    deep: true\n',
    "quoted: 'x: y'\ndouble: \"tab\\there\"\nempty: ''\n",
    'literal: |\n  line one\n  line two\nfolded: >\n  some folded\n  text\n',
    'list: []\nmap: {}\nnull_value: ~\n',
    'unicode: "caf\\u00e9"\n',
    '"key with: colon": 1\n"123": number key\n',
]


class TestOptions:

    def test_defaults(self):
        """Defaults match the documented configuration."""
        loader = YamlConfigurationLoader()
        assert loader.indent == 4
        assert loader.node_style is None
        assert loader.width is None
        assert loader.tag_repository is Yaml11Tags.REPOSITORY
        assert loader.resolve_types is False
        assert loader.explicit_start is False

    @pytest.mark.parametrize('indent', [0, 1, 10, '2', True])
    def test_invalid_indent(self, indent):
        """Indentation outside 2..9 is refused."""
        with pytest.raises(ValueError):
            YamlConfigurationLoader(indent=indent)

    def test_invalid_options(self):
        """Options of the wrong type are refused."""
        with pytest.raises(ValueError):
            YamlConfigurationLoader(node_style='flow')
        with pytest.raises(ValueError):
            YamlConfigurationLoader(width='wide')
        with pytest.raises(ValueError):
            YamlConfigurationLoader(tag_repository=[Yaml11Tags.STR])

    def test_setters(self):
        """Options can be changed after construction."""
        loader = YamlConfigurationLoader()
        loader.indent = 2
        loader.node_style = NodeStyle.FLOW
        loader.explicit_start = True
        assert (loader.indent, loader.node_style, loader.explicit_start) \
            == (2, NodeStyle.FLOW, True)
        with pytest.raises(ValueError):
            loader.indent = 12

    def test_create_node(self):
        """New nodes are empty commented roots."""
        node = YamlConfigurationLoader().create_node()
        assert isinstance(node, CommentedConfigurationNode)
        assert node.virtual
        assert node.parent is None


class TestLoad:

    def test_load_string(self):
        """A string is read into a fresh node."""
        node = YamlConfigurationLoader().load('a: [1, 2]\n')
        assert node.raw() == {'a': ['1', '2']}

    def test_load_stream(self):
        """Text and binary streams are accepted."""
        loader = YamlConfigurationLoader()
        assert loader.load(io.StringIO('a: 1')).raw() == {'a': '1'}
        assert loader.load(io.BytesIO(b'a: 1')).raw() == {'a': '1'}

    def test_load_resolve_types(self):
        """resolve_types converts plain scalars."""
        node = YamlConfigurationLoader(resolve_types=True).load('a: 1\nb: [yes, 1.5]\n')
        assert node.raw() == {'a': 1, 'b': [True, 1.5]}

    def test_custom_repository(self):
        """Only the configured tags are used for resolution."""
        repo = TagRepository.of([Yaml11Tags.INT, Yaml11Tags.STR])
        node = YamlConfigurationLoader(tag_repository=repo, resolve_types=True) \
            .load('a: 1\nb: true\n')
        assert node.raw() == {'a': 1, 'b': 'true'}

    def test_empty_repository(self):
        """An empty repository resolves nothing instead of the default one."""
        loader = YamlConfigurationLoader(tag_repository=TagRepository.of([]),
                                         resolve_types=True)
        assert loader.load('a: 1\nb: true\n').raw() == {'a': '1', 'b': 'true'}

    def test_load_all(self):
        """load_all yields one node per document."""
        nodes = list(YamlConfigurationLoader().load_all('a: 1\n---\nb: 2\n'))
        assert [n.raw() for n in nodes] == [{'a': '1'}, {'b': '2'}]

    def test_load_error(self):
        """Malformed input raises ParsingError."""
        with pytest.raises(ParsingError):
            YamlConfigurationLoader().load('a: [1\n')


class TestSave:

    @pytest.mark.parametrize('text', ROUND_TRIP_DOCUMENTS)
    def test_round_trip(self, text):
        """Saving a loaded tree and loading it again gives an equal tree."""
        loader = YamlConfigurationLoader()
        first = loader.load(text)
        second = loader.load(loader.save(first))
        assert second.raw() == first.raw()

    def test_round_trip_keeps_styles(self):
        """Scalar and collection styles survive a save."""
        loader = YamlConfigurationLoader()
        node = loader.load("a: 'x'\nb: [1, 2]\nc:\n  d: |\n    text\n")
        again = loader.load(loader.save(node))
        assert again.node('a').hint(SCALAR_STYLE) is ScalarStyle.SINGLE_QUOTED
        assert again.node('b').hint(NODE_STYLE) is NodeStyle.FLOW
        assert again.node('c').hint(NODE_STYLE) is NodeStyle.BLOCK
        assert again.node('c', 'd').hint(SCALAR_STYLE) is ScalarStyle.LITERAL

    def test_single_quoted_when_safe(self):
        """A single-quoted hint is honoured when the value allows it."""
        node = CommentedConfigurationNode.root()
        node.node('v').set('hello').set_hint(SCALAR_STYLE, ScalarStyle.SINGLE_QUOTED)
        assert YamlConfigurationLoader().save(node) == "v: 'hello'\n"

    def test_single_quoted_fallback(self):
        """Values that cannot be single quoted fall back to double quotes."""
        node = CommentedConfigurationNode.root()
        node.node('v').set('bell\x07').set_hint(SCALAR_STYLE, ScalarStyle.SINGLE_QUOTED)
        out = YamlConfigurationLoader().save(node)
        assert out == 'v: "bell\\a"\n'
        assert YamlConfigurationLoader().load(out).node('v').raw() == 'bell\x07'

    def test_anchor_written(self):
        """Anchors are written back; aliases come back as copies."""
        loader = YamlConfigurationLoader()
        node = loader.load('a: &x {k: v}\nb: *x\n')
        out = loader.save(node)
        assert '&x' in out
        assert '*x' not in out
        assert loader.load(out).raw() == {'a': {'k': 'v'}, 'b': {'k': 'v'}}

    def test_native_values(self):
        """Booleans and numbers are written as YAML text."""
        node = CommentedConfigurationNode.root().set([True, 42, 1.5])
        assert YamlConfigurationLoader().save(node) == '- true\n- 42\n- 1.5\n'

    def test_typed_round_trip(self):
        """Native values and typed-looking strings survive save and typed load."""
        loader = YamlConfigurationLoader(resolve_types=True)
        data = {'f': 1e20, 'i': float('inf'), 's': 'true', 'n': '1', 'e': ''}
        out = loader.save(CommentedConfigurationNode.root().set(data))
        assert "s: 'true'" in out
        assert 'f: 1.0e+20' in out
        assert loader.load(out).raw() == data

    def test_typed_keys_round_trip(self):
        """String keys that look like other types stay strings."""
        loader = YamlConfigurationLoader(resolve_types=True)
        data = {'yes': 1, '2': 'two', 3: 'three'}
        out = loader.save(CommentedConfigurationNode.root().set(data))
        assert loader.load(out).raw() == data

    def test_null_items_round_trip(self):
        """Null list items keep their positions through save and load."""
        loader = YamlConfigurationLoader(resolve_types=True)
        node = loader.load('- ~\n- 1\n- null\n')
        assert node.raw() == [None, 1, None]
        assert loader.load(loader.save(node)).raw() == [None, 1, None]

    def test_node_style_default(self):
        """node_style applies to collections without a hint."""
        node = CommentedConfigurationNode.root().set({'a': [1, 2]})
        out = YamlConfigurationLoader(node_style=NodeStyle.FLOW).save(node)
        assert out == '{a: [1, 2]}\n'
        out = YamlConfigurationLoader(node_style=NodeStyle.BLOCK).save(node)
        assert out == 'a:\n- 1\n- 2\n'

    def test_indent(self):
        """indent controls nested mapping indentation."""
        node = CommentedConfigurationNode.root().set({'a': {'b': 1}})
        assert YamlConfigurationLoader(indent=2).save(node) == 'a:\n  b: 1\n'
        assert YamlConfigurationLoader(indent=4).save(node) == 'a:\n    b: 1\n'

    def test_explicit_start(self):
        """explicit_start writes the document marker."""
        node = CommentedConfigurationNode.root().set({'a': 1})
        assert YamlConfigurationLoader(explicit_start=True).save(node) == '---\na: 1\n'

    def test_width(self):
        """Long plain scalars are folded at the configured width."""
        node = CommentedConfigurationNode.root().set({'a': ' '.join(['word'] * 20)})
        out = YamlConfigurationLoader(width=40).save(node)
        assert len(out.splitlines()) > 1
        assert YamlConfigurationLoader().load(out).raw() == node.raw()

    def test_save_subtree(self):
        """Any node can be saved as a document root."""
        node = CommentedConfigurationNode.root().set({'a': {'b': 1}, 'c': 2})
        assert YamlConfigurationLoader().save(node.node('a')) == 'b: 1\n'

    def test_save_all(self):
        """Several nodes become one multi-document stream."""
        loader = YamlConfigurationLoader()
        nodes = [CommentedConfigurationNode.root().set({'a': 1}),
                 CommentedConfigurationNode.root().set({'b': 2})]
        out = loader.save_all(nodes)
        assert out == 'a: 1\n---\nb: 2\n'
        assert [n.raw() for n in loader.load_all(out)] == [{'a': '1'}, {'b': '2'}]

    def test_save_all_to_sink(self):
        """save_all writes to a sink and returns None."""
        sink = io.StringIO()
        result = YamlConfigurationLoader(explicit_start=True).save_all(
            [CommentedConfigurationNode.root().set(['x'])], sink)
        assert result is None
        assert sink.getvalue() == '---\n- x\n'
