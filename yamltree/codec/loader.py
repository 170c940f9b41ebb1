"""Loading and saving configuration trees as YAML text.

YamlConfigurationLoader ties the tree parser and the tree emitter together
behind a small set of options, in the spirit of PyYAML's load()/dump()
keyword arguments.

Example:
    >>> loader = YamlConfigurationLoader(indent=2)
    >>> node = loader.load('port: 8080\\n# bind address\\nhost: localhost\\n')
    >>> node.node('host').comment
    'bind address'
    >>> loader.save(node)
    'port: 8080\\n# bind address\\nhost: localhost\\n'
"""

import io
import logging

from yaml.events import StreamStartEvent, StreamEndEvent

from yamltree.node import CommentedConfigurationNode
from yamltree.codec.emitter import CommentEmitter
from yamltree.codec.parser import YamlParser
from yamltree.codec.styles import NodeStyle
from yamltree.codec.tags import TagRepository, Yaml11Tags
from yamltree.codec.visitor import State, YamlVisitor

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 4


class YamlConfigurationLoader:
    """Reads and writes CommentedConfigurationNodes.

    Args:
        indent: Spaces per nesting level when writing, 2 to 9
        node_style: NodeStyle for collections without a node-style hint,
            None to let the emitter decide
        width: Preferred line width when writing, None for PyYAML's default
        tag_repository: Tags used to resolve and write scalars
        resolve_types: Convert plain scalars to Python values when reading
        explicit_start: Write '---' before every document
    """

    def __init__(self, indent=DEFAULT_INDENT, node_style=None, width=None,
                 tag_repository=Yaml11Tags.REPOSITORY, resolve_types=False,
                 explicit_start=False):
        self.indent = indent
        self.node_style = node_style
        self.width = width
        self.tag_repository = tag_repository
        self.resolve_types = resolve_types
        self.explicit_start = explicit_start

    # Options

    @property
    def indent(self):
        return self._indent

    @indent.setter
    def indent(self, value):
        if isinstance(value, bool) or not isinstance(value, int) or not 1 < value < 10:
            raise ValueError("indent must be an integer from 2 to 9, got %r" % (value,))
        self._indent = value

    @property
    def node_style(self):
        return self._node_style

    @node_style.setter
    def node_style(self, value):
        if value is not None and not isinstance(value, NodeStyle):
            raise ValueError("node_style must be a NodeStyle or None, got %r" % (value,))
        self._node_style = value

    @property
    def width(self):
        return self._width

    @width.setter
    def width(self, value):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError("width must be an integer or None, got %r" % (value,))
        self._width = value

    @property
    def tag_repository(self):
        return self._tag_repository

    @tag_repository.setter
    def tag_repository(self, value):
        if not isinstance(value, TagRepository):
            raise ValueError("tag_repository must be a TagRepository, got %r" % (value,))
        self._tag_repository = value

    @property
    def resolve_types(self):
        return self._resolve_types

    @resolve_types.setter
    def resolve_types(self, value):
        self._resolve_types = bool(value)

    @property
    def explicit_start(self):
        return self._explicit_start

    @explicit_start.setter
    def explicit_start(self, value):
        self._explicit_start = bool(value)

    # Reading

    def create_node(self):
        return CommentedConfigurationNode.root()

    def _parser(self, source):
        return YamlParser(source, self._tag_repository, self._resolve_types)

    def load(self, source):
        """Read the single document in source into a new node.

        source may be a str, bytes (encoding detected from the BOM, UTF-8
        otherwise) or a file-like object with a read() method. A source
        with no document gives an empty node.
        """
        node = self.create_node()
        self._parser(source).single_document_stream(node)
        return node

    def load_all(self, source):
        """Return a generator of one node per document in source."""
        return self._parser(source).document_stream(self.create_node)

    # Writing

    def _emitter(self, sink):
        return CommentEmitter(sink, indent=self._indent, width=self._width,
                              allow_unicode=True)

    def _visitor(self):
        return YamlVisitor(self._tag_repository, self._node_style,
                           self._explicit_start)

    def save(self, node, sink=None):
        """Write node as one YAML document.

        Writes to the text stream sink, or returns the text when sink is None.
        """
        out = io.StringIO() if sink is None else sink
        node.visit(self._visitor(), State(self._emitter(out)))
        logger.debug("Saved node %r", node.path())
        if sink is None:
            return out.getvalue()
        return None

    def save_all(self, nodes, sink=None):
        """Write every node in nodes as a separate document of one stream."""
        out = io.StringIO() if sink is None else sink
        state = State(self._emitter(out), stream_bounds=False)
        visitor = self._visitor()
        state.emit(StreamStartEvent())
        count = 0
        for node in nodes:
            node.visit(visitor, state)
            count += 1
        state.emit(StreamEndEvent())
        logger.debug("Saved %d documents", count)
        if sink is None:
            return out.getvalue()
        return None
