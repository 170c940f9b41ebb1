"""Builds configuration trees from PyYAML's event stream.

TreeBuilder is a recursive-descent consumer of events, in the same way
PyYAML's Composer is: it expects check_event/peek_event/get_event from a
Parser and, for comments, pop_comments from a CommentScanner. YamlParser
puts the pieces together.

Aliases are resolved by copying the anchored node's content, so the alias
site and its target are independent nodes afterwards.
"""

import logging

import yaml
from yaml.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    NodeEvent, AliasEvent, ScalarEvent, CollectionStartEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from yaml.error import Mark
from yaml.parser import Parser
from yaml.reader import Reader, ReaderError

from yamltree.error import ParsingError
from yamltree.node import ConfigurationNode, CommentedConfigurationNode
from yamltree.codec.hints import ANCHOR_ID, SCALAR_STYLE, NODE_STYLE
from yamltree.codec.scanner import CommentScanner
from yamltree.codec.styles import ScalarStyle, NodeStyle
from yamltree.codec.tags import Yaml11Tags

logger = logging.getLogger(__name__)


def _wrap_yaml_error(exc):
    """Convert a PyYAML error into a ParsingError carrying the same marks."""
    if isinstance(exc, yaml.MarkedYAMLError):
        problem = exc.problem if exc.problem is not None else str(exc)
        return ParsingError(problem, exc.problem_mark,
                            context=exc.context, context_mark=exc.context_mark)
    return ParsingError(str(exc))


def _mark_after(name, index, text, line, column):
    """Return the mark reached by reading text from line and column.

    Line breaks are counted the way yaml.reader.Reader.forward counts them.
    """
    for i, ch in enumerate(text):
        if ch in '\n\x85\u2028\u2029' or (ch == '\r' and text[i + 1:i + 2] != '\n'):
            line += 1
            column = 0
        elif ch != '\uFEFF':
            column += 1
    return Mark(name, index, line, column, None, None)


class AliasTable:
    """Anchors bound within one document.

    Anchors whose node is still being parsed are tracked separately so an
    alias cannot copy an incomplete node into itself.
    """

    def __init__(self):
        self._nodes = {}
        self._marks = {}
        self._building = set()

    def bind(self, anchor, node, mark=None):
        self._nodes[anchor] = node
        self._marks[anchor] = mark
        self._building.add(anchor)

    def finish(self, anchor):
        self._building.discard(anchor)

    def building(self, anchor):
        return anchor in self._building

    def get(self, anchor):
        return self._nodes.get(anchor)

    def mark(self, anchor):
        return self._marks.get(anchor)

    def clear(self):
        self._nodes.clear()
        self._marks.clear()
        self._building.clear()

    def __contains__(self, anchor):
        return anchor in self._nodes

    def __len__(self):
        return len(self._nodes)


def _strip_anchors(node):
    node.set_hint(ANCHOR_ID, None)
    if node.is_map():
        for child in node.children_map().values():
            _strip_anchors(child)
    elif node.is_list():
        for child in node.children_list():
            _strip_anchors(child)


class TreeBuilder:
    """Populates ConfigurationNodes from an event stream.

    Expects subclasses to provide:
    - check_event(*choices) -> bool
    - peek_event() -> Event
    - get_event() -> Event
    - get_mark() -> Mark
    - capture_comments (property) and pop_comments(before) (from CommentScanner)
    """

    def __init__(self, tag_repository=None, resolve_types=False):
        if tag_repository is None:
            tag_repository = Yaml11Tags.REPOSITORY
        self.tag_repository = tag_repository
        self.resolve_types = resolve_types

    # Event access. PyYAML errors surface as ParsingError.

    def _peek(self):
        try:
            return self.peek_event()
        except yaml.YAMLError as exc:
            raise _wrap_yaml_error(exc) from exc

    def _check(self, *choices):
        try:
            return self.check_event(*choices)
        except yaml.YAMLError as exc:
            raise _wrap_yaml_error(exc) from exc

    def require_event(self, event_type, node=None):
        """Consume the next event, failing unless it is an event_type."""
        event = self._peek()
        if not isinstance(event, event_type):
            raise self._error(
                "Expected next event of type %s but was %s"
                % (event_type.__name__, type(event).__name__),
                event, node)
        return self.get_event()

    def _error(self, problem, event=None, node=None,
               context=None, context_mark=None):
        if event is not None and event.start_mark is not None:
            mark = event.start_mark
        else:
            mark = self.get_mark()
        path = node.path() if node is not None else None
        return ParsingError(problem, mark, path, context, context_mark)

    # Framing

    def single_document_stream(self, node):
        """Read a stream holding at most one document into node."""
        self.require_event(StreamStartEvent)
        if not self._check(StreamEndEvent):
            self.document(node)
        self.require_event(StreamEndEvent)

    def document_stream(self, factory):
        """Return a generator of one node per document in the stream.

        The stream start is consumed immediately; each document is only
        parsed when the generator is advanced.
        """
        self.require_event(StreamStartEvent)
        return self._documents(factory)

    def _documents(self, factory):
        while not self._check(StreamEndEvent):
            node = factory()
            self.document(node)
            yield node
        self.get_event()

    def document(self, node):
        self.require_event(DocumentStartEvent, node)
        self.capture_comments = isinstance(node, CommentedConfigurationNode)
        aliases = AliasTable()
        try:
            self.value(node, aliases)
        except ParsingError as exc:
            exc.init_path(node.path())
            raise
        finally:
            aliases.clear()
        self.require_event(DocumentEndEvent, node)
        logger.debug("Read document into %r", node.path())

    # Productions

    def value(self, node, aliases, capture=True, entry_mark=None):
        """Read the next node into node.

        Buffered comments that start before entry_mark (by default the
        mark of the node's own event) become the node's comment. A mapping
        value passes its key's mark, so comments between a key and a nested
        block collection go to that collection's first entry.
        """
        event = self._peek()
        if capture:
            if entry_mark is None and event is not None:
                entry_mark = event.start_mark
            self._apply_comment(node, entry_mark)

        anchor = None
        if isinstance(event, NodeEvent) and not isinstance(event, AliasEvent):
            anchor = event.anchor
            if anchor is not None:
                self._bind_anchor(node, anchor, event, aliases)
            if isinstance(event, CollectionStartEvent):
                node.set_hint(NODE_STYLE, NodeStyle.from_pyyaml(event.flow_style))

        if isinstance(event, ScalarEvent):
            self.scalar(node)
        elif isinstance(event, MappingStartEvent):
            self.mapping(node, aliases)
        elif isinstance(event, SequenceStartEvent):
            self.sequence(node, aliases)
        elif isinstance(event, AliasEvent):
            self.alias(node, aliases)
        else:
            raise self._error("Unexpected event type %s" % type(event).__name__,
                              event, node)

        if anchor is not None:
            aliases.finish(anchor)

    def scalar(self, node):
        event = self.require_event(ScalarEvent, node)
        node.set_hint(SCALAR_STYLE, ScalarStyle.from_pyyaml(event.style))
        value = self._scalar_value(event)
        parent = node.parent
        if value is None and parent is not None and parent.is_list():
            # a null item keeps its position
            node.set_null()
        else:
            node.set(value)

    def mapping(self, node, aliases):
        self.require_event(MappingStartEvent, node)
        node.set({})
        seen = set()
        while not self._check(MappingEndEvent):
            key_event = self._peek()
            key_holder = ConfigurationNode.root()
            self.value(key_holder, aliases, capture=False)
            if key_holder.is_map() or key_holder.is_list():
                raise self._error("Mapping keys must be scalars", key_event, node)
            key = key_holder.raw()
            identity = (type(key), key)
            child = node.node(key)
            if (identity not in seen and not child.virtual
                    and isinstance(key_event, ScalarEvent)):
                # equal to a key of another type (1 and true): keep the text
                key = key_event.value
                identity = (type(key), key)
                child = node.node(key)
            # duplicate keys are forbidden (YAML 1.1 3.2.1.3)
            if identity in seen or not child.virtual:
                raise self._error("Duplicate key '%s' encountered!" % key,
                                  key_event, node)
            seen.add(identity)
            self.value(child, aliases, entry_mark=key_event.start_mark)
        self.require_event(MappingEndEvent, node)

    def sequence(self, node, aliases):
        self.require_event(SequenceStartEvent, node)
        node.set([])
        while not self._check(SequenceEndEvent):
            self.value(node.append_list_node(), aliases)
        self.require_event(SequenceEndEvent, node)

    def alias(self, node, aliases):
        event = self.require_event(AliasEvent, node)
        anchor = event.anchor
        if aliases.building(anchor):
            raise self._error("Recursive alias '%s' refers to a node that is "
                              "still being read" % anchor, event, node,
                              "while resolving an alias", aliases.mark(anchor))
        target = aliases.get(anchor)
        if target is None:
            raise self._error("Unknown anchor '%s'" % anchor, event, node)
        comment = getattr(node, 'comment', None)
        node.copy_from(target)
        if isinstance(node, CommentedConfigurationNode):
            node.comment = comment
        # the copy must not declare the anchor again
        _strip_anchors(node)
        logger.debug("Resolved alias %r at %r", anchor, node.path())

    # Helpers

    def _bind_anchor(self, node, anchor, event, aliases):
        if anchor in aliases:
            raise self._error(
                "Duplicate anchor '%s'; second occurrence" % anchor, event, node,
                "first occurrence", aliases.mark(anchor))
        node.set_hint(ANCHOR_ID, anchor)
        aliases.bind(anchor, node, event.start_mark)
        logger.debug("Bound anchor %r at %r", anchor, node.path())

    def _apply_comment(self, node, before):
        if not isinstance(node, CommentedConfigurationNode):
            return
        comment = self.pop_comments(before)
        if comment is not None:
            node.comment = comment

    def _scalar_value(self, event):
        if not self.resolve_types:
            return event.value
        if event.tag is not None and event.tag != '!':
            tag = self.tag_repository.named(event.tag)
        elif event.implicit[0]:
            tag = self.tag_repository.for_input(event.value)
        else:
            tag = None
        if tag is None:
            return event.value
        return tag.construct(event.value)


class YamlParser(Reader, CommentScanner, Parser, TreeBuilder):
    """Reads YAML text into configuration nodes."""

    def __init__(self, stream, tag_repository=None, resolve_types=False):
        try:
            Reader.__init__(self, stream)
        except yaml.YAMLError as exc:
            raise _wrap_yaml_error(exc) from exc
        CommentScanner.__init__(self)
        Parser.__init__(self)
        TreeBuilder.__init__(self, tag_repository, resolve_types)

    # ReaderError only knows a stream position; these add line and column.

    def check_printable(self, data):
        try:
            Reader.check_printable(self, data)
        except ReaderError as exc:
            ahead = (self.buffer[self.pointer:] + data)[:exc.position - self.index]
            raise self._reader_error(exc, ahead) from exc

    def update(self, length):
        try:
            Reader.update(self, length)
        except ReaderError as exc:
            # undecodable input; the bad byte follows everything decoded so far
            start = exc.position
            if self.stream is not None:
                start -= self.stream_pointer - len(self.raw_buffer)
            decoded = self.raw_buffer[:start].decode(exc.encoding, 'replace')
            raise self._reader_error(exc, self.buffer[self.pointer:] + decoded) from exc

    def _reader_error(self, exc, ahead):
        if exc.encoding == 'unicode':
            problem = "unacceptable character #x%04x: %s" % (exc.character, exc.reason)
        else:
            problem = "'%s' codec can't decode byte #x%02x: %s" % (
                exc.encoding, exc.character, exc.reason)
        mark = _mark_after(self.name, exc.position, ahead, self.line, self.column)
        return ParsingError(problem, mark)
