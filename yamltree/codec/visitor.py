"""Turns a configuration tree back into PyYAML events.

YamlVisitor is driven by ConfigurationNode.visit() and writes one event per
callback through a State, which owns the emitter. Anchors, scalar styles and
node styles stored as hints on the nodes are passed through to the events.
"""

import logging

import yaml
from yaml.events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from yaml.representer import SafeRepresenter

from yamltree.error import EmitterError
from yamltree.node import ConfigurationVisitor
from yamltree.codec.hints import ANCHOR_ID, SCALAR_STYLE, NODE_STYLE
from yamltree.codec.styles import ScalarStyle, NodeStyle
from yamltree.codec.tags import Yaml11Tags

logger = logging.getLogger(__name__)

DEFAULT_MAPPING_TAG = 'tag:yaml.org,2002:map'
DEFAULT_SEQUENCE_TAG = 'tag:yaml.org,2002:seq'

_REPRESENTER = SafeRepresenter()


def scalar_text(value):
    """Return the YAML text for a scalar node value.

    Booleans and floats are spelled the way PyYAML writes them, so that
    1e20 becomes 1.0e+20 and infinity becomes .inf.
    """
    if value is None:
        return 'null'
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return _REPRESENTER.represent_bool(value).value
    if isinstance(value, float):
        return _REPRESENTER.represent_float(value).value
    return str(value)


class State:
    """Destination of the events produced by a YamlVisitor.

    Attributes:
        emitter: Object with an emit(event) method, usually a CommentEmitter
        stream_bounds: Whether a visit opens and closes the stream itself
        start: Node the current visit started from
    """

    def __init__(self, emitter, stream_bounds=True):
        self.emitter = emitter
        self.stream_bounds = stream_bounds
        self.start = None

    def emit(self, event):
        try:
            self.emitter.emit(event)
        except (yaml.YAMLError, OSError) as exc:
            raise EmitterError("Failed to emit %s: %s"
                               % (type(event).__name__, exc)) from exc


class YamlVisitor(ConfigurationVisitor):
    """Writes the events for one document per visit.

    node_style is used for collections that carry no node-style hint. None
    lets the emitter choose (block unless the collection is empty).
    """

    def __init__(self, tag_repository=None, node_style=None, explicit_start=False):
        if tag_repository is None:
            tag_repository = Yaml11Tags.REPOSITORY
        self.tag_repository = tag_repository
        self.node_style = node_style
        self.explicit_start = explicit_start

    def begin_visit(self, node, state):
        state.start = node
        if state.stream_bounds:
            state.emit(StreamStartEvent())
        state.emit(DocumentStartEvent(explicit=self.explicit_start))

    def enter_node(self, node, state):
        parent = node.parent
        if node is state.start or parent is None or not parent.is_map():
            return
        # mapping entry: write the key first
        event = self._scalar_event(node.key)
        event.comment = getattr(node, 'comment', None)
        state.emit(event)

    def enter_mapping_node(self, node, state):
        event = MappingStartEvent(self._anchor(node), DEFAULT_MAPPING_TAG, True,
                                  flow_style=NodeStyle.as_pyyaml(self._style(node)))
        state.emit(self._with_comment(node, event, state))

    def enter_list_node(self, node, state):
        event = SequenceStartEvent(self._anchor(node), DEFAULT_SEQUENCE_TAG, True,
                                   flow_style=NodeStyle.as_pyyaml(self._style(node)))
        state.emit(self._with_comment(node, event, state))

    def enter_scalar_node(self, node, state):
        if node.virtual:
            # nothing to write: an empty document
            event = ScalarEvent(self._anchor(node), None, (True, True), '')
        else:
            event = self._scalar_event(node.raw(), self._anchor(node),
                                       node.hint(SCALAR_STYLE))
        state.emit(self._with_comment(node, event, state))

    def exit_mapping_node(self, node, state):
        state.emit(MappingEndEvent())

    def exit_list_node(self, node, state):
        state.emit(SequenceEndEvent())

    def end_visit(self, state):
        state.emit(DocumentEndEvent(explicit=False))
        if state.stream_bounds:
            state.emit(StreamEndEvent())
        logger.debug("Wrote document from %r", state.start.path() if state.start else None)
        return None

    # TODO: emit AliasEvents once the tree can express shared nodes

    def _scalar_event(self, value, anchor=None, style=None):
        """Build the event for a key or scalar value.

        A string whose text reads back as another type (``'true'``, ``'1'``)
        is marked non-plain so the emitter quotes it, unless a scalar-style
        hint says how to write it.
        """
        text = scalar_text(value)
        tag = self.tag_repository.for_input(text)
        implicit = (True, True)
        if (isinstance(value, str) and style is None
                and tag is not None and tag.native_type is not str):
            tag = self.tag_repository.for_type(str)
            implicit = (False, True)
        return ScalarEvent(anchor, tag.uri if tag is not None else None, implicit,
                           text, style=ScalarStyle.as_pyyaml(style))

    def _style(self, node):
        style = node.hint(NODE_STYLE)
        return style if style is not None else self.node_style

    def _anchor(self, node):
        return node.hint(ANCHOR_ID)

    def _with_comment(self, node, event, state):
        # mapping values have their comment written with the key
        parent = node.parent
        if node is state.start or parent is None or not parent.is_map():
            event.comment = getattr(node, 'comment', None)
        return event
