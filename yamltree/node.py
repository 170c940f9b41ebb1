"""Generic configuration tree.

A ConfigurationNode is either virtual (holds nothing and is not attached to
its parent), a scalar, a mapping of keys to child nodes, or a list of child
nodes. Nodes also carry representation hints: per-node metadata such as
the YAML anchor or quoting style that has no place in the value itself.

Example:
    >>> root = CommentedConfigurationNode.root()
    >>> root.node('server', 'port').set('8080')
    >>> root.raw()
    {'server': {'port': '8080'}}
"""

import copy


class RepresentationHint:
    """A typed key into a node's hint table."""

    __slots__ = ('_name', '_type', '_default')

    def __init__(self, name, type, default=None):
        self._name = name
        self._type = type
        self._default = default

    @classmethod
    def of(cls, name, type, default=None):
        return cls(name, type, default)

    @property
    def name(self):
        return self._name

    @property
    def type(self):
        return self._type

    @property
    def default(self):
        return self._default

    def __repr__(self):
        return 'RepresentationHint(%r, %s)' % (self._name, self._type.__name__)


_VIRTUAL = 'virtual'
_SCALAR = 'scalar'
_MAPPING = 'mapping'
_SEQUENCE = 'sequence'


class ConfigurationNode:
    """A node in a configuration tree."""

    def __init__(self, key=None, parent=None):
        self._key = key
        self._parent = parent
        self._kind = _VIRTUAL
        self._value = None
        self._hints = {}
        self._attached = parent is None

    @classmethod
    def root(cls):
        return cls()

    def _new_child(self, key):
        return type(self)(key, self)

    # Position

    @property
    def key(self):
        return self._key

    @property
    def parent(self):
        return self._parent

    def path(self):
        """Return the keys from the root to this node as a tuple."""
        keys = []
        node = self
        while node._parent is not None:
            key = node._key
            if key is None and node._parent._kind == _SEQUENCE:
                # not appended yet; report the index it will get
                key = len(node._parent._value)
            keys.append(key)
            node = node._parent
        return tuple(reversed(keys))

    @property
    def virtual(self):
        """True if this node holds no value or is detached from its parent."""
        return self._kind == _VIRTUAL or not self._attached

    # Structure

    def is_map(self):
        return self._kind == _MAPPING

    def is_list(self):
        return self._kind == _SEQUENCE

    def is_scalar(self):
        return self._kind == _SCALAR

    def empty(self):
        if self._kind in (_MAPPING, _SEQUENCE):
            return not self._value
        return self._kind == _VIRTUAL or self._value is None

    def children_map(self):
        """Return a copy of the key to child mapping, empty unless a mapping."""
        if self._kind != _MAPPING:
            return {}
        return dict(self._value)

    def children_list(self):
        """Return a copy of the child list, empty unless a sequence."""
        if self._kind != _SEQUENCE:
            return []
        return list(self._value)

    def node(self, *path):
        """Return the descendant at path, creating virtual nodes as needed.

        Virtual nodes are not attached until a value is set on them.
        """
        node = self
        for key in path:
            node = node._child(key)
        return node

    def _child(self, key):
        if self._kind == _MAPPING:
            child = self._value.get(key)
            if child is not None:
                return child
        elif self._kind == _SEQUENCE and isinstance(key, int) \
                and not isinstance(key, bool) and 0 <= key < len(self._value):
            return self._value[key]
        child = self._new_child(key)
        child._attached = False
        return child

    def append_list_node(self):
        """Return a new virtual child that will be appended when set."""
        if self._kind != _SEQUENCE:
            self._make(_SEQUENCE)
        child = self._new_child(None)
        child._attached = False
        return child

    # Values

    def raw(self):
        """Return the value as plain Python objects."""
        if self._kind == _MAPPING:
            return {k: v.raw() for k, v in self._value.items()}
        if self._kind == _SEQUENCE:
            return [v.raw() for v in self._value]
        return self._value

    def get(self, default=None):
        value = self.raw()
        return default if value is None else value

    def set(self, value):
        """Replace the value of this node.

        dicts and lists become mapping and sequence children, None detaches
        the node from its parent, anything else is stored as a scalar. None
        items of a list are kept as null scalars.
        """
        if value is None:
            self._kind = _VIRTUAL
            self._value = None
            self._detach()
            return self
        if isinstance(value, ConfigurationNode):
            return self.copy_from(value)
        if isinstance(value, dict):
            self._make(_MAPPING)
            for key, item in value.items():
                self.node(key).set(item)
        elif isinstance(value, (list, tuple)):
            self._make(_SEQUENCE)
            for item in value:
                child = self.append_list_node()
                if item is None:
                    child.set_null()
                else:
                    child.set(item)
        else:
            self._kind = _SCALAR
            self._value = value
            self._attach()
        return self

    def set_null(self):
        """Make this node an attached scalar holding None."""
        self._kind = _SCALAR
        self._value = None
        self._attach()
        return self

    def _make(self, kind):
        self._kind = kind
        self._value = {} if kind == _MAPPING else []
        self._attach()

    def _attach(self):
        if self._attached:
            return
        parent = self._parent
        if parent._kind == _SEQUENCE and (self._key is None or isinstance(self._key, int)):
            if self._key is None or self._key >= len(parent._value):
                self._key = len(parent._value)
                parent._value.append(self)
            else:
                parent._value[self._key] = self
        else:
            if parent._kind != _MAPPING:
                parent._make(_MAPPING)
            parent._value[self._key] = self
        self._attached = True
        parent._attach()

    def _detach(self):
        if not self._attached or self._parent is None:
            return
        parent = self._parent
        if parent._kind == _MAPPING and parent._value.get(self._key) is self:
            del parent._value[self._key]
        elif parent._kind == _SEQUENCE and self in parent._value:
            parent._value.remove(self)
            for index, sibling in enumerate(parent._value):
                sibling._key = index
        self._attached = False

    def copy_from(self, other):
        """Deep-assign the value and hints of other into this node.

        The two nodes are independent afterwards.
        """
        if other is self:
            return self
        self._hints = dict(other._hints)
        if other._kind == _MAPPING:
            self._make(_MAPPING)
            for key, child in other._value.items():
                self.node(key).copy_from(child)
        elif other._kind == _SEQUENCE:
            self._make(_SEQUENCE)
            for child in other._value:
                self.append_list_node().copy_from(child)
        elif other._kind == _SCALAR:
            self._kind = _SCALAR
            self._value = copy.deepcopy(other._value)
            self._attach()
        else:
            self._kind = _VIRTUAL
            self._value = None
            self._detach()
        return self

    # Hints

    def hint(self, hint):
        """Return this node's own value for hint, or the hint default."""
        return self._hints.get(hint.name, hint.default)

    def set_hint(self, hint, value):
        """Set a hint on this node only. None removes it."""
        if value is None:
            self._hints.pop(hint.name, None)
        elif not isinstance(value, hint.type):
            raise TypeError("hint %r expects %s, got %r"
                            % (hint.name, hint.type.__name__, value))
        else:
            self._hints[hint.name] = value
        return self

    def hints(self):
        return dict(self._hints)

    # Traversal

    def visit(self, visitor, state):
        """Walk this subtree in pre-order, returning visitor.end_visit()."""
        visitor.begin_visit(self, state)
        self._visit(visitor, state)
        return visitor.end_visit(state)

    def _visit(self, visitor, state):
        visitor.enter_node(self, state)
        if self._kind == _MAPPING:
            visitor.enter_mapping_node(self, state)
            for child in list(self._value.values()):
                child._visit(visitor, state)
            visitor.exit_mapping_node(self, state)
        elif self._kind == _SEQUENCE:
            visitor.enter_list_node(self, state)
            for child in list(self._value):
                child._visit(visitor, state)
            visitor.exit_list_node(self, state)
        else:
            visitor.enter_scalar_node(self, state)

    def __repr__(self):
        return '%s(path=%r, value=%r)' % (type(self).__name__, self.path(), self.raw())


class CommentedConfigurationNode(ConfigurationNode):
    """A node that also carries a comment."""

    def __init__(self, key=None, parent=None):
        super().__init__(key, parent)
        self.comment = None

    def copy_from(self, other):
        super().copy_from(other)
        if isinstance(other, CommentedConfigurationNode) and other is not self:
            self.comment = other.comment
        return self


class ConfigurationVisitor:
    """Pre-order visitor protocol used by ConfigurationNode.visit().

    Subclasses override the callbacks they need; the defaults do nothing.
    """

    def begin_visit(self, node, state):
        pass

    def enter_node(self, node, state):
        pass

    def enter_mapping_node(self, node, state):
        pass

    def enter_list_node(self, node, state):
        pass

    def enter_scalar_node(self, node, state):
        pass

    def exit_mapping_node(self, node, state):
        pass

    def exit_list_node(self, node, state):
        pass

    def end_visit(self, state):
        return None
