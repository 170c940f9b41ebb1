"""
yamltree - YAML configuration trees with comments, anchors and styles

Documents are read into CommentedConfigurationNode trees instead of plain
dicts and lists, so that comments, anchors and scalar/collection styles
survive a load and save cycle.

Key features:
- Full-line comments are attached to the node that follows them
- Aliases are resolved to independent copies of the anchored node
- Quoting and flow/block layout are kept as per-node hints
- Scalars stay text unless resolve_types=True is passed
- File I/O helpers: load() and dump()

Example:
    >>> import yamltree
    >>> doc = yamltree.loads("name: Alice\\n# in years\\nage: 30\\n")
    >>> doc.node('age').comment
    'in years'
    >>> doc.raw()
    {'name': 'Alice', 'age': '30'}
    >>> yamltree.loads("age: 30", resolve_types=True).raw()
    {'age': 30}
"""

import os

from yamltree.error import YamlTreeError, ParsingError, EmitterError
from yamltree.node import (
    ConfigurationNode,
    CommentedConfigurationNode,
    ConfigurationVisitor,
    RepresentationHint,
)
from yamltree.codec import (
    ANCHOR_ID,
    SCALAR_STYLE,
    NODE_STYLE,
    NodeStyle,
    ScalarStyle,
    Tag,
    TagRepository,
    Yaml11Tags,
    YamlConfigurationLoader,
)

__version__ = '0.1.0'

__all__ = [
    'ANCHOR_ID',
    'CommentedConfigurationNode',
    'ConfigurationNode',
    'ConfigurationVisitor',
    'EmitterError',
    'NODE_STYLE',
    'NodeStyle',
    'ParsingError',
    'RepresentationHint',
    'SCALAR_STYLE',
    'ScalarStyle',
    'Tag',
    'TagRepository',
    'Yaml11Tags',
    'YamlConfigurationLoader',
    'YamlTreeError',
    'dump',
    'dump_all',
    'dumps',
    'dumps_all',
    'load',
    'load_all',
    'loads',
    'loads_all',
]


def _as_node(obj):
    if isinstance(obj, ConfigurationNode):
        return obj
    return CommentedConfigurationNode.root().set(obj)


def _is_path(fp):
    return isinstance(fp, (str, os.PathLike))


def loads(s, **options):
    """
    Parse a YAML document from a string or bytes.

    Args:
        s: YAML text
        **options: YamlConfigurationLoader options (resolve_types,
            tag_repository, ...)

    Returns:
        CommentedConfigurationNode holding the document
    """
    return YamlConfigurationLoader(**options).load(s)


def load(fp, **options):
    """
    Parse a YAML document from a file.

    Args:
        fp: File path or file-like object to read from
        **options: YamlConfigurationLoader options
    """
    if _is_path(fp):
        with open(fp, 'rb') as f:
            return YamlConfigurationLoader(**options).load(f)
    return YamlConfigurationLoader(**options).load(fp)


def loads_all(s, **options):
    """
    Parse every YAML document in a string.

    Documents are parsed one at a time as the returned iterator advances.
    """
    return YamlConfigurationLoader(**options).load_all(s)


def load_all(fp, **options):
    """
    Parse every YAML document in a file.

    When fp is a path, the file stays open until the iterator is exhausted
    or closed.
    """
    loader = YamlConfigurationLoader(**options)
    if not _is_path(fp):
        return loader.load_all(fp)
    return _load_all_path(loader, fp)


def _load_all_path(loader, path):
    with open(path, 'rb') as f:
        yield from loader.load_all(f)


def dumps(obj, **options):
    """
    Serialize a node, or plain Python data, to a YAML string.

    Args:
        obj: ConfigurationNode or dict/list/scalar
        **options: YamlConfigurationLoader options (indent, width,
            node_style, explicit_start, ...)

    Returns:
        YAML formatted string
    """
    return YamlConfigurationLoader(**options).save(_as_node(obj))


def dump(obj, fp, **options):
    """
    Serialize a node, or plain Python data, to a file.

    Args:
        obj: ConfigurationNode or dict/list/scalar
        fp: File path or text file-like object to write to
    """
    loader = YamlConfigurationLoader(**options)
    if _is_path(fp):
        with open(fp, 'w', encoding='utf-8') as f:
            loader.save(_as_node(obj), f)
    else:
        loader.save(_as_node(obj), fp)


def dumps_all(docs, **options):
    """Serialize several documents to one YAML string."""
    return YamlConfigurationLoader(**options).save_all(_as_node(d) for d in docs)


def dump_all(docs, fp, **options):
    """Serialize several documents to a file path or text file-like object."""
    loader = YamlConfigurationLoader(**options)
    nodes = (_as_node(d) for d in docs)
    if _is_path(fp):
        with open(fp, 'w', encoding='utf-8') as f:
            loader.save_all(nodes, f)
    else:
        loader.save_all(nodes, fp)
