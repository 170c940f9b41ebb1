"""YAML codec for configuration trees, built on PyYAML's event API."""

from yamltree.codec.emitter import CommentEmitter
from yamltree.codec.hints import ANCHOR_ID, SCALAR_STYLE, NODE_STYLE
from yamltree.codec.loader import YamlConfigurationLoader
from yamltree.codec.parser import TreeBuilder, YamlParser
from yamltree.codec.scanner import CommentScanner
from yamltree.codec.styles import ScalarStyle, NodeStyle
from yamltree.codec.tags import Tag, TagRepository, Yaml11Tags
from yamltree.codec.visitor import State, YamlVisitor

__all__ = [
    'ANCHOR_ID',
    'CommentEmitter',
    'CommentScanner',
    'NODE_STYLE',
    'NodeStyle',
    'SCALAR_STYLE',
    'ScalarStyle',
    'State',
    'Tag',
    'TagRepository',
    'TreeBuilder',
    'Yaml11Tags',
    'YamlConfigurationLoader',
    'YamlParser',
    'YamlVisitor',
]
