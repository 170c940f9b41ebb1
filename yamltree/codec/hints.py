"""Representation hints written by the parser and read by the visitor."""

from yamltree.node import RepresentationHint
from yamltree.codec.styles import ScalarStyle, NodeStyle

#: The identifier for a YAML anchor that can be used to refer to the node
#: this hint is set on.
ANCHOR_ID = RepresentationHint.of('anchor-id', str)

#: The scalar style this node should attempt to use. If the chosen style
#: would produce invalid YAML for the value, the emitter picks a valid one.
SCALAR_STYLE = RepresentationHint.of('scalar-style', ScalarStyle)

#: The layout to use for a mapping or sequence. Absent means the loader's
#: configured node style, or an automatic choice when that is unset.
NODE_STYLE = RepresentationHint.of('node-style', NodeStyle)
