"""Emitter that writes node comments.

Events may carry a ``comment`` attribute. The comment is written as ``#``
lines, at the current indentation, before a block mapping entry, a block
sequence item or the document root. Comments on members of flow
collections are not written.
"""

from yaml.emitter import Emitter
from yaml.events import MappingEndEvent, SequenceEndEvent


def event_comment(event):
    return getattr(event, 'comment', None)


class CommentEmitter(Emitter):

    def __init__(self, stream, canonical=None, indent=None, width=None,
                 allow_unicode=None, line_break=None):
        super().__init__(stream, canonical=canonical, indent=indent, width=width,
                         allow_unicode=allow_unicode, line_break=line_break)
        self._blank_line = True

    def expect_document_root(self):
        self.write_comment(event_comment(self.event))
        super().expect_document_root()

    def expect_block_sequence_item(self, first=False):
        if not isinstance(self.event, SequenceEndEvent):
            self.write_comment(event_comment(self.event))
        super().expect_block_sequence_item(first)

    def expect_block_mapping_key(self, first=False):
        if not isinstance(self.event, MappingEndEvent):
            self.write_comment(event_comment(self.event))
        super().expect_block_mapping_key(first)

    def write_indicator(self, indicator, need_whitespace,
                        whitespace=False, indention=False):
        super().write_indicator(indicator, need_whitespace,
                                whitespace=whitespace, indention=indention)
        self._blank_line = False

    def write_line_break(self, data=None):
        super().write_line_break(data)
        self._blank_line = True

    def write_comment(self, comment):
        if not comment:
            return
        for line in comment.split('\n'):
            self.write_indent()
            # a comment cannot share a line with an indicator such as '- '
            if not self._blank_line:
                self.write_line_break()
                self.write_indent()
            data = '# ' + line if line else '#'
            self.column += len(data)
            self.whitespace = False
            self.indention = False
            if self.encoding:
                data = data.encode(self.encoding)
            self.stream.write(data)
            self.write_line_break()
