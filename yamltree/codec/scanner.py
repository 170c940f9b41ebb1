"""Scanner that keeps comments instead of discarding them.

PyYAML's scanner skips comments while looking for the next token. This
subclass records each full-line comment, with the mark where it starts, into
a buffer that the tree parser drains as it attaches comments to nodes.
Comments trailing content on the same line are not recorded.
"""

from yaml.scanner import Scanner

_LINE_END = '\0\r\n\x85\u2028\u2029'


class CommentScanner(Scanner):
    """Scanner with a comment side-channel.

    Expects to be mixed with a yaml.reader.Reader, as PyYAML's own loaders
    do.
    """

    def __init__(self):
        Scanner.__init__(self)
        self._comments = []
        self._capture_comments = True

    @property
    def capture_comments(self):
        return self._capture_comments

    @capture_comments.setter
    def capture_comments(self, value):
        self._capture_comments = bool(value)
        if not self._capture_comments:
            self._comments = []

    def scan_to_next_token(self):
        if self.index == 0 and self.peek() == '\uFEFF':
            self.forward()
        line_start = self._at_indentation()
        found = False
        while not found:
            while self.peek() == ' ':
                self.forward()
            if self.peek() == '#':
                self.scan_comment(line_start)
            if self.scan_line_break():
                line_start = True
                if not self.flow_level:
                    self.allow_simple_key = True
            else:
                found = True

    def _at_indentation(self):
        # True when only blanks precede the current position on this line.
        start = self.pointer - self.column
        if start < 0:
            return self.column == 0
        return not self.buffer[start:self.pointer].strip(' \t')

    def scan_comment(self, standalone=True):
        """Consume a comment up to the end of the line and buffer it."""
        mark = self.get_mark()
        self.forward()
        length = 0
        while self.peek(length) not in _LINE_END:
            length += 1
        text = self.prefix(length)
        self.forward(length)
        if standalone and self._capture_comments:
            if text.startswith(' '):
                text = text[1:]
            self._comments.append((mark, text.rstrip()))

    def has_comments(self):
        return bool(self._comments)

    def pop_comments(self, before=None):
        """Remove and return buffered comment text.

        Only comments starting before the mark `before` are taken (all of
        them when it is None). Multiple comment lines are joined with
        newlines. Returns None when nothing was taken.
        """
        if before is None:
            taken, self._comments = self._comments, []
        else:
            taken = [c for c in self._comments if c[0].index < before.index]
            self._comments = [c for c in self._comments if c[0].index >= before.index]
        if not taken:
            return None
        return '\n'.join(text for _, text in taken)
