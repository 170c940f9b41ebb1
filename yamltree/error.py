"""Errors raised by the yamltree codec.

Every failure surfaces as a subclass of YamlTreeError. Parse failures carry
the position reported by the scanner and, where known, the path of the node
being populated.
"""


class YamlTreeError(Exception):
    """Base exception for yamltree errors."""
    pass


class ParsingError(YamlTreeError):
    """A malformed document.

    Attributes:
        problem: Description of the problem
        problem_mark: Mark pointing at the problem (a yaml.Mark)
        path: Tuple of keys from the root to the offending node, or None
        context: Description of the parsing context
        context_mark: Mark pointing to the context
    """

    def __init__(self, problem, problem_mark=None, path=None,
                 context=None, context_mark=None):
        super().__init__(problem)
        self.problem = problem
        self.problem_mark = problem_mark
        self.path = tuple(path) if path is not None else None
        self.context = context
        self.context_mark = context_mark

    @property
    def line(self):
        """0-indexed line of the problem, or -1 when unknown."""
        if self.problem_mark is None:
            return -1
        return self.problem_mark.line

    @property
    def column(self):
        """0-indexed column of the problem, or -1 when unknown."""
        if self.problem_mark is None:
            return -1
        return self.problem_mark.column

    def init_path(self, path):
        """Record the node path unless a more precise one is already set."""
        if self.path is None:
            self.path = tuple(path)

    def __str__(self):
        lines = []
        if self.context is not None:
            lines.append(self.context)
        if self.context_mark is not None \
                and (self.problem_mark is None
                     or self.context_mark.line != self.problem_mark.line
                     or self.context_mark.column != self.problem_mark.column):
            lines.append(str(self.context_mark))
        lines.append(self.problem)
        if self.problem_mark is not None:
            lines.append(str(self.problem_mark))
        if self.path:
            lines.append("  at path %s" % '/'.join(str(p) for p in self.path))
        return '\n'.join(lines)


class EmitterError(YamlTreeError):
    """Failure while writing events to the underlying emitter or sink."""
    pass
