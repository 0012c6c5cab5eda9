"""Binding contexts for De Bruijn conversion.

A context is the stack of names bound by the abstractions enclosing some point of a λ-term, innermost first: position 0
is the most recently bound name. Contexts are persistent. Binding a name returns a new context that shares every cell
of the old one, so sibling subterms never observe each other's bindings.
"""


class Context:
    """Persistent stack of bound names, innermost first."""

    def __init__(self, names=()):
        """names[0] becomes position 0 (the innermost binding)."""
        cell, length = None, 0
        for name in reversed(tuple(names)):
            cell, length = (name, cell), length + 1

        self._cell = cell  # (name, next cell) pairs, or None when empty
        self._length = length

    @classmethod
    def _from_cell(cls, cell, length):
        context = cls()
        context._cell = cell
        context._length = length
        return context

    def bind(self, name):
        """Returns a new context with name bound at position 0. self is left untouched."""
        return Context._from_cell((name, self._cell), self._length + 1)

    def index(self, name):
        """Position of the innermost binding of name, or len(self) if name is not bound."""
        for idx, bound in enumerate(self):
            if bound == name:
                return idx
        return self._length

    def __contains__(self, name):
        return self.index(name) != self._length

    def __iter__(self):
        cell = self._cell
        while cell is not None:
            name, cell = cell
            yield name

    def __len__(self):
        return self._length

    def __eq__(self, other):
        return isinstance(other, Context) and list(self) == list(other)

    def __repr__(self):
        return f"Context({list(self)!r})"
