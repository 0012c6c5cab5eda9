"""Nameless (De Bruijn indexed) lambda calculus terms and their beta reduction.

A nameless term replaces every variable name with a natural number: the count of abstractions between the variable and
its binder. Formally,

```
<nameless> ::= <index>                  ; "Var": 0 is bound by the innermost enclosing abstraction
             | "λ" <nameless>           ; "Lam": binders carry no name
             | "(" <nameless> <nameless> ")"  ; "App"
```

An index at least as large as the number of abstractions enclosing it refers to a free variable.

Terms are immutable. Shifting, substitution and reduction always build new trees, sharing every subtree they leave
unchanged.

Reduction is innermost-first: both sides of an application are reduced before the application itself is contracted,
and bodies of abstractions are reduced too, so the result is a normal form. Terms without a normal form recurse until
Python's recursion limit is hit.

Source: https://en.wikipedia.org/wiki/De_Bruijn_index
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class NamelessTerm(ABC):
    """Base class for nameless λ-terms: Lam, App or Var."""

    @property
    @abstractmethod
    def nodes(self):
        """Direct subterms, in printing order."""

    @abstractmethod
    def shift_above(self, amount, cutoff):
        """Adds amount to every variable index >= cutoff. The cutoff grows by one under each abstraction, so indices
        bound inside this term are left alone.
        """

    @abstractmethod
    def substitute(self, index, replacement):
        """Replaces free occurrences of index with replacement, and decrements free indices above it (the binder of
        index is being removed).
        """

    @abstractmethod
    def beta_reduce(self, depth=0):
        """Returns the normal form of this term. Does not return if there is none. depth is the number of abstractions
        enclosing self in the term being reduced: indices >= depth are free in the whole term.
        """

    @abstractmethod
    def free_indices(self, depth=0):
        """Yields each free variable index, relative to the root of this term. depth is the number of abstractions
        between the root and self.
        """

    def shift(self, amount):
        """Adds amount to every free variable index."""
        return self.shift_above(amount, 0)

    def is_closed(self):
        """Whether or not every variable is bound inside this term."""
        return next(iter(self.free_indices()), None) is None

    def display(self, indents=0):
        """Recursively displays the term tree with readable format.

        Format:
        <Lam|App|Var>(expr='<expr>', nodes=[
            ...
            <Var>(expr='<expr>')  # <-- if nodes is empty
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


@dataclass(frozen=True)
class Var(NamelessTerm):
    """Variable reference by De Bruijn index."""
    index: int

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"De Bruijn index must be non-negative, got {self.index}")

    @property
    def nodes(self):
        return []

    def shift_above(self, amount, cutoff):
        if self.index >= cutoff:
            return Var(self.index + amount)
        return self

    def substitute(self, index, replacement):
        if self.index == index:
            return replacement
        elif self.index > index:
            return Var(self.index - 1)
        return self

    def beta_reduce(self, depth=0):
        return self

    def free_indices(self, depth=0):
        if self.index >= depth:
            yield self.index - depth

    def __str__(self):
        return str(self.index)


@dataclass(frozen=True)
class Lam(NamelessTerm):
    """Abstraction. Var(0) in body refers to this binder."""
    body: NamelessTerm

    @property
    def nodes(self):
        return [self.body]

    def shift_above(self, amount, cutoff):
        return Lam(self.body.shift_above(amount, cutoff + 1))

    def substitute(self, index, replacement):
        # one more binder now sits between index's binder and the body
        return Lam(self.body.substitute(index + 1, replacement.shift(1)))

    def beta_reduce(self, depth=0):
        return Lam(self.body.beta_reduce(depth + 1))

    def free_indices(self, depth=0):
        return self.body.free_indices(depth + 1)

    def __str__(self):
        return f"λ{self.body}"


@dataclass(frozen=True)
class App(NamelessTerm):
    """Application of func to argm."""
    func: NamelessTerm
    argm: NamelessTerm

    @property
    def nodes(self):
        return [self.func, self.argm]

    def shift_above(self, amount, cutoff):
        return App(self.func.shift_above(amount, cutoff), self.argm.shift_above(amount, cutoff))

    def substitute(self, index, replacement):
        return App(self.func.substitute(index, replacement), self.argm.substitute(index, replacement))

    def beta_reduce(self, depth=0):
        """Reduces both operands, then contracts the application if func reduced to an abstraction, and reduces the
        contractum again (substitution can create new redexes).

        Before it replaces index 0 of the abstraction body, the argument's references to variables free in the whole
        term (indices >= depth) move up by one, into the scope of the body. References to enclosing binders are left
        alone. For closed terms this is plain beta reduction; a top-level (λx x y) reduces to 1.
        """
        func = self.func.beta_reduce(depth)
        argm = self.argm.beta_reduce(depth)

        if isinstance(func, Lam):
            return func.body.substitute(0, argm.shift_above(1, depth)).beta_reduce(depth)
        return App(func, argm)

    def free_indices(self, depth=0):
        yield from self.func.free_indices(depth)
        yield from self.argm.free_indices(depth)

    def __str__(self):
        return f"({self.func} {self.argm})"


def shift_above(term, amount, cutoff):
    """Adds amount to every index in term that is >= cutoff (relative to each variable's own depth)."""
    return term.shift_above(amount, cutoff)


def shift(term, amount):
    """Adds amount to every free index in term."""
    return term.shift(amount)


def substitute(term, index, replacement):
    """Substitutes replacement for free occurrences of index in term."""
    return term.substitute(index, replacement)


def reduce(term):
    """Beta-reduces term to normal form."""
    return term.beta_reduce()
