"""Pure lambda calculus abstract syntax tree and parser.

Formally, the accepted lambda calculus can be defined as

```
<λ-term> ::= "λ" <name> <λ-term>        ; "abstraction"
                                        ; - currying is not supported: one name per "λ"
           | "(" <λ-term> <λ-term> ")"  ; "application"
                                        ; - exactly two terms, always parenthesized
           | <name>                     ; "variable"
                                        ; - any run of characters other than whitespace, "λ", "(" and ")"
```

Whitespace and `//` comments between tokens are ignored. Because applications are fully parenthesized and the body of
an abstraction is a single term, the next character alone decides which rule applies: the parser never backtracks.

Named terms are immutable once parsed. They are turned into nameless (De Bruijn) terms by convert, see nameless.py.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         https://en.wikipedia.org/wiki/De_Bruijn_index
"""

from abc import abstractmethod, ABC

from debruijn.lang.error import ParseError
from debruijn.pure.context import Context
from debruijn.pure.nameless import App, Lam, Var


class LambdaTerm(ABC):
    """Represents a named λ-term: variable, abstraction, or application."""

    @property
    @abstractmethod
    def nodes(self):
        """Direct subterms, in printing order."""

    @abstractmethod
    def to_nameless(self, context):
        """This method should convert self to a nameless term, given context (a Context of the names bound around
        self, innermost first). Variables not found in context become index len(context).
        """

    @abstractmethod
    def free_variables(self, bound=frozenset()):
        """Yields the Variables in self that are not bound by an enclosing abstraction, left to right."""

    def convert(self, context=()):
        """Converts self to a nameless term. context may be a Context or any sequence of names, innermost first."""
        if not isinstance(context, Context):
            context = Context(context)
        return self.to_nameless(context)

    def display(self, indents=0):
        """Recursively displays LambdaTerm tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


class Variable(LambdaTerm):
    """Variable in lambda calculus. start is the offset of the name in the parsed source, if known."""

    def __init__(self, name, start=None):
        self.name = name
        self.start = start

    @property
    def nodes(self):
        return []

    def to_nameless(self, context):
        return Var(context.index(self.name))

    def free_variables(self, bound=frozenset()):
        if self.name not in bound:
            yield self

    def __eq__(self, other):
        return isinstance(other, Variable) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __str__(self):
        return self.name


class Abstraction(LambdaTerm):
    """Abstraction: binds name inside body."""

    def __init__(self, name, body):
        self.name = name
        self.body = body

    @property
    def nodes(self):
        return [self.body]

    def to_nameless(self, context):
        return Lam(self.body.to_nameless(context.bind(self.name)))

    def free_variables(self, bound=frozenset()):
        return self.body.free_variables(bound | {self.name})

    def __eq__(self, other):
        return isinstance(other, Abstraction) and self.name == other.name and self.body == other.body

    def __hash__(self):
        return hash((self.name, self.body))

    def __str__(self):
        return f"λ{self.name} {self.body}"


class Application(LambdaTerm):
    """Application of func to argm."""

    def __init__(self, func, argm):
        self.func = func
        self.argm = argm

    @property
    def nodes(self):
        return [self.func, self.argm]

    def to_nameless(self, context):
        return App(self.func.to_nameless(context), self.argm.to_nameless(context))

    def free_variables(self, bound=frozenset()):
        yield from self.func.free_variables(bound)
        yield from self.argm.free_variables(bound)

    def __eq__(self, other):
        return isinstance(other, Application) and self.func == other.func and self.argm == other.argm

    def __hash__(self):
        return hash((self.func, self.argm))

    def __str__(self):
        return f"({self.func} {self.argm})"


class TermParser:
    """Recursive descent parser over a single source string. Each instance parses once: the cursor is not reset."""
    LAMBDA = "λ"
    RESERVED = [LAMBDA, "(", ")"]
    COMMENT = "//"

    def __init__(self, source):
        self.source = source
        self.index = 0

    def parse(self):
        """Parses the whole source as one λ-term. Raises ParseError if anything but trivia follows it."""
        term = self.parse_term()

        self.skip_trivia()
        if self.index < len(self.source):
            raise ParseError("'{}' has unexpected trailing input", self.source, start=self.index,
                             end=len(self.source.rstrip()))
        return term

    def parse_term(self):
        """Parses one λ-term starting at the cursor."""
        self.skip_trivia()

        char = self.peek_one()
        if char is None:
            raise ParseError("'{}' ends unexpectedly", self.source, start=self.index, end=self.index + 1)

        elif char == TermParser.LAMBDA:
            self.consume(TermParser.LAMBDA)
            name = self.parse_name()
            body = self.parse_term()
            return Abstraction(name, body)

        elif char == "(":
            self.consume("(")
            func = self.parse_term()
            argm = self.parse_term()
            self.consume(")")
            return Application(func, argm)

        start = self.index
        return Variable(self.parse_name(), start)

    def parse_name(self):
        """Parses a name: the longest run of non-trivia, non-reserved characters. Empty names are not allowed."""
        self.skip_trivia()

        start = self.index
        while self.index < len(self.source) and self.is_name_char():
            self.index += 1

        if start == self.index:
            if self.index >= len(self.source):
                raise ParseError("'{}' ends unexpectedly, expected a name", self.source, start=self.index,
                                 end=self.index + 1)
            raise ParseError("'{}' has a missing name", self.source, start=self.index, end=self.index + 1)
        return self.source[start:self.index]

    def consume(self, token):
        """Skips trivia and then token. Raises ParseError if token is not next."""
        self.skip_trivia()

        if self.source.startswith(token, self.index):
            self.index += len(token)
            return

        if token == ")":
            raise ParseError("'{}' is missing a closing ')'", self.source, start=self.index, end=self.index + 1)
        raise ParseError("'{}' expected '" + token + "'", self.source, start=self.index, end=self.index + 1)

    def skip_trivia(self):
        """Moves the cursor past whitespace and // comments."""
        while self.index < len(self.source):
            if self.source[self.index].isspace():
                self.index += 1
            elif self.source.startswith(TermParser.COMMENT, self.index):
                end = self.source.find("\n", self.index)
                self.index = len(self.source) if end == -1 else end + 1
            else:
                break

    def peek_one(self):
        """Returns the character under the cursor, or None at end of input."""
        if self.index < len(self.source):
            return self.source[self.index]
        return None

    def is_name_char(self):
        """Whether or not the character under the cursor can be part of a name."""
        char = self.source[self.index]
        if char.isspace() or char in TermParser.RESERVED:
            return False
        return not self.source.startswith(TermParser.COMMENT, self.index)


def parse(source):
    """Parses source into a named λ-term. Raises ParseError on malformed input."""
    return TermParser(source).parse()


def convert(term, context=()):
    """Converts a named λ-term to a nameless one. Total: free variables become index len(context)."""
    return term.convert(context)
