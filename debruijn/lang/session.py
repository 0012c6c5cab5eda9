"""Session control for the debruijn interpreter. Runs λ-terms through the whole pipeline (parse, convert to De Bruijn
indices, beta-reduce), either for a single expression given on the command line or line by line in command-line mode.
"""

from dataclasses import dataclass

from debruijn.lang.error import ParseError
from debruijn.pure.lexical import LambdaTerm, TermParser, parse
from debruijn.pure.nameless import NamelessTerm


@dataclass(frozen=True)
class Evaluation:
    """The stages of one λ-term's evaluation."""
    source: str
    named: LambdaTerm
    nameless: NamelessTerm
    normal: NamelessTerm

    def report(self, show_tree=False):
        """Returns the printable summary of this evaluation. If show_tree, each stage's tree display is included."""
        stages = [("Parsed", self.named), ("De Bruijn", self.nameless), ("Normal form", self.normal)]

        lines = []
        for label, term in stages:
            lines.append(f"{label}: {term}")
            if show_tree:
                lines.append(term.display(1))
        return "\n".join(lines)

    def __str__(self):
        return self.report()


class Session:
    """Governs a debruijn session: queued λ-terms and their evaluations."""
    SH_FILE = "<in>"    # command-line interpreter filename
    ARG_FILE = "<arg>"  # filename used for an expression passed as an argument

    def __init__(self, error_handler, path, cmd_line, show_tree=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.show_tree = show_tree  # whether or not reports include tree displays

        self.to_exec = []  # (line num, source, parsed LambdaTerm) to evaluate, in order added
        self.results = []  # Evaluations, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

    @staticmethod
    def preprocess_line(line):
        """Strips line and returns it along with whether or not it needs a continuation (unbalanced parentheses).
        Parentheses inside // comments are not counted.
        """
        line = line.strip()
        code = "\n".join(part.split(TermParser.COMMENT, 1)[0] for part in line.split("\n"))
        return line, code.count("(") > code.count(")")

    def add(self, expr, line_num=1):
        """Parses expr and queues it. Reduction is delayed until run is called. Raises ValueError if expr is blank."""
        if not expr.strip():
            raise ValueError("cannot add an empty λ-term")

        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised
        try:
            term = parse(expr)
        except RecursionError:
            raise ParseError("'{}' is nested too deeply", expr, diagnosis=False) from None

        self.to_exec.append((line_num, expr, term))
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Converts and beta-reduces every queued term, appending an Evaluation to results for each. Warns about free
        variables. Any error raised by reduction propagates.
        """
        while self.to_exec:
            line_num, expr, named = self.to_exec.pop(0)
            self.error_handler.register_line(self.path, expr, line_num)

            for var in named.free_variables():
                start = var.start if var.start is not None else 0
                self.error_handler.warn("'{}' has free variable '{}'", (expr, var.name), start=start,
                                        end=start + len(var.name))

            nameless = named.convert()
            self.results.append(Evaluation(expr, named, nameless, nameless.beta_reduce()))

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the newest Evaluation."""
        return self.results.pop()
