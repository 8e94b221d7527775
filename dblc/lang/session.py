"""Session control for dblc programs. A program is a list of definitions, one per line:

```
<program>    ::= (<definition> | <comment> | <blank>)*
<definition> ::= [A-Z0-9]+ "=" <λ-term>     ; may only reference definitions from earlier lines
<comment>    ::= "//" <char>*               ; only when "//" are the first two characters of the line
```

The definition named MAIN is the term that gets reduced.
"""

import re
from copy import deepcopy
from functools import partial

from dblc.lang.error import ErrorHandler, InvalidSyntax, MissingMain, UnknownDefinition
from dblc.lang.numerical import cnumber, number
from dblc.pure.lexical import is_definition, parse_term
from dblc.pure.reduction import reduce
from dblc.pure.term import Abstraction, Application, Definition, show


class Session:
    """Governs a dblc session, with control over the table of definitions."""
    MAIN = "MAIN"
    COMMENT = "//"
    STDIN = "<stdin>"  # filename used when the program is not read from a file

    def __init__(self, error_handler=None, path=STDIN, numerals=False, allow_free=False):
        if error_handler is None:
            error_handler = ErrorHandler(fatal=False)
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path              # used for error messages
        self.numerals = numerals      # whether or not digit references are Church numerals
        self.allow_free = allow_free  # whether or not free variables may pass through reduction

        self.definitions = {}  # dict of name: resolved term, in order of definition

    @staticmethod
    def preprocess_line(line):
        """Returns line without surrounding whitespace, or "" if the line is blank or a comment."""
        if line.startswith(Session.COMMENT):
            return ""
        return line.strip()

    @staticmethod
    def split_definition(line):
        """Splits 'NAME = λ-term' into name and λ-term text."""
        name, eq, expr = line.partition("=")
        name = name.strip()

        if not eq or not name or not all(is_definition(char) for char in name):
            raise InvalidSyntax("'{}' is not of the form NAME = λ-term", line, end=len(name) if eq else -1)
        return name, expr.strip()

    def load(self, program):
        """Adds every definition in program, in order."""
        for line_num, line in enumerate(program.splitlines(), 1):
            line = Session.preprocess_line(line)
            if line:
                self.add(line, line_num)
        return self

    def add(self, line, line_num=None):
        """Parses a definition line, resolves the definitions it references and registers it."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        name, expr = Session.split_definition(line)
        term = self.resolve(parse_term(expr), expr)

        if name in self.definitions:
            self.error_handler.warn("'{}' redefines '{}'", (line, name), end=len(name))
        self.definitions[name] = term

        self.error_handler.remove_line(self.path)  # error was not raised
        return term

    def resolve(self, term, expr=""):
        """Returns term with every Definition replaced by a copy of its registered term. expr is the text term was
        parsed from, used for error messages.
        """
        if isinstance(term, Abstraction):
            return Abstraction(term.name, self.resolve(term.body, expr))
        elif isinstance(term, Application):
            return Application(self.resolve(term.left, expr), self.resolve(term.right, expr))
        elif isinstance(term, Definition):
            if term.name in self.definitions:
                return deepcopy(self.definitions[term.name])
            elif self.numerals and term.name.isdigit():
                return cnumber(int(term.name))

            match = re.search(rf"(?<![A-Z0-9]){term.name}(?![A-Z0-9])", expr)
            start, end = match.span() if match else (0, -1)
            raise UnknownDefinition("'{}' refers to undefined '{}'", (expr, term.name), start=start, end=end)
        return term

    def main(self):
        """Returns the resolved MAIN term."""
        if Session.MAIN not in self.definitions:
            raise MissingMain()
        return self.definitions[Session.MAIN]

    def reduce(self, term):
        """Reduces a resolved term to normal form, registering every contraction with the error handler."""
        return reduce(term, allow_free=self.allow_free, trace=partial(self.error_handler.register_step, "β"))

    def run(self):
        """Reduces MAIN. Will raise any errors that are encountered."""
        return self.reduce(self.main())

    def evaluate(self, expr, line_num=None):
        """Parses, resolves and reduces a single λ-term against this session's definitions."""
        self.error_handler.register_line(self.path, expr, line_num)
        result = self.reduce(self.resolve(parse_term(expr), expr))
        self.error_handler.remove_line(self.path)
        return result

    def show(self, term):
        """Renders term, as a number if numerals are enabled and term is a Church numeral."""
        if self.numerals and number(term) is not None:
            return str(number(term))
        return show(term)


def parse(program, numerals=False, error_handler=None):
    """Loads program and returns its fully resolved MAIN term."""
    return Session(error_handler, numerals=numerals).load(program).main()
