"""Named λ-terms: the representation produced by the parser and consumed by the printer.

```
<term> ::= Abstraction(name, body)   ; λname.body
         | Application(left, right)  ; (left right), always parenthesized
         | Symbol(name)              ; lowercase variable
         | Definition(name)          ; uppercase reference, only lives until definitions are resolved
```

Reduction never sees these terms directly: see pure/debruijn.py for the indexed representation.
"""

from dataclasses import dataclass

from dblc.lang.error import StructuralDefect


class Term:
    """Superclass of all named λ-terms. Terms are immutable: every transformation builds a new term."""

    def __call__(self, arg):
        """Applies this term to arg."""
        return Application(self, arg)

    def __str__(self):
        return show(self)


@dataclass(frozen=True)
class Abstraction(Term):
    name: str
    body: Term


@dataclass(frozen=True)
class Application(Term):
    left: Term
    right: Term


@dataclass(frozen=True)
class Symbol(Term):
    name: str


@dataclass(frozen=True)
class Definition(Term):
    """Reference to a top-level definition, e.g. `ID` in `(ID x)`."""
    name: str


def show(term):
    """Renders term in canonical surface syntax. A Definition at this point means resolution was skipped."""
    if isinstance(term, Abstraction):
        return f"λ{term.name}.{show(term.body)}"
    elif isinstance(term, Application):
        return f"({show(term.left)} {show(term.right)})"
    elif isinstance(term, Symbol):
        return term.name
    elif isinstance(term, Definition):
        raise StructuralDefect("cannot show unresolved definition '{}'", term.name)
    raise StructuralDefect("cannot show '{}'", type(term).__name__)


def int_to_name(num):
    """Returns the num-th lowercase identifier: a, b, ..., z, aa, ab, ... (bijective base 26, like spreadsheet
    columns).
    """
    if num < 0:
        raise ValueError(f"expected natural number, got {num}")

    name = ""
    num += 1
    while num > 0:
        num, digit = divmod(num - 1, 26)
        name = chr(ord("a") + digit) + name
    return name
