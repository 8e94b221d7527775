"""Indexed λ-terms using De Bruijn indices, and conversion from/to named terms (see pure/term.py).

A variable is replaced by the number of binders between it and the abstraction that binds it:

```
λx.x          =>  Lam(Var(0))
λx.λy.x       =>  Lam(Lam(Var(1)))
λx.(x λy.x)   =>  Lam(App(Var(0), Lam(Var(1))))
```

Names never need to be compared or renamed, so substitution cannot capture a variable (see pure/reduction.py). Two
terms are alpha-equivalent exactly when their indexed forms are equal.

Source: https://en.wikipedia.org/wiki/De_Bruijn_index
"""

from dataclasses import dataclass
from itertools import count

from dblc.lang.error import StructuralDefect, UnboundVariable
from dblc.pure.term import Abstraction, Application, Definition, Symbol, int_to_name


class Indexed:
    """Superclass of all indexed λ-terms. Printed in De Bruijn notation, e.g. λ.(0 λ.1)."""


@dataclass(frozen=True)
class Lam(Indexed):
    body: Indexed

    def __str__(self):
        return f"λ.{self.body}"


@dataclass(frozen=True)
class App(Indexed):
    left: Indexed
    right: Indexed

    def __str__(self):
        return f"({self.left} {self.right})"


@dataclass(frozen=True)
class Var(Indexed):
    """Bound variable: index=0 is bound by the immediately enclosing Lam, index=1 by the next one out, etc."""
    index: int

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Variable index must be non-negative, got {self.index}")

    def __str__(self):
        return str(self.index)


@dataclass(frozen=True)
class Free(Indexed):
    """Variable not bound anywhere in the term. Only produced by to_debruijn(..., allow_free=True)."""
    name: str

    def __str__(self):
        return self.name


def to_debruijn(term, allow_free=False):
    """Converts a resolved named term to an indexed term. Unless allow_free, every symbol must be bound."""

    def _to_debruijn(term, scope):
        if isinstance(term, Abstraction):
            return Lam(_to_debruijn(term.body, [term.name] + scope))
        elif isinstance(term, Application):
            return App(_to_debruijn(term.left, scope), _to_debruijn(term.right, scope))
        elif isinstance(term, Symbol):
            if term.name in scope:
                return Var(scope.index(term.name))
            elif allow_free:
                return Free(term.name)
            raise UnboundVariable("'{}' is not bound by any abstraction", term.name)
        elif isinstance(term, Definition):
            raise StructuralDefect("definition '{}' was not resolved before conversion", term.name)
        raise StructuralDefect("cannot convert '{}'", type(term).__name__)

    return _to_debruijn(term, [])


def free_names(term):
    """Returns the set of free variable names in an indexed term."""
    if isinstance(term, Lam):
        return free_names(term.body)
    elif isinstance(term, App):
        return free_names(term.left) | free_names(term.right)
    elif isinstance(term, Free):
        return {term.name}
    return set()


def to_named(term):
    """Converts an indexed term back to a named term. The binder at depth d is named int_to_name(d), skipping any name
    that is also a free variable of term so that it cannot be captured.
    """
    reserved = free_names(term)
    candidates = map(int_to_name, count())
    names = []  # names[d] is the name of every binder at depth d

    def fresh(depth):
        while len(names) <= depth:
            candidate = next(candidates)
            if candidate not in reserved:
                names.append(candidate)
        return names[depth]

    def _to_named(term, scope):
        if isinstance(term, Lam):
            name = fresh(len(scope))
            return Abstraction(name, _to_named(term.body, [name] + scope))
        elif isinstance(term, App):
            return Application(_to_named(term.left, scope), _to_named(term.right, scope))
        elif isinstance(term, Var):
            if term.index >= len(scope):
                raise StructuralDefect("index '{}' escapes its term", str(term.index))
            return Symbol(scope[term.index])
        elif isinstance(term, Free):
            return Symbol(term.name)
        raise StructuralDefect("cannot convert '{}'", type(term).__name__)

    return _to_named(term, [])


def alpha_equals(term, other):
    """Whether or not two named terms are equal up to renaming of bound variables."""
    return to_debruijn(term, allow_free=True) == to_debruijn(other, allow_free=True)
