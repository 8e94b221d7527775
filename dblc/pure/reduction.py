"""Normal-order β-reduction of indexed λ-terms (see pure/debruijn.py).

Reduction happens in two phases:
    1. whnf: contracts the leftmost outermost redex until the term is an abstraction or a stuck application. Arguments
       are substituted unreduced (call-by-name), and abstraction bodies are left alone.
    2. nf: reduces the result of whnf to weak head normal form again under every abstraction and on both sides of every
       stuck application, which yields the full β-normal form.

No step limit is imposed: a term without a normal form, such as (λx.(x x) λx.(x x)), reduces forever.

Sources: https://en.wikipedia.org/wiki/De_Bruijn_index#Formal_definition,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

import sys

from dblc.lang.error import StructuralDefect
from dblc.pure.debruijn import App, Free, Lam, Var, to_debruijn, to_named

# shift, substitute, nf and the converters recurse once per level of nesting, and normal forms such as large Church
# numerals nest a thousand levels deep or more
RECURSION_LIMIT = 10000

if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)


def shift(cutoff, term):
    """Increments every index in term that is free at depth cutoff, i.e. moves term under one more binder."""
    if isinstance(term, Lam):
        return Lam(shift(cutoff + 1, term.body))
    elif isinstance(term, App):
        return App(shift(cutoff, term.left), shift(cutoff, term.right))
    elif isinstance(term, Var):
        return Var(term.index + 1) if term.index >= cutoff else term
    elif isinstance(term, Free):
        return term
    raise StructuralDefect("cannot shift '{}'", type(term).__name__)


def substitute(index, term, replacement):
    """Replaces Var(index) in term with replacement, and closes the gap left by the binder that is consumed: indices
    above index are decremented, indices below it are untouched.
    """
    if isinstance(term, Lam):
        return Lam(substitute(index + 1, term.body, shift(0, replacement)))
    elif isinstance(term, App):
        return App(substitute(index, term.left, replacement), substitute(index, term.right, replacement))
    elif isinstance(term, Var):
        if term.index == index:
            return replacement
        elif term.index > index:
            return Var(term.index - 1)
        return term
    elif isinstance(term, Free):
        return term
    raise StructuralDefect("cannot substitute in '{}'", type(term).__name__)


def whnf(term, trace=None):
    """Reduces term to weak head normal form. trace, if given, is called with every redex right before it is
    contracted.

    Walks down the left spine of term, stacking arguments, then contracts (λ.body arg) for as long as the head is an
    abstraction with an argument waiting. A head that is not an abstraction is stuck: the spine is rebuilt around it
    with the remaining arguments, none of which are reduced.
    """
    args = []
    while True:
        while isinstance(term, App):
            args.append(term.right)
            term = term.left

        if not isinstance(term, Lam) or not args:
            break

        arg = args.pop()
        if trace is not None:
            trace(App(term, arg))
        term = substitute(0, term.body, arg)

    while args:
        term = App(term, args.pop())
    return term


def nf(term, trace=None):
    """Reduces term to β-normal form, in normal order."""
    term = whnf(term, trace)
    if isinstance(term, Lam):
        return Lam(nf(term.body, trace))
    elif isinstance(term, App):
        return App(nf(term.left, trace), nf(term.right, trace))
    return term


def reduce(term, allow_free=False, trace=None):
    """Reduces a resolved named term to its named normal form. Binders of the result are renamed a, b, c, ... by
    depth.
    """
    return to_named(nf(to_debruijn(term, allow_free), trace))
