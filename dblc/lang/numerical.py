"""Natural numbers encoded as Church numerals. Note that operations are not implemented here: they are ordinary
definitions (SUCC, ADD, ...) written by the program, so everything stays as pure as possible.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from dblc.lang.error import GenericException
from dblc.pure.term import Abstraction, Application, Symbol


def cnumber(num):
    """Returns the named term for num in lambda calculus (cnum = Church numeral): λf.λx.(f (f ... x))."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Symbol("x")
    for _ in range(num):
        body = Application(Symbol("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the int encoded by named term cnum. If cnum isn't a Church numeral, returns None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    f, x = cnum.name, cnum.body.name
    if f == x:
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        if nth_body.left != Symbol(f):
            return None
        nth_body = nth_body.right
        num += 1

    return num if nth_body == Symbol(x) else None
