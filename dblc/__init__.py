"""Lambda calculus interpreter.

For reference:
- "pure": untyped lambda calculus as defined by Church, see dblc/pure
- "lang": programs made of named definitions, plus the machinery to load and run them, see dblc/lang

Basic program flow:
    1. Parser: produces a named λ-term from surface text (see pure/lexical.py), after which every definition
       reference is replaced by the term it names (see lang/session.py)
    2. Conversion: the named term is rewritten with De Bruijn indices (see pure/debruijn.py)
    3. Reduction: normal-order β-reduction to weak head normal form, then to full normal form (see pure/reduction.py)
    4. Printing: the result is converted back to a named term, binders renamed a, b, c, ... by depth

"""

__version__ = "0.1.0"
