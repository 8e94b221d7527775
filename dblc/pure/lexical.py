"""Pure lambda calculus parser: turns surface text into named λ-terms (see pure/term.py).

Formally, the accepted grammar is

```
<λ-term>        ::= <abstraction> | <application> | <group> | <symbol> | <definition>
<abstraction>   ::= ("\" | "λ") <symbol> "." <λ-term>     ; bodies are a single term: λx.(x y), never λx.x y
<application>   ::= "(" <λ-term> <λ-term> ")"             ; exactly two terms, always parenthesized
<group>         ::= "(" <λ-term> ")"                      ; parentheses around a single term only group it
<symbol>        ::= [a-z]+                                ; each maximal run is one variable
<definition>    ::= [A-Z0-9]+                             ; reference to an earlier top-level definition
```

Whitespace (newlines included) is insignificant between tokens. The first character of a term always decides which
production applies, so the parser never backtracks. There is no reader state: every helper takes the text and an
offset and returns the offset it stopped at.
"""

from dblc.lang.error import InvalidSyntax
from dblc.pure.term import Abstraction, Application, Definition, Symbol


LAMBDAS = "\\λ"
OPEN, CLOSE, PERIOD = "(", ")", "."


def is_symbol(char):
    return "a" <= char <= "z"


def is_definition(char):
    return "A" <= char <= "Z" or "0" <= char <= "9"


def skip_whitespace(text, pos):
    """Returns the offset of the first non-whitespace character at or after pos."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def consume(text, pos, predicate):
    """Returns the maximal run of characters satisfying predicate starting at pos, and the offset after it."""
    end = pos
    while end < len(text) and predicate(text[end]):
        end += 1
    return text[pos:end], end


def expect(text, pos, char):
    """Skips whitespace then consumes char, raising InvalidSyntax if something else is found."""
    pos = skip_whitespace(text, pos)
    if pos >= len(text):
        raise InvalidSyntax("'{}' ended early, expected '{}'", (text, char), start=len(text))
    if text[pos] != char:
        raise InvalidSyntax("'{}' has '{}' where '{}' was expected", (text, text[pos], char), start=pos, end=pos + 1)
    return pos + 1


def parse_abstraction(text, pos):
    pos = skip_whitespace(text, pos + 1)  # past λ
    name, end = consume(text, pos, is_symbol)
    if not name:
        raise InvalidSyntax("'{}' has an abstraction without a bound variable", text, start=pos, end=pos + 1)

    body, end = parse(text, expect(text, end, PERIOD))
    return Abstraction(name, body), end


def parse_application(text, pos):
    left, pos = parse(text, pos + 1)  # past (

    pos = skip_whitespace(text, pos)
    if pos < len(text) and text[pos] == CLOSE:
        return left, pos + 1

    right, pos = parse(text, pos)
    return Application(left, right), expect(text, pos, CLOSE)


def parse(text, pos=0):
    """Parses the term starting at (or after whitespace following) pos. Returns the term and the offset just past it."""
    pos = skip_whitespace(text, pos)
    if pos >= len(text):
        raise InvalidSyntax("'{}' ended before a λ-term was complete", text, start=len(text))

    head = text[pos]
    if head in LAMBDAS:
        return parse_abstraction(text, pos)
    elif head == OPEN:
        return parse_application(text, pos)
    elif is_symbol(head):
        name, pos = consume(text, pos, is_symbol)
        return Symbol(name), pos
    elif is_definition(head):
        name, pos = consume(text, pos, is_definition)
        return Definition(name), pos

    raise InvalidSyntax("'{}' has unexpected '{}'", (text, head), start=pos, end=pos + 1)


def parse_term(text):
    """Parses text as exactly one λ-term. Anything but whitespace after that term is a syntax error."""
    term, pos = parse(text)

    pos = skip_whitespace(text, pos)
    if pos < len(text):
        raise InvalidSyntax("'{}' has trailing '{}'", (text, text[pos:]), start=pos)
    return term
