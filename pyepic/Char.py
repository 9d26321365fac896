import dataclasses
from typing import Callable, Optional

from .Combinators import satisfy
from .Context import Context, GrammarError, Parser, Status
from .Match import Match
from .Prim import sequence

WHITESPACE = " \t\r\n"


def _any_char(ctx: Context) -> Context:
    c = ctx.peek()
    if c is None:
        return ctx.fail("Unexpected end of input")
    return dataclasses.replace(
        ctx,
        status=Status.OK,
        message="",
        position=ctx.position.advance_over(c),
        match=Match.single(c, ctx.position),
    )


def _char_class(predicate: Callable[[str], bool], expected: str, name: str) -> Parser:
    # char() gated by predicate; end of input reports what was expected.
    gated = satisfy(Parser(_any_char, "char"), predicate,
                    lambda found: f"Expected {expected}, found {found!r}")

    def parse(ctx: Context) -> Context:
        if ctx.at_end:
            return ctx.fail(f"Expected {expected}, found end of input")
        return gated(ctx)

    return Parser(parse, name)


def char(c: Optional[str] = None) -> Parser:
    """
    With no argument, parses any single character. With `c`, parses exactly
    that character. The term is the one-character string.
    """
    if c is None:
        return Parser(_any_char, "char")
    if not isinstance(c, str) or len(c) != 1:
        raise GrammarError(f"char expects a single character, got {c!r}")
    return _char_class(lambda x: x == c, repr(c), f"char({c!r})")


def digit() -> Parser:
    """Parses an ASCII digit '0'..'9'."""
    return _char_class(lambda x: '0' <= x <= '9', "a digit", "digit")


def ascii_letter() -> Parser:
    """Parses an ASCII letter 'a'..'z' or 'A'..'Z'."""
    return _char_class(lambda x: 'a' <= x <= 'z' or 'A' <= x <= 'Z', "an ASCII letter", "ascii_letter")


def whitespace() -> Parser:
    """Parses one space, tab, carriage return or line feed."""
    return _char_class(lambda x: x in WHITESPACE, "whitespace", "whitespace")


def newline() -> Parser:
    return _char_class(lambda x: x == '\n', "a newline", "newline")


def literal(s: str) -> Parser:
    """
    Parses the exact text `s`, one character at a time. The term is the list
    of its characters; wrap it in `string` to get `s` back.
    """
    if not isinstance(s, str) or not s:
        raise GrammarError(f"literal expects a non-empty string, got {s!r}")
    p = sequence([char(c) for c in s])
    p.name = f"literal({s!r})"
    return p


def eoi() -> Parser:
    """Succeeds, consuming nothing, only when no input remains. The term is ignored."""
    def parse(ctx: Context) -> Context:
        if ctx.at_end:
            return ctx.succeed(Match.ignored(ctx.position))
        return ctx.fail(f"Expected end of input, found: \"{ctx.snippet()}\"")
    return Parser(parse, "eoi")
