import dataclasses
from typing import Any, Callable, List, Optional

from .Context import Context, GrammarError, ParseFn, Parser, Status, ensure_parser
from .Match import Match, TermConversionError
from .Prim import parser_name, sequence

INTEGER_ERROR = "Cannot interpret as integer"


# 1. optional: attempt a parser, never fail
def optional(parser: ParseFn) -> Parser:
    """
    Tries `parser`; on failure returns the original context untouched
    (status ok, no new match). Optional always succeeds.
    """
    ensure_parser(parser, "optional")

    def parse(ctx: Context) -> Context:
        res = parser(ctx)
        if res.ok:
            return res
        if ctx.ok:
            return ctx
        return dataclasses.replace(ctx, status=Status.OK, message="")

    return Parser(parse, f"optional({parser_name(parser)})")


# 2. times: exactly n occurrences
def times(parser: ParseFn, n: int) -> Parser:
    """Same as a sequence of `n` copies of `parser`."""
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise GrammarError(f"times requires a positive count, got {n!r}")
    return sequence([parser] * n)


def _on_success(parser: ParseFn, name: str, f: Callable[[Context, Context], Context],
                needs_match: bool = True) -> Parser:
    # Runs parser; failures pass straight through, successes go to f(start, result).
    # A success that set no match (e.g. a missed optional) has no term to rewrite.
    ensure_parser(parser, name)

    def parse(ctx: Context) -> Context:
        res = parser(ctx)
        if res.failed:
            return res
        if needs_match and res.match is None:
            return res
        return f(ctx, res)

    return Parser(parse, f"{name}({parser_name(parser)})")


def _rewrite_term(res: Context, term: Any) -> Context:
    return dataclasses.replace(res, match=res.match.with_term(term))


# 3. label: descriptive metadata on the match
def label(parser: ParseFn, name: str) -> Parser:
    """Attach `name` to the match's label. Status, input, position and term are untouched."""
    def attach(_start: Context, res: Context) -> Context:
        return dataclasses.replace(res, match=res.match.with_label(name))
    return _on_success(parser, "label", attach)


# 4. ignore: consume but leave out of enclosing lists
def ignore(parser: ParseFn) -> Parser:
    """
    Replaces a successful match with the ignore sentinel. The input is
    still consumed but `sequence` and `many` leave the term out.
    """
    return _on_success(parser, "ignore", lambda start, res: res.succeed(Match.ignored(start.position)))


def _unexpected(term: Any) -> str:
    return f"Unexpected {term!r}"


# 5. satisfy: gate a parser on a predicate over its term
def satisfy(parser: ParseFn,
            predicate: Callable[[Any], bool],
            error_message: Optional[Callable[[Any], str]] = None) -> Parser:
    """
    Runs `parser` and accepts the result only if `predicate(term)` holds.

    On rejection the sub-match is discarded: the returned context is the one
    given to `satisfy`, failed with `error_message(term)`.
    """
    if not callable(predicate):
        raise GrammarError(f"satisfy: predicate must be callable, got {predicate!r}")
    error_message = error_message or _unexpected

    def check(start: Context, res: Context) -> Context:
        if predicate(res.term):
            return res
        return start.fail(error_message(res.term))

    return _on_success(parser, "satisfy", check)


# 6. transform: rewrite the term with a function
def transform(parser: ParseFn, f: Callable[[Any], Any]) -> Parser:
    """On success, replace the term with `f(term)`."""
    if not callable(f):
        raise GrammarError(f"transform: expected a callable, got {f!r}")
    return _on_success(parser, "transform", lambda start, res: _rewrite_term(res, f(res.term)))


# 7. replace: rewrite the term with a constant
def replace(parser: ParseFn, value: Any) -> Parser:
    """On success, replace the term with `value`, whatever was matched."""
    return _on_success(parser, "replace", lambda start, res: _rewrite_term(res, value))


def _flatten_term(term: List[Any]) -> List[Any]:
    flat: List[Any] = []
    stack = [iter(term)]
    while stack:
        for item in stack[-1]:
            if isinstance(item, list):
                stack.append(iter(item))
                break
            flat.append(item)
        else:
            stack.pop()
    return flat


# 8. flatten: nested list term to a single-level list
def flatten(parser: ParseFn) -> Parser:
    """Turns a (possibly nested) list term into one flat list of its leaves, in order."""
    def flat(start: Context, res: Context) -> Context:
        if not isinstance(res.term, list):
            return start.fail(f"Cannot flatten non-list term {res.term!r}")
        return _rewrite_term(res, _flatten_term(res.term))
    return _on_success(parser, "flatten", flat)


# 9. string: term to text
def string(parser: ParseFn) -> Parser:
    """Converts a character, or a list of characters, into a str term."""
    def to_text(start: Context, res: Context) -> Context:
        try:
            text = res.match.to_text()
        except TermConversionError as e:
            return start.fail(str(e))
        return _rewrite_term(res, text)
    return _on_success(parser, "string", to_text)


# 10. integer: term to int
def integer(parser: ParseFn) -> Parser:
    """
    Converts the matched digits into an int term. Only an optional sign
    and ASCII digits are accepted; an empty match fails with
    "Cannot interpret as integer".
    """
    def to_int(start: Context, res: Context) -> Context:
        try:
            value = res.match.to_integer()
        except TermConversionError:
            return start.fail(INTEGER_ERROR)
        return _rewrite_term(res, value)
    return _on_success(parser, "integer", to_int)


# 11. update_context: arbitrary rewrite of a successful context
def update_context(parser: ParseFn, updater: Callable[[Context], Context]) -> Parser:
    """
    Escape hatch: on success pass the resulting context through `updater`.
    The updater is responsible for keeping the context consistent.
    """
    if not callable(updater):
        raise GrammarError(f"update_context: updater must be callable, got {updater!r}")
    return _on_success(parser, "update_context", lambda start, res: updater(res), needs_match=False)
