from dataclasses import replace
from typing import Any, Callable, Iterable, List, Optional

from .Context import Context, GrammarError, ParseFn, Parser, ensure_parser, initial_context
from .Match import Match
from .Trace import Tracer


def parser_name(p: Any) -> str:
    return getattr(p, "name", None) or getattr(p, "__name__", None) or repr(p)


def _collect(res: Context, items: List[Any], extract_terms: bool) -> None:
    # A child that produced no match, or an ignored one, adds nothing.
    match = res.match
    if match is None or match.is_ignored:
        return
    items.append(match.term if extract_terms else match)


# 1. sequence: every parser in order, results gathered into one list
def sequence(parsers: Iterable[ParseFn], extract_terms: bool = True) -> Parser:
    """
    Applies each parser to the context left by the previous one and collects
    their terms, in input order, into a single list term.

    The first failing child fails the whole sequence. With
    `extract_terms=False` the list holds the child Match values instead of
    bare terms.
    """
    parsers = [ensure_parser(p, "sequence") for p in parsers]
    if not parsers:
        raise GrammarError("sequence requires at least one parser")

    def parse(ctx: Context) -> Context:
        items: List[Any] = []
        current = ctx
        for p in parsers:
            res = p(replace(current, match=None))
            if res.failed:
                return replace(res, match=ctx.match)
            _collect(res, items, extract_terms)
            current = res
        return current.succeed(Match(items, ctx.position))

    return Parser(parse, "sequence")


# 2. choice: first alternative that succeeds against the starting context wins
def choice(parsers: Iterable[ParseFn], description: Optional[str] = None) -> Parser:
    """
    Tries each parser in order, always from the original context.

    Returns the first success as is. When every alternative fails the
    per-alternative messages are dropped and a single message naming the
    remaining input is reported instead.
    """
    parsers = [ensure_parser(p, "choice") for p in parsers]
    if not parsers:
        raise GrammarError("choice requires at least one parser")

    def parse(ctx: Context) -> Context:
        for p in parsers:
            res = p(ctx)
            if res.ok:
                return res
        if description:
            return ctx.fail(f"Expected {description}, no parser matches at: \"{ctx.snippet()}\"")
        return ctx.fail(f"No parser matches at: \"{ctx.snippet()}\"")

    return Parser(parse, description or "choice")


# 3. many: greedy repetition, never fails
def many(parser: ParseFn, extract_terms: bool = True) -> Parser:
    """
    Applies `parser` until it fails, collecting the terms of every success.

    The failed attempt is thrown away, so the result sits right after the
    last success. Zero repetitions give an empty list.

    `parser` must consume input whenever it succeeds; a parser that can
    succeed on nothing makes `many` loop forever.
    """
    ensure_parser(parser, "many")

    def parse(ctx: Context) -> Context:
        items: List[Any] = []
        current = ctx
        while True:
            res = parser(replace(current, match=None))
            if res.failed:
                break
            _collect(res, items, extract_terms)
            current = res
        return current.succeed(Match(items, ctx.position))

    return Parser(parse, f"many({parser_name(parser)})")


def lazy(thunk: Callable[[], ParseFn]) -> Parser:
    """Build the parser on first use; lets recursive grammars refer to themselves."""
    built: List[ParseFn] = []

    def parse(ctx: Context) -> Context:
        if not built:
            built.append(ensure_parser(thunk(), "lazy"))
        return built[0](ctx)

    return Parser(parse, "lazy")


def parser_trace(label_str: str) -> Parser:
    """Zero-width parser that only shows up in the trace under `label_str`."""
    def parse(ctx: Context) -> Context:
        return ctx.succeed(Match.ignored(ctx.position))
    return Parser(parse, label_str)


def run_parser(parser: ParseFn, input_str: str, tracer: Optional[Tracer] = None) -> Context:
    """Parse `input_str` from the beginning and return the final Context."""
    return parser(initial_context(input_str, tracer))
