from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Optional

from .Match import Match
from .Position import Position, origin
from .Trace import SNIPPET_LENGTH, Tracer


class Status(Enum):
    OK = "ok"
    ERROR = "error"


class GrammarError(ValueError):
    """Raised while *building* a parser from invalid pieces, never while parsing."""


@dataclass(frozen=True)
class ParseError:
    """Represents a parsing error with a message and position."""
    position: Position
    message: str

    def __str__(self) -> str:
        return f"Parse error at {self.position}: {self.message}"


@dataclass(frozen=True)
class Context:
    """The value threaded through every parser.

    The whole input lives in `source`; how much of it has been consumed is
    given by `position.byte_offset`, so `parsed + input == source` always
    holds and moving forward never copies the buffer.
    """
    status: Status
    message: str
    source: str
    position: Position
    match: Optional[Match] = None
    tracer: Optional[Tracer] = field(default=None, compare=False, repr=False)

    @property
    def offset(self) -> int:
        return self.position.byte_offset

    @property
    def input(self) -> str:
        """The remaining, unconsumed suffix."""
        return self.source[self.offset:]

    @property
    def parsed(self) -> str:
        """The already consumed prefix."""
        return self.source[:self.offset]

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def failed(self) -> bool:
        return self.status is Status.ERROR

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    @property
    def term(self) -> Any:
        return self.match.term if self.match is not None else None

    @property
    def error(self) -> Optional[ParseError]:
        if self.ok:
            return None
        return ParseError(self.position, self.message)

    def peek(self) -> Optional[str]:
        """Next character, or None at end of input."""
        if self.at_end:
            return None
        return self.source[self.offset]

    def snippet(self, length: int = SNIPPET_LENGTH) -> str:
        text = self.source[self.offset:self.offset + length]
        if self.offset + length < len(self.source):
            text += "..."
        return text

    def succeed(self, match: Match) -> 'Context':
        return replace(self, status=Status.OK, message="", match=match)

    def fail(self, message: str) -> 'Context':
        return replace(self, status=Status.ERROR, message=message)

    def __str__(self) -> str:
        return (f"Context(status={self.status.value}, message={self.message!r}, "
                f"input={self.snippet()!r}, position={self.position}, match={self.match})")


def initial_context(text: str, tracer: Optional[Tracer] = None) -> Context:
    """Build the starting Context for parsing `text`."""
    if not isinstance(text, str):
        raise TypeError(f"expected str input, got {type(text).__name__}")
    return Context(Status.OK, "", text, origin(), None, tracer)


ParseFn = Callable[[Context], Context]


class Parser:
    """A parser: a function from Context to Context, with a name for tracing."""
    def __init__(self, parse_fn: ParseFn, name: str = "parser"):
        self.parse_fn = parse_fn
        self.name = name

    def __call__(self, ctx: Context) -> Context:
        if ctx.tracer is not None:
            length = getattr(ctx.tracer, "snippet_length", SNIPPET_LENGTH)
            ctx.tracer.record(self.name, ctx.position, ctx.snippet(length))
        return self.parse_fn(ctx)

    # Ordered alternative, same as choice([self, other])
    def __or__(self, other: ParseFn) -> 'Parser':
        from .Prim import choice
        return choice([self, other])

    def label(self, name: str) -> 'Parser':
        from .Combinators import label
        return label(self, name)

    def map(self, f: Callable[[Any], Any]) -> 'Parser':
        from .Combinators import transform
        return transform(self, f)

    def ignore(self) -> 'Parser':
        from .Combinators import ignore
        return ignore(self)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"


def ensure_parser(p: Any, where: str) -> ParseFn:
    if not callable(p):
        raise GrammarError(f"{where}: expected a parser, got {p!r}")
    return p
