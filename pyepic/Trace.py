import logging
from typing import List, NamedTuple, Optional, Protocol

from .Position import Position

log = logging.getLogger("pyepic")

SNIPPET_LENGTH = 30


class TraceEvent(NamedTuple):
    event: str
    position: Position
    remaining: str


class Tracer(Protocol):
    """Diagnostic sink handed to a single parse.

    Parsers call `record` as a side observation only; a tracer must never
    influence parse results. An optional `snippet_length` attribute bounds
    how much of the remaining input is passed as `remaining`.
    """

    def record(self, event: str, position: Position, remaining: str) -> None:
        ...


class RecordingTracer:
    """Keeps every event in memory, in call order."""

    def __init__(self, snippet_length: int = SNIPPET_LENGTH) -> None:
        self.events: List[TraceEvent] = []
        self.snippet_length = snippet_length

    def record(self, event: str, position: Position, remaining: str) -> None:
        self.events.append(TraceEvent(event, position, remaining))

    def names(self) -> List[str]:
        return [e.event for e in self.events]

    def clear(self) -> None:
        self.events.clear()


class LoggingTracer:
    """Forwards events to the standard logging module.

    Usage:

        import logging
        logging.basicConfig(level=logging.DEBUG)
        run_parser(grammar, text, tracer=LoggingTracer())
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG,
                 snippet_length: int = SNIPPET_LENGTH) -> None:
        self.logger = logger or log
        self.level = level
        self.snippet_length = snippet_length

    def record(self, event: str, position: Position, remaining: str) -> None:
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, "%-6s %s %r", f"{position.line}:{position.column}", event, remaining)
