# Core
from .Position import Position, origin
from .Match import Match, IGNORED, Ignored, TermConversionError
from .Context import Context, Status, ParseError, GrammarError, Parser, initial_context
from .Prim import sequence, choice, many, lazy, run_parser, parser_trace

# Combinators
from .Combinators import (
    optional, times, label, ignore, satisfy,
    transform, replace, flatten, string, integer, update_context
)

# Characters
from .Char import char, digit, ascii_letter, whitespace, newline, literal, eoi

# Diagnostics
from .Trace import Tracer, TraceEvent, RecordingTracer, LoggingTracer
