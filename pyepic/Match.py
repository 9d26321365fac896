import re
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from .Position import Position

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class Ignored:
    """Marker term meaning "consumed, but leave me out of any enclosing list"."""
    _instance: Optional['Ignored'] = None

    def __new__(cls) -> 'Ignored':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "IGNORED"


IGNORED = Ignored()


class TermConversionError(ValueError):
    """Raised when a term cannot be turned into text or an integer."""


@dataclass(frozen=True)
class Match:
    """The result of one successful parse step.

    `term` is whatever the parser produced: a single character, a list of
    sub-terms, a string, an integer or `IGNORED`. `position` is where the
    matched span began, never where it ended.
    """
    term: Any
    position: Position
    label: Optional[str] = None

    @classmethod
    def single(cls, term: Any, position: Position) -> 'Match':
        return cls(term, position)

    @classmethod
    def empty_list(cls, position: Position) -> 'Match':
        return cls([], position)

    @classmethod
    def ignored(cls, position: Position) -> 'Match':
        return cls(IGNORED, position)

    @property
    def is_ignored(self) -> bool:
        return self.term is IGNORED

    def appended(self, item: Any) -> 'Match':
        """Return a copy whose list term has `item` added at the end."""
        if not isinstance(self.term, list):
            raise TermConversionError(f"Cannot append to non-list term {self.term!r}")
        return replace(self, term=self.term + [item])

    def with_term(self, term: Any) -> 'Match':
        return replace(self, term=term)

    def with_label(self, label: str) -> 'Match':
        return replace(self, label=label)

    def to_text(self) -> str:
        """Render a character or a (nested) list of characters as a string."""
        return _term_text(self.term)

    def to_integer(self) -> int:
        """Interpret the term's text as a base-10 integer.

        Only an optional sign followed by ASCII digits is accepted.
        """
        text = self.to_text()
        if not _INTEGER_RE.fullmatch(text):
            raise TermConversionError(f"Cannot interpret {text!r} as integer")
        return int(text)


def _term_text(term: Any) -> str:
    if isinstance(term, str):
        return term
    if isinstance(term, list):
        return ''.join(_term_text(item) for item in term)
    raise TermConversionError(f"Cannot convert term {term!r} to text")
