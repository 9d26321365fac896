from hypothesis import given
from hypothesis import strategies as st

from pyepic.Position import Position, origin


def test_origin():
    assert origin() == Position(byte_offset=0, line=1, column=1)


def test_advance():
    pos = origin().advance()
    assert pos == Position(1, 1, 2)
    assert pos.advance() == Position(2, 1, 3)


def test_advance_past_end_of_line():
    pos = Position(1, 1, 2).advance(True)
    assert pos == Position(2, 2, 1)


def test_advance_does_not_mutate():
    start = origin()
    start.advance()
    assert start == origin()


def test_str():
    assert str(Position(10, 3, 7)) == "line 3, column 7"


@given(st.text())
def test_advance_over_text(text):
    pos = origin()
    for c in text:
        pos = pos.advance_over(c)

    assert pos.byte_offset == len(text)
    assert pos.line == text.count('\n') + 1
    assert pos.column == len(text) - (text.rfind('\n') + 1) + 1
