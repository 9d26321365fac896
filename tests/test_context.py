import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pyepic.Char import char
from pyepic.Context import Context, ParseError, Status, initial_context
from pyepic.Match import Match
from pyepic.Position import Position, origin
from pyepic.Prim import many, run_parser

from conftest import assert_conserves_content


def test_initial_context():
    ctx = initial_context("abc")
    assert ctx.status is Status.OK
    assert ctx.message == ""
    assert ctx.parsed == ""
    assert ctx.input == "abc"
    assert ctx.position == origin()
    assert ctx.match is None
    assert ctx.error is None


def test_initial_context_requires_text():
    with pytest.raises(TypeError):
        initial_context(b"abc")


def test_contexts_are_immutable(make_ctx):
    ctx = make_ctx("abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.status = Status.ERROR


def test_fail_keeps_consumable_state(make_ctx):
    ctx = make_ctx("abc")
    failed = ctx.fail("nope")
    assert failed.failed
    assert failed.message == "nope"
    assert failed.input == ctx.input
    assert failed.position == ctx.position
    assert ctx.ok


def test_error_value():
    ctx = Context(Status.ERROR, "Unexpected end of input", "ab\n", Position(3, 2, 1))
    err = ctx.error
    assert err == ParseError(Position(3, 2, 1), "Unexpected end of input")
    assert str(err) == "Parse error at line 2, column 1: Unexpected end of input"


def test_peek_and_at_end(make_ctx):
    assert make_ctx("xy").peek() == "x"
    empty = make_ctx("")
    assert empty.at_end
    assert empty.peek() is None


def test_snippet_is_truncated(make_ctx):
    ctx = make_ctx("a" * 100)
    assert ctx.snippet(5) == "aaaaa..."
    assert make_ctx("abc").snippet(5) == "abc"


def test_tracer_does_not_take_part_in_equality():
    class Sink:
        def record(self, event, position, remaining):
            pass

    assert initial_context("a", Sink()) == initial_context("a")


def test_succeed_sets_match(make_ctx):
    ctx = make_ctx("a").fail("before")
    m = Match.single('a', origin())
    done = ctx.succeed(m)
    assert done.ok and done.message == "" and done.match is m
    assert done.term == 'a'


@given(st.text())
def test_content_conservation(text):
    res = run_parser(many(char()), text)
    assert_conserves_content(res, text)
    assert res.input == ""


def test_str_rendering(make_ctx):
    rendered = str(make_ctx("hello"))
    assert "status=ok" in rendered
    assert "'hello'" in rendered
