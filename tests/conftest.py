# tests/conftest.py
import pytest

from pyepic.Context import Context, initial_context


def assert_conserves_content(ctx: Context, original: str):
    """Consumed prefix plus remaining suffix must always rebuild the input."""
    assert ctx.parsed + ctx.input == original
    assert len(ctx.parsed) == ctx.position.byte_offset


@pytest.fixture
def make_ctx():
    def _make(input_data, tracer=None):
        return initial_context(input_data, tracer)

    return _make
