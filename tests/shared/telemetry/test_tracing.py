"""Tests for span helpers"""

import pytest

from src.shared.telemetry.tracing import (add_span_attributes,
                                          current_trace_id, traced)


@traced("test.ok")
async def _ok(value):
    add_span_attributes(value=value)
    return value * 2


@traced("test.fail")
async def _fail():
    raise LookupError("missing")


@pytest.mark.asyncio
async def test_traced_returns_result():
    assert await _ok(21) == 42


@pytest.mark.asyncio
async def test_traced_reraises():
    with pytest.raises(LookupError, match="missing"):
        await _fail()


def test_traced_keeps_function_metadata():
    assert _ok.__name__ == "_ok"


def test_no_trace_id_outside_a_span():
    assert current_trace_id() is None
