# tests/tests_decorators/test_envelope.py
import json
import asyncio
import pytest

from mcp_element_operators.decorators import tool_envelope
from mcp_element_operators.errors import InvalidPatternError, MissingAttributeError

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture(autouse=True)
def default_tracebacks(monkeypatch):
    monkeypatch.delenv("MCP_ELEMENT_OPS_TOOL_ERRORS_TRACEBACK", raising=False)


def test_tool_envelope_normalizes_sync_values():
    # None -> ""
    @tool_envelope
    def f_none():
        return None

    # str passes through untouched
    @tool_envelope
    def f_str():
        return "plain"

    # dict -> json string flagged ok
    @tool_envelope
    def f_dict():
        return {"results": [None, ""]}

    # list -> json string
    @tool_envelope
    def f_list():
        return ["a", None]

    assert f_none() == ""
    assert f_str() == "plain"
    assert json.loads(f_dict()) == {"ok": True, "results": [None, ""]}
    assert json.loads(f_list()) == ["a", None]


def test_tool_envelope_error_payload_includes_traceback_by_default():
    @tool_envelope
    def f_fail():
        raise ValueError("boom")

    payload = json.loads(f_fail())
    assert payload["ok"] is False
    assert payload["summary"] == "ValueError: boom"
    assert payload["error"]["type"] == "ValueError"
    assert "Traceback" in payload["error"]["traceback"]
    assert "timestamp" in payload


def test_tool_envelope_error_payload_without_traceback_when_disabled(monkeypatch):
    monkeypatch.setenv("MCP_ELEMENT_OPS_TOOL_ERRORS_TRACEBACK", "0")

    @tool_envelope
    def f_fail():
        raise RuntimeError("err")

    payload = json.loads(f_fail())
    assert payload["ok"] is False
    assert "traceback" not in payload["error"]


def test_tool_envelope_adds_operator_error_details():
    @tool_envelope
    def f_missing():
        raise MissingAttributeError("src", "<img>")

    @tool_envelope
    def f_pattern():
        raise InvalidPatternError("(", "Invalid regex '('")

    missing = json.loads(f_missing())["error"]
    assert missing["type"] == "MissingAttributeError"
    assert missing["attribute"] == "src"
    assert missing["element"] == "<img>"

    pattern = json.loads(f_pattern())["error"]
    assert pattern["type"] == "InvalidPatternError"
    assert pattern["pattern"] == "("


def test_tool_envelope_async_cancelled_error_propagates(event_loop):
    @tool_envelope
    async def f_cancel():
        raise asyncio.CancelledError()

    async def test_logic():
        with pytest.raises(asyncio.CancelledError):
            await f_cancel()

    event_loop.run_until_complete(test_logic())


def test_tool_envelope_normalizes_async_return(event_loop):
    @tool_envelope
    async def f():
        return {"operator": "tidyText()"}

    async def test_logic():
        out = await f()
        assert isinstance(out, str)
        assert json.loads(out) == {"ok": True, "operator": "tidyText()"}

    event_loop.run_until_complete(test_logic())


def test_tool_envelope_async_error_payload(event_loop):
    @tool_envelope
    async def f():
        raise MissingAttributeError("href", "<a>")

    out = event_loop.run_until_complete(f())
    payload = json.loads(out)
    assert payload["ok"] is False
    assert payload["error"]["attribute"] == "href"
