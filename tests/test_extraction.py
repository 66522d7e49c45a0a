"""Tests for JSON and tool-call recovery from model output."""

import logging
import re

import pytest

from providers.shared import FunctionCall
from utils.errors import BadRequestError, InvalidFunctionCallError
from utils.extraction import extract_json, extract_tool_call, process_function_call

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_whole_text_parsed_first():
    assert extract_json('{"a":1}') == {"a": 1}


def test_valid_json_never_routed_through_fences():
    """A JSON string whose value contains a fence is returned as-is."""

    text = '"```json\\n{\\"b\\": 2}\\n```"'

    assert extract_json(text) == '```json\n{"b": 2}\n```'


def test_json_fence():
    assert extract_json('prefix ```json\n{"a":1}\n``` suffix') == {"a": 1}


def test_json_fence_wins_over_earlier_plain_fence():
    text = '```\n{"plain": true}\n```\nthen ```json\n{"tagged": true}\n```'

    assert extract_json(text) == {"tagged": True}


def test_invalid_json_fence_returns_none(caplog):
    text = 'see ```json\n{not json}\n``` and {"a": 1}'

    with caplog.at_level(logging.WARNING, logger="utils.extraction"):
        assert extract_json(text) is None

    assert "Failed to extract JSON" in caplog.text


def test_any_fence():
    assert extract_json('Result:\n```\n{"a": [1, 2]}\n```') == {"a": [1, 2]}


def test_invalid_plain_fence_falls_through_to_brace_scan():
    text = 'Here ```\nnot json\n``` but {"ok": true} later'

    assert extract_json(text) == {"ok": True}


def test_brace_scan_finds_flat_object():
    assert extract_json('The answer is {"value": 42}, done.') == {"value": 42}


def test_brace_scan_does_not_balance_nested_objects():
    """The scan grabs the innermost flat pair, not the enclosing object."""

    assert extract_json('answer: {"outer": {"inner": 1}} ok') == {"inner": 1}


def test_no_json_returns_none():
    assert extract_json("no structured output here") is None


def test_non_string_returns_none():
    assert extract_json(None) is None


def test_tool_call_object():
    assert extract_tool_call('{"tool_call":{"name":"x","arguments":{}}}') == {"name": "x", "arguments": {}}


def test_tool_call_preferred_over_function_call():
    text = '{"function_call": {"name": "b", "arguments": {}}, "tool_call": {"name": "a", "arguments": {}}}'

    assert extract_tool_call(text)["name"] == "a"


def test_function_call_object_with_string_arguments():
    text = '{"function_call": {"name": "lookup", "arguments": "{\\"id\\": 7}"}}'

    assert extract_tool_call(text) == {"name": "lookup", "arguments": {"id": 7}}


def test_name_and_parameters_are_synthesised():
    text = 'Calling now: ```json\n{"name": "search", "parameters": {"q": "dogs"}}\n```'

    assert extract_tool_call(text) == {"name": "search", "arguments": {"q": "dogs"}}


def test_name_and_arguments_are_synthesised():
    assert extract_tool_call('{"name": "ping", "arguments": {}}') == {"name": "ping", "arguments": {}}


def test_call_tool_pattern():
    assert extract_tool_call("call_tool('search', {\"q\":\"cats\"})") == {"name": "search", "arguments": {"q": "cats"}}


def test_call_tool_pattern_with_double_quotes():
    text = 'I will call_tool("weather", {"city": "Oslo"}) now'

    assert extract_tool_call(text) == {"name": "weather", "arguments": {"city": "Oslo"}}


def test_call_tool_with_invalid_arguments_returns_none(caplog):
    with caplog.at_level(logging.WARNING, logger="utils.extraction"):
        assert extract_tool_call("call_tool('search', {invalid})") is None

    assert "Failed to parse tool call arguments" in caplog.text


def test_json_without_tool_shape_returns_none():
    assert extract_tool_call('{"answer": 42}') is None


def test_process_function_call_decodes_string_arguments():
    result = process_function_call({"name": "f", "arguments": '{"x":1}'})

    assert result.tool_name == "f"
    assert result.parameters == {"x": 1}
    assert ISO_UTC.match(result.timestamp)
    assert result.to_dict() == {"toolName": "f", "parameters": {"x": 1}, "timestamp": result.timestamp}


def test_process_function_call_defaults_missing_arguments():
    assert process_function_call({"name": "noop"}).parameters == {}


def test_process_function_call_substitutes_empty_object_for_bad_json(caplog):
    with caplog.at_level(logging.WARNING, logger="utils.extraction"):
        result = process_function_call({"name": "f", "arguments": "{broken"})

    assert result.parameters == {}
    assert "Failed to parse function call arguments" in caplog.text


def test_process_function_call_accepts_parsed_call():
    result = process_function_call(FunctionCall(name="get_weather", arguments='{"city": "Paris"}'))

    assert result.tool_name == "get_weather"
    assert result.parameters == {"city": "Paris"}


@pytest.mark.parametrize("call", [{}, None, {"arguments": {}}, {"name": ""}])
def test_process_function_call_requires_name(call):
    with pytest.raises(InvalidFunctionCallError) as excinfo:
        process_function_call(call)

    assert isinstance(excinfo.value, BadRequestError)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid function call format"


def test_deeply_nested_input_returns_none():
    """Inputs that exhaust the JSON decoder's recursion limit are treated as unparseable."""

    text = "[" * 100000

    assert extract_json(text) is None
    assert extract_tool_call(text) is None


def test_deeply_nested_function_call_arguments_become_empty():
    result = process_function_call({"name": "f", "arguments": "[" * 100000})

    assert result.parameters == {}


def test_empty_parameters_fall_back_to_arguments():
    text = '{"name": "f", "parameters": "", "arguments": {"a": 1}}'

    assert extract_tool_call(text) == {"name": "f", "arguments": {"a": 1}}


def test_empty_object_parameters_count_as_supplied():
    text = '{"name": "f", "parameters": {}, "arguments": {"a": 1}}'

    assert extract_tool_call(text) == {"name": "f", "arguments": {}}
