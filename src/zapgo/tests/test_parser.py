"""
Test suite for positional input parsing.
"""

import pytest

from zapgo.plugins import ParamDefinition, extract_trigger, parse_input, split_tokens


class TestTokenizing:
    """Test token splitting and trigger extraction."""

    def test_split_collapses_whitespace(self):
        assert split_tokens("  time   简短  ") == ["time", "简短"]

    def test_split_tabs_and_newlines(self):
        assert split_tokens("ask\thow\nare") == ["ask", "how", "are"]

    def test_extract_trigger(self):
        assert extract_trigger("  open google ") == "open"

    def test_extract_trigger_empty(self):
        assert extract_trigger("   ") == ""


class TestParseInput:
    """Test binding tokens to a parameter schema."""

    def test_binds_positionally(self):
        schema = [ParamDefinition(name="a"), ParamDefinition(name="b")]
        parsed = parse_input("cmd x y", schema)

        assert parsed.trigger == "cmd"
        assert parsed.bound_params == {"a": "x", "b": "y"}
        assert [arg.value for arg in parsed.arguments] == ["x", "y"]
        assert parsed.is_valid

    def test_one_argument_per_schema_entry(self):
        schema = [ParamDefinition(name="a"), ParamDefinition(name="b")]
        parsed = parse_input("cmd x y z", schema)

        assert len(parsed.arguments) == 2
        assert "z" not in parsed.bound_params.values()

    def test_missing_required(self):
        schema = [ParamDefinition(name="q", required=True)]
        parsed = parse_input("cmd", schema)

        assert parsed.missing_params == ["q"]
        assert parsed.arguments[0].missing is True
        assert parsed.arguments[0].valid is False
        assert not parsed.is_valid

    def test_optional_missing_is_valid(self):
        parsed = parse_input("time", [ParamDefinition(name="fmt")])

        assert parsed.is_valid
        assert parsed.arguments[0].value is None
        assert parsed.arguments[0].missing is False
        assert parsed.bound_params == {}

    def test_validator_rejects(self):
        schema = [ParamDefinition(name="n", validator=str.isdigit)]
        parsed = parse_input("cmd abc", schema)

        assert parsed.invalid_params == ["n"]
        assert parsed.arguments[0].valid is False
        assert parsed.bound_params == {"n": "abc"}

    def test_validator_exception_counts_as_invalid(self):
        def explode(value):
            raise ValueError("bad")

        parsed = parse_input("cmd 1", [ParamDefinition(name="n", validator=explode)])

        assert parsed.invalid_params == ["n"]

    def test_validator_skipped_without_value(self):
        calls = []
        schema = [ParamDefinition(name="n", validator=lambda v: calls.append(v) or True)]

        parse_input("cmd", schema)

        assert calls == []

    def test_missing_required_does_not_stop_later_params(self):
        schema = [
            ParamDefinition(name="a", required=True),
            ParamDefinition(name="b", required=True),
        ]
        parsed = parse_input("cmd", schema)

        assert parsed.missing_params == ["a", "b"]

    def test_empty_input(self):
        parsed = parse_input("", [ParamDefinition(name="a", required=True)])

        assert parsed.trigger == ""
        assert parsed.missing_params == ["a"]

    def test_description_carried_to_argument(self):
        schema = [ParamDefinition(name="a", description="first")]
        parsed = parse_input("cmd x", schema)

        assert parsed.arguments[0].description == "first"


def is_number(value):
    return value.isdigit()


SCHEMAS = [
    [],
    [ParamDefinition(name="a")],
    [ParamDefinition(name="a", required=True)],
    [ParamDefinition(name="a", required=True), ParamDefinition(name="b")],
    [ParamDefinition(name="n", required=True, validator=is_number)],
    [ParamDefinition(name="a"), ParamDefinition(name="n", validator=is_number)],
]

INPUTS = ["", "   ", "cmd", "cmd ", "cmd x", "cmd 12", "cmd x 12", "cmd 1 y z", "  cmd\t3  4 "]


class TestParseInputProperties:
    """Test parse_input behavior across schema and input combinations."""

    @pytest.mark.parametrize("schema", SCHEMAS)
    @pytest.mark.parametrize("raw_input", INPUTS)
    def test_repeat_parse_gives_equal_result(self, schema, raw_input):
        assert parse_input(raw_input, schema) == parse_input(raw_input, schema)

    @pytest.mark.parametrize("schema", SCHEMAS)
    @pytest.mark.parametrize("raw_input", INPUTS)
    def test_valid_exactly_without_missing_or_invalid(self, schema, raw_input):
        parsed = parse_input(raw_input, schema)

        assert parsed.is_valid == (not parsed.missing_params and not parsed.invalid_params)
        assert len(parsed.arguments) == len(schema)
        assert parsed.missing_params == [
            arg.name for arg in parsed.arguments if arg.missing
        ]
        assert set(parsed.invalid_params) <= {p.name for p in schema if p.validator}

    @pytest.mark.parametrize("schema", SCHEMAS)
    def test_schema_not_modified(self, schema):
        before = [(p.name, p.required, p.suggestions) for p in schema]
        parse_input("cmd 1 2 3", schema)

        assert [(p.name, p.required, p.suggestions) for p in schema] == before
