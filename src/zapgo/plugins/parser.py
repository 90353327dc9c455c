"""
Input parsing for ZapGo commands.

Raw palette input is a trigger word followed by whitespace separated
positional arguments. Parsing never raises: incomplete or invalid input is
reported through the fields of the returned ParsedInput so it can run on
every keystroke.
"""

from typing import List, Sequence

from .types import ArgumentInfo, ParamDefinition, ParsedInput
from ..utils.logging import get_logger

logger = get_logger(__name__)


def split_tokens(raw_input: str) -> List[str]:
    """Split input on runs of whitespace after trimming."""
    return raw_input.split()


def extract_trigger(raw_input: str) -> str:
    """Return the first token of the input, or an empty string."""
    tokens = split_tokens(raw_input)
    return tokens[0] if tokens else ""


def parse_input(raw_input: str, schema: Sequence[ParamDefinition]) -> ParsedInput:
    """Bind the tokens after the trigger to the schema by position.

    Args:
        raw_input: Text as typed by the user
        schema: Ordered parameter definitions of the command

    Returns:
        ParsedInput with one ArgumentInfo per schema parameter
    """
    tokens = split_tokens(raw_input)
    trigger = tokens[0] if tokens else ""
    args = tokens[1:]

    parsed = ParsedInput(trigger=trigger)

    for index, param in enumerate(schema):
        value = args[index] if index < len(args) else None

        if param.required and not value:
            parsed.missing_params.append(param.name)
            parsed.arguments.append(ArgumentInfo(
                value=value,
                name=param.name,
                required=param.required,
                valid=False,
                missing=True,
                description=param.description or "",
            ))
            continue

        valid = True
        if param.validator is not None and value:
            try:
                valid = bool(param.validator(value))
            except Exception as e:
                logger.debug(f"Validator for '{param.name}' raised on {value!r}: {e}")
                valid = False
            if not valid:
                parsed.invalid_params.append(param.name)

        parsed.arguments.append(ArgumentInfo(
            value=value,
            name=param.name,
            required=param.required,
            valid=valid,
            missing=False,
            description=param.description or "",
        ))

        if value:
            parsed.bound_params[param.name] = value

    return parsed
