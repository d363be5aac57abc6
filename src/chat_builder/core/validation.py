"""Validation primitives shared by the request builder."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from chat_builder.core.errors import InvalidParameterError

if TYPE_CHECKING:
    from chat_builder.libs.llm.functions import FunctionDefinition


FUNCTION_NAME_MIN_LENGTH = 1
FUNCTION_NAME_MAX_LENGTH = 64
FUNCTION_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def validate_range(name: str, value: float, minimum: float, maximum: float) -> None:
    """Check that ``value`` lies within ``[minimum, maximum]``.

    Args:
        name: Parameter name reported in the error.
        value: Number to check. NaN is always out of range.
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound.

    Raises:
        InvalidParameterError: If the value is out of range.
    """
    if not minimum <= value <= maximum:
        raise InvalidParameterError(
            name,
            f"number is out of range, it must be between {minimum} and {maximum} "
            "(both inclusive).",
        )


def validate_function_name(definition: "FunctionDefinition") -> None:
    """Check a structured function definition's name.

    Raises:
        InvalidParameterError: If the name is too short/long or is not an identifier.
    """
    name = definition.name
    if not FUNCTION_NAME_MIN_LENGTH <= len(name) <= FUNCTION_NAME_MAX_LENGTH:
        raise InvalidParameterError(
            "<functionDefinition>.name",
            f'(="{name}") must have a minimum length of {FUNCTION_NAME_MIN_LENGTH} '
            f"and maximum length of {FUNCTION_NAME_MAX_LENGTH}.",
        )
    if not FUNCTION_NAME_PATTERN.fullmatch(name):
        raise InvalidParameterError(
            "<functionDefinition>.name",
            f'(="{name}") must (1) begin with a letter or underscore and '
            "(2) contain only letters, numbers, or underscores.",
        )
