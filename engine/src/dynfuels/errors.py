"""Configuration errors raised while building fuel parameters.

Every error is detected once, at load time, and aborts the run before any
cell is classified. All of them derive from ValueError.
"""

from __future__ import annotations


class ParameterError(ValueError):
    """Base class for invalid fuel system configuration."""


class InputValueError(ParameterError):
    """A single input value violates its constraint.

    Attributes:
        field: Name of the offending field (e.g., "Fuel Index")
        value: The rejected value
        constraint: Human readable description of the violated rule
    """

    def __init__(
        self,
        field: str,
        value: object,
        constraint: str,
        line_number: int | None = None,
    ):
        self.field = field
        self.value = value
        self.constraint = constraint
        self.line_number = line_number
        message = f"{field}: {value!r} is invalid. {constraint}"
        if line_number is not None:
            message = f"Error at line {line_number}: {message}"
        super().__init__(message)


class DuplicateIndexError(ParameterError):
    """An index or name that must be unique was used twice."""

    def __init__(self, description: str, index: object, first_position: int):
        self.description = description
        self.index = index
        self.first_position = first_position
        super().__init__(
            f"The {description} {index} was previously used on line {first_position}"
        )


class ParseError(ParameterError):
    """Structural error in a parameter file."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Error at line {line_number}: {message}"
        super().__init__(message)
