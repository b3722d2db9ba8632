# MIT License (see LICENSE)
"""
Exception types raised by the Hooke's Law model.

Only two kinds of failure exist, both precondition violations:
- ConfigurationError: invalid construction-time parameters.
- RangeError: a setter argument (or the quantity it implies) outside its
  declared valid range.

Both derive from ValueError so generic callers can catch them together.
A rejected call never leaves the model partially updated.
"""
from __future__ import annotations


class HookesLawError(Exception):
    """Base class for all model errors."""


class ConfigurationError(HookesLawError, ValueError):
    """Raised when a spring, system or value cell is constructed with invalid parameters."""


class RangeError(HookesLawError, ValueError):
    """
    Raised when a value lies outside the valid range of the quantity it is written to.

    Attributes:
        name: Name of the quantity that rejected the value.
        value: The rejected value.
        valid_range: The range it had to lie in (None for value-set checks).
    """

    def __init__(self, name: str, value, valid_range=None, message: str | None = None):
        self.name = name
        self.value = value
        self.valid_range = valid_range
        if message is None:
            message = f"{name} out of range: {value!r}"
            if valid_range is not None:
                message += f" not in {valid_range}"
        super().__init__(message)
