"""
Errors Module.

Defines the exceptions raised while assembling execution options. Both abort
configuration immediately; there is no partial construction mode.
"""

from typing import Optional


class InvalidArgumentError(ValueError):
    """Raised when an option value is rejected (e.g. a negative retry budget)."""


class IllegalStateError(RuntimeError):
    """Raised when a builder call is not allowed for the value or state given."""


def _make_invalid_argument(
    msg: str, exc_msg: Optional[Exception] = None
) -> InvalidArgumentError:
    """
    Creates an `InvalidArgumentError` that chains an inner exception's message.
    Useful for adding context to low-level validation and parsing errors.

    Args:
        msg (str): The high-level error message.
        exc_msg (Optional[Exception]): The original exception.

    Returns:
        InvalidArgumentError: A new exception combining both messages.
    """
    if exc_msg is None:
        return InvalidArgumentError(msg)
    else:
        return InvalidArgumentError(f"{msg}\nInner err: {exc_msg}")
