"""
Argument checks raising PreconditionViolationError.
"""

from typing import Any, TypeVar

from waltz.utils.errors import PreconditionViolationError

T = TypeVar("T")


def check_not_null(value: T, message: str) -> T:
    """
    Fail eagerly when a required argument is missing.

    Args:
        value: Argument to check
        message: Error message used when the check fails

    Returns:
        The value, unchanged
    """
    if value is None:
        raise PreconditionViolationError(message)
    return value


def check_true(condition: Any, message: str) -> None:
    if not condition:
        raise PreconditionViolationError(message)
