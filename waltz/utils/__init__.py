"""
Shared utilities - logging, errors and argument checks
"""

from waltz.utils.errors import (
    WaltzError,
    NotFoundError,
    UnsupportedSelectionKindError,
    PreconditionViolationError,
)
from waltz.utils.checks import check_not_null, check_true

__all__ = [
    "WaltzError",
    "NotFoundError",
    "UnsupportedSelectionKindError",
    "PreconditionViolationError",
    "check_not_null",
    "check_true",
]
