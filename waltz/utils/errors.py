"""
Custom error classes for the application
"""


class WaltzError(Exception):
    """Base exception for Waltz errors"""
    pass


class NotFoundError(WaltzError):
    """Requested entity, diagram or registry entry does not exist"""
    pass


class UnsupportedSelectionKindError(WaltzError):
    """Selection options variant cannot be applied to the target entity kind"""
    pass


class PreconditionViolationError(WaltzError):
    """Required argument missing or invalid at an API boundary"""
    pass
