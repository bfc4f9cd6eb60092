"""Custom exception hierarchy for kv-facade."""

from __future__ import annotations


class KVFacadeError(Exception):
    """Base exception for all kv-facade errors."""


class StoreCommandError(KVFacadeError):
    """Raised when the store rejects or fails a command."""

    def __init__(self, command: str, cause: BaseException) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"Store command {command!r} failed: {cause}")


class InvalidPatternError(KVFacadeError):
    """Raised when a delete pattern is the bare wildcard or malformed."""

    def __init__(self, pattern: object) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid delete pattern: {pattern!r}")


class InvalidKeyError(KVFacadeError):
    """Raised when a key is empty or not a string."""


class NotInTransactionModeError(KVFacadeError):
    """Raised when a commit is attempted on an immediate-mode facade."""


class TransactionClosedError(KVFacadeError):
    """Raised when a committed transaction buffer is used again."""


class ValueDecodeError(KVFacadeError):
    """Raised when a stored value cannot be decoded as JSON."""

    def __init__(self, key: str, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"Value at {key!r} is not valid JSON: {cause}")
