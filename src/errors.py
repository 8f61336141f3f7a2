from enum import Enum


class Reason(Enum):
    EMPTY = "empty"
    TOO_LONG = "too_long"


class HashRingError(Exception):
    """Base class for every error raised by the hash ring."""


class InvalidArgument(HashRingError, ValueError):
    """
    Raised when a node identifier or lookup key is malformed.

    Attributes:
        reason: Reason.EMPTY or Reason.TOO_LONG.
        field: Human readable name of the rejected argument.
        max_length: The bound that was in effect.
    """

    def __init__(self, reason: Reason, field: str, max_length: int):
        self.reason = reason
        self.field = field
        self.max_length = max_length
        if reason is Reason.EMPTY:
            msg = f"{field} cannot be empty"
        else:
            msg = f"{field} exceeds maximum length ({max_length})"
        super().__init__(msg)


class SnapshotError(HashRingError, ValueError):
    """Raised when snapshot data cannot be turned back into a ring."""
