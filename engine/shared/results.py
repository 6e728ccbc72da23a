"""Typed operation results.

Every engine operation returns an :class:`OpResult` instead of raising. A
failed result carries exactly one :class:`ErrorCode` and guarantees that no
state was mutated.

.. code-block:: python

    >>> result = OpResult.fail(ErrorCode.NO_DATA)
    >>> result.success
    False
    >>> result.error
    <ErrorCode.NO_DATA: 'no-data'>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Named failure reasons surfaced to callers."""

    # Authorization
    OWNER_ONLY = "owner-only"
    NOT_AUTHORIZED = "not-authorized"
    # Resource / state conflicts
    ALREADY_SUBMITTED = "already-submitted"
    INSUFFICIENT_STAKE = "insufficient-stake"
    INVALID_AMOUNT = "invalid-amount"
    BUFFER_FULL = "buffer-full"
    INVALID_ASSET = "invalid-asset"
    # Protocol stage
    CONSENSUS_NOT_REACHED = "consensus-not-reached"
    NO_DATA = "no-data"
    # Global mode
    CONTRACT_PAUSED = "contract-paused"
    # Accusation rejection
    WITHIN_TOLERANCE = "within-tolerance"


class OracleError(Exception):
    """Raised by :meth:`OpResult.unwrap` on a failed result."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.value)
        self.code = code


@dataclass(frozen=True)
class OpResult:
    """Outcome of an engine operation.

    :ivar value: Success payload (``None`` for operations returning plain ok).
    :ivar error: Failure reason, or None on success.
    """

    value: Any = None
    error: ErrorCode | None = None

    @property
    def success(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None

    @classmethod
    def ok(cls, value: Any = True) -> OpResult:
        return cls(value=value)

    @classmethod
    def fail(cls, code: ErrorCode) -> OpResult:
        return cls(error=code)

    def unwrap(self) -> Any:
        """Return the value, raising :class:`OracleError` on failure.

        :raises OracleError: If the result carries an error code.
        """
        if self.error is not None:
            raise OracleError(self.error)
        return self.value
