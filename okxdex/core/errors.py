"""Exception types raised by the quote client and the transaction submitter."""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Raised when the DEX API answers with a non-success code or no data."""

    def __init__(self, message: str, *, code: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class NetworkError(ConnectionError):
    """Raised for transient transport failures (timeouts, refused connections, RPC errors)."""


class SubmissionError(RuntimeError):
    """Base class for failures surfaced by the transaction submitter."""


class DecodeError(SubmissionError):
    """Raised when a transaction blob matches neither supported wire format."""


class SigningError(SubmissionError):
    """Raised when the fee-payer credential cannot sign the transaction."""


class OnChainExecutionError(SubmissionError):
    """Raised when a transaction landed but the network reports an execution error."""

    def __init__(self, tx_id: str, err: Any) -> None:
        super().__init__(f"Transaction {tx_id} failed: {err}")
        self.tx_id = tx_id
        self.err = err


class MaxRetriesExceeded(SubmissionError):
    """Raised once every attempt allowed by the retry policy has failed."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"Transaction submission failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


__all__ = [
    "ApiError",
    "DecodeError",
    "MaxRetriesExceeded",
    "NetworkError",
    "OnChainExecutionError",
    "SigningError",
    "SubmissionError",
]
