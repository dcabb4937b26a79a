"""Retrying submission of pre-built Solana transactions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from okxdex.config import SolanaConfig
from okxdex.core import transactions
from okxdex.core.errors import MaxRetriesExceeded, NetworkError, OnChainExecutionError
from okxdex.core.network import NetworkClient
from okxdex.core.utils import get_logger

LOGGER = get_logger("okxdex.submitter")


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and linear backoff for :class:`TransactionSubmitter`."""

    max_retries: int = 8
    backoff_seconds: float = 2.0
    retry_on_chain_failure: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds cannot be negative")

    def delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return self.backoff_seconds * attempt

    @classmethod
    def from_config(cls, config: SolanaConfig) -> "RetryPolicy":
        return cls(max_retries=config.max_retries, backoff_seconds=config.backoff_seconds)


@dataclass(frozen=True)
class SubmissionResult:
    """A confirmed transaction."""

    tx_id: str
    confirmed: bool
    confirmation_status: Optional[str]
    raw_confirmation: Any = field(repr=False)
    attempts: int = 1

    def __post_init__(self) -> None:
        if not self.tx_id:
            raise ValueError("SubmissionResult requires a transaction id")


class TransactionSubmitter:
    """Decode, stamp, sign, broadcast and confirm a transaction, retrying on failure.

    Each attempt fetches a fresh anchor and rebuilds the signed transaction from
    the original blob. Network failures and on-chain execution errors are
    retried until the policy's attempt budget is spent; malformed blobs and
    unusable credentials fail immediately.
    """

    def __init__(
        self,
        network: NetworkClient,
        *,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.network = network
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def submit(self, encoded_transaction: str, credential: str) -> SubmissionResult:
        raw = transactions.decode_blob(encoded_transaction)
        last_error: Optional[Exception] = None

        for attempt in range(1, self.policy.max_retries + 1):
            try:
                return self._attempt(raw, credential, attempt)
            except NetworkError as exc:
                last_error = exc
            except OnChainExecutionError as exc:
                if not self.policy.retry_on_chain_failure:
                    LOGGER.error("Attempt %s failed on-chain: %s", attempt, exc)
                    raise
                last_error = exc

            LOGGER.warning("Attempt %s/%s failed: %s", attempt, self.policy.max_retries, last_error)
            if attempt < self.policy.max_retries:
                self._sleep(self.policy.delay(attempt))

        LOGGER.error("Giving up after %s attempts", self.policy.max_retries)
        raise MaxRetriesExceeded(self.policy.max_retries, last_error) from last_error

    def _attempt(self, raw: bytes, credential: str, attempt: int) -> SubmissionResult:
        anchor = self.network.latest_anchor()

        decoded = transactions.decode_transaction(raw)
        stamped = transactions.stamp(decoded, anchor.blockhash)
        signed = transactions.sign(stamped, transactions.load_keypair(credential))

        tx_id = self.network.broadcast(transactions.serialize(signed))
        confirmation = self.network.confirm(tx_id, anchor)
        if confirmation.err is not None:
            raise OnChainExecutionError(tx_id, confirmation.err)

        LOGGER.info(
            "Transaction %s confirmed (status=%s format=%s attempt=%s)",
            tx_id,
            confirmation.confirmation_status,
            decoded.kind,
            attempt,
        )
        return SubmissionResult(
            tx_id=tx_id,
            confirmed=True,
            confirmation_status=confirmation.confirmation_status,
            raw_confirmation=confirmation.raw,
            attempts=attempt,
        )


__all__ = ["RetryPolicy", "SubmissionResult", "TransactionSubmitter"]
