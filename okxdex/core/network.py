"""Solana RPC access used by the transaction submitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import RPCException, TransactionExpiredBlockheightExceededError, UnconfirmedTxError
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.signature import Signature

from okxdex.config import SolanaConfig
from okxdex.core.errors import NetworkError
from okxdex.core.utils import get_logger

LOGGER = get_logger("okxdex.network")

RPC_ERRORS = (
    SolanaRpcException,
    RPCException,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
)


@dataclass(frozen=True)
class NetworkAnchor:
    """A recent blockhash and the last block height at which it is still valid."""

    blockhash: Hash
    last_valid_block_height: int


@dataclass(frozen=True)
class Confirmation:
    """Outcome of polling the network for a submitted transaction."""

    tx_id: str
    err: Optional[Any] = None
    confirmation_status: Optional[str] = None
    raw: Any = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.err is None


class NetworkClient(Protocol):
    """What the submitter needs from the network."""

    def latest_anchor(self) -> NetworkAnchor:
        ...

    def broadcast(self, raw_transaction: bytes) -> str:
        ...

    def confirm(self, tx_id: str, anchor: NetworkAnchor) -> Confirmation:
        ...


def _status_name(status: Any) -> Optional[str]:
    if status is None:
        return None
    return str(status).rsplit(".", 1)[-1].lower()


class SolanaNetworkClient:
    """``NetworkClient`` backed by a synchronous solana-py ``Client``.

    Every RPC or transport failure is re-raised as :class:`NetworkError` so the
    submitter can treat it as retryable.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        commitment: Commitment = Confirmed,
        skip_preflight: bool = False,
        send_max_retries: int = 5,
        confirm_sleep_seconds: float = 0.5,
        timeout: float = 10.0,
        client: Optional[Client] = None,
    ) -> None:
        self.commitment = commitment
        self.skip_preflight = skip_preflight
        self.send_max_retries = send_max_retries
        self.confirm_sleep_seconds = confirm_sleep_seconds
        self._client = client or Client(rpc_url, commitment=commitment, timeout=timeout)

    @classmethod
    def from_config(cls, config: SolanaConfig) -> "SolanaNetworkClient":
        return cls(
            config.rpc_url,
            send_max_retries=config.send_max_retries,
            confirm_sleep_seconds=config.confirm_sleep_seconds,
            timeout=config.rpc_timeout,
        )

    def latest_anchor(self) -> NetworkAnchor:
        try:
            resp = self._client.get_latest_blockhash(commitment=self.commitment)
        except RPC_ERRORS as exc:
            raise NetworkError(f"Failed to fetch latest blockhash: {exc}") from exc
        return NetworkAnchor(
            blockhash=resp.value.blockhash,
            last_valid_block_height=resp.value.last_valid_block_height,
        )

    def broadcast(self, raw_transaction: bytes) -> str:
        opts = TxOpts(
            skip_preflight=self.skip_preflight,
            preflight_commitment=self.commitment,
            max_retries=self.send_max_retries,
        )
        try:
            resp = self._client.send_raw_transaction(raw_transaction, opts=opts)
        except RPC_ERRORS as exc:
            raise NetworkError(f"Failed to send transaction: {exc}") from exc
        tx_id = str(resp.value)
        LOGGER.info("Broadcast transaction %s", tx_id)
        return tx_id

    def confirm(self, tx_id: str, anchor: NetworkAnchor) -> Confirmation:
        try:
            resp = self._client.confirm_transaction(
                Signature.from_string(tx_id),
                commitment=self.commitment,
                sleep_seconds=self.confirm_sleep_seconds,
                last_valid_block_height=anchor.last_valid_block_height,
            )
        except RPC_ERRORS as exc:
            raise NetworkError(f"Failed to confirm transaction {tx_id}: {exc}") from exc

        status = resp.value[0] if resp.value else None
        if status is None:
            raise NetworkError(f"No signature status returned for transaction {tx_id}")
        return Confirmation(
            tx_id=tx_id,
            err=status.err,
            confirmation_status=_status_name(status.confirmation_status),
            raw=resp,
        )


__all__ = ["Confirmation", "NetworkAnchor", "NetworkClient", "SolanaNetworkClient"]
