"""Shared fixtures: configuration, real solders transactions and fake collaborators."""

from typing import Any, Callable, Dict, List, Optional

import base58
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message, MessageV0
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction, VersionedTransaction

from okxdex.config import ApiCredentials, DefaultsConfig, DexConfig, SolanaConfig
from okxdex.core.errors import NetworkError
from okxdex.core.network import Confirmation, NetworkAnchor

FIXED_TIMESTAMP = "2024-05-01T12:00:00.000Z"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(
        api_key="test-api-key",
        secret_key="test-secret",
        passphrase="test-passphrase",
        project_id="test-project",
    )


@pytest.fixture
def fee_payer() -> Keypair:
    return Keypair()


@pytest.fixture
def credential(fee_payer: Keypair) -> str:
    return base58.b58encode(bytes(fee_payer)).decode()


@pytest.fixture
def dex_config(credentials: ApiCredentials, credential: str) -> DexConfig:
    return DexConfig(
        credentials=credentials,
        defaults=DefaultsConfig(),
        solana=SolanaConfig(
            rpc_url="http://localhost:8899",
            user_address="UserWa11et1111111111111111111111111111111111",
            private_key=credential,
        ),
    )


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def _transfer(source: Keypair) -> Any:
    return transfer(TransferParams(from_pubkey=source.pubkey(), to_pubkey=Keypair().pubkey(), lamports=1_000))


@pytest.fixture
def make_legacy_tx() -> Callable[..., Transaction]:
    """Build a legacy transaction paid by ``payer``, optionally pre-signed by ``counterparty``."""

    def _make(payer: Keypair, counterparty: Optional[Keypair] = None, blockhash: Optional[Hash] = None) -> Transaction:
        recent = blockhash or Hash.new_unique()
        message = Message.new_with_blockhash([_transfer(counterparty or payer)], payer.pubkey(), recent)
        tx = Transaction.new_unsigned(message)
        if counterparty is not None:
            tx.partial_sign([counterparty], recent)
        return tx

    return _make


@pytest.fixture
def make_versioned_tx() -> Callable[..., VersionedTransaction]:
    """Build an unsigned v0 transaction paid by ``payer``."""

    def _make(payer: Keypair, counterparty: Optional[Keypair] = None, blockhash: Optional[Hash] = None) -> VersionedTransaction:
        message = MessageV0.try_compile(
            payer.pubkey(),
            [_transfer(counterparty or payer)],
            [],
            blockhash or Hash.new_unique(),
        )
        signatures = [Signature.default()] * message.header.num_required_signatures
        return VersionedTransaction.populate(message, signatures)

    return _make


@pytest.fixture
def encode() -> Callable[[Any], str]:
    return lambda tx: base58.b58encode(bytes(tx)).decode()


# ---------------------------------------------------------------------------
# Fake network client
# ---------------------------------------------------------------------------


class FakeNetwork:
    """Scriptable NetworkClient; records every call."""

    def __init__(
        self,
        *,
        anchor_failures: int = 0,
        broadcast_failures: int = 0,
        always_fail: bool = False,
        execution_error: Optional[Any] = None,
    ) -> None:
        self.anchor_failures = anchor_failures
        self.broadcast_failures = broadcast_failures
        self.always_fail = always_fail
        self.execution_error = execution_error
        self.anchor_calls = 0
        self.anchors: List[NetworkAnchor] = []
        self.broadcasts: List[bytes] = []
        self.confirms: List[Dict[str, Any]] = []

    def latest_anchor(self) -> NetworkAnchor:
        self.anchor_calls += 1
        if self.always_fail or self.anchor_calls <= self.anchor_failures:
            raise NetworkError("rpc unavailable")
        anchor = NetworkAnchor(blockhash=Hash.new_unique(), last_valid_block_height=1_000 + self.anchor_calls)
        self.anchors.append(anchor)
        return anchor

    def broadcast(self, raw_transaction: bytes) -> str:
        self.broadcasts.append(raw_transaction)
        if len(self.broadcasts) <= self.broadcast_failures:
            raise NetworkError("send timed out")
        return str(VersionedTransaction.from_bytes(raw_transaction).signatures[0])

    def confirm(self, tx_id: str, anchor: NetworkAnchor) -> Confirmation:
        self.confirms.append({"tx_id": tx_id, "anchor": anchor})
        return Confirmation(
            tx_id=tx_id,
            err=self.execution_error,
            confirmation_status="confirmed",
            raw={"signature": tx_id},
        )


@pytest.fixture
def fake_network() -> Callable[..., FakeNetwork]:
    return FakeNetwork


# ---------------------------------------------------------------------------
# Fake HTTP session
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200, reason: str = "OK") -> None:
        self._payload = payload
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; returns canned responses in order."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, headers: Dict[str, str], timeout: int) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "headers": headers, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, FakeResponse):
            return response
        return FakeResponse(response)


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def fake_response() -> Callable[..., FakeResponse]:
    return FakeResponse
