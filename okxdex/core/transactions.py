"""Decode, stamp and sign Solana transactions returned by the swap endpoint.

The swap API hands back a base58 blob in one of two wire formats:

* **versioned**: a ``VersionedTransaction`` carrying a v0 message; the
  blockhash lives inside the embedded message and signatures are a list of
  slots, one per required signer.
* **legacy**: a flat ``Transaction``; it supports partial signing, which
  leaves signatures already present (e.g. from the counter-party) intact.

Decoding is an explicit two-armed result: :class:`VersionedPayload` or
:class:`LegacyPayload`. A blob that is neither raises :class:`DecodeError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

import base58
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message, MessageV0, to_bytes_versioned
from solders.signature import Signature
from solders.transaction import Transaction, VersionedTransaction

from okxdex.core.errors import DecodeError, SigningError

VERSIONED = "versioned"
LEGACY = "legacy"


@dataclass(frozen=True)
class VersionedPayload:
    tx: VersionedTransaction
    kind: str = VERSIONED


@dataclass(frozen=True)
class LegacyPayload:
    tx: Transaction
    kind: str = LEGACY


DecodedTransaction = Union[VersionedPayload, LegacyPayload]


def decode_blob(encoded: str) -> bytes:
    """Turn the base58 string from the API into raw bytes."""
    try:
        raw = base58.b58decode(encoded.strip())
    except ValueError as exc:
        raise DecodeError(f"Transaction payload is not valid base58: {exc}") from exc
    if not raw:
        raise DecodeError("Transaction payload is empty")
    return raw


def _as_versioned(raw: bytes) -> Optional[VersionedTransaction]:
    try:
        tx = VersionedTransaction.from_bytes(raw)
    except Exception:  # solders raises its own error types for malformed bytes
        return None
    # A legacy blob also parses here (as a legacy message); leave it to the legacy arm.
    if not isinstance(tx.message, MessageV0):
        return None
    return tx


def _as_legacy(raw: bytes) -> Optional[Transaction]:
    try:
        return Transaction.from_bytes(raw)
    except Exception:  # solders raises its own error types for malformed bytes
        return None


def decode_transaction(raw: bytes) -> DecodedTransaction:
    """Interpret ``raw`` as a versioned transaction, falling back to legacy."""
    versioned = _as_versioned(raw)
    if versioned is not None:
        return VersionedPayload(versioned)
    legacy = _as_legacy(raw)
    if legacy is not None:
        return LegacyPayload(legacy)
    raise DecodeError(f"Transaction payload ({len(raw)} bytes) is neither a versioned nor a legacy transaction")


def stamp(decoded: DecodedTransaction, blockhash: Hash) -> DecodedTransaction:
    """Return a copy of ``decoded`` whose recent blockhash is ``blockhash``.

    Existing signature slots are carried over unchanged.
    """
    if isinstance(decoded, VersionedPayload):
        message = decoded.tx.message
        stamped_message = MessageV0(
            message.header,
            message.account_keys,
            blockhash,
            message.instructions,
            message.address_table_lookups,
        )
        return VersionedPayload(VersionedTransaction.populate(stamped_message, decoded.tx.signatures))

    message = decoded.tx.message
    header = message.header
    stamped_message = Message.new_with_compiled_instructions(
        header.num_required_signatures,
        header.num_readonly_signed_accounts,
        header.num_readonly_unsigned_accounts,
        message.account_keys,
        blockhash,
        message.instructions,
    )
    return LegacyPayload(Transaction.populate(stamped_message, decoded.tx.signatures))


def load_keypair(credential: str) -> Keypair:
    """Derive the fee-payer keypair from a base58-encoded secret key."""
    try:
        return Keypair.from_bytes(base58.b58decode(credential.strip()))
    except Exception:  # base58 and solders both raise ValueError subclasses
        raise SigningError("Fee payer private key is not a valid base58 secret key") from None


def _signer_index(message, keypair: Keypair) -> int:
    signers = list(message.account_keys[: message.header.num_required_signatures])
    try:
        return signers.index(keypair.pubkey())
    except ValueError:
        raise SigningError(f"{keypair.pubkey()} is not a required signer of this transaction") from None


def _signature_slots(tx, message) -> List[Signature]:
    signatures: List[Signature] = list(tx.signatures)
    required = message.header.num_required_signatures
    if len(signatures) < required:
        signatures.extend([Signature.default()] * (required - len(signatures)))
    return signatures


def sign(decoded: DecodedTransaction, keypair: Keypair) -> DecodedTransaction:
    """Add the fee payer's signature without disturbing other signatures."""
    if isinstance(decoded, VersionedPayload):
        message = decoded.tx.message
        index = _signer_index(message, keypair)
        signatures = _signature_slots(decoded.tx, message)
        signatures[index] = keypair.sign_message(to_bytes_versioned(message))
        return VersionedPayload(VersionedTransaction.populate(message, signatures))

    tx = decoded.tx
    _signer_index(tx.message, keypair)
    signed = Transaction.populate(tx.message, _signature_slots(tx, tx.message))
    signed.partial_sign([keypair], tx.message.recent_blockhash)
    return LegacyPayload(signed)


def serialize(decoded: DecodedTransaction) -> bytes:
    return bytes(decoded.tx)


__all__ = [
    "DecodedTransaction",
    "LEGACY",
    "LegacyPayload",
    "VERSIONED",
    "VersionedPayload",
    "decode_blob",
    "decode_transaction",
    "load_keypair",
    "serialize",
    "sign",
    "stamp",
]
