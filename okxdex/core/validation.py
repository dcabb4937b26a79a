"""Validation helpers for quote and swap parameters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from solders.pubkey import Pubkey
from web3 import Web3

from okxdex.core.tokens import CHAIN_IDS, resolve_chain


@dataclass(frozen=True)
class QuoteParams:
    """Normalised parameters for a single-chain quote or swap."""

    chain: str
    chain_id: str
    amount: str
    from_token: str
    to_token: str
    slippage: str


def validate_amount(amount: str) -> str:
    """Ensure ``amount`` is a positive integer expressed in base units."""
    value = str(amount).strip()
    if not value.isdigit() or int(value) <= 0:
        raise ValueError(f"Amount must be a positive integer in base units, got {amount!r}")
    return str(int(value))


def validate_slippage(slippage: str) -> str:
    """Ensure ``slippage`` is a decimal fraction in (0, 1]."""
    try:
        value = Decimal(str(slippage).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Slippage must be a decimal fraction, got {slippage!r}") from exc
    if not value.is_finite() or value <= 0 or value > 1:
        raise ValueError("Slippage must be between 0 (exclusive) and 1 (inclusive)")
    return str(slippage).strip()


def validate_token_address(chain: str, address: str) -> str:
    """Normalise a token address for ``chain``.

    EVM addresses are returned checksummed and Solana addresses must be valid
    base58 public keys. Other chains are passed through untouched.
    """
    value = address.strip()
    if not value:
        raise ValueError("Token address cannot be empty")
    if chain == "evm":
        if not Web3.is_address(value):
            raise ValueError(f"Invalid EVM token address: {address}")
        return Web3.to_checksum_address(value)
    if chain == "solana":
        try:
            Pubkey.from_string(value)
        except Exception as exc:  # solders raises ValueError for malformed keys
            raise ValueError(f"Invalid Solana token address: {address}") from exc
    return value


def validate_quote_params(
    *,
    chain: str,
    amount: str,
    from_token: str,
    to_token: str,
    slippage: str,
) -> QuoteParams:
    """Validate and normalise swap parameters for ``chain``."""
    name = resolve_chain(chain)
    from_address = validate_token_address(name, from_token)
    to_address = validate_token_address(name, to_token)
    if from_address == to_address:
        raise ValueError("From and to tokens must differ")
    return QuoteParams(
        chain=name,
        chain_id=CHAIN_IDS[name],
        amount=validate_amount(amount),
        from_token=from_address,
        to_token=to_address,
        slippage=validate_slippage(slippage),
    )


__all__ = [
    "QuoteParams",
    "validate_amount",
    "validate_quote_params",
    "validate_slippage",
    "validate_token_address",
]
