"""Chain identifiers and default token pairs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

CHAIN_IDS: Dict[str, str] = {
    "evm": "1",
    "solana": "501",
    "sui": "784",
    "ton": "607",
    "tron": "195",
}

EVM_NATIVE = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
EVM_USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
EVM_USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"

NATIVE_SOL = "11111111111111111111111111111111"
WRAPPED_SOL = "So11111111111111111111111111111111111111112"
SOLANA_USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

TON_NATIVE = "EQAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAM9c"

SOLSCAN_TX_URL = "https://solscan.io/tx/{tx_id}"


@dataclass(frozen=True)
class TokenPair:
    """Default from/to tokens and amount (in base units) for a chain."""

    from_token: str
    to_token: str
    amount: str


DEFAULT_PAIRS: Dict[str, TokenPair] = {
    "evm": TokenPair(EVM_NATIVE, EVM_USDT, "1000000000000000000"),  # 1 ETH -> USDT
    "solana": TokenPair(WRAPPED_SOL, SOLANA_USDC, "10000000000"),
    "sui": TokenPair(
        "0x2::sui::SUI",
        "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC",
        "10000000000",
    ),
    "ton": TokenPair(TON_NATIVE, "EQCxE6mUtQJKFnGfaROTKOt1lZbDiiX1kCixRv7Nw2Id_sDs", "10000000000"),
    "tron": TokenPair("T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb", "TMwFHYXLJaRUPeW6421aqXL4ZEzPRFGkGT", "10000000000"),
}


def resolve_chain(chain: str) -> str:
    """Return the normalised chain name or raise for unsupported chains."""
    name = chain.strip().lower()
    if name not in CHAIN_IDS:
        raise ValueError(f"Unsupported chain {chain!r}. Use one of: {', '.join(CHAIN_IDS)}")
    return name


def chain_id_for(chain: str) -> str:
    """Map a chain name (or an already numeric id) to its API chain id."""
    if chain.strip().isdigit():
        return chain.strip()
    return CHAIN_IDS[resolve_chain(chain)]


def default_pair(chain: str) -> TokenPair:
    return DEFAULT_PAIRS[resolve_chain(chain)]


def explorer_url(tx_id: str) -> str:
    """Return the Solscan link for a Solana transaction id."""
    return SOLSCAN_TX_URL.format(tx_id=tx_id)


__all__ = [
    "CHAIN_IDS",
    "DEFAULT_PAIRS",
    "EVM_NATIVE",
    "EVM_USDC",
    "EVM_USDT",
    "NATIVE_SOL",
    "SOLANA_USDC",
    "TON_NATIVE",
    "TokenPair",
    "WRAPPED_SOL",
    "chain_id_for",
    "default_pair",
    "explorer_url",
    "resolve_chain",
]
