"""Tests for quote parameter validation and chain lookups."""

import pytest

from okxdex.core.tokens import (
    EVM_NATIVE,
    EVM_USDT,
    NATIVE_SOL,
    WRAPPED_SOL,
    chain_id_for,
    default_pair,
    explorer_url,
    resolve_chain,
)
from okxdex.core.validation import (
    validate_amount,
    validate_quote_params,
    validate_slippage,
    validate_token_address,
)


@pytest.mark.parametrize("amount,expected", [("10", "10"), (" 007 ", "7"), (5, "5")])
def test_validate_amount(amount, expected) -> None:
    assert validate_amount(amount) == expected


@pytest.mark.parametrize("amount", ["0", "-1", "1.5", "", "abc"])
def test_validate_amount_rejects(amount) -> None:
    with pytest.raises(ValueError):
        validate_amount(amount)


@pytest.mark.parametrize("slippage", ["0.1", "1", "0.005"])
def test_validate_slippage(slippage) -> None:
    assert validate_slippage(slippage) == slippage


@pytest.mark.parametrize("slippage", ["0", "1.5", "-0.1", "NaN", "Infinity", "ten"])
def test_validate_slippage_rejects(slippage) -> None:
    with pytest.raises(ValueError):
        validate_slippage(slippage)


def test_evm_address_is_checksummed() -> None:
    assert validate_token_address("evm", EVM_USDT.lower()) == EVM_USDT


@pytest.mark.parametrize(
    "chain,address",
    [("evm", "0x1234"), ("solana", "not-a-pubkey"), ("ton", "   ")],
)
def test_invalid_token_address(chain, address) -> None:
    with pytest.raises(ValueError):
        validate_token_address(chain, address)


def test_other_chains_pass_through() -> None:
    assert validate_token_address("sui", " 0x2::sui::SUI ") == "0x2::sui::SUI"


def test_validate_quote_params() -> None:
    params = validate_quote_params(
        chain="EVM",
        amount="1000",
        from_token=EVM_NATIVE,
        to_token=EVM_USDT.lower(),
        slippage="0.1",
    )

    assert params.chain == "evm"
    assert params.chain_id == "1"
    assert params.to_token == EVM_USDT


def test_validate_quote_params_rejects_same_token() -> None:
    with pytest.raises(ValueError, match="must differ"):
        validate_quote_params(
            chain="solana",
            amount="1",
            from_token=WRAPPED_SOL,
            to_token=WRAPPED_SOL,
            slippage="0.05",
        )


def test_solana_native_and_wrapped_are_distinct() -> None:
    params = validate_quote_params(
        chain="solana",
        amount="10000000",
        from_token=NATIVE_SOL,
        to_token=WRAPPED_SOL,
        slippage="0.05",
    )

    assert params.chain_id == "501"


@pytest.mark.parametrize("chain,expected", [("solana", "501"), ("TON", "607"), ("784", "784"), (" 1 ", "1")])
def test_chain_id_for(chain, expected) -> None:
    assert chain_id_for(chain) == expected


def test_unknown_chain() -> None:
    with pytest.raises(ValueError, match="Unsupported chain"):
        resolve_chain("dogechain")


def test_default_pair_and_explorer() -> None:
    assert default_pair("solana").amount == "10000000000"
    assert explorer_url("abc") == "https://solscan.io/tx/abc"
