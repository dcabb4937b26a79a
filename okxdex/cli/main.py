"""CLI entrypoint for OKX DEX quotes and Solana swaps."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, List, Optional

import okxdex
from okxdex.config import DexConfig, load_config
from okxdex.core.api import OkxDexClient
from okxdex.core.bridge import CrossChainRequest, build_cross_chain_quote, list_bridge_tokens, list_bridges
from okxdex.core.network import SolanaNetworkClient
from okxdex.core.submitter import RetryPolicy, TransactionSubmitter
from okxdex.core.swap import execute_swap
from okxdex.core.tokens import CHAIN_IDS, NATIVE_SOL, WRAPPED_SOL, default_pair
from okxdex.core.utils import get_logger, pretty_json
from okxdex.core.validation import validate_quote_params

LOGGER = get_logger("okxdex.cli")

DEFAULT_SWAP_AMOUNT = "10000000"  # 0.01 SOL


class DexCli:
    """Run CLI commands against a loaded configuration."""

    def __init__(
        self,
        config: DexConfig,
        *,
        client: Optional[OkxDexClient] = None,
        submitter_factory: Optional[Callable[[DexConfig], TransactionSubmitter]] = None,
    ) -> None:
        self.config = config
        self.client = client or OkxDexClient(config=config)
        self._submitter_factory = submitter_factory or _default_submitter

    def quote(self, args: argparse.Namespace) -> Any:
        pair = default_pair(args.chain)
        params = validate_quote_params(
            chain=args.chain,
            amount=args.amount or pair.amount,
            from_token=args.from_token or pair.from_token,
            to_token=args.to_token or pair.to_token,
            slippage=args.slippage or self.config.defaults.quote_slippage,
        )
        print(f"Getting {params.chain.upper()} quote...")
        return self.client.get_quote(
            chain_id=params.chain_id,
            from_token=params.from_token,
            to_token=params.to_token,
            amount=params.amount,
            slippage=params.slippage,
        )

    def cross_chain_quote(self, args: argparse.Namespace) -> Any:
        request = CrossChainRequest(
            from_chain=args.from_chain,
            to_chain=args.to_chain,
            from_token=args.from_token,
            to_token=args.to_token,
            amount=args.amount,
            slippage=args.slippage,
            sort=args.sort,
        )
        print(f"Getting {args.from_chain} -> {args.to_chain} cross-chain quote...")
        return build_cross_chain_quote(self.client, request).routes

    def bridges(self, args: argparse.Namespace) -> Any:
        return list_bridges(self.client, args.from_chain, args.to_chain)

    def bridge_tokens(self, args: argparse.Namespace) -> Any:
        return list_bridge_tokens(self.client, args.from_chain, args.to_chain)

    def swap(self, args: argparse.Namespace) -> Any:
        solana = self.config.ensure_solana()
        params = validate_quote_params(
            chain="solana",
            amount=args.amount or DEFAULT_SWAP_AMOUNT,
            from_token=args.from_token or NATIVE_SOL,
            to_token=args.to_token or WRAPPED_SOL,
            slippage=args.slippage or self.config.defaults.swap_slippage,
        )
        outcome = execute_swap(
            client=self.client,
            submitter=self._submitter_factory(self.config),
            amount=params.amount,
            from_token=params.from_token,
            to_token=params.to_token,
            user_address=solana.user_address,
            credential=solana.private_key,
            slippage=params.slippage,
        )
        return {
            "txId": outcome.tx_id,
            "confirmed": outcome.result.confirmed,
            "confirmationStatus": outcome.result.confirmation_status,
            "attempts": outcome.result.attempts,
            "explorer": outcome.explorer_url,
        }


def _default_submitter(config: DexConfig) -> TransactionSubmitter:
    solana = config.ensure_solana()
    return TransactionSubmitter(
        SolanaNetworkClient.from_config(solana),
        policy=RetryPolicy.from_config(solana),
    )


def _add_chain_pair(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--from-chain", required=True, help="Source chain name or id")
    parser.add_argument("--to-chain", required=True, help="Destination chain name or id")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="okx-dex", description="CLI tool for interacting with OKX DEX API")
    parser.add_argument("--version", action="version", version=f"%(prog)s {okxdex.__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    quote = commands.add_parser("quote", help="Get quote for token swap")
    quote.add_argument("chain", choices=sorted(CHAIN_IDS), help="Chain to operate on")
    quote.add_argument("-a", "--amount", help="Amount to swap, in base units")
    quote.add_argument("-f", "--from", dest="from_token", help="From token address (uses chain default if omitted)")
    quote.add_argument("-t", "--to", dest="to_token", help="To token address (uses chain default if omitted)")
    quote.add_argument("--slippage", help="Slippage as a decimal fraction, e.g. 0.1")

    cross = commands.add_parser("cross-chain-quote", help="Get quote for a cross-chain swap")
    _add_chain_pair(cross)
    cross.add_argument("--from-token", required=True, help="Source token address")
    cross.add_argument("--to-token", required=True, help="Destination token address")
    cross.add_argument("-a", "--amount", required=True, help="Amount in base units")
    cross.add_argument("--slippage", help="Slippage as a decimal fraction, e.g. 0.025")
    cross.add_argument("--sort", default="1", help="Route sort order (1 = optimal)")

    bridges = commands.add_parser("bridges", help="List bridges between two chains")
    _add_chain_pair(bridges)

    tokens = commands.add_parser("bridge-tokens", help="List bridgeable tokens between two chains")
    _add_chain_pair(tokens)

    swap = commands.add_parser("swap", help="Execute a swap on Solana")
    swap.add_argument("-a", "--amount", help="Amount to swap, in lamports / base units")
    swap.add_argument("-f", "--from", dest="from_token", help="From token address (default native SOL)")
    swap.add_argument("-t", "--to", dest="to_token", help="To token address (default wrapped SOL)")
    swap.add_argument("--slippage", help="Slippage as a decimal fraction, e.g. 0.05")

    return parser.parse_args(argv)


HANDLERS = {
    "quote": DexCli.quote,
    "cross-chain-quote": DexCli.cross_chain_quote,
    "bridges": DexCli.bridges,
    "bridge-tokens": DexCli.bridge_tokens,
    "swap": DexCli.swap,
}


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    try:
        config = load_config(require_solana=args.command == "swap")
        cli = DexCli(config)
        result = HANDLERS[args.command](cli, args)
    except Exception as exc:
        LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"\n❌ Error: {exc}")
        sys.exit(1)

    print(pretty_json(result))


if __name__ == "__main__":  # pragma: no cover - CLI entry
    main()
