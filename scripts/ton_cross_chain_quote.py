#!/usr/bin/env python3
"""Print a TON -> Ethereum cross-chain quote (native TON to USDC)."""

from pathlib import Path
import sys

SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from okxdex.cli.main import main
from okxdex.core.tokens import EVM_USDC, TON_NATIVE


if __name__ == "__main__":
    main(
        [
            "cross-chain-quote",
            "--from-chain", "ton",
            "--to-chain", "evm",
            "--from-token", TON_NATIVE,
            "--to-token", EVM_USDC,
            "--amount", "10000000000",
            "--slippage", "0.025",
            *sys.argv[1:],
        ]
    )
