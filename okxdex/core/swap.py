"""Quote-then-submit swap flow on Solana."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from okxdex.core.api import OkxDexClient, SwapQuote
from okxdex.core.submitter import SubmissionResult, TransactionSubmitter
from okxdex.core.tokens import CHAIN_IDS, explorer_url
from okxdex.core.utils import get_logger

LOGGER = get_logger("okxdex.swap")


@dataclass(frozen=True)
class SwapOutcome:
    """The quote a swap was executed against and its submission result."""

    quote: SwapQuote
    result: SubmissionResult

    @property
    def tx_id(self) -> str:
        return self.result.tx_id

    @property
    def explorer_url(self) -> str:
        return explorer_url(self.result.tx_id)


def execute_swap(
    *,
    client: OkxDexClient,
    submitter: TransactionSubmitter,
    amount: str,
    from_token: str,
    to_token: str,
    user_address: str,
    credential: str,
    slippage: Optional[str] = None,
) -> SwapOutcome:
    """Fetch a Solana swap quote and submit its embedded transaction.

    API errors propagate before anything is sent to the network.
    """
    LOGGER.info("Starting swap: %s %s -> %s", amount, from_token, to_token)

    quote = client.get_swap(
        chain_id=CHAIN_IDS["solana"],
        from_token=from_token,
        to_token=to_token,
        amount=amount,
        user_wallet_address=user_address,
        slippage=slippage,
    )
    LOGGER.info("Got quote: %s output tokens", quote.to_token_amount)

    result = submitter.submit(quote.tx_data, credential)
    LOGGER.info("Swap successful! Transaction: %s", explorer_url(result.tx_id))
    return SwapOutcome(quote=quote, result=result)


__all__ = ["SwapOutcome", "execute_swap"]
