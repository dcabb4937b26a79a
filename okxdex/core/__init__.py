"""Core logic: request signing, quotes and transaction submission."""

from .api import OkxDexClient, SwapQuote
from .bridge import build_cross_chain_quote
from .signer import RequestSigner
from .submitter import RetryPolicy, SubmissionResult, TransactionSubmitter
from .swap import execute_swap

__all__ = [
    "OkxDexClient",
    "RequestSigner",
    "RetryPolicy",
    "SubmissionResult",
    "SwapQuote",
    "TransactionSubmitter",
    "build_cross_chain_quote",
    "execute_swap",
]
