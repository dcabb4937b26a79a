"""Cross-chain quote construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from okxdex.core.api import OkxDexClient
from okxdex.core.tokens import chain_id_for
from okxdex.core.utils import get_logger
from okxdex.core.validation import validate_amount, validate_slippage

LOGGER = get_logger("okxdex.bridge")

# Optimal route considering all factors.
DEFAULT_SORT = "1"


@dataclass(frozen=True)
class CrossChainRequest:
    """Parameters for a cross-chain quote; chains may be names or numeric ids."""

    from_chain: str
    to_chain: str
    from_token: str
    to_token: str
    amount: str
    slippage: Optional[str] = None
    sort: str = DEFAULT_SORT


@dataclass(frozen=True)
class CrossChainQuote:
    """Cross-chain quote returned by the API."""

    from_chain_id: str
    to_chain_id: str
    amount: str
    routes: List[Dict[str, Any]]

    @property
    def best_route(self) -> Optional[Dict[str, Any]]:
        return self.routes[0] if self.routes else None


def build_cross_chain_quote(client: OkxDexClient, request: CrossChainRequest) -> CrossChainQuote:
    """Validate ``request`` and fetch a cross-chain quote for it."""
    from_chain_id = chain_id_for(request.from_chain)
    to_chain_id = chain_id_for(request.to_chain)
    amount = validate_amount(request.amount)
    slippage = validate_slippage(request.slippage or client.config.defaults.cross_chain_slippage)

    data = client.get_cross_chain_quote(
        from_chain_id=from_chain_id,
        to_chain_id=to_chain_id,
        from_token=request.from_token,
        to_token=request.to_token,
        amount=amount,
        slippage=slippage,
        sort=request.sort,
    )

    routes: List[Dict[str, Any]] = []
    for entry in data:
        routes.extend(entry.get("routerList") or [entry])

    LOGGER.info(
        "Prepared cross-chain quote %s -> %s amount=%s routes=%s",
        from_chain_id,
        to_chain_id,
        amount,
        len(routes),
    )
    return CrossChainQuote(
        from_chain_id=from_chain_id,
        to_chain_id=to_chain_id,
        amount=amount,
        routes=routes,
    )


def list_bridges(client: OkxDexClient, from_chain: str, to_chain: str) -> List[Any]:
    return client.get_bridges(from_chain_id=chain_id_for(from_chain), to_chain_id=chain_id_for(to_chain))


def list_bridge_tokens(client: OkxDexClient, from_chain: str, to_chain: str) -> List[Any]:
    return client.get_bridge_tokens(from_chain_id=chain_id_for(from_chain), to_chain_id=chain_id_for(to_chain))


__all__ = [
    "CrossChainQuote",
    "CrossChainRequest",
    "build_cross_chain_quote",
    "list_bridge_tokens",
    "list_bridges",
]
