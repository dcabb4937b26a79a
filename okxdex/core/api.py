"""Signed client for the OKX DEX aggregator and cross-chain endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlencode

import requests

from okxdex.config import DexConfig
from okxdex.core.errors import ApiError, NetworkError
from okxdex.core.signer import RequestSigner, iso_timestamp
from okxdex.core.tokens import chain_id_for, default_pair
from okxdex.core.utils import first_present, get_logger

LOGGER = get_logger("okxdex.api")


@dataclass(frozen=True)
class SwapQuote:
    """First entry of an ``/aggregator/swap`` response."""

    router_result: Dict[str, Any]
    tx: Dict[str, Any]
    raw: Mapping[str, Any] = field(repr=False)

    @property
    def tx_data(self) -> str:
        """The encoded transaction ready for submission."""
        return self.tx["data"]

    @property
    def to_token_amount(self) -> Optional[str]:
        return self.router_result.get("toTokenAmount")

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "SwapQuote":
        tx = entry.get("tx") or {}
        if not tx.get("data"):
            raise ApiError("Swap response missing transaction payload")
        return cls(router_result=dict(entry.get("routerResult") or {}), tx=dict(tx), raw=entry)


def build_query(params: Mapping[str, Any]) -> str:
    """Return the ``?``-prefixed, form-encoded query string, or ``""`` when empty.

    The returned string is both signed and sent, so it must not be re-encoded later.
    """
    filtered = {key: str(value) for key, value in params.items() if value is not None}
    return f"?{urlencode(filtered)}" if filtered else ""


def _error_message(payload: Mapping[str, Any]) -> str:
    return first_present(payload, "msg", "error_message", default="Unknown error")


def unwrap_response(payload: Mapping[str, Any]) -> List[Any]:
    """Return ``payload["data"]`` or raise :class:`ApiError` for failed envelopes."""
    code = str(payload.get("code"))
    if code != "0":
        raise ApiError(f"API Error: {_error_message(payload)}", code=code)
    data = payload.get("data")
    if not data:
        raise ApiError(f"API Error: {payload.get('msg') or 'empty data'}", code=code)
    return data if isinstance(data, list) else [data]


class OkxDexClient:
    """Issue signed GET requests against the DEX API."""

    def __init__(
        self,
        *,
        config: DexConfig,
        session: Optional[requests.Session] = None,
        clock: Callable[[], str] = iso_timestamp,
    ) -> None:
        self.config = config
        self.signer = RequestSigner(config.credentials)
        self.session = session or requests.Session()
        self._clock = clock

    def request(self, endpoint: str, params: Optional[Mapping[str, Any]] = None, method: str = "GET") -> List[Any]:
        """Sign and send a request, returning the ``data`` list of the envelope."""
        request_path = f"{self.config.api_version}{endpoint}"
        query = build_query(params or {})
        headers = self.signer.sign(self._clock(), method, request_path, query)
        url = f"{self.config.base_url}{request_path}{query}"

        LOGGER.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.config.defaults.api_timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to reach {self.config.base_url}{request_path}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(
                f"API call failed: {response.status_code} returned a non-JSON body",
                status=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise ApiError(f"API call failed: unexpected response body {payload!r}", status=response.status_code)
        if not response.ok:
            raise ApiError(
                f"API call failed: {response.status_code} {response.reason}: {_error_message(payload)}",
                code=payload.get("code"),
                status=response.status_code,
            )
        return unwrap_response(payload)

    def get_quote(
        self,
        *,
        chain_id: str,
        from_token: str,
        to_token: str,
        amount: str,
        slippage: Optional[str] = None,
    ) -> List[Any]:
        return self.request(
            "/aggregator/quote",
            {
                "chainId": chain_id,
                "fromTokenAddress": from_token,
                "toTokenAddress": to_token,
                "amount": amount,
                "slippage": slippage or self.config.defaults.quote_slippage,
            },
        )

    def get_chain_quote(
        self,
        chain: str,
        amount: Optional[str] = None,
        *,
        from_token: Optional[str] = None,
        to_token: Optional[str] = None,
        slippage: Optional[str] = None,
    ) -> List[Any]:
        """Quote ``chain`` using its default token pair unless overridden."""
        pair = default_pair(chain)
        return self.get_quote(
            chain_id=chain_id_for(chain),
            from_token=from_token or pair.from_token,
            to_token=to_token or pair.to_token,
            amount=amount or pair.amount,
            slippage=slippage,
        )

    def get_swap(
        self,
        *,
        chain_id: str,
        from_token: str,
        to_token: str,
        amount: str,
        user_wallet_address: str,
        slippage: Optional[str] = None,
    ) -> SwapQuote:
        """Fetch swap data, including the encoded transaction, for a wallet."""
        data = self.request(
            "/aggregator/swap",
            {
                "chainId": chain_id,
                "amount": amount,
                "fromTokenAddress": from_token,
                "toTokenAddress": to_token,
                "userWalletAddress": user_wallet_address,
                "slippage": slippage or self.config.defaults.swap_slippage,
            },
        )
        return SwapQuote.from_entry(data[0])

    def get_bridge_tokens(self, *, from_chain_id: str, to_chain_id: str) -> List[Any]:
        return self.request("/aggregator/bridge-tokens", {"fromChainId": from_chain_id, "toChainId": to_chain_id})

    def get_bridges(self, *, from_chain_id: str, to_chain_id: str) -> List[Any]:
        return self.request("/aggregator/bridges", {"fromChainId": from_chain_id, "toChainId": to_chain_id})

    def get_cross_chain_quote(
        self,
        *,
        from_chain_id: str,
        to_chain_id: str,
        from_token: str,
        to_token: str,
        amount: str,
        slippage: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Any]:
        return self.request(
            "/cross-chain/quote",
            {
                "fromChainId": from_chain_id,
                "toChainId": to_chain_id,
                "amount": amount,
                "fromTokenAddress": from_token,
                "toTokenAddress": to_token,
                "slippage": slippage or self.config.defaults.cross_chain_slippage,
                "sort": sort,
            },
        )


__all__ = ["OkxDexClient", "SwapQuote", "build_query", "unwrap_response"]
