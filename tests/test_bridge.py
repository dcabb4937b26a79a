"""Tests for cross-chain quote construction and bridge listings."""

from urllib.parse import parse_qs, urlsplit

import pytest

from okxdex.core.api import OkxDexClient
from okxdex.core.bridge import CrossChainRequest, build_cross_chain_quote, list_bridges
from okxdex.core.tokens import EVM_USDC, TON_NATIVE


def _client(dex_config, session) -> OkxDexClient:
    return OkxDexClient(config=dex_config, session=session, clock=lambda: "2024-05-01T12:00:00.000Z")


def _query(session) -> dict:
    return {key: values[0] for key, values in parse_qs(urlsplit(session.calls[0]["url"]).query).items()}


def test_cross_chain_quote_flattens_routes(dex_config, fake_session) -> None:
    routes = [{"router": {"bridgeName": "Orbiter"}}, {"router": {"bridgeName": "Symbiosis"}}]
    session = fake_session({"code": "0", "msg": "", "data": [{"routerList": routes}]})
    request = CrossChainRequest(
        from_chain="ton",
        to_chain="evm",
        from_token=TON_NATIVE,
        to_token=EVM_USDC,
        amount="10000000000",
    )

    quote = build_cross_chain_quote(_client(dex_config, session), request)

    assert quote.from_chain_id == "607"
    assert quote.to_chain_id == "1"
    assert quote.routes == routes
    assert quote.best_route == routes[0]
    assert _query(session)["slippage"] == "0.025"
    assert _query(session)["sort"] == "1"


def test_cross_chain_quote_without_router_list(dex_config, fake_session) -> None:
    entry = {"toTokenAmount": "1"}
    session = fake_session({"code": "0", "msg": "", "data": [entry]})
    request = CrossChainRequest("501", "1", "A", "B", "5", slippage="0.01", sort="0")

    quote = build_cross_chain_quote(_client(dex_config, session), request)

    assert quote.routes == [entry]
    assert _query(session)["slippage"] == "0.01"
    assert _query(session)["sort"] == "0"


@pytest.mark.parametrize("field,value", [("amount", "0"), ("slippage", "2")])
def test_cross_chain_quote_validates_before_request(field, value, dex_config, fake_session) -> None:
    session = fake_session()
    fields = dict(from_chain="ton", to_chain="evm", from_token="A", to_token="B", amount="1")
    fields[field] = value

    with pytest.raises(ValueError):
        build_cross_chain_quote(_client(dex_config, session), CrossChainRequest(**fields))

    assert session.calls == []


def test_list_bridges_resolves_chain_names(dex_config, fake_session) -> None:
    session = fake_session({"code": "0", "msg": "", "data": [{"bridgeName": "Orbiter"}]})

    assert list_bridges(_client(dex_config, session), "ton", "evm") == [{"bridgeName": "Orbiter"}]
    assert _query(session) == {"fromChainId": "607", "toChainId": "1"}
