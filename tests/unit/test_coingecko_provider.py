from decimal import Decimal

import httpx
import pytest

from app.providers import coingecko
from app.providers.coingecko import CoingeckoProvider, unique_ids


class _DummyResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://api.example/simple/price")
            raise httpx.HTTPStatusError(
                "error",
                request=request,
                response=httpx.Response(self.status_code, request=request),
            )
        return None

    def json(self):
        return self._payload


class _DummyClient:
    calls = []
    payload = {}
    status_code = 200
    exc = None

    def __init__(self, *_, **__):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, headers=None, params=None, timeout=None):
        _DummyClient.calls.append({"url": url, "headers": headers, "params": params})
        if _DummyClient.exc is not None:
            raise _DummyClient.exc
        return _DummyResponse(_DummyClient.payload, _DummyClient.status_code)


@pytest.fixture
def dummy_client(monkeypatch):
    _DummyClient.calls = []
    _DummyClient.payload = {}
    _DummyClient.status_code = 200
    _DummyClient.exc = None
    monkeypatch.setattr(coingecko.httpx, "AsyncClient", _DummyClient)
    return _DummyClient


def test_unique_ids_deduplicates_and_drops_blanks():
    assert unique_ids(["tether", "usd-coin", "tether", "", "  ", "Ethereum"]) == ["ethereum", "tether", "usd-coin"]


@pytest.mark.asyncio
async def test_fetch_prices_single_batched_request(dummy_client):
    dummy_client.payload = {
        "ethereum": {"usd": 2000},
        "usd-coin": {"usd": 1.0001},
    }
    provider = CoingeckoProvider(base_url="https://api.example/", api_key="demo")

    prices = await provider.fetch_prices(["usd-coin", "ethereum", "usd-coin", "tether"])

    assert prices == {"ethereum": Decimal("2000"), "usd-coin": Decimal("1.0001")}
    assert len(dummy_client.calls) == 1
    call = dummy_client.calls[0]
    assert call["url"] == "https://api.example/simple/price"
    assert call["params"] == {"ids": "ethereum,tether,usd-coin", "vs_currencies": "usd"}
    assert call["headers"] == {"X-CG-Demo-API-Key": "demo"}


@pytest.mark.asyncio
async def test_fetch_prices_empty_input_skips_request(dummy_client):
    assert await CoingeckoProvider().fetch_prices([]) == {}
    assert dummy_client.calls == []


@pytest.mark.asyncio
async def test_disabled_provider_returns_empty(dummy_client):
    provider = CoingeckoProvider(enabled=False)

    assert await provider.fetch_prices(["ethereum"]) == {}
    assert dummy_client.calls == []
    assert (await provider.health_check())["status"] == "unavailable"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [httpx.ConnectError("unreachable"), httpx.ReadTimeout("slow")],
)
async def test_transport_failure_returns_empty_mapping(dummy_client, exc):
    dummy_client.exc = exc

    assert await CoingeckoProvider().fetch_prices(["ethereum"]) == {}


@pytest.mark.asyncio
async def test_rate_limited_returns_empty_mapping(dummy_client):
    dummy_client.status_code = 429

    assert await CoingeckoProvider().fetch_prices(["ethereum"]) == {}


@pytest.mark.asyncio
async def test_malformed_entries_are_skipped(dummy_client):
    dummy_client.payload = {
        "ethereum": {"usd": 2000},
        "tether": {},
        "chainlink": {"usd": "n/a"},
        "uniswap": "oops",
        "binancecoin": {"usd": -1},
    }

    prices = await CoingeckoProvider().fetch_prices(
        ["ethereum", "tether", "chainlink", "uniswap", "binancecoin"]
    )

    assert prices == {"ethereum": Decimal("2000")}


@pytest.mark.asyncio
async def test_non_dict_payload_returns_empty_mapping(dummy_client):
    dummy_client.payload = ["unexpected"]

    assert await CoingeckoProvider().fetch_prices(["ethereum"]) == {}
