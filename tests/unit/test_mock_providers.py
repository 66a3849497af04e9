import random
import re
from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.core.portfolio import TransactionDirection
from app.providers.mock import MockTokenProvider, MockTransactionProvider
from app.services.chains import KNOWN_CHAINS

ADDRESS = "0x000000000000000000000000000000000000dEaD"


def _prices(mapping):
    provider = AsyncMock()
    provider.fetch_prices = AsyncMock(return_value=mapping)
    return provider


@pytest.mark.asyncio
async def test_token_holdings_follow_common_token_order():
    prices = _prices({"matic-network": Decimal("1"), "usd-coin": Decimal("1"), "tether": Decimal("1")})
    provider = MockTokenProvider(prices, balance_max=10.0, rng=random.Random(7))

    holdings = await provider.fetch_token_holdings(ADDRESS, KNOWN_CHAINS["polygon"])

    assert [h.name for h in holdings] == ["matic-network", "usd-coin", "tether"]
    prices.fetch_prices.assert_awaited_once_with(["matic-network", "usd-coin", "tether"])


@pytest.mark.asyncio
async def test_token_value_uses_the_same_balance_as_reported():
    prices = _prices({"ethereum": Decimal("2000"), "usd-coin": Decimal("1")})
    provider = MockTokenProvider(prices, balance_max=10.0, rng=random.Random(1))

    holdings = await provider.fetch_token_holdings(ADDRESS, KNOWN_CHAINS["ethereum"])

    for holding in holdings:
        assert Decimal("0") <= holding.balance < Decimal("10")
        assert holding.value == holding.balance * holding.unit_price


@pytest.mark.asyncio
async def test_missing_price_means_zero_value():
    provider = MockTokenProvider(_prices({}), rng=random.Random(3))

    holdings = await provider.fetch_token_holdings(ADDRESS, KNOWN_CHAINS["bsc"])

    assert len(holdings) == 3
    assert all(h.unit_price == 0 and h.value == 0 for h in holdings)


@pytest.mark.asyncio
async def test_unrecognized_chain_falls_back_to_default_token():
    chain = replace(KNOWN_CHAINS["arbitrum"], common_tokens=())
    prices = _prices({"ethereum": Decimal("2000")})

    holdings = await MockTokenProvider(prices).fetch_token_holdings(ADDRESS, chain)

    assert [h.name for h in holdings] == ["ethereum"]


@pytest.mark.asyncio
async def test_transactions_shape():
    now = 1_700_000_000.0
    provider = MockTransactionProvider(count=1, rng=random.Random(42), clock=lambda: now)

    records = await provider.fetch_transactions(ADDRESS)

    assert len(records) == 1
    tx = records[0]
    assert re.fullmatch(r"0x[0-9a-f]{64}", tx.hash)
    assert re.fullmatch(r"0x[0-9a-f]{40}", tx.recipient)
    assert tx.sender == ADDRESS
    assert re.fullmatch(r"0\.\d{4}", tx.value)
    assert now * 1000 - 30 * 86_400_000 <= tx.timestamp <= now * 1000
    assert tx.direction in (TransactionDirection.SENT, TransactionDirection.RECEIVED)


@pytest.mark.asyncio
async def test_transactions_count_and_ordering():
    provider = MockTransactionProvider(count=5, rng=random.Random(9))

    records = await provider.fetch_transactions(ADDRESS)

    assert len(records) == 5
    timestamps = [r.timestamp for r in records]
    assert timestamps == sorted(timestamps, reverse=True)


@pytest.mark.asyncio
async def test_zero_transactions():
    assert await MockTransactionProvider(count=0).fetch_transactions(ADDRESS) == []
