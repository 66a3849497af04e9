"""
Placeholder data providers.

These stand in for real token discovery and transaction history. Balances,
hashes and counterparties are random; prices come from the real price
provider. Swap in an indexer-backed TokenHoldingsProvider/TransactionProvider
to serve genuine data through the same interfaces.
"""

from __future__ import annotations

import random
import time
from decimal import Decimal
from typing import Callable, List, Optional

import structlog

from ..core.portfolio import TokenHolding, TransactionDirection, TransactionRecord, ZERO
from ..services.chains import DEFAULT_COMMON_TOKENS, ChainConfig
from .base import PriceProvider, TokenHoldingsProvider, TransactionProvider

logger = structlog.stdlib.get_logger(__name__)

_MS_PER_DAY = 86_400_000
TRANSACTION_WINDOW_DAYS = 30


def _random_hex(rng: random.Random, n_bytes: int) -> str:
    return "0x" + format(rng.getrandbits(n_bytes * 8), f"0{n_bytes * 2}x")


class MockTokenProvider(TokenHoldingsProvider):
    """Common tokens per chain with random balances and live prices"""

    name = "mock-tokens"

    def __init__(
        self,
        prices: PriceProvider,
        balance_max: float = 10.0,
        rng: Optional[random.Random] = None,
    ):
        self.prices = prices
        self.balance_max = balance_max
        self.rng = rng or random.Random()

    async def ready(self) -> bool:
        return True

    async def fetch_token_holdings(self, address: str, chain: ChainConfig) -> List[TokenHolding]:
        token_ids = list(chain.common_tokens or DEFAULT_COMMON_TOKENS)
        prices = await self.prices.fetch_prices(token_ids)

        holdings: List[TokenHolding] = []
        for token_id in token_ids:
            balance = Decimal(str(self.rng.uniform(0, self.balance_max)))
            holdings.append(TokenHolding(
                name=token_id,
                balance=balance,
                unit_price=prices.get(token_id, ZERO),
            ))

        logger.debug("mock_token_holdings", chain=chain.name, count=len(holdings), priced=len(prices))
        return holdings


class MockTransactionProvider(TransactionProvider):
    """Randomly generated transactions for the dashboard's activity list"""

    name = "mock-transactions"

    def __init__(
        self,
        count: int = 1,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.count = count
        self.rng = rng or random.Random()
        self.clock = clock

    async def ready(self) -> bool:
        return True

    async def fetch_transactions(self, address: str) -> List[TransactionRecord]:
        now_ms = int(self.clock() * 1000)
        records = []
        for _ in range(self.count):
            records.append(TransactionRecord(
                hash=_random_hex(self.rng, 32),
                sender=address,
                recipient=_random_hex(self.rng, 20),
                value=f"{self.rng.random():.4f}",
                timestamp=now_ms - int(self.rng.random() * _MS_PER_DAY * TRANSACTION_WINDOW_DAYS),
                direction=self.rng.choice(list(TransactionDirection)),
            ))
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records
