"""
Portfolio Models

Request-scoped data structures produced while aggregating a wallet.
Amounts are Decimals; conversion to JSON numbers happens at the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Union

from ...errors import ErrorCategory


ZERO = Decimal("0")


class TransactionDirection(str, Enum):
    SENT = "sent"
    RECEIVED = "received"


@dataclass
class NativeBalance:
    """Base-currency holding on one chain."""
    chain: str
    amount: Decimal
    symbol: str
    price_usd: Decimal = ZERO

    @property
    def value_usd(self) -> Decimal:
        return self.amount * self.price_usd

    def with_price(self, price_usd: Decimal) -> "NativeBalance":
        return NativeBalance(
            chain=self.chain,
            amount=self.amount,
            symbol=self.symbol,
            price_usd=price_usd,
        )


@dataclass
class TokenHolding:
    """A priced token position; ``name`` is the price-feed identifier."""
    name: str
    balance: Decimal
    unit_price: Decimal = ZERO

    @property
    def value(self) -> Decimal:
        return self.balance * self.unit_price


@dataclass
class ChainPortfolio:
    chain: str
    native_balance: NativeBalance
    tokens: List[TokenHolding] = field(default_factory=list)

    @property
    def total_value(self) -> Decimal:
        return self.native_balance.value_usd + sum((t.value for t in self.tokens), ZERO)


@dataclass
class ChainSuccess:
    chain: str
    portfolio: ChainPortfolio
    ok: bool = True


@dataclass
class ChainFailure:
    """A chain left out of the portfolio, and why."""
    chain: str
    reason: str
    category: ErrorCategory
    ok: bool = False


ChainOutcome = Union[ChainSuccess, ChainFailure]


@dataclass
class Portfolio:
    address: str
    chains: List[ChainPortfolio] = field(default_factory=list)
    failures: List[ChainFailure] = field(default_factory=list)

    @property
    def total_value(self) -> Decimal:
        return sum((c.total_value for c in self.chains), ZERO)

    @classmethod
    def from_outcomes(cls, address: str, outcomes: List[ChainOutcome]) -> "Portfolio":
        """Split ordered outcomes into successful chains and failures, preserving order."""
        portfolio = cls(address=address)
        for outcome in outcomes:
            if isinstance(outcome, ChainSuccess):
                portfolio.chains.append(outcome.portfolio)
            else:
                portfolio.failures.append(outcome)
        return portfolio


@dataclass
class TransactionRecord:
    hash: str
    sender: str
    recipient: str
    value: str
    timestamp: int  # milliseconds since epoch
    direction: TransactionDirection
