from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..core.portfolio import (
    ChainFailure,
    ChainPortfolio,
    NativeBalance,
    Portfolio,
    TokenHolding,
    TransactionRecord,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NativeBalanceOut(_CamelModel):
    chain: str = Field(description="Chain identifier")
    amount: float = Field(alias="nativeBalance", description="Native coin balance in whole units")
    symbol: str = Field(alias="nativeSymbol", description="Native coin symbol (e.g. ETH, BNB)")
    price_usd: float = Field(alias="priceUsd", description="USD price of the native coin, 0 when unknown")
    value_usd: float = Field(alias="valueUsd", description="USD value of the native balance")

    @classmethod
    def from_domain(cls, native: NativeBalance) -> "NativeBalanceOut":
        return cls(
            chain=native.chain,
            amount=float(native.amount),
            symbol=native.symbol,
            price_usd=float(native.price_usd),
            value_usd=float(native.value_usd),
        )


class TokenHoldingOut(_CamelModel):
    name: str = Field(description="Price-feed identifier (e.g. usd-coin)")
    balance: float = Field(description="Token balance in whole units")
    price: float = Field(description="USD price per token, 0 when unknown")
    value: float = Field(description="balance × price in USD")

    @classmethod
    def from_domain(cls, token: TokenHolding) -> "TokenHoldingOut":
        return cls(
            name=token.name,
            balance=float(token.balance),
            price=float(token.unit_price),
            value=float(token.value),
        )


class ChainPortfolioOut(_CamelModel):
    chain: str = Field(description="Chain identifier")
    native_balance: NativeBalanceOut = Field(alias="nativeBalance")
    tokens: List[TokenHoldingOut] = Field(default_factory=list)
    total_value: float = Field(alias="totalValue", description="Native value plus token values in USD")

    @classmethod
    def from_domain(cls, chain: ChainPortfolio) -> "ChainPortfolioOut":
        return cls(
            chain=chain.chain,
            native_balance=NativeBalanceOut.from_domain(chain.native_balance),
            tokens=[TokenHoldingOut.from_domain(t) for t in chain.tokens],
            total_value=float(chain.total_value),
        )


class UnavailableChainOut(_CamelModel):
    chain: str = Field(description="Chain that was left out of the portfolio")
    reason: str = Field(description="Why the chain could not be queried")
    category: str = Field(description="Error category (upstream, configuration)")

    @classmethod
    def from_domain(cls, failure: ChainFailure) -> "UnavailableChainOut":
        return cls(chain=failure.chain, reason=failure.reason, category=failure.category.value)


class PortfolioResponse(_CamelModel):
    address: str = Field(description="Wallet address")
    portfolio: List[ChainPortfolioOut] = Field(description="One entry per chain that returned a balance")
    total_portfolio_value: float = Field(alias="totalPortfolioValue", description="Sum of chain totals in USD")
    unavailable_chains: List[UnavailableChainOut] = Field(
        default_factory=list,
        alias="unavailableChains",
        description="Chains omitted because their RPC endpoint failed",
    )

    @classmethod
    def from_domain(cls, portfolio: Portfolio) -> "PortfolioResponse":
        return cls(
            address=portfolio.address,
            portfolio=[ChainPortfolioOut.from_domain(c) for c in portfolio.chains],
            total_portfolio_value=float(portfolio.total_value),
            unavailable_chains=[UnavailableChainOut.from_domain(f) for f in portfolio.failures],
        )


class TransactionOut(_CamelModel):
    hash: str
    sender: str = Field(alias="from")
    recipient: str = Field(alias="to")
    value: str = Field(description="Amount in native units, 4 decimals")
    timestamp: int = Field(description="Milliseconds since epoch")
    direction: str = Field(alias="type", description="sent or received")

    @classmethod
    def from_domain(cls, tx: TransactionRecord) -> "TransactionOut":
        return cls(
            hash=tx.hash,
            sender=tx.sender,
            recipient=tx.recipient,
            value=tx.value,
            timestamp=tx.timestamp,
            direction=tx.direction.value,
        )


class TransactionsResponse(BaseModel):
    transactions: List[TransactionOut] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str = Field(description="Error message")
