"""
Portfolio aggregation service.

Builds a multi-chain portfolio for one address: every configured chain is
queried concurrently, and a chain whose native balance cannot be fetched is
left out of the result instead of failing the request.
"""

from __future__ import annotations

import asyncio
from typing import List

import structlog

from ..core.portfolio import (
    ZERO,
    ChainFailure,
    ChainOutcome,
    ChainPortfolio,
    ChainSuccess,
    NativeBalance,
    Portfolio,
)
from ..errors import ConfigurationError, InternalError, UpstreamUnavailable
from ..providers.base import BalanceProvider, PriceProvider, TokenHoldingsProvider
from .address import require_valid_address
from .chains import ChainConfig, ChainRegistry

logger = structlog.stdlib.get_logger(__name__)


class PortfolioService:
    """
    Aggregates native balances and token holdings across chains.

    Usage:
        service = PortfolioService(registry, balances, tokens, prices)
        portfolio = await service.build_portfolio("0x...")
    """

    def __init__(
        self,
        registry: ChainRegistry,
        balances: BalanceProvider,
        tokens: TokenHoldingsProvider,
        prices: PriceProvider,
    ) -> None:
        self.registry = registry
        self.balances = balances
        self.tokens = tokens
        self.prices = prices

    async def build_portfolio(self, address: str) -> Portfolio:
        """
        Build the portfolio for ``address``.

        Raises:
            InvalidAddress: before any outbound call when the address is malformed
            InternalError: on unexpected failures in the aggregation itself
        """
        address = require_valid_address(address)

        # gather() keeps registry order regardless of completion order
        results = await asyncio.gather(
            *(self._build_chain(address, chain) for chain in self.registry),
            return_exceptions=True,
        )

        outcomes: List[ChainOutcome] = []
        for chain, result in zip(self.registry, results):
            if isinstance(result, BaseException):
                logger.error(
                    "portfolio_build_failed",
                    address=address,
                    chain=chain.name,
                    exc_info=result,
                )
                raise InternalError() from result
            outcomes.append(result)

        portfolio = Portfolio.from_outcomes(address, outcomes)
        logger.info(
            "portfolio_built",
            address=address,
            chains=[c.chain for c in portfolio.chains],
            unavailable=[f.chain for f in portfolio.failures],
            total_value_usd=str(portfolio.total_value),
        )
        return portfolio

    async def _build_chain(self, address: str, chain: ChainConfig) -> ChainOutcome:
        balance_task = asyncio.ensure_future(self.balances.fetch_native_balance(address, chain))
        tokens_task = asyncio.ensure_future(self.tokens.fetch_token_holdings(address, chain))

        try:
            native = await balance_task
        except (UpstreamUnavailable, ConfigurationError) as exc:
            tokens_task.cancel()
            await asyncio.gather(tokens_task, return_exceptions=True)
            logger.warning(
                "chain_unavailable",
                chain=chain.name,
                category=exc.category.value,
                reason=exc.message,
            )
            return ChainFailure(chain=chain.name, reason=exc.message, category=exc.category)
        except BaseException:
            tokens_task.cancel()
            await asyncio.gather(tokens_task, return_exceptions=True)
            raise

        tokens = await tokens_task
        native = await self._price_native(native, chain)
        return ChainSuccess(
            chain=chain.name,
            portfolio=ChainPortfolio(chain=chain.name, native_balance=native, tokens=tokens),
        )

    async def _price_native(self, native: NativeBalance, chain: ChainConfig) -> NativeBalance:
        keys = chain.native_price_keys
        prices = await self.prices.fetch_prices(keys)
        for key in keys:
            if key in prices:
                return native.with_price(prices[key])
        return native.with_price(ZERO)


__all__ = ["PortfolioService"]
