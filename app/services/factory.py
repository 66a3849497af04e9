"""
Wiring for the portfolio pipeline.

Settings are read once here; everything downstream receives its
configuration through constructor arguments.
"""

from __future__ import annotations

from typing import Optional

from ..config import Settings, settings as default_settings
from ..providers.coingecko import CoingeckoProvider
from ..providers.mock import MockTokenProvider, MockTransactionProvider
from ..providers.rpc import RpcBalanceProvider
from .chains import ChainRegistry, build_chain_registry
from .portfolio import PortfolioService

_portfolio_service: Optional[PortfolioService] = None
_transaction_provider: Optional[MockTransactionProvider] = None


def build_price_provider(config: Settings) -> CoingeckoProvider:
    return CoingeckoProvider(
        base_url=config.coingecko_base_url,
        api_key=config.coingecko_api_key,
        timeout_s=config.request_timeout_seconds,
        enabled=config.enable_coingecko,
    )


def build_portfolio_service(
    config: Settings,
    registry: Optional[ChainRegistry] = None,
) -> PortfolioService:
    prices = build_price_provider(config)
    return PortfolioService(
        registry=registry or build_chain_registry(config),
        balances=RpcBalanceProvider(timeout_s=config.request_timeout_seconds),
        tokens=MockTokenProvider(prices, balance_max=config.mock_token_balance_max),
        prices=prices,
    )


def build_transaction_provider(config: Settings) -> MockTransactionProvider:
    return MockTransactionProvider(count=config.mock_transaction_count)


def get_portfolio_service() -> PortfolioService:
    """Get the process-wide portfolio service."""
    global _portfolio_service
    if _portfolio_service is None:
        _portfolio_service = build_portfolio_service(default_settings)
    return _portfolio_service


def get_transaction_provider() -> MockTransactionProvider:
    """Get the process-wide transaction provider."""
    global _transaction_provider
    if _transaction_provider is None:
        _transaction_provider = build_transaction_provider(default_settings)
    return _transaction_provider


__all__ = [
    "build_price_provider",
    "build_portfolio_service",
    "build_transaction_provider",
    "get_portfolio_service",
    "get_transaction_provider",
]
