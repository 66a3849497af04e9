from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from ..core.portfolio import NativeBalance, TokenHolding, TransactionRecord
from ..services.chains import ChainConfig


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 5

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass


class BalanceProvider(Provider):
    """Provider for native coin balances"""

    @abstractmethod
    async def fetch_native_balance(self, address: str, chain: ChainConfig) -> NativeBalance:
        """Get the native coin balance (ETH, MATIC, BNB) of an address.

        Raises ConfigurationError or UpstreamUnavailable.
        """
        pass

    @abstractmethod
    async def health_check(self, chain: ChainConfig) -> Dict[str, Any]:
        """Return endpoint health for one chain"""
        pass


class PriceProvider(Provider):
    """Provider for USD price data"""

    @abstractmethod
    async def fetch_prices(self, ids: Iterable[str]) -> Dict[str, Decimal]:
        """Get USD prices keyed by price-feed id. Never raises; missing ids are absent."""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class TokenHoldingsProvider(Provider):
    """Provider for priced token positions on one chain"""

    @abstractmethod
    async def fetch_token_holdings(self, address: str, chain: ChainConfig) -> List[TokenHolding]:
        """Get token holdings in a stable order; a missing price means value 0"""
        pass


class TransactionProvider(Provider):
    """Provider for wallet transaction history"""

    @abstractmethod
    async def fetch_transactions(self, address: str) -> List[TransactionRecord]:
        """Get recent transactions for an address, newest first"""
        pass
