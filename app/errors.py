"""
Error Classification

Defines the error types raised while building a portfolio.
Per-chain and price errors are absorbed by the aggregator; only
invalid input and internal failures reach the HTTP layer.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Categories of errors for propagation decisions."""

    VALIDATION = "validation"         # Malformed client input
    UPSTREAM = "upstream"             # RPC / price API failure or timeout
    CONFIGURATION = "configuration"   # Missing endpoint or unknown chain
    INTERNAL = "internal"             # Bug in aggregation logic


class PortfolioError(Exception):
    """Base class for all portfolio errors."""

    category: ErrorCategory = ErrorCategory.INTERNAL
    status_code: int = 500

    def __init__(self, message: str, chain: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.chain = chain

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidAddress(PortfolioError):
    """Address is not a 0x-prefixed 20-byte hex string."""

    category = ErrorCategory.VALIDATION
    status_code = 400

    def __init__(self, address: str):
        super().__init__("Invalid Ethereum address")
        self.address = address


class UpstreamUnavailable(PortfolioError):
    """A chain RPC or the price API failed, returned an error, or timed out."""

    category = ErrorCategory.UPSTREAM
    status_code = 502


class ConfigurationError(PortfolioError):
    """A chain is unknown or has no RPC endpoint configured."""

    category = ErrorCategory.CONFIGURATION


class InternalError(PortfolioError):
    """Unexpected failure inside the aggregation logic."""

    category = ErrorCategory.INTERNAL
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


__all__ = [
    "ErrorCategory",
    "PortfolioError",
    "InvalidAddress",
    "UpstreamUnavailable",
    "ConfigurationError",
    "InternalError",
]
