"""
Portfolio Module

Data structures shared by the balance providers and the aggregator.
"""

from .models import (
    ZERO,
    ChainFailure,
    ChainOutcome,
    ChainPortfolio,
    ChainSuccess,
    NativeBalance,
    Portfolio,
    TokenHolding,
    TransactionDirection,
    TransactionRecord,
)

__all__ = [
    "ZERO",
    "ChainFailure",
    "ChainOutcome",
    "ChainPortfolio",
    "ChainSuccess",
    "NativeBalance",
    "Portfolio",
    "TokenHolding",
    "TransactionDirection",
    "TransactionRecord",
]
