from .portfolio import (
    ChainPortfolioOut,
    ErrorResponse,
    NativeBalanceOut,
    PortfolioResponse,
    TokenHoldingOut,
    TransactionOut,
    TransactionsResponse,
    UnavailableChainOut,
)

__all__ = [
    "ChainPortfolioOut",
    "ErrorResponse",
    "NativeBalanceOut",
    "PortfolioResponse",
    "TokenHoldingOut",
    "TransactionOut",
    "TransactionsResponse",
    "UnavailableChainOut",
]
