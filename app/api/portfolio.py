import logging

from fastapi import APIRouter, Depends, Path

from ..errors import InternalError, PortfolioError
from ..providers.base import TransactionProvider
from ..services.factory import get_portfolio_service, get_transaction_provider
from ..services.portfolio import PortfolioService
from ..types import ErrorResponse, PortfolioResponse, TransactionOut, TransactionsResponse

router = APIRouter(prefix="/api")
_logger = logging.getLogger(__name__)


@router.get(
    "/portfolio/{address}",
    response_model=PortfolioResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_portfolio_endpoint(
    address: str = Path(..., description="Wallet address to analyze"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Aggregate native balances and token holdings across all configured chains"""

    try:
        portfolio = await service.build_portfolio(address)
        return PortfolioResponse.from_domain(portfolio)
    except PortfolioError:
        raise
    except Exception as e:
        _logger.exception("Failed to build portfolio for %s", address)
        raise InternalError() from e


@router.get(
    "/transactions/{address}",
    response_model=TransactionsResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_transactions_endpoint(
    address: str = Path(..., description="Wallet address"),
    provider: TransactionProvider = Depends(get_transaction_provider),
) -> TransactionsResponse:
    """Recent transactions for a wallet (placeholder data)"""

    try:
        records = await provider.fetch_transactions(address)
    except PortfolioError:
        raise
    except Exception as e:
        _logger.exception("Failed to fetch transactions for %s", address)
        raise InternalError() from e
    return TransactionsResponse(transactions=[TransactionOut.from_domain(r) for r in records])
