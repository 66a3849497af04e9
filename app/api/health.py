import asyncio
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..services.factory import get_portfolio_service
from ..services.portfolio import PortfolioService

router = APIRouter()


@router.get("/healthz")
async def health_check(service: PortfolioService = Depends(get_portfolio_service)) -> Dict[str, Any]:
    """Health check endpoint that verifies the price API and every chain RPC"""

    chains = list(service.registry)
    price_status, *chain_statuses = await asyncio.gather(
        service.prices.health_check(),
        *(service.balances.health_check(chain) for chain in chains),
    )

    provider_status = {service.prices.name: price_status}
    for chain, status in zip(chains, chain_statuses):
        provider_status[f"rpc:{chain.name}"] = status

    # Unconfigured endpoints are reported but do not degrade health
    all_healthy = all(
        status["status"] in ["healthy", "unavailable"]
        for status in provider_status.values()
    )

    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] == "healthy"
    )

    return {
        "status": "healthy" if all_healthy and available_providers > 0 else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status)
    }
