from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List

import httpx
import structlog

from .base import PriceProvider

logger = structlog.stdlib.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


def unique_ids(ids: Iterable[str]) -> List[str]:
    """Deduplicate price-feed ids, dropping blanks; sorted for a stable query string."""
    return sorted({str(i).strip().lower() for i in ids if i and str(i).strip()})


class CoingeckoProvider(PriceProvider):
    """Coingecko API provider for USD prices"""

    name = "coingecko"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str = "",
        timeout_s: float = 5,
        enabled: bool = True,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.enabled = enabled

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["X-CG-Demo-API-Key"] = self.api_key
        return headers

    async def ready(self) -> bool:
        return self.enabled  # API key is optional for basic tier

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}/ping",
                    headers=self._build_headers(),
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def fetch_prices(self, ids: Iterable[str]) -> Dict[str, Decimal]:
        """Get USD prices for a batch of coin ids in a single request.

        Failures are logged and produce an empty mapping; callers price
        anything missing at zero.
        """
        wanted = unique_ids(ids)
        if not wanted or not await self.ready():
            return {}

        params = {
            "ids": ",".join(wanted),
            "vs_currencies": "usd",
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}/simple/price",
                    headers=self._build_headers(),
                    params=params,
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("price_lookup_failed", ids=wanted, status=exc.response.status_code)
            return {}
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("price_lookup_failed", ids=wanted, reason=str(exc))
            return {}

        if not isinstance(data, dict):
            logger.warning("price_lookup_malformed", ids=wanted)
            return {}

        prices: Dict[str, Decimal] = {}
        for coin_id, price_data in data.items():
            if not isinstance(price_data, dict) or price_data.get("usd") is None:
                continue
            try:
                price = Decimal(str(price_data["usd"]))
            except (InvalidOperation, ValueError):
                continue
            if price.is_finite() and price >= 0:
                prices[coin_id.lower()] = price
        return prices
