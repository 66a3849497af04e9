from decimal import Decimal
from typing import Any, Dict

import httpx
import structlog

from ..core.portfolio import NativeBalance
from ..errors import ConfigurationError, UpstreamUnavailable
from ..services.chains import ChainConfig
from .base import BalanceProvider

logger = structlog.stdlib.get_logger(__name__)


def wei_to_decimal(raw: int, decimals: int) -> Decimal:
    """Convert a smallest-unit integer to a human-scale amount."""
    return Decimal(raw) / (Decimal(10) ** decimals)


class RpcBalanceProvider(BalanceProvider):
    """Native balances over plain EVM JSON-RPC (eth_getBalance)"""

    name = "rpc"

    def __init__(self, timeout_s: float = 5):
        self.timeout_s = timeout_s

    async def ready(self) -> bool:
        return True

    async def _call(self, chain: ChainConfig, method: str, params: list) -> Any:
        if not chain.rpc_url:
            raise ConfigurationError(f"No RPC endpoint configured for {chain.name}", chain=chain.name)

        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    chain.rpc_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable(f"{chain.name} RPC timed out", chain=chain.name) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(
                f"{chain.name} RPC returned HTTP {exc.response.status_code}", chain=chain.name
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailable(f"{chain.name} RPC request failed: {exc}", chain=chain.name) from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"{chain.name} RPC returned a malformed response", chain=chain.name)
        if "error" in data:
            raise UpstreamUnavailable(f"{chain.name} RPC error: {data['error']}", chain=chain.name)
        return data.get("result")

    async def fetch_native_balance(self, address: str, chain: ChainConfig) -> NativeBalance:
        """Get the native coin balance for address on chain"""
        result = await self._call(chain, "eth_getBalance", [address, "latest"])

        try:
            balance_wei = int(result, 16)
        except (TypeError, ValueError) as exc:
            raise UpstreamUnavailable(
                f"{chain.name} RPC returned an invalid balance: {result!r}", chain=chain.name
            ) from exc
        if balance_wei < 0:
            raise UpstreamUnavailable(f"{chain.name} RPC returned a negative balance", chain=chain.name)

        logger.debug("native_balance_fetched", chain=chain.name, balance_wei=str(balance_wei))
        return NativeBalance(
            chain=chain.name,
            amount=wei_to_decimal(balance_wei, chain.native_decimals),
            symbol=chain.native_symbol,
        )

    async def health_check(self, chain: ChainConfig) -> Dict[str, Any]:
        if not chain.rpc_url:
            return {
                "status": "unavailable",
                "reason": "RPC endpoint not configured"
            }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    chain.rpc_url,
                    json={"jsonrpc": "2.0", "method": "eth_chainId", "params": [], "id": 1},
                    timeout=self.timeout_s
                )
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}
