"""
Chain registry.

Static metadata for the EVM chains a portfolio can span, combined with the
RPC endpoints from settings into an ordered registry built once at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..config import Settings
from ..errors import ConfigurationError

NATIVE_DECIMALS = 18

# Price-feed ids used for placeholder token holdings on unrecognized chains.
DEFAULT_COMMON_TOKENS: Tuple[str, ...] = ("ethereum",)

_CHAIN_ALIASES = {
    "eth": "ethereum",
    "ethereum": "ethereum",
    "mainnet": "ethereum",
    "matic": "polygon",
    "polygon": "polygon",
    "bsc": "bsc",
    "bnb": "bsc",
    "binance": "bsc",
    "arb": "arbitrum",
    "arbitrum": "arbitrum",
    "arbitrum-one": "arbitrum",
}


@dataclass(frozen=True)
class ChainConfig:
    """One supported chain and the endpoint used to query it."""
    name: str
    native_symbol: str
    native_price_id: str
    rpc_url: str = ""
    native_decimals: int = NATIVE_DECIMALS
    common_tokens: Tuple[str, ...] = DEFAULT_COMMON_TOKENS

    @property
    def native_price_keys(self) -> List[str]:
        """Price-feed ids tried for the native coin, lower-cased symbol first."""
        keys = [self.native_symbol.lower()]
        if self.native_price_id and self.native_price_id not in keys:
            keys.append(self.native_price_id)
        return keys


KNOWN_CHAINS: Dict[str, ChainConfig] = {
    "ethereum": ChainConfig(
        name="ethereum",
        native_symbol="ETH",
        native_price_id="ethereum",
        common_tokens=("ethereum", "usd-coin", "tether", "chainlink", "uniswap"),
    ),
    "polygon": ChainConfig(
        name="polygon",
        native_symbol="MATIC",
        native_price_id="matic-network",
        common_tokens=("matic-network", "usd-coin", "tether"),
    ),
    "bsc": ChainConfig(
        name="bsc",
        native_symbol="BNB",
        native_price_id="binancecoin",
        common_tokens=("binancecoin", "usd-coin", "tether"),
    ),
    "arbitrum": ChainConfig(
        name="arbitrum",
        native_symbol="ETH",
        native_price_id="ethereum",
    ),
}


def normalize_chain(chain: str | None) -> str:
    """Collapse user-provided chain identifiers into canonical slugs."""

    if not chain:
        return "ethereum"
    slug = chain.lower().strip()
    return _CHAIN_ALIASES.get(slug, slug)


class ChainRegistry:
    """Ordered, immutable set of chains aggregated for each portfolio."""

    def __init__(self, chains: Sequence[ChainConfig]):
        self._chains: List[ChainConfig] = list(chains)
        self._by_name: Dict[str, ChainConfig] = {c.name: c for c in self._chains}

    def __iter__(self) -> Iterator[ChainConfig]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def names(self) -> List[str]:
        return [c.name for c in self._chains]

    def get(self, chain: str) -> ChainConfig:
        config = self._by_name.get(normalize_chain(chain))
        if config is None:
            raise ConfigurationError(f"Chain '{chain}' is not configured", chain=chain)
        return config

    def find(self, chain: str) -> Optional[ChainConfig]:
        return self._by_name.get(normalize_chain(chain))


def build_chain_registry(settings: Settings) -> ChainRegistry:
    """Combine static chain metadata with the endpoints from ``settings``.

    Chains keep the order of ``settings.portfolio_chains``; duplicates are
    dropped. A chain without an RPC URL is still registered so that its
    absence shows up as a per-request configuration failure.
    """

    chains: List[ChainConfig] = []
    seen = set()
    for raw in settings.portfolio_chains:
        name = normalize_chain(raw)
        if name in seen:
            continue
        known = KNOWN_CHAINS.get(name)
        if known is None:
            raise ConfigurationError(f"Unsupported chain '{raw}' in portfolio_chains", chain=raw)
        chains.append(replace(known, rpc_url=settings.rpc_url_for(name)))
        seen.add(name)
    return ChainRegistry(chains)


__all__ = [
    "NATIVE_DECIMALS",
    "DEFAULT_COMMON_TOKENS",
    "KNOWN_CHAINS",
    "ChainConfig",
    "ChainRegistry",
    "normalize_chain",
    "build_chain_registry",
]
