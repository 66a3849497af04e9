from pathlib import Path
from typing import Any, List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

INFURA_MAINNET_URL = "https://mainnet.infura.io/v3/{key}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Derive the Ethereum endpoint from the Infura key when not set explicitly."""

        super().model_post_init(__context)

        if not self.ethereum_rpc_url and self.infura_api_key:
            object.__setattr__(
                self,
                "ethereum_rpc_url",
                INFURA_MAINNET_URL.format(key=self.infura_api_key),
            )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=5000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: Optional[bool] = Field(
        default=None,
        description="Force JSON (true) or console (false) log rendering; unset follows log_level",
    )

    # Chain RPC Endpoints
    infura_api_key: str = Field(default="", description="Infura API key used for the Ethereum endpoint")
    ethereum_rpc_url: str = Field(
        default="",
        description="Ethereum JSON-RPC URL (derived from the Infura key when empty)",
        validation_alias=AliasChoices("ethereum_rpc_url", "eth_rpc_url"),
    )
    polygon_rpc_url: str = Field(default="https://polygon-rpc.com", description="Polygon JSON-RPC URL")
    bsc_rpc_url: str = Field(default="https://bsc-dataseed.binance.org/", description="BNB Smart Chain JSON-RPC URL")
    arbitrum_rpc_url: str = Field(default="https://arb1.arbitrum.io/rpc", description="Arbitrum One JSON-RPC URL")

    # Portfolio
    portfolio_chains: List[str] = Field(
        default_factory=lambda: ["ethereum", "polygon", "bsc"],
        description="Chains aggregated per portfolio request, in output order",
    )

    # Price Provider
    coingecko_api_key: str = Field(default="", description="Coingecko API key")
    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="Coingecko API base URL",
    )
    enable_coingecko: bool = Field(default=True, description="Enable Coingecko provider")

    # Outbound Requests
    request_timeout_seconds: float = Field(default=5.0, gt=0, description="Per-call timeout for RPC and price requests")

    # Placeholder Data
    mock_token_balance_max: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for randomly generated token balances",
    )
    mock_transaction_count: int = Field(
        default=1,
        ge=0,
        le=100,
        description="Number of generated transactions per request",
    )

    @property
    def has_infura_key(self) -> bool:
        return bool(self.infura_api_key)

    @property
    def has_coingecko_key(self) -> bool:
        return bool(self.coingecko_api_key)

    def rpc_url_for(self, chain: str) -> str:
        """Return the configured RPC URL for a chain slug, or an empty string."""
        return getattr(self, f"{chain.lower()}_rpc_url", "") or ""


# Global settings instance
settings = Settings()
