import pytest

from app.config import Settings
from app.errors import ConfigurationError
from app.services.chains import KNOWN_CHAINS, ChainConfig, ChainRegistry, build_chain_registry


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_registry_preserves_configured_order():
    registry = build_chain_registry(_settings(portfolio_chains=["bsc", "ethereum", "polygon"]))

    assert registry.names() == ["bsc", "ethereum", "polygon"]
    assert len(registry) == 3


def test_registry_fills_rpc_urls_from_settings():
    registry = build_chain_registry(_settings(
        portfolio_chains=["ethereum", "polygon"],
        ethereum_rpc_url="https://rpc.example/eth",
        polygon_rpc_url="https://rpc.example/polygon",
    ))

    assert registry.get("ethereum").rpc_url == "https://rpc.example/eth"
    assert registry.get("polygon").rpc_url == "https://rpc.example/polygon"
    # Static table stays untouched
    assert KNOWN_CHAINS["ethereum"].rpc_url == ""


def test_registry_normalizes_aliases_and_drops_duplicates():
    registry = build_chain_registry(_settings(portfolio_chains=["eth", "ethereum", "matic", "BNB"]))

    assert registry.names() == ["ethereum", "polygon", "bsc"]
    assert registry.get("mainnet").name == "ethereum"


def test_unknown_chain_in_settings_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_chain_registry(_settings(portfolio_chains=["ethereum", "solana"]))


def test_get_unknown_chain_raises():
    registry = ChainRegistry([KNOWN_CHAINS["ethereum"]])

    with pytest.raises(ConfigurationError):
        registry.get("polygon")
    assert registry.find("polygon") is None


def test_native_metadata():
    assert KNOWN_CHAINS["ethereum"].native_symbol == "ETH"
    assert KNOWN_CHAINS["polygon"].native_symbol == "MATIC"
    assert KNOWN_CHAINS["bsc"].native_symbol == "BNB"
    assert all(c.native_decimals == 18 for c in KNOWN_CHAINS.values())


def test_native_price_keys_try_symbol_then_feed_id():
    assert KNOWN_CHAINS["bsc"].native_price_keys == ["bnb", "binancecoin"]
    assert KNOWN_CHAINS["ethereum"].native_price_keys == ["eth", "ethereum"]

    same = ChainConfig(name="x", native_symbol="FOO", native_price_id="foo")
    assert same.native_price_keys == ["foo"]


def test_common_token_tables():
    assert KNOWN_CHAINS["ethereum"].common_tokens == ("ethereum", "usd-coin", "tether", "chainlink", "uniswap")
    assert KNOWN_CHAINS["polygon"].common_tokens == ("matic-network", "usd-coin", "tether")
    assert KNOWN_CHAINS["bsc"].common_tokens == ("binancecoin", "usd-coin", "tether")
    assert KNOWN_CHAINS["arbitrum"].common_tokens == ("ethereum",)


def test_registry_configs_do_not_share_mutable_state_with_static_table():
    registry = build_chain_registry(_settings(
        portfolio_chains=["ethereum"],
        ethereum_rpc_url="https://rpc.example/eth",
    ))
    chain = registry.get("ethereum")

    assert isinstance(chain.common_tokens, tuple)
    assert {chain: "ok"}[chain] == "ok"
    with pytest.raises(AttributeError):
        chain.common_tokens.append("dogecoin")
    assert KNOWN_CHAINS["ethereum"].common_tokens[-1] == "uniswap"
