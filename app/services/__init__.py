"""Service layer helpers"""

from .address import is_valid_evm_address, require_valid_address
from .chains import ChainConfig, ChainRegistry, build_chain_registry, normalize_chain

__all__ = [
    "is_valid_evm_address",
    "require_valid_address",
    "ChainConfig",
    "ChainRegistry",
    "build_chain_registry",
    "normalize_chain",
]
