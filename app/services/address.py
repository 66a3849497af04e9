"""Wallet address validation for EVM-compatible chains."""

from __future__ import annotations

import re

from eth_utils import is_checksum_address

from ..errors import InvalidAddress

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def _is_single_case(hex_part: str) -> bool:
    return hex_part == hex_part.lower() or hex_part == hex_part.upper()


def is_valid_evm_address(address: str | None) -> bool:
    """All-lowercase or all-uppercase hex is accepted as is; mixed case must be EIP-55."""

    if not address or not isinstance(address, str):
        return False
    if not _EVM_ADDRESS_RE.fullmatch(address):
        return False
    if _is_single_case(address[2:]):
        return True
    return is_checksum_address(address)


def require_valid_address(address: str | None) -> str:
    """Return ``address`` unchanged or raise :class:`InvalidAddress`."""

    if not is_valid_evm_address(address):
        raise InvalidAddress(address or "")
    return address  # type: ignore[return-value]


__all__ = [
    "is_valid_evm_address",
    "require_valid_address",
]
