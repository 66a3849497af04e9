import pytest

from app.errors import InvalidAddress
from app.services.address import is_valid_evm_address, require_valid_address
from app.services.chains import normalize_chain


def test_normalize_chain_defaults_to_ethereum():
    assert normalize_chain(None) == "ethereum"
    assert normalize_chain(" Ethereum ") == "ethereum"


def test_normalize_chain_aliases():
    assert normalize_chain("eth") == "ethereum"
    assert normalize_chain("MATIC") == "polygon"
    assert normalize_chain("bnb") == "bsc"
    assert normalize_chain("arb") == "arbitrum"
    assert normalize_chain("avalanche") == "avalanche"


def test_address_validation_accepts_single_case_and_checksummed():
    assert is_valid_evm_address("0x1234567890abcdef1234567890abcdef12345678") is True
    assert is_valid_evm_address("0xD8DA6BF26964AF9D7EED9E03E53415D37AA96045") is True
    assert is_valid_evm_address("0x000000000000000000000000000000000000dEaD") is True
    assert is_valid_evm_address("0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045") is True


@pytest.mark.parametrize(
    "address",
    [
        "0x1234567890abcdef1234567890ABCDEF12345678",
        "0xD8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
        "0x000000000000000000000000000000000000DeaD",
    ],
)
def test_address_validation_rejects_bad_checksum(address):
    assert is_valid_evm_address(address) is False
    with pytest.raises(InvalidAddress):
        require_valid_address(address)


@pytest.mark.parametrize(
    "address",
    [
        "",
        None,
        "not-an-address",
        "0x1234567890abcdef1234567890abcdef1234567",    # 39 hex chars
        "0x1234567890abcdef1234567890abcdef123456789",  # 41 hex chars
        "1234567890abcdef1234567890abcdef12345678",     # missing prefix
        "0X1234567890abcdef1234567890abcdef12345678",   # uppercase prefix
        "0x1234567890abcdef1234567890abcdef1234567g",   # non-hex
        " 0x1234567890abcdef1234567890abcdef12345678",
    ],
)
def test_address_validation_rejects_malformed(address):
    assert is_valid_evm_address(address) is False
    with pytest.raises(InvalidAddress):
        require_valid_address(address)


def test_require_valid_address_returns_input_unchanged():
    address = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
    assert require_valid_address(address) == address
