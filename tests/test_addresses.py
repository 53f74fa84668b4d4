import pytest

from seaport_sdk.addresses import DEFAULT_ADDRESS_BOOK, AddressBook, parse_chain_id
from seaport_sdk.config import SeaportConfig, resolve_config, to_key
from seaport_sdk.constants import DEFAULT_ORDER_DURATION, NO_CONDUIT_KEY
from seaport_sdk.errors import UnsupportedChainError


def test_parse_chain_id():
    """Test that chain ids are accepted as ints, decimal strings and hex strings."""
    assert parse_chain_id(1) == 1
    assert parse_chain_id("137") == 137
    assert parse_chain_id("0x89") == 137
    assert parse_chain_id("0X5") == 5


def test_default_address_book():
    """Test lookups in the default address book."""
    assert DEFAULT_ADDRESS_BOOK.get_seaport_address(1) == (
        "0x00000000006c3852cbEf3e08E8dF289169EdE581"
    )
    assert (
        DEFAULT_ADDRESS_BOOK.get_wrapped_native_token("0x1")
        == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
    )
    assert 137 in DEFAULT_ADDRESS_BOOK
    assert 1 in DEFAULT_ADDRESS_BOOK.chain_ids


def test_unsupported_chain():
    """Test that unknown chains raise UnsupportedChainError."""
    with pytest.raises(UnsupportedChainError):
        DEFAULT_ADDRESS_BOOK.get_seaport_address(31337)
    assert 31337 not in DEFAULT_ADDRESS_BOOK


def test_injected_address_book(address_book, accounts):
    """Test that a synthetic address book is independent of the defaults."""
    assert address_book.get_seaport_address(accounts["chain_id"]) == accounts["seaport"]
    assert address_book.chain_ids == [accounts["chain_id"]]
    with pytest.raises(UnsupportedChainError):
        address_book.get(1)


def test_address_book_is_immutable():
    """Test that entries cannot be modified after construction."""
    entries = {"10": {"seaport": "0x" + "01" * 20, "wrapped_native_token": "0x" + "02" * 20}}
    book = AddressBook(entries)
    entries["10"]["seaport"] = "0x" + "03" * 20
    assert book.get_seaport_address(10) == "0x" + "01" * 20
    with pytest.raises(TypeError):
        book.get(10)["seaport"] = "0x" + "04" * 20


def test_to_key():
    """Test 32 byte key encoding."""
    assert to_key(0) == NO_CONDUIT_KEY
    assert to_key(1) == "0x" + "00" * 31 + "01"
    assert to_key("0x01") == "0x" + "00" * 31 + "01"
    with pytest.raises(ValueError):
        to_key("0x" + "ff" * 33)


def test_resolve_config_defaults():
    """Test configuration defaults."""
    config = resolve_config()
    assert config.default_conduit_key == NO_CONDUIT_KEY
    assert config.order_duration_seconds == DEFAULT_ORDER_DURATION
    assert config.address_book is DEFAULT_ADDRESS_BOOK


def test_resolve_config_env_fallback(monkeypatch):
    """Test that unset values fall back to environment variables."""
    conduit_key = "0x0000007b02230091a7ed01230072f7006a004d60a8d4e71d599b8104250f0000"
    monkeypatch.setenv("SEAPORT_CONDUIT_KEY", conduit_key)
    monkeypatch.setenv("SEAPORT_ORDER_DURATION", "3600")
    config = resolve_config()
    assert config.default_conduit_key == conduit_key
    assert config.order_duration_seconds == 3600

    explicit = resolve_config(SeaportConfig(order_duration_seconds=60))
    assert explicit.order_duration_seconds == 60


def test_explicit_default_values_win_over_env(monkeypatch):
    """Test that explicitly passed values are kept even when they equal the defaults."""
    monkeypatch.setenv("SEAPORT_CONDUIT_KEY", "0x" + "11" * 32)
    monkeypatch.setenv("SEAPORT_ORDER_DURATION", "3600")

    config = resolve_config(
        SeaportConfig(
            default_conduit_key=NO_CONDUIT_KEY, order_duration_seconds=DEFAULT_ORDER_DURATION
        )
    )

    assert config.default_conduit_key == NO_CONDUIT_KEY
    assert config.order_duration_seconds == DEFAULT_ORDER_DURATION
