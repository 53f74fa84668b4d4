"""Configuration for the Seaport SDK."""

import os
from dataclasses import dataclass, field

from eth_utils import to_bytes, to_hex

from .addresses import DEFAULT_ADDRESS_BOOK, AddressBook
from .constants import DEFAULT_ORDER_DURATION, NO_CONDUIT_KEY, SEAPORT_CONTRACT_VERSION


@dataclass
class SeaportConfig:
    """Configuration options for SeaportSDK."""

    # Chain id -> contract addresses. Tests inject synthetic chains here.
    address_book: AddressBook = field(default_factory=lambda: DEFAULT_ADDRESS_BOOK)

    # Conduit key used for new orders and as the fulfiller conduit key.
    # Default: SEAPORT_CONDUIT_KEY env var, or no conduit. None means unset.
    default_conduit_key: str | None = None

    # Order lifetime when no end time is given.
    # Default: SEAPORT_ORDER_DURATION env var, or 31 days. None means unset.
    order_duration_seconds: int | None = None

    # EIP-712 domain version of the deployed contract.
    domain_version: str = SEAPORT_CONTRACT_VERSION


def to_key(value: int | str | bytes) -> str:
    """Encode a value as a 32 byte hex key, left padded with zeros.

    Args:
        value: An int, a hex string or raw bytes.

    Returns:
        str: The 0x-prefixed 32 byte key.

    """
    if isinstance(value, int):
        raw = value.to_bytes(32, "big")
    elif isinstance(value, str):
        raw = to_bytes(hexstr=value)
    else:
        raw = bytes(value)
    if len(raw) > 32:
        raise ValueError(f"Key is longer than 32 bytes: {to_hex(raw)}")
    return to_hex(raw.rjust(32, b"\x00"))


def resolve_config(config: SeaportConfig | None = None) -> SeaportConfig:
    """Fill unset configuration values from environment variables.

    Args:
        config: Optional explicit configuration.

    Returns:
        SeaportConfig: The resolved configuration.

    """
    if config is None:
        config = SeaportConfig()

    return SeaportConfig(
        address_book=config.address_book,
        default_conduit_key=to_key(
            config.default_conduit_key
            if config.default_conduit_key is not None
            else os.getenv("SEAPORT_CONDUIT_KEY", NO_CONDUIT_KEY)
        ),
        order_duration_seconds=(
            config.order_duration_seconds
            if config.order_duration_seconds is not None
            else int(os.getenv("SEAPORT_ORDER_DURATION", str(DEFAULT_ORDER_DURATION)))
        ),
        domain_version=config.domain_version,
    )
