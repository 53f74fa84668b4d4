"""Per-chain contract addresses."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import TypedDict

from web3 import Web3

from .errors import UnsupportedChainError


class ChainAddresses(TypedDict):
    """Contracts the SDK talks to on one chain."""

    seaport: str
    wrapped_native_token: str


# Canonical Seaport 1.1 deployment
_SEAPORT_V1_1 = "0x00000000006c3852cbEf3e08E8dF289169EdE581"

DEFAULT_ADDRESSES: dict[str, ChainAddresses] = {
    "1": {
        "seaport": _SEAPORT_V1_1,
        "wrapped_native_token": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",  # WETH
    },
    "4": {
        "seaport": _SEAPORT_V1_1,
        "wrapped_native_token": "0xc778417E063141139Fce010982780140Aa0cD5Ab",  # WETH
    },
    "5": {
        "seaport": _SEAPORT_V1_1,
        "wrapped_native_token": "0xB4FBF271143F4FBf7B91A5ded31805e42b2208d6",  # WETH
    },
    "137": {
        "seaport": _SEAPORT_V1_1,
        "wrapped_native_token": "0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",  # WMATIC
    },
    "80001": {
        "seaport": _SEAPORT_V1_1,
        "wrapped_native_token": "0x9c3C9283D3e44854697Cd22D3Faa240Cfb032889",  # WMATIC
    },
}


def parse_chain_id(chain_id: int | str) -> int:
    """Normalize a chain id given as an int, a decimal string or a 0x-prefixed hex string.

    Args:
        chain_id: The chain id to normalize.

    Returns:
        int: The chain id.

    """
    if isinstance(chain_id, str):
        chain_id = chain_id.strip()
        if chain_id.lower().startswith("0x"):
            return int(chain_id, 16)
        return int(chain_id, 10)
    return int(chain_id)


class AddressBook:
    """Immutable mapping from chain id to the contracts deployed on that chain."""

    def __init__(self, entries: Mapping[str, ChainAddresses]):
        """Initialize the address book.

        Args:
            entries: Mapping of decimal chain id strings to chain addresses.

        """
        self._entries = MappingProxyType(
            {
                str(parse_chain_id(chain_id)): MappingProxyType(
                    {
                        "seaport": Web3.to_checksum_address(addresses["seaport"]),
                        "wrapped_native_token": Web3.to_checksum_address(
                            addresses["wrapped_native_token"]
                        ),
                    }
                )
                for chain_id, addresses in entries.items()
            }
        )

    def __contains__(self, chain_id: object) -> bool:
        """Whether the chain id has an entry, false for values that are not chain ids."""
        try:
            return str(parse_chain_id(chain_id)) in self._entries  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    @property
    def chain_ids(self) -> list[int]:
        """Chain ids with an entry in this address book."""
        return sorted(int(chain_id) for chain_id in self._entries)

    def get(self, chain_id: int | str) -> Mapping[str, str]:
        """Get the addresses for a chain.

        Args:
            chain_id: The chain id to look up.

        Returns:
            Mapping[str, str]: The chain's seaport and wrapped native token addresses.

        Raises:
            UnsupportedChainError: If the chain has no entry.

        """
        key = str(parse_chain_id(chain_id))
        try:
            return self._entries[key]
        except KeyError as err:
            raise UnsupportedChainError(key) from err

    def get_seaport_address(self, chain_id: int | str) -> str:
        """Get the Seaport contract address for a chain."""
        return self.get(chain_id)["seaport"]

    def get_wrapped_native_token(self, chain_id: int | str) -> str:
        """Get the wrapped native token address for a chain."""
        return self.get(chain_id)["wrapped_native_token"]


DEFAULT_ADDRESS_BOOK = AddressBook(DEFAULT_ADDRESSES)
