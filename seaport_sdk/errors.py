"""Exceptions raised by the Seaport SDK."""


class SeaportError(Exception):
    """Base class for errors raised by the Seaport SDK."""


class InvalidItemTypeError(SeaportError, ValueError):
    """Raised when an item type code is outside the six known item types."""

    def __init__(self, item_type: object):
        super().__init__(f"Invalid item type: {item_type!r}")
        self.item_type = item_type


class UnsupportedItemTypeError(SeaportError, ValueError):
    """Raised when an operation has no behaviour defined for an item type."""

    def __init__(self, item_type: object):
        super().__init__(f"Unexpected itemType: {item_type!r}")
        self.item_type = item_type


class InvalidSignatureLengthError(SeaportError, ValueError):
    """Raised when a signature is neither 64 nor 65 bytes long."""

    def __init__(self, length: int):
        super().__init__(f"invalid signature length (must be 64 or 65 bytes), got {length}")
        self.length = length


class PayloadKindMismatchError(SeaportError, TypeError):
    """Raised when order components are passed where an order is expected, or the reverse."""


class UnsupportedChainError(SeaportError, ValueError):
    """Raised when a chain id has no entry in the address book."""

    def __init__(self, chain_id: object):
        super().__init__(f"Chain {chain_id} is not supported")
        self.chain_id = chain_id


class MissingSignerError(SeaportError):
    """Raised when a state-changing operation is requested without a signer."""

    def __init__(self, operation: str):
        super().__init__(f"Signer not defined, cannot {operation}")
        self.operation = operation


class UnresolvedAssetError(SeaportError, ValueError):
    """Raised when an offer item has no consideration item it can pay."""

    def __init__(self, order_index: int, item_index: int):
        super().__init__(
            f"No consideration item matches offer item {item_index} of order {order_index}"
        )
        self.order_index = order_index
        self.item_index = item_index
