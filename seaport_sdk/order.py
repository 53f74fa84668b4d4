"""Order assembly, hashing and signing."""

import logging
import secrets
from collections.abc import Sequence
from typing import Any

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from eth_utils import to_bytes, to_hex
from web3 import Web3

from .constants import (
    EIP_712_DOMAIN_TYPE,
    EIP_712_ORDER_TYPE,
    NO_CONDUIT_KEY,
    SEAPORT_CONTRACT_NAME,
    SEAPORT_CONTRACT_VERSION,
    ZERO_ADDRESS,
    ZERO_HASH,
    ItemType,
    OrderType,
)
from .errors import InvalidSignatureLengthError, SeaportError
from .schemas import (
    ConsiderationItem,
    CreatedOrder,
    ItemBase,
    OfferItem,
    Order,
    OrderComponents,
    OrderParameters,
    OrderStatus,
)

logger = logging.getLogger(__name__)

_SECP256K1_HALF_N = 0x7FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF5D576E7357A4501DDFE92F46681B20A0
_HIGH_BIT = 1 << 255


def build_typed_data(
    order_components: OrderComponents,
    chain_id: int,
    verifying_contract: str,
    version: str = SEAPORT_CONTRACT_VERSION,
) -> dict[str, Any]:
    """Build the EIP-712 typed data signed for an order."""
    return {
        "types": {"EIP712Domain": EIP_712_DOMAIN_TYPE, **EIP_712_ORDER_TYPE},
        "primaryType": "OrderComponents",
        "domain": {
            "name": SEAPORT_CONTRACT_NAME,
            "version": version,
            "chainId": int(chain_id),
            "verifyingContract": Web3.to_checksum_address(verifying_contract),
        },
        "message": order_components.to_struct(),
    }


def compute_order_hash(
    order_components: OrderComponents,
    chain_id: int,
    verifying_contract: str,
    version: str = SEAPORT_CONTRACT_VERSION,
) -> str:
    """Calculate the order hash off-chain.

    This is the EIP-712 struct hash of the order components, the same value
    returned by the contract's getOrderHash.
    """
    signable = encode_typed_data(
        full_message=build_typed_data(order_components, chain_id, verifying_contract, version)
    )
    return to_hex(signable.body)


async def get_order_hash(marketplace_contract: Any, order_components: OrderComponents) -> str:
    """Ask the Seaport contract for the hash of an order."""
    order_hash = await marketplace_contract.functions.getOrderHash(
        order_components.to_struct()
    ).call()
    return to_hex(order_hash)


async def get_order_status(marketplace_contract: Any, order_hash: str) -> OrderStatus:
    """Look up the order status for a given order hash."""
    is_validated, is_cancelled, total_filled, total_size = (
        await marketplace_contract.functions.getOrderStatus(order_hash).call()
    )
    return OrderStatus(
        is_validated=is_validated,
        is_cancelled=is_cancelled,
        total_filled=total_filled,
        total_size=total_size,
    )


def sign_order(
    signer: LocalAccount,
    chain_id: int,
    verifying_contract: str,
    order_components: OrderComponents,
    version: str = SEAPORT_CONTRACT_VERSION,
) -> str:
    """Sign an order's typed data.

    Returns:
        str: The 65 byte signature as 0x-prefixed hex.

    """
    typed_data = build_typed_data(order_components, chain_id, verifying_contract, version)
    signed_message = signer.sign_message(encode_typed_data(full_message=typed_data))
    return to_hex(signed_message.signature)


def convert_signature_to_eip2098(signature: str) -> str:
    """Compact a 65 byte signature into the 64 byte EIP-2098 form.

    A 64 byte signature is returned unchanged.

    Raises:
        InvalidSignatureLengthError: If the signature is neither 64 nor 65 bytes.

    """
    raw = to_bytes(hexstr=signature)
    if len(raw) == 64:
        return signature
    if len(raw) != 65:
        raise InvalidSignatureLengthError(len(raw))

    r = raw[:32]
    s = int.from_bytes(raw[32:64], "big")
    v = raw[64]
    if v < 27:
        v += 27
    if s > _SECP256K1_HALF_N:
        raise SeaportError("Signature s value is too high to be compacted")

    y_parity_and_s = ((v - 27) << 255) | s
    return to_hex(r + y_parity_and_s.to_bytes(32, "big"))


def expand_eip2098_signature(signature: str) -> str:
    """Expand a 64 byte EIP-2098 signature back to the 65 byte r, s, v form."""
    raw = to_bytes(hexstr=signature)
    if len(raw) == 65:
        return signature
    if len(raw) != 64:
        raise InvalidSignatureLengthError(len(raw))

    y_parity_and_s = int.from_bytes(raw[32:], "big")
    s = y_parity_and_s & (_HIGH_BIT - 1)
    v = 27 + (y_parity_and_s >> 255)
    return to_hex(raw[:32] + s.to_bytes(32, "big") + bytes([v]))


def recover_order_signer(
    signature: str,
    order_components: OrderComponents,
    chain_id: int,
    verifying_contract: str,
    version: str = SEAPORT_CONTRACT_VERSION,
) -> str:
    """Recover the address that signed an order, accepting compact signatures."""
    typed_data = build_typed_data(order_components, chain_id, verifying_contract, version)
    return Account.recover_message(
        encode_typed_data(full_message=typed_data),
        signature=expand_eip2098_signature(signature),
    )


def get_native_value(items: Sequence[ItemBase]) -> int:
    """Sum the largest amount of every native currency item."""
    return sum(
        max(item.start_amount, item.end_amount)
        for item in items
        if item.item_type == ItemType.NATIVE
    )


def random_salt() -> int:
    """Unpredictable 256 bit salt."""
    return secrets.randbits(256)


async def build_order(
    marketplace_contract: Any,
    chain_id: int,
    signer: LocalAccount,
    offer: Sequence[OfferItem],
    consideration: Sequence[ConsiderationItem],
    counter: int,
    start_time: int,
    end_time: int,
    order_type: OrderType = OrderType.FULL_OPEN,
    zone: str = ZERO_ADDRESS,
    zone_hash: str = ZERO_HASH,
    conduit_key: str = NO_CONDUIT_KEY,
    extra_cheap: bool = False,
    version: str = SEAPORT_CONTRACT_VERSION,
) -> CreatedOrder:
    """Assemble, hash and sign an order.

    Args:
        marketplace_contract: The Seaport contract binding.
        chain_id: The chain the order is signed for.
        signer: The offerer's account.
        offer: Items given by the offerer.
        consideration: Items the offerer expects to receive.
        counter: The offerer's current counter, read from the Seaport contract.
        start_time: Timestamp in seconds when the order becomes active.
        end_time: Timestamp in seconds when the order expires.
        order_type: One of the four order types.
        zone: Address that can execute restricted orders.
        zone_hash: The hash to provide upon calling the zone.
        conduit_key: The conduit key used to move the offerer's tokens.
        extra_cheap: Drop zone and salt and compact the signature to save gas.
        version: EIP-712 domain version of the deployed contract.

    Returns:
        CreatedOrder: The order, its hash, status, native value and components.

    """
    parameters = OrderParameters(
        offerer=signer.address,
        zone=ZERO_ADDRESS if extra_cheap else zone,
        offer=tuple(offer),
        consideration=tuple(consideration),
        order_type=order_type,
        start_time=start_time,
        end_time=end_time,
        zone_hash=zone_hash,
        salt=0 if extra_cheap else random_salt(),
        conduit_key=conduit_key,
        total_original_consideration_items=len(consideration),
    )
    order_components = OrderComponents.from_parameters(parameters, counter)

    order_hash = await get_order_hash(marketplace_contract, order_components)
    order_status = await get_order_status(marketplace_contract, order_hash)
    logger.debug(f"Order hash: {order_hash}, status: {order_status}")

    signature = sign_order(
        signer, chain_id, marketplace_contract.address, order_components, version
    )
    if extra_cheap:
        signature = convert_signature_to_eip2098(signature)

    order = Order(parameters=parameters, signature=signature)
    value = get_native_value([*offer, *consideration])

    return CreatedOrder(
        order=order,
        order_hash=order_hash,
        value=value,
        order_status=order_status,
        order_components=order_components,
    )
