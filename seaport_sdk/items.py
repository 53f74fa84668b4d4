"""Builders for offer and consideration items."""

from decimal import Decimal
from typing import Any

from web3 import Web3

from .constants import ZERO_ADDRESS, ItemType
from .errors import InvalidItemTypeError
from .schemas import ConsiderationItem, OfferItem

Amount = int | str | Decimal


def parse_item_type(item_type: Any) -> ItemType:
    """Convert an item type code to an ItemType.

    Raises:
        InvalidItemTypeError: If the code is not one of the six item types.

    """
    if isinstance(item_type, bool):
        raise InvalidItemTypeError(item_type)
    try:
        return ItemType(item_type)
    except ValueError as err:
        raise InvalidItemTypeError(item_type) from err


def parse_ether(amount: Amount) -> int:
    """Convert an amount in ether units (e.g. "0.1") to wei."""
    return Web3.to_wei(Decimal(str(amount)), "ether")


def get_offer_or_consideration_item(
    item_type: Any = ItemType.NATIVE,
    token: str = ZERO_ADDRESS,
    identifier_or_criteria: int = 0,
    start_amount: int = 0,
    end_amount: int | None = None,
    recipient: str | None = None,
) -> OfferItem | ConsiderationItem:
    """Build an offer item, or a consideration item when a recipient is given.

    Args:
        item_type: The item type code.
        token: The token contract address, zero for native currency.
        identifier_or_criteria: The token id, or the merkle root of a criteria item.
        start_amount: The amount when the order starts.
        end_amount: The amount when the order ends. Defaults to start_amount.
        recipient: The address receiving a consideration item.

    Returns:
        OfferItem | ConsiderationItem: The validated item.

    Raises:
        InvalidItemTypeError: If the item type code is unknown.

    """
    fields = {
        "item_type": parse_item_type(item_type),
        "token": token or ZERO_ADDRESS,
        "identifier_or_criteria": int(identifier_or_criteria or 0),
        "start_amount": int(start_amount or 0),
        "end_amount": int(start_amount or 0) if end_amount is None else int(end_amount),
    }
    if isinstance(recipient, str):
        return ConsiderationItem(**fields, recipient=recipient)
    return OfferItem(**fields)


def get_item_native(
    start_amount: Amount, end_amount: Amount | None = None, recipient: str | None = None
) -> OfferItem | ConsiderationItem:
    """Native currency item, amounts in ether units."""
    start = parse_ether(start_amount)
    end = start if end_amount is None else parse_ether(end_amount)
    return get_offer_or_consideration_item(ItemType.NATIVE, ZERO_ADDRESS, 0, start, end, recipient)


def get_item_erc20(
    token: str,
    start_amount: Amount,
    end_amount: Amount | None = None,
    recipient: str | None = None,
) -> OfferItem | ConsiderationItem:
    """ERC20 item, amounts in ether units.

    Some ERC20 tokens like USDC only have 6 decimals, so 1 USDC is entered as 1e-12.
    """
    start = parse_ether(start_amount)
    end = start if end_amount is None else parse_ether(end_amount)
    return get_offer_or_consideration_item(ItemType.ERC20, token, 0, start, end, recipient)


def get_item_erc721(
    token: str, identifier_or_criteria: int, recipient: str | None = None
) -> OfferItem | ConsiderationItem:
    """ERC721 item for a single token id."""
    return get_offer_or_consideration_item(
        ItemType.ERC721, token, identifier_or_criteria, 1, 1, recipient
    )


def get_item_erc721_with_criteria(
    token: str, root: int, recipient: str | None = None
) -> OfferItem | ConsiderationItem:
    """ERC721 item for any token id under a merkle root."""
    return get_offer_or_consideration_item(
        ItemType.ERC721_WITH_CRITERIA, token, root, 1, 1, recipient
    )


def get_item_erc1155(
    token: str,
    identifier_or_criteria: int,
    start_amount: int = 1,
    end_amount: int | None = None,
    recipient: str | None = None,
) -> OfferItem | ConsiderationItem:
    """ERC1155 item for a single token id."""
    return get_offer_or_consideration_item(
        ItemType.ERC1155, token, identifier_or_criteria, start_amount, end_amount, recipient
    )


def get_item_erc1155_with_criteria(
    token: str,
    root: int,
    start_amount: int = 1,
    end_amount: int | None = None,
    recipient: str | None = None,
) -> OfferItem | ConsiderationItem:
    """ERC1155 item for any token id under a merkle root."""
    return get_offer_or_consideration_item(
        ItemType.ERC1155_WITH_CRITERIA, token, root, start_amount, end_amount, recipient
    )


def get_item(asset: dict[str, Any]) -> OfferItem | ConsiderationItem:
    """Build an item from a loosely typed asset description.

    Args:
        asset: Mapping with `item_type` and, depending on the type, `token`,
            `token_id`, `root`, `start_amount`, `end_amount` and `recipient`.

    Returns:
        OfferItem | ConsiderationItem: The formatted item.

    """
    item_type = parse_item_type(asset.get("item_type"))
    token = asset.get("token", ZERO_ADDRESS)
    start_amount = asset.get("start_amount", 0)
    end_amount = asset.get("end_amount")
    recipient = asset.get("recipient")

    if item_type == ItemType.NATIVE:
        return get_item_native(start_amount, end_amount, recipient)
    if item_type == ItemType.ERC20:
        return get_item_erc20(token, start_amount, end_amount, recipient)
    if item_type == ItemType.ERC721:
        return get_item_erc721(token, asset.get("token_id", 0), recipient)
    if item_type == ItemType.ERC1155:
        return get_item_erc1155(
            token, asset.get("token_id", 0), asset.get("start_amount", 1), end_amount, recipient
        )
    if item_type == ItemType.ERC721_WITH_CRITERIA:
        return get_item_erc721_with_criteria(token, asset.get("root", 0), recipient)
    if item_type == ItemType.ERC1155_WITH_CRITERIA:
        return get_item_erc1155_with_criteria(
            token, asset.get("root", 0), asset.get("start_amount", 1), end_amount, recipient
        )
    raise InvalidItemTypeError(item_type)


def amount_at(
    start_amount: int,
    end_amount: int,
    start_time: int,
    end_time: int,
    now: int,
    round_up: bool = False,
) -> int:
    """Interpolate an item amount linearly across the order's active window.

    Offer amounts round down and consideration amounts round up, matching the
    settlement contract.

    Args:
        start_amount: The amount at start_time.
        end_amount: The amount at end_time.
        start_time: Order start, in seconds.
        end_time: Order end, in seconds.
        now: The time to evaluate at, clamped into the window.
        round_up: Round the result up instead of down.

    Returns:
        int: The amount at `now`.

    """
    if start_amount == end_amount:
        return end_amount

    duration = end_time - start_time
    if duration <= 0:
        return end_amount

    elapsed = min(max(now - start_time, 0), duration)
    remaining = duration - elapsed
    total = start_amount * remaining + end_amount * elapsed
    extra_ceiling = duration - 1 if round_up else 0
    return (total + extra_ceiling) // duration
