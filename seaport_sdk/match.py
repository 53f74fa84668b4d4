"""Deriving the fulfillments that settle two orders against each other."""

import logging
from collections.abc import Sequence

from .constants import ItemType
from .errors import SeaportError, UnresolvedAssetError
from .fulfillments import ComponentRef, FulfillmentRefs
from .schemas import ConsiderationItem, OfferItem, Order

logger = logging.getLogger(__name__)

# Offer items of these types may pay any number of consideration legs.
FUNGIBLE_ITEM_TYPES = frozenset({ItemType.ERC20})

ORDER_INDEX = 0
ORDER_TO_MATCH_INDEX = 1


def is_item_match(offer_item: OfferItem, consideration_item: ConsiderationItem) -> bool:
    """Whether an offer item can pay a consideration item.

    Tokens must be the same; non-fungible items must also share the identifier.
    """
    if offer_item.token.lower() != consideration_item.token.lower():
        return False
    if offer_item.item_type in FUNGIBLE_ITEM_TYPES:
        return True
    return offer_item.identifier_or_criteria == consideration_item.identifier_or_criteria


def _scan(
    offer: Sequence[OfferItem],
    offer_order_index: int,
    consideration: Sequence[ConsiderationItem],
    consideration_order_index: int,
    matched: set[int],
    fungible_only: bool = False,
) -> list[FulfillmentRefs]:
    entries: list[FulfillmentRefs] = []
    for offer_index, offer_item in enumerate(offer):
        fungible = offer_item.item_type in FUNGIBLE_ITEM_TYPES
        if fungible_only and not fungible:
            continue
        for consideration_index, consideration_item in enumerate(consideration):
            if not is_item_match(offer_item, consideration_item):
                continue
            entries.append(
                (
                    [(offer_order_index, offer_index)],
                    [(consideration_order_index, consideration_index)],
                )
            )
            matched.add(offer_index)
            # First match wins for items that cannot be split across legs
            if not fungible:
                break
    return entries


def get_fulfillment_refs(order: Order, order_to_match: Order) -> list[FulfillmentRefs]:
    """Pair every offer item of two orders with the consideration items it pays.

    Every offer item is scanned against the other order's consideration. Only
    fungible offer items are then scanned against their own order's
    consideration as well, so non-fungible items never pay their own order.
    Results are concatenated as order -> order_to_match, order -> order,
    order_to_match -> order, order_to_match -> order_to_match. Amounts are not
    checked; the settlement contract does that.

    Args:
        order: The first order, index 0 in the matchOrders call.
        order_to_match: The second order, index 1 in the matchOrders call.

    Returns:
        list[FulfillmentRefs]: (offer refs, consideration refs) pairs of (order index, item index).

    Raises:
        UnresolvedAssetError: If an offer item matches no consideration item.

    """
    offer = order.parameters.offer
    consideration = order.parameters.consideration
    offer_to_match = order_to_match.parameters.offer
    consideration_to_match = order_to_match.parameters.consideration

    matched: set[int] = set()
    matched_to_match: set[int] = set()

    entries = [
        *_scan(offer, ORDER_INDEX, consideration_to_match, ORDER_TO_MATCH_INDEX, matched),
        *_scan(offer, ORDER_INDEX, consideration, ORDER_INDEX, matched, fungible_only=True),
        *_scan(offer_to_match, ORDER_TO_MATCH_INDEX, consideration, ORDER_INDEX, matched_to_match),
        *_scan(
            offer_to_match,
            ORDER_TO_MATCH_INDEX,
            consideration_to_match,
            ORDER_TO_MATCH_INDEX,
            matched_to_match,
            fungible_only=True,
        ),
    ]

    for order_index, items, found in (
        (ORDER_INDEX, offer, matched),
        (ORDER_TO_MATCH_INDEX, offer_to_match, matched_to_match),
    ):
        for item_index in range(len(items)):
            if item_index not in found:
                raise UnresolvedAssetError(order_index, item_index)

    logger.debug(f"Matched orders into {len(entries)} fulfillments: {entries}")
    return entries


def apply_gap_asset(
    order: Order, entries: Sequence[FulfillmentRefs], gap_asset: ConsiderationItem
) -> tuple[Order, list[FulfillmentRefs]]:
    """Add a consideration item covering the price difference between two matched orders.

    Used when settling an English auction above its floor price. The gap item
    is appended to the first order's consideration and paid by the second
    fulfillment. Neither input is modified.

    Returns:
        tuple[Order, list[FulfillmentRefs]]: The extended order and fulfillment references.

    """
    if len(entries) < 2:
        raise SeaportError("A gap asset needs at least two fulfillments to attach to")

    consideration = order.parameters.consideration
    gap_ref: ComponentRef = (ORDER_INDEX, len(consideration))

    patched = [
        (list(offer_refs), list(consideration_refs))
        for offer_refs, consideration_refs in entries
    ]
    patched[1][1].append(gap_ref)

    parameters = order.parameters.model_copy(
        update={"consideration": (*consideration, gap_asset)}
    )
    return order.model_copy(update={"parameters": parameters}), patched
