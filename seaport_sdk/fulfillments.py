"""Encoding of (order index, item index) pairs into Seaport fulfillments."""

from collections.abc import Iterable, Sequence

from .schemas import Fulfillment, FulfillmentComponent

# (order index, item index)
ComponentRef = tuple[int, int]
# (offer side references, consideration side references)
FulfillmentRefs = tuple[Sequence[ComponentRef], Sequence[ComponentRef]]


def to_fulfillment_components(refs: Iterable[ComponentRef]) -> tuple[FulfillmentComponent, ...]:
    """Convert index pairs into fulfillment components, keeping their order."""
    return tuple(
        FulfillmentComponent(order_index=order_index, item_index=item_index)
        for order_index, item_index in refs
    )


def to_fulfillment(
    offer_refs: Iterable[ComponentRef], consideration_refs: Iterable[ComponentRef]
) -> Fulfillment:
    """Build one fulfillment from its offer and consideration references."""
    return Fulfillment(
        offer_components=to_fulfillment_components(offer_refs),
        consideration_components=to_fulfillment_components(consideration_refs),
    )


def get_fulfillments(entries: Iterable[FulfillmentRefs]) -> list[Fulfillment]:
    """Convert matcher output into the fulfillments taken by matchOrders."""
    return [
        to_fulfillment(offer_refs, consideration_refs)
        for offer_refs, consideration_refs in entries
    ]
