"""Choosing the Seaport entry point that can fulfill a single order."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .config import to_key
from .constants import NO_CONDUIT_KEY, BasicOrderRouteType, ItemType
from .schemas import AdditionalRecipient, BasicOrderParameters, CriteriaResolver, Order

logger = logging.getLogger(__name__)

# Offer type -> consideration type -> route
_BASIC_ORDER_ROUTES: dict[ItemType, dict[ItemType, BasicOrderRouteType]] = {
    ItemType.ERC20: {
        ItemType.ERC721: BasicOrderRouteType.ERC721_TO_ERC20,
        ItemType.ERC1155: BasicOrderRouteType.ERC1155_TO_ERC20,
    },
    ItemType.ERC721: {
        ItemType.NATIVE: BasicOrderRouteType.ETH_TO_ERC721,
        ItemType.ERC20: BasicOrderRouteType.ERC20_TO_ERC721,
    },
    ItemType.ERC1155: {
        ItemType.NATIVE: BasicOrderRouteType.ETH_TO_ERC1155,
        ItemType.ERC20: BasicOrderRouteType.ERC20_TO_ERC1155,
    },
}

_BASIC_PAYMENT_ITEM_TYPES = frozenset({ItemType.NATIVE, ItemType.ERC20})
_BASIC_PURCHASED_ITEM_TYPES = frozenset({ItemType.ERC721, ItemType.ERC1155})


class FulfillmentMethod(str, Enum):
    """Seaport entry points for fulfilling a single order."""

    BASIC = "fulfillBasicOrder"
    STANDARD = "fulfillOrder"
    ADVANCED = "fulfillAdvancedOrder"


@dataclass(frozen=True)
class FulfillmentStrategy:
    """How an order will be fulfilled."""

    method: FulfillmentMethod
    route: BasicOrderRouteType | None = None

    @property
    def is_basic(self) -> bool:
        """Whether the gas optimized basic entry point applies."""
        return self.method == FulfillmentMethod.BASIC


def get_basic_order_route_type(
    offer_item_type: ItemType, consideration_item_type: ItemType
) -> BasicOrderRouteType | None:
    """Get the basic order route for an offer/consideration type pair, None if there is none."""
    return _BASIC_ORDER_ROUTES.get(offer_item_type, {}).get(consideration_item_type)


def is_basic_order_shape(order: Order) -> bool:
    """Check the item shape fulfillBasicOrder accepts.

    An ERC20 offer must buy an ERC721 or ERC1155 first consideration item, with
    only ERC20 legs after it. An ERC721 or ERC1155 offer must be paid with
    native currency or ERC20, every consideration leg sharing the first one's type.
    """
    offer = order.parameters.offer
    consideration = order.parameters.consideration
    if len(offer) != 1 or not consideration:
        return False

    offer_item_type = offer[0].item_type
    first_item_type = consideration[0].item_type
    remaining_item_types = {item.item_type for item in consideration[1:]}

    if offer_item_type == ItemType.ERC20:
        return first_item_type in _BASIC_PURCHASED_ITEM_TYPES and remaining_item_types <= {
            ItemType.ERC20
        }

    if offer_item_type in _BASIC_PURCHASED_ITEM_TYPES:
        return first_item_type in _BASIC_PAYMENT_ITEM_TYPES and remaining_item_types <= {
            first_item_type
        }

    return False


def select_fulfillment_strategy(
    order: Order, criteria_resolvers: Sequence[CriteriaResolver] = ()
) -> FulfillmentStrategy:
    """Decide which entry point can fulfill an order.

    An order carrying a fill fraction (any numerator, even 1/1) or criteria
    resolvers always needs fulfillAdvancedOrder. An order with a basic shape
    uses fulfillBasicOrder, anything else fulfillOrder.
    """
    if order.is_partial or criteria_resolvers:
        strategy = FulfillmentStrategy(FulfillmentMethod.ADVANCED)
    elif is_basic_order_shape(order):
        route = get_basic_order_route_type(
            order.parameters.offer[0].item_type, order.parameters.consideration[0].item_type
        )
        strategy = FulfillmentStrategy(FulfillmentMethod.BASIC, route)
    else:
        strategy = FulfillmentStrategy(FulfillmentMethod.STANDARD)

    logger.debug(f"Fulfilling order by {order.parameters.offerer} with {strategy}")
    return strategy


def get_basic_order_parameters(
    basic_order_route_type: BasicOrderRouteType,
    order: Order,
    fulfiller_conduit_key: str | None = None,
    tips: Sequence[AdditionalRecipient] = (),
) -> BasicOrderParameters:
    """Pack an order into the parameters taken by fulfillBasicOrder.

    Args:
        basic_order_route_type: The route chosen for the order.
        order: The order to fulfill.
        fulfiller_conduit_key: Conduit key for the fulfiller's tokens, no conduit if None.
        tips: Extra recipients appended after the order's own consideration legs.

    Returns:
        BasicOrderParameters: The packed parameters.

    """
    parameters = order.parameters
    offer_item = parameters.offer[0]
    consideration_item = parameters.consideration[0]

    return BasicOrderParameters(
        offerer=parameters.offerer,
        zone=parameters.zone,
        basic_order_type=int(parameters.order_type) + 4 * int(basic_order_route_type),
        offer_token=offer_item.token,
        offer_identifier=offer_item.identifier_or_criteria,
        offer_amount=offer_item.end_amount,
        consideration_token=consideration_item.token,
        consideration_identifier=consideration_item.identifier_or_criteria,
        consideration_amount=consideration_item.end_amount,
        start_time=parameters.start_time,
        end_time=parameters.end_time,
        zone_hash=parameters.zone_hash,
        salt=parameters.salt,
        total_original_additional_recipients=len(parameters.consideration) - 1,
        signature=order.signature,
        offerer_conduit_key=parameters.conduit_key,
        fulfiller_conduit_key=to_key(fulfiller_conduit_key or NO_CONDUIT_KEY),
        additional_recipients=(
            *(
                AdditionalRecipient(amount=item.end_amount, recipient=item.recipient)
                for item in parameters.consideration[1:]
            ),
            *tips,
        ),
    )
