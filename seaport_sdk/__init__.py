"""Seaport SDK."""

from .addresses import DEFAULT_ADDRESS_BOOK, AddressBook, parse_chain_id
from .approval import approve_asset, get_approval_status
from .config import SeaportConfig, to_key
from .constants import BasicOrderRouteType, ItemType, OrderType, Side
from .errors import (
    InvalidItemTypeError,
    InvalidSignatureLengthError,
    MissingSignerError,
    PayloadKindMismatchError,
    SeaportError,
    UnresolvedAssetError,
    UnsupportedChainError,
    UnsupportedItemTypeError,
)
from .fulfill import FulfillmentMethod, FulfillmentStrategy, select_fulfillment_strategy
from .fulfillments import get_fulfillments
from .items import (
    get_item,
    get_item_erc20,
    get_item_erc721,
    get_item_erc721_with_criteria,
    get_item_erc1155,
    get_item_erc1155_with_criteria,
    get_item_native,
    get_offer_or_consideration_item,
)
from .match import apply_gap_asset, get_fulfillment_refs
from .order import build_order, compute_order_hash, convert_signature_to_eip2098
from .schemas import (
    ConsiderationItem,
    CreatedOrder,
    CriteriaResolver,
    Fulfillment,
    FulfillmentComponent,
    OfferItem,
    Order,
    OrderComponents,
    OrderParameters,
    OrderStatus,
)
from .sdk import SeaportSDK

__all__ = [
    "DEFAULT_ADDRESS_BOOK",
    "AddressBook",
    "BasicOrderRouteType",
    "ConsiderationItem",
    "CreatedOrder",
    "CriteriaResolver",
    "Fulfillment",
    "FulfillmentComponent",
    "FulfillmentMethod",
    "FulfillmentStrategy",
    "InvalidItemTypeError",
    "InvalidSignatureLengthError",
    "ItemType",
    "MissingSignerError",
    "OfferItem",
    "Order",
    "OrderComponents",
    "OrderParameters",
    "OrderStatus",
    "OrderType",
    "PayloadKindMismatchError",
    "SeaportConfig",
    "SeaportError",
    "SeaportSDK",
    "Side",
    "UnresolvedAssetError",
    "UnsupportedChainError",
    "UnsupportedItemTypeError",
    "apply_gap_asset",
    "approve_asset",
    "build_order",
    "compute_order_hash",
    "convert_signature_to_eip2098",
    "get_approval_status",
    "get_fulfillment_refs",
    "get_fulfillments",
    "get_item",
    "get_item_erc20",
    "get_item_erc721",
    "get_item_erc721_with_criteria",
    "get_item_erc1155",
    "get_item_erc1155_with_criteria",
    "get_item_native",
    "get_offer_or_consideration_item",
    "parse_chain_id",
    "select_fulfillment_strategy",
    "to_key",
]
