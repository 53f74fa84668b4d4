"""Schemas for Seaport items, orders and fulfillments."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from web3 import Web3

from .config import to_key
from .constants import (
    NO_CONDUIT_KEY,
    ZERO_ADDRESS,
    ZERO_HASH,
    BasicOrderRouteType,
    ItemType,
    OrderType,
    Side,
)


class SeaportModel(BaseModel):
    """Base model, fields are snake_case in Python and camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_struct(self) -> dict[str, Any]:
        """Dump the model in the shape the Seaport contract and EIP-712 encoder expect."""
        return self.model_dump(by_alias=True, mode="json")


class ItemBase(SeaportModel):
    """Fields shared by offer and consideration items."""

    item_type: ItemType = Field(..., description="Type of the asset")
    token: str = Field(ZERO_ADDRESS, description="Token contract address, zero for native")
    identifier_or_criteria: int = Field(
        0, ge=0, description="Token id, or merkle root for criteria items"
    )
    start_amount: int = Field(0, ge=0, description="Amount when the order starts")
    end_amount: int = Field(0, ge=0, description="Amount when the order ends")

    @field_validator("token")
    @classmethod
    def checksum_token(cls, value: str) -> str:
        """Normalize the token address to its checksum form."""
        return Web3.to_checksum_address(value)

    @model_validator(mode="after")
    def check_erc721_amounts(self):
        """ERC721 items always move exactly one token."""
        if self.item_type == ItemType.ERC721 and (self.start_amount, self.end_amount) != (1, 1):
            raise ValueError("ERC721 items must have a start and end amount of 1")
        return self


class OfferItem(ItemBase):
    """An item given by the offerer."""


class ConsiderationItem(ItemBase):
    """An item the offerer expects to receive, paid to the recipient."""

    recipient: str = Field(..., description="Address receiving this item")

    @field_validator("recipient")
    @classmethod
    def checksum_recipient(cls, value: str) -> str:
        """Normalize the recipient address to its checksum form."""
        return Web3.to_checksum_address(value)


class _OrderHeader(SeaportModel):
    offerer: str
    zone: str = ZERO_ADDRESS
    offer: tuple[OfferItem, ...]
    consideration: tuple[ConsiderationItem, ...]
    order_type: OrderType = OrderType.FULL_OPEN
    start_time: int = Field(..., ge=0)
    end_time: int = Field(..., ge=0)
    zone_hash: str = ZERO_HASH
    salt: int = Field(0, ge=0)
    conduit_key: str = NO_CONDUIT_KEY

    @field_validator("offerer", "zone")
    @classmethod
    def checksum_address(cls, value: str) -> str:
        """Normalize addresses to their checksum form."""
        return Web3.to_checksum_address(value)

    @field_validator("zone_hash", "conduit_key", mode="before")
    @classmethod
    def normalize_key(cls, value: int | str | bytes) -> str:
        """Store 32 byte values as 0x-prefixed hex."""
        return to_key(value)

    @model_validator(mode="after")
    def check_times(self):
        """An order cannot end before it starts."""
        if self.start_time > self.end_time:
            raise ValueError(f"startTime {self.start_time} is after endTime {self.end_time}")
        return self


class OrderParameters(_OrderHeader):
    """The fields of an order that travel with it to fulfillment."""

    total_original_consideration_items: int = Field(..., ge=0)


class OrderComponents(_OrderHeader):
    """The signed payload of an order, used for hashing, signing and cancellation."""

    counter: int = Field(..., ge=0)

    @classmethod
    def from_parameters(cls, parameters: OrderParameters, counter: int) -> "OrderComponents":
        """Build order components from order parameters and the offerer's counter."""
        fields = parameters.model_dump(exclude={"total_original_consideration_items"})
        return cls(**fields, counter=counter)


class Order(SeaportModel):
    """A signed order ready for fulfillment."""

    parameters: OrderParameters
    signature: str = "0x"
    # Only set when filling a fraction of the order; unset means a whole fill
    numerator: int | None = Field(None, ge=0)
    denominator: int | None = Field(None, ge=0)
    extra_data: str = "0x"

    @property
    def is_partial(self) -> bool:
        """Whether the order carries a fill fraction, which only fulfillAdvancedOrder accepts."""
        return bool(self.numerator)

    def to_struct(self) -> dict[str, Any]:
        """Dump as the `Order` struct taken by fulfillOrder, validate and matchOrders."""
        return {"parameters": self.parameters.to_struct(), "signature": self.signature}

    def to_advanced_struct(self) -> dict[str, Any]:
        """Dump as the `AdvancedOrder` struct taken by fulfillAdvancedOrder.

        An order without a fraction is filled whole, as 1/1.
        """
        struct = super().to_struct()
        struct["numerator"] = self.numerator or 1
        struct["denominator"] = self.denominator or 1
        return struct


class OrderStatus(SeaportModel):
    """Status of an order as recorded by the Seaport contract."""

    is_validated: bool
    is_cancelled: bool
    total_filled: int
    total_size: int

    @property
    def is_fillable(self) -> bool:
        """Whether the order is neither cancelled nor fully filled."""
        if self.is_cancelled:
            return False
        return self.total_size == 0 or self.total_filled < self.total_size


class CreatedOrder(SeaportModel):
    """Everything produced when an order is created."""

    order: Order
    order_hash: str
    # How much native currency (at most) needs to be supplied when fulfilling the order
    value: int
    order_status: OrderStatus
    order_components: OrderComponents


class FulfillmentComponent(SeaportModel):
    """Reference to one item of one order in a list of orders."""

    order_index: int = Field(..., ge=0)
    item_index: int = Field(..., ge=0)


class Fulfillment(SeaportModel):
    """Offer items on the left pay the consideration items on the right."""

    offer_components: tuple[FulfillmentComponent, ...]
    consideration_components: tuple[FulfillmentComponent, ...]


class AdditionalRecipient(SeaportModel):
    """An extra consideration leg of a basic order."""

    amount: int = Field(..., ge=0)
    recipient: str

    @field_validator("recipient")
    @classmethod
    def checksum_recipient(cls, value: str) -> str:
        """Normalize the recipient address to its checksum form."""
        return Web3.to_checksum_address(value)


class BasicOrderParameters(SeaportModel):
    """Parameters taken by fulfillBasicOrder."""

    consideration_token: str
    consideration_identifier: int
    consideration_amount: int
    offerer: str
    zone: str
    offer_token: str
    offer_identifier: int
    offer_amount: int
    basic_order_type: int
    start_time: int
    end_time: int
    zone_hash: str
    salt: int
    offerer_conduit_key: str
    fulfiller_conduit_key: str
    total_original_additional_recipients: int
    additional_recipients: tuple[AdditionalRecipient, ...]
    signature: str

    @property
    def route(self) -> BasicOrderRouteType:
        """The route packed into the basic order type."""
        return BasicOrderRouteType(self.basic_order_type // 4)


class CriteriaResolver(SeaportModel):
    """Resolves a criteria item to a concrete token id with a merkle proof."""

    order_index: int = Field(..., ge=0)
    side: Side
    index: int = Field(..., ge=0)
    identifier: int = Field(..., ge=0)
    criteria_proof: tuple[str, ...] = ()

    @field_validator("criteria_proof", mode="before")
    @classmethod
    def normalize_proof(cls, proof) -> tuple[str, ...]:
        """Store proof nodes as 0x-prefixed 32 byte hex."""
        return tuple(to_key(node) for node in proof)
