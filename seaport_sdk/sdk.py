"""Seaport SDK for creating, fulfilling and matching orders."""

import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3

from . import approval, order as order_utils
from .addresses import parse_chain_id
from .config import SeaportConfig, resolve_config, to_key
from .constants import SEAPORT_ABI, ZERO_ADDRESS, ZERO_HASH, OrderType, Side
from .errors import MissingSignerError, PayloadKindMismatchError
from .fulfill import (
    FulfillmentMethod,
    FulfillmentStrategy,
    get_basic_order_parameters,
    select_fulfillment_strategy,
)
from .fulfillments import get_fulfillments
from .items import get_item
from .match import apply_gap_asset, get_fulfillment_refs
from .schemas import (
    AdditionalRecipient,
    ConsiderationItem,
    CreatedOrder,
    CriteriaResolver,
    ItemBase,
    OfferItem,
    Order,
    OrderComponents,
    OrderStatus,
)

logger = logging.getLogger(__name__)


def _has_counter(value: Any) -> bool:
    if isinstance(value, OrderComponents):
        return True
    if isinstance(value, Mapping):
        return value.get("counter") is not None
    return getattr(value, "counter", None) is not None


def ensure_order(value: Any) -> Order:
    """Reject order components where a signed order is required.

    Mappings without a counter are parsed into an Order.
    """
    if _has_counter(value):
        raise PayloadKindMismatchError("Not orderComponents, give me order")
    if isinstance(value, Mapping):
        return Order.model_validate(value)
    if not isinstance(value, Order):
        raise PayloadKindMismatchError(f"Expected an order, got {type(value).__name__}")
    return value


def ensure_order_components(value: Any) -> OrderComponents:
    """Reject signed orders where order components are required.

    Mappings with a counter are parsed into OrderComponents.
    """
    if not _has_counter(value):
        raise PayloadKindMismatchError("Not order, give me orderComponents")
    if isinstance(value, Mapping):
        return OrderComponents.model_validate(value)
    if not isinstance(value, OrderComponents):
        raise PayloadKindMismatchError(
            f"Expected order components, got {type(value).__name__}"
        )
    return value


class SeaportSDK:
    """Client for the Seaport marketplace contract."""

    def __init__(
        self,
        w3: AsyncWeb3,
        chain_id: int | str,
        signer: LocalAccount | None = None,
        config: SeaportConfig | None = None,
    ):
        """Initialize the SDK.

        Args:
            w3: Async web3 client. Transactions are sent from the signer's address, so
                the client must be able to sign for it (e.g. with a signing middleware).
            chain_id: Chain id as an int, decimal string or 0x-prefixed hex string.
            signer: Account used to sign orders and send transactions.
            config: Optional configuration, unset values fall back to environment variables.

        Raises:
            UnsupportedChainError: If the chain is not in the address book.

        """
        self.w3 = w3
        self.signer = signer
        self.chain_id = parse_chain_id(chain_id)
        self.config = resolve_config(config)
        self.marketplace_contract = w3.eth.contract(
            address=self.config.address_book.get_seaport_address(self.chain_id),
            abi=SEAPORT_ABI,
        )

    @classmethod
    async def connect(
        cls,
        w3: AsyncWeb3,
        signer: LocalAccount | None = None,
        chain_id: int | str | None = None,
        config: SeaportConfig | None = None,
    ) -> "SeaportSDK":
        """Create an SDK, reading the chain id from the node when it is not given."""
        if chain_id is None:
            chain_id = await w3.eth.chain_id
        return cls(w3, chain_id, signer=signer, config=config)

    @property
    def marketplace_address(self) -> str:
        """Address of the Seaport contract."""
        return self.marketplace_contract.address

    def _require_signer(self, operation: str) -> LocalAccount:
        if self.signer is None:
            logger.error(f"Cannot {operation} without a signer")
            raise MissingSignerError(operation)
        return self.signer

    def _tx_params(self, signer: LocalAccount, value: int | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"from": signer.address}
        if value:
            params["value"] = value
        return params

    async def load_approval_status(self, item: ItemBase, wallet_address: str) -> bool:
        """Check if an item is approved for trading with Seaport.

        If it is not, call approve_asset to approve it.
        """
        return await approval.get_approval_status(
            self.w3, wallet_address, self.marketplace_address, item
        )

    async def approve_asset(
        self,
        item: ItemBase,
        approve: bool = True,
        approve_only_token_id: bool = False,
        tx_params: dict[str, Any] | None = None,
    ) -> Any:
        """Approve (or revoke) Seaport for an ERC20, ERC721 or ERC1155 item."""
        signer = self._require_signer("approve an asset")
        return await approval.approve_asset(
            self.w3,
            self.marketplace_address,
            item,
            signer.address,
            approve=approve,
            approve_only_token_id=approve_only_token_id,
            tx_params=tx_params,
        )

    async def create_order(
        self,
        offer: Sequence[OfferItem],
        consideration: Sequence[ConsiderationItem],
        order_type: OrderType = OrderType.FULL_OPEN,
        start_time: int | None = None,
        end_time: int | None = None,
        zone: str = ZERO_ADDRESS,
        zone_hash: str = ZERO_HASH,
        conduit_key: str | None = None,
        extra_cheap: bool = False,
    ) -> CreatedOrder:
        """Create and sign an order.

        Args:
            offer: Items given by the signer.
            consideration: Items the signer expects to receive.
            order_type: One of the four order types.
            start_time: Timestamp in seconds, defaults to now.
            end_time: Timestamp in seconds, defaults to start_time plus the configured duration.
            zone: Address that can execute restricted orders.
            zone_hash: The hash to provide upon calling the zone.
            conduit_key: Conduit key for the signer's tokens, defaults to the configured key.
            extra_cheap: Drop zone and salt and compact the signature to save gas.

        Returns:
            CreatedOrder: The order, its hash, status, native value and components.

        """
        signer = self._require_signer("create an order")
        if start_time is None:
            start_time = int(time.time())
        if end_time is None:
            end_time = start_time + self.config.order_duration_seconds

        # The counter is part of the signed payload
        counter = await self.marketplace_contract.functions.getCounter(signer.address).call()

        created = await order_utils.build_order(
            self.marketplace_contract,
            self.chain_id,
            signer,
            offer,
            consideration,
            counter=counter,
            start_time=start_time,
            end_time=end_time,
            order_type=order_type,
            zone=zone,
            zone_hash=zone_hash,
            conduit_key=conduit_key or self.config.default_conduit_key,
            extra_cheap=extra_cheap,
            version=self.config.domain_version,
        )
        logger.debug(f"Created order {created.order_hash} with value {created.value}")
        return created

    def get_fulfillment_strategy(
        self, order: Order, criteria_resolvers: Sequence[CriteriaResolver] = ()
    ) -> FulfillmentStrategy:
        """Decide which entry point fulfill_order will use for an order."""
        return select_fulfillment_strategy(ensure_order(order), criteria_resolvers)

    async def fulfill_order(
        self,
        order: Order,
        value: int | None = None,
        criteria_resolvers: Sequence[CriteriaResolver] = (),
        fulfiller_conduit_key: str | None = None,
        recipient: str = ZERO_ADDRESS,
        tips: Sequence[AdditionalRecipient] = (),
    ) -> Any:
        """Fulfill an order with the cheapest entry point that accepts it.

        Args:
            order: The signed order to fulfill.
            value: Native currency to send, get it from create_order.
            criteria_resolvers: Resolvers for criteria items. Each references a
                specific offer or consideration item, a token identifier, and a
                proof that the identifier is contained in the item's merkle root.
            fulfiller_conduit_key: Conduit key for the fulfiller's tokens.
            recipient: Receiver of the offer items for advanced orders, zero means the caller.
            tips: Extra recipients paid alongside a basic order.

        Returns:
            The transaction hash.

        """
        order = ensure_order(order)
        strategy = select_fulfillment_strategy(order, criteria_resolvers)
        signer = self._require_signer("fulfill an order")
        params = self._tx_params(signer, value)
        conduit_key = to_key(fulfiller_conduit_key or self.config.default_conduit_key)

        if strategy.method == FulfillmentMethod.ADVANCED:
            return await self.marketplace_contract.functions.fulfillAdvancedOrder(
                order.to_advanced_struct(),
                [resolver.to_struct() for resolver in criteria_resolvers],
                conduit_key,
                Web3.to_checksum_address(recipient),
            ).transact(params)

        if strategy.method == FulfillmentMethod.BASIC:
            basic_order_parameters = get_basic_order_parameters(
                strategy.route, order, conduit_key, tips
            )
            return await self.marketplace_contract.functions.fulfillBasicOrder(
                basic_order_parameters.to_struct()
            ).transact(params)

        return await self.marketplace_contract.functions.fulfillOrder(
            order.to_struct(), conduit_key
        ).transact(params)

    async def cancel_orders(
        self, order_components: OrderComponents | Iterable[OrderComponents]
    ) -> Any:
        """Cancel orders. Only the offerer or the zone of an order may cancel it.

        Args:
            order_components: One or more order components, as returned by create_order.

        Returns:
            The transaction hash.

        """
        if isinstance(order_components, OrderComponents | Order | Mapping):
            order_components = [order_components]
        components = [ensure_order_components(value) for value in order_components]
        signer = self._require_signer("cancel orders")
        return await self.marketplace_contract.functions.cancel(
            [value.to_struct() for value in components]
        ).transact(self._tx_params(signer))

    async def validate_orders(self, orders: Order | Iterable[Order]) -> Any:
        """Validate orders, registering their signatures on-chain.

        Validated orders may still be unfulfillable because of item amounts or
        other factors. Anyone can validate a signed order, but only the offerer
        can validate an order without a signature.

        Returns:
            The transaction hash.

        """
        if isinstance(orders, OrderComponents | Order | Mapping):
            orders = [orders]
        checked = [ensure_order(value) for value in orders]
        signer = self._require_signer("validate orders")
        return await self.marketplace_contract.functions.validate(
            [value.to_struct() for value in checked]
        ).transact(self._tx_params(signer))

    async def match_orders(
        self,
        order: Order,
        order_to_match: Order,
        gap_asset: ConsiderationItem | None = None,
        value: int | None = None,
    ) -> Any:
        """Match two orders, each offer item paying the consideration items it satisfies.

        Criteria based and partial fills are not supported by matchOrders.

        Args:
            order: The order to be matched.
            order_to_match: The order to match it with.
            gap_asset: Consideration item for the price difference, e.g. an English
                auction settled above its floor.
            value: Native currency to send.

        Returns:
            The transaction hash.

        """
        order = ensure_order(order)
        order_to_match = ensure_order(order_to_match)
        entries = get_fulfillment_refs(order, order_to_match)

        if gap_asset is not None:
            order, entries = apply_gap_asset(order, entries, gap_asset)

        fulfillments = get_fulfillments(entries)
        signer = self._require_signer("match orders")
        return await self.marketplace_contract.functions.matchOrders(
            [order.to_struct(), order_to_match.to_struct()],
            [fulfillment.to_struct() for fulfillment in fulfillments],
        ).transact(self._tx_params(signer, value))

    async def get_order_status(self, order_hash: str) -> OrderStatus:
        """Look up the order status for a given order hash."""
        return await order_utils.get_order_status(self.marketplace_contract, order_hash)

    def get_wrapped_token_address(self, chain_id: int | str | None = None) -> str:
        """Get the wrapped native token address, for this SDK's chain by default."""
        return self.config.address_book.get_wrapped_native_token(
            self.chain_id if chain_id is None else chain_id
        )

    def get_item(self, asset: dict[str, Any]) -> OfferItem | ConsiderationItem:
        """Build an item from a loosely typed asset description."""
        return get_item(asset)

    def build_resolver(
        self,
        order_index: int,
        side: Side,
        index: int,
        identifier: int,
        criteria_proof: Sequence[str] = (),
    ) -> CriteriaResolver:
        """Build a criteria resolver for fulfill_order."""
        return CriteriaResolver(
            order_index=order_index,
            side=side,
            index=index,
            identifier=identifier,
            criteria_proof=tuple(criteria_proof),
        )
