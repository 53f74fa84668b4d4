"""Approval checks and approval transactions for Seaport items."""

import asyncio
import logging
from typing import Any

from web3 import AsyncWeb3, Web3

from .constants import (
    ERC20_ABI,
    ERC721_ABI,
    ERC721_ITEM_TYPES,
    ERC1155_ABI,
    ERC1155_ITEM_TYPES,
    MAX_APPROVAL,
    MAX_APPROVAL_WITH_BUFFER,
    ItemType,
)
from .errors import UnsupportedItemTypeError
from .schemas import ItemBase

logger = logging.getLogger(__name__)


def _item_type(item: ItemBase) -> ItemType:
    try:
        return ItemType(item.item_type)
    except ValueError as err:
        raise UnsupportedItemTypeError(item.item_type) from err


async def get_approval_status(
    w3: AsyncWeb3, owner_address: str, spender_address: str, item: ItemBase
) -> bool:
    """Check whether the spender can already move the owner's item.

    Args:
        w3: The web3 client used for contract reads.
        owner_address: The wallet address that owns the item.
        spender_address: The address that needs to move the item, usually Seaport or a conduit.
        item: The offer or consideration item.

    Returns:
        bool: True if no approval transaction is needed.

    Raises:
        UnsupportedItemTypeError: If the item type is unknown.

    """
    item_type = _item_type(item)
    owner = Web3.to_checksum_address(owner_address)
    spender = Web3.to_checksum_address(spender_address)

    if item_type == ItemType.NATIVE:
        return True

    if item_type == ItemType.ERC20:
        erc20 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC20_ABI)
        allowance = await erc20.functions.allowance(owner, spender).call()
        logger.debug(f"ERC20 {item.token} allowance from {owner} to {spender}: {allowance}")
        return allowance >= MAX_APPROVAL_WITH_BUFFER

    if item_type in ERC721_ITEM_TYPES:
        erc721 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC721_ABI)
        approved_for_all, approved_address_for_id = await asyncio.gather(
            erc721.functions.isApprovedForAll(owner, spender).call(),
            erc721.functions.getApproved(item.identifier_or_criteria).call(),
        )
        token_id_approved = str(approved_address_for_id).lower() == spender.lower()
        return bool(approved_for_all) or token_id_approved

    if item_type in ERC1155_ITEM_TYPES:
        erc1155 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC1155_ABI)
        return bool(await erc1155.functions.isApprovedForAll(owner, spender).call())

    raise UnsupportedItemTypeError(item_type)


async def approve_asset(
    w3: AsyncWeb3,
    spender_address: str,
    item: ItemBase,
    sender_address: str,
    approve: bool = True,
    approve_only_token_id: bool = False,
    tx_params: dict[str, Any] | None = None,
) -> Any:
    """Send the transaction approving (or revoking) the spender for an item.

    ERC20 tokens are approved for MAX_APPROVAL, ERC721 collections with
    setApprovalForAll unless only the single token id should be approved, and
    ERC1155 collections with setApprovalForAll. Native currency has nothing to approve.

    Args:
        w3: The web3 client, configured to sign for sender_address.
        spender_address: The address being approved.
        item: The item to approve.
        sender_address: The owner sending the transaction.
        approve: Approve when True, revoke when False.
        approve_only_token_id: For ERC721, approve only the item's token id.
        tx_params: Extra transaction parameters such as gas settings.

    Returns:
        The transaction hash, or None when no transaction is needed.

    """
    item_type = _item_type(item)
    spender = Web3.to_checksum_address(spender_address)
    params = {**(tx_params or {}), "from": Web3.to_checksum_address(sender_address)}

    if item_type == ItemType.NATIVE:
        return None

    if item_type == ItemType.ERC20:
        erc20 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC20_ABI)
        amount = MAX_APPROVAL if approve else 0
        logger.debug(f"Approving {amount} of ERC20 {item.token} for {spender}")
        return await erc20.functions.approve(spender, amount).transact(params)

    if item_type in ERC721_ITEM_TYPES:
        erc721 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC721_ABI)
        if approve_only_token_id:
            logger.debug(
                f"Approving ERC721 {item.token} #{item.identifier_or_criteria} for {spender}"
            )
            return await erc721.functions.approve(spender, item.identifier_or_criteria).transact(
                params
            )
        logger.debug(f"Setting ERC721 {item.token} approval for all to {approve} for {spender}")
        return await erc721.functions.setApprovalForAll(spender, approve).transact(params)

    if item_type in ERC1155_ITEM_TYPES:
        # ERC1155s can only approve all
        erc1155 = w3.eth.contract(address=Web3.to_checksum_address(item.token), abi=ERC1155_ABI)
        logger.debug(f"Setting ERC1155 {item.token} approval for all to {approve} for {spender}")
        return await erc1155.functions.setApprovalForAll(spender, approve).transact(params)

    raise UnsupportedItemTypeError(item_type)
