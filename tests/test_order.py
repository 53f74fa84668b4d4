import asyncio
from unittest.mock import patch

import pytest
from eth_utils import to_bytes
from pydantic import ValidationError

from seaport_sdk.constants import ZERO_ADDRESS, ZERO_HASH, ItemType, OrderType
from seaport_sdk.errors import InvalidSignatureLengthError
from seaport_sdk.order import (
    build_order,
    build_typed_data,
    compute_order_hash,
    convert_signature_to_eip2098,
    expand_eip2098_signature,
    get_native_value,
    random_salt,
    recover_order_signer,
    sign_order,
)
from seaport_sdk.schemas import OrderComponents, OrderParameters


@pytest.fixture
def listing_items(accounts, offer_item, consideration_item):
    """ERC721 offered for native currency plus a fee."""
    offer = [offer_item(ItemType.ERC721, identifier=5)]
    consideration = [
        consideration_item(
            ItemType.NATIVE,
            token=ZERO_ADDRESS,
            start_amount=900,
            end_amount=1000,
            recipient=accounts["seller"],
        ),
        consideration_item(
            ItemType.NATIVE,
            token=ZERO_ADDRESS,
            start_amount=25,
            recipient=accounts["fee_recipient"],
        ),
    ]
    return offer, consideration


@pytest.fixture
def order_components(signer, listing_items):
    """Order components signed by the test signer."""
    offer, consideration = listing_items
    return OrderComponents(
        offerer=signer.address,
        offer=offer,
        consideration=consideration,
        start_time=1_700_000_000,
        end_time=1_700_086_400,
        salt=123,
        counter=0,
    )


def test_typed_data_domain(order_components, accounts):
    """Test the EIP-712 domain and message layout."""
    typed_data = build_typed_data(order_components, accounts["chain_id"], accounts["seaport"])
    assert typed_data["primaryType"] == "OrderComponents"
    assert typed_data["domain"] == {
        "name": "Seaport",
        "version": "1.1",
        "chainId": accounts["chain_id"],
        "verifyingContract": accounts["seaport"],
    }
    message = typed_data["message"]
    assert message["counter"] == 0
    assert message["zoneHash"] == ZERO_HASH
    assert "totalOriginalConsiderationItems" not in message
    assert set(message["consideration"][0]) == {
        "itemType",
        "token",
        "identifierOrCriteria",
        "startAmount",
        "endAmount",
        "recipient",
    }
    assert "recipient" not in message["offer"][0]


def test_sign_and_recover_round_trip(signer, order_components, accounts):
    """Test that a signed order recovers to the offerer."""
    signature = sign_order(signer, accounts["chain_id"], accounts["seaport"], order_components)
    assert len(to_bytes(hexstr=signature)) == 65
    recovered = recover_order_signer(
        signature, order_components, accounts["chain_id"], accounts["seaport"]
    )
    assert recovered == signer.address


def test_signature_depends_on_every_field(signer, order_components, accounts):
    """Test that changing a signed field breaks recovery of the offerer."""
    signature = sign_order(signer, accounts["chain_id"], accounts["seaport"], order_components)
    tampered = order_components.model_copy(update={"salt": 124})
    recovered = recover_order_signer(signature, tampered, accounts["chain_id"], accounts["seaport"])
    assert recovered != signer.address


def test_order_hash_depends_on_counter(order_components, accounts):
    """Test that the counter is part of the order hash."""
    first = compute_order_hash(order_components, accounts["chain_id"], accounts["seaport"])
    bumped = order_components.model_copy(update={"counter": 1})
    second = compute_order_hash(bumped, accounts["chain_id"], accounts["seaport"])
    assert len(to_bytes(hexstr=first)) == 32
    assert first != second


def test_eip2098_compaction(signer, order_components, accounts):
    """Test that 65 byte signatures compact to 64 bytes and still recover the signer."""
    signature = sign_order(signer, accounts["chain_id"], accounts["seaport"], order_components)
    compact = convert_signature_to_eip2098(signature)
    assert len(to_bytes(hexstr=compact)) == 64
    assert expand_eip2098_signature(compact) == signature
    assert (
        recover_order_signer(compact, order_components, accounts["chain_id"], accounts["seaport"])
        == signer.address
    )

    # Already compact signatures are left alone
    assert convert_signature_to_eip2098(compact) == compact


@pytest.mark.parametrize("length", [0, 32, 63, 66])
def test_eip2098_invalid_length(length):
    """Test that signatures of other lengths are rejected."""
    with pytest.raises(InvalidSignatureLengthError):
        convert_signature_to_eip2098("0x" + "01" * length)


def test_native_value(listing_items, offer_item):
    """Test that the native value is the sum of the largest native amounts."""
    offer, consideration = listing_items
    assert get_native_value([*offer, *consideration]) == 1000 + 25
    assert get_native_value([offer_item(ItemType.ERC20, start_amount=10**18)]) == 0


def test_start_time_after_end_time_rejected(signer, listing_items):
    """Test that an order cannot end before it starts."""
    offer, consideration = listing_items
    with pytest.raises(ValidationError):
        OrderParameters(
            offerer=signer.address,
            offer=offer,
            consideration=consideration,
            start_time=10,
            end_time=9,
            total_original_consideration_items=2,
        )


def test_order_components_from_parameters(signer, listing_items):
    """Test converting order parameters into order components."""
    offer, consideration = listing_items
    parameters = OrderParameters(
        offerer=signer.address,
        offer=offer,
        consideration=consideration,
        start_time=1,
        end_time=2,
        total_original_consideration_items=2,
    )
    components = OrderComponents.from_parameters(parameters, counter=4)
    assert components.counter == 4
    assert components.consideration == parameters.consideration
    assert "totalOriginalConsiderationItems" not in components.to_struct()


def test_build_order(marketplace_contract, signer, listing_items, accounts):
    """Test assembling, hashing and signing an order."""
    offer, consideration = listing_items
    created = asyncio.run(
        build_order(
            marketplace_contract,
            accounts["chain_id"],
            signer,
            offer,
            consideration,
            counter=3,
            start_time=1_700_000_000,
            end_time=1_700_086_400,
            order_type=OrderType.FULL_RESTRICTED,
            zone=accounts["fee_recipient"],
        )
    )

    parameters = created.order.parameters
    assert parameters.offerer == signer.address
    assert parameters.zone == accounts["fee_recipient"]
    assert parameters.total_original_consideration_items == 2
    assert parameters.order_type == OrderType.FULL_RESTRICTED
    assert created.order.numerator is None
    assert created.order.denominator is None
    assert created.order.extra_data == "0x"
    assert created.order_components.counter == 3
    assert created.order_hash == "0x" + "12" * 32
    assert created.value == 1025
    assert created.order_status.is_cancelled is False

    marketplace_contract.functions.getOrderHash.assert_called_once_with(
        created.order_components.to_struct()
    )
    marketplace_contract.functions.getOrderStatus.assert_called_once_with(created.order_hash)
    assert (
        recover_order_signer(
            created.order.signature,
            created.order_components,
            accounts["chain_id"],
            accounts["seaport"],
        )
        == signer.address
    )


def test_build_order_extra_cheap(marketplace_contract, signer, listing_items, accounts):
    """Test that extra cheap orders drop zone and salt and compact the signature."""
    offer, consideration = listing_items
    created = asyncio.run(
        build_order(
            marketplace_contract,
            accounts["chain_id"],
            signer,
            offer,
            consideration,
            counter=0,
            start_time=1_700_000_000,
            end_time=1_700_086_400,
            zone=accounts["fee_recipient"],
            extra_cheap=True,
        )
    )
    assert created.order.parameters.zone == ZERO_ADDRESS
    assert created.order.parameters.salt == 0
    assert len(to_bytes(hexstr=created.order.signature)) == 64
    assert (
        recover_order_signer(
            created.order.signature,
            created.order_components,
            accounts["chain_id"],
            accounts["seaport"],
        )
        == signer.address
    )


def test_random_salt_uses_secure_source():
    """Test that salts come from the secrets module and span 256 bits."""
    with patch("seaport_sdk.order.secrets.randbits", return_value=42) as mock_randbits:
        assert random_salt() == 42
    mock_randbits.assert_called_once_with(256)

    salts = {random_salt() for _ in range(4)}
    assert len(salts) == 4
    assert all(0 <= salt < 2**256 for salt in salts)
