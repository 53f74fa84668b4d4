from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_account import Account
from web3 import Web3

from seaport_sdk.addresses import AddressBook
from seaport_sdk.config import SeaportConfig
from seaport_sdk.constants import ItemType
from seaport_sdk.schemas import ConsiderationItem, OfferItem, Order, OrderParameters
from seaport_sdk.sdk import SeaportSDK

TEST_CHAIN_ID = 31337
SEAPORT_ADDRESS = "0x00000000006c3852cbEf3e08E8dF289169EdE581"
NFT_TOKEN = "0x" + "11" * 20
PAYMENT_TOKEN = "0x" + "22" * 20
SELLER = Web3.to_checksum_address("0x" + "aa" * 20)
BUYER = Web3.to_checksum_address("0x" + "bb" * 20)
FEE_RECIPIENT = Web3.to_checksum_address("0x" + "cc" * 20)
TEST_PRIVATE_KEY = "0x" + "4c" * 32


def make_offer_item(item_type, token=NFT_TOKEN, identifier=0, start_amount=1, end_amount=None):
    """Build an offer item with test defaults."""
    return OfferItem(
        item_type=item_type,
        token=token,
        identifier_or_criteria=identifier,
        start_amount=start_amount,
        end_amount=start_amount if end_amount is None else end_amount,
    )


def make_consideration_item(
    item_type, token=NFT_TOKEN, identifier=0, start_amount=1, end_amount=None, recipient=SELLER
):
    """Build a consideration item with test defaults."""
    return ConsiderationItem(
        item_type=item_type,
        token=token,
        identifier_or_criteria=identifier,
        start_amount=start_amount,
        end_amount=start_amount if end_amount is None else end_amount,
        recipient=recipient,
    )


def make_order(offer, consideration, offerer=SELLER, **order_fields):
    """Build a signed-looking order from items."""
    parameters = OrderParameters(
        offerer=offerer,
        offer=tuple(offer),
        consideration=tuple(consideration),
        start_time=1_700_000_000,
        end_time=1_700_086_400,
        salt=7,
        total_original_consideration_items=len(consideration),
    )
    return Order(parameters=parameters, signature="0x" + "ab" * 65, **order_fields)


@pytest.fixture(autouse=True)
def clean_seaport_env(monkeypatch):
    """Keep configuration environment variables out of the tests."""
    monkeypatch.delenv("SEAPORT_CONDUIT_KEY", raising=False)
    monkeypatch.delenv("SEAPORT_ORDER_DURATION", raising=False)


@pytest.fixture
def address_book():
    """Address book with a synthetic local chain."""
    return AddressBook(
        {
            str(TEST_CHAIN_ID): {
                "seaport": SEAPORT_ADDRESS,
                "wrapped_native_token": "0x" + "0e" * 20,
            }
        }
    )


@pytest.fixture
def signer():
    """A local account used to sign orders."""
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def marketplace_contract():
    """Mock Seaport contract binding."""
    contract = MagicMock()
    contract.address = SEAPORT_ADDRESS
    contract.functions.getCounter.return_value.call = AsyncMock(return_value=0)
    contract.functions.getOrderHash.return_value.call = AsyncMock(return_value=b"\x12" * 32)
    contract.functions.getOrderStatus.return_value.call = AsyncMock(
        return_value=(False, False, 0, 0)
    )
    for name in (
        "fulfillBasicOrder",
        "fulfillOrder",
        "fulfillAdvancedOrder",
        "matchOrders",
        "cancel",
        "validate",
    ):
        getattr(contract.functions, name).return_value.transact = AsyncMock(
            return_value=f"0x{name}_tx_hash"
        )
    return contract


@pytest.fixture
def mock_w3(marketplace_contract):
    """Mock async web3 client returning the mock Seaport contract."""
    w3 = MagicMock()
    w3.eth.contract.return_value = marketplace_contract
    return w3


@pytest.fixture
def seaport_sdk(mock_w3, signer, address_book):
    """SDK wired to the mock client and the synthetic chain."""
    return SeaportSDK(
        mock_w3, TEST_CHAIN_ID, signer=signer, config=SeaportConfig(address_book=address_book)
    )


@pytest.fixture
def nft_listing():
    """ERC721 for native currency, paid to the seller and a fee recipient."""
    return make_order(
        [make_offer_item(ItemType.ERC721, identifier=5)],
        [
            make_consideration_item(
                ItemType.NATIVE, token="0x" + "00" * 20, start_amount=975, recipient=SELLER
            ),
            make_consideration_item(
                ItemType.NATIVE, token="0x" + "00" * 20, start_amount=25, recipient=FEE_RECIPIENT
            ),
        ],
    )


@pytest.fixture
def accounts():
    """Addresses used across the tests."""
    return {
        "seaport": SEAPORT_ADDRESS,
        "nft": NFT_TOKEN,
        "payment_token": PAYMENT_TOKEN,
        "seller": SELLER,
        "buyer": BUYER,
        "fee_recipient": FEE_RECIPIENT,
        "chain_id": TEST_CHAIN_ID,
    }


@pytest.fixture
def offer_item():
    """Factory for offer items."""
    return make_offer_item


@pytest.fixture
def consideration_item():
    """Factory for consideration items."""
    return make_consideration_item


@pytest.fixture
def order_factory():
    """Factory for orders."""
    return make_order
