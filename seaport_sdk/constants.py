"""Constants for the Seaport SDK."""

from enum import IntEnum

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = "0x" + "00" * 32

# No conduit, tokens are transferred by the Seaport contract itself
NO_CONDUIT_KEY = ZERO_HASH

SEAPORT_CONTRACT_NAME = "Seaport"
SEAPORT_CONTRACT_VERSION = "1.1"

# Some arbitrarily high number.
MAX_APPROVAL = 2**118

# Some ERC20 tokens clamp "infinite" approvals, anything within the buffer still counts.
MAX_APPROVAL_BUFFER = 10**17
MAX_APPROVAL_WITH_BUFFER = MAX_APPROVAL - MAX_APPROVAL_BUFFER

# 31 days
DEFAULT_ORDER_DURATION = 2678400


class ItemType(IntEnum):
    """Item types for offer/consideration."""

    NATIVE = 0
    ERC20 = 1
    ERC721 = 2
    ERC1155 = 3
    ERC721_WITH_CRITERIA = 4
    ERC1155_WITH_CRITERIA = 5


ERC721_ITEM_TYPES = frozenset({ItemType.ERC721, ItemType.ERC721_WITH_CRITERIA})
ERC1155_ITEM_TYPES = frozenset({ItemType.ERC1155, ItemType.ERC1155_WITH_CRITERIA})
CRITERIA_ITEM_TYPES = frozenset({ItemType.ERC721_WITH_CRITERIA, ItemType.ERC1155_WITH_CRITERIA})


class OrderType(IntEnum):
    """Order types, the cross product of partial fills and restricted execution."""

    FULL_OPEN = 0  # No partial fills, anyone can execute
    PARTIAL_OPEN = 1  # Partial fills supported, anyone can execute
    FULL_RESTRICTED = 2  # No partial fills, only offerer or zone can execute
    PARTIAL_RESTRICTED = 3  # Partial fills supported, only offerer or zone can execute


class BasicOrderRouteType(IntEnum):
    """Routes accepted by fulfillBasicOrder, named from the fulfiller's side."""

    ETH_TO_ERC721 = 0
    ETH_TO_ERC1155 = 1
    ERC20_TO_ERC721 = 2
    ERC20_TO_ERC1155 = 3
    ERC721_TO_ERC20 = 4
    ERC1155_TO_ERC20 = 5


class Side(IntEnum):
    """Which item list a criteria resolver points into."""

    OFFER = 0
    CONSIDERATION = 1


# EIP-712 type definitions
EIP_712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

EIP_712_ORDER_TYPE = {
    "OrderComponents": [
        {"name": "offerer", "type": "address"},
        {"name": "zone", "type": "address"},
        {"name": "offer", "type": "OfferItem[]"},
        {"name": "consideration", "type": "ConsiderationItem[]"},
        {"name": "orderType", "type": "uint8"},
        {"name": "startTime", "type": "uint256"},
        {"name": "endTime", "type": "uint256"},
        {"name": "zoneHash", "type": "bytes32"},
        {"name": "salt", "type": "uint256"},
        {"name": "conduitKey", "type": "bytes32"},
        {"name": "counter", "type": "uint256"},
    ],
    "OfferItem": [
        {"name": "itemType", "type": "uint8"},
        {"name": "token", "type": "address"},
        {"name": "identifierOrCriteria", "type": "uint256"},
        {"name": "startAmount", "type": "uint256"},
        {"name": "endAmount", "type": "uint256"},
    ],
    "ConsiderationItem": [
        {"name": "itemType", "type": "uint8"},
        {"name": "token", "type": "address"},
        {"name": "identifierOrCriteria", "type": "uint256"},
        {"name": "startAmount", "type": "uint256"},
        {"name": "endAmount", "type": "uint256"},
        {"name": "recipient", "type": "address"},
    ],
}

_OFFER_ITEM_COMPONENTS = [
    {"name": "itemType", "type": "uint8"},
    {"name": "token", "type": "address"},
    {"name": "identifierOrCriteria", "type": "uint256"},
    {"name": "startAmount", "type": "uint256"},
    {"name": "endAmount", "type": "uint256"},
]

_CONSIDERATION_ITEM_COMPONENTS = [
    *_OFFER_ITEM_COMPONENTS,
    {"name": "recipient", "type": "address"},
]

_ORDER_HEADER_COMPONENTS = [
    {"name": "offerer", "type": "address"},
    {"name": "zone", "type": "address"},
    {"name": "offer", "type": "tuple[]", "components": _OFFER_ITEM_COMPONENTS},
    {"name": "consideration", "type": "tuple[]", "components": _CONSIDERATION_ITEM_COMPONENTS},
    {"name": "orderType", "type": "uint8"},
    {"name": "startTime", "type": "uint256"},
    {"name": "endTime", "type": "uint256"},
    {"name": "zoneHash", "type": "bytes32"},
    {"name": "salt", "type": "uint256"},
    {"name": "conduitKey", "type": "bytes32"},
]

_ORDER_COMPONENTS_COMPONENTS = [
    *_ORDER_HEADER_COMPONENTS,
    {"name": "counter", "type": "uint256"},
]

_ORDER_PARAMETERS_COMPONENTS = [
    *_ORDER_HEADER_COMPONENTS,
    {"name": "totalOriginalConsiderationItems", "type": "uint256"},
]

_ORDER_COMPONENTS = [
    {"name": "parameters", "type": "tuple", "components": _ORDER_PARAMETERS_COMPONENTS},
    {"name": "signature", "type": "bytes"},
]

_ADVANCED_ORDER_COMPONENTS = [
    {"name": "parameters", "type": "tuple", "components": _ORDER_PARAMETERS_COMPONENTS},
    {"name": "numerator", "type": "uint120"},
    {"name": "denominator", "type": "uint120"},
    {"name": "signature", "type": "bytes"},
    {"name": "extraData", "type": "bytes"},
]

_BASIC_ORDER_PARAMETERS_COMPONENTS = [
    {"name": "considerationToken", "type": "address"},
    {"name": "considerationIdentifier", "type": "uint256"},
    {"name": "considerationAmount", "type": "uint256"},
    {"name": "offerer", "type": "address"},
    {"name": "zone", "type": "address"},
    {"name": "offerToken", "type": "address"},
    {"name": "offerIdentifier", "type": "uint256"},
    {"name": "offerAmount", "type": "uint256"},
    {"name": "basicOrderType", "type": "uint8"},
    {"name": "startTime", "type": "uint256"},
    {"name": "endTime", "type": "uint256"},
    {"name": "zoneHash", "type": "bytes32"},
    {"name": "salt", "type": "uint256"},
    {"name": "offererConduitKey", "type": "bytes32"},
    {"name": "fulfillerConduitKey", "type": "bytes32"},
    {"name": "totalOriginalAdditionalRecipients", "type": "uint256"},
    {
        "name": "additionalRecipients",
        "type": "tuple[]",
        "components": [
            {"name": "amount", "type": "uint256"},
            {"name": "recipient", "type": "address"},
        ],
    },
    {"name": "signature", "type": "bytes"},
]

_CRITERIA_RESOLVER_COMPONENTS = [
    {"name": "orderIndex", "type": "uint256"},
    {"name": "side", "type": "uint8"},
    {"name": "index", "type": "uint256"},
    {"name": "identifier", "type": "uint256"},
    {"name": "criteriaProof", "type": "bytes32[]"},
]

_FULFILLMENT_COMPONENT_COMPONENTS = [
    {"name": "orderIndex", "type": "uint256"},
    {"name": "itemIndex", "type": "uint256"},
]

_EXECUTION_COMPONENTS = [
    {
        "name": "item",
        "type": "tuple",
        "components": [
            {"name": "itemType", "type": "uint8"},
            {"name": "token", "type": "address"},
            {"name": "identifier", "type": "uint256"},
            {"name": "amount", "type": "uint256"},
            {"name": "recipient", "type": "address"},
        ],
    },
    {"name": "offerer", "type": "address"},
    {"name": "conduitKey", "type": "bytes32"},
]

SEAPORT_ABI = [
    {
        "inputs": [{"name": "offerer", "type": "address"}],
        "name": "getCounter",
        "outputs": [{"name": "counter", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "order", "type": "tuple", "components": _ORDER_COMPONENTS_COMPONENTS}
        ],
        "name": "getOrderHash",
        "outputs": [{"name": "orderHash", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "orderHash", "type": "bytes32"}],
        "name": "getOrderStatus",
        "outputs": [
            {"name": "isValidated", "type": "bool"},
            {"name": "isCancelled", "type": "bool"},
            {"name": "totalFilled", "type": "uint256"},
            {"name": "totalSize", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "orders", "type": "tuple[]", "components": _ORDER_COMPONENTS_COMPONENTS}
        ],
        "name": "cancel",
        "outputs": [{"name": "cancelled", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [{"name": "orders", "type": "tuple[]", "components": _ORDER_COMPONENTS}],
        "name": "validate",
        "outputs": [{"name": "validated", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {
                "name": "parameters",
                "type": "tuple",
                "components": _BASIC_ORDER_PARAMETERS_COMPONENTS,
            }
        ],
        "name": "fulfillBasicOrder",
        "outputs": [{"name": "fulfilled", "type": "bool"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "order", "type": "tuple", "components": _ORDER_COMPONENTS},
            {"name": "fulfillerConduitKey", "type": "bytes32"},
        ],
        "name": "fulfillOrder",
        "outputs": [{"name": "fulfilled", "type": "bool"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "advancedOrder", "type": "tuple", "components": _ADVANCED_ORDER_COMPONENTS},
            {
                "name": "criteriaResolvers",
                "type": "tuple[]",
                "components": _CRITERIA_RESOLVER_COMPONENTS,
            },
            {"name": "fulfillerConduitKey", "type": "bytes32"},
            {"name": "recipient", "type": "address"},
        ],
        "name": "fulfillAdvancedOrder",
        "outputs": [{"name": "fulfilled", "type": "bool"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "orders", "type": "tuple[]", "components": _ORDER_COMPONENTS},
            {
                "name": "fulfillments",
                "type": "tuple[]",
                "components": [
                    {
                        "name": "offerComponents",
                        "type": "tuple[]",
                        "components": _FULFILLMENT_COMPONENT_COMPONENTS,
                    },
                    {
                        "name": "considerationComponents",
                        "type": "tuple[]",
                        "components": _FULFILLMENT_COMPONENT_COMPONENTS,
                    },
                ],
            },
        ],
        "name": "matchOrders",
        "outputs": [
            {"name": "executions", "type": "tuple[]", "components": _EXECUTION_COMPONENTS}
        ],
        "stateMutability": "payable",
        "type": "function",
    },
]

ERC20_ABI = [
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

# Standard ERC721 interface for approval checks
ERC721_ABI = [
    {
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "operator", "type": "address"},
        ],
        "name": "isApprovedForAll",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "tokenId", "type": "uint256"}],
        "name": "getApproved",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "tokenId", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "operator", "type": "address"},
            {"name": "approved", "type": "bool"},
        ],
        "name": "setApprovalForAll",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

ERC1155_ABI = [
    {
        "inputs": [
            {"name": "account", "type": "address"},
            {"name": "operator", "type": "address"},
        ],
        "name": "isApprovedForAll",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"name": "operator", "type": "address"},
            {"name": "approved", "type": "bool"},
        ],
        "name": "setApprovalForAll",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
