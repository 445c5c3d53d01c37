"""Built-in function registries for proposal calls.

All registries are composable and can be merged with `{**a, **b}` syntax.

Available registries:
- ERC-20: make_erc20_registry()
- ERC-721 transfers: make_erc721_registry()
- NFT-drop edition creation: make_drop_registry()
- Everything above: make_default_registry()

Example
-------
>>> from govdecode.decoding.registries import make_default_registry
>>> reg = make_default_registry()
>>> reg["0xa9059cbb"].name
'transfer'
"""

from __future__ import annotations

from govdecode.abi_functions import make_function_registry_from_abi

from .registry_builder import make_registry
from .specs import FunctionRegistry

# -------------------------
# ERC-20
# -------------------------

ERC20_TRANSFER_SIGNATURE = "transfer(address to, uint256 amount)"


def make_erc20_registry() -> FunctionRegistry:
    """Return registry for the ERC-20 `transfer` function."""
    return make_registry(ERC20_TRANSFER_SIGNATURE)


# -------------------------
# ERC-721 transfers
# -------------------------

ERC721_TRANSFER_SIGNATURES = [
    "transferFrom(address from, address to, uint256 tokenId)",
    "safeTransferFrom(address from, address to, uint256 tokenId)",
    "safeTransferFrom(address from, address to, uint256 tokenId, bytes data)",
]


def make_erc721_registry() -> FunctionRegistry:
    """Return registry for the three ERC-721 transfer variants."""
    return make_registry(ERC721_TRANSFER_SIGNATURES)


# -------------------------
# NFT-drop factory (createEdition)
# -------------------------

CREATE_EDITION_ABI = [
    {
        "type": "function",
        "name": "createEdition",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "string", "name": "name", "type": "string"},
            {"internalType": "string", "name": "symbol", "type": "string"},
            {"internalType": "uint64", "name": "editionSize", "type": "uint64"},
            {"internalType": "uint16", "name": "royaltyBPS", "type": "uint16"},
            {"internalType": "address payable", "name": "fundsRecipient", "type": "address"},
            {"internalType": "address", "name": "defaultAdmin", "type": "address"},
            {
                "internalType": "struct IERC721Drop.SalesConfiguration",
                "name": "saleConfig",
                "type": "tuple",
                "components": [
                    {"internalType": "uint104", "name": "publicSalePrice", "type": "uint104"},
                    {"internalType": "uint32", "name": "maxSalePurchasePerAddress", "type": "uint32"},
                    {"internalType": "uint64", "name": "publicSaleStart", "type": "uint64"},
                    {"internalType": "uint64", "name": "publicSaleEnd", "type": "uint64"},
                    {"internalType": "uint64", "name": "presaleStart", "type": "uint64"},
                    {"internalType": "uint64", "name": "presaleEnd", "type": "uint64"},
                    {"internalType": "bytes32", "name": "presaleMerkleRoot", "type": "bytes32"},
                ],
            },
            {"internalType": "string", "name": "description", "type": "string"},
            {"internalType": "string", "name": "animationURI", "type": "string"},
            {"internalType": "string", "name": "imageURI", "type": "string"},
        ],
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
    },
]


def make_drop_registry() -> FunctionRegistry:
    """Return registry for the drop factory's `createEdition` function."""
    return make_function_registry_from_abi(CREATE_EDITION_ABI)


# -------------------------
# Default table
# -------------------------


def make_default_registry() -> FunctionRegistry:
    """Return every built-in decoder spec keyed by selector."""
    return {**make_erc20_registry(), **make_erc721_registry(), **make_drop_registry()}
