from __future__ import annotations

# 4-byte function selectors (lowercase, 0x-prefixed)
ERC20_TRANSFER_SELECTOR            = "0xa9059cbb"
ERC721_TRANSFER_FROM_SELECTOR      = "0x23b872dd"
ERC721_SAFE_TRANSFER_SELECTOR      = "0x42842e0e"
ERC721_SAFE_TRANSFER_DATA_SELECTOR = "0xb88d4fde"

ERC721_TRANSFER_SELECTORS: frozenset[str] = frozenset(
    {
        ERC721_TRANSFER_FROM_SELECTOR,
        ERC721_SAFE_TRANSFER_SELECTOR,
        ERC721_SAFE_TRANSFER_DATA_SELECTOR,
    }
)

# lowercase method names recognised by the signature-string fallback
ERC20_METHOD_NAMES: frozenset[str] = frozenset({"transfer"})
ERC721_METHOD_NAMES: frozenset[str] = frozenset({"transferfrom", "safetransferfrom"})
CREATE_EDITION_METHOD_NAMES: frozenset[str] = frozenset({"createedition"})

SELECTOR_BYTES = 4
ADDRESS_HEX_DIGITS = 40
UINT256_MAX = 2**256 - 1
UINT256_DECIMAL_DIGITS = len(str(UINT256_MAX))  # 78
UINT256_HEX_DIGITS = 64

NATIVE_DECIMALS = 18
STABLECOIN_DECIMALS = 6
DEFAULT_TOKEN_DECIMALS = 18
