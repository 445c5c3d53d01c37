from dataclasses import dataclass

import pytest
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from govdecode.core.config import KnownAddresses
from govdecode.pipeline import EngineConfig

SALE_CONFIG_TYPE = "(uint104,uint32,uint64,uint64,uint64,uint64,bytes32)"
CREATE_EDITION_TYPES = [
    "string",
    "string",
    "uint64",
    "uint16",
    "address",
    "address",
    SALE_CONFIG_TYPE,
    "string",
    "string",
    "string",
]
CREATE_EDITION_SIGNATURE = f"createEdition({','.join(CREATE_EDITION_TYPES)})"


@dataclass(frozen=True)
class Addrs:
    stablecoin: str = "0x" + "11" * 20
    nft_collection: str = "0x" + "22" * 20
    drop_factory: str = "0x" + "33" * 20
    token: str = "0x" + "44" * 20
    recipient: str = "0x" + "aa" * 20
    treasury: str = "0x" + "bb" * 20


class Calldata:
    """Hex calldata builders for the calls a proposal typically carries."""

    @staticmethod
    def encode(signature: str, types: list[str], args: list) -> str:
        return "0x" + (function_signature_to_4byte_selector(signature) + encode(types, args)).hex()

    def erc20_transfer(self, to: str, amount: int) -> str:
        return self.encode("transfer(address,uint256)", ["address", "uint256"], [to, amount])

    def transfer_from(self, from_: str, to: str, token_id: int) -> str:
        return self.encode(
            "transferFrom(address,address,uint256)", ["address", "address", "uint256"], [from_, to, token_id]
        )

    def safe_transfer_from(self, from_: str, to: str, token_id: int, data: bytes | None = None) -> str:
        if data is None:
            return self.encode(
                "safeTransferFrom(address,address,uint256)", ["address", "address", "uint256"], [from_, to, token_id]
            )
        return self.encode(
            "safeTransferFrom(address,address,uint256,bytes)",
            ["address", "address", "uint256", "bytes"],
            [from_, to, token_id, data],
        )

    def create_edition(
        self,
        *,
        name: str = "Builder Drop",
        symbol: str = "DROP",
        edition_size: int = 100,
        royalty_bps: int = 500,
        funds_recipient: str = "0x" + "aa" * 20,
        default_admin: str = "0x" + "bb" * 20,
        price_wei: int = 10**15,
        max_per_address: int = 0,
        sale_start: int = 1_700_000_000,
        sale_end: int = 1_700_604_800,
        description: str = "A drop",
        animation_uri: str = "",
        image_uri: str = "ipfs://image",
    ) -> str:
        sale = (price_wei, max_per_address, sale_start, sale_end, 0, 0, b"\x00" * 32)
        return self.encode(
            CREATE_EDITION_SIGNATURE,
            CREATE_EDITION_TYPES,
            [
                name,
                symbol,
                edition_size,
                royalty_bps,
                funds_recipient,
                default_admin,
                sale,
                description,
                animation_uri,
                image_uri,
            ],
        )


@pytest.fixture
def addrs() -> Addrs:
    return Addrs()


@pytest.fixture
def known(addrs: Addrs) -> KnownAddresses:
    return KnownAddresses.from_strings(
        stablecoin=addrs.stablecoin,
        nft_collection=addrs.nft_collection,
        drop_factory=addrs.drop_factory,
    )


@pytest.fixture
def config(known: KnownAddresses) -> EngineConfig:
    return EngineConfig(addresses=known)


@pytest.fixture
def calldata() -> Calldata:
    return Calldata()


@pytest.fixture
def as_bytes():
    def _as_bytes(hex_calldata: str) -> bytes:
        return bytes.fromhex(hex_calldata[2:])

    return _as_bytes
