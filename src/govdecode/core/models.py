"""Core data model for proposal call processing.

This module defines:
- `Call`: one normalized element of a proposal's batched execution list.
- `selector_of`: the 4-byte selector of raw calldata.
- `TransactionKind`: the closed set of semantic kinds a call can have.
- Decoded records (`Erc20Transfer`, `Erc721Transfer`, `DropParams`).
- `ClassifiedTransaction`: classification + decode outcome for one call.
- `FundingTotals`: exact integer funding ask of a proposal.
- `ProposalAnalysis`: everything produced for one proposal.

Design notes
------------
- Addresses are lowercase `0x` strings; amounts are Python ints (uint256).
- No float or decimal field appears anywhere in this module. Conversion to
  display units lives in `govdecode.formatting`.
- Every record is frozen; nothing here is mutated after construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from govdecode.constants import SELECTOR_BYTES
from govdecode.core.errors import CallWarning, DecodeError

Address = str  # lowercase 0x + 40 hex digits
Amount = int  # non-negative, up to 2**256 - 1


def selector_of(calldata: bytes) -> str | None:
    """Lowercase 0x selector, or None when calldata is shorter than 4 bytes."""
    if len(calldata) < SELECTOR_BYTES:
        return None
    return "0x" + calldata[:SELECTOR_BYTES].hex()


# === Input record ===


@dataclass(frozen=True, slots=True)
class Call:
    """One normalized proposal call."""

    target: Address | None  # None only when the raw target was malformed
    value: Amount
    calldata: bytes
    signature: str | None = None

    @property
    def selector(self) -> str | None:
        return selector_of(self.calldata)


# === Transaction kinds ===


class TransactionKind(Enum):
    SEND_NATIVE = "send-native"
    SEND_STABLECOIN = "send-stablecoin"
    SEND_ERC20 = "send-erc20"
    SEND_ERC721 = "send-erc721"
    CREATE_DROP = "create-drop"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS: dict[TransactionKind, str] = {
    TransactionKind.SEND_NATIVE: "Send ETH",
    TransactionKind.SEND_STABLECOIN: "Send USDC",
    TransactionKind.SEND_ERC20: "Send Tokens",
    TransactionKind.SEND_ERC721: "Send NFTs",
    TransactionKind.CREATE_DROP: "Create Droposal",
    TransactionKind.CUSTOM: "Custom Transaction",
}


# === Decoded records ===


@dataclass(frozen=True, slots=True)
class Erc20Transfer:
    to: Address
    amount: Amount


@dataclass(frozen=True, slots=True)
class Erc721Transfer:
    from_: Address
    to: Address
    token_id: Amount
    data: bytes | None = None  # only for safeTransferFrom(address,address,uint256,bytes)


@dataclass(frozen=True, slots=True)
class SaleConfig:
    """Sale configuration tuple of an edition drop."""

    price_wei: Amount  # uint104
    max_per_address: int  # uint32
    sale_start: int  # uint64, unix seconds
    sale_end: int
    presale_start: int
    presale_end: int
    presale_merkle_root: bytes  # 32 bytes


@dataclass(frozen=True, slots=True)
class DropParams:
    """Arguments of an NFT-drop `createEdition` call."""

    name: str
    symbol: str
    edition_size: int  # uint64; 0 is kept as-is
    royalty_bps: int  # uint16
    funds_recipient: Address
    default_admin: Address
    sale_config: SaleConfig
    description: str
    animation_uri: str
    image_uri: str


DecodedRecord = Erc20Transfer | Erc721Transfer | DropParams


# === Outputs ===


@dataclass(frozen=True, slots=True)
class ClassifiedTransaction:
    """Classification and decode outcome for the call at `index`."""

    kind: TransactionKind
    index: int
    decoded: DecodedRecord | None
    raw_calldata: bytes
    target: Address | None = None
    value: Amount = 0
    error: DecodeError | None = None
    warnings: tuple[CallWarning, ...] = ()
    rule: str | None = None  # classification rule that fired

    @property
    def decode_ok(self) -> bool:
        return self.decoded is not None


@dataclass(frozen=True, slots=True)
class FundingTotals:
    """Exact funding ask of a proposal (wei and stablecoin minor units)."""

    total_native_wei: Amount = 0
    total_stablecoin_minor_units: Amount = 0

    @staticmethod
    def zero() -> FundingTotals:
        return FundingTotals()

    def __add__(self, other: FundingTotals) -> FundingTotals:
        if not isinstance(other, FundingTotals):
            return NotImplemented
        return FundingTotals(
            total_native_wei=self.total_native_wei + other.total_native_wei,
            total_stablecoin_minor_units=self.total_stablecoin_minor_units
            + other.total_stablecoin_minor_units,
        )


@dataclass(frozen=True, slots=True)
class ProposalAnalysis:
    """Classified transactions (input order) plus funding totals.

    `metadata` is a read-only view and does not take part in hashing.
    """

    transactions: tuple[ClassifiedTransaction, ...]
    totals: FundingTotals
    metadata: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    @property
    def kinds(self) -> list[TransactionKind]:
        return [tx.kind for tx in self.transactions]

    @property
    def warnings(self) -> list[tuple[int, CallWarning]]:
        """All per-call normalization warnings as (index, warning) pairs."""
        return [(tx.index, w) for tx in self.transactions for w in tx.warnings]

    @property
    def decode_errors(self) -> list[tuple[int, DecodeError]]:
        return [(tx.index, tx.error) for tx in self.transactions if tx.error is not None]
