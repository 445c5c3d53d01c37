"""Calldata decoders keyed by 4-byte selector.

This module turns raw calldata into typed records using a `FunctionRegistry`:

- `decode_call` → generic `DecodedCall` (spec + ABI-decoded arguments)
- `decode_erc20_transfer`, `decode_erc721_transfer`, `decode_create_edition`
  → typed records from `govdecode.core.models`
- `decode_for_kind` → dispatch from an already-assigned `TransactionKind`

Every decoder returns either its record or a `DecodeError` value. Calldata
is attacker-controlled, so eth-abi failures of any kind are converted to
`DecodeError` at this boundary and never propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from eth_abi import decode as abi_decode

from govdecode.constants import (
    ERC20_TRANSFER_SELECTOR,
    ERC721_SAFE_TRANSFER_DATA_SELECTOR,
    ERC721_TRANSFER_SELECTORS,
    SELECTOR_BYTES,
)
from govdecode.core.errors import DecodeError
from govdecode.core.models import (
    DecodedRecord,
    DropParams,
    Erc20Transfer,
    Erc721Transfer,
    SaleConfig,
    TransactionKind,
    selector_of,
)
from govdecode.decoding.specs import FunctionRegistry, FunctionSpec

logger = logging.getLogger(__name__)

# ---------- generic decoded call ----------


@dataclass(frozen=True, slots=True)
class DecodedCall:
    """ABI-decoded arguments of one call, in declaration order."""

    spec: FunctionSpec
    args: tuple[Any, ...]


# ---------- helper functions ----------


def _address(value: str) -> str:
    # eth-abi returns checksummed addresses; the engine stores lowercase
    return value.lower()


# ---------- main generic decoder ----------


def decode_call(calldata: bytes, registry: FunctionRegistry) -> DecodedCall | DecodeError:
    """Decode calldata against the spec registered for its selector."""
    selector = selector_of(calldata)
    if selector is None:
        return DecodeError(selector=None, reason=f"calldata too short for a selector ({len(calldata)} bytes)")

    spec = registry.get(selector)
    if spec is None:
        return DecodeError(selector=selector, reason="no decoder registered for selector")

    try:
        args = abi_decode(list(spec.param_types), calldata[SELECTOR_BYTES:])
    except Exception as e:  # eth-abi raises several unrelated types on hostile input
        return DecodeError(selector=selector, reason=f"{spec.name}: {type(e).__name__}: {e}")

    return DecodedCall(spec=spec, args=tuple(args))


# ---------- typed decoders ----------


def _decode_expecting(
    calldata: bytes,
    registry: FunctionRegistry,
    selectors: frozenset[str],
    label: str,
) -> DecodedCall | DecodeError:
    selector = selector_of(calldata)
    if selector not in selectors:
        return DecodeError(selector=selector, reason=f"selector is not {label}")
    return decode_call(calldata, registry)


def decode_erc20_transfer(calldata: bytes, registry: FunctionRegistry) -> Erc20Transfer | DecodeError:
    decoded = _decode_expecting(calldata, registry, frozenset({ERC20_TRANSFER_SELECTOR}), "an ERC-20 transfer")
    if isinstance(decoded, DecodeError):
        return decoded
    if decoded.spec.param_types != ("address", "uint256"):
        return DecodeError(selector=decoded.spec.selector, reason=f"{decoded.spec.signature} is not transfer(address,uint256)")
    to, amount = decoded.args
    return Erc20Transfer(to=_address(to), amount=amount)


def decode_erc721_transfer(calldata: bytes, registry: FunctionRegistry) -> Erc721Transfer | DecodeError:
    """Decode any of transferFrom / safeTransferFrom (3- and 4-argument)."""
    decoded = _decode_expecting(calldata, registry, ERC721_TRANSFER_SELECTORS, "an ERC-721 transfer")
    if isinstance(decoded, DecodeError):
        return decoded
    if decoded.spec.param_types[:3] != ("address", "address", "uint256"):
        return DecodeError(selector=decoded.spec.selector, reason=f"{decoded.spec.signature} is not an ERC-721 transfer")
    from_, to, token_id = decoded.args[:3]
    data = decoded.args[3] if decoded.spec.selector == ERC721_SAFE_TRANSFER_DATA_SELECTOR else None
    return Erc721Transfer(from_=_address(from_), to=_address(to), token_id=token_id, data=data)


def decode_create_edition(calldata: bytes, registry: FunctionRegistry) -> DropParams | DecodeError:
    """Decode `createEdition(...)` into `DropParams`, including the sale tuple.

    The selector is whatever the registry maps to a function named
    `createEdition`; the arguments must match the 10-parameter layout.
    """
    decoded = decode_call(calldata, registry)
    if isinstance(decoded, DecodeError):
        return decoded
    if decoded.spec.name != "createEdition" or len(decoded.args) != 10:
        return DecodeError(selector=decoded.spec.selector, reason=f"{decoded.spec.name} is not createEdition")

    (
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
    ) = decoded.args
    if not isinstance(sale, tuple) or len(sale) != 7:
        return DecodeError(selector=decoded.spec.selector, reason="saleConfig is not a 7-field tuple")

    price, max_per_address, sale_start, sale_end, presale_start, presale_end, merkle_root = sale
    return DropParams(
        name=name,
        symbol=symbol,
        edition_size=edition_size,
        royalty_bps=royalty_bps,
        funds_recipient=_address(funds_recipient),
        default_admin=_address(default_admin),
        sale_config=SaleConfig(
            price_wei=price,
            max_per_address=max_per_address,
            sale_start=sale_start,
            sale_end=sale_end,
            presale_start=presale_start,
            presale_end=presale_end,
            presale_merkle_root=bytes(merkle_root),
        ),
        description=description,
        animation_uri=animation_uri,
        image_uri=image_uri,
    )


# ---------- dispatch by kind ----------

KindDecoder = Callable[[bytes, FunctionRegistry], DecodedRecord | DecodeError]


def decoder_for_kind(kind: TransactionKind) -> KindDecoder | None:
    """Return the typed decoder for `kind`, or None for kinds without parameters."""
    match kind:
        case TransactionKind.SEND_STABLECOIN | TransactionKind.SEND_ERC20:
            return decode_erc20_transfer
        case TransactionKind.SEND_ERC721:
            return decode_erc721_transfer
        case TransactionKind.CREATE_DROP:
            return decode_create_edition
        case TransactionKind.SEND_NATIVE | TransactionKind.CUSTOM:
            return None
    raise RuntimeError(f"Unsupported transaction kind: {kind!r}")


def decode_for_kind(
    kind: TransactionKind,
    calldata: bytes,
    registry: FunctionRegistry,
) -> DecodedRecord | DecodeError | None:
    """Decode calldata for an already-classified call.

    Returns None for kinds that carry no parameters. The kind itself is never
    revised based on the outcome.
    """
    decoder = decoder_for_kind(kind)
    if decoder is None:
        return None
    result = decoder(calldata, registry)
    if isinstance(result, DecodeError):
        logger.debug("decode failed for %s call: %s", kind.value, result)
    return result
