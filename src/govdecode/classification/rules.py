"""Ordered classification rules for proposal calls.

`CLASSIFICATION_RULES` is evaluated top to bottom; the first rule that
returns a kind wins. The order is part of the contract:

1. drop_factory        target is the drop factory → CREATE_DROP
2. empty_calldata      no payload → SEND_NATIVE iff value > 0, else CUSTOM
3. erc20_selector      0xa9059cbb → SEND_STABLECOIN / SEND_ERC20
4. erc721_selector     ERC-721 transfer selectors → SEND_ERC721 / CUSTOM
5. signature_fallback  method name from the human-readable signature
6. default             CUSTOM

Rules only look at the call and the injected `KnownAddresses`; none of them
depends on whether calldata decodes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from govdecode.constants import (
    CREATE_EDITION_METHOD_NAMES,
    ERC20_METHOD_NAMES,
    ERC20_TRANSFER_SELECTOR,
    ERC721_METHOD_NAMES,
    ERC721_TRANSFER_SELECTORS,
)
from govdecode.core.config import KnownAddresses
from govdecode.core.models import Call, TransactionKind

RuleFn = Callable[[Call, KnownAddresses], TransactionKind | None]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    apply: RuleFn


# ---------- shared outcomes ----------


def _erc20_kind(call: Call, addresses: KnownAddresses) -> TransactionKind:
    if addresses.matches("stablecoin", call.target):
        return TransactionKind.SEND_STABLECOIN
    return TransactionKind.SEND_ERC20


def _erc721_kind(call: Call, addresses: KnownAddresses) -> TransactionKind:
    # NFT-shaped calls against unknown contracts are not assumed to be NFT sends
    if addresses.matches("nft_collection", call.target):
        return TransactionKind.SEND_ERC721
    return TransactionKind.CUSTOM


def method_name(signature: str | None) -> str | None:
    """Lowercase method name of `transfer(address,uint256)`-style signatures."""
    if not signature:
        return None
    name = signature.split("(", 1)[0].strip().lower()
    return name or None


# ---------- rules ----------


def drop_factory_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    if addresses.matches("drop_factory", call.target):
        return TransactionKind.CREATE_DROP
    return None


def empty_calldata_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    if call.calldata:
        return None
    return TransactionKind.SEND_NATIVE if call.value > 0 else TransactionKind.CUSTOM


def erc20_selector_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    if call.selector == ERC20_TRANSFER_SELECTOR:
        return _erc20_kind(call, addresses)
    return None


def erc721_selector_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    if call.selector in ERC721_TRANSFER_SELECTORS:
        return _erc721_kind(call, addresses)
    return None


def signature_fallback_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    name = method_name(call.signature)
    if name is None:
        return None
    if name in CREATE_EDITION_METHOD_NAMES:
        return TransactionKind.CREATE_DROP
    if name in ERC20_METHOD_NAMES:
        return _erc20_kind(call, addresses)
    if name in ERC721_METHOD_NAMES:
        return _erc721_kind(call, addresses)
    return None


def default_rule(call: Call, addresses: KnownAddresses) -> TransactionKind | None:
    return TransactionKind.CUSTOM


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("drop_factory", drop_factory_rule),
    ClassificationRule("empty_calldata", empty_calldata_rule),
    ClassificationRule("erc20_selector", erc20_selector_rule),
    ClassificationRule("erc721_selector", erc721_selector_rule),
    ClassificationRule("signature_fallback", signature_fallback_rule),
    ClassificationRule("default", default_rule),
)


# ---------- entry points ----------


def rule_names(rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES) -> list[str]:
    return [r.name for r in rules]


def explain(
    call: Call,
    addresses: KnownAddresses,
    rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES,
) -> tuple[TransactionKind, str]:
    """Classify `call` and return (kind, name of the rule that fired)."""
    for rule in rules:
        kind = rule.apply(call, addresses)
        if kind is not None:
            return kind, rule.name
    # The default rule always matches; a custom table without one falls through here
    return TransactionKind.CUSTOM, "default"


def classify(
    call: Call,
    addresses: KnownAddresses,
    rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES,
) -> TransactionKind:
    """Return the semantic kind of one call. Pure; first matching rule wins."""
    return explain(call, addresses, rules)[0]
