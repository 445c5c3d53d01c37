"""Funding aggregation over a proposal's classified calls."""

from __future__ import annotations

from collections.abc import Sequence

from govdecode.core.models import (
    Call,
    ClassifiedTransaction,
    Erc20Transfer,
    FundingTotals,
    TransactionKind,
)


def stablecoin_amount(tx: ClassifiedTransaction) -> int:
    """Stablecoin minor units requested by one transaction (0 unless decoded SEND_STABLECOIN)."""
    match tx.kind:
        case TransactionKind.SEND_STABLECOIN:
            if isinstance(tx.decoded, Erc20Transfer):
                return tx.decoded.amount
            return 0
        case (
            TransactionKind.SEND_NATIVE
            | TransactionKind.SEND_ERC20
            | TransactionKind.SEND_ERC721
            | TransactionKind.CREATE_DROP
            | TransactionKind.CUSTOM
        ):
            return 0
    raise RuntimeError(f"Unsupported transaction kind: {tx.kind!r}")


def aggregate(
    calls: Sequence[Call],
    transactions: Sequence[ClassifiedTransaction],
) -> FundingTotals:
    """Exact funding totals of a proposal.

    - native: sum of `call.value` over every call, whatever its kind
    - stablecoin: sum of decoded amounts of SEND_STABLECOIN calls; calls whose
      decode failed contribute nothing

    Integer arithmetic only.
    """
    if len(calls) != len(transactions):
        raise ValueError(f"{len(calls)} calls but {len(transactions)} classified transactions")

    total_native = 0
    total_stable = 0
    for call, tx in zip(calls, transactions):
        total_native += call.value
        total_stable += stablecoin_amount(tx)

    return FundingTotals(total_native_wei=total_native, total_stablecoin_minor_units=total_stable)
