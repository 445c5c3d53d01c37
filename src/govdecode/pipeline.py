"""Proposal pipeline: normalize → classify → decode → aggregate.

This module provides two layers:

1) `analyze_calls(...)`:
   - Works on already-normalized `Call` objects.
   - Classifies and decodes each call independently, then aggregates.

2) `analyze_proposal(...)`:
   - Accepts the raw parallel arrays produced by a chain indexer.
   - Rejects the whole proposal on an array length mismatch.
   - Normalizes each call, attaching malformed fields as per-call warnings.

Both are pure: no I/O, no shared state. The only exception raised for
input is `InputLengthMismatch`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from govdecode.aggregation import aggregate
from govdecode.classification.rules import CLASSIFICATION_RULES, ClassificationRule, explain
from govdecode.core.config import KnownAddresses
from govdecode.core.errors import CallWarning, DecodeError, InputLengthMismatch
from govdecode.core.models import Call, ClassifiedTransaction, ProposalAnalysis
from govdecode.decoding.decoder import decode_for_kind
from govdecode.decoding.registries import make_default_registry
from govdecode.decoding.specs import FunctionRegistry
from govdecode.normalize import normalize_call, split_calldatas

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    """Everything the engine needs besides the proposal itself.

    Passed explicitly into every entry point; never stored globally.
    """

    addresses: KnownAddresses = field(default_factory=KnownAddresses)
    functions: FunctionRegistry = field(default_factory=make_default_registry)
    rules: tuple[ClassificationRule, ...] = CLASSIFICATION_RULES


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ProposalInput(BaseModel):
    """Raw proposal call arrays as emitted by a chain indexer.

    Only the shape is validated here; element contents are left to the
    normalizers. Unknown keys (proposalId, title, ...) are kept in
    `model_extra`.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    targets: list[Any]
    values: list[Any]
    calldatas: list[Any] | str
    signatures: list[Any] | None = None

    def call_arrays(self) -> tuple[list[Any], list[Any], list[Any], list[Any] | None]:
        """Return (targets, values, calldatas, signatures) after validating lengths."""
        calldatas = split_calldatas(self.calldatas)
        # An absent or empty signatures array means "no signatures", not a mismatch
        signatures = self.signatures or None

        lengths = {"targets": len(self.targets), "values": len(self.values), "calldatas": len(calldatas)}
        if signatures is not None:
            lengths["signatures"] = len(signatures)
        if len(set(lengths.values())) > 1:
            raise InputLengthMismatch(lengths)
        return self.targets, self.values, calldatas, signatures

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


# ---------------------------------------------------------------------------
# Per-call processing
# ---------------------------------------------------------------------------


def classify_call(
    call: Call,
    index: int,
    config: EngineConfig,
    warnings: tuple[CallWarning, ...] = (),
) -> ClassifiedTransaction:
    """Classify and decode one call. Never raises for hostile calldata."""
    kind, rule = explain(call, config.addresses, config.rules)
    result = decode_for_kind(kind, call.calldata, config.functions)

    decoded = None
    error: DecodeError | None = None
    if isinstance(result, DecodeError):
        error = result
    else:
        decoded = result

    logger.debug("call %d: %s via %s (decoded=%s)", index, kind.value, rule, decoded is not None)
    return ClassifiedTransaction(
        kind=kind,
        index=index,
        decoded=decoded,
        raw_calldata=call.calldata,
        target=call.target,
        value=call.value,
        error=error,
        warnings=warnings,
        rule=rule,
    )


def analyze_calls(
    calls: Sequence[Call],
    config: EngineConfig,
    *,
    warnings: Sequence[tuple[CallWarning, ...]] | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> ProposalAnalysis:
    """Classify, decode and aggregate normalized calls (input order preserved)."""
    if warnings is not None and len(warnings) != len(calls):
        raise ValueError(f"{len(warnings)} warning groups for {len(calls)} calls")

    transactions = tuple(
        classify_call(call, i, config, tuple(warnings[i]) if warnings is not None else ())
        for i, call in enumerate(calls)
    )
    totals = aggregate(calls, transactions)

    failed = sum(1 for tx in transactions if tx.error is not None)
    if failed:
        logger.info("%d of %d calls could not be decoded", failed, len(transactions))
    return ProposalAnalysis(transactions=transactions, totals=totals, metadata=MappingProxyType(dict(metadata or {})))


def analyze_proposal(
    proposal: ProposalInput | Mapping[str, Any],
    config: EngineConfig,
) -> ProposalAnalysis:
    """Process one proposal from raw indexer arrays.

    Raises
    ------
    InputLengthMismatch
        When targets/values/calldatas (and signatures, if present) differ in
        length. Nothing is returned for the proposal in that case.
    pydantic.ValidationError
        When the payload does not have the expected array shape at all.
    """
    if not isinstance(proposal, ProposalInput):
        proposal = ProposalInput.model_validate(proposal)

    targets, values, calldatas, signatures = proposal.call_arrays()

    calls: list[Call] = []
    warnings: list[tuple[CallWarning, ...]] = []
    for i in range(len(targets)):
        sig = signatures[i] if signatures is not None else None
        call, call_warnings = normalize_call(targets[i], values[i], calldatas[i], sig)
        for w in call_warnings:
            logger.warning("call %d: malformed %s %r (%s)", i, w.field, w.raw, w.reason)
        calls.append(call)
        warnings.append(call_warnings)

    return analyze_calls(calls, config, warnings=warnings, metadata=proposal.extra)
