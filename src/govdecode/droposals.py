"""Droposal extraction: find edition-creation calls across many proposals."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from govdecode.classification.rules import classify
from govdecode.core.config import KnownAddresses
from govdecode.core.errors import DecodeError, InputLengthMismatch
from govdecode.core.models import DropParams, TransactionKind
from govdecode.normalize import normalize_call
from govdecode.pipeline import EngineConfig, ProposalInput, analyze_proposal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DroposalListing:
    """The first edition-creation call of a proposal."""

    proposal_id: str | None
    proposal_number: int | None
    title: str
    call_index: int
    target: str | None
    params: DropParams | None
    error: DecodeError | None = None


def is_droposal(target: Any, calldata: Any, addresses: KnownAddresses) -> bool:
    """True when a raw (target, calldata) pair classifies as CREATE_DROP."""
    call, _ = normalize_call(target, 0, calldata)
    return classify(call, addresses) is TransactionKind.CREATE_DROP


def _as_int(raw: Any) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def find_droposals(
    proposals: Iterable[ProposalInput | Mapping[str, Any]],
    config: EngineConfig,
) -> list[DroposalListing]:
    """One listing per proposal that contains a CREATE_DROP call.

    A proposal with the wrong shape or mismatched array lengths is skipped
    (and logged); the rest of the batch is still processed.
    """
    listings: list[DroposalListing] = []
    for position, raw in enumerate(proposals):
        try:
            proposal = raw if isinstance(raw, ProposalInput) else ProposalInput.model_validate(raw)
            analysis = analyze_proposal(proposal, config)
        except (InputLengthMismatch, ValidationError) as e:
            proposal_id = raw.get("proposalId") if isinstance(raw, Mapping) else None
            logger.error("skipping proposal %s (batch position %d): %s", proposal_id, position, e)
            continue
        extra = proposal.extra

        tx = next((t for t in analysis.transactions if t.kind is TransactionKind.CREATE_DROP), None)
        if tx is None:
            continue

        number = _as_int(extra.get("proposalNumber"))
        listings.append(
            DroposalListing(
                proposal_id=str(extra["proposalId"]) if extra.get("proposalId") is not None else None,
                proposal_number=number,
                title=str(extra.get("title") or (f"Proposal #{number}" if number is not None else "Untitled proposal")),
                call_index=tx.index,
                target=tx.target,
                params=tx.decoded if isinstance(tx.decoded, DropParams) else None,
                error=tx.error,
            )
        )
    return listings
