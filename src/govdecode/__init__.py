from __future__ import annotations

from .core import (
    Call,
    ClassifiedTransaction,
    ConfigError,
    DecodeError,
    GovDecodeError,
    InputLengthMismatch,
    KnownAddresses,
    TokenDecimals,
    TransactionKind,
)
from .classification.rules import CLASSIFICATION_RULES, classify, explain
from .decoding.registries import make_default_registry
from .decoding.registry_builder import make_registry
from .decoding.specs import FunctionRegistry, FunctionSpec
from .aggregation import aggregate
from .pipeline import EngineConfig, ProposalInput, analyze_calls, analyze_proposal
from .droposals import DroposalListing, find_droposals, is_droposal

__all__ = [
    "Call",
    "ClassifiedTransaction",
    "TransactionKind",
    "KnownAddresses",
    "TokenDecimals",
    "GovDecodeError",
    "InputLengthMismatch",
    "ConfigError",
    "DecodeError",
    "CLASSIFICATION_RULES",
    "classify",
    "explain",
    "make_default_registry",
    "make_registry",
    "FunctionSpec",
    "FunctionRegistry",
    "aggregate",
    "EngineConfig",
    "ProposalInput",
    "analyze_calls",
    "analyze_proposal",
    "DroposalListing",
    "find_droposals",
    "is_droposal",
]
