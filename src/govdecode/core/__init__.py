"""Core data models, errors and configuration.

This package provides:
- Data models (Call, TransactionKind, ClassifiedTransaction, FundingTotals, ...)
- Error taxonomy (Malformed*, DecodeError, InputLengthMismatch, ConfigError)
- Configuration classes (KnownAddresses, TokenDecimals)
"""

from govdecode.core.errors import (
    CallWarning,
    ConfigError,
    DecodeError,
    GovDecodeError,
    InputLengthMismatch,
    MalformedAddress,
    MalformedAmount,
    MalformedCalldata,
)
from govdecode.core.models import (
    Call,
    ClassifiedTransaction,
    DropParams,
    Erc20Transfer,
    Erc721Transfer,
    FundingTotals,
    ProposalAnalysis,
    SaleConfig,
    TransactionKind,
)
from govdecode.core.config import KnownAddresses, TokenDecimals

__all__ = [
    "CallWarning",
    "ConfigError",
    "DecodeError",
    "GovDecodeError",
    "InputLengthMismatch",
    "MalformedAddress",
    "MalformedAmount",
    "MalformedCalldata",
    "Call",
    "ClassifiedTransaction",
    "DropParams",
    "Erc20Transfer",
    "Erc721Transfer",
    "FundingTotals",
    "ProposalAnalysis",
    "SaleConfig",
    "TransactionKind",
    "KnownAddresses",
    "TokenDecimals",
]
