"""Error taxonomy for proposal call processing.

Two families live here:

- *Value errors* (`MalformedAddress`, `MalformedAmount`, `MalformedCalldata`,
  `DecodeError`): expected outcomes of attacker-controlled input. They are
  returned, attached to the affected transaction, and never raised.
- *Exceptions* (`InputLengthMismatch`, `ConfigError`): fatal conditions in
  trusted input (indexer output shape, local configuration).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

# ---------- normalization-stage values ----------


@dataclass(frozen=True, slots=True)
class MalformedAddress:
    """A target that is not a 20-byte hex address."""

    raw: Any
    reason: str
    field: Literal["target"] = "target"


@dataclass(frozen=True, slots=True)
class MalformedAmount:
    """A value that is not a non-negative uint256."""

    raw: Any
    reason: str
    field: Literal["value"] = "value"


@dataclass(frozen=True, slots=True)
class MalformedCalldata:
    """A calldata string that is not even-length hex."""

    raw: Any
    reason: str
    field: Literal["calldata"] = "calldata"


CallWarning = MalformedAddress | MalformedAmount | MalformedCalldata


# ---------- decode-stage value ----------


@dataclass(frozen=True, slots=True)
class DecodeError:
    """Argument decoding failed for an otherwise classified call."""

    selector: str | None
    reason: str

    def __str__(self) -> str:
        return f"{self.selector or '<none>'}: {self.reason}"


# ---------- exceptions ----------


class GovDecodeError(Exception):
    """Base class for fatal errors raised by govdecode."""


class InputLengthMismatch(GovDecodeError):
    """The parallel proposal arrays differ in length; the proposal is rejected."""

    def __init__(self, lengths: dict[str, int]) -> None:
        self.lengths = dict(lengths)
        detail = ", ".join(f"{k}={v}" for k, v in self.lengths.items())
        super().__init__(f"proposal arrays differ in length ({detail})")


class ConfigError(GovDecodeError):
    """Invalid engine configuration (e.g. a registry slot that is not an address)."""
