"""Function specification primitives and registry typing.

Defines lightweight dataclasses to describe how to decode calldata:
- `FunctionSpec`: one function rule (selector, name, ordered ABI params)
- `FunctionRegistry`: mapping from 4-byte selector → FunctionSpec
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FunctionSpec:
    """One function decoding rule."""

    selector: str  # lowercase 0x + 8 hex digits
    name: str
    param_names: tuple[str, ...]
    param_types: tuple[str, ...]  # canonical ABI types, e.g. "(uint104,bytes32)"

    def __post_init__(self):
        if len(self.param_names) != len(self.param_types):
            raise ValueError(f"{self.name}: {len(self.param_names)} names for {len(self.param_types)} types")
        if len(self.selector) != 10 or not self.selector.startswith("0x"):
            raise ValueError(f"{self.name}: selector must be 0x + 8 hex digits, got {self.selector!r}")

    @property
    def signature(self) -> str:
        """Canonical signature, e.g. `transfer(address,uint256)`."""
        return f"{self.name}({','.join(self.param_types)})"


# The full registry keyed by selector (lowercased 0x-hex).
FunctionRegistry = dict[str, FunctionSpec]
