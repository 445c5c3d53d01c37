"""Registry builder utilities for creating function registries from signatures.

This module provides the core tools for building FunctionRegistry instances:
- Generic `make_registry()` function for single or multiple signatures
- Signature parsing helpers for converting Solidity function signatures to FunctionSpec
"""

from __future__ import annotations

from eth_utils import keccak

from .registry import add_function_spec
from .specs import FunctionRegistry, FunctionSpec

_LOCATION_KEYWORDS = frozenset({"memory", "calldata", "storage", "payable", "indexed"})
_TYPE_ALIASES = {"uint": "uint256", "int": "int256", "byte": "bytes1"}


# ---- Helpers: build specs from function signature ----
def _split_params(params_str: str) -> list[str]:
    """Split the parameter list by commas while respecting nested tuple types."""
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == '(':
            depth += 1
            buf.append(ch)
        elif ch == ')':
            depth -= 1
            buf.append(ch)
        elif ch == ',' and depth == 0:
            items.append(''.join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise ValueError(f"Unbalanced parentheses in parameter list: {params_str}")
    if buf:
        items.append(''.join(buf).strip())
    # Handle empty list for no params
    return [i for i in items if i]


def _matching_paren(s: str, open_idx: int) -> int:
    """Index of the ')' closing the '(' at `open_idx`, or -1."""
    if open_idx == -1:
        return -1
    depth = 0
    for i in range(open_idx, len(s)):
        if s[i] == '(':
            depth += 1
        elif s[i] == ')':
            depth -= 1
            if depth == 0:
                return i
    return -1


def _canonical_elementary(abi_type: str) -> str:
    """Resolve aliases (`uint` → `uint256`) while keeping any array suffix."""
    bracket = abi_type.find('[')
    base, suffix = (abi_type, '') if bracket == -1 else (abi_type[:bracket], abi_type[bracket:])
    return _TYPE_ALIASES.get(base, base) + suffix


def _canonical_tuple(head: str, suffix: str) -> str:
    """'(uint104 price, bytes32 root)' + '[]' → '(uint104,bytes32)[]'."""
    inner = head[head.find('(') + 1 : head.rfind(')')]
    parts = [_parse_param(p, fallback_name=f"c{i}")[1] for i, p in enumerate(_split_params(inner))]
    return f"({','.join(parts)}){suffix}"


def _parse_param(p: str, fallback_name: str) -> tuple[str, str]:
    """Parse one parameter fragment into (name, canonical abi_type)."""
    s = ' '.join(p.strip().split())  # normalize spaces
    if s.startswith('(') or s.startswith('tuple('):
        close = _matching_paren(s, s.find('('))
        if close == -1:
            raise ValueError(f"Unbalanced tuple parameter: {p}")
        rest = [t for t in s[close + 1:].split() if t not in _LOCATION_KEYWORDS]
        suffix = ''
        while rest and rest[0].startswith('['):
            suffix += rest.pop(0)
        name = rest[-1] if rest else fallback_name
        return (name, _canonical_tuple(s[: close + 1], suffix))

    tokens = [t for t in s.split() if t not in _LOCATION_KEYWORDS]
    if not tokens:
        raise ValueError(f"Empty parameter fragment: {p!r}")
    if len(tokens) == 1:
        # Unnamed parameter
        return (fallback_name, _canonical_elementary(tokens[0]))
    # Last token is the name, the rest is the type ("uint256 []" → "uint256[]")
    return (tokens[-1], _canonical_elementary(''.join(tokens[:-1])))


def function_selector(canonical_signature: str) -> str:
    """Return the lowercase 0x selector of a canonical function signature."""
    return '0x' + keccak(text=canonical_signature)[:4].hex()


def function_spec_from_signature(signature: str) -> FunctionSpec:
    """Build a FunctionSpec from a Solidity function signature string.

    Example input:
      "transfer(address to, uint256 amount)"
    """
    sig = signature.strip()
    if sig.startswith('function '):
        sig = sig[len('function '):]
    # Extract name and parameters content
    open_paren = sig.find('(')
    close_paren = _matching_paren(sig, open_paren)
    if open_paren <= 0 or close_paren == -1:
        raise ValueError(f"Invalid function signature: {signature}")
    name = sig[:open_paren].strip()
    params_str = sig[open_paren + 1 : close_paren].strip()

    names: list[str] = []
    types: list[str] = []
    for i, part in enumerate(_split_params(params_str)):
        name_i, abi_type_i = _parse_param(part, fallback_name=f"arg{i}")
        names.append(name_i)
        types.append(abi_type_i)

    canonical_signature = f"{name}({','.join(types)})"
    return FunctionSpec(
        selector=function_selector(canonical_signature),
        name=name,
        param_names=tuple(names),
        param_types=tuple(types),
    )


def make_registry(signatures: str | list[str]) -> FunctionRegistry:
    """Create a registry from one or multiple function signatures.

    Args:
        signatures: Single signature string or list of signature strings

    Returns:
        FunctionRegistry with entries for each signature
    """
    reg: FunctionRegistry = {}

    # Normalize to list
    sig_list = [signatures] if isinstance(signatures, str) else signatures

    for signature in sig_list:
        add_function_spec(reg, function_spec_from_signature(signature))

    return reg
