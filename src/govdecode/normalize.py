"""Normalizers for raw proposal fields.

Indexers hand us targets, values and calldatas as loosely typed JSON
(strings, numbers, `None`). Each normalizer turns one raw field into its
canonical typed value or returns a `Malformed*` value describing why it
could not. Nothing in this module raises for malformed input.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from govdecode.constants import ADDRESS_HEX_DIGITS, UINT256_DECIMAL_DIGITS, UINT256_HEX_DIGITS, UINT256_MAX
from govdecode.core.errors import CallWarning, MalformedAddress, MalformedAmount, MalformedCalldata
from govdecode.core.models import Address, Amount, Call

_ADDRESS_RE = re.compile(rf"^(?:0[xX])?([0-9a-fA-F]{{{ADDRESS_HEX_DIGITS}}})$")
_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _strip_0x(text: str) -> str:
    return text[2:] if text[:2] in ("0x", "0X") else text


def normalize_address(text: Any) -> Address | MalformedAddress:
    """Return a lowercase 0x address or `MalformedAddress`."""
    if not isinstance(text, str):
        return MalformedAddress(raw=text, reason=f"expected str, got {type(text).__name__}")
    m = _ADDRESS_RE.match(text.strip())
    if m is None:
        return MalformedAddress(raw=text, reason="not 40 hex digits after optional 0x")
    return "0x" + m.group(1).lower()


def normalize_amount(value: Any) -> Amount | MalformedAmount:
    """Return a non-negative uint256 int or `MalformedAmount`.

    Accepts decimal strings, 0x-hex strings and native ints. `None` (an
    absent value in indexer output) is zero. Floats and bools are rejected:
    a float cannot carry a wei amount exactly.
    """
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return MalformedAmount(raw=value, reason=f"unsupported type {type(value).__name__}")

    if isinstance(value, int):
        amount = value
    else:
        s = value.strip()
        if s[:2] in ("0x", "0X"):
            digits = s[2:]
            if not _HEX_RE.match(digits):
                return MalformedAmount(raw=value, reason="invalid hex amount")
            if len(digits.lstrip("0")) > UINT256_HEX_DIGITS:
                return MalformedAmount(raw=value, reason="amount exceeds uint256")
            amount = int(digits, 16)
        elif _DECIMAL_RE.match(s):
            # int() refuses very long decimal strings; uint256 never needs more digits
            significant = s.lstrip("0") or "0"
            if len(significant) > UINT256_DECIMAL_DIGITS:
                return MalformedAmount(raw=value, reason="amount exceeds uint256")
            amount = int(significant, 10)
        elif s.startswith("-") and _DECIMAL_RE.match(s[1:]):
            return MalformedAmount(raw=value, reason="negative amount")
        else:
            return MalformedAmount(raw=value, reason="not a decimal or 0x-hex integer")

    if amount < 0:
        return MalformedAmount(raw=value, reason="negative amount")
    if amount > UINT256_MAX:
        return MalformedAmount(raw=value, reason="amount exceeds uint256")
    return amount


def normalize_calldata(text: Any) -> bytes | MalformedCalldata:
    """Return calldata bytes (possibly empty) or `MalformedCalldata`.

    `None`, `""` and `"0x"` are empty calldata. Odd-length or non-hex input is
    rejected, never truncated.
    """
    if text is None:
        return b""
    if not isinstance(text, str):
        return MalformedCalldata(raw=text, reason=f"expected str, got {type(text).__name__}")
    digits = _strip_0x(text.strip())
    if not digits:
        return b""
    if len(digits) % 2:
        return MalformedCalldata(raw=text, reason="odd number of hex digits")
    if not _HEX_RE.match(digits):
        return MalformedCalldata(raw=text, reason="non-hex characters")
    return bytes.fromhex(digits)


def normalize_signature(text: Any) -> str | None:
    """Return a stripped human-readable signature, or None when absent/blank."""
    if not isinstance(text, str):
        return None
    s = text.strip()
    return s or None


def split_calldatas(raw: Sequence[str] | str | None) -> list[str]:
    """Accept calldatas as a list or as one ':'-joined string (subgraph format)."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split(":") if raw else []
    return list(raw)


def normalize_call(
    target: Any,
    value: Any,
    calldata: Any,
    signature: Any = None,
) -> tuple[Call, tuple[CallWarning, ...]]:
    """Normalize one raw call; malformed fields fall back to neutral values.

    Fallbacks: a malformed target becomes None (matches no registry slot), a
    malformed value counts as 0, malformed calldata is treated as empty.
    """
    warnings: list[CallWarning] = []

    addr = normalize_address(target)
    if isinstance(addr, MalformedAddress):
        warnings.append(addr)
        addr = None

    amount = normalize_amount(value)
    if isinstance(amount, MalformedAmount):
        warnings.append(amount)
        amount = 0

    data = normalize_calldata(calldata)
    if isinstance(data, MalformedCalldata):
        warnings.append(data)
        data = b""

    call = Call(target=addr, value=amount, calldata=data, signature=normalize_signature(signature))
    return call, tuple(warnings)
