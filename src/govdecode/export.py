"""Serialization of analysis results: JSON-ready dicts and Arrow/Parquet.

Design notes
------------
- Big integers (wei, token ids, uint256 amounts) are emitted as decimal
  strings for JSON and Arrow safety.
- Bytes are emitted as 0x-hex strings.
- Row order is the proposal's call order.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from govdecode.core.models import ClassifiedTransaction, FundingTotals, ProposalAnalysis, selector_of

_SCHEMA = pa.schema(
    [
        pa.field("index", pa.uint32()),
        pa.field("kind", pa.string()),
        pa.field("target", pa.string()),
        pa.field("value_wei", pa.string()),
        pa.field("selector", pa.string()),
        pa.field("raw_calldata", pa.string()),
        pa.field("decoded", pa.string()),  # JSON object or null
        pa.field("error", pa.string()),
        pa.field("warnings", pa.string()),  # JSON array
    ]
)


def to_jsonable(obj: Any) -> Any:
    """Recursively convert models to JSON-safe values (ints → str, bytes → 0x)."""
    if obj is None or isinstance(obj, (str, bool, float)):
        return obj
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return "0x" + bytes(obj).hex()
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name.rstrip("_"): to_jsonable(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return str(obj)


def transaction_to_dict(tx: ClassifiedTransaction) -> dict[str, Any]:
    return {
        "index": tx.index,
        "kind": tx.kind.value,
        "target": tx.target,
        "value": str(tx.value),
        "rawCalldata": "0x" + tx.raw_calldata.hex(),
        "decoded": to_jsonable(tx.decoded),
        "error": str(tx.error) if tx.error else None,
        "warnings": [to_jsonable(w) for w in tx.warnings],
        "rule": tx.rule,
    }


def totals_to_dict(totals: FundingTotals) -> dict[str, str]:
    return {
        "totalNativeWei": str(totals.total_native_wei),
        "totalStablecoinMinorUnits": str(totals.total_stablecoin_minor_units),
    }


def analysis_to_dict(analysis: ProposalAnalysis) -> dict[str, Any]:
    return {
        "transactions": [transaction_to_dict(tx) for tx in analysis.transactions],
        "totals": totals_to_dict(analysis.totals),
    }


def transactions_to_arrow_table(analysis: ProposalAnalysis) -> pa.Table:
    """Convert classified transactions to an Arrow table with a fixed schema."""
    rows = analysis.transactions
    arrays: dict[str, pa.Array] = {
        "index": pa.array([tx.index for tx in rows], type=pa.uint32()),
        "kind": pa.array([tx.kind.value for tx in rows], type=pa.string()),
        "target": pa.array([tx.target for tx in rows], type=pa.string()),
        "value_wei": pa.array([str(tx.value) for tx in rows], type=pa.string()),
        "selector": pa.array(
            [selector_of(tx.raw_calldata) for tx in rows],
            type=pa.string(),
        ),
        "raw_calldata": pa.array(["0x" + tx.raw_calldata.hex() for tx in rows], type=pa.string()),
        "decoded": pa.array(
            [json.dumps(to_jsonable(tx.decoded)) if tx.decoded is not None else None for tx in rows],
            type=pa.string(),
        ),
        "error": pa.array([str(tx.error) if tx.error else None for tx in rows], type=pa.string()),
        "warnings": pa.array([json.dumps(to_jsonable(tx.warnings)) for tx in rows], type=pa.string()),
    }
    return pa.Table.from_pydict(arrays, schema=_SCHEMA)


def write_parquet(analysis: ProposalAnalysis, path: Path | str) -> Path:
    """Write classified transactions to a Parquet file and return its path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(transactions_to_arrow_table(analysis), out)
    return out
