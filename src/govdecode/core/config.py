from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from govdecode.constants import DEFAULT_TOKEN_DECIMALS
from govdecode.core.errors import ConfigError, MalformedAddress
from govdecode.core.models import Address
from govdecode.normalize import normalize_address

Slot = Literal["stablecoin", "nft_collection", "drop_factory"]

# JSON keys accepted for each slot (camelCase as emitted by the dashboard config)
_SLOT_KEYS: dict[Slot, tuple[str, ...]] = {
    "stablecoin": ("stablecoinAddress", "stablecoin_address", "stablecoin"),
    "nft_collection": ("nftCollectionAddress", "nft_collection_address", "nft_collection"),
    "drop_factory": ("dropFactoryAddress", "drop_factory_address", "drop_factory"),
}


def _config_address(slot: str, raw: str | None) -> Address | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    addr = normalize_address(raw)
    if isinstance(addr, MalformedAddress):
        raise ConfigError(f"{slot}: {raw!r} is not an address ({addr.reason})")
    return addr


@dataclass(frozen=True)
class KnownAddresses:
    """Known-address registry: which contracts play which semantic role.

    Every slot is optional; an unset slot matches nothing. Values are stored
    lowercase, comparisons are case-insensitive.
    """

    stablecoin: Address | None = None
    nft_collection: Address | None = None
    drop_factory: Address | None = None

    @classmethod
    def from_strings(
        cls,
        *,
        stablecoin: str | None = None,
        nft_collection: str | None = None,
        drop_factory: str | None = None,
    ) -> KnownAddresses:
        """Validate and normalize raw address strings (raises `ConfigError`)."""
        return cls(
            stablecoin=_config_address("stablecoin", stablecoin),
            nft_collection=_config_address("nft_collection", nft_collection),
            drop_factory=_config_address("drop_factory", drop_factory),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> KnownAddresses:
        values: dict[str, str | None] = {}
        for slot, keys in _SLOT_KEYS.items():
            values[slot] = next((data[k] for k in keys if k in data), None)
        return cls.from_strings(**values)

    @classmethod
    def from_json_file(cls, path: Path | str) -> KnownAddresses:
        try:
            data = json.loads(Path(path).read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read registry file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"registry file {path} must contain a JSON object")
        return cls.from_mapping(data)

    def get(self, slot: Slot) -> Address | None:
        return getattr(self, slot)

    def matches(self, slot: Slot, address: str | None) -> bool:
        """True when `address` equals the configured address of `slot`."""
        configured = self.get(slot)
        if configured is None or address is None:
            return False
        return configured == address.lower()

    def merged(self, **overrides: str | None) -> KnownAddresses:
        """Return a copy with non-empty string overrides applied."""
        current = {slot: self.get(slot) for slot in _SLOT_KEYS}
        current.update({k: v for k, v in overrides.items() if v})
        return KnownAddresses.from_strings(**current)


@dataclass(frozen=True)
class TokenDecimals:
    """Display decimals lookup (presentation layer only)."""

    decimals: Mapping[Address, int] = field(default_factory=dict)
    default: int = DEFAULT_TOKEN_DECIMALS

    @classmethod
    def from_mapping(cls, data: Mapping[str, int], *, default: int = DEFAULT_TOKEN_DECIMALS) -> TokenDecimals:
        table: dict[Address, int] = {}
        for raw, dec in data.items():
            addr = _config_address("token_decimals", raw)
            if addr is None:
                continue
            if isinstance(dec, bool) or not isinstance(dec, int) or dec < 0:
                raise ConfigError(f"token_decimals: invalid decimals {dec!r} for {raw}")
            table[addr] = dec
        return cls(decimals=table, default=default)

    def for_token(self, address: str | None) -> int:
        if address is None:
            return self.default
        return self.decimals.get(address.lower(), self.default)
