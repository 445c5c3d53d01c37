"""Mutation helpers for function registries.

This module exposes:
- `add_function_spec(registry, spec)` → insert one spec (lowercases key)
- `add_many(registry, specs)` → insert multiple
- `merge_registries(*registries)` → new registry, later entries win
"""

from __future__ import annotations

from collections.abc import Iterable

from govdecode.decoding.specs import FunctionRegistry, FunctionSpec


def add_function_spec(registry: FunctionRegistry, spec: FunctionSpec) -> None:
    """Insert one spec into the registry keyed by lowercased selector."""
    registry[spec.selector.lower()] = spec


def add_many(registry: FunctionRegistry, specs: Iterable[FunctionSpec]) -> None:
    """Insert many specs into the registry."""
    for s in specs:
        add_function_spec(registry, s)


def merge_registries(*registries: FunctionRegistry) -> FunctionRegistry:
    reg: FunctionRegistry = {}
    for r in registries:
        add_many(reg, r.values())
    return reg
