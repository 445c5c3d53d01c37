"""Calldata decoding with selector-keyed function specs.

This package provides:
- Function specification system (FunctionSpec, FunctionRegistry)
- Signature/ABI based registry builders
- Typed decoders for ERC-20, ERC-721 and createEdition calls
- The built-in default registry
"""

from govdecode.decoding.decoder import (
    DecodedCall,
    decode_call,
    decode_create_edition,
    decode_erc20_transfer,
    decode_erc721_transfer,
    decode_for_kind,
    decoder_for_kind,
    selector_of,
)
from govdecode.decoding.registries import (
    make_default_registry,
    make_drop_registry,
    make_erc20_registry,
    make_erc721_registry,
)
from govdecode.decoding.registry import add_function_spec, add_many, merge_registries
from govdecode.decoding.registry_builder import function_spec_from_signature, make_registry
from govdecode.decoding.specs import FunctionRegistry, FunctionSpec

__all__ = [
    "DecodedCall",
    "decode_call",
    "decode_create_edition",
    "decode_erc20_transfer",
    "decode_erc721_transfer",
    "decode_for_kind",
    "decoder_for_kind",
    "selector_of",
    "make_default_registry",
    "make_drop_registry",
    "make_erc20_registry",
    "make_erc721_registry",
    "add_function_spec",
    "add_many",
    "merge_registries",
    "function_spec_from_signature",
    "make_registry",
    "FunctionRegistry",
    "FunctionSpec",
]
