import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Literal

from eth_utils.abi import function_signature_to_4byte_selector
from pydantic import BaseModel

from govdecode.decoding.registry import add_function_spec
from govdecode.decoding.specs import FunctionRegistry, FunctionSpec


class AbiInput(BaseModel):
    name: str = ""
    type: str
    internalType: str | None = None
    components: Sequence["AbiInput"] | None = None


class AbiFunction(BaseModel):
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["function"]
    stateMutability: str | None = None


def get_input_type(function_input: AbiInput) -> str:
    """Canonical ABI type; `tuple[]` with components becomes `(t1,t2)[]`."""
    if function_input.type.startswith("tuple"):
        suffix = function_input.type[len("tuple"):]
        inner = ",".join(get_input_type(c) for c in function_input.components or ())
        return f"({inner}){suffix}"
    return function_input.type


def get_function_signature(function: AbiFunction):
    return f"{function.name}({','.join(get_input_type(function_input) for function_input in function.inputs)})"


def get_function_selector(function: AbiFunction):
    return "0x" + function_signature_to_4byte_selector(get_function_signature(function)).hex()


def get_function_spec(function: AbiFunction):
    return FunctionSpec(
        selector=get_function_selector(function),
        name=function.name,
        param_names=tuple(
            function_input.name or f"arg{function_input_idx}"
            for function_input_idx, function_input in enumerate(function.inputs)
        ),
        param_types=tuple(get_input_type(function_input) for function_input in function.inputs),
    )


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def get_functions_from_abi(abi: AbiSpec) -> dict[str, AbiFunction]:
    """Functions keyed by canonical signature (overloads stay distinct)."""
    abi = _load_abi(abi)
    functions = (AbiFunction.model_validate(entry) for entry in abi if entry.get("type") == "function")
    return {get_function_signature(f): f for f in functions}


def make_function_registry_from_functions(functions: Iterable[AbiFunction]) -> FunctionRegistry:
    reg: FunctionRegistry = {}

    for function in functions:
        add_function_spec(
            reg,
            get_function_spec(function),
        )

    return reg


def make_function_registry_from_abi(abi: AbiSpec) -> FunctionRegistry:
    return make_function_registry_from_functions(get_functions_from_abi(abi).values())
