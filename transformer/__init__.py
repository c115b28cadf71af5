"""
Transformer - operation registry and linked-parameter execution engine.

Operations are registered once with typed parameter schemas. Calls supply
literal parameters or links to values held elsewhere (context keys, other
calls' results); links are resolved at call time and the operation runs
with an injected capability accessor.
"""

from .core.capabilities import Capabilities, CapabilityUnavailableError
from .core.context_store import ContextStore, InMemoryContextStore
from .engine import (
    CallResultCache,
    ProgramRunner,
    decode_params,
    resolve_params,
    run_operation,
)
from .models.program import (
    ContextKeyLink,
    OperationCall,
    OperationLink,
    OperationParam,
    Program,
)
from .registry.operation_registry import (
    DuplicateDefinitionError,
    InvalidCallError,
    MalformedSchemaError,
    OperationDefinition,
    OperationRegistry,
    OperationRegistryError,
    ParameterSpec,
    UnknownOperationError,
    UnresolvedLinkError,
)
from .registry.operations import register_builtin_operations

__version__ = "0.1.0"

__all__ = [
    "Capabilities",
    "CapabilityUnavailableError",
    "ContextStore",
    "InMemoryContextStore",
    "CallResultCache",
    "ProgramRunner",
    "decode_params",
    "resolve_params",
    "run_operation",
    "ContextKeyLink",
    "OperationCall",
    "OperationLink",
    "OperationParam",
    "Program",
    "DuplicateDefinitionError",
    "InvalidCallError",
    "MalformedSchemaError",
    "OperationDefinition",
    "OperationRegistry",
    "OperationRegistryError",
    "ParameterSpec",
    "UnknownOperationError",
    "UnresolvedLinkError",
    "register_builtin_operations",
]
