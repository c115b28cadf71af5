"""
Operation Registry for the Transformer engine.

Provides a typed, discoverable catalog of operation definitions.
"""

from .operation_registry import (
    OperationRegistry,
    OperationDefinition,
    ParameterSpec,
    PARAMETER_TYPES,
    # Exceptions
    OperationRegistryError,
    DuplicateDefinitionError,
    MalformedSchemaError,
    UnknownOperationError,
    InvalidCallError,
    UnresolvedLinkError,
    OperationExecutionError,
)

__all__ = [
    'OperationRegistry',
    'OperationDefinition',
    'ParameterSpec',
    'PARAMETER_TYPES',
    # Exceptions
    'OperationRegistryError',
    'DuplicateDefinitionError',
    'MalformedSchemaError',
    'UnknownOperationError',
    'InvalidCallError',
    'UnresolvedLinkError',
    'OperationExecutionError',
]
