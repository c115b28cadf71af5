"""
Operation Registry - Typed catalog of operation definitions.

Provides:
- Operation definitions with typed parameter schemas
- One-shot registration (duplicate ids and malformed schemas are rejected)
- Call validation that reports problems as values, not exceptions
- Discoverability via JSON-schema style documentation

The registry is an ordinary object. Whoever composes the host owns one and
passes it to the execution engine; there is no module-level singleton.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from ..config.settings import is_enabled
from ..core.capabilities import Capabilities
from ..models.program import OperationCall, OperationParam

logger = logging.getLogger(__name__)

# Parameter type name -> accepted Python types
PARAMETER_TYPES: Dict[str, tuple] = {
    "string": (str,),
    "boolean": (bool,),
    "number": (int, float),
}

Implementation = Callable[[Capabilities, OperationCall, Dict[str, Any]], Awaitable[Any]]
ParamsValidator = Callable[[List[OperationParam]], Optional[str]]


def matches_type(value: Any, type_name: str) -> bool:
    """Check a literal value against a schema type name."""
    accepted = PARAMETER_TYPES.get(type_name)
    if accepted is None:
        return False
    # bool is an int subclass but never a number here
    if type_name == "number" and isinstance(value, bool):
        return False
    return isinstance(value, accepted)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class ParameterSpec:
    """Schema entry for one operation parameter."""
    name: str
    type: str                       # "string", "boolean" or "number"
    description: str = ""
    required: bool = False
    default_value: Any = None

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": self.type,
            "description": self.description,
        }
        if self.default_value is not None:
            schema["default"] = self.default_value
        return schema


@dataclass(frozen=True)
class OperationDefinition:
    """
    Describes a named operation for the registry.

    The implementation is awaited with the capability accessor, the call and
    the decoded parameter values. Whatever it returns becomes the call's
    result, available to later calls through operation links.
    """
    id: str                                    # Operation identifier (e.g., "setContext")
    description: str                           # Human-readable description
    implementation: Implementation
    parameter_schema: List[ParameterSpec] = field(default_factory=list)
    validate_params: Optional[ParamsValidator] = None
    tags: List[str] = field(default_factory=list)

    def get_parameter(self, name: str) -> Optional[ParameterSpec]:
        for spec in self.parameter_schema:
            if spec.name == name:
                return spec
        return None

    @property
    def required_parameters(self) -> List[str]:
        return [spec.name for spec in self.parameter_schema if spec.required]


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry and engine errors."""
    pass


class DuplicateDefinitionError(OperationRegistryError):
    """Operation id already registered."""
    pass


class MalformedSchemaError(OperationRegistryError):
    """Operation definition or its parameter schema is invalid."""
    pass


class UnknownOperationError(OperationRegistryError):
    """Call references an operation that is not registered."""

    def __init__(self, op_def_id: str):
        super().__init__(f"Unknown operation type: {op_def_id}")
        self.op_def_id = op_def_id


class InvalidCallError(OperationRegistryError):
    """Call does not satisfy its operation's schema."""
    pass


class UnresolvedLinkError(InvalidCallError):
    """A parameter link could not be resolved."""
    pass


class OperationExecutionError(OperationRegistryError):
    """Raised by operation implementations when they cannot complete."""
    pass


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """Catalog of operation definitions, keyed by id."""

    def __init__(self):
        self._operations: Dict[str, OperationDefinition] = {}
        logger.debug("OperationRegistry initialized")

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, definition: OperationDefinition) -> None:
        """
        Register a new operation definition.

        Args:
            definition: Operation definition to register

        Raises:
            DuplicateDefinitionError: If the id is already registered
            MalformedSchemaError: If the definition or its schema is invalid
        """
        if definition.id in self._operations:
            raise DuplicateDefinitionError(f"Operation {definition.id} already registered")

        self._validate_definition(definition)

        self._operations[definition.id] = definition
        logger.info(
            f"Registered operation: {definition.id} "
            f"({len(definition.parameter_schema)} parameters)"
        )

    def register_all(self, definitions: Iterable[OperationDefinition]) -> None:
        """Register multiple definitions, stopping at the first failure."""
        for definition in definitions:
            self.register(definition)

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get(self, op_id: str) -> Optional[OperationDefinition]:
        """Look up a definition by id. Returns None if not registered."""
        return self._operations.get(op_id)

    def exists(self, op_id: str) -> bool:
        """Check if operation exists."""
        return op_id in self._operations

    def list(self, tag: Optional[str] = None) -> List[OperationDefinition]:
        """
        List definitions in registration order.

        Args:
            tag: Only include definitions carrying this tag

        Returns:
            List of operation definitions
        """
        definitions = list(self._operations.values())
        if tag:
            definitions = [d for d in definitions if tag in d.tags]
        return definitions

    def ids(self) -> List[str]:
        return list(self._operations.keys())

    def __contains__(self, op_id: str) -> bool:
        return op_id in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    # ========================================================================
    # Call Validation
    # ========================================================================

    def validate_call(self, call: OperationCall) -> Optional[str]:
        """
        Check a call against its operation's schema.

        Problems are returned as a message rather than raised so callers can
        choose whether to surface them to a user or a log.

        Args:
            call: Call to validate

        Returns:
            Error message, or None if the call is valid
        """
        definition = self._operations.get(call.op_def_id)
        if definition is None:
            return f"Unknown operation type: {call.op_def_id}"

        for spec in definition.parameter_schema:
            if spec.required and spec.default_value is None and call.get_param(spec.name) is None:
                return f"Missing required parameter: {spec.name}"

        if is_enabled('strict_parameters'):
            for param in call.params:
                if definition.get_parameter(param.name) is None:
                    return f"Unknown parameter '{param.name}' for operation '{definition.id}'"

        if definition.validate_params is not None:
            return definition.validate_params(list(call.params))

        return None

    # ========================================================================
    # Schema Generation
    # ========================================================================

    def get_operation_docs(self, op_id: str) -> Dict[str, Any]:
        """
        Get documentation for an operation.

        Raises:
            UnknownOperationError: If operation doesn't exist
        """
        definition = self.get(op_id)
        if definition is None:
            raise UnknownOperationError(op_id)

        return {
            "id": definition.id,
            "description": definition.description,
            "input_schema": self._input_schema(definition),
            "tags": list(definition.tags),
        }

    def get_schema(self) -> Dict[str, Any]:
        """JSON Schema accepting any registered operation and its parameters."""
        schemas = []
        for definition in self._operations.values():
            schemas.append({
                "type": "object",
                "properties": {
                    "op_def_id": {"const": definition.id},
                    "params": self._input_schema(definition)
                },
                "required": ["op_def_id"]
            })

        return {
            "type": "object",
            "oneOf": schemas,
            "description": "Registered operations"
        }

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    @staticmethod
    def _input_schema(definition: OperationDefinition) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                spec.name: spec.to_json_schema() for spec in definition.parameter_schema
            },
            "required": definition.required_parameters,
        }

    def _validate_definition(self, definition: OperationDefinition) -> None:
        """
        Validate an operation definition.

        Raises:
            MalformedSchemaError: If validation fails
        """
        if not definition.id:
            raise MalformedSchemaError("Operation id is required")

        if definition.implementation is None:
            raise MalformedSchemaError(f"Operation {definition.id} has no implementation")

        names = set()
        for spec in definition.parameter_schema:
            if not spec.name or not spec.type:
                raise MalformedSchemaError(f"Invalid parameter schema in operation {definition.id}")

            if spec.type not in PARAMETER_TYPES:
                raise MalformedSchemaError(
                    f"Invalid parameter type '{spec.type}' for '{spec.name}' in operation "
                    f"{definition.id} (expected: {', '.join(PARAMETER_TYPES)})"
                )

            if spec.name in names:
                raise MalformedSchemaError(
                    f"Duplicate parameter '{spec.name}' in operation {definition.id}"
                )
            names.add(spec.name)

            if spec.default_value is not None and not matches_type(spec.default_value, spec.type):
                raise MalformedSchemaError(
                    f"Default value for '{spec.name}' in operation {definition.id} "
                    f"is not a {spec.type}"
                )
