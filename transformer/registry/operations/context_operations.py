"""
Context operation registrations.

Operations that write values into the host's context store.
"""

import logging
from typing import Any, Dict, List

from ...core.capabilities import Capabilities
from ...models.program import OperationCall
from ..operation_registry import (
    OperationDefinition,
    OperationRegistry,
    ParameterSpec,
)

logger = logging.getLogger(__name__)

OPERATION_SET_CONTEXT = "setContext"


# ============================================================================
# Operation Implementations
# ============================================================================

async def set_context_impl(capabilities: Capabilities, call: OperationCall, params: Dict[str, Any]) -> Any:
    """Write ``value`` under ``key``; the written value is the call's result."""
    key = params["key"]
    value = params["value"]

    capabilities.store(key, value)
    logger.debug(f"{call.call_id}: context '{key}' updated")
    return value


# ============================================================================
# Operation Definitions
# ============================================================================

SET_CONTEXT = OperationDefinition(
    id=OPERATION_SET_CONTEXT,
    description="Sets a context key value",
    parameter_schema=[
        ParameterSpec(
            name="key",
            type="string",
            description="Context key name",
            required=True
        ),
        ParameterSpec(
            name="value",
            type="string",
            description="Context key value",
            required=True
        ),
    ],
    implementation=set_context_impl,
    tags=["context"],
)

CONTEXT_OPERATIONS: List[OperationDefinition] = [
    SET_CONTEXT,
]


# ============================================================================
# Registration Function
# ============================================================================

def register_context_operations(registry: OperationRegistry) -> None:
    """Register all context operations with the registry."""
    registry.register_all(CONTEXT_OPERATIONS)
    logger.info(f"Registered {len(CONTEXT_OPERATIONS)} context operations")
