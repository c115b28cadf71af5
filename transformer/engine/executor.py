"""
Execution engine: validate, resolve, invoke.

One ``run_operation`` call is one linear pipeline. There is no queueing,
timeout, retry or deduplication; concurrent runs of the same call id are
independent.
"""

import logging
from typing import Any, Optional

from ..core.capabilities import Capabilities
from ..models.program import OperationCall
from ..registry.operation_registry import (
    InvalidCallError,
    OperationRegistry,
    UnknownOperationError,
)
from .resolver import decode_params, resolve_params
from .results import CallResultCache

logger = logging.getLogger(__name__)


async def run_operation(
    capabilities: Capabilities,
    registry: OperationRegistry,
    call: OperationCall,
    results: Optional[CallResultCache] = None
) -> Any:
    """
    Run a single call.

    Args:
        capabilities: Host services; ``lookup`` feeds context-key links
        registry: Registry holding the call's operation definition
        call: The call to run
        results: Result cache for operation links; any earlier result for
            this call is dropped first, and the result of this run is
            recorded here on success

    Returns:
        Whatever the operation implementation returned

    Raises:
        UnknownOperationError: If the call's operation is not registered
        InvalidCallError: If the call fails validation or its parameters
            cannot be resolved or decoded
        Exception: Anything raised by the implementation, unchanged
    """
    if results is not None:
        results.discard(call.call_id)

    definition = registry.get(call.op_def_id)
    if definition is None:
        raise UnknownOperationError(call.op_def_id)

    error = registry.validate_call(call)
    if error:
        raise InvalidCallError(f"Invalid operation: {error}")

    resolved = resolve_params(call, capabilities.lookup, results)
    params = decode_params(definition, resolved)

    logger.debug(f"Running {call.call_id} ({definition.id})")
    result = await definition.implementation(capabilities, call, params)

    if results is not None:
        results.record(call.call_id, result)

    return result
