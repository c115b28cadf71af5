"""
Chat operation registrations.

Operations that talk to a chat agent provided by the host.
"""

import logging
from typing import Any, Dict, List

from ...core.capabilities import Capabilities
from ...models.program import OperationCall
from ..operation_registry import (
    OperationDefinition,
    OperationExecutionError,
    OperationRegistry,
    ParameterSpec,
)

logger = logging.getLogger(__name__)

OPERATION_START_CHAT = "startChat"

DEFAULT_CHAT_PROMPT = "write a poem"


# ============================================================================
# Operation Implementations
# ============================================================================

async def start_chat_impl(capabilities: Capabilities, call: OperationCall, params: Dict[str, Any]) -> str:
    """
    Send ``prompt`` to the host's chat agent.

    The agent's reply is the call's result, so later calls can link to it.

    Raises:
        CapabilityUnavailableError: If the host provides no chat agent
        OperationExecutionError: If the agent returns an empty reply
    """
    start_chat = capabilities.require("start_chat")
    prompt = params.get("prompt", DEFAULT_CHAT_PROMPT)

    response = await start_chat(prompt)
    if not response:
        raise OperationExecutionError("Failed to send chat request")

    logger.debug(f"{call.call_id}: chat replied with {len(response)} characters")
    return response


# ============================================================================
# Operation Definitions
# ============================================================================

START_CHAT = OperationDefinition(
    id=OPERATION_START_CHAT,
    description="Starts a chat session with a specific prompt",
    parameter_schema=[
        ParameterSpec(
            name="prompt",
            type="string",
            description="Message to send to chat",
            required=False,
            default_value=DEFAULT_CHAT_PROMPT
        ),
    ],
    implementation=start_chat_impl,
    tags=["chat"],
)

CHAT_OPERATIONS: List[OperationDefinition] = [
    START_CHAT,
]


# ============================================================================
# Registration Function
# ============================================================================

def register_chat_operations(registry: OperationRegistry) -> None:
    """Register all chat operations with the registry."""
    registry.register_all(CHAT_OPERATIONS)
    logger.info(f"Registered {len(CHAT_OPERATIONS)} chat operations")
