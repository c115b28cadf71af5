"""
Dialog operation registrations.

Operations that surface messages to the user through the host.
"""

import logging
from typing import Any, Dict, List, Optional

from ...core.capabilities import Capabilities
from ...models.program import OperationCall, OperationParam
from ..operation_registry import (
    OperationDefinition,
    OperationRegistry,
    ParameterSpec,
)

logger = logging.getLogger(__name__)

OPERATION_SHOW_DIALOG = "showDialog"

DIALOG_LEVELS = ("Info", "Warning", "Error")


# ============================================================================
# Operation Implementations
# ============================================================================

async def show_dialog_impl(capabilities: Capabilities, call: OperationCall, params: Dict[str, Any]) -> None:
    """Show ``text`` at ``level``."""
    text = params["text"]
    level = params.get("level", "Info")

    await capabilities.show_message(level, text)


def validate_dialog_params(params: List[OperationParam]) -> Optional[str]:
    """Reject a literal level outside the known dialog levels."""
    for param in params:
        if param.name == "level" and not param.is_linked and param.value is not None:
            if param.value not in DIALOG_LEVELS:
                return f"Invalid dialog level: {param.value} (expected one of {', '.join(DIALOG_LEVELS)})"
    return None


# ============================================================================
# Operation Definitions
# ============================================================================

SHOW_DIALOG = OperationDefinition(
    id=OPERATION_SHOW_DIALOG,
    description="Shows a dialog to the user",
    parameter_schema=[
        ParameterSpec(
            name="text",
            type="string",
            description="Message to show",
            required=True
        ),
        ParameterSpec(
            name="level",
            type="string",
            description="Dialog level",
            required=False,
            default_value="Info"
        ),
    ],
    implementation=show_dialog_impl,
    validate_params=validate_dialog_params,
    tags=["ui"],
)

DIALOG_OPERATIONS: List[OperationDefinition] = [
    SHOW_DIALOG,
]


# ============================================================================
# Registration Function
# ============================================================================

def register_dialog_operations(registry: OperationRegistry) -> None:
    """Register all dialog operations with the registry."""
    registry.register_all(DIALOG_OPERATIONS)
    logger.info(f"Registered {len(DIALOG_OPERATIONS)} dialog operations")
