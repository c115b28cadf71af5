"""
Built-in operation registrations.

Registers the context, dialog and chat operations with a registry.
"""

from ..operation_registry import OperationRegistry
from .context_operations import OPERATION_SET_CONTEXT, register_context_operations
from .dialog_operations import OPERATION_SHOW_DIALOG, register_dialog_operations
from .chat_operations import OPERATION_START_CHAT, register_chat_operations


def register_builtin_operations(registry: OperationRegistry) -> OperationRegistry:
    """Register all built-in operations and return the registry."""
    register_context_operations(registry)
    register_dialog_operations(registry)
    register_chat_operations(registry)
    return registry


__all__ = [
    'register_builtin_operations',
    'register_context_operations',
    'register_dialog_operations',
    'register_chat_operations',
    'OPERATION_SET_CONTEXT',
    'OPERATION_SHOW_DIALOG',
    'OPERATION_START_CHAT',
]
