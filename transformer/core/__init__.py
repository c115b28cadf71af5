"""
Core Layer - host services consumed by the operation engine

Modules:
- context_store: key-value context store read by parameter links
- capabilities: capability accessor handed to operation implementations
"""

from .context_store import (
    ContextStore,
    InMemoryContextStore,
    ContextListener,
)
from .capabilities import (
    Capabilities,
    CapabilityUnavailableError,
)

__all__ = [
    'ContextStore',
    'InMemoryContextStore',
    'ContextListener',
    'Capabilities',
    'CapabilityUnavailableError',
]
