"""
Capability accessor passed to operation implementations.

Implementations reach host services (reading and writing context values,
showing messages, talking to a chat agent) only through this object. The
engine itself uses nothing but ``lookup``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from .context_store import ContextStore

logger = logging.getLogger(__name__)

LookupFn = Callable[[str], Any]
StoreFn = Callable[[str, Any], None]
ShowMessageFn = Callable[[str, str], Awaitable[None]]   # (level, text)
StartChatFn = Callable[[str], Awaitable[str]]           # prompt -> response


class CapabilityUnavailableError(Exception):
    """Raised when an implementation needs a service the host did not supply."""
    pass


async def _log_message(level: str, text: str) -> None:
    logger.info(f"[{level}] {text}")


@dataclass
class Capabilities:
    """Host services available to operation implementations.

    Attributes:
        lookup: Read a context value by key (None if absent)
        store: Write a context value
        show_message: Surface a message to the user
        start_chat: Send a prompt to a chat agent and return its reply (optional)
    """
    lookup: LookupFn
    store: StoreFn
    show_message: ShowMessageFn = _log_message
    start_chat: Optional[StartChatFn] = None

    def require(self, name: str) -> Callable:
        """
        Get a capability, failing if the host did not provide it.

        Args:
            name: Capability attribute name (e.g., "start_chat")

        Returns:
            The capability callable

        Raises:
            CapabilityUnavailableError: If the capability is missing
        """
        capability = getattr(self, name, None)
        if capability is None:
            raise CapabilityUnavailableError(f"Capability '{name}' is not available")
        return capability

    @classmethod
    def from_context_store(
        cls,
        context: ContextStore,
        show_message: Optional[ShowMessageFn] = None,
        start_chat: Optional[StartChatFn] = None
    ) -> "Capabilities":
        """Build capabilities whose lookup/store are backed by a context store."""
        return cls(
            lookup=context.get,
            store=context.set,
            show_message=show_message or _log_message,
            start_chat=start_chat,
        )
