"""Chat agents available to the startChat operation."""

from .demo_agent import DemoChatAgent

__all__ = ["DemoChatAgent"]
