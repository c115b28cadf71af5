"""Bundled demo programs."""

from .hello_world import (
    HELLO_WORLD_MESSAGE,
    MESSAGE_CONTEXT_KEY,
    create_hello_world_program,
)

__all__ = [
    "HELLO_WORLD_MESSAGE",
    "MESSAGE_CONTEXT_KEY",
    "create_hello_world_program",
]
