"""Shared fixtures for Transformer engine tests."""

from typing import Dict, List

import pytest

from transformer.config import settings
from transformer.core.capabilities import Capabilities
from transformer.core.context_store import InMemoryContextStore
from transformer.registry.operation_registry import OperationRegistry
from transformer.registry.operations import register_builtin_operations


@pytest.fixture(autouse=True)
def restore_feature_flags():
    """Undo set_flag() calls made by a test."""
    saved = settings.get_all_flags()
    yield
    settings.FEATURE_FLAGS.clear()
    settings.FEATURE_FLAGS.update(saved)


@pytest.fixture
def registry():
    """Fresh, empty registry."""
    return OperationRegistry()


@pytest.fixture
def builtin_registry():
    """Registry with the built-in operations registered."""
    return register_builtin_operations(OperationRegistry())


@pytest.fixture
def context():
    """Fresh in-memory context store."""
    return InMemoryContextStore()


@pytest.fixture
def shown_messages() -> List[Dict[str, str]]:
    """Messages recorded by the show_message capability."""
    return []


@pytest.fixture
def chat_prompts() -> List[str]:
    """Prompts recorded by the start_chat capability."""
    return []


@pytest.fixture
def capabilities(context, shown_messages, chat_prompts):
    """Capabilities backed by the context store, recording messages and prompts."""
    async def show_message(level: str, text: str) -> None:
        shown_messages.append({"level": level, "text": text})

    async def start_chat(prompt: str) -> str:
        chat_prompts.append(prompt)
        return f"reply to {prompt}"

    return Capabilities.from_context_store(
        context,
        show_message=show_message,
        start_chat=start_chat,
    )
