"""Tests for the demo chat agent."""

import pytest

from transformer.chat.demo_agent import HELLO_RESPONSE, POEM_RESPONSE, DemoChatAgent


@pytest.mark.asyncio
async def test_known_prompts():
    agent = DemoChatAgent()

    assert await agent.respond("write a poem") == POEM_RESPONSE
    assert await agent.respond("  Hello ") == HELLO_RESPONSE


@pytest.mark.asyncio
async def test_unknown_prompt_is_echoed():
    reply = await DemoChatAgent().respond("tell me a joke")
    assert 'I understood your request: "tell me a joke"' in reply


@pytest.mark.asyncio
async def test_history_recorded():
    agent = DemoChatAgent()
    await agent.respond("hello")

    assert agent.history == [{"prompt": "hello", "response": HELLO_RESPONSE}]


@pytest.mark.asyncio
async def test_custom_responses():
    agent = DemoChatAgent(responses={"ping": "pong"})

    assert await agent.respond("PING") == "pong"
    assert agent.sample_prompts() == ["ping"]
