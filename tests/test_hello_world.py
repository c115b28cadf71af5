"""
End-to-end tests: programs built from the built-in operations.
"""

from pathlib import Path

import pytest

from transformer.chat.demo_agent import HELLO_RESPONSE, POEM_RESPONSE, DemoChatAgent
from transformer.core.capabilities import Capabilities
from transformer.engine.executor import run_operation
from transformer.engine.program_runner import ProgramRunner
from transformer.models.program import ContextKeyLink, OperationCall, OperationParam, Program
from transformer.programs.hello_world import HELLO_WORLD_MESSAGE, create_hello_world_program

EXAMPLE_PROGRAM = Path(__file__).parent.parent / "examples" / "hello_world.yaml"


@pytest.mark.asyncio
async def test_set_then_show_linked_message(capabilities, builtin_registry, shown_messages):
    """A value written by setContext reaches showDialog through a link."""
    set_call = OperationCall(call_id="c1", op_def_id="setContext", params=[
        OperationParam(name="key", value="message"),
        OperationParam(name="value", value="Hello"),
    ])
    show_call = OperationCall(call_id="c2", op_def_id="showDialog", params=[
        OperationParam(name="text", link=ContextKeyLink(param_name="text", context_key="message")),
    ])

    await run_operation(capabilities, builtin_registry, set_call)
    await run_operation(capabilities, builtin_registry, show_call)

    assert shown_messages == [{"level": "Info", "text": "Hello"}]


# ============================================================================
# Hello World Program
# ============================================================================

class TestHelloWorldProgram:
    """Test the bundled hello-world program."""

    def test_call_ids_use_owner_and_delimiter(self):
        program = create_hello_world_program("controller")
        assert [c.call_id for c in program.calls] == [
            "controller.setContext",
            "controller.showDialog",
            "controller.startChat",
        ]

        program = create_hello_world_program("controller", delimiter="::")
        assert program.calls[0].call_id == "controller::setContext"

    def test_every_call_validates(self, builtin_registry):
        program = create_hello_world_program("demo")
        assert [builtin_registry.validate_call(c) for c in program.calls] == [None, None, None]

    @pytest.mark.asyncio
    async def test_runs_with_demo_agent(self, builtin_registry, context, shown_messages):
        agent = DemoChatAgent()

        async def show_message(level, text):
            shown_messages.append({"level": level, "text": text})

        capabilities = Capabilities.from_context_store(context, show_message=show_message, start_chat=agent.respond)
        runner = ProgramRunner(builtin_registry, capabilities)
        runner.load(create_hello_world_program("demo"))

        report = await runner.run_all()

        assert report.succeeded
        assert context.get("message") == HELLO_WORLD_MESSAGE
        assert shown_messages == [{"level": "Info", "text": HELLO_WORLD_MESSAGE}]
        assert report.outcomes[2].result == POEM_RESPONSE
        assert agent.history[0]["prompt"] == "write a poem"


class TestExampleProgram:
    """Test the YAML example shipped with the project."""

    @pytest.mark.asyncio
    async def test_reply_reaches_dialog(self, builtin_registry, context, shown_messages):
        async def show_message(level, text):
            shown_messages.append({"level": level, "text": text})

        capabilities = Capabilities.from_context_store(
            context, show_message=show_message, start_chat=DemoChatAgent().respond
        )
        runner = ProgramRunner(builtin_registry, capabilities)
        runner.load(Program.from_yaml(EXAMPLE_PROGRAM))

        report = await runner.run_all()

        assert report.succeeded
        assert [m["text"] for m in shown_messages] == ["Hello from a YAML program!", HELLO_RESPONSE]
