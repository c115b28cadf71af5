"""Hello-world demo program.

Sets a welcome message in the context store, shows it through a context-key
link, then asks the chat agent for a poem.
"""

from ..models.program import (
    ContextKeyLink,
    OperationCall,
    OperationParam,
    Program,
    make_call_id,
)
from ..registry.operations import (
    OPERATION_SET_CONTEXT,
    OPERATION_SHOW_DIALOG,
    OPERATION_START_CHAT,
)

HELLO_WORLD_MESSAGE = "Hello from Transformer!"
MESSAGE_CONTEXT_KEY = "message"


def create_hello_world_program(owner_id: str, delimiter: str = ".") -> Program:
    """
    Build the hello-world program.

    Args:
        owner_id: Prefix for the call ids (e.g. a controller id)
        delimiter: Separator between owner id and operation id

    Returns:
        Program with setContext, showDialog and startChat calls
    """
    return Program(
        name="hello_world",
        description="A simple hello world demo program",
        calls=[
            OperationCall(
                call_id=make_call_id(owner_id, OPERATION_SET_CONTEXT, delimiter),
                op_def_id=OPERATION_SET_CONTEXT,
                description="Sets a welcome message in context",
                params=[
                    OperationParam(name="key", value=MESSAGE_CONTEXT_KEY),
                    OperationParam(name="value", value=HELLO_WORLD_MESSAGE),
                ],
            ),
            OperationCall(
                call_id=make_call_id(owner_id, OPERATION_SHOW_DIALOG, delimiter),
                op_def_id=OPERATION_SHOW_DIALOG,
                description="Shows the welcome message in a dialog",
                params=[
                    OperationParam(
                        name="text",
                        link=ContextKeyLink(param_name="text", context_key=MESSAGE_CONTEXT_KEY),
                    ),
                    OperationParam(name="level", value="Info"),
                ],
            ),
            OperationCall(
                call_id=make_call_id(owner_id, OPERATION_START_CHAT, delimiter),
                op_def_id=OPERATION_START_CHAT,
                description="Opens chat and requests a poem",
                params=[],
            ),
        ],
    )
