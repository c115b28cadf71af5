"""Program tools: load programs and run their calls."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp import Tool
from pydantic import ValidationError

from ..engine.program_runner import (
    CallOutcome,
    DuplicateCallError,
    ProgramRunner,
    UnknownCallError,
)
from ..models.program import Program
from ..programs.hello_world import create_hello_world_program
from ..utils.response import error_response, success_response

logger = logging.getLogger(__name__)

# Exception class name -> response error code
ERROR_CODES: Dict[str, str] = {
    "UnknownOperationError": "UNKNOWN_OPERATION",
    "InvalidCallError": "INVALID_CALL",
    "UnresolvedLinkError": "UNRESOLVED_LINK",
    "CapabilityUnavailableError": "CAPABILITY_UNAVAILABLE",
}

DEMO_PROGRAMS = {
    "hello_world": create_hello_world_program,
}


class ProgramTools:
    """Loads programs into a runner and executes their calls."""

    def __init__(self, runner: ProgramRunner, message_log: Optional[List[Dict[str, str]]] = None):
        """
        Args:
            runner: Runner holding the loaded calls
            message_log: Shared list that the show_message capability appends to;
                messages produced during a run are echoed in its response
        """
        self.runner = runner
        self.message_log = message_log if message_log is not None else []

    def get_tools(self) -> List[Tool]:
        """Return program tools."""
        return [
            Tool(
                name="program_load",
                description="Load a program from a YAML file, an inline definition, or a bundled demo",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "path": {
                            "type": "string",
                            "description": "Path to a YAML program file"
                        },
                        "program": {
                            "type": "object",
                            "description": "Inline program definition (name, description, calls)"
                        },
                        "demo": {
                            "type": "string",
                            "enum": list(DEMO_PROGRAMS.keys()),
                            "description": "Bundled demo program to load"
                        },
                        "owner_id": {
                            "type": "string",
                            "description": "Call id prefix for demo programs",
                            "default": "transformer"
                        },
                        "replace": {
                            "type": "boolean",
                            "description": "Discard previously loaded calls and results first",
                            "default": False
                        }
                    }
                }
            ),
            Tool(
                name="program_calls",
                description="List loaded calls in execution order",
                inputSchema={"type": "object", "properties": {}}
            ),
            Tool(
                name="program_run",
                description="Run all loaded calls in order",
                inputSchema={"type": "object", "properties": {}}
            ),
            Tool(
                name="program_run_call",
                description="Run one loaded call by id",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "call_id": {"type": "string", "description": "Call id"}
                    },
                    "required": ["call_id"]
                }
            ),
        ]

    async def handle_tool(self, name: str, arguments: dict) -> dict:
        """Route tool call to appropriate handler."""
        handlers = {
            "program_load": self._load,
            "program_calls": self._calls,
            "program_run": self._run_all,
            "program_run_call": self._run_call,
        }

        handler = handlers.get(name)
        if not handler:
            return error_response(f"Unknown program tool: {name}", code="UNKNOWN_TOOL")

        try:
            return await handler(arguments)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            return error_response(str(e), code="TOOL_ERROR")

    async def _load(self, args: dict) -> dict:
        sources = [key for key in ("path", "program", "demo") if args.get(key)]
        if len(sources) != 1:
            return error_response(
                "Provide exactly one of 'path', 'program' or 'demo'",
                code="INVALID_ARGUMENTS"
            )

        try:
            if args.get("path"):
                program = Program.from_yaml(Path(args["path"]))
            elif args.get("program"):
                program = Program.from_dict(args["program"])
            else:
                factory = DEMO_PROGRAMS.get(args["demo"])
                if factory is None:
                    return error_response(f"Unknown demo program: {args['demo']}", code="UNKNOWN_PROGRAM")
                program = factory(args.get("owner_id", "transformer"))
        except FileNotFoundError as e:
            return error_response(f"Program file not found: {e.filename}", code="PROGRAM_NOT_FOUND")
        except (ValidationError, ValueError) as e:
            return error_response(f"Invalid program: {e}", code="INVALID_PROGRAM")

        if args.get("replace"):
            self.runner.reset()

        try:
            self.runner.load(program)
        except DuplicateCallError as e:
            return error_response(str(e), code="DUPLICATE_CALL")

        return success_response({
            "program": program.name,
            "loaded_calls": [call.call_id for call in program.calls],
            "total_calls": len(self.runner.calls),
        })

    async def _calls(self, args: dict) -> dict:
        calls = [
            {
                "call_id": call.call_id,
                "op_def_id": call.op_def_id,
                "description": call.description,
                "has_result": call.call_id in self.runner.results,
            }
            for call in self.runner.calls
        ]
        return success_response({"count": len(calls), "calls": calls})

    async def _run_all(self, args: dict) -> dict:
        first_message = len(self.message_log)
        report = await self.runner.run_all()

        data = report.to_dict()
        data["messages"] = self.message_log[first_message:]

        if report.succeeded:
            return success_response(data)
        return error_response("Program run failed", code="PROGRAM_FAILED", details=data)

    async def _run_call(self, args: dict) -> dict:
        first_message = len(self.message_log)
        try:
            outcome = await self.runner.run_call(args["call_id"])
        except UnknownCallError as e:
            return error_response(str(e), code="UNKNOWN_CALL")

        return self._outcome_response(outcome, self.message_log[first_message:])

    @staticmethod
    def _outcome_response(outcome: CallOutcome, messages: List[Dict[str, Any]]) -> dict:
        data = outcome.to_dict()
        data["messages"] = messages

        if outcome.success:
            return success_response(data)

        code = ERROR_CODES.get(outcome.error_type or "", "EXECUTION_ERROR")
        return error_response(outcome.message, code=code, details=data)
