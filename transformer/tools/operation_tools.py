"""Operation catalog tools: list and describe registered operations."""

import logging
from typing import List

from mcp import Tool

from ..registry.operation_registry import OperationRegistry, UnknownOperationError
from ..utils.response import error_response, success_response

logger = logging.getLogger(__name__)


class OperationTools:
    """Exposes the operation registry for discovery."""

    def __init__(self, registry: OperationRegistry):
        self.registry = registry

    def get_tools(self) -> List[Tool]:
        """Return operation catalog tools."""
        return [
            Tool(
                name="operation_list",
                description="List registered operations with their parameter schemas",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "tag": {
                            "type": "string",
                            "description": "Only list operations carrying this tag"
                        }
                    }
                }
            ),
            Tool(
                name="operation_describe",
                description="Describe one registered operation",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "op_id": {
                            "type": "string",
                            "description": "Operation id (e.g. 'setContext')"
                        }
                    },
                    "required": ["op_id"]
                }
            ),
        ]

    async def handle_tool(self, name: str, arguments: dict) -> dict:
        """Route tool call to appropriate handler."""
        handlers = {
            "operation_list": self._list_operations,
            "operation_describe": self._describe_operation,
        }

        handler = handlers.get(name)
        if not handler:
            return error_response(f"Unknown operation tool: {name}", code="UNKNOWN_TOOL")

        try:
            return await handler(arguments)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            return error_response(str(e), code="TOOL_ERROR")

    async def _list_operations(self, args: dict) -> dict:
        definitions = self.registry.list(tag=args.get("tag"))
        operations = [self.registry.get_operation_docs(d.id) for d in definitions]
        return success_response({"count": len(operations), "operations": operations})

    async def _describe_operation(self, args: dict) -> dict:
        op_id = args["op_id"]
        try:
            return success_response(self.registry.get_operation_docs(op_id))
        except UnknownOperationError as e:
            return error_response(str(e), code="UNKNOWN_OPERATION")
