"""Context store tools: read and write context keys."""

import logging
from typing import List

from mcp import Tool

from ..core.context_store import ContextStore
from ..utils.response import error_response, success_response

logger = logging.getLogger(__name__)


class ContextTools:
    """Exposes the context store that parameter links read from."""

    def __init__(self, context: ContextStore):
        self.context = context

    def get_tools(self) -> List[Tool]:
        """Return context store tools."""
        return [
            Tool(
                name="context_get",
                description="Read the value stored under a context key",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "key": {"type": "string", "description": "Context key"}
                    },
                    "required": ["key"]
                }
            ),
            Tool(
                name="context_set",
                description="Store a value under a context key",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "key": {"type": "string", "description": "Context key"},
                        "value": {
                            "type": ["string", "number", "boolean"],
                            "description": "Value to store"
                        }
                    },
                    "required": ["key", "value"]
                }
            ),
            Tool(
                name="context_list",
                description="List all context keys and values",
                inputSchema={"type": "object", "properties": {}}
            ),
        ]

    async def handle_tool(self, name: str, arguments: dict) -> dict:
        """Route tool call to appropriate handler."""
        handlers = {
            "context_get": self._get,
            "context_set": self._set,
            "context_list": self._list,
        }

        handler = handlers.get(name)
        if not handler:
            return error_response(f"Unknown context tool: {name}", code="UNKNOWN_TOOL")

        try:
            return await handler(arguments)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            return error_response(str(e), code="TOOL_ERROR")

    async def _get(self, args: dict) -> dict:
        key = args["key"]
        if not self.context.has(key):
            return error_response(f"Context key not found: {key}", code="KEY_NOT_FOUND")
        return success_response({"key": key, "value": self.context.get(key)})

    async def _set(self, args: dict) -> dict:
        key = args["key"]
        if not key:
            return error_response("Context key must not be empty", code="INVALID_KEY")
        self.context.set(key, args["value"])
        return success_response({"key": key, "value": args["value"]})

    async def _list(self, args: dict) -> dict:
        values = self.context.snapshot()
        return success_response({"count": len(values), "values": values})
