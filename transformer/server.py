"""MCP server exposing the Transformer operation engine."""

import asyncio
import json
import logging
from typing import Dict, List

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent

from .chat.demo_agent import DemoChatAgent
from .core.capabilities import Capabilities
from .core.context_store import InMemoryContextStore
from .engine.program_runner import ProgramRunner
from .registry.operation_registry import OperationRegistry
from .registry.operations import register_builtin_operations
from .tools.context_tools import ContextTools
from .tools.operation_tools import OperationTools
from .tools.program_tools import ProgramTools

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVER_NAME = "transformer"
SERVER_VERSION = "0.1.0"


class TransformerMCPServer:
    """MCP server hosting an operation registry, a context store and a program runner."""

    def __init__(self):
        """Compose the registry, host services and tool handlers."""
        self.registry = register_builtin_operations(OperationRegistry())
        self.context = InMemoryContextStore()
        self.chat_agent = DemoChatAgent()
        self.messages: List[Dict[str, str]] = []

        self.capabilities = Capabilities.from_context_store(
            self.context,
            show_message=self._show_message,
            start_chat=self.chat_agent.respond,
        )
        self.runner = ProgramRunner(self.registry, self.capabilities)

        self.operation_tools = OperationTools(self.registry)
        self.context_tools = ContextTools(self.context)
        self.program_tools = ProgramTools(self.runner, self.messages)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        # Register handlers
        self._register_handlers()

    async def _show_message(self, level: str, text: str) -> None:
        """Collect user-facing messages; tool responses echo them back."""
        self.messages.append({"level": level, "text": text})
        logger.info(f"[{level}] {text}")

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.list_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Route tool calls to appropriate handlers."""
            result = await self.call_tool(name, arguments or {})
            return [TextContent(type="text", text=json.dumps(result, indent=2, default=str))]

    def list_tools(self) -> List[Tool]:
        tools = []
        tools.extend(self.operation_tools.get_tools())
        tools.extend(self.context_tools.get_tools())
        tools.extend(self.program_tools.get_tools())
        return tools

    async def call_tool(self, name: str, arguments: dict) -> dict:
        """Dispatch a tool call by name prefix."""
        try:
            if name.startswith("operation_"):
                return await self.operation_tools.handle_tool(name, arguments)
            elif name.startswith("context_"):
                return await self.context_tools.handle_tool(name, arguments)
            elif name.startswith("program_"):
                return await self.program_tools.handle_tool(name, arguments)
            else:
                return {
                    "ok": False,
                    "error": {"message": f"Unknown tool: {name}", "code": "UNKNOWN_TOOL"},
                    "tool": name,
                }

        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}")
            return {
                "ok": False,
                "error": {"message": str(e), "code": "TOOL_ERROR"},
                "tool": name,
            }

    async def run(self):
        """Run the MCP server."""
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=SERVER_VERSION,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    server = TransformerMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
