"""
Quartzy FastMCP Server
----------------------
MCP tool server for the Quartzy lab inventory API.

Each catalog entry in quartzy_mcp.tools is registered as a FastMCP tool whose
input schema is the declared JSON schema and whose run() delegates to the
ToolDispatcher. Error envelopes are raised as ToolError so hosts receive
isError=true with the "Error: ..." text.

Run with:
  quartzy-mcp-server            (stdio, default)
  MCP_TRANSPORT=streamable-http quartzy-mcp-server
"""

import sys
from typing import Any, Dict, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from . import __version__
from .client import QuartzyClient
from .config import QuartzyConfig, ServerSettings, load_config, load_server_settings
from .dispatcher import ToolDispatcher
from .logging_config import get_logger, setup_logging
from .schemas import ToolDescriptor

SERVER_NAME = "quartzy-mcp-server"

logger = get_logger("mcp_server")


class QuartzyTool(Tool):
    """FastMCP tool backed by a catalog descriptor and the shared dispatcher."""

    _dispatcher: ToolDispatcher = PrivateAttr()

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher) -> "QuartzyTool":
        tool = cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        response = await self._dispatcher.call_tool(self.name, arguments)
        if response.is_error:
            raise ToolError(response.text)
        return ToolResult(content=[TextContent(type="text", text=response.text)])


class UnknownToolMiddleware(Middleware):
    """Sends calls for unregistered tool names through the dispatcher so they get the usual error envelope."""

    def __init__(self, dispatcher: ToolDispatcher):
        self.dispatcher = dispatcher

    async def on_call_tool(self, context: MiddlewareContext, call_next: CallNext) -> Any:
        name = context.message.name
        if name not in self.dispatcher.registry:
            response = await self.dispatcher.call_tool(name, context.message.arguments)
            raise ToolError(response.text)
        return await call_next(context)


def create_server(
    config: Optional[QuartzyConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build the FastMCP server with every Quartzy tool registered."""
    config = config or load_config()
    if not config.has_access_token:
        logger.warning("QUARTZY_ACCESS_TOKEN is not set; Quartzy API calls will fail")

    dispatcher = ToolDispatcher(QuartzyClient(config, transport=transport))
    mcp = FastMCP(name=SERVER_NAME)
    mcp.add_middleware(UnknownToolMiddleware(dispatcher))
    for descriptor in dispatcher.list_tools():
        mcp.add_tool(QuartzyTool.from_descriptor(descriptor, dispatcher))

    logger.info(
        "Registered %d tools against %s",
        len(dispatcher.list_tools()),
        config.base_url,
    )
    return mcp


def run_server(mcp: FastMCP, settings: ServerSettings) -> None:
    if settings.transport == "stdio":
        logger.info("Starting %s %s on stdio", SERVER_NAME, __version__)
        mcp.run(transport="stdio")
        return

    logger.info(
        "Starting %s %s on http://%s:%s (%s)",
        SERVER_NAME,
        __version__,
        settings.host,
        settings.port,
        settings.transport,
    )
    mcp.run(transport=settings.transport, host=settings.host, port=settings.port)


def main() -> None:
    settings = load_server_settings()
    setup_logging(settings.log_file)

    mcp = create_server(load_config())
    try:
        run_server(mcp, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down %s", SERVER_NAME)
        sys.exit(0)


if __name__ == "__main__":
    main()
