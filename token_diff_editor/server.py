import logging
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from token_diff_editor import __version__
from token_diff_editor.config import ServerSettings
from token_diff_editor.tools.adapter import ToolAdapter, list_available_operations
from token_diff_editor.tools.errors import UnknownToolError
from token_diff_editor.tools.tokens import TiktokenTokenizer, Tokenizer

logger = logging.getLogger(__name__)

SERVER_NAME = "Optimized Token Diff Editor"


def build_server(
    settings: ServerSettings,
    tokenizer: Tokenizer | None = None,
) -> Server:
    """
    Build the MCP server exposing `analyze_tokens` and `generate_diff`.

    Unknown tool names are answered with a JSON-RPC error and no content.
    Any other error raised while handling a call becomes an error result for
    that call; none of them stop the server.
    """

    adapter = ToolAdapter(
        tokenizer=tokenizer or TiktokenTokenizer(settings.encoding),
        strict=settings.strict_arguments,
    )
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [definition.to_mcp() for definition in list_available_operations()]

    @server.call_tool(validate_input=settings.strict_arguments)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        text = adapter.call(name, arguments)
        return [types.TextContent(type="text", text=text)]

    call_tool_handler = server.request_handlers[types.CallToolRequest]

    async def reject_unknown_tools(request: types.CallToolRequest) -> types.ServerResult:
        # Checked ahead of the SDK handler, which would wrap the error in a content block.
        try:
            adapter.resolve(request.params.name)
        except UnknownToolError as e:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e))) from e
        return await call_tool_handler(request)

    server.request_handlers[types.CallToolRequest] = reject_unknown_tools

    return server


async def run_stdio(settings: ServerSettings, tokenizer: Tokenizer | None = None) -> None:
    if tokenizer is None:
        # Fail at startup rather than on the first call if the encoding is bad.
        tokenizer = TiktokenTokenizer(settings.encoding)
        tokenizer.load()

    server = build_server(settings, tokenizer)

    logger.info(
        "Starting %s %s on stdio (tokenizer=%s, strict_arguments=%s)",
        SERVER_NAME,
        __version__,
        tokenizer.name,
        settings.strict_arguments,
    )

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )

    logger.info("Client disconnected, shutting down")
