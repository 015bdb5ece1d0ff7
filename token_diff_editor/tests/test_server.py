"""Round-trip tests through an in-memory MCP client session."""

from unittest.mock import patch

import pytest
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session

from token_diff_editor import __version__
from token_diff_editor.config import ServerSettings
from token_diff_editor.server import SERVER_NAME, build_server, run_stdio

pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend():
    return "asyncio"


class WordTokenizer:
    name = "words"

    def encode(self, text: str) -> list[int]:
        return [0] * len(text.split())


def make_server(strict: bool = True):
    return build_server(
        ServerSettings(strict_arguments=strict),
        tokenizer=WordTokenizer(),
    )


async def test_server_name():
    assert make_server().name == SERVER_NAME


async def test_list_tools():
    async with create_connected_server_and_client_session(make_server()) as client:
        result = await client.list_tools()

    assert [tool.name for tool in result.tools] == ["analyze_tokens", "generate_diff"]
    for tool in result.tools:
        assert tool.inputSchema["required"] == ["originalCode", "modifiedCode"]


async def test_analyze_tokens_call():
    async with create_connected_server_and_client_session(make_server()) as client:
        result = await client.call_tool(
            "analyze_tokens",
            {"originalCode": "a b c", "modifiedCode": "a b c"},
        )

    assert not result.isError
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text == "Original Tokens: 3, Modified Tokens: 3, Token Difference: 0"


async def test_generate_diff_call():
    async with create_connected_server_and_client_session(make_server()) as client:
        result = await client.call_tool(
            "generate_diff",
            {"originalCode": "line1\nline2\n", "modifiedCode": "line1\nlineX\n"},
        )

    assert not result.isError
    assert len(result.content) == 1
    assert result.content[0].text == (
        "line1\n<<<<<<< SEARCH\nline2\n=======\nlineX\n>>>>>>> REPLACE\n"
    )


async def test_unknown_tool_is_a_protocol_error_without_content():
    async with create_connected_server_and_client_session(make_server()) as client:
        with pytest.raises(McpError) as exc_info:
            await client.call_tool(
                "delete_all",
                {"originalCode": "a", "modifiedCode": "b"},
            )

        # The session survives a rejected call.
        follow_up = await client.call_tool(
            "generate_diff",
            {"originalCode": "abc", "modifiedCode": "abc"},
        )

    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert exc_info.value.error.message == "Unknown tool: delete_all"
    assert not follow_up.isError
    assert follow_up.content[0].text == "abc"


async def test_unknown_tool_rejected_in_lenient_mode():
    async with create_connected_server_and_client_session(make_server(strict=False)) as client:
        with pytest.raises(McpError):
            await client.call_tool("delete_all", {})


async def test_run_stdio_logs_tokenizer_name():
    with patch("token_diff_editor.server.stdio_server", side_effect=OSError("no stdio")), \
            patch("token_diff_editor.server.logger") as mock_logger:
        with pytest.raises(OSError):
            await run_stdio(ServerSettings(), tokenizer=WordTokenizer())

    args = mock_logger.info.call_args_list[0][0]
    assert args[0] % args[1:] == (
        f"Starting {SERVER_NAME} {__version__} on stdio (tokenizer=words, strict_arguments=True)"
    )


async def test_missing_argument_is_an_error_result():
    async with create_connected_server_and_client_session(make_server()) as client:
        result = await client.call_tool("analyze_tokens", {"originalCode": "a"})

    assert result.isError
    assert "modifiedCode" in result.content[0].text


async def test_lenient_server_coerces_missing_argument():
    async with create_connected_server_and_client_session(make_server(strict=False)) as client:
        result = await client.call_tool("generate_diff", {"originalCode": "undefined"})

    assert not result.isError
    assert result.content[0].text == "undefined"
