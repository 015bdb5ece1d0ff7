import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv

from token_diff_editor.config import ServerSettings
from token_diff_editor.logging import get_logger, setup_logging
from token_diff_editor.server import run_stdio
from token_diff_editor.tools.adapter import ToolAdapter
from token_diff_editor.tools.contract import ToolName
from token_diff_editor.tools.tokens import TiktokenTokenizer

logger = get_logger(__name__)

app = typer.Typer(no_args_is_help = True)


@app.callback()
def main():
    """
    Token diff editor: token counts and SEARCH/REPLACE diffs for code edits.
    """
    load_dotenv()


@app.command("serve")
def serve_cmd(
    encoding: str | None = typer.Option(None, "--encoding", help="tiktoken encoding name"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (logs go to stderr)"),
    lenient: bool = typer.Option(
        False,
        "--lenient",
        help="Coerce missing or non-string arguments to text instead of rejecting them",
    ),
):
    """Run the MCP server over stdin/stdout."""
    try:
        settings = ServerSettings.from_env(
            encoding=encoding,
            log_level=log_level,
            strict_arguments=False if lenient else None,
        )
        setup_logging(settings.log_level)
        asyncio.run(run_stdio(settings))
    except Exception as e:
        logger.exception("Server failed")
        typer.echo(f"Server error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("tokens")
def tokens_cmd(
    original: Path = typer.Argument(..., exists=True, dir_okay=False, help="Original code file"),
    modified: Path = typer.Argument(..., exists=True, dir_okay=False, help="Modified code file"),
    encoding: str | None = typer.Option(None, "--encoding", help="tiktoken encoding name"),
):
    """Compare the token counts of two files."""
    typer.echo(_run_tool(ToolName.ANALYZE_TOKENS, original, modified, encoding))


@app.command("diff")
def diff_cmd(
    original: Path = typer.Argument(..., exists=True, dir_okay=False, help="Original code file"),
    modified: Path = typer.Argument(..., exists=True, dir_okay=False, help="Modified code file"),
):
    """Print a SEARCH/REPLACE diff between two files."""
    typer.echo(_run_tool(ToolName.GENERATE_DIFF, original, modified), nl = False)


def _run_tool(tool: ToolName, original: Path, modified: Path, encoding: str | None = None) -> str:
    try:
        settings = ServerSettings.from_env(encoding=encoding)
        adapter = ToolAdapter(TiktokenTokenizer(settings.encoding))
        return adapter.call(tool, _code_pair(original, modified))
    except Exception as e:
        logger.debug("%s failed", tool, exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _read_code(path: Path) -> str:
    # Bytes in, so "\r\n" terminators survive into the diff.
    return path.read_bytes().decode("utf-8")


def _code_pair(original: Path, modified: Path) -> dict[str, str]:
    return {
        "originalCode": _read_code(original),
        "modifiedCode": _read_code(modified),
    }
