# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the six MCP tools the agent host can call.  Each tool is a thin
#   wrapper around a core/ function: it logs the call, dispatches to one of
#   the two backends, and turns the result into a single text blob.
#
# THE TOOLS:
#   compile             →  scala compile .                 (subprocess)
#   test                →  scala test .                    (subprocess)
#   glob-search         →  GET /glob-search                (HTTP)
#   typed-glob-search   →  GET /typed-glob-search          (HTTP)
#   inspect             →  GET /inspect                    (HTTP)
#   get-docs            →  GET /docs                       (HTTP)
#
# PARAMETER VALIDATION:
#   FastMCP builds each tool's input schema from the function signature and
#   validates arguments before the function body runs.  symbolType is typed
#   as the SymbolType Literal, so "enum" (or any other unknown kind) is
#   rejected without touching the network.
#
# ERRORS:
#   BuildToolError and ApiError are re-raised as FastMCP's ToolError so the
#   host sees the message verbatim as a failed tool result.  The server
#   keeps serving other calls.
#
# RUNNING THIS SERVER:
#   The server is built by create_server(config) and started from main.py:
#     python main.py /path/to/scala/project
# =============================================================================

import json
import logging
import sys
from typing import Any, Awaitable

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.api_client import ApiError, ScalaApiClient, format_json
from core.build import BuildToolError, build_argv, run_build
from core.config import ServerConfig
from core.models import BuildAction, SymbolType

SERVER_NAME = "scala-mcp-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  STDOUT is the MCP transport; anything else written
# there corrupts the JSON-RPC stream and the host drops the connection.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses (preview of the returned text)
#     - YELLOW for intermediate status/progress messages and failures
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (text output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_PREVIEW_CHARS = 200


def resolve_log_level(name: str) -> int:
    """Map a level name such as "DEBUG" to its number; unknown names give INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log a one-line preview of the tool response in GREEN, then return it."""
    preview = text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "…"
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {json.dumps(preview)}{_RESET}")
    return text


# =============================================================================
# Server factory
# =============================================================================
# The project path is only known after argv is parsed, so the server is
# built by a function instead of at import time.  Tools close over the
# config and the API client.
# =============================================================================
def create_server(
    config: ServerConfig,
    api_client: ScalaApiClient | None = None,
) -> FastMCP:
    """Build the FastMCP server with all six tools registered.

    Args:
        config: Resolved startup configuration.
        api_client: Optional pre-built API client (tests inject one backed
            by httpx.MockTransport).  Defaults to a client for
            config.api_base_url.

    Returns:
        A FastMCP instance ready for mcp.run().
    """
    api = api_client or ScalaApiClient(config.api_base_url)

    mcp = FastMCP(
        SERVER_NAME,
        version=SERVER_VERSION,
        instructions=(
            "Tools for a Scala project: compile and test it with the scala "
            "build tool, search its symbols by glob pattern (optionally by "
            "symbol kind), inspect a symbol by fully-qualified name, and "
            "fetch its documentation."
        ),
    )

    # -------------------------------------------------------------------------
    # Shared dispatch helpers
    # -------------------------------------------------------------------------
    async def _build(tool_name: str, action: BuildAction) -> str:
        _log_request(tool_name, project_path=config.project_path)
        _log_status(f"Running {' '.join(build_argv(config, action))}")
        try:
            result = await run_build(config, action)
        except BuildToolError as exc:
            _log_status(f"{tool_name} failed: {exc}")
            raise ToolError(str(exc)) from exc

        _log_status(
            f"Exit code {result.exit_code}, "
            f"{len(result.stdout)} chars stdout, {len(result.stderr)} chars stderr"
        )
        return _log_response(tool_name, result.to_text())

    async def _query(tool_name: str, call: Awaitable[Any]) -> str:
        try:
            data = await call
        except ApiError as exc:
            status = f" (HTTP {exc.status_code})" if exc.status_code is not None else ""
            _log_status(f"{tool_name} failed{status}: {exc}")
            raise ToolError(str(exc)) from exc
        return _log_response(tool_name, format_json(data))

    # =========================================================================
    # TOOL 1: compile
    # =========================================================================
    @mcp.tool(name="compile")
    async def compile_project() -> str:
        """Compile the Scala project with `scala compile .`.

        Returns the build tool's stdout, followed by a "stderr:" section when
        the compiler wrote anything to stderr (warnings and errors usually
        land there).  A non-zero exit code is reported on the last line.
        """
        return await _build("compile", "compile")

    # =========================================================================
    # TOOL 2: test
    # =========================================================================
    @mcp.tool(name="test")
    async def test_project() -> str:
        """Run the Scala project's tests with `scala test .`.

        Returns the test run's stdout, followed by an "Errors:" section when
        anything was written to stderr.  A non-zero exit code (failing tests)
        is reported on the last line.
        """
        return await _build("test", "test")

    # =========================================================================
    # TOOL 3: glob-search
    # =========================================================================
    @mcp.tool(name="glob-search")
    async def glob_search(query: str) -> str:
        """Search the project's symbols by glob pattern.

        Args:
            query: Glob pattern matched against symbol names (e.g. "*Service").

        Returns:
            The API's JSON result, pretty-printed.
        """
        _log_request("glob-search", query=query)
        return await _query("glob-search", api.glob_search(query))

    # =========================================================================
    # TOOL 4: typed-glob-search
    # =========================================================================
    @mcp.tool(name="typed-glob-search")
    async def typed_glob_search(query: str, symbolType: SymbolType) -> str:
        """Search the project's symbols by glob pattern, restricted to one kind.

        Args:
            query: Glob pattern matched against symbol names.
            symbolType: One of "package", "case class", "object", "function".

        Returns:
            The API's JSON result, pretty-printed.
        """
        _log_request("typed-glob-search", query=query, symbolType=symbolType)
        return await _query("typed-glob-search", api.typed_glob_search(query, symbolType))

    # =========================================================================
    # TOOL 5: inspect
    # =========================================================================
    @mcp.tool(name="inspect")
    async def inspect(fqcn: str) -> str:
        """Inspect a symbol by its fully-qualified name.

        Args:
            fqcn: Fully-qualified name, e.g. "com.example.Foo".

        Returns:
            The API's JSON description of the symbol, pretty-printed.
        """
        _log_request("inspect", fqcn=fqcn)
        return await _query("inspect", api.inspect(fqcn))

    # =========================================================================
    # TOOL 6: get-docs
    # =========================================================================
    @mcp.tool(name="get-docs")
    async def get_docs(fqcn: str) -> str:
        """Fetch the documentation for a symbol by its fully-qualified name.

        Args:
            fqcn: Fully-qualified name, e.g. "com.example.Foo".

        Returns:
            The API's JSON documentation payload, pretty-printed.
        """
        _log_request("get-docs", fqcn=fqcn)
        return await _query("get-docs", api.get_docs(fqcn))

    return mcp
