# =============================================================================
# core/config.py  —  Startup Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the command line into a ServerConfig.  The only runtime input is
#   the Scala project directory; everything else is a fixed constant.
#
#   The config is built ONCE in main.py and handed to the server factory,
#   which passes the pieces each backend needs:
#     - project_path, build_command  →  core/build.py
#     - api_base_url                 →  core/api_client.py
#
# ENVIRONMENT:
#   SCALA_MCP_LOG_LEVEL   Logging level for the stderr log (default: INFO).
#                         May be set in a local .env file.
# =============================================================================

import argparse
import os
from dataclasses import dataclass

# The local code-intelligence API.  Not configurable at runtime.
API_BASE_URL = "http://localhost:8888/api"

# Executable spawned for the compile and test tools.
BUILD_COMMAND = "scala"

LOG_LEVEL_ENV = "SCALA_MCP_LOG_LEVEL"


@dataclass(frozen=True)
class ServerConfig:
    """Everything the server needs, resolved at startup."""

    project_path: str
    api_base_url: str = API_BASE_URL
    build_command: str = BUILD_COMMAND

    @property
    def project_exists(self) -> bool:
        return os.path.isdir(self.project_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scala-mcp-server",
        description=(
            "MCP server exposing compile, test, symbol search, inspection "
            "and documentation tools for a Scala project."
        ),
    )
    parser.add_argument(
        "project_path",
        help="Scala project directory; the build tool runs with this as its working directory.",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> ServerConfig:
    """Parse the command line into a ServerConfig.

    Args:
        argv: Arguments without the program name.  Defaults to sys.argv[1:].

    Raises:
        SystemExit: With status 2 if the project path is missing
            (argparse prints the usage error to stderr).
    """
    args = build_parser().parse_args(argv)
    return ServerConfig(project_path=args.project_path)


def log_level_from_env(default: str = "INFO") -> str:
    return os.environ.get(LOG_LEVEL_ENV, default).upper()
