# =============================================================================
# main.py  —  Entry Point for the Scala MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py /path/to/scala/project
#   scala-mcp-server /path/to/scala/project      (after pip install)
#
# The agent host normally launches this as a subprocess and talks to it
# over stdin/stdout.
#
# WHAT HAPPENS:
#   1. Loads a local .env file, if present (SCALA_MCP_LOG_LEVEL)
#   2. Parses the project path; exits with status 2 if it is missing
#   3. Configures stderr logging
#   4. Builds the FastMCP server with all six tools (tools/mcp_server.py)
#   5. Serves MCP over stdio until the host closes the connection
# =============================================================================

import logging

from dotenv import load_dotenv

from core.config import log_level_from_env, parse_args
from tools.mcp_server import configure_logging, create_server


def main(argv: list[str] | None = None) -> None:
    """Parse the command line and serve MCP over stdio."""
    load_dotenv()

    # Exits here, before any tool is registered, if the path is missing.
    config = parse_args(argv)

    configure_logging(log_level_from_env())
    logging.info("Project path: %s", config.project_path)
    if not config.project_exists:
        logging.warning(
            "Project path %s is not a directory; compile and test will fail",
            config.project_path,
        )

    mcp = create_server(config)
    mcp.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
