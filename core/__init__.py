# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the two backends and the values they exchange.
#
#   config.py      →  startup configuration (project path, fixed API URL)
#   models.py      →  BuildAction, SymbolType, BuildResult
#   build.py       →  runs `scala compile .` / `scala test .`
#   api_client.py  →  GET requests against the code-intelligence API
#
# Nothing in this package imports FastMCP.  The tools/ layer wraps these
# functions as MCP tools.
# =============================================================================
