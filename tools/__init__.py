# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ translates between the MCP host and core/.  Each tool:
#     1. Declares its parameters in its signature (FastMCP validates them)
#     2. Calls a core/ function
#     3. Renders the result as a single text blob
#     4. Re-raises backend failures as ToolError
#
# The docstrings on each tool are sent to the host as tool descriptions.
# =============================================================================
