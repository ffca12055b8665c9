# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Every value that flows between the tool layer and the two backends is
# defined here:
#   - BuildAction  →  the sub-command handed to the build tool
#   - SymbolType   →  the closed set of symbol kinds the search API accepts
#   - BuildResult  →  what came back from one build-tool run
#
# HTTP results have no model: the API's JSON is forwarded as-is.
# =============================================================================

from dataclasses import dataclass
from typing import Literal, get_args


# -----------------------------------------------------------------------------
# Literal types
# -----------------------------------------------------------------------------
# FastMCP turns a Literal annotation into a JSON-schema "enum", so these two
# aliases double as the parameter contract the host sees.
# -----------------------------------------------------------------------------
BuildAction = Literal["compile", "test"]

SymbolType = Literal["package", "case class", "object", "function"]

SYMBOL_TYPES: tuple[str, ...] = get_args(SymbolType)


# -----------------------------------------------------------------------------
# BuildResult — one completed run of `scala <action> .`
# -----------------------------------------------------------------------------
@dataclass
class BuildResult:
    """Captured output of a single build-tool run.

    The two actions label their output differently:
      - compile →  "stdout:" block, then a "stderr:" block if anything
                   was written to stderr
      - test    →  raw stdout, then an "Errors:" block for stderr

    A non-zero exit code is appended as a final line rather than raised;
    compiler and test failures are exactly what the caller wants to read.
    """

    action: BuildAction
    stdout: str
    stderr: str
    exit_code: int | None = 0          # None if the process was never reaped

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def to_text(self) -> str:
        """Render the result as the single text blob returned to the host."""
        if self.action == "compile":
            text = "stdout:\n" + self.stdout
            if self.stderr:
                text += "stderr:\n" + self.stderr
        else:
            text = self.stdout
            if self.stderr:
                text += "\nErrors:\n" + self.stderr

        if not self.succeeded:
            text += f"\nexit code: {self.exit_code}\n"
        return text
