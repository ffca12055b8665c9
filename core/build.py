# =============================================================================
# core/build.py  —  Build-Tool Runner (compile / test)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Runs `scala compile .` or `scala test .` inside the project directory
#   and captures everything the process prints.
#
# HOW IT WORKS:
#   1. Spawn the build tool with stdout and stderr piped, stdin on /dev/null
#   2. Drain both streams until the process closes them (communicate())
#   3. Read the exit status
#   4. Hand back a BuildResult; rendering to text is the model's job
#
# WHAT IT DOES NOT DO:
#   - No timeout.  A hung build hangs the tool call.
#   - No cancellation or process-group cleanup.
#   - A failing build is NOT an exception.  Only a failure to start the
#     process at all raises BuildToolError.
# =============================================================================

import asyncio
import logging

from core.config import ServerConfig
from core.models import BuildAction, BuildResult

logger = logging.getLogger(__name__)


class BuildToolError(Exception):
    """Raised when the build tool cannot be started."""


def build_argv(config: ServerConfig, action: BuildAction) -> list[str]:
    """Command line for one build action, e.g. ["scala", "compile", "."]."""
    return [config.build_command, action, "."]


async def run_build(config: ServerConfig, action: BuildAction) -> BuildResult:
    """Run one build action in the project directory and collect its output.

    Args:
        config: Server configuration (project path and build command).
        action: "compile" or "test".

    Returns:
        A BuildResult holding decoded stdout, stderr and the exit code.

    Raises:
        BuildToolError: If the process could not be spawned (executable
            missing, project directory missing, permission denied).
    """
    argv = build_argv(config, action)
    logger.debug("Spawning %s in %s", argv, config.project_path)

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=config.project_path,
            stdin=asyncio.subprocess.DEVNULL,  # our stdin is the MCP stream
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise BuildToolError(
            f"Failed to run '{' '.join(argv)}' in {config.project_path}: {exc}"
        ) from exc

    stdout, stderr = await process.communicate()
    exit_code = process.returncode

    if exit_code != 0:
        logger.info("'%s' exited with status %s", " ".join(argv), exit_code)

    return BuildResult(
        action=action,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        exit_code=exit_code,
    )


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
