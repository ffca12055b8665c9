"""Tests for the build-tool runner and BuildResult rendering."""

import asyncio
import sys

import pytest

from core.build import BuildToolError, build_argv, run_build
from core.config import ServerConfig
from core.models import BuildResult


# ═══════════════════════════════════════════════════════════════════════════════
# BuildResult.to_text
# ═══════════════════════════════════════════════════════════════════════════════

class TestBuildResultText:
    def test_compile_stdout_only(self):
        result = BuildResult("compile", stdout="Compiled 3 Scala sources\n", stderr="")
        assert result.to_text() == "stdout:\nCompiled 3 Scala sources\n"

    def test_compile_with_stderr(self):
        result = BuildResult("compile", stdout="ok\n", stderr="[warn] unused import\n")
        assert result.to_text() == "stdout:\nok\nstderr:\n[warn] unused import\n"

    def test_test_stdout_only(self):
        result = BuildResult("test", stdout="All tests passed\n", stderr="")
        assert result.to_text() == "All tests passed\n"

    def test_test_with_stderr(self):
        result = BuildResult("test", stdout="2 passed\n", stderr="deprecation\n")
        assert result.to_text() == "2 passed\n\nErrors:\ndeprecation\n"

    def test_nonzero_exit_appended(self):
        result = BuildResult("test", stdout="1 failed\n", stderr="", exit_code=1)
        assert result.succeeded is False
        assert result.to_text().endswith("\nexit code: 1\n")

    def test_zero_exit_not_mentioned(self):
        result = BuildResult("compile", stdout="", stderr="", exit_code=0)
        assert "exit code" not in result.to_text()


# ═══════════════════════════════════════════════════════════════════════════════
# run_build
# ═══════════════════════════════════════════════════════════════════════════════

class TestRunBuild:
    def test_argv(self, config):
        assert build_argv(config, "compile") == ["scala", "compile", "."]
        assert build_argv(config, "test") == ["scala", "test", "."]

    async def test_compile_spawns_in_project_dir(self, config, fake_exec):
        calls = fake_exec(stdout=b"done\n")

        await run_build(config, "compile")

        assert len(calls) == 1
        args, kwargs = calls[0]
        assert args == ("scala", "compile", ".")
        assert kwargs["cwd"] == config.project_path
        assert kwargs["stdin"] is asyncio.subprocess.DEVNULL
        assert kwargs["stdout"] is asyncio.subprocess.PIPE
        assert kwargs["stderr"] is asyncio.subprocess.PIPE

    async def test_test_action_args(self, config, fake_exec):
        calls = fake_exec()
        await run_build(config, "test")
        assert calls[0][0] == ("scala", "test", ".")

    async def test_stderr_with_zero_exit_included(self, config, fake_exec):
        fake_exec(stdout=b"Compiling project\n", stderr=b"[warn] deprecated\n", returncode=0)

        result = await run_build(config, "compile")
        text = result.to_text()

        assert result.exit_code == 0
        assert "Compiling project" in text
        assert "stderr:\n[warn] deprecated\n" in text

    async def test_nonzero_exit_is_not_raised(self, config, fake_exec):
        fake_exec(stdout=b"", stderr=b"error: not found: value x\n", returncode=1)

        result = await run_build(config, "compile")

        assert result.exit_code == 1
        assert "not found: value x" in result.stderr

    async def test_undecodable_bytes_replaced(self, config, fake_exec):
        fake_exec(stdout=b"caf\xe9\n")
        result = await run_build(config, "test")
        assert result.stdout == "caf�\n"

    async def test_missing_executable(self, config, fake_exec):
        fake_exec(error=FileNotFoundError(2, "No such file or directory", "scala"))

        with pytest.raises(BuildToolError) as excinfo:
            await run_build(config, "compile")

        message = str(excinfo.value)
        assert "scala compile ." in message
        assert config.project_path in message

    async def test_missing_project_dir_real_spawn(self, tmp_path):
        # No fake: the spawn fails before exec when the cwd does not exist.
        missing = ServerConfig(project_path=str(tmp_path / "nope"))
        with pytest.raises(BuildToolError):
            await run_build(missing, "compile")

    @pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script")
    async def test_child_reads_nothing_from_server_stdin(self, tmp_path):
        script = tmp_path / "fake-scala"
        script.write_text('#!/bin/sh\nread line\necho "read: [$line]"\n')
        script.chmod(0o755)
        config = ServerConfig(project_path=str(tmp_path), build_command=str(script))

        result = await run_build(config, "compile")

        assert result.stdout == "read: []\n"
