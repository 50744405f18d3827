"""
Tests for run_cli.

The current interpreter (sys.executable -c ...) plays the part of an agent
CLI, so these run anywhere Python does.
"""

import asyncio
import os
import sys
import time

import pytest

from mcp_agents.errors import (
    CliError,
    CliExitError,
    CliOutputLimitError,
    CliStartError,
    CliTimeoutError,
)
from mcp_agents.runner import DEFAULT_TIMEOUT_MS, MAX_OUTPUT_BYTES, is_positive_int, run_cli

PY = sys.executable


class TestSuccess:
    """Zero exit status."""

    @pytest.mark.asyncio
    async def test_stdout_returned_trimmed(self) -> None:
        assert await run_cli(PY, ["-c", "print('hello')"]) == "hello"

    @pytest.mark.asyncio
    async def test_stderr_used_when_stdout_empty(self) -> None:
        out = await run_cli(PY, ["-c", "import sys; sys.stderr.write('info\\n')"])
        assert out == "info"

    @pytest.mark.asyncio
    async def test_stdout_preferred_over_stderr(self) -> None:
        script = "import sys; sys.stderr.write('noise'); print('answer')"
        assert await run_cli(PY, ["-c", script]) == "answer"

    @pytest.mark.asyncio
    async def test_no_output_is_empty_string(self) -> None:
        assert await run_cli(PY, ["-c", "pass"]) == ""

    @pytest.mark.asyncio
    async def test_stdin_is_closed(self) -> None:
        """A CLI that reads stdin gets EOF instead of hanging."""
        out = await run_cli(PY, ["-c", "import sys; print(repr(sys.stdin.read()))"], timeout_ms=10_000)
        assert out == "''"

    @pytest.mark.asyncio
    async def test_no_color_forced(self) -> None:
        out = await run_cli(PY, ["-c", "import os; print(os.environ.get('NO_COLOR'))"])
        assert out == "1"

    @pytest.mark.asyncio
    async def test_parent_environment_passed_through(self, monkeypatch) -> None:
        monkeypatch.setenv("MCP_AGENTS_TEST_VAR", "present")
        out = await run_cli(PY, ["-c", "import os; print(os.environ['MCP_AGENTS_TEST_VAR'])"])
        assert out == "present"

    @pytest.mark.asyncio
    async def test_arguments_not_shell_interpreted(self) -> None:
        prompt = "$(echo pwned) && echo $HOME; `id`"
        out = await run_cli(PY, ["-c", "import sys; print(sys.argv[1])", prompt])
        assert out == prompt


class TestFailures:
    """Each failure is its own CliError subclass."""

    @pytest.mark.asyncio
    async def test_nonzero_exit_includes_stderr(self) -> None:
        script = "import sys; sys.stderr.write('bad flag'); sys.exit(3)"
        with pytest.raises(CliExitError) as exc_info:
            await run_cli(PY, ["-c", script])

        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr == "bad flag"
        assert "exit status 3" in str(exc_info.value)
        assert "stderr:\nbad flag" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_command_names_it(self) -> None:
        with pytest.raises(CliStartError) as exc_info:
            await run_cli("mcp-agents-no-such-cli-7f3a", ["-p", "hi"])

        assert "Failed to start mcp-agents-no-such-cli-7f3a" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_kills_child(self, tmp_path) -> None:
        pid_file = tmp_path / "pid"
        script = (
            "import os, sys, time\n"
            "with open(sys.argv[1], 'w') as f:\n"
            "    f.write(str(os.getpid()))\n"
            "time.sleep(60)\n"
        )

        with pytest.raises(CliTimeoutError) as exc_info:
            await run_cli(PY, ["-c", script, str(pid_file)], timeout_ms=2_000)

        assert "timed out after 2000 ms" in str(exc_info.value)
        pid = int(pid_file.read_text())
        with pytest.raises(ProcessLookupError):
            os.kill(pid, 0)

    @pytest.mark.asyncio
    async def test_timeout_not_held_up_by_grandchild(self) -> None:
        """A process started by the CLI keeps the pipes open; the deadline still holds."""
        script = (
            "import subprocess, sys, time\n"
            "subprocess.Popen([sys.executable, '-c', 'import time; time.sleep(30)'])\n"
            "time.sleep(30)\n"
        )

        started = time.monotonic()
        with pytest.raises(CliTimeoutError):
            await run_cli(PY, ["-c", script], timeout_ms=500)

        assert time.monotonic() - started < 3

    @pytest.mark.asyncio
    async def test_cancel_kills_and_reaps_child(self, tmp_path) -> None:
        pid_file = tmp_path / "pid"
        script = (
            "import os, sys, time\n"
            "with open(sys.argv[1], 'w') as f:\n"
            "    f.write(str(os.getpid()))\n"
            "time.sleep(60)\n"
        )
        task = asyncio.create_task(run_cli(PY, ["-c", script, str(pid_file)], timeout_ms=30_000))

        for _ in range(100):
            if pid_file.exists() and pid_file.read_text():
                break
            await asyncio.sleep(0.05)
        pid = int(pid_file.read_text())

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        with pytest.raises(ProcessLookupError):
            os.kill(pid, 0)

    @pytest.mark.asyncio
    async def test_output_cap_exceeded(self) -> None:
        script = "import sys; sys.stdout.write('x' * 50_000)"
        with pytest.raises(CliOutputLimitError):
            await run_cli(PY, ["-c", script], max_output_bytes=1_000)

    @pytest.mark.asyncio
    async def test_output_cap_counts_both_streams(self) -> None:
        script = "import sys; sys.stdout.write('o' * 600); sys.stderr.write('e' * 600)"
        with pytest.raises(CliOutputLimitError):
            await run_cli(PY, ["-c", script], max_output_bytes=1_000)

    @pytest.mark.asyncio
    async def test_output_under_cap_succeeds(self) -> None:
        out = await run_cli(PY, ["-c", "print('y' * 500)"], max_output_bytes=1_000)
        assert out == "y" * 500

    def test_all_failures_share_base(self) -> None:
        for cls in (CliExitError, CliStartError, CliTimeoutError, CliOutputLimitError):
            assert issubclass(cls, CliError)


class TestArgumentChecks:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("timeout_ms", [0, -5, 1.5, "100", True])
    async def test_invalid_timeout_rejected(self, timeout_ms) -> None:
        with pytest.raises(ValueError):
            await run_cli(PY, ["-c", "pass"], timeout_ms=timeout_ms)

    @pytest.mark.asyncio
    async def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError):
            await run_cli("", [])

    def test_defaults(self) -> None:
        assert DEFAULT_TIMEOUT_MS == 120_000
        assert MAX_OUTPUT_BYTES == 10 * 1024 * 1024

    def test_is_positive_int(self) -> None:
        assert is_positive_int(1)
        assert not is_positive_int(0)
        assert not is_positive_int(False)
        assert not is_positive_int(3.0)
        assert not is_positive_int(None)
