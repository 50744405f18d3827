"""
Subprocess runner for agent CLIs.

One call = one child process:

    output = await run_cli("codex", ["exec", "fix the tests"], timeout_ms=60_000)

Contract:
  - argv is passed straight to exec (never through a shell)
  - stdin is the null device, so a CLI waiting for piped input sees EOF
  - stdout + stderr together are capped at max_output_bytes
  - the child and its process group are killed when the deadline passes
  - NO_COLOR=1 is forced so output carries no ANSI escapes

Failures are raised as CliError subclasses (see mcp_agents.errors).
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from dataclasses import dataclass

from mcp_agents.errors import (
    CliExitError,
    CliOutputLimitError,
    CliStartError,
    CliTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 120_000
MAX_OUTPUT_BYTES = 10 * 1024 * 1024

_READ_CHUNK = 64 * 1024
_REAP_TIMEOUT_S = 5.0


@dataclass
class _OutputBudget:
    """Byte budget shared by the stdout and stderr readers of one child."""
    limit: int
    used: int = 0
    exceeded: bool = False


def is_positive_int(value: object) -> bool:
    """True for ints >= 1. bool is rejected even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


async def run_cli(
    command: str,
    args: list[str],
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    max_output_bytes: int = MAX_OUTPUT_BYTES,
    env: dict[str, str] | None = None,
) -> str:
    """
    Run a CLI and return its stdout (or stderr if stdout is empty).

    Args:
        command: Executable name, resolved through PATH
        args: Arguments, passed verbatim
        timeout_ms: Wall-clock deadline for the child
        max_output_bytes: Cap on combined stdout + stderr
        env: Extra environment variables layered over os.environ

    Returns:
        The captured text with trailing whitespace removed.

    Raises:
        CliStartError: the executable could not be spawned
        CliTimeoutError: the deadline passed; the child has been killed
        CliOutputLimitError: the output cap was exceeded; the child has been killed
        CliExitError: the child exited with a non-zero status
    """
    if not command:
        raise ValueError("command must be a non-empty string")
    if not is_positive_int(timeout_ms):
        raise ValueError(f"timeout_ms must be a positive integer, got {timeout_ms!r}")
    if not is_positive_int(max_output_bytes):
        raise ValueError(f"max_output_bytes must be a positive integer, got {max_output_bytes!r}")

    child_env = {**os.environ, **(env or {}), "NO_COLOR": "1"}

    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=child_env,
            start_new_session=True,
        )
    except OSError as e:
        raise CliStartError(f"Failed to start {command}: {e}") from e

    logger.debug(f"Started {command} (pid {proc.pid}), timeout {timeout_ms} ms")

    budget = _OutputBudget(limit=max_output_bytes)
    stdout_chunks: list[bytes] = []
    stderr_chunks: list[bytes] = []

    try:
        await asyncio.wait_for(
            asyncio.gather(
                _drain(proc, proc.stdout, stdout_chunks, budget),
                _drain(proc, proc.stderr, stderr_chunks, budget),
                proc.wait(),
            ),
            timeout=timeout_ms / 1000,
        )
    except asyncio.TimeoutError as e:
        _kill(proc)
        await _reap(proc)
        raise CliTimeoutError(f"{command} timed out after {timeout_ms} ms") from e
    except asyncio.CancelledError:
        _kill(proc)
        await asyncio.shield(_reap(proc))
        raise

    if budget.exceeded:
        raise CliOutputLimitError(f"{command} output exceeded {max_output_bytes} bytes")

    stdout = b"".join(stdout_chunks).decode("utf-8", errors="replace")
    stderr = b"".join(stderr_chunks).decode("utf-8", errors="replace")

    if proc.returncode != 0:
        raise CliExitError(
            _exit_message(command, proc.returncode, stderr),
            returncode=proc.returncode,
            stderr=stderr,
        )

    # Some CLIs print their answer on stderr even on success
    return (stdout or stderr).rstrip()


async def _drain(
    proc: asyncio.subprocess.Process,
    stream: asyncio.StreamReader,
    chunks: list[bytes],
    budget: _OutputBudget,
) -> None:
    """Read a pipe to EOF, keeping chunks until the shared budget runs out."""
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            return
        if budget.exceeded:
            # Keep reading so the pipe reaches EOF once the child is gone
            continue
        budget.used += len(chunk)
        if budget.used > budget.limit:
            budget.exceeded = True
            _kill(proc)
            continue
        chunks.append(chunk)


def _kill(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the child's whole process group, grandchildren included."""
    # The child may be gone while processes it started still hold the pipes
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    else:
        logger.debug(f"Killed process group {proc.pid}")


async def _reap(proc: asyncio.subprocess.Process) -> None:
    """Wait for a killed child to exit, bounded so a stuck pipe cannot block the caller."""
    try:
        await asyncio.wait_for(proc.wait(), timeout=_REAP_TIMEOUT_S)
    except asyncio.TimeoutError:
        logger.warning(f"pid {proc.pid} not reaped within {_REAP_TIMEOUT_S}s after kill")


def _exit_message(command: str, returncode: int, stderr: str) -> str:
    if returncode < 0:
        status = f"terminated by signal {-returncode}"
    else:
        status = f"exit status {returncode}"
    message = f"{command} failed: {status}"
    if stderr:
        message += f"\nstderr:\n{stderr}"
    return message
