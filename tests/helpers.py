"""Test doubles: a backend that runs the current Python interpreter as its CLI, and a recording runner."""

from __future__ import annotations

import sys
from typing import Any

from mcp_agents.backends.base import CliBackend


class PythonScriptBackend(CliBackend):
    """Runs `python -c <script> <prompt>`, so tests need no agent CLI installed."""

    name = "python"
    command = sys.executable
    tool_name = "python_script"
    description = "Run a Python snippet with the prompt as argv[1]."
    extra_properties = {
        "upper": {
            "type": "boolean",
            "default": False,
            "description": "Upper-case the prompt before running.",
        },
    }

    def __init__(self, script: str = "import sys; print(sys.argv[1])"):
        self.script = script

    def build_args(self, prompt: str, options: dict[str, Any]) -> list[str]:
        if options.get("upper"):
            prompt = prompt.upper()
        return ["-c", self.script, prompt]


class MissingCommandBackend(PythonScriptBackend):
    name = "missing"
    command = "mcp-agents-no-such-cli-7f3a"
    tool_name = "missing_cli"


class RecordingRunner:
    """Stands in for run_cli and records every invocation."""

    def __init__(self, output: str = "ok", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[str, list[str], int]] = []

    async def __call__(self, command: str, args: list[str], *, timeout_ms: int) -> str:
        self.calls.append((command, args, timeout_ms))
        if self.error is not None:
            raise self.error
        return self.output


