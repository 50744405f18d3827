"""Claude Code CLI backend (``claude -p``)."""

from __future__ import annotations

from typing import Any

from mcp_agents.backends.base import CliBackend


class ClaudeBackend(CliBackend):
    name = "claude"
    command = "claude"
    tool_name = "claude_code"
    description = "Run Claude Code CLI (claude -p) with a prompt."

    def build_args(self, prompt: str, options: dict[str, Any]) -> list[str]:
        return ["-p", prompt]
