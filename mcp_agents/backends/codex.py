"""Codex CLI backend (``codex exec``)."""

from __future__ import annotations

from typing import Any

from mcp_agents.backends.base import CliBackend


class CodexBackend(CliBackend):
    name = "codex"
    command = "codex"
    tool_name = "codex"
    description = "Run Codex CLI (codex exec) with a prompt."

    def build_args(self, prompt: str, options: dict[str, Any]) -> list[str]:
        return ["exec", prompt]
