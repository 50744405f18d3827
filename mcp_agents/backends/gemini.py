"""Gemini CLI backend (``gemini -p``), sandboxed unless told otherwise."""

from __future__ import annotations

from typing import Any

from mcp_agents.backends.base import CliBackend


class GeminiBackend(CliBackend):
    name = "gemini"
    command = "gemini"
    tool_name = "gemini"
    description = "Run Gemini CLI (gemini -p) with a prompt."
    extra_properties = {
        "sandbox": {
            "type": "boolean",
            "default": True,
            "description": "Run in sandbox mode (-s flag). Defaults to true.",
        },
    }

    def build_args(self, prompt: str, options: dict[str, Any]) -> list[str]:
        args = []
        # Only an explicit false turns the sandbox off
        if options.get("sandbox") is not False:
            args.append("-s")
        args.extend(["-p", prompt])
        return args
