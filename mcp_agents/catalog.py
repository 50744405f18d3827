"""
Tool catalog: what the server advertises on tools/list.

Always two tools:
  - "ping": answers "pong" without touching any CLI
  - the active backend's tool (prompt, timeout_ms, backend extras)
"""

from __future__ import annotations

from typing import Any

from mcp.types import Tool

from mcp_agents.backends.base import CliBackend
from mcp_agents.runner import DEFAULT_TIMEOUT_MS

PING_TOOL_NAME = "ping"
PING_RESPONSE = "pong"


def build_input_schema(backend: CliBackend) -> dict[str, Any]:
    """JSON Schema for the backend tool's arguments."""
    properties: dict[str, Any] = {
        "prompt": {
            "type": "string",
            "description": f"Prompt for {backend.command}",
        },
        "timeout_ms": {
            "type": "integer",
            "minimum": 1,
            "description": f"Optional timeout override (default {DEFAULT_TIMEOUT_MS})",
        },
    }
    for key, schema in backend.extra_properties.items():
        properties[key] = dict(schema)

    return {
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": ["prompt"],
    }


def ping_tool() -> Tool:
    return Tool(
        name=PING_TOOL_NAME,
        description="Connectivity test. Returns 'pong' instantly without calling the CLI.",
        inputSchema={
            "type": "object",
            "additionalProperties": False,
            "properties": {},
        },
    )


def build_tools(backend: CliBackend) -> list[Tool]:
    """Return the tool list advertised for the given backend."""
    return [
        ping_tool(),
        Tool(
            name=backend.tool_name,
            description=backend.description,
            inputSchema=build_input_schema(backend),
        ),
    ]
