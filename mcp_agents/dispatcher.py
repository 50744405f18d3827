"""
Request dispatcher: turns a tools/call into a CLI invocation.

Flow for one call:

    name, arguments
        │
        ├─ "ping"            → "pong"
        ├─ unknown name      → error result
        └─ backend tool
             ├─ prompt blank → error result
             ├─ timeout_ms   → caller value if a positive int, else default
             ├─ extras       → only keys the backend declares, only non-null
             └─ run_cli(backend.command, backend.build_args(...))

Every failure comes back as a CallToolResult with isError=True, never as a
protocol fault, so the client always gets something it can display.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from mcp.types import CallToolResult, TextContent

from mcp_agents.backends.base import CliBackend
from mcp_agents.catalog import PING_RESPONSE, PING_TOOL_NAME
from mcp_agents.errors import CliError
from mcp_agents.runner import DEFAULT_TIMEOUT_MS, is_positive_int, run_cli

logger = logging.getLogger(__name__)

Runner = Callable[..., Awaitable[str]]


def to_string_arg(value: Any) -> str:
    """Defensive string conversion for tool arguments."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


def resolve_timeout(value: Any) -> int:
    """Caller-supplied timeout_ms if it is a positive int, otherwise the default."""
    if is_positive_int(value):
        return value
    if value is not None:
        logger.debug(f"Ignoring invalid timeout_ms {value!r}, using {DEFAULT_TIMEOUT_MS}")
    return DEFAULT_TIMEOUT_MS


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


class ToolDispatcher:
    """
    Routes tool calls for one backend.

    Holds no per-call state; concurrent dispatch() calls are independent.
    """

    def __init__(self, backend: CliBackend, runner: Runner = run_cli):
        self.backend = backend
        self._runner = runner

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Handle one tools/call request."""
        if name == PING_TOOL_NAME:
            return text_result(PING_RESPONSE)

        if name != self.backend.tool_name:
            return text_result(f"Unknown tool: {name}", is_error=True)

        arguments = arguments or {}

        prompt = to_string_arg(arguments.get("prompt"))
        if not prompt.strip():
            return text_result("Missing required argument: prompt", is_error=True)

        timeout_ms = resolve_timeout(arguments.get("timeout_ms"))
        options = self._extra_options(arguments)

        command = self.backend.command
        logger.info(f"tools/call: running {command} ...")
        try:
            args = self.backend.build_args(prompt, options)
            output = await self._runner(command, args, timeout_ms=timeout_ms)
        except CliError as e:
            logger.error(str(e))
            return text_result(str(e), is_error=True)
        except Exception as e:
            logger.exception(f"tools/call: unexpected failure running {command}")
            return text_result(f"{command} failed: {e}", is_error=True)

        logger.info("tools/call: done")
        return text_result(output or "")

    def _extra_options(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Backend-declared options the caller actually supplied."""
        return {
            key: arguments[key]
            for key in self.backend.extra_properties
            if arguments.get(key) is not None
        }
