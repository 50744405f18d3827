"""
MCP server exposing one agent CLI as a tool.

A server process:
1. Selects one backend at startup (--provider)
2. Advertises "ping" plus that backend's tool over MCP stdio
3. Runs each tools/call as a one-shot CLI subprocess

Launch:
    python -m mcp_agents --provider gemini

Register with an MCP client (example):
    {"command": "mcp-agents", "args": ["--provider", "claude"]}

stdout carries the MCP stream; all diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from mcp_agents import __version__
from mcp_agents.backends import DEFAULT_PROVIDER, CLI_BACKENDS, get_backend
from mcp_agents.backends.base import CliBackend
from mcp_agents.catalog import build_tools
from mcp_agents.dispatcher import ToolDispatcher
from mcp_agents.errors import UnknownProviderError
from mcp_agents.lifecycle import KeepAlive, ProcessState, install_fault_handler

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-agents"


def build_server(backend: CliBackend, dispatcher: ToolDispatcher | None = None) -> Server:
    """Create an MCP server with list_tools/call_tool bound to one backend."""
    server = Server(SERVER_NAME, version=__version__)
    dispatcher = dispatcher or ToolDispatcher(backend)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return build_tools(backend)

    # Arguments are validated by the dispatcher; an invalid timeout_ms falls
    # back to the default instead of failing schema validation.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        return await dispatcher.dispatch(name, arguments)

    return server


async def run_server(backend: CliBackend, state: ProcessState) -> None:
    """Serve over stdio until the client disconnects."""
    install_fault_handler(asyncio.get_running_loop(), state)
    server = build_server(backend)

    async with stdio_server() as (read_stream, write_stream):
        guard = KeepAlive(on_close=lambda: logger.info("transport closed"))
        guard.start()
        logger.info(f"ready (provider: {backend.name})")
        try:
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
        finally:
            guard.close()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
        format=f"[{SERVER_NAME}] %(levelname)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server that runs an agent CLI (claude, gemini, codex) as a tool.",
    )
    parser.add_argument("--provider", type=str, default=DEFAULT_PROVIDER,
                        help=f"Backend to expose (default: {DEFAULT_PROVIDER})")
    parser.add_argument("--list-providers", action="store_true",
                        help="List available providers and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if args.list_providers:
        for name in sorted(CLI_BACKENDS):
            backend = CLI_BACKENDS[name]
            print(f"{name:<10} tool={backend.tool_name:<14} command={backend.command}")
        return 0

    try:
        backend = get_backend(args.provider)
    except UnknownProviderError as e:
        logger.error(str(e))
        logger.error(f"Available: {', '.join(e.available)}")
        return 1

    state = ProcessState()
    try:
        asyncio.run(run_server(backend, state))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal error")
        return 1

    return state.exit_code


if __name__ == "__main__":
    sys.exit(main())
