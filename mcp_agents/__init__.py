"""
mcp-agents: expose an agent CLI as an MCP tool server.

Architecture:
    ┌──────────────┐     stdio      ┌──────────────┐   exec    ┌──────────────┐
    │  MCP Client  │ ──────────── │  mcp-agents   │ ───────── │  Agent CLI   │
    │ (IDE, agent) │  JSON-RPC    │  (this server)│  argv     │ claude/codex │
    └──────────────┘     pipes     └──────────────┘  one-shot └──────────────┘

One server process serves one backend, chosen at startup. Each tool call
spawns the CLI once, waits for it (bounded by a timeout and an output cap),
and returns its output as the tool result.

Backends live in mcp_agents.backends; add one by subclassing CliBackend
and calling register_backend().
"""

__version__ = "0.2.0"

from mcp_agents.backends import CLI_BACKENDS, CliBackend, get_backend, register_backend
from mcp_agents.dispatcher import ToolDispatcher
from mcp_agents.runner import run_cli

__all__ = [
    "CLI_BACKENDS",
    "CliBackend",
    "ToolDispatcher",
    "get_backend",
    "register_backend",
    "run_cli",
]
