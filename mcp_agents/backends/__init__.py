"""
Backend registry: provider id → CliBackend.

Exactly one backend is selected per server process, at startup:

    backend = get_backend("gemini")
    backend.build_args("hello", {"sandbox": False})   # ["-p", "hello"]

New providers are added with register_backend(); nothing else changes.
"""

from __future__ import annotations

import logging

from mcp_agents.backends.base import CliBackend
from mcp_agents.backends.claude import ClaudeBackend
from mcp_agents.backends.codex import CodexBackend
from mcp_agents.backends.gemini import GeminiBackend
from mcp_agents.errors import UnknownProviderError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "codex"

CLI_BACKENDS: dict[str, CliBackend] = {}


def register_backend(backend: CliBackend) -> None:
    """Register a backend under its provider id."""
    if not backend.name:
        raise ValueError(f"CliBackend {backend.__class__.__name__} has no name")
    CLI_BACKENDS[backend.name] = backend
    logger.debug(f"Registered backend: {backend.name} ({backend.command})")


def available_providers() -> list[str]:
    """Sorted provider ids."""
    return sorted(CLI_BACKENDS)


def get_backend(provider: str) -> CliBackend:
    """
    Look up the backend for a provider id.

    Raises:
        UnknownProviderError: if no backend is registered under that id.
    """
    backend = CLI_BACKENDS.get(provider)
    if backend is None:
        raise UnknownProviderError(provider, available_providers())
    return backend


for _backend in (ClaudeBackend(), GeminiBackend(), CodexBackend()):
    register_backend(_backend)

__all__ = [
    "CLI_BACKENDS",
    "DEFAULT_PROVIDER",
    "CliBackend",
    "available_providers",
    "get_backend",
    "register_backend",
]
