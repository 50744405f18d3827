"""
CLI backend base class.

A backend describes one external agent CLI:
1. Which executable to launch
2. Which MCP tool name it is advertised under
3. How a prompt (plus backend-specific options) becomes an argv

To add a provider:

    from mcp_agents.backends import register_backend
    from mcp_agents.backends.base import CliBackend

    class AiderBackend(CliBackend):
        name = "aider"
        command = "aider"
        tool_name = "aider"
        description = "Run aider (aider --message) with a prompt."

        def build_args(self, prompt: str, options: dict) -> list[str]:
            return ["--message", prompt]

    register_backend(AiderBackend())

The dispatcher never needs to change when a backend is added.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CliBackend(ABC):
    """
    Base class for a CLI backend definition.

    Subclasses define how a CLI is invoked. The dispatcher handles the rest.
    """

    # Subclasses must set these
    name: str = ""
    command: str = ""
    tool_name: str = ""
    description: str = ""
    extra_properties: dict[str, dict] = {}

    @abstractmethod
    def build_args(self, prompt: str, options: dict[str, Any]) -> list[str]:
        """
        Build the argv (without the command itself) for one invocation.

        Args:
            prompt: The caller's prompt, already validated as non-blank
            options: Caller-supplied values for keys in ``extra_properties``.
                     Keys the caller omitted are absent; apply defaults here.

        Returns:
            Arguments passed verbatim to the executable (no shell).
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, command={self.command!r})"
