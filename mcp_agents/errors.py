"""Exception types raised by mcp-agents."""

from __future__ import annotations


class McpAgentsError(Exception):
    """Base exception for mcp-agents."""


class UnknownProviderError(McpAgentsError):
    """Raised when the requested provider has no registered backend."""

    def __init__(self, provider: str, available: list[str]):
        self.provider = provider
        self.available = available
        super().__init__(f"Unknown provider: {provider}")


class CliError(McpAgentsError):
    """Base exception for a failed CLI invocation."""


class CliStartError(CliError):
    """Raised when the CLI executable cannot be started at all."""


class CliTimeoutError(CliError):
    """Raised when the CLI does not exit before its deadline."""


class CliOutputLimitError(CliError):
    """Raised when the CLI writes more output than the configured cap."""


class CliExitError(CliError):
    """Raised when the CLI exits with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
