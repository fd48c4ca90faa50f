"""
channelgate.core.exceptions - Custom Exception Hierarchy
==========================================================

Structured exceptions raised by channelgate. Each one carries a
machine-readable ``error_code`` and a ``details`` dict so that the CLI can
log it as a single structured event.

Exception Hierarchy:
    ChannelGateError (base)
        ├── ConfigurationError     - Invalid config file or config values
        ├── CommandLaunchError     - A test command could not be spawned
        └── StateTransitionError   - Illegal orchestrator state transition

A test command that runs and exits non-zero is NOT an exception. That is a
normal outcome, propagated as the orchestrator's exit code.

Usage:
    >>> from channelgate.core.exceptions import CommandLaunchError
    >>> raise CommandLaunchError(
    ...     message="Executable not found: cargo",
    ...     command=["cargo", "test"],
    ...     exit_code=127,
    ... )
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
class ChannelGateError(Exception):
    """Base exception for all channelgate errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code in UPPER_SNAKE_CASE.
        details: Additional debugging context.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary for structured logging.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised while loading configuration. The CLI exits immediately with
# EX_CONFIG (78) and never spawns a test command.
# =============================================================================
class ConfigurationError(ChannelGateError):
    """Raised when channelgate configuration is invalid.

    Common Causes:
        - Malformed YAML in the configuration file
        - A field value that fails validation (e.g. unknown runner name)
        - An empty test program

    Example:
        >>> raise ConfigurationError(
        ...     message="Unknown command runner: 'docker'",
        ...     error_code="UNKNOWN_RUNNER",
        ...     details={"runner": "docker"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Command Launch Error
# =============================================================================
# Raised when the child process cannot be created at all. The exit_code
# mirrors what a POSIX shell reports in the same situation:
#   127 → command not found
#   126 → found but not executable
# =============================================================================
class CommandLaunchError(ChannelGateError):
    """Raised when a test command cannot be spawned.

    Attributes:
        command: The argv that failed to launch.
        exit_code: Shell-compatible exit status for this failure (126 or 127).

    Example:
        >>> raise CommandLaunchError(
        ...     message="Permission denied: ./run-tests",
        ...     command=["./run-tests"],
        ...     exit_code=126,
        ...     error_code="COMMAND_NOT_EXECUTABLE",
        ... )
    """

    def __init__(
        self,
        message: str,
        command: list[str],
        exit_code: int = 127,
        error_code: str = "COMMAND_LAUNCH_FAILED",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["command"] = list(command)
        enriched_details["exit_code"] = exit_code

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.command = list(command)
        self.exit_code = exit_code


# =============================================================================
# State Transition Error
# =============================================================================
class StateTransitionError(ChannelGateError):
    """Raised when the orchestrator attempts a transition its state machine forbids.

    Attributes:
        from_state: The state the run was in.
        to_state: The state that was requested.
    """

    def __init__(
        self,
        message: str,
        from_state: str,
        to_state: str,
        error_code: str = "ILLEGAL_TRANSITION",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["from_state"] = from_state
        enriched_details["to_state"] = to_state

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.from_state = from_state
        self.to_state = to_state
