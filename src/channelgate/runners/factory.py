"""
channelgate.runners.factory - Command Runner Factory
======================================================

Maps the ``runner`` config value to a concrete command runner.

Usage:
    >>> runner = create_command_runner(GateConfig(runner="fake"))
    >>> type(runner)  # FakeCommandRunner
"""

from __future__ import annotations

import structlog

from channelgate.core.config import GateConfig
from channelgate.core.exceptions import ConfigurationError
from channelgate.runners.base import BaseCommandRunner


logger = structlog.get_logger(component="runner_factory")


def create_command_runner(config: GateConfig) -> BaseCommandRunner:
    """Create a command runner instance based on configuration.

        - "subprocess" → SubprocessCommandRunner (real child processes)
        - "fake"       → FakeCommandRunner (records calls, exits 0; logs a
                          warning because nothing is actually tested)

    Args:
        config: channelgate configuration.

    Returns:
        A concrete BaseCommandRunner ready for run() calls.

    Raises:
        ConfigurationError: If the runner name is not recognized.
    """
    runner_name = config.runner.lower()

    if runner_name == "subprocess":
        from channelgate.runners.subprocess_runner import SubprocessCommandRunner
        return SubprocessCommandRunner(cwd=config.working_directory)

    if runner_name == "fake":
        from channelgate.runners.fake import FakeCommandRunner
        logger.warning(
            "fake_runner_selected",
            message="no test commands will be spawned; every step reports exit code 0",
        )
        return FakeCommandRunner()

    raise ConfigurationError(
        message=f"Unknown command runner: '{config.runner}'",
        error_code="UNKNOWN_RUNNER",
        details={"runner": config.runner, "available": ["subprocess", "fake"]},
    )
