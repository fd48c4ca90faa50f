"""
channelgate.runners.base - Abstract Command Runner Interface
==============================================================

The contract every command runner implements. The orchestrator never spawns
processes itself; it hands a TestCommand to a runner and gets back an exit
status. Swapping the runner is how the orchestration logic is tested
without real child processes.

    ┌──────────────┐      run(command)     ┌────────────────────┐
    │ Orchestrator │ ────────────────────→ │ BaseCommandRunner  │
    │              │ ←──── exit code ───── │ (abstract)         │
    └──────────────┘                       └─────────┬──────────┘
                                                     │
                                          ┌──────────┴──────────┐
                                          │                     │
                                   ┌──────▼──────┐       ┌──────▼─────┐
                                   │ Subprocess  │       │    Fake    │
                                   │   Runner    │       │   Runner   │
                                   └─────────────┘       └────────────┘

Contract:
    - ``run()`` returns only after the command has terminated.
    - The returned value is the command's exit status, 0 meaning success.
    - A command that cannot be started at all raises CommandLaunchError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from channelgate.core.models import TestCommand


class BaseCommandRunner(ABC):
    """Abstract base class for command runners.

    Example:
        >>> class EchoRunner(BaseCommandRunner):
        ...     async def run(self, command):
        ...         print(command.display())
        ...         return 0
    """

    @property
    def name(self) -> str:
        """Runner name used in logs."""
        return self.__class__.__name__

    @abstractmethod
    async def run(self, command: TestCommand) -> int:
        """Execute ``command`` to completion and return its exit status.

        Args:
            command: The test command to execute.

        Returns:
            The command's exit status.

        Raises:
            CommandLaunchError: If the command could not be started.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
