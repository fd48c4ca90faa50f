"""
channelgate.runners - Command Runners
=======================================

The process-spawning seam. The orchestrator calls ``run(command)`` on a
runner and receives the exit status; it never touches subprocesses itself.

Available Runners:
    - BaseCommandRunner: Abstract base class defining the runner contract.
    - SubprocessCommandRunner: Spawns real child processes with inherited stdio.
    - FakeCommandRunner: Records calls and returns queued exit codes (for tests).

Usage:
    >>> from channelgate.runners import create_command_runner
    >>> runner = create_command_runner(config)
    >>> exit_code = await runner.run(command)
"""

from channelgate.runners.base import BaseCommandRunner
from channelgate.runners.fake import FakeCommandRunner
from channelgate.runners.subprocess_runner import SubprocessCommandRunner
from channelgate.runners.factory import create_command_runner

__all__ = [
    "BaseCommandRunner",
    "FakeCommandRunner",
    "SubprocessCommandRunner",
    "create_command_runner",
]
