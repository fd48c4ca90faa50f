"""
channelgate.runners.subprocess_runner - Real Child Process Runner
===================================================================

Spawns test commands as child processes. Standard input, output, and error
are inherited, so the CI runner sees the test runner's output exactly as if
it had invoked it directly.

Exit status mapping:
    exits with N           → N
    killed by signal S     → 128 + S    (shell convention)
    executable not found   → CommandLaunchError(exit_code=127)
    not executable         → CommandLaunchError(exit_code=126)
"""

from __future__ import annotations

import asyncio
from typing import Mapping, Optional

import structlog

from channelgate.core.exceptions import CommandLaunchError
from channelgate.core.models import TestCommand
from channelgate.runners.base import BaseCommandRunner


SIGNAL_EXIT_BASE = 128
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class SubprocessCommandRunner(BaseCommandRunner):
    """Runs commands as real child processes and waits for them.

    Attributes:
        _cwd: Working directory for children. None inherits ours.
        _env: Full environment for children. None inherits ours.

    Example:
        >>> runner = SubprocessCommandRunner()
        >>> exit_code = await runner.run(TestCommand(program="cargo", args=["test"]))
    """

    def __init__(
        self,
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._cwd = cwd
        self._env = dict(env) if env is not None else None
        self._logger = structlog.get_logger(component="subprocess_runner")

    async def run(self, command: TestCommand) -> int:
        argv = command.argv
        self._logger.debug("process_spawning", argv=argv, cwd=self._cwd)

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self._cwd,
                env=self._env,
            )
        except FileNotFoundError as e:
            raise CommandLaunchError(
                message=f"Executable not found: {command.program}",
                command=argv,
                exit_code=EXIT_NOT_FOUND,
                error_code="COMMAND_NOT_FOUND",
                details={"cwd": self._cwd, "os_error": str(e)},
            ) from e
        except PermissionError as e:
            raise CommandLaunchError(
                message=f"Permission denied: {command.program}",
                command=argv,
                exit_code=EXIT_NOT_EXECUTABLE,
                error_code="COMMAND_NOT_EXECUTABLE",
                details={"cwd": self._cwd, "os_error": str(e)},
            ) from e

        returncode = await process.wait()
        exit_code = normalize_returncode(returncode)

        self._logger.debug(
            "process_exited",
            pid=process.pid,
            returncode=returncode,
            exit_code=exit_code,
        )
        return exit_code

    def __repr__(self) -> str:
        return f"SubprocessCommandRunner(cwd={self._cwd!r})"


def normalize_returncode(returncode: int) -> int:
    """Map asyncio's negative "killed by signal" code to the shell's 128 + N."""
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode
