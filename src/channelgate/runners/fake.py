"""
channelgate.runners.fake - Fake Command Runner for Testing
============================================================

A command runner that never spawns a process. It records every command it
is asked to run and answers with exit codes queued by the test.

Features:
    - **Exit Code Queue**: Queue exit codes in FIFO order.
    - **Default Exit Code**: Returned when the queue is empty (0 = success).
    - **Call History**: Every command passed to run(), in order.
    - **Launch Failure**: ``fail_with`` makes run() raise instead.

Usage:
    >>> runner = FakeCommandRunner()
    >>> runner.queue_exit_code(0)
    >>> runner.queue_exit_code(101)
    >>> await runner.run(primary)    # → 0
    >>> await runner.run(secondary)  # → 101
    >>> runner.call_count
    2
"""

from __future__ import annotations

from collections import deque
from typing import Optional

import structlog

from channelgate.core.models import TestCommand
from channelgate.runners.base import BaseCommandRunner


class FakeCommandRunner(BaseCommandRunner):
    """In-memory command runner for tests.

    Attributes:
        _exit_codes: FIFO queue of exit codes to return.
        _default_exit_code: Returned when the queue is empty.
        _call_history: Commands passed to run(), in call order.
        fail_with: If set, run() records the call then raises this exception.
    """

    def __init__(self, default_exit_code: int = 0) -> None:
        self._exit_codes: deque[int] = deque()
        self._default_exit_code = default_exit_code
        self._call_history: list[TestCommand] = []
        self.fail_with: Optional[BaseException] = None
        self._logger = structlog.get_logger(component="fake_runner")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def call_history(self) -> list[TestCommand]:
        return self._call_history

    @property
    def call_count(self) -> int:
        return len(self._call_history)

    @property
    def queue_size(self) -> int:
        return len(self._exit_codes)

    # =========================================================================
    # Queue Management
    # =========================================================================

    def queue_exit_code(self, exit_code: int) -> None:
        """Make the next unanswered run() return ``exit_code``."""
        self._exit_codes.append(exit_code)

    def queue_exit_codes(self, *exit_codes: int) -> None:
        for code in exit_codes:
            self.queue_exit_code(code)

    def reset(self) -> None:
        """Clear queued exit codes, call history, and any launch failure."""
        self._exit_codes.clear()
        self._call_history.clear()
        self.fail_with = None

    # =========================================================================
    # BaseCommandRunner
    # =========================================================================

    async def run(self, command: TestCommand) -> int:
        self._call_history.append(command)

        if self.fail_with is not None:
            raise self.fail_with

        exit_code = self._exit_codes.popleft() if self._exit_codes else self._default_exit_code
        self._logger.debug("fake_command_run", argv=command.argv, exit_code=exit_code)
        return exit_code

    def __repr__(self) -> str:
        return (
            f"FakeCommandRunner(calls={self.call_count}, "
            f"queued={self.queue_size}, default={self._default_exit_code})"
        )
