"""
channelgate.core.models - Core Data Models
============================================

Pydantic models that flow between the orchestrator, the command runners,
and the CLI.

Model Hierarchy:
    TestCommand          → What to execute (argv + label)
    StepOutcome          → What happened when one command ran
    OrchestrationResult  → The whole run: channel, final state, outcomes

Data Flow:
    ┌──────────────┐     TestCommand      ┌──────────────┐
    │ Orchestrator │ ───────────────────→ │ CommandRunner│
    │              │ ←─────────────────── │              │
    └──────┬───────┘      exit code       └──────────────┘
           │
           │  OrchestrationResult (list[StepOutcome])
           ↓
    ┌──────────────┐
    │     CLI      │ → sys.exit(result.exit_code)
    └──────────────┘
"""

from __future__ import annotations

import shlex
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from channelgate.core.enums import RunState, StepKind


def _now() -> datetime:
    """Current UTC timestamp. Every timestamp in channelgate is UTC."""
    return datetime.now(timezone.utc)


# =============================================================================
# Test Command Model
# =============================================================================
class TestCommand(BaseModel):
    """A single external test-runner invocation.

    Attributes:
        program: Executable to spawn (looked up on PATH).
        args: Arguments passed to the executable.
        label: Short name used in logs.

    Example:
        >>> cmd = TestCommand(program="cargo", args=["test", "--features", "nightly"])
        >>> cmd.argv
        ['cargo', 'test', '--features', 'nightly']
        >>> cmd.display()
        'cargo test --features nightly'
    """

    # Keeps pytest from collecting this class as a test case.
    __test__ = False

    program: str = Field(min_length=1, description="Executable to spawn")
    args: list[str] = Field(default_factory=list, description="Command arguments")
    label: str = Field(default="", description="Short name for logs")

    model_config = {"frozen": True}

    @property
    def argv(self) -> list[str]:
        """Full argument vector, program first."""
        return [self.program, *self.args]

    def display(self) -> str:
        """Shell-quoted one-line rendering, as ``set -x`` would trace it."""
        return shlex.join(self.argv)

    def with_extra_args(self, *extra: str, label: Optional[str] = None) -> TestCommand:
        """Return a copy with ``extra`` appended to the arguments."""
        return TestCommand(
            program=self.program,
            args=[*self.args, *extra],
            label=self.label if label is None else label,
        )


# =============================================================================
# Step Outcome Model
# =============================================================================
class StepOutcome(BaseModel):
    """Result of running one test command to completion.

    Attributes:
        step: Whether this was the primary or the secondary invocation.
        command: The command that ran.
        exit_code: The command's exit status, unmodified.
        started_at: When the command was spawned (UTC).
        finished_at: When the command terminated (UTC).
    """

    step: StepKind
    command: TestCommand
    exit_code: int
    started_at: datetime = Field(default_factory=_now)
    finished_at: datetime = Field(default_factory=_now)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


# =============================================================================
# Orchestration Result Model
# =============================================================================
class OrchestrationResult(BaseModel):
    """Summary of a complete orchestration run.

    The ``exit_code`` property is what the process exits with: 0 when every
    executed step succeeded, otherwise the exit code of the first failing
    step. Because the run is fail-fast, the first failing step is also the
    last step executed.

    Attributes:
        channel: The toolchain channel read from the environment ("" if
            unset). None when the run ended before the channel was consulted,
            i.e. the primary step failed.
        sentinel: The channel value that enables the secondary step.
        final_state: Terminal RunState the run ended in.
        outcomes: One entry per executed command, in execution order.

    Example:
        >>> result.final_state
        <RunState.SKIP: 'skip'>
        >>> result.exit_code
        0
    """

    channel: Optional[str] = None
    sentinel: str
    final_state: RunState
    outcomes: list[StepOutcome] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        for outcome in self.outcomes:
            if not outcome.succeeded:
                return outcome.exit_code
        return 0

    @property
    def secondary_invoked(self) -> bool:
        return any(o.step == StepKind.SECONDARY for o in self.outcomes)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0
