"""
channelgate.orchestrator - Channel-Gated Test Orchestration
=============================================================

The Orchestrator runs a project's default test command and, only when the
active toolchain channel equals the sentinel, runs it a second time with an
extra feature flag enabled.

Execution Flow:
    1. Run the primary command (e.g. ``cargo test``).
       Non-zero exit → stop, that exit code is the result.
    2. Read the toolchain channel from the environment (unset → "").
    3. Compare it to the sentinel by exact string equality.
    4. Equal → run the secondary command (e.g. ``cargo test --features nightly``)
       and its exit code is the result. Not equal → stop with 0.

    START ──→ PRIMARY_RUNNING ──→ PRIMARY_FAILED                     (exit = primary)
                              └─→ PRIMARY_PASSED ──→ SKIP            (exit = 0)
                                                 └─→ SECONDARY_RUNNING
                                                        ├─→ SECONDARY_FAILED (exit = secondary)
                                                        └─→ SECONDARY_PASSED (exit = 0)

Each command is awaited to completion before the next decision is taken,
so the two invocations never overlap.

Usage:
    >>> orchestrator = Orchestrator(SubprocessCommandRunner(), GateConfig())
    >>> result = await orchestrator.run()
    >>> sys.exit(result.exit_code)
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Mapping, Optional

import structlog

from channelgate.core.config import GateConfig
from channelgate.core.enums import RunState, StepKind
from channelgate.core.exceptions import StateTransitionError
from channelgate.core.models import OrchestrationResult, StepOutcome, TestCommand
from channelgate.runners.base import BaseCommandRunner


def read_toolchain_channel(
    env_var: str,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the toolchain channel named by ``env_var``, or "" if it is unset."""
    source = os.environ if environ is None else environ
    return source.get(env_var, "")


def build_commands(config: GateConfig) -> tuple[TestCommand, TestCommand]:
    """Build the primary and secondary test commands from configuration.

    The secondary command is the primary one with the feature flag appended.
    An empty ``feature_flag_option`` passes the flag as a bare argument.

    Returns:
        (primary, secondary)
    """
    primary = TestCommand(
        program=config.test_program,
        args=list(config.test_args),
        label=StepKind.PRIMARY.value,
    )
    flag_args = (
        [config.feature_flag_option, config.feature_flag]
        if config.feature_flag_option
        else [config.feature_flag]
    )
    secondary = primary.with_extra_args(*flag_args, label=StepKind.SECONDARY.value)
    return primary, secondary


class Orchestrator:
    """Sequences the primary and the channel-gated secondary test commands.

    The orchestrator owns no process handling; everything that touches a
    child process goes through the injected command runner.

    Attributes:
        _runner: Executes test commands and reports exit codes.
        _config: Commands, sentinel, and channel variable name.
        _environ: Environment the channel is read from (None = os.environ).
        _state: Current RunState of the run in progress.

    Example:
        >>> runner = FakeCommandRunner()
        >>> orchestrator = Orchestrator(runner, environ={"TRAVIS_RUST_VERSION": "nightly"})
        >>> result = await orchestrator.run()
        >>> runner.call_count
        2
    """

    def __init__(
        self,
        runner: BaseCommandRunner,
        config: Optional[GateConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._runner = runner
        self._config = config or GateConfig()
        self._environ = environ
        self._state = RunState.START
        self._primary, self._secondary = build_commands(self._config)
        self._logger = structlog.get_logger(component="orchestrator")

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def primary_command(self) -> TestCommand:
        return self._primary

    @property
    def secondary_command(self) -> TestCommand:
        return self._secondary

    # =========================================================================
    # Main Entry Point
    # =========================================================================

    async def run(self) -> OrchestrationResult:
        """Execute one orchestration run.

        Returns:
            The OrchestrationResult. Its ``exit_code`` is 0 if every executed
            command succeeded, otherwise the first failing command's exit code.

        Raises:
            CommandLaunchError: If a test command could not be started.
            StateTransitionError: If the orchestrator is run twice.
        """
        sentinel = self._config.sentinel_channel
        outcomes: list[StepOutcome] = []

        self._logger.info(
            "orchestration_starting",
            primary=self._primary.display(),
            channel_env_var=self._config.channel_env_var,
            sentinel=sentinel,
        )

        # --- Step 1: primary ---
        self._transition(RunState.PRIMARY_RUNNING)
        primary = await self._run_step(StepKind.PRIMARY, self._primary)
        outcomes.append(primary)

        if not primary.succeeded:
            self._transition(RunState.PRIMARY_FAILED)
            return self._finish(None, sentinel, outcomes)

        self._transition(RunState.PRIMARY_PASSED)

        # --- Steps 2-3: read the channel once and compare ---
        channel = read_toolchain_channel(self._config.channel_env_var, self._environ)

        if channel != sentinel:
            self._transition(RunState.SKIP)
            self._logger.info(
                "secondary_skipped",
                channel=channel,
                sentinel=sentinel,
            )
            return self._finish(channel, sentinel, outcomes)

        # --- Step 4: secondary ---
        self._transition(RunState.SECONDARY_RUNNING)
        secondary = await self._run_step(StepKind.SECONDARY, self._secondary)
        outcomes.append(secondary)

        self._transition(
            RunState.SECONDARY_PASSED if secondary.succeeded else RunState.SECONDARY_FAILED
        )
        return self._finish(channel, sentinel, outcomes)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run_step(self, step: StepKind, command: TestCommand) -> StepOutcome:
        self._logger.info("step_starting", step=step.value, command=command.display())

        started_at = datetime.now(timezone.utc)
        exit_code = await self._runner.run(command)
        outcome = StepOutcome(
            step=step,
            command=command,
            exit_code=exit_code,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )

        self._logger.info(
            "step_finished",
            step=step.value,
            exit_code=exit_code,
            duration_seconds=round(outcome.duration_seconds, 3),
        )
        return outcome

    def _transition(self, to_state: RunState) -> None:
        if to_state not in self._state.allowed_next:
            raise StateTransitionError(
                message=f"Illegal transition {self._state.value} -> {to_state.value}",
                from_state=self._state.value,
                to_state=to_state.value,
            )
        self._logger.debug("state_transition", from_state=self._state.value, to_state=to_state.value)
        self._state = to_state

    def _finish(
        self,
        channel: Optional[str],
        sentinel: str,
        outcomes: list[StepOutcome],
    ) -> OrchestrationResult:
        result = OrchestrationResult(
            channel=channel,
            sentinel=sentinel,
            final_state=self._state,
            outcomes=outcomes,
        )
        self._logger.info(
            "orchestration_finished",
            final_state=self._state.value,
            exit_code=result.exit_code,
            steps=len(outcomes),
        )
        return result
