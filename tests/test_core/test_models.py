"""
Tests for channelgate.core.models
===================================

These tests verify the data models:
    - TestCommand argv construction and display
    - StepOutcome success and duration
    - OrchestrationResult exit code derivation
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from channelgate.core.enums import RunState, StepKind
from channelgate.core.models import OrchestrationResult, StepOutcome, TestCommand


def _outcome(step: StepKind, exit_code: int) -> StepOutcome:
    return StepOutcome(
        step=step,
        command=TestCommand(program="cargo", args=["test"]),
        exit_code=exit_code,
    )


# =============================================================================
# Tests: TestCommand
# =============================================================================
class TestTestCommand:
    """Tests for the TestCommand model."""

    def test_argv_puts_program_first(self) -> None:
        cmd = TestCommand(program="cargo", args=["test", "--features", "nightly"])
        assert cmd.argv == ["cargo", "test", "--features", "nightly"]

    def test_args_default_to_empty(self) -> None:
        assert TestCommand(program="make").argv == ["make"]

    def test_display_quotes_arguments(self) -> None:
        cmd = TestCommand(program="cargo", args=["test", "--features", "a b"])
        assert cmd.display() == "cargo test --features 'a b'"

    def test_empty_program_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TestCommand(program="")

    def test_is_frozen(self) -> None:
        cmd = TestCommand(program="cargo")
        with pytest.raises(ValidationError):
            cmd.program = "make"

    def test_with_extra_args_returns_new_command(self) -> None:
        primary = TestCommand(program="cargo", args=["test"], label="primary")
        secondary = primary.with_extra_args("--features", "nightly", label="secondary")

        assert secondary.argv == ["cargo", "test", "--features", "nightly"]
        assert secondary.label == "secondary"
        assert primary.argv == ["cargo", "test"]

    def test_with_extra_args_keeps_label_by_default(self) -> None:
        cmd = TestCommand(program="cargo", label="primary").with_extra_args("-q")
        assert cmd.label == "primary"


# =============================================================================
# Tests: StepOutcome
# =============================================================================
class TestStepOutcome:
    def test_zero_exit_succeeds(self) -> None:
        assert _outcome(StepKind.PRIMARY, 0).succeeded

    def test_non_zero_exit_fails(self) -> None:
        assert not _outcome(StepKind.PRIMARY, 101).succeeded

    def test_duration(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        outcome = StepOutcome(
            step=StepKind.PRIMARY,
            command=TestCommand(program="cargo"),
            exit_code=0,
            started_at=start,
            finished_at=start + timedelta(seconds=2.5),
        )
        assert outcome.duration_seconds == 2.5


# =============================================================================
# Tests: OrchestrationResult
# =============================================================================
class TestOrchestrationResult:
    """Tests for the exit code derivation."""

    def test_all_passed_exits_zero(self) -> None:
        result = OrchestrationResult(
            channel="nightly",
            sentinel="nightly",
            final_state=RunState.SECONDARY_PASSED,
            outcomes=[_outcome(StepKind.PRIMARY, 0), _outcome(StepKind.SECONDARY, 0)],
        )
        assert result.exit_code == 0
        assert result.succeeded
        assert result.secondary_invoked

    def test_primary_failure_code_propagated(self) -> None:
        result = OrchestrationResult(
            sentinel="nightly",
            final_state=RunState.PRIMARY_FAILED,
            outcomes=[_outcome(StepKind.PRIMARY, 101)],
        )
        assert result.exit_code == 101
        assert result.channel is None
        assert not result.secondary_invoked

    def test_secondary_failure_code_propagated(self) -> None:
        result = OrchestrationResult(
            channel="nightly",
            sentinel="nightly",
            final_state=RunState.SECONDARY_FAILED,
            outcomes=[_outcome(StepKind.PRIMARY, 0), _outcome(StepKind.SECONDARY, 3)],
        )
        assert result.exit_code == 3

    def test_first_failure_wins(self) -> None:
        result = OrchestrationResult(
            sentinel="nightly",
            final_state=RunState.SECONDARY_FAILED,
            outcomes=[_outcome(StepKind.PRIMARY, 2), _outcome(StepKind.SECONDARY, 3)],
        )
        assert result.exit_code == 2

    def test_no_outcomes_exits_zero(self) -> None:
        result = OrchestrationResult(sentinel="nightly", final_state=RunState.SKIP)
        assert result.exit_code == 0
