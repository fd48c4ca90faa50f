"""
channelgate.core.enums - Type-Safe Enumerations
=================================================

Enumerations used by the orchestrator. Like every enum in the package they
inherit from both ``str`` and ``Enum`` so they compare equal to their plain
string values and serialize cleanly in structured logs.

    StepKind: Which of the two test commands a step belongs to.
    RunState: The orchestrator's lifecycle state machine.
"""

from enum import Enum


# =============================================================================
# Step Kind Enumeration
# =============================================================================
# A run executes at most two steps, always in this order:
#
#   PRIMARY   → the project's default test command
#   SECONDARY → the same command with the experimental feature flag enabled
# =============================================================================
class StepKind(str, Enum):
    """The two test command invocations an orchestration run can perform."""

    PRIMARY = "primary"         # Default test suite, always executed
    SECONDARY = "secondary"     # Feature-flagged test suite, sentinel channel only


# =============================================================================
# Run State Enumeration
# =============================================================================
# The orchestrator walks this state machine exactly once per run:
#
#   START → PRIMARY_RUNNING → PRIMARY_FAILED                      (terminal)
#                           ↘ PRIMARY_PASSED → SKIP               (terminal)
#                                            ↘ SECONDARY_RUNNING → SECONDARY_FAILED (terminal)
#                                                                ↘ SECONDARY_PASSED (terminal)
#
# The guard at PRIMARY_PASSED is the channel comparison against the sentinel.
# =============================================================================
class RunState(str, Enum):
    """Lifecycle states of a single orchestration run.

    State Transitions:
        START → PRIMARY_RUNNING:              Primary command spawned
        PRIMARY_RUNNING → PRIMARY_FAILED:     Primary exited non-zero
        PRIMARY_RUNNING → PRIMARY_PASSED:     Primary exited zero
        PRIMARY_PASSED → SKIP:                Channel differs from the sentinel
        PRIMARY_PASSED → SECONDARY_RUNNING:   Channel equals the sentinel
        SECONDARY_RUNNING → SECONDARY_FAILED: Secondary exited non-zero
        SECONDARY_RUNNING → SECONDARY_PASSED: Secondary exited zero

    Usage:
        >>> RunState.SKIP.is_terminal
        True
        >>> RunState.SECONDARY_RUNNING in RunState.PRIMARY_PASSED.allowed_next
        True
    """

    START = "start"
    PRIMARY_RUNNING = "primary_running"
    PRIMARY_FAILED = "primary_failed"
    PRIMARY_PASSED = "primary_passed"
    SKIP = "skip"
    SECONDARY_RUNNING = "secondary_running"
    SECONDARY_FAILED = "secondary_failed"
    SECONDARY_PASSED = "secondary_passed"

    @property
    def allowed_next(self) -> frozenset["RunState"]:
        """States reachable from this one in a single transition."""
        return _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        """True when the run has finished and no further transition exists."""
        return not _TRANSITIONS[self]


_TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.START: frozenset({RunState.PRIMARY_RUNNING}),
    RunState.PRIMARY_RUNNING: frozenset({RunState.PRIMARY_FAILED, RunState.PRIMARY_PASSED}),
    RunState.PRIMARY_FAILED: frozenset(),
    RunState.PRIMARY_PASSED: frozenset({RunState.SKIP, RunState.SECONDARY_RUNNING}),
    RunState.SKIP: frozenset(),
    RunState.SECONDARY_RUNNING: frozenset({RunState.SECONDARY_FAILED, RunState.SECONDARY_PASSED}),
    RunState.SECONDARY_FAILED: frozenset(),
    RunState.SECONDARY_PASSED: frozenset(),
}
