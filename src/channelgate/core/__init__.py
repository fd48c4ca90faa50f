"""
channelgate.core - Foundation Layer
=====================================

Building blocks that every other module in channelgate depends on:

    - config:      Configuration management (GateConfig, load_config)
    - enums:       RunState, StepKind
    - models:      TestCommand, StepOutcome, OrchestrationResult
    - exceptions:  Structured exception hierarchy

Dependency Rule:
    core/ depends on NOTHING else in the channelgate package.
"""

from channelgate.core.config import GateConfig, load_config
from channelgate.core.enums import RunState, StepKind
from channelgate.core.exceptions import (
    ChannelGateError,
    CommandLaunchError,
    ConfigurationError,
    StateTransitionError,
)
from channelgate.core.models import OrchestrationResult, StepOutcome, TestCommand

__all__ = [
    # Config
    "GateConfig",
    "load_config",
    # Enums
    "RunState",
    "StepKind",
    # Models
    "TestCommand",
    "StepOutcome",
    "OrchestrationResult",
    # Exceptions
    "ChannelGateError",
    "ConfigurationError",
    "CommandLaunchError",
    "StateTransitionError",
]
