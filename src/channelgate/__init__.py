"""
channelgate - Channel-Gated Test Orchestration for CI
=======================================================

channelgate is the test entry point a CI job invokes. It runs the project's
default test command and, only when the active toolchain channel equals a
sentinel value, runs the suite again with an experimental feature flag:

    cargo test
    cargo test --features nightly     (only when TRAVIS_RUST_VERSION == "nightly")

The first failing command's exit code becomes the process exit code.

Architecture:
    1. CLI           - Zero-argument entry point, config + logging setup
    2. Orchestrator  - The primary → (gated) secondary sequencing
    3. Runners       - Process-spawning seam (subprocess / fake)
    4. Core          - Config, enums, models, exceptions

Quick Start:
    >>> from channelgate import Orchestrator, GateConfig
    >>> from channelgate.runners import SubprocessCommandRunner
    >>> result = asyncio.run(Orchestrator(SubprocessCommandRunner(), GateConfig()).run())
"""

__version__ = "0.1.0"

from channelgate.core.config import GateConfig, load_config
from channelgate.orchestrator import Orchestrator

__all__ = ["GateConfig", "Orchestrator", "load_config", "__version__"]
