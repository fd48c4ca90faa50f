"""
Shared Test Fixtures for channelgate
======================================

Fixtures are organized by layer:

    1. Environment isolation (autouse)
    2. Configuration
    3. Runners
    4. Orchestrator
"""

from __future__ import annotations

import os

import pytest
import structlog

from channelgate.core.config import GateConfig
from channelgate.orchestrator import Orchestrator
from channelgate.runners.fake import FakeCommandRunner


# =============================================================================
# Environment Isolation
# =============================================================================
# CI runners set TRAVIS_RUST_VERSION (or CHANNELGATE_*) for real. Strip them
# so every test starts from a clean, deterministic environment.
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Remove channel and CHANNELGATE_* variables and run from an empty directory."""
    for name in list(os.environ):
        if name.upper().startswith("CHANNELGATE_") or name == "TRAVIS_RUST_VERSION":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def config():
    """channelgate configuration with defaults."""
    return GateConfig()


# =============================================================================
# Runners
# =============================================================================

@pytest.fixture
def fake_runner():
    """Fresh FakeCommandRunner that answers 0 unless told otherwise."""
    return FakeCommandRunner()


# =============================================================================
# Orchestrator
# =============================================================================

@pytest.fixture
def make_orchestrator(fake_runner, config):
    """Build an Orchestrator over ``fake_runner`` with a given channel value.

    Pass ``channel=None`` to leave the channel variable unset.
    """

    def _make(channel=None, gate_config=None):
        cfg = gate_config or config
        environ = {} if channel is None else {cfg.channel_env_var: channel}
        return Orchestrator(fake_runner, cfg, environ=environ)

    return _make
