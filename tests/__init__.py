"""
channelgate Test Suite
======================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → Tests for channelgate.core (config, enums, models, exceptions)
    ├── test_runners/       → Tests for channelgate.runners (fake, subprocess, factory)
    ├── test_orchestrator.py→ Tests for the primary → gated secondary sequencing
    ├── test_cli.py         → Tests for the zero-argument entry point
    └── conftest.py         → Shared pytest fixtures

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_core/         # Run only core tests
    pytest -m integration           # Run only tests that spawn processes
"""
