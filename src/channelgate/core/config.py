"""
channelgate.core.config - Configuration Management
====================================================

Configuration for the orchestrator. Values are resolved with the following
priority (highest first):

    1. Explicit constructor arguments
    2. Environment variables (prefixed with CHANNELGATE_)
    3. YAML configuration file (channelgate.yaml)
    4. Default values defined in the model below

The defaults reproduce the CI job this tool replaces: run ``cargo test``,
and when ``TRAVIS_RUST_VERSION`` is ``nightly`` also run
``cargo test --features nightly``. Zero configuration is the normal case.

Note that the toolchain channel itself is NOT a config field. Only the
*name* of the variable holding it is configurable (``channel_env_var``);
the orchestrator reads the value from the process environment once per run.

Usage:
    # Load from environment variables:
    config = GateConfig()

    # Load from YAML file (env vars still win):
    config = load_config("channelgate.yaml")

    # Explicit overrides:
    config = GateConfig(sentinel_channel="beta", feature_flag="unstable")

Environment Variables:
    CHANNELGATE_CHANNEL_ENV_VAR=RUSTUP_TOOLCHAIN
    CHANNELGATE_SENTINEL_CHANNEL=nightly
    CHANNELGATE_TEST_PROGRAM=cargo
    CHANNELGATE_TEST_ARGS='["test", "--all"]'
    CHANNELGATE_FEATURE_FLAG=nightly
    CHANNELGATE_LOG_LEVEL=INFO
    CHANNELGATE_CONFIG_FILE=ci/channelgate.yaml
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from channelgate.core.exceptions import ConfigurationError


ENV_PREFIX = "CHANNELGATE_"
CONFIG_FILE_ENV_VAR = "CHANNELGATE_CONFIG_FILE"
DEFAULT_CONFIG_FILENAME = "channelgate.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Main Configuration
# =============================================================================
class GateConfig(BaseSettings):
    """Top-level configuration for a channelgate run.

    Attributes:
        channel_env_var: Name of the environment variable that holds the
            active toolchain channel.
        sentinel_channel: Channel identifier that enables the secondary
            (feature-flagged) test run. Compared by exact equality.
            Never empty, so an unset channel variable cannot match.
        test_program: Executable of the test runner.
        test_args: Arguments of the default test invocation.
        feature_flag_option: Option that introduces a feature name on the
            test runner's command line.
        feature_flag: Feature enabled for the secondary test run.
        runner: Command runner implementation ("subprocess" or "fake").
        working_directory: Working directory for child processes. None means
            inherit the orchestrator's own.
        log_level: structlog filtering level. WARNING keeps a normal run
            silent apart from the test commands' own output.
        log_format: "console" for human-readable lines, "json" for machine
            ingestion.

    Example:
        >>> config = GateConfig(test_args=["test", "--workspace"])
        >>> config.test_program
        'cargo'
    """

    # -------------------------------------------------------------------------
    # Channel Selection
    # -------------------------------------------------------------------------
    channel_env_var: str = Field(
        default="TRAVIS_RUST_VERSION",
        min_length=1,
        description="Environment variable holding the toolchain channel",
    )
    sentinel_channel: str = Field(
        default="nightly",
        min_length=1,
        description="Channel that triggers the feature-flagged test run",
    )

    # -------------------------------------------------------------------------
    # Test Commands
    # -------------------------------------------------------------------------
    test_program: str = Field(
        default="cargo",
        description="Test runner executable",
    )
    test_args: list[str] = Field(
        default_factory=lambda: ["test"],
        description="Arguments for the default test invocation",
    )
    feature_flag_option: str = Field(
        default="--features",
        description="Option used to pass a feature name to the test runner",
    )
    feature_flag: str = Field(
        default="nightly",
        min_length=1,
        description="Feature enabled for the secondary test run",
    )

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------
    runner: Literal["subprocess", "fake"] = Field(
        default="subprocess",
        description="Command runner implementation",
    )
    working_directory: Optional[str] = Field(
        default=None,
        description="Working directory for test commands (None = inherit)",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="WARNING",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' or 'json'",
    )

    @field_validator("test_program")
    @classmethod
    def _program_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("test_program must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            )
        return level

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    #   - env_prefix: All env vars start with "CHANNELGATE_"
    #   - case_sensitive: Env vars are case-insensitive
    #   - extra: Unknown keys in a YAML file are rejected, not ignored
    # -------------------------------------------------------------------------
    model_config = {
        "env_prefix": ENV_PREFIX,
        "case_sensitive": False,
        "extra": "forbid",
    }


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None) -> GateConfig:
    """Load channelgate configuration from a YAML file and/or environment variables.

    The file is located as follows:
        1. The explicit ``path`` argument, if given.
        2. The file named by CHANNELGATE_CONFIG_FILE, if set.
        3. ``channelgate.yaml`` in the current directory, if it exists.
        4. Otherwise no file: defaults + environment variables only.

    Environment variables override values from the file.

    Args:
        path: Path to a YAML configuration file.

    Returns:
        A fully validated GateConfig instance.

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist.
        ConfigurationError: If the file is malformed or a value is invalid.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_FILE_ENV_VAR))
    if path is None:
        path = os.environ.get(CONFIG_FILE_ENV_VAR) or None
    if path is None and Path(DEFAULT_CONFIG_FILENAME).exists():
        path = DEFAULT_CONFIG_FILENAME

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            if explicit:
                raise FileNotFoundError(f"Configuration file not found: {path}")
        else:
            yaml_data = _read_yaml(config_path)

    # Constructor args beat env vars in pydantic-settings, so drop any YAML
    # key that the environment also sets.
    overrides = {
        key: value for key, value in yaml_data.items()
        if f"{ENV_PREFIX}{key}".upper() not in _environ_upper()
    }

    try:
        return GateConfig(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"Invalid channelgate configuration: {e.error_count()} error(s)",
            error_code="INVALID_CONFIG",
            details={
                "source": str(path) if path else "environment",
                "errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            message=f"Malformed YAML in {config_path}",
            error_code="MALFORMED_YAML",
            details={"path": str(config_path), "error": str(e)},
        ) from e

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            message=f"Configuration file {config_path} must contain a mapping",
            error_code="MALFORMED_YAML",
            details={"path": str(config_path), "type": type(raw_data).__name__},
        )
    return raw_data


def _environ_upper() -> set[str]:
    return {name.upper() for name in os.environ}
