"""
channelgate.cli - Command-Line Entry Point
============================================

Invoked by the CI runner with no arguments:

    channelgate
    python -m channelgate

Behavior is driven entirely by configuration (CHANNELGATE_* environment
variables or channelgate.yaml) and the toolchain channel variable.

Exit Codes:
    0     every executed test command succeeded
    N     exit code of the first failing test command, unchanged
    126   a test command exists but is not executable
    127   a test command was not found
    78    configuration is invalid (EX_CONFIG)
    2     unexpected command-line arguments
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import structlog

from channelgate import __version__
from channelgate.core.config import load_config
from channelgate.core.exceptions import CommandLaunchError, ConfigurationError
from channelgate.logging_setup import configure_logging
from channelgate.orchestrator import Orchestrator
from channelgate.runners.factory import create_command_runner


logger = structlog.get_logger(component="cli")

EX_CONFIG = 78


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="channelgate",
        description=(
            "Run the project's test suite, then run it again with the "
            "experimental feature flag when the toolchain channel is the sentinel."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, load configuration, orchestrate, and return the exit code."""
    build_arg_parser().parse_args(argv)

    try:
        config = load_config()
    except (ConfigurationError, FileNotFoundError) as e:
        configure_logging("ERROR")
        if isinstance(e, ConfigurationError):
            logger.error("configuration_invalid", **e.to_dict())
        else:
            logger.error("configuration_invalid", message=str(e))
        return EX_CONFIG

    configure_logging(config.log_level, config.log_format)

    try:
        runner = create_command_runner(config)
        result = asyncio.run(Orchestrator(runner, config).run())
    except ConfigurationError as e:
        logger.error("configuration_invalid", **e.to_dict())
        return EX_CONFIG
    except CommandLaunchError as e:
        logger.error("command_launch_failed", **e.to_dict())
        return e.exit_code

    return result.exit_code


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
