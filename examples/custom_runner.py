"""
Custom Runner Example: Extending BaseCommandRunner
==================================================

This example shows how to plug your own command runner into the
Orchestrator. A runner implements a single async method:

    run(command): execute the TestCommand to completion, return its exit code.

Here we build a DryRunRunner that prints what would be executed and
pretends every command passed, then drive it through all three channel
outcomes (nightly, stable, unset).

Usage:
    python examples/custom_runner.py
"""

from __future__ import annotations

import asyncio

from channelgate.core.config import GateConfig
from channelgate.core.models import TestCommand
from channelgate.orchestrator import Orchestrator
from channelgate.runners.base import BaseCommandRunner


class DryRunRunner(BaseCommandRunner):
    """Prints each command instead of running it."""

    async def run(self, command: TestCommand) -> int:
        print(f"  would run [{command.label}]: {command.display()}")
        return 0


async def main() -> None:
    config = GateConfig()

    for channel in ("nightly", "stable", None):
        environ = {} if channel is None else {config.channel_env_var: channel}
        print(f"{config.channel_env_var}={channel!r}")

        result = await Orchestrator(DryRunRunner(), config, environ=environ).run()

        print(f"  final state: {result.final_state.value}, exit code: {result.exit_code}")
        print()


if __name__ == "__main__":
    asyncio.run(main())
