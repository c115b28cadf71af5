#!/usr/bin/env python3
"""
Run a Transformer program
Loads a YAML program (or the bundled hello-world demo) and runs every call.
"""

import asyncio
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from transformer.chat import DemoChatAgent
from transformer.core import Capabilities, InMemoryContextStore
from transformer.engine import ProgramRunner
from transformer.models import Program
from transformer.programs import create_hello_world_program
from transformer.registry import OperationRegistry
from transformer.registry.operations import register_builtin_operations


async def show_message(level: str, text: str) -> None:
    print(f"  [{level}] {text}")


async def run(program: Program):
    """Run a program and print each outcome."""
    print(f"Running program '{program.name}'...")
    print("=" * 50)

    registry = register_builtin_operations(OperationRegistry())
    context = InMemoryContextStore()
    capabilities = Capabilities.from_context_store(
        context,
        show_message=show_message,
        start_chat=DemoChatAgent().respond,
    )

    runner = ProgramRunner(registry, capabilities)
    runner.load(program)
    report = await runner.run_all()

    print("=" * 50)
    for outcome in report.outcomes:
        status = "ok" if outcome.success else "FAILED"
        print(f"{outcome.call_id}: {status} - {outcome.message}")
    for call_id in report.skipped:
        print(f"{call_id}: skipped")

    print(f"\nContext: {context.snapshot()}")
    return report


if __name__ == "__main__":
    if len(sys.argv) > 1:
        program = Program.from_yaml(Path(sys.argv[1]))
    else:
        program = create_hello_world_program("demo")

    report = asyncio.run(run(program))
    sys.exit(0 if report.succeeded else 1)
