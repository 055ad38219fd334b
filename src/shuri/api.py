"""
Programmatic API.

    from shuri.api import run

    result = run(["new", "UserButton"], root_dir="/path/to/project", docs=True)
    for warning in result.warnings:
        print(warning)
"""
import asyncio
from pathlib import Path
from typing import Any, Optional

from shuri.core.config import GeneratorConfig, load_config
from shuri.generation.planner import GenerationOptions, GenerationPlanner, GenerationResult


def _parse_command(command: list[str]) -> str:
    if len(command) != 2 or command[0] != "new" or not command[1]:
        raise ValueError("Invalid command. Use: run(['new', 'ComponentName'], root_dir, **options)")
    return command[1]


async def run_async(
    command: list[str],
    root_dir: str | Path,
    config: Optional[GeneratorConfig] = None,
    **options: Any,
) -> GenerationResult:
    """
    Create a component without going through the CLI.

    Args:
        command: ["new", <ComponentName>]
        root_dir: Project root; registries and output paths resolve against it
        config: Preloaded config (defaults to <root_dir>/.shuri.yml)
        **options: Any GenerationOptions field

    Returns:
        GenerationResult

    Raises:
        ValueError: On an unknown command or invalid option
    """
    name = _parse_command(command)
    try:
        generation_options = GenerationOptions(**options)
    except TypeError as e:
        raise ValueError(f"Invalid option: {e}") from e
    config = config or load_config(root_dir)
    return await GenerationPlanner(config).generate(name, generation_options)


def run(
    command: list[str],
    root_dir: str | Path,
    config: Optional[GeneratorConfig] = None,
    **options: Any,
) -> GenerationResult:
    """Synchronous wrapper around run_async."""
    return asyncio.run(run_async(command, root_dir, config=config, **options))
