"""Command-line interface for shuri."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
import yaml

from shuri import __version__
from shuri.core.config import (
    VALID_STYLE_EXTENSIONS,
    GeneratorConfig,
    is_valid_style_extension,
    load_config,
)
from shuri.generation.planner import GenerationOptions, GenerationPlanner, GenerationResult

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="shuri",
    help="Vue.js component generator with VuePress documentation support",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"shuri {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = False,
) -> None:
    """Create Vue.js components with a standard structure."""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str, hint: Optional[str] = None) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    if hint:
        typer.echo(f"  {hint}", err=True)
    raise typer.Exit(1)


def _relative(path: Path, root_dir: Path) -> str:
    try:
        return str(path.relative_to(root_dir))
    except ValueError:
        return str(path)


def _print_verbose_info(name: str, options: GenerationOptions, config: GeneratorConfig, vue_version: int) -> None:
    style = "none" if options.no_style else f".{(options.style_ext or config.style_ext).lstrip('.')}"
    test = "none" if options.no_test else (options.test_ext or config.test_ext)
    kebab = config.kebab if options.kebab is None else options.kebab
    typer.echo(f"Creating component '{name}'...")
    typer.echo(f"  Root: {options.root or name}")
    typer.echo(f"  Output directory: {options.out or config.out_dir}")
    typer.echo(f"  Style: {style}")
    typer.echo(f"  Test: {test}")
    typer.echo(f"  Documentation: {'VuePress' if options.docs else 'none'}")
    typer.echo(f"  Vue version: {vue_version}")
    typer.echo(f"  Naming: {'kebab-case' if kebab else 'PascalCase'}")


def _print_dry_run(result: GenerationResult, root_dir: Path) -> None:
    typer.echo("Dry run, nothing was written.")
    typer.echo("Files that would be created:")
    for path in result.written:
        typer.echo(f"  + {_relative(path, root_dir)}")

    if result.docs_plan is not None:
        typer.echo("Documentation files:")
        for path in result.docs_plan.doc_files:
            typer.echo(f"  + {_relative(path, root_dir)}")
        typer.echo("Files that would be updated:")
        for path in result.docs_plan.registries:
            typer.echo(f"  ~ {_relative(path, root_dir)}")


def _print_success(name: str, result: GenerationResult, root_dir: Path, verbose: bool) -> None:
    typer.echo(f"Component '{name}' created in {_relative(result.path, root_dir)}")
    typer.echo("Files created:")
    for path in result.written:
        typer.echo(f"  + {_relative(path, root_dir)}")

    docs = result.docs
    if docs is not None:
        if docs.created_count:
            plural = "s" if docs.created_count > 1 else ""
            typer.echo(f"Documentation created: {docs.created_count} file{plural}")
        for path, created in docs.created.items():
            if verbose or created:
                status = "+" if created else "= (exists)"
                typer.echo(f"  {status} {_relative(path, root_dir)}")

        updated = [patch for patch in docs.patches if patch.success]
        if updated:
            typer.echo("Registries:")
        for patch in updated:
            status = "~" if patch.changed else "= (up to date)"
            typer.echo(f"  {status} {_relative(patch.path, root_dir)}")
            if patch.backup is not None:
                typer.echo(f"      backup: {_relative(patch.backup.path, root_dir)}")

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)


@app.command(name="new")
def new_cmd(
    name: Annotated[str, typer.Argument(help="Component name (any casing)")],
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", help="Component root folder name (default: same as the component)"),
    ] = None,
    vue2: Annotated[bool, typer.Option("--vue2", help="Force the Vue 2.x template")] = False,
    vue3: Annotated[bool, typer.Option("--vue3", help="Force the Vue 3.x template")] = False,
    style_ext: Annotated[
        Optional[str],
        typer.Option("--style-ext", help=f"Style extension ({'|'.join(VALID_STYLE_EXTENSIONS)})"),
    ] = None,
    test_ext: Annotated[
        Optional[str],
        typer.Option("--test-ext", help="Test file suffix (.unit.js|.spec.js|.ts)"),
    ] = None,
    kebab: Annotated[bool, typer.Option("--kebab", help="Use kebab-case file names (default: PascalCase)")] = False,
    include_test: Annotated[bool, typer.Option("--test/--no-test", help="Create the test file")] = True,
    include_style: Annotated[bool, typer.Option("--style/--no-style", help="Create the style file")] = True,
    out: Annotated[
        Optional[str],
        typer.Option("--out", "-o", help="Output directory (default: src/components)"),
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Write into an existing component directory")] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be created without writing")] = False,
    docs: Annotated[
        bool,
        typer.Option("--docs/--no-docs", help="Generate VuePress docs and update the docs registries"),
    ] = False,
    backup: Annotated[bool, typer.Option("--backup", help="Keep .bak copies of modified registries")] = False,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Config file (default: ./.shuri.yml)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
) -> None:
    """Create a Vue component with a complete structure."""
    _configure_logging(verbose)
    root_dir = Path.cwd()

    if not name.strip():
        _fail("a component name is required.", "Example: shuri new MyButton")
    if style_ext and not is_valid_style_extension(style_ext):
        _fail(
            f"style extension '{style_ext}' is not supported.",
            f"Valid extensions: {', '.join(VALID_STYLE_EXTENSIONS)}",
        )
    if vue2 and vue3:
        _fail("--vue2 and --vue3 are mutually exclusive.")

    try:
        config = load_config(root_dir, config_file)
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"invalid configuration: {e}")

    options = GenerationOptions(
        root=root,
        out=out,
        style_ext=style_ext,
        test_ext=test_ext,
        no_style=not include_style,
        no_test=not include_test,
        kebab=True if kebab else None,
        force=force,
        dry_run=dry_run,
        vue_version=2 if vue2 else 3 if vue3 else None,
        docs=docs,
        backup=True if backup else None,
    )
    planner = GenerationPlanner(config)

    if verbose:
        _print_verbose_info(name, options, config, planner.vue_version(options))

    try:
        result = asyncio.run(planner.generate(name, options))
    except (OSError, ValueError) as e:
        logger.debug("Generation failed", exc_info=True)
        _fail(f"unexpected failure: {e}")

    if result.dry_run:
        _print_dry_run(result, root_dir)
        return

    if not result.created:
        _fail(
            f"directory already exists at {result.path}",
            "Use --force to overwrite or choose another name.",
        )

    _print_success(name, result, root_dir, verbose)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
