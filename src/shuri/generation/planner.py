"""
Generation planner.

Resolves naming variants and file paths for a new component, refuses to
overwrite an existing component directory unless forced, and either returns a
dry-run plan or writes the component, style, test and index files. When
documentation is requested it hands over to the DocumentationOrchestrator.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from shuri.core.config import GeneratorConfig
from shuri.core.telemetry import TelemetryRecorder
from shuri.core.writer import DiffGatedWriter

from .docs import DocsPaths, DocsResult, DocumentationOrchestrator
from .files import write_file
from .naming import ComponentNames, resolve_names
from .templates import index_template, style_template, test_template, vue_template
from .vue_version import detect_vue_version

logger = logging.getLogger(__name__)

DEFAULT_VUE_VERSION = 3
# VuePress v1 documentation only targets Vue 2
DOCS_VUE_VERSION = 2


@dataclass
class GenerationOptions:
    """
    Per-invocation options; unset values fall back to the project config.

    Attributes:
        root: Component folder name (defaults to the file name)
        out: Output directory, relative to the project root
        style_ext: Style file extension
        test_ext: Test file suffix (".unit.js", "spec.js", ...)
        no_style: Skip the style file
        no_test: Skip the test file
        kebab: Use kebab-case file names instead of PascalCase
        force: Write into an existing component directory
        dry_run: Plan only, touch nothing
        vue_version: Force Vue 2 or 3 instead of sniffing package.json
        docs: Generate documentation and update the registries
        backup: Keep .bak copies of modified registries
    """
    root: Optional[str] = None
    out: Optional[str] = None
    style_ext: Optional[str] = None
    test_ext: Optional[str] = None
    no_style: bool = False
    no_test: bool = False
    kebab: Optional[bool] = None
    force: bool = False
    dry_run: bool = False
    vue_version: Optional[int] = None
    docs: bool = False
    backup: Optional[bool] = None


@dataclass
class ComponentFiles:
    """Paths of the primary artifacts."""
    directory: Path
    index: Path
    component: Path
    style: Optional[Path]
    test: Optional[Path]

    @property
    def to_write(self) -> list[Path]:
        files = [self.component, self.index]
        if self.style is not None:
            files.append(self.style)
        if self.test is not None:
            files.append(self.test)
        return files


@dataclass
class GenerationResult:
    """
    Outcome of a generation run.

    Attributes:
        created: False when the component directory already existed
        path: Component directory
        reason: Why nothing was created ("exists")
        dry_run: True when nothing was written
        files: Primary artifact paths
        written: Files written (or planned, for a dry run)
        vue_version: Vue major the templates were rendered for
        docs: Documentation result when docs were generated
        docs_plan: Documentation paths when docs were requested in a dry run
        warnings: Non-fatal problems collected during the run
    """
    created: bool
    path: Path
    reason: Optional[str] = None
    dry_run: bool = False
    files: Optional[ComponentFiles] = None
    written: list[Path] = field(default_factory=list)
    vue_version: Optional[int] = None
    docs: Optional[DocsResult] = None
    docs_plan: Optional[DocsPaths] = None
    warnings: list[str] = field(default_factory=list)


def _suffix(ext: str) -> str:
    return ext if ext.startswith(".") else f".{ext}"


def plan_files(component_dir: Path, file_name: str, style_ext: str, test_ext: str,
               no_style: bool = False, no_test: bool = False) -> ComponentFiles:
    return ComponentFiles(
        directory=component_dir,
        index=component_dir / "index.js",
        component=component_dir / f"{file_name}.vue",
        style=None if no_style else component_dir / f"{file_name}{_suffix(style_ext)}",
        test=None if no_test else component_dir / f"{file_name}{_suffix(test_ext)}",
    )


class GenerationPlanner:
    """Creates a component and, optionally, its documentation."""

    def __init__(
        self,
        config: GeneratorConfig,
        writer: Optional[DiffGatedWriter] = None,
        recorder: Optional[TelemetryRecorder] = None,
    ):
        self.config = config
        self.docs = DocumentationOrchestrator(config, writer=writer, recorder=recorder)

    def resolve(self, name: str, options: GenerationOptions) -> tuple[ComponentNames, ComponentFiles]:
        kebab = self.config.kebab if options.kebab is None else options.kebab
        names = resolve_names(name, kebab=kebab, root=options.root)
        out_base = self.config.resolve(options.out or self.config.out_dir)
        files = plan_files(
            out_base / names.folder,
            names.file_name,
            options.style_ext or self.config.style_ext,
            options.test_ext or self.config.test_ext,
            no_style=options.no_style,
            no_test=options.no_test,
        )
        return names, files

    def vue_version(self, options: GenerationOptions) -> int:
        return options.vue_version or detect_vue_version(self.config.root_dir) or DEFAULT_VUE_VERSION

    async def create_component(self, name: str, options: GenerationOptions) -> GenerationResult:
        """
        Create the primary artifacts of a component.

        Args:
            name: Component name in any casing
            options: Invocation options

        Returns:
            GenerationResult; created is False when the directory exists and force is off
        """
        if not name or not name.strip():
            raise ValueError("component name is required")

        names, files = self.resolve(name, options)
        vue_version = self.vue_version(options)

        if files.directory.exists() and not options.force:
            logger.error(f"Directory {files.directory} already exists, use force to overwrite")
            return GenerationResult(created=False, path=files.directory, reason="exists", files=files)

        if options.dry_run:
            return GenerationResult(
                created=True,
                path=files.directory,
                dry_run=True,
                files=files,
                written=files.to_write,
                vue_version=vue_version,
            )

        style_file = files.style.name if files.style is not None else None
        bodies = {
            files.component: vue_template(names.pascal, vue_version, style_file),
            files.index: index_template(names.pascal, names.file_name),
        }
        if files.style is not None:
            bodies[files.style] = style_template(names.kebab)
        if files.test is not None:
            bodies[files.test] = test_template(names.pascal, vue_version, names.file_name)

        await asyncio.gather(*(write_file(path, body) for path, body in bodies.items()))
        logger.info(f"Created component {names.pascal} in {files.directory}")

        return GenerationResult(
            created=True,
            path=files.directory,
            files=files,
            written=list(bodies),
            vue_version=vue_version,
        )

    async def generate(self, name: str, options: GenerationOptions) -> GenerationResult:
        """
        Create a component and, when requested, its documentation.

        Registry failures end up in result.warnings; they never make the
        generation fail.
        """
        result = await self.create_component(name, options)
        if not result.created or not options.docs:
            return result

        names, _ = self.resolve(name, options)
        if result.dry_run:
            result.docs_plan = self.docs.plan(names)
            return result

        docs_version = options.vue_version or detect_vue_version(self.config.root_dir) or DOCS_VUE_VERSION
        if docs_version != DOCS_VUE_VERSION:
            result.warnings.append(
                f"documentation skipped: VuePress docs support Vue {DOCS_VUE_VERSION} only "
                f"(project uses Vue {docs_version})"
            )
            return result

        backup = self.config.backup if options.backup is None else options.backup
        result.docs = await self.docs.generate(names, backup=backup)
        result.warnings.extend(result.docs.warnings)
        return result
