"""
Documentation orchestrator.

Writes the VuePress documentation files of a component and integrates the
component into the three documentation registries: the sidebar config, the
components barrel and the components README. Registry integrations are
optional extras; each one runs independently and any failure is reported as a
warning instead of aborting the generation.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from shuri.core.config import GeneratorConfig
from shuri.core.document import (
    BarrelEntry,
    PatchResult,
    PatchTarget,
    ReferenceEntry,
    SidebarEntry,
)
from shuri.core.errors import RegistryPatchError
from shuri.core.patcher import RegistryPatcher
from shuri.core.telemetry import PatchOutcome, TelemetryRecorder, create_event, get_recorder
from shuri.core.writer import DiffGatedWriter
from shuri.patchers import BarrelPatcher, ReferenceListPatcher, SidebarPatcher

from .files import ensure_dir, write_if_missing
from .naming import ComponentNames
from .templates import docs_api_template, docs_md_template, docs_vue_template

logger = logging.getLogger(__name__)

INDEX_SEED = "// Auto-generated components index\n\n"


@dataclass
class DocsPaths:
    """Every path the documentation step reads or writes."""

    components_dir: Path
    examples_dir: Path
    api_dir: Path
    component_md: Path
    example_vue: Path
    api_js: Path
    sidebar_config: Path
    components_index: Path
    reference_doc: Path
    child_path: str

    @property
    def directories(self) -> list[Path]:
        return [self.components_dir, self.examples_dir, self.api_dir]

    @property
    def doc_files(self) -> list[Path]:
        return [self.component_md, self.example_vue, self.api_js]

    @property
    def registries(self) -> list[Path]:
        return [self.sidebar_config, self.components_index, self.reference_doc]


def build_docs_paths(config: GeneratorConfig, names: ComponentNames) -> DocsPaths:
    kebab = names.docs_kebab
    docs_dir = config.resolve(config.docs.docs_dir)
    examples_dir = docs_dir / "examples" / kebab
    return DocsPaths(
        components_dir=docs_dir / "components",
        examples_dir=examples_dir,
        api_dir=docs_dir / "components-api",
        component_md=docs_dir / "components" / f"{kebab}.md",
        example_vue=examples_dir / f"{kebab}-example.vue",
        api_js=docs_dir / "components-api" / f"{kebab}-api.js",
        sidebar_config=config.resolve(config.docs.sidebar_config),
        components_index=config.resolve(config.docs.components_index),
        reference_doc=config.resolve(config.docs.reference_doc),
        child_path=f"/components/{kebab}",
    )


@dataclass
class DocsResult:
    """
    Outcome of the documentation step.

    Attributes:
        paths: Resolved documentation paths
        created: Doc file path -> whether it was created (False if it already existed)
        patches: One PatchResult per registry, in the order they ran
        warnings: Registry failures downgraded to warnings
    """
    paths: DocsPaths
    created: dict[Path, bool] = field(default_factory=dict)
    patches: list[PatchResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(1 for created in self.created.values() if created)


class DocumentationOrchestrator:
    """
    Plans documentation paths, writes doc files and runs the registry patchers.

    Each patcher gets its own try block, so a broken sidebar config never keeps
    the barrel or the README from being updated.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        writer: Optional[DiffGatedWriter] = None,
        recorder: Optional[TelemetryRecorder] = None,
    ):
        self.config = config
        self.writer = writer or DiffGatedWriter()
        self.recorder = recorder
        self.sidebar = SidebarPatcher(self.writer)
        self.barrel = BarrelPatcher(self.writer)
        self.reference_list = ReferenceListPatcher(self.writer)

    def plan(self, names: ComponentNames) -> DocsPaths:
        return build_docs_paths(self.config, names)

    async def generate(self, names: ComponentNames, backup: bool = False) -> DocsResult:
        """
        Write documentation files and update the registries.

        Args:
            names: Naming variants of the component
            backup: Keep a .bak copy of every registry that gets modified

        Returns:
            DocsResult with created files, patch results and warnings
        """
        paths = self.plan(names)
        result = DocsResult(paths=paths)

        # Disjoint directories, no ordering between them
        await asyncio.gather(*(ensure_dir(directory) for directory in paths.directories))

        bodies = {
            paths.component_md: docs_md_template(names.pascal, names.docs_kebab),
            paths.example_vue: docs_vue_template(names.pascal, names.docs_kebab),
            paths.api_js: docs_api_template(),
        }
        for path, body in bodies.items():
            result.created[path] = await write_if_missing(path, body)

        await self.update_registries(paths, names, backup, result)

        for warning in result.warnings:
            logger.warning(warning)
        return result

    async def update_registries(
        self,
        paths: DocsPaths,
        names: ComponentNames,
        backup: bool,
        result: DocsResult,
    ) -> None:
        docs = self.config.docs
        jobs = [
            (
                self.sidebar,
                PatchTarget(
                    path=paths.sidebar_config,
                    entry=SidebarEntry(
                        leaf_path=paths.child_path,
                        section_titles=tuple(docs.section_titles),
                        section_title=docs.section_titles[0],
                    ),
                    backup=backup,
                ),
            ),
            (
                self.barrel,
                PatchTarget(
                    path=paths.components_index,
                    entry=BarrelEntry(import_name=names.pascal, import_path=names.folder),
                    backup=backup,
                ),
            ),
            (
                self.reference_list,
                PatchTarget(
                    path=paths.reference_doc,
                    entry=ReferenceEntry(
                        label=names.display,
                        link=paths.child_path,
                        heading=docs.reference_heading,
                    ),
                    backup=backup,
                ),
            ),
        ]
        for patcher, target in jobs:
            patch = await self.run_patcher(patcher, target)
            result.patches.append(patch)
            if patch.warning:
                result.warnings.append(patch.warning)

    async def run_patcher(self, patcher: RegistryPatcher, target: PatchTarget) -> PatchResult:
        """
        Run one patcher, converting any failure into a warning result.

        Args:
            patcher: Patcher to run
            target: Patch target

        Returns:
            PatchResult; success is False when the patch failed
        """
        try:
            if patcher is self.barrel:
                await write_if_missing(Path(target.path), INDEX_SEED)
            patch = await patcher.patch(target)
        except RegistryPatchError as e:
            patch = PatchResult(path=Path(target.path), success=False, warning=f"{patcher.name}: {e.message}")
        except Exception as e:
            logger.debug(f"Unexpected failure patching {target.path}", exc_info=True)
            patch = PatchResult(
                path=Path(target.path),
                success=False,
                warning=f"{patcher.name}: could not update {target.path}: {e}",
            )

        self._record(patcher, patch)
        return patch

    def _record(self, patcher: RegistryPatcher, patch: PatchResult) -> None:
        if not patch.success:
            outcome = PatchOutcome.FAILED
        elif patch.already_satisfied:
            outcome = PatchOutcome.ALREADY_PRESENT
        elif patch.changed:
            outcome = PatchOutcome.APPLIED
        else:
            outcome = PatchOutcome.UNCHANGED

        recorder = self.recorder or get_recorder()
        recorder.record(
            create_event(
                patcher=patcher.name,
                path=str(patch.path),
                outcome=outcome,
                strategy=patch.strategy,
                changed=patch.changed,
                backup=str(patch.backup.path) if patch.backup else None,
                warning=patch.warning,
            )
        )
