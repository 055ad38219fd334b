"""
Unit tests for the documentation orchestrator.

Tests verify:
- Documentation files are created once and never overwritten
- All three registries are integrated
- A failing registry turns into a warning without stopping the others
- Telemetry events are recorded per patcher
"""
import pytest

from shuri.core.config import GeneratorConfig
from shuri.core.telemetry import TelemetryRecorder
from shuri.core.writer import DiffGatedWriter, backup_path_for
from shuri.generation.docs import INDEX_SEED, DocumentationOrchestrator, build_docs_paths
from shuri.generation.naming import resolve_names

SIDEBAR = """module.exports = {
  themeConfig: {
    sidebar: [
      {
        title: 'Guide',
        children: ['/guide/intro']
      }
    ]
  }
};
"""

README = """# Components

## Índice de Componentes

- [Alpha](/components/alpha)
"""


@pytest.fixture
def project(tmp_path):
    vuepress = tmp_path / "docs" / ".vuepress"
    vuepress.mkdir(parents=True)
    (vuepress / "config.js").write_text(SIDEBAR, encoding="utf-8")
    (tmp_path / "docs" / "components").mkdir()
    (tmp_path / "docs" / "components" / "README.md").write_text(README, encoding="utf-8")
    return tmp_path


@pytest.fixture
def recorder():
    return TelemetryRecorder(collect_stats=True)


@pytest.fixture
def orchestrator(project, recorder):
    return DocumentationOrchestrator(
        GeneratorConfig(root_dir=project), writer=DiffGatedWriter(), recorder=recorder
    )


class TestBuildDocsPaths:
    """Test path planning."""

    def test_paths_keyed_by_kebab_name(self, tmp_path):
        paths = build_docs_paths(GeneratorConfig(root_dir=tmp_path), resolve_names("UserButton"))

        assert paths.component_md == tmp_path / "docs/components/user-button.md"
        assert paths.example_vue == tmp_path / "docs/examples/user-button/user-button-example.vue"
        assert paths.api_js == tmp_path / "docs/components-api/user-button-api.js"
        assert paths.child_path == "/components/user-button"
        assert paths.registries == [
            tmp_path / "docs/.vuepress/config.js",
            tmp_path / "src/components/index.js",
            tmp_path / "docs/components/README.md",
        ]


class TestGenerate:
    """Test DocumentationOrchestrator.generate."""

    async def test_full_integration(self, project, orchestrator, recorder):
        """Test doc files are written and every registry is updated."""
        result = await orchestrator.generate(resolve_names("UserButton"))

        assert result.warnings == []
        assert result.created_count == 3
        assert all(path.exists() for path in result.paths.doc_files)

        sidebar = (project / "docs/.vuepress/config.js").read_text(encoding="utf-8")
        assert "children: ['/components/user-button']" in sidebar

        index = (project / "src/components/index.js").read_text(encoding="utf-8")
        assert index.startswith("import UserButton from './UserButton';\n")
        assert "// Auto-generated components index" in index
        assert index.endswith("export { UserButton };\n")

        readme = (project / "docs/components/README.md").read_text(encoding="utf-8")
        assert readme.endswith("- [Alpha](/components/alpha)\n- [User button](/components/user-button)\n")

        assert [patch.strategy for patch in result.patches] == [
            "sibling-section",
            "appended-export",
            "sorted-list",
        ]
        assert recorder.get_stats().total_patches == 3
        assert recorder.get_stats().outcomes_by_type == {"applied": 3}

    async def test_existing_doc_files_kept(self, project, orchestrator):
        """Test a hand edited doc page is never overwritten."""
        page = project / "docs/components/user-button.md"
        page.write_text("# Hand written\n", encoding="utf-8")

        result = await orchestrator.generate(resolve_names("UserButton"))

        assert page.read_text(encoding="utf-8") == "# Hand written\n"
        assert result.created[page] is False
        assert result.created_count == 2

    async def test_rerun_is_idempotent(self, project, orchestrator, recorder):
        """Test a second run changes nothing and takes no backups."""
        names = resolve_names("UserButton")
        await orchestrator.generate(names)
        snapshot = {p: p.read_text(encoding="utf-8") for p in orchestrator.plan(names).registries}

        result = await orchestrator.generate(names, backup=True)

        assert all(patch.already_satisfied for patch in result.patches)
        assert {p: p.read_text(encoding="utf-8") for p in snapshot} == snapshot
        assert not any(backup_path_for(p).exists() for p in snapshot)

    async def test_backups_when_requested(self, project, orchestrator):
        result = await orchestrator.generate(resolve_names("UserButton"), backup=True)

        sidebar_backup = backup_path_for(project / "docs/.vuepress/config.js")
        assert sidebar_backup.read_text(encoding="utf-8") == SIDEBAR
        assert all(patch.backup is not None for patch in result.patches)


class TestFailureIsolation:
    """Test that one registry failure never blocks the others."""

    async def test_broken_sidebar(self, project, orchestrator, recorder):
        """Test an unrecognised sidebar is reported and the other registries still update."""
        config = project / "docs/.vuepress/config.js"
        config.write_text("const x = 1;\n", encoding="utf-8")

        result = await orchestrator.generate(resolve_names("UserButton"))

        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("sidebar: could not find a safe insertion point")
        assert config.read_text(encoding="utf-8") == "const x = 1;\n"
        assert [patch.success for patch in result.patches] == [False, True, True]
        assert "UserButton" in (project / "src/components/index.js").read_text(encoding="utf-8")
        assert "[User button]" in (project / "docs/components/README.md").read_text(encoding="utf-8")
        assert recorder.get_stats().failures == 1

    async def test_missing_readme_and_sidebar(self, project, orchestrator):
        (project / "docs/components/README.md").unlink()
        (project / "docs/.vuepress/config.js").unlink()

        result = await orchestrator.generate(resolve_names("UserButton"))

        assert result.warnings == [
            f"sidebar: sidebar configuration not found at {project / 'docs/.vuepress/config.js'}",
            f"reference-list: components README not found at {project / 'docs/components/README.md'}",
        ]
        assert (project / "src/components/index.js").exists()

    async def test_missing_heading(self, project, orchestrator):
        (project / "docs/components/README.md").write_text("# Components\n", encoding="utf-8")

        result = await orchestrator.generate(resolve_names("UserButton"))

        assert result.warnings == [
            f"reference-list: section '## Índice de Componentes' not found in "
            f"{project / 'docs/components/README.md'}"
        ]


class TestIndexSeed:
    """Test the barrel seed."""

    async def test_existing_index_not_reseeded(self, project, orchestrator):
        index = project / "src/components/index.js"
        index.parent.mkdir(parents=True)
        index.write_text("import Alpha from './Alpha';\nexport { Alpha };\n", encoding="utf-8")

        await orchestrator.generate(resolve_names("UserButton"))

        content = index.read_text(encoding="utf-8")
        assert INDEX_SEED.strip() not in content
        assert "export { Alpha, UserButton };" in content
