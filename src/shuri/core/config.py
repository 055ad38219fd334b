"""
Configuration module for component generation.

This module provides configuration loading and validation for the generator
defaults and for the locations of the documentation registry files. All paths
are relative to an explicit project root; nothing here reads the process
working directory.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = ".shuri.yml"

VALID_STYLE_EXTENSIONS = ["css", "scss", "sass", "less", "styl"]

DEFAULT_SECTION_TITLES = ["Components", "Componentes"]
DEFAULT_REFERENCE_HEADING = "## Índice de Componentes"


def _title_list(value: Any) -> Any:
    # A bare string would otherwise be split into single characters
    return list(value) if isinstance(value, (list, tuple)) else value


@dataclass
class DocsConfig:
    """Locations of the documentation registries, relative to the project root."""

    docs_dir: str = "docs"
    sidebar_config: str = "docs/.vuepress/config.js"
    components_index: str = "src/components/index.js"
    reference_doc: str = "docs/components/README.md"
    section_titles: list[str] = field(default_factory=lambda: list(DEFAULT_SECTION_TITLES))
    reference_heading: str = DEFAULT_REFERENCE_HEADING

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocsConfig":
        """Create DocsConfig from dictionary."""
        defaults = cls()
        return cls(
            docs_dir=data.get("docs_dir", defaults.docs_dir),
            sidebar_config=data.get("sidebar_config", defaults.sidebar_config),
            components_index=data.get("components_index", defaults.components_index),
            reference_doc=data.get("reference_doc", defaults.reference_doc),
            section_titles=_title_list(data.get("section_titles", defaults.section_titles)),
            reference_heading=data.get("reference_heading", defaults.reference_heading),
        )


@dataclass
class GeneratorConfig:
    """Generator defaults for a project."""

    root_dir: Path = field(default_factory=lambda: Path("."))
    out_dir: str = "src/components"
    style_ext: str = "scss"
    test_ext: str = ".unit.js"
    kebab: bool = False
    backup: bool = False
    docs: DocsConfig = field(default_factory=DocsConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_dir: str | Path = ".") -> "GeneratorConfig":
        """Create GeneratorConfig from dictionary."""
        docs_data = data.get("docs", {})
        docs = DocsConfig.from_dict(docs_data) if docs_data else DocsConfig()

        return cls(
            root_dir=Path(root_dir),
            out_dir=data.get("out_dir", "src/components"),
            style_ext=data.get("style_ext", "scss"),
            test_ext=data.get("test_ext", ".unit.js"),
            kebab=bool(data.get("kebab", False)),
            backup=bool(data.get("backup", False)),
            docs=docs,
        )

    def resolve(self, relative: str | Path) -> Path:
        """Resolve a config-relative path against the project root."""
        return self.root_dir / relative

    @property
    def out_path(self) -> Path:
        return self.resolve(self.out_dir)


def load_config(root_dir: str | Path, config_path: str | Path | None = None) -> GeneratorConfig:
    """
    Load generator configuration from a YAML file.

    Args:
        root_dir: Project root all relative paths resolve against
        config_path: Path to config file. If None, uses <root_dir>/.shuri.yml

    Returns:
        GeneratorConfig with project defaults

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If config validation fails
    """
    root_dir = Path(root_dir)
    if config_path is None:
        config_path = root_dir / CONFIG_FILE_NAME
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        # Defaults when the project has no config file
        return GeneratorConfig(root_dir=root_dir)

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return GeneratorConfig(root_dir=root_dir)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config = GeneratorConfig.from_dict(data, root_dir=root_dir)
    validate_config(config)
    return config


def validate_config(config: GeneratorConfig) -> None:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Raises:
        ValueError: If configuration is invalid
    """
    if not is_valid_style_extension(config.style_ext):
        raise ValueError(
            f"style_ext '{config.style_ext}' is not supported "
            f"(valid: {', '.join(VALID_STYLE_EXTENSIONS)})"
        )

    if not config.test_ext:
        raise ValueError("test_ext must not be empty")

    if not config.out_dir:
        raise ValueError("out_dir must not be empty")

    docs = config.docs
    if not isinstance(docs.section_titles, list):
        raise ValueError("docs.section_titles must be a list of titles")
    if not all(isinstance(t, str) for t in docs.section_titles):
        raise ValueError("docs.section_titles must contain only strings")
    if not docs.section_titles or not all(t.strip() for t in docs.section_titles):
        raise ValueError("docs.section_titles must contain non-empty titles")

    if not docs.reference_heading.strip():
        raise ValueError("docs.reference_heading must not be empty")

    for name in ("sidebar_config", "components_index", "reference_doc"):
        if not getattr(docs, name):
            raise ValueError(f"docs.{name} must not be empty")


def is_valid_style_extension(ext: str) -> bool:
    return ext in VALID_STYLE_EXTENSIONS
