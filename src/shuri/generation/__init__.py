"""Component generation and documentation orchestration."""

from shuri.generation.docs import DocsPaths, DocsResult, DocumentationOrchestrator
from shuri.generation.naming import ComponentNames, kebab_case, pascal_case, resolve_names
from shuri.generation.planner import (
    ComponentFiles,
    GenerationOptions,
    GenerationPlanner,
    GenerationResult,
)

__all__ = [
    # docs
    "DocsPaths",
    "DocsResult",
    "DocumentationOrchestrator",
    # naming
    "ComponentNames",
    "kebab_case",
    "pascal_case",
    "resolve_names",
    # planner
    "ComponentFiles",
    "GenerationOptions",
    "GenerationPlanner",
    "GenerationResult",
]
