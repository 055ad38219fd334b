"""Core types for registry patching."""

from shuri.core.config import (
    DocsConfig,
    GeneratorConfig,
    load_config,
    validate_config,
)
from shuri.core.document import (
    BackupRecord,
    BarrelEntry,
    InsertionPoint,
    PatchResult,
    PatchTarget,
    ReferenceEntry,
    SidebarEntry,
    StructuralDocument,
)
from shuri.core.errors import (
    MissingTargetFile,
    RegistryPatchError,
    SectionNotFound,
    UnrecognizedStructure,
)
from shuri.core.patcher import RegistryPatcher
from shuri.core.writer import DiffGatedWriter, create_backup

__all__ = [
    # config
    "DocsConfig",
    "GeneratorConfig",
    "load_config",
    "validate_config",
    # document
    "BackupRecord",
    "BarrelEntry",
    "InsertionPoint",
    "PatchResult",
    "PatchTarget",
    "ReferenceEntry",
    "SidebarEntry",
    "StructuralDocument",
    # errors
    "MissingTargetFile",
    "RegistryPatchError",
    "SectionNotFound",
    "UnrecognizedStructure",
    # patching
    "RegistryPatcher",
    "DiffGatedWriter",
    "create_backup",
]
