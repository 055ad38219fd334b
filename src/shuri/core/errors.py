"""
Error taxonomy for registry patching.

Every error raised by a registry patcher derives from RegistryPatchError so the
documentation orchestrator can downgrade it to a warning without swallowing
unrelated programming errors silently.
"""
from pathlib import Path


class RegistryPatchError(Exception):
    """
    Base class for failures that prevent a registry file from being patched.

    Attributes:
        path: The registry file that could not be patched
        message: Human readable description
    """

    def __init__(self, path: str | Path, message: str):
        super().__init__(message)
        self.path = Path(path)
        self.message = message


class MissingTargetFile(RegistryPatchError):
    """The registry file does not exist where it was expected."""

    def __init__(self, path: str | Path, what: str = "registry file"):
        super().__init__(path, f"{what} not found at {path}")


class UnrecognizedStructure(RegistryPatchError):
    """None of a patcher's dialects matched the document."""

    def __init__(self, path: str | Path, detail: str = ""):
        message = f"could not find a safe insertion point in {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(path, message)


class SectionNotFound(RegistryPatchError):
    """A required heading is absent from the reference document."""

    def __init__(self, path: str | Path, heading: str):
        super().__init__(path, f"section '{heading}' not found in {path}")
        self.heading = heading
