"""
RegistryPatcher interface.

This module defines the common read, check, splice and commit pipeline shared
by every registry patcher. Subclasses only describe how to recognise an
already integrated entry and how to splice a new one into the document.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from .document import (
    ALREADY_PRESENT,
    InsertionPoint,
    PatchResult,
    PatchTarget,
    Strategy,
    StructuralDocument,
)
from .errors import MissingTargetFile
from .writer import DiffGatedWriter, read_text

logger = logging.getLogger(__name__)


def first_match(
    strategies: tuple[Strategy, ...],
    document: StructuralDocument,
    entry: Any,
) -> Optional[InsertionPoint]:
    """
    Try dialect strategies in priority order.

    Args:
        strategies: Strategies to try, highest priority first
        document: Document to scan
        entry: Entry being inserted

    Returns:
        The first InsertionPoint produced, or None if no strategy matched
    """
    for strategy in strategies:
        point = strategy(document, entry)
        if point is not None:
            logger.debug(f"Strategy {point.strategy or strategy.__name__} matched")
            return point
    return None


class RegistryPatcher(ABC):
    """
    Abstract base class for all registry patchers.

    A patch reads the target once, short-circuits when the entry is already
    present, applies the splice in memory and commits the result through the
    diff-gated writer, so the file is written at most once per invocation.
    """

    #: Used in MissingTargetFile messages
    file_description = "registry file"

    def __init__(self, writer: Optional[DiffGatedWriter] = None):
        self.writer = writer or DiffGatedWriter()

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique identifier for this patcher.

        Returns:
            The patcher name (e.g., "barrel", "sidebar")
        """
        pass

    @abstractmethod
    def is_satisfied(self, document: StructuralDocument, entry: Any) -> bool:
        """
        Idempotence check run before any strategy.

        Args:
            document: Document as read from disk
            entry: Entry being inserted

        Returns:
            True if the document already contains the entry
        """
        pass

    @abstractmethod
    def splice(self, document: StructuralDocument, entry: Any, path: Path) -> str:
        """
        Apply the entry to the document in memory.

        Args:
            document: Document to mutate
            entry: Entry being inserted
            path: Target path, used in error messages

        Returns:
            Name of the strategy that was applied

        Raises:
            RegistryPatchError: If no recognised dialect matched
        """
        pass

    async def load(self, path: Path) -> StructuralDocument:
        if not path.is_file():
            raise MissingTargetFile(path, self.file_description)
        return StructuralDocument.from_text(await read_text(path))

    async def patch(self, target: PatchTarget) -> PatchResult:
        """
        Run the full patch pipeline for one target.

        Args:
            target: File, entry and backup flag

        Returns:
            PatchResult describing the outcome

        Raises:
            RegistryPatchError: On missing files or unrecognised structure
        """
        path = Path(target.path)
        document = await self.load(path)

        if self.is_satisfied(document, target.entry):
            logger.debug(f"[{self.name}] entry already present in {path}")
            return PatchResult(path=path, strategy=ALREADY_PRESENT)

        strategy = self.splice(document, target.entry, path)
        outcome = await self.writer.commit(
            path, document.original, document.to_text(), backup=target.backup
        )
        return PatchResult(
            path=path,
            changed=outcome.changed,
            strategy=strategy,
            backup=outcome.backup,
        )
