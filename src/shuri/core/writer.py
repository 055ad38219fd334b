"""
Backup manager and diff-gated writer.

All registry writes go through DiffGatedWriter.commit, which writes a file only
when its content actually changed and, when asked to, snapshots the previous
version to <path>.bak before replacing it. Blocking file operations run in the
default executor so patchers can be awaited from the event loop.
"""
import asyncio
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .document import BackupRecord

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def _copy_backup(path: Path) -> Optional[BackupRecord]:
    if not path.is_file():
        return None
    target = backup_path_for(path)
    shutil.copyfile(path, target)
    return BackupRecord(original=path, path=target)


def _atomic_write(path: Path, content: str) -> None:
    # Temp sibling + os.replace so a reader never sees a half written file.
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="", delete=False, dir=str(path.parent), prefix=f".{path.name}."
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
            tmp.flush()
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _read(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


async def read_text(path: Path) -> str:
    """Read a UTF-8 file without newline translation."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _read, Path(path))


async def create_backup(path: str | Path) -> Optional[BackupRecord]:
    """
    Copy path to <path>.bak, overwriting any previous backup.

    Args:
        path: File to snapshot

    Returns:
        BackupRecord for the copy, or None if the file does not exist
    """
    loop = asyncio.get_running_loop()
    record = await loop.run_in_executor(None, _copy_backup, Path(path))
    if record is not None:
        logger.debug(f"Backed up {record.original} -> {record.path}")
    return record


@dataclass
class CommitOutcome:
    """Result of a diff-gated commit."""
    changed: bool
    backup: Optional[BackupRecord] = None


class DiffGatedWriter:
    """
    Writes new content only when it differs from what was read.

    The backup is taken before the write and never when nothing changes, so
    re-running a patch against an already integrated file leaves no trace.
    """

    def __init__(self):
        self.writes = 0

    async def commit(
        self,
        path: str | Path,
        original: str,
        candidate: str,
        backup: bool = False,
    ) -> CommitOutcome:
        """
        Commit candidate to path if it differs from original.

        Args:
            path: File to write
            original: Content the caller read
            candidate: Content the caller wants on disk
            backup: Snapshot the current file to <path>.bak first

        Returns:
            CommitOutcome describing whether a write (and backup) happened
        """
        path = Path(path)
        if candidate == original:
            logger.debug(f"No changes for {path}, skipping write")
            return CommitOutcome(changed=False)

        record = None
        if backup:
            record = await create_backup(path)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _atomic_write, path, candidate)
        self.writes += 1
        logger.info(f"Updated {path}")
        return CommitOutcome(changed=True, backup=record)
