"""Plain file writes for generated artifacts, run off the event loop."""
import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _mkdir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _create(path: Path, content: str) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError:
        return False
    return True


async def ensure_dir(path: Path) -> None:
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, _mkdir, Path(path))


async def write_file(path: Path, content: str) -> None:
    """Create or overwrite path."""
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, _write, Path(path), content)
    logger.debug(f"Wrote {path}")


async def write_if_missing(path: Path, content: str) -> bool:
    """
    Create path with content unless it already exists.

    Returns:
        True if the file was created, False if it already existed
    """
    loop = asyncio.get_running_loop()
    created = await loop.run_in_executor(None, _create, Path(path), content)
    if created:
        logger.debug(f"Created {path}")
    else:
        logger.debug(f"Kept existing {path}")
    return created
