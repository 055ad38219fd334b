"""
Reference list patcher.

Inserts a `- [Label](link)` bullet into the list under a named heading of a
markdown document (docs/components/README.md) and keeps that list sorted by
label, ignoring case and accents.

The whole contiguous bullet run is re-sorted on every insertion, so entries
that were added out of order by hand are moved into place as a side effect.
"""
import logging
import re
import unicodedata
from pathlib import Path
from typing import Optional

from shuri.core.document import InsertionPoint, ReferenceEntry, StructuralDocument
from shuri.core.errors import SectionNotFound
from shuri.core.patcher import RegistryPatcher

logger = logging.getLogger(__name__)

BULLET_PREFIX = "- ["
_LABEL = re.compile(r"^- \[([^\]]+)\]")


def bullet_label(line: str) -> str:
    match = _LABEL.match(line)
    return match.group(1) if match else ""


def sort_key(label: str) -> str:
    """Case and accent insensitive key: 'Ábaco' sorts next to 'abaco'."""
    decomposed = unicodedata.normalize("NFD", label)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return folded.casefold()


def find_heading(document: StructuralDocument, heading: str) -> Optional[int]:
    return next((i for i, line in enumerate(document.lines) if heading in line), None)


def bullet_run(lines: list[str], start: int) -> tuple[int, int]:
    """Return the [begin, end) span of the bullet run following a heading."""
    begin = start
    while begin < len(lines) and lines[begin].strip() == "":
        begin += 1
    end = begin
    while end < len(lines) and lines[end].startswith(BULLET_PREFIX):
        end += 1
    return begin, end


def sorted_insertion(document: StructuralDocument, entry: ReferenceEntry) -> Optional[InsertionPoint]:
    heading = find_heading(document, entry.heading)
    if heading is None:
        return None

    lines = document.lines
    begin, end = bullet_run(lines, heading + 1)

    if begin == end:
        # Empty list: leave one blank line under the heading if there is one
        index = heading + 2 if heading + 1 < len(lines) and not lines[heading + 1].strip() else heading + 1
        block = [entry.bullet]
        if index >= len(lines) or lines[index].strip():
            block.append("")
        return InsertionPoint(index=index, lines=tuple(block), strategy="sorted-list")

    bullets = lines[begin:end] + [entry.bullet]
    bullets.sort(key=lambda line: sort_key(bullet_label(line)))
    return InsertionPoint(index=begin, lines=tuple(bullets), remove=end - begin, strategy="sorted-list")


class ReferenceListPatcher(RegistryPatcher):
    """Merges a (label, link) bullet into an alphabetically sorted markdown list."""

    file_description = "components README"

    @property
    def name(self) -> str:
        return "reference-list"

    def is_satisfied(self, document: StructuralDocument, entry: ReferenceEntry) -> bool:
        return document.contains(f"[{entry.label}]") or document.contains(f"({entry.link})")

    def splice(self, document: StructuralDocument, entry: ReferenceEntry, path: Path) -> str:
        point = sorted_insertion(document, entry)
        if point is None:
            raise SectionNotFound(path, entry.heading)
        document.apply(point)
        return point.strategy
