"""
Document model shared by all registry patchers.

A registry file is handled as an ordered list of lines. Patchers scan the
lines with dialect strategies, which are pure functions returning an
InsertionPoint (or None when the dialect does not match), and apply the
resulting splice in memory before handing the text to the diff-gated writer.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class BarrelEntry:
    """An import/export pair for the components barrel."""
    import_name: str
    import_path: str

    @property
    def import_line(self) -> str:
        return f"import {self.import_name} from './{self.import_path}';"


@dataclass(frozen=True)
class SidebarEntry:
    """
    A navigation leaf such as '/components/my-button'.

    Attributes:
        leaf_path: Route of the documentation page
        section_titles: Titles that identify an existing components section
        section_title: Title used when a new section has to be created
    """
    leaf_path: str
    section_titles: tuple[str, ...] = ("Components", "Componentes")
    section_title: str = "Components"

    @property
    def quoted(self) -> tuple[str, str]:
        """Both quoting conventions the leaf may appear in."""
        return (f"'{self.leaf_path}'", f'"{self.leaf_path}"')


@dataclass(frozen=True)
class ReferenceEntry:
    """A (label, link) pair for the reference list."""
    label: str
    link: str
    heading: str = "## Índice de Componentes"

    @property
    def bullet(self) -> str:
        return f"- [{self.label}]({self.link})"


@dataclass(frozen=True)
class PatchTarget:
    """
    What a single patch invocation should do.

    Attributes:
        path: Absolute path of the registry file
        entry: Patcher specific payload (BarrelEntry, SidebarEntry, ReferenceEntry)
        backup: Whether a .bak copy is taken before the file is modified
    """
    path: Path
    entry: Any
    backup: bool = False


@dataclass(frozen=True)
class InsertionPoint:
    """
    A splice into a StructuralDocument.

    Attributes:
        index: Line index where the splice starts
        lines: Lines inserted at index
        remove: Number of existing lines replaced, starting at index
        strategy: Name of the dialect strategy that produced the splice
    """
    index: int
    lines: tuple[str, ...]
    remove: int = 0
    strategy: str = ""


@dataclass(frozen=True)
class BackupRecord:
    """Location of a pre-mutation copy."""
    original: Path
    path: Path


# Strategy name reported by the idempotence short-circuit.
ALREADY_PRESENT = "already-present"


@dataclass
class PatchResult:
    """
    Outcome of one registry patch.

    Attributes:
        path: Registry file that was patched
        success: False only when the orchestrator converted a failure to a warning
        changed: True when the file was rewritten
        strategy: Dialect strategy that matched ("already-present" for the idempotence short-circuit)
        warning: Warning text when success is False
        backup: Backup taken before the write, if any
    """
    path: Path
    success: bool = True
    changed: bool = False
    strategy: str = ""
    warning: Optional[str] = None
    backup: Optional[BackupRecord] = None

    @property
    def already_satisfied(self) -> bool:
        return self.success and self.strategy == ALREADY_PRESENT


@dataclass
class StructuralDocument:
    """
    A registry file as a list of lines plus the text it was read from.

    Lines are split on "\\n" only, so joining them back reproduces the original
    text exactly, including any trailing newline or carriage returns.
    """
    lines: list[str]
    original: str = ""
    applied: list[InsertionPoint] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "StructuralDocument":
        return cls(lines=text.split("\n"), original=text)

    def to_text(self) -> str:
        return "\n".join(self.lines)

    @property
    def changed(self) -> bool:
        return self.to_text() != self.original

    def contains(self, needle: str) -> bool:
        """Check whether needle occurs anywhere in the current content."""
        return any(needle in line for line in self.lines)

    def apply(self, point: InsertionPoint) -> None:
        """Splice the insertion point into the document in place."""
        if point.index < 0 or point.index > len(self.lines):
            raise IndexError(f"insertion index {point.index} out of range")
        self.lines[point.index:point.index + point.remove] = list(point.lines)
        self.applied.append(point)


def indent_of(line: str) -> str:
    """Leading whitespace of a line."""
    return line[: len(line) - len(line.lstrip())]


def code_part(line: str) -> str:
    """
    The line without a trailing `//` comment.

    Quotes are tracked so `'http://...'` is not mistaken for a comment. Lines
    inside or opening a block comment count as having no code.
    """
    if line.lstrip().startswith(("/*", "*")):
        return ""
    quote = None
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "'\"`":
            quote = ch
        elif line.startswith("//", i):
            return line[:i]
        i += 1
    return line


def needs_separator(line: str) -> bool:
    """Whether a list member line lacks a trailing comma before the next member."""
    code = code_part(line).strip()
    if not code:
        return False
    return not code.endswith((",", "[", "{"))


def with_separator(line: str) -> str:
    """Add a comma after the code of a line, keeping any trailing comment after it."""
    code = code_part(line)
    stripped = code.rstrip()
    return stripped + "," + line[len(stripped):]


# A dialect strategy inspects a document and returns the splice it would make,
# or None if the document is not written in that dialect.
Strategy = Callable[[StructuralDocument, Any], Optional[InsertionPoint]]
