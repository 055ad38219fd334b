"""
Sidebar configuration patcher.

Adds a documentation page to the sidebar of a VuePress style config.js whose
shape is not known in advance. Three strategies are tried, least invasive
first, and the first one that finds a safe insertion point wins:

- existing-section: append the leaf to the children list of a section whose
  title is one of the known component section titles
- sibling-section:  add a new components section at the end of the top level
  sidebar list
- scaffold:         add a whole themeConfig/sidebar block right after the
  opening brace of the exported config object

Matching is purely textual. Bracket counting is not aware of strings or
comments; trailing `//` comments are only respected when a comma is added
to the previous list member.
"""
import logging
import re
from pathlib import Path
from typing import Optional

from shuri.core.document import (
    InsertionPoint,
    SidebarEntry,
    StructuralDocument,
    code_part,
    indent_of,
    needs_separator,
    with_separator,
)
from shuri.core.errors import UnrecognizedStructure
from shuri.core.patcher import RegistryPatcher, first_match

logger = logging.getLogger(__name__)

# How many lines above a `children:` marker may hold the section title
TITLE_LOOKBACK = 5

# `sidebar:` key, not `sidebarDepth:` and friends
_SIDEBAR_KEY = re.compile(r"\bsidebar\s*:")


def _is_section_title(line: str, titles: tuple[str, ...]) -> bool:
    return "title:" in line and any(title in line for title in titles)


def _matching_close(lines: list[str], start: int, column: int, opener: str, closer: str) -> Optional[int]:
    """Index of the line where the bracket opened at lines[start][column:] is balanced."""
    depth = 0
    for j in range(start, len(lines)):
        text = lines[j][column:] if j == start else lines[j]
        depth += text.count(opener) - text.count(closer)
        if depth <= 0:
            return j
    return None


def _insert_before_close(
    lines: list[str],
    open_index: int,
    close: int,
    block: list[str],
    strategy: str,
) -> InsertionPoint:
    """Insert block before lines[close], fixing the separator of the previous member."""
    members = [k for k in range(open_index + 1, close) if code_part(lines[k]).strip()]
    if members and needs_separator(lines[members[-1]]):
        last = members[-1]
        replaced = [with_separator(lines[last])] + lines[last + 1:close] + block
        return InsertionPoint(index=last, lines=tuple(replaced), remove=close - last, strategy=strategy)
    return InsertionPoint(index=close, lines=tuple(block), strategy=strategy)


def _inline_children(line: str, entry: SidebarEntry) -> Optional[str]:
    """Rewrite `children: [...]` written on a single line, or None if it spans lines."""
    open_at = line.find("[", line.index("children:"))
    if open_at == -1:
        return None
    close_at = line.find("]", open_at)
    if close_at == -1:
        return None
    inner = line[open_at + 1:close_at]
    leaf = f"'{entry.leaf_path}'"
    if not inner.strip():
        merged = leaf
    else:
        body = inner.rstrip()
        merged = f"{body} {leaf}" if body.endswith(",") else f"{body}, {leaf}"
    return line[:open_at + 1] + merged + line[close_at:]


def existing_section(document: StructuralDocument, entry: SidebarEntry) -> Optional[InsertionPoint]:
    lines = document.lines
    for i, line in enumerate(lines):
        if "children:" not in line:
            continue
        window = lines[max(0, i - TITLE_LOOKBACK):i + 1]
        if not any(_is_section_title(candidate, entry.section_titles) for candidate in window):
            continue

        inline = _inline_children(line, entry)
        if inline is not None:
            return InsertionPoint(index=i, lines=(inline,), remove=1, strategy="existing-section")

        close = next(
            (j for j in range(i + 1, len(lines)) if "]" in lines[j] and "[" not in lines[j]),
            None,
        )
        if close is None:
            continue
        members = [k for k in range(i + 1, close) if code_part(lines[k]).strip()]
        indent = indent_of(lines[members[-1]]) if members else indent_of(lines[close]) + "  "
        return _insert_before_close(
            lines, i, close, [f"{indent}'{entry.leaf_path}',"], "existing-section"
        )
    return None


def _section_block(indent: str, entry: SidebarEntry) -> list[str]:
    return [
        f"{indent}{{",
        f"{indent}  title: '{entry.section_title}',",
        f"{indent}  children: ['{entry.leaf_path}']",
        f"{indent}}},",
    ]


def sibling_section(document: StructuralDocument, entry: SidebarEntry) -> Optional[InsertionPoint]:
    lines = document.lines
    start = next(
        (i for i, line in enumerate(lines) if "sidebar:" in line and "[" in line.split("sidebar:", 1)[1]),
        None,
    )
    if start is None:
        return None

    column = lines[start].index("[", lines[start].index("sidebar:"))
    close = _matching_close(lines, start, column, "[", "]")
    if close is None:
        return None
    if any(_is_section_title(line, entry.section_titles) for line in lines[start:close + 1]):
        # A components section exists but its children list was not recognised
        return None

    if close == start:
        line = lines[start]
        close_at = line.find("]", column)
        if line[column + 1:close_at].strip():
            return None
        indent = indent_of(line)
        block = [line[:column + 1]] + _section_block(indent + "  ", entry) + [indent + line[close_at:].lstrip()]
        return InsertionPoint(index=start, lines=tuple(block), remove=1, strategy="sibling-section")

    previous = next((k for k in range(close - 1, start, -1) if lines[k].strip()), None)
    if previous is not None and lines[previous].strip().startswith("}"):
        indent = indent_of(lines[previous])
    else:
        indent = indent_of(lines[close]) + "  "
    return _insert_before_close(lines, start, close, _section_block(indent, entry), "sibling-section")


def scaffold(document: StructuralDocument, entry: SidebarEntry) -> Optional[InsertionPoint]:
    lines = document.lines
    has_theme_config = document.contains("themeConfig")

    if not has_theme_config:
        for i, line in enumerate(lines):
            if ("module.exports" in line or "export default" in line) and line.rstrip().endswith("{"):
                indent = indent_of(line) + "  "
                block = (
                    [f"{indent}themeConfig: {{", f"{indent}  sidebar: ["]
                    + [row.replace("},", "}") for row in _section_block(indent + "    ", entry)]
                    + [f"{indent}  ]", f"{indent}}},"]
                )
                return InsertionPoint(index=i + 1, lines=tuple(block), strategy="scaffold")
        return None

    if any(_SIDEBAR_KEY.search(line) for line in lines):
        return None
    for i, line in enumerate(lines):
        if "themeConfig" in line and line.rstrip().endswith("{"):
            indent = indent_of(line) + "  "
            block = (
                [f"{indent}sidebar: ["]
                + [row.replace("},", "}") for row in _section_block(indent + "  ", entry)]
                + [f"{indent}],"]
            )
            return InsertionPoint(index=i + 1, lines=tuple(block), strategy="scaffold")
    return None


STRATEGIES = (existing_section, sibling_section, scaffold)


class SidebarPatcher(RegistryPatcher):
    """Merges a navigation leaf into a sidebar configuration."""

    file_description = "sidebar configuration"

    @property
    def name(self) -> str:
        return "sidebar"

    def is_satisfied(self, document: StructuralDocument, entry: SidebarEntry) -> bool:
        return any(document.contains(quoted) for quoted in entry.quoted)

    def splice(self, document: StructuralDocument, entry: SidebarEntry, path: Path) -> str:
        point = first_match(STRATEGIES, document, entry)
        if point is None:
            raise UnrecognizedStructure(path, "no sidebar list or exported config object found")
        document.apply(point)
        return point.strategy
