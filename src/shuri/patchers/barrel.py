"""
Components barrel patcher.

Keeps src/components/index.js in sync with the generated components: one
import line and one entry in the consolidated export list per component.

Recognised export dialects, tried in order:
- single line:  export { Alpha, Beta };
- multi line:   export {
                  Alpha,
                };
- none:         a new `export { Name };` statement is appended
"""
import logging
import re
from pathlib import Path
from typing import Optional

from shuri.core.document import (
    BarrelEntry,
    InsertionPoint,
    StructuralDocument,
    code_part,
    indent_of,
    needs_separator,
    with_separator,
)
from shuri.core.errors import UnrecognizedStructure
from shuri.core.patcher import RegistryPatcher, first_match

logger = logging.getLogger(__name__)

_SINGLE_LINE_EXPORT = re.compile(r"^(\s*export\s*\{)(\s*)(.*?)(\s*)(\}\s*;?\s*)$")
_REEXPORT = re.compile(r"\}\s*from\s")


def _is_import(line: str) -> bool:
    return line.strip().startswith("import ") and "from" in line


def _is_aggregation_start(line: str) -> bool:
    stripped = line.strip()
    # `export { A } from './a'` re-exports a module, it is not the aggregation list
    return stripped.startswith("export {") and not _REEXPORT.search(stripped)


def _names_in(text: str) -> set[str]:
    return set(re.findall(r"[A-Za-z_$][\w$]*", text))


def import_insertion(document: StructuralDocument, entry: BarrelEntry) -> InsertionPoint:
    """New import goes right after the last import declaration, or at the top."""
    index = 0
    for i, line in enumerate(document.lines):
        if _is_import(line):
            index = i + 1
    strategy = "after-last-import" if index else "top-of-file"
    return InsertionPoint(index=index, lines=(entry.import_line,), strategy=strategy)


def single_line_export(document: StructuralDocument, entry: BarrelEntry) -> Optional[InsertionPoint]:
    for i, line in enumerate(document.lines):
        if not _is_aggregation_start(line) or "}" not in line:
            continue
        match = _SINGLE_LINE_EXPORT.match(line.rstrip("\r"))
        if match is None:
            continue
        head, pad_left, body, pad_right, tail = match.groups()
        names = [name.strip() for name in body.split(",") if name.strip()]
        if entry.import_name in names:
            return InsertionPoint(index=i, lines=(line,), remove=1, strategy="single-line-export")
        separator = ", " if (", " in body or "," not in body) else ","
        names.append(entry.import_name)
        rewritten = f"{head}{pad_left}{separator.join(names)}{pad_right}{tail}"
        if line.endswith("\r"):
            rewritten += "\r"
        return InsertionPoint(index=i, lines=(rewritten,), remove=1, strategy="single-line-export")
    return None


def multi_line_export(document: StructuralDocument, entry: BarrelEntry) -> Optional[InsertionPoint]:
    lines = document.lines
    for i, line in enumerate(lines):
        if not _is_aggregation_start(line) or "}" in line:
            continue
        close = next((j for j in range(i + 1, len(lines)) if "}" in lines[j]), None)
        if close is None:
            continue

        span = "\n".join(lines[i:close + 1])
        if entry.import_name in _names_in(span.split("{", 1)[1]):
            return InsertionPoint(index=close, lines=(), strategy="multi-line-export")

        members = [k for k in range(i + 1, close) if code_part(lines[k]).strip()]
        indent = indent_of(lines[members[-1]]) if members else indent_of(lines[close]) + "  "
        new_line = f"{indent}{entry.import_name},"

        if members and needs_separator(lines[members[-1]]):
            # The previous last member needs a separator before the new one
            last = members[-1]
            replaced = [with_separator(lines[last])] + lines[last + 1:close] + [new_line]
            return InsertionPoint(
                index=last,
                lines=tuple(replaced),
                remove=close - last,
                strategy="multi-line-export",
            )
        return InsertionPoint(index=close, lines=(new_line,), strategy="multi-line-export")
    return None


def appended_export(document: StructuralDocument, entry: BarrelEntry) -> InsertionPoint:
    lines = document.lines
    index = len(lines)
    if lines and lines[-1] == "":
        # keep the trailing newline at the very end
        index -= 1
    block = [f"export {{ {entry.import_name} }};"]
    if index > 0 and lines[index - 1].strip():
        block.insert(0, "")
    return InsertionPoint(index=index, lines=tuple(block), strategy="appended-export")


STRATEGIES = (single_line_export, multi_line_export, appended_export)


class BarrelPatcher(RegistryPatcher):
    """Merges an import/export pair into a component barrel file."""

    file_description = "components index"

    @property
    def name(self) -> str:
        return "barrel"

    def is_satisfied(self, document: StructuralDocument, entry: BarrelEntry) -> bool:
        return document.contains(entry.import_line)

    def splice(self, document: StructuralDocument, entry: BarrelEntry, path: Path) -> str:
        document.apply(import_insertion(document, entry))

        point = first_match(STRATEGIES, document, entry)
        if point is None:
            raise UnrecognizedStructure(path, "no export list could be created")
        document.apply(point)
        return point.strategy
