"""Unit tests for the line based document model."""
import pytest

from shuri.core.document import (
    ALREADY_PRESENT,
    BarrelEntry,
    InsertionPoint,
    PatchResult,
    ReferenceEntry,
    SidebarEntry,
    StructuralDocument,
    code_part,
    indent_of,
    needs_separator,
    with_separator,
)


class TestStructuralDocument:
    """Test StructuralDocument."""

    def test_round_trip_preserves_text(self):
        """Test from_text/to_text reproduce the input exactly."""
        text = "a\r\nb\n\nc\n"
        document = StructuralDocument.from_text(text)

        assert document.to_text() == text
        assert document.changed is False

    def test_apply_insert(self):
        """Test a pure insertion."""
        document = StructuralDocument.from_text("a\nc\n")
        document.apply(InsertionPoint(index=1, lines=("b",)))

        assert document.to_text() == "a\nb\nc\n"
        assert document.changed is True
        assert len(document.applied) == 1

    def test_apply_replace(self):
        """Test a splice that replaces existing lines."""
        document = StructuralDocument.from_text("a\nx\ny\nd")
        document.apply(InsertionPoint(index=1, lines=("b", "c"), remove=2))

        assert document.lines == ["a", "b", "c", "d"]

    def test_apply_out_of_range(self):
        """Test an insertion beyond the end is rejected."""
        document = StructuralDocument.from_text("a")

        with pytest.raises(IndexError):
            document.apply(InsertionPoint(index=5, lines=("b",)))

    def test_contains(self):
        document = StructuralDocument.from_text("import A from './A';\n")

        assert document.contains("from './A'")
        assert not document.contains("'./B'")


class TestEntries:
    """Test entry helpers."""

    def test_barrel_import_line(self):
        entry = BarrelEntry(import_name="UserButton", import_path="UserButton")
        assert entry.import_line == "import UserButton from './UserButton';"

    def test_sidebar_quoted_forms(self):
        entry = SidebarEntry(leaf_path="/components/beta")
        assert entry.quoted == ("'/components/beta'", '"/components/beta"')

    def test_reference_bullet(self):
        entry = ReferenceEntry(label="Beta", link="/components/beta")
        assert entry.bullet == "- [Beta](/components/beta)"

    def test_already_satisfied(self):
        assert PatchResult(path=None, strategy=ALREADY_PRESENT).already_satisfied
        assert not PatchResult(path=None, strategy="sorted-list").already_satisfied
        assert not PatchResult(path=None, success=False, strategy=ALREADY_PRESENT).already_satisfied

    def test_indent_of(self):
        assert indent_of("    title: 'x'") == "    "
        assert indent_of("title") == ""


class TestSeparators:
    """Test comment aware separator helpers."""

    def test_code_part_strips_line_comment(self):
        assert code_part("  '/components/alpha' // first") == "  '/components/alpha' "

    def test_code_part_ignores_slashes_in_strings(self):
        """Test a URL inside quotes is not taken for a comment."""
        line = "  link: 'http://example.com', // home"

        assert code_part(line) == "  link: 'http://example.com', "
        assert code_part("  'http://example.com'") == "  'http://example.com'"

    def test_code_part_block_comment_line(self):
        assert code_part("  /* legacy */") == ""
        assert code_part("   * continued") == ""

    def test_needs_separator(self):
        assert needs_separator("  Alpha")
        assert needs_separator("  Alpha // main")
        assert not needs_separator("  Alpha, // main")
        assert not needs_separator("  // just a note")
        assert not needs_separator("  children: [")

    def test_with_separator_keeps_comment(self):
        """Test the comma goes after the code, not after the comment."""
        assert with_separator("  Alpha // main") == "  Alpha, // main"
        assert with_separator("  Alpha") == "  Alpha,"
        assert with_separator("  Alpha\r") == "  Alpha,\r"
