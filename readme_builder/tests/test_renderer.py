"""Tests for renderer.py module."""

from ..constants import CODE_FENCE, FALLBACK_BANNER, TREE_UNAVAILABLE_TEXT, UNAVAILABLE_BANNER
from ..renderer import RenderedDocument, TemplateFragment, TemplateRenderer, render
from ..tree import TreeResult, TreeSource

FALLBACK_TREE = TreeResult(lines=(".", "└── [ 120]  main.py"), source=TreeSource.FALLBACK)
UNAVAILABLE_TREE = TreeResult(lines=(TREE_UNAVAILABLE_TEXT,), source=TreeSource.UNAVAILABLE)


def fragment(name, text):
    return TemplateFragment(name=name, lines=tuple(text.splitlines()))


class TestRender:
    """Tests for rendering whole documents."""

    def test_end_to_end_example(self, preferred_tree):
        """Test the reference example: substitution plus a preferred tree block."""
        fragments = [
            fragment("readme_a", "Hello {{CLI_NAME}}"),
            fragment("readme_b", "Tree:\n{{FOLDER_TREE}}\nDone."),
        ]

        document = render(fragments, {"CLI_NAME": "demo"}, preferred_tree)

        assert document.text == "Hello demo\nTree:\n```\nroot\n file.txt\n```\nDone.\n"

    def test_fragment_order_kept(self, preferred_tree):
        """Test that fragments are concatenated in the order given."""
        fragments = [fragment("readme_2", "second"), fragment("readme_1", "first")]
        assert render(fragments, {}, preferred_tree).lines == ["second", "first"]

    def test_deterministic(self, preferred_tree):
        """Test that rendering twice gives identical output."""
        fragments = [fragment("readme_a", "# {{CLI_NAME}}\n\n{{FOLDER_TREE}}"), fragment("readme_b", "{{QUOTE}}")]
        mapping = {"CLI_NAME": "demo", "QUOTE": "Less is more"}

        first = render(fragments, mapping, preferred_tree).text
        second = render(fragments, mapping, preferred_tree).text

        assert first == second

    def test_no_whitespace_collapsing(self, preferred_tree):
        """Test that blank lines and indentation are preserved across fragments."""
        fragments = [fragment("readme_a", "a\n\n"), fragment("readme_b", "\n  b  ")]
        assert render(fragments, {}, preferred_tree).lines == ["a", "", "", "  b  "]

    def test_no_deduplication(self, preferred_tree):
        """Test that repeated lines are all emitted."""
        fragments = [fragment("readme_a", "same\nsame"), fragment("readme_b", "same")]
        assert render(fragments, {}, preferred_tree).lines == ["same", "same", "same"]

    def test_internal_comments_dropped(self, preferred_tree):
        """Test that internal comment lines never reach the output."""
        fragments = [fragment("readme_a", "# --- editor note\n# Title\n# --- {{FOLDER_TREE}}")]
        assert render(fragments, {}, preferred_tree).lines == ["# Title"]

    def test_unresolved_placeholder_kept(self, preferred_tree):
        """Test that unmapped placeholders are left verbatim."""
        fragments = [fragment("readme_a", "{{CLI_NAME}} by {{QUOTE_AUTHOR}} {{MYSTERY}}")]
        document = render(fragments, {"CLI_NAME": "demo"}, preferred_tree)
        assert document.lines == ["demo by {{QUOTE_AUTHOR}} {{MYSTERY}}"]

    def test_empty_fragments(self, preferred_tree):
        """Test rendering nothing."""
        document = render([], {}, preferred_tree)
        assert document.lines == []
        assert document.text == ""


class TestTreeBlock:
    """Tests for tree block expansion."""

    def test_preferred_has_no_banner(self, preferred_tree):
        """Test that the preferred tier gets a bare fenced block."""
        lines = TemplateRenderer({}, preferred_tree).render_line("{{FOLDER_TREE}}")
        assert lines == [CODE_FENCE, "root", " file.txt", CODE_FENCE]

    def test_fallback_banner(self):
        """Test the two-line banner and blank line before a fallback tree."""
        lines = TemplateRenderer({}, FALLBACK_TREE).render_line("{{FOLDER_TREE}}")
        assert lines == [*FALLBACK_BANNER, "", CODE_FENCE, ".", "└── [ 120]  main.py", CODE_FENCE]
        assert len(FALLBACK_BANNER) == 2

    def test_unavailable_banner(self):
        """Test the one-line banner and placeholder body when no tool ran."""
        lines = TemplateRenderer({}, UNAVAILABLE_TREE).render_line("{{FOLDER_TREE}}")
        assert lines == [*UNAVAILABLE_BANNER, "", CODE_FENCE, TREE_UNAVAILABLE_TEXT, CODE_FENCE]
        assert len(UNAVAILABLE_BANNER) == 1

    def test_marker_mid_line_replaces_whole_line(self, preferred_tree):
        """Test that surrounding text on the marker line is not emitted."""
        lines = TemplateRenderer({"CLI_NAME": "demo"}, preferred_tree).render_line(
            "Layout of {{CLI_NAME}}: {{FOLDER_TREE}} (generated)"
        )
        assert lines == [CODE_FENCE, "root", " file.txt", CODE_FENCE]
        assert not any("demo" in line for line in lines)

    def test_marker_produced_by_substitution(self, preferred_tree):
        """Test that the marker check runs after substitution."""
        renderer = TemplateRenderer({"TAGLINE": "{{FOLDER_TREE}}"}, preferred_tree)
        assert renderer.render_line("{{TAGLINE}}") == [CODE_FENCE, "root", " file.txt", CODE_FENCE]

    def test_tree_key_in_mapping_ignored(self, preferred_tree):
        """Test that a mapping entry cannot substitute the tree marker away."""
        renderer = TemplateRenderer({"FOLDER_TREE": "nope"}, preferred_tree)
        assert renderer.render_line("{{FOLDER_TREE}}") == [CODE_FENCE, "root", " file.txt", CODE_FENCE]

    def test_multiple_markers(self):
        """Test that every marker line gets its own block."""
        fragments = [fragment("readme_a", "{{FOLDER_TREE}}\n---\n{{FOLDER_TREE}}")]
        document = render(fragments, {}, FALLBACK_TREE)
        assert document.lines.count(FALLBACK_BANNER[0]) == 2
        assert document.lines.count(CODE_FENCE) == 4

    def test_fence_outgrows_backticks_in_tree(self):
        """Test that a file name containing ``` cannot close the block early."""
        tree = TreeResult(lines=(".", "├── ```notes.md", "└── a``b.txt"), source=TreeSource.PREFERRED)
        lines = TemplateRenderer({}, tree).render_line("{{FOLDER_TREE}}")
        assert lines == ["````", ".", "├── ```notes.md", "└── a``b.txt", "````"]

    def test_short_backtick_runs_keep_default_fence(self):
        """Test that runs shorter than the default fence leave it unchanged."""
        tree = TreeResult(lines=(".", "└── a``b.txt"), source=TreeSource.PREFERRED)
        lines = TemplateRenderer({}, tree).render_line("{{FOLDER_TREE}}")
        assert lines[0] == CODE_FENCE
        assert lines[-1] == CODE_FENCE

    def test_fallback_document(self):
        """Test banner placement in a whole document."""
        fragments = [fragment("readme_a", "## Layout\n{{FOLDER_TREE}}\nend")]
        document = render(fragments, {}, FALLBACK_TREE)
        assert document.lines == [
            "## Layout",
            FALLBACK_BANNER[0],
            FALLBACK_BANNER[1],
            "",
            CODE_FENCE,
            ".",
            "└── [ 120]  main.py",
            CODE_FENCE,
            "end",
        ]


class TestTemplateFragment:
    """Tests for TemplateFragment and RenderedDocument."""

    def test_from_file(self, tmp_path):
        """Test reading a fragment from disk."""
        path = tmp_path / "readme_00_header.md"
        path.write_text("# Title\n\nBody\n", encoding="utf-8")

        loaded = TemplateFragment.from_file(path)

        assert loaded.name == "readme_00_header.md"
        assert loaded.lines == ("# Title", "", "Body")

    def test_from_file_without_trailing_newline(self, tmp_path):
        """Test that a missing final newline does not change the lines."""
        path = tmp_path / "readme_a"
        path.write_text("one\ntwo", encoding="utf-8")
        assert TemplateFragment.from_file(path).lines == ("one", "two")

    def test_document_write_to(self, tmp_path):
        """Test writing a document, creating parent directories."""
        target = tmp_path / "docs" / "README.md"
        RenderedDocument(lines=["a", "b"]).write_to(target)
        assert target.read_text(encoding="utf-8") == "a\nb\n"
