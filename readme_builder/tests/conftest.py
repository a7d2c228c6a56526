"""Shared pytest fixtures for readme_builder tests."""

import shutil
import subprocess
from pathlib import Path

import pytest

from ..constants import FALLBACK_TREE_TOOL, PREFERRED_TREE_TOOL
from ..tree import TreeCommand, TreeResult, TreeSource

TREE_TOOLS = {PREFERRED_TREE_TOOL, FALLBACK_TREE_TOOL}


class StaticCommand(TreeCommand):
    """Tree command returning canned output instead of running a process."""

    def __init__(self, executable, source, lines=None):
        super().__init__()
        self.executable = executable
        self.source = source
        self.lines = lines
        self.calls = 0

    def arguments(self):
        return []

    def fetch(self, root, scratch_file):
        self.calls += 1
        return None if self.lines is None else list(self.lines)


def fake_tree_tools(monkeypatch, outputs):
    """Pretend some tree tools are installed and print the given output.

    Args:
        monkeypatch: pytest monkeypatch fixture.
        outputs: Dict of executable name to (returncode, stdout text). Tools
            not in the dict are reported as missing from PATH.

    Returns:
        List collecting every command that was run.
    """
    commands = []
    real_which = shutil.which
    real_run = subprocess.run

    def which(name, *args, **kwargs):
        if name in outputs:
            return f"/usr/bin/{name}"
        if name in TREE_TOOLS:
            return None
        return real_which(name, *args, **kwargs)

    def run(command, *args, **kwargs):
        if command[0] not in outputs:
            return real_run(command, *args, **kwargs)
        commands.append(command)
        returncode, text = outputs[command[0]]
        kwargs["stdout"].write(text)
        return subprocess.CompletedProcess(command, returncode)

    monkeypatch.setattr("readme_builder.tree.shutil.which", which)
    monkeypatch.setattr("readme_builder.tree.subprocess.run", run)
    return commands


@pytest.fixture
def preferred_tree():
    """A tree produced by the preferred tool."""
    return TreeResult(lines=("root", " file.txt"), source=TreeSource.PREFERRED)


@pytest.fixture
def template_dir(tmp_path):
    """Create a template directory with a small set of fragments."""
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "readme_10_body.md").write_text("Tree:\n{{FOLDER_TREE}}\nDone.\n")
    (templates / "readme_00_header.md").write_text(
        "# --- header fragment, never rendered\n# {{CLI_NAME}} {{EMOJI}}\n\n> {{TAGLINE}}\n"
    )
    (templates / "readme_99_footer.md").write_text("{{CLI_NAME}} v{{VERSION}}\n")
    (templates / "notes.txt").write_text("not a fragment\n")
    return templates


@pytest.fixture
def cli_binary(tmp_path) -> Path:
    """Create an executable script standing in for the documented CLI."""
    binary = tmp_path / "bin" / "demo"
    binary.parent.mkdir()
    binary.write_text('#!/bin/sh\necho "demo version 1.4.2"\n')
    binary.chmod(0o755)
    return binary
