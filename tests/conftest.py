"""Test configuration and fixtures for keepdir."""

from typing import Dict, List, Sequence

import pytest

from keepdir.command_runner import CommandResult, CommandRunner

SAMPLE_DIRECTORIES = ["a/b/c", "a/d", "a/e", "a/.git", "a/b/.git/f"]


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


class FakeCommandRunner(CommandRunner):
    """Command runner that records commands and returns canned output.

    Commands with no canned output echo themselves back, which makes the exact
    command line visible in the output.
    """

    def __init__(self, outputs: Dict[str, Sequence[str]] = None, returncodes: Dict[str, int] = None):
        self.outputs = dict(outputs or {})
        self.returncodes = dict(returncodes or {})
        self.commands: List[str] = []

    def run(self, command):
        self.commands.append(command)
        lines = self.outputs.get(command, [command + "\n"])
        return CommandResult(tuple(lines), self.returncodes.get(command, 0))


@pytest.fixture
def fake_runner():
    return FakeCommandRunner()


@pytest.fixture
def sample_tree(tmp_path):
    """Create the a/b/c, a/d, a/e tree with .git directories, all empty.

    Returns the resolved root, so expected paths match keepdir's reports.
    """
    root = tmp_path.resolve()
    for directory in SAMPLE_DIRECTORIES:
        (root / directory).mkdir(parents=True)
    return root


@pytest.fixture
def keep_paths(sample_tree):
    """Keepfile paths for the three empty directories, in traversal order."""
    return [
        sample_tree / "a" / "b" / "c" / ".keep",
        sample_tree / "a" / "d" / ".keep",
        sample_tree / "a" / "e" / ".keep",
    ]
