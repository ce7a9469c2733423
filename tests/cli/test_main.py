"""Unit tests for the CLI main module."""

import io
import sys
from unittest.mock import patch

import pytest

from keepdir.cli.main import format_counts, main

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell required for hooks")


@pytest.fixture(autouse=True)
def no_signal_setup():
    """Leave the test runner's signal handlers alone."""
    with patch("keepdir.cli.main.setup_signal_handling"):
        yield


def run_main(monkeypatch, *argv, stdin=""):
    monkeypatch.setattr(sys, "argv", ["keepdir", *argv])
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    main()


def test_format_counts():
    assert format_counts({"directories": 5, "pruned": 2, "created": 3, "deleted": 1}) == (
        "Directories: 5\nPruned: 2\nCreated: 3\nDeleted: 1"
    )


def test_default_run(sample_tree, keep_paths, monkeypatch, capfd):
    monkeypatch.chdir(sample_tree)
    run_main(monkeypatch)
    assert capfd.readouterr().out == "".join(f"create {path}\n" for path in keep_paths)
    assert all(path.exists() for path in keep_paths)


def test_hooks_and_replace(sample_tree, keep_paths, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "--replace=%", "--create-hook=echo %%+%")
    assert capfd.readouterr().out == "".join(f"create {path}\n{path}%+%\n" for path in keep_paths)


def test_hook_output_not_suppressed_by_quiet(sample_tree, keep_paths, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "-q", "--create-hook=echo +")
    assert capfd.readouterr().out == "".join(f"+ {path}\n" for path in keep_paths)


def test_interactive_end_of_input(sample_tree, keep_paths, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "--interactive", stdin="")
    assert capfd.readouterr().out == f"create {keep_paths[0]}? "
    assert not keep_paths[0].exists()


def test_interactive_yes(sample_tree, keep_paths, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "--interactive", stdin="y\nY\ny\n")
    assert all(path.exists() for path in keep_paths)


def test_summary_to_stderr(sample_tree, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "-q", "-s", "stderr")
    captured = capfd.readouterr()
    assert captured.out == ""
    assert captured.err == "Directories: 5\nPruned: 2\nCreated: 3\nDeleted: 0\n"


def test_summary_after_end_of_input_starts_new_line(sample_tree, monkeypatch, capfd):
    run_main(monkeypatch, str(sample_tree), "-i", "-s", "stdout")
    out = capfd.readouterr().out
    assert out.endswith("? \nDirectories: 3\nPruned: 2\nCreated: 0\nDeleted: 0\n")


def test_missing_directory(tmp_path, monkeypatch, capfd):
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, str(tmp_path / "missing"))
    assert excinfo.value.code == 1
    assert "Error:" in capfd.readouterr().err


def test_conflicting_replace_touches_nothing(sample_tree, monkeypatch, capfd):
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, str(sample_tree), "--replace=%", "--replace=+")
    assert excinfo.value.code == 2
    assert list(sample_tree.rglob(".keep")) == []


def test_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_main(monkeypatch, "--help")
    assert excinfo.value.code == 0


def test_filesystem_error_with_fail(sample_tree, monkeypatch, capfd):
    with patch("keepdir.keepdir.Keepdir.run", side_effect=PermissionError("denied")):
        with pytest.raises(SystemExit) as excinfo:
            run_main(monkeypatch, str(sample_tree), "-P", "fail")
    assert excinfo.value.code == 126
    assert "Error: denied" in capfd.readouterr().err


def test_broken_pipe_is_quiet(sample_tree, monkeypatch, capfd):
    with patch("keepdir.keepdir.Keepdir.run", side_effect=BrokenPipeError()):
        run_main(monkeypatch, str(sample_tree))
    assert capfd.readouterr().err == ""
