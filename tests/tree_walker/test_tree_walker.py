"""Unit tests for the TreeWalker class."""

import os
from pathlib import Path

import pytest

from keepdir.filter_rules.exclude_rules import ExcludeRules
from keepdir.filter_rules.path_filter import PathFilter
from keepdir.filter_rules.prune_rules import PruneRules
from keepdir.tree_walker.permission_action import PermissionAction
from keepdir.tree_walker.tree_walker import TreeWalker


def relative_paths(walker, root):
    return [node.path.relative_to(root).as_posix() for node in walker]


def test_depth_first_lexicographic_order(sample_tree):
    walker = TreeWalker(sample_tree)
    assert relative_paths(walker, sample_tree) == [
        "a",
        "a/.git",
        "a/b",
        "a/b/.git",
        "a/b/.git/f",
        "a/b/c",
        "a/d",
        "a/e",
    ]


def test_siblings_sorted_by_name_not_creation(tmp_path):
    for name in ["zeta", "alpha", "Mid", "beta"]:
        (tmp_path / name).mkdir()
    (tmp_path / "alpha" / "inner").mkdir()
    assert relative_paths(TreeWalker(tmp_path), tmp_path) == ["Mid", "alpha", "alpha/inner", "beta", "zeta"]


def test_start_directory_is_not_yielded(tmp_path):
    assert list(TreeWalker(tmp_path)) == []


def test_prune_skips_subtree(sample_tree):
    walker = TreeWalker(sample_tree, PathFilter(PruneRules([".git"])))
    assert relative_paths(walker, sample_tree) == ["a", "a/b", "a/b/c", "a/d", "a/e"]
    assert walker.pruned_count == 2


def test_exclude_skips_subtree(sample_tree):
    walker = TreeWalker(sample_tree, PathFilter(PruneRules([".git"]), ExcludeRules(["a/b"], base=sample_tree)))
    assert relative_paths(walker, sample_tree) == ["a", "a/d", "a/e"]


def test_relative_start_path(sample_tree, monkeypatch):
    monkeypatch.chdir(sample_tree)
    walker = TreeWalker(".", PathFilter(PruneRules([".git"]), ExcludeRules(["a/b"])))
    assert [str(node.path) for node in walker] == ["a", os.path.join("a", "d"), os.path.join("a", "e")]


def test_node_partitions_entries(tmp_path):
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / "sub").mkdir()
    (tmp_path / "d" / "file.txt").touch()
    (tmp_path / "d" / ".keep").touch()

    node = next(iter(TreeWalker(tmp_path)))
    assert node.path == tmp_path / "d"
    assert node.depth == 1
    assert node.files == ("file.txt",)
    assert node.subdirectories == ("sub",)
    assert node.has_keepfile


def test_pruned_directories_remain_in_listing(sample_tree):
    walker = TreeWalker(sample_tree, PathFilter(PruneRules([".git"])))
    nodes = {node.path.relative_to(sample_tree).as_posix(): node for node in walker}
    assert nodes["a/b"].subdirectories == (".git", "c")


def test_custom_keepfile_name(tmp_path):
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / ".keep").touch()
    (tmp_path / "d" / ".gitkeep").touch()

    node = next(iter(TreeWalker(tmp_path, keepfile_name=".gitkeep")))
    assert node.has_keepfile
    assert node.files == (".keep",)


def test_keepfile_named_directory_is_content(tmp_path):
    (tmp_path / "d" / ".keep").mkdir(parents=True)
    nodes = list(TreeWalker(tmp_path))
    assert not nodes[0].has_keepfile
    assert nodes[0].subdirectories == (".keep",)
    assert [node.name for node in nodes] == ["d", ".keep"]


def test_symlinks_are_not_followed(tmp_path):
    (tmp_path / "real").mkdir()
    try:
        os.symlink(tmp_path / "real", tmp_path / "link")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    nodes = list(TreeWalker(tmp_path))
    assert [node.name for node in nodes] == ["real"]


def test_directories_are_listed_when_visited(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    walker = iter(TreeWalker(tmp_path))
    assert next(walker).name == "a"
    # b is listed only when the walk reaches it
    (tmp_path / "b" / "late").mkdir()
    assert [node.name for node in walker] == ["b", "late"]


def test_missing_start_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(TreeWalker(tmp_path / "missing"))


def test_start_path_is_a_file(tmp_path):
    (tmp_path / "file").touch()
    with pytest.raises(NotADirectoryError):
        list(TreeWalker(tmp_path / "file"))


@pytest.fixture
def unreadable_tree(tmp_path):
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("permission checks don't apply to root")
    (tmp_path / "a" / "inner").mkdir(parents=True)
    (tmp_path / "b").mkdir()
    (tmp_path / "a").chmod(0o000)
    yield tmp_path
    (tmp_path / "a").chmod(0o755)


def test_permission_error_warn(unreadable_tree, capsys):
    walker = TreeWalker(unreadable_tree, permission_action=PermissionAction.WARN)
    assert [node.name for node in walker] == ["b"]
    assert "Warning:" in capsys.readouterr().err


def test_permission_error_ignore(unreadable_tree, capsys):
    walker = TreeWalker(unreadable_tree, permission_action=PermissionAction.IGNORE)
    assert [node.name for node in walker] == ["b"]
    assert capsys.readouterr().err == ""


def test_permission_error_raise(unreadable_tree):
    walker = TreeWalker(unreadable_tree, permission_action=PermissionAction.RAISE)
    with pytest.raises(PermissionError):
        list(walker)


def test_vanished_directory_is_skipped(tmp_path, capsys):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    walker = iter(TreeWalker(tmp_path))
    assert next(walker).name == "a"
    (tmp_path / "b").rmdir()
    assert list(walker) == []
    assert "Warning:" in capsys.readouterr().err


def test_accepts_path_objects_and_strings(tmp_path):
    (tmp_path / "x").mkdir()
    assert [n.name for n in TreeWalker(str(tmp_path))] == [n.name for n in TreeWalker(Path(tmp_path))]
