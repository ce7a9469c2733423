"""Tests for the action planner."""

from pathlib import Path

import pytest

from keepdir.planner import ActionPlanner, ActionRecord
from keepdir.tree_walker.directory_node import DirectoryNode
from keepdir.types import ActionKind, Classification, Mode


@pytest.mark.parametrize(
    "classification, exists, expected",
    [
        (Classification.EMPTY, False, ActionKind.CREATE),
        (Classification.NON_EMPTY, True, ActionKind.DELETE),
        (Classification.EMPTY, True, None),
        (Classification.NON_EMPTY, False, None),
    ],
)
def test_update_rule(classification, exists, expected):
    assert ActionPlanner(Mode.UPDATE).decide(classification, exists) is expected


@pytest.mark.parametrize(
    "classification, exists, expected",
    [
        (Classification.EMPTY, False, None),
        (Classification.NON_EMPTY, True, ActionKind.DELETE),
        (Classification.EMPTY, True, ActionKind.DELETE),
        (Classification.NON_EMPTY, False, None),
    ],
)
def test_purge_rule(classification, exists, expected):
    assert ActionPlanner(Mode.PURGE).decide(classification, exists) is expected


def test_plan_uses_keepfile_name():
    planner = ActionPlanner(keepfile_name=".gitkeep")
    record = planner.plan(DirectoryNode(Path("a/d"), 2, (), (), False), Classification.EMPTY)
    assert record == ActionRecord(ActionKind.CREATE, Path("a/d/.gitkeep"))


def test_plan_returns_none_when_reconciled():
    node = DirectoryNode(Path("a/d"), 2, (), (), True)
    assert ActionPlanner().plan(node, Classification.EMPTY) is None
