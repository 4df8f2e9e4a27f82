"""Unit tests for the sandboxed action applier."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ai_command_runner.runner.actions import (
    NOT_IN_SAFE_PATH,
    Action,
    ActionApplier,
    Outcome,
    OutcomeStatus,
    PathPolicy,
)


def _tree(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


def test_create_writes_content_and_parents(applier: ActionApplier, workspace: Path) -> None:
    outcomes = applier.apply(
        [{"type": "create", "path": "ai-workspace/nested/deep/hello.txt", "content": "Hi"}]
    )

    assert [o.status for o in outcomes] == [OutcomeStatus.OK]
    assert (workspace / "ai-workspace/nested/deep/hello.txt").read_text(encoding="utf-8") == "Hi"


def test_update_overwrites_and_missing_content_is_empty(
    applier: ActionApplier, workspace: Path
) -> None:
    target = workspace / "ai-workspace" / "notes.md"
    target.parent.mkdir(parents=True)
    target.write_text("old", encoding="utf-8")

    outcomes = applier.apply(
        [
            {"type": "create", "path": "ai-workspace/notes.md", "content": "new"},
            {"type": "update", "path": "ai-workspace/empty.md"},
        ]
    )

    assert [o.status for o in outcomes] == [OutcomeStatus.OK, OutcomeStatus.OK]
    assert target.read_text(encoding="utf-8") == "new"
    assert (workspace / "ai-workspace" / "empty.md").read_text(encoding="utf-8") == ""


def test_sandbox_is_created_even_for_empty_batch(applier: ActionApplier, workspace: Path) -> None:
    assert applier.apply([]) == []
    assert (workspace / "ai-workspace").is_dir()


@pytest.mark.parametrize(
    "path",
    [
        "src/main.py",
        "ai-workspace/../escape.txt",
        "ai-workspace-evil/x.txt",
        "/etc/passwd",
        "./README.md",
        "",
    ],
)
def test_unsafe_paths_are_skipped_and_untouched(
    applier: ActionApplier, workspace: Path, path: str
) -> None:
    outcomes = applier.apply([{"type": "create", "path": path, "content": "pwned"}])

    assert outcomes[0].status == OutcomeStatus.SKIPPED
    assert outcomes[0].reason == NOT_IN_SAFE_PATH
    assert _tree(workspace) == {"ai-workspace"}


def test_unsafe_delete_does_not_remove_file(applier: ActionApplier, workspace: Path) -> None:
    victim = workspace / "keep.txt"
    victim.write_text("precious", encoding="utf-8")

    outcomes = applier.apply([{"type": "delete", "path": "keep.txt"}])

    assert outcomes[0].status == OutcomeStatus.SKIPPED
    assert victim.read_text(encoding="utf-8") == "precious"


def test_allow_listed_root_file_can_be_written(applier: ActionApplier, workspace: Path) -> None:
    outcomes = applier.apply([{"type": "update", "path": "README.md", "content": "# Title\n"}])

    assert outcomes[0].status == OutcomeStatus.OK
    assert (workspace / "README.md").read_text(encoding="utf-8") == "# Title\n"


def test_delete_existing_and_missing(applier: ActionApplier, workspace: Path) -> None:
    target = workspace / "ai-workspace" / "old.txt"
    target.parent.mkdir(parents=True)
    target.write_text("bye", encoding="utf-8")

    outcomes = applier.apply(
        [
            {"type": "delete", "path": "ai-workspace/old.txt"},
            {"type": "delete", "path": "ai-workspace/never-existed.txt"},
        ]
    )

    assert [o.status for o in outcomes] == [OutcomeStatus.OK, OutcomeStatus.MISSING]
    assert not target.exists()
    assert all(o.error is None for o in outcomes)


def test_skip_and_unknown_types(applier: ActionApplier, workspace: Path) -> None:
    outcomes = applier.apply(
        [
            {"type": "skip", "path": "/etc/shadow", "reason": "refusing to touch system files"},
            {"type": "rename", "path": "ai-workspace/a.txt"},
        ]
    )

    assert outcomes[0].status == OutcomeStatus.SKIPPED
    assert outcomes[0].reason == "refusing to touch system files"
    assert outcomes[1].status == OutcomeStatus.UNKNOWN_ACTION
    assert _tree(workspace) == {"ai-workspace"}


def test_filesystem_error_is_recorded_and_batch_continues(
    applier: ActionApplier, workspace: Path
) -> None:
    blocker = workspace / "ai-workspace" / "blocker"
    blocker.parent.mkdir(parents=True)
    blocker.write_text("a file, not a directory", encoding="utf-8")

    outcomes = applier.apply(
        [
            {"type": "create", "path": "ai-workspace/blocker/child.txt", "content": "x"},
            {"type": "create", "path": "ai-workspace/after.txt", "content": "still runs"},
        ]
    )

    assert [o.status for o in outcomes] == [OutcomeStatus.ERROR, OutcomeStatus.OK]
    assert outcomes[0].error
    assert (workspace / "ai-workspace" / "after.txt").read_text(encoding="utf-8") == "still runs"


def test_null_byte_path_is_recorded_and_batch_continues(
    applier: ActionApplier, workspace: Path
) -> None:
    outcomes = applier.apply(
        [
            {"type": "create", "path": "ai-workspace/a.txt", "content": "a"},
            {"type": "create", "path": "ai-workspace/b\u0000.txt", "content": "b"},
            {"type": "create", "path": "ai-workspace/c.txt", "content": "c"},
        ]
    )

    assert [o.status for o in outcomes] == [
        OutcomeStatus.OK,
        OutcomeStatus.ERROR,
        OutcomeStatus.OK,
    ]
    assert outcomes[1].error
    assert _tree(workspace) == {"ai-workspace", "ai-workspace/a.txt", "ai-workspace/c.txt"}


def test_invalid_items_are_errors_and_order_is_preserved(applier: ActionApplier) -> None:
    items = [
        "not an object",
        {"type": "create", "path": "ai-workspace/a.txt", "content": "a"},
        {"path": "ai-workspace/b.txt"},
        {"type": "delete", "path": "ai-workspace/c.txt"},
    ]

    outcomes = applier.apply(items)

    assert [o.status for o in outcomes] == [
        OutcomeStatus.ERROR,
        OutcomeStatus.OK,
        OutcomeStatus.ERROR,
        OutcomeStatus.MISSING,
    ]
    assert outcomes[0].action == "not an object"
    assert outcomes[2].action == {"path": "ai-workspace/b.txt"}


def test_policy_accepts_paths_inside_sandbox(workspace: Path) -> None:
    policy = PathPolicy(
        root=workspace, sandbox_dir=Path("sandbox"), allowed_root_files=["NOTES.md"]
    )

    assert policy.is_allowed("sandbox/a/b.txt")
    assert policy.is_allowed("sandbox/../sandbox/c.txt")
    assert policy.is_allowed("NOTES.md")
    assert not policy.is_allowed("README.md")
    assert not policy.is_allowed("sandboxed/a.txt")


def test_policy_rejects_symlink_escape(workspace: Path, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (workspace / "ai-workspace").mkdir()
    (workspace / "ai-workspace" / "link").symlink_to(outside, target_is_directory=True)
    policy = PathPolicy(
        root=workspace, sandbox_dir=Path("ai-workspace"), allowed_root_files=[]
    )

    assert not policy.is_allowed("ai-workspace/link/x.txt")


def test_outcome_serializes_action_compactly() -> None:
    action = Action(type="create", path="ai-workspace/a.txt", content="hi")

    assert Outcome(status=OutcomeStatus.OK, action=action).serialized_action() == (
        '{"type":"create","path":"ai-workspace/a.txt","content":"hi"}'
    )
    assert Outcome(status=OutcomeStatus.MODEL_NO_JSON).serialized_action() == "null"

    extra = Action.model_validate({"type": "create", "path": "p", "mode": "0644"})
    assert json.loads(Outcome(status=OutcomeStatus.OK, action=extra).serialized_action()) == {
        "type": "create",
        "path": "p",
        "mode": "0644",
    }
