"""Shared test configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskmanager.board import STATUS_FOLDERS


def write_md(path: Path, **meta) -> Path:
    """Write a markdown file whose frontmatter holds meta."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["---"]
    for key, value in meta.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, list):
            value = "[" + ", ".join(value) + "]"
        elif value is None:
            value = "null"
        lines.append(f"{key}: {value}")
    lines.append("---")
    lines.append("")
    lines.append(f"# {meta.get('title', path.stem)}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def empty_kanban(tmp_path):
    kanban = tmp_path / "kanban"
    for folder in STATUS_FOLDERS:
        (kanban / folder).mkdir(parents=True)
    return kanban


@pytest.fixture
def kanban_dir(empty_kanban):
    """A board covering every kind of work item.

    1 epic (defined), 2 story without tasks (defined), 3 unassigned story
    with tasks 4 (approved) and 5 (done), 6 generic item (defined),
    7 subtask (released).
    """
    k = empty_kanban
    write_md(
        k / "projects" / "apollo.md",
        id=1,
        name="Apollo",
        product_owner="Ada Lovelace",
        owner_email="ada@example.com",
        teams=["Core", "Web"],
    )
    write_md(k / "1-defined" / "epic-1.md", id=1, type="epic", title="Payments", project=1)
    write_md(k / "1-defined" / "story-2.md", id=2, type="story", title="Checkout", project=1)
    write_md(k / "1-defined" / "story-3.md", id=3, type="story", title="Refunds", project=1, assigned=False)
    write_md(k / "2-approved" / "task-4.md", id=4, type="task", title="Refund API", story=3, sprint=1)
    write_md(k / "4-done" / "task-5.md", id=5, type="task", title="Refund UI", story=3, sprint=1)
    write_md(k / "1-defined" / "item-6.md", id=6, type="item", title="Loose idea")
    write_md(k / "5-released" / "task-7.md", id=7, type="task", title="Hotfix", subtask=True)
    return k
