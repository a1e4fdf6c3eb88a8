"""Filesystem scanner that builds work items from a kanban directory.

The filesystem is read-only input:
- Folder location = status (which kanban column)
- YAML frontmatter = attributes (id, type, title, relations, flags)
- projects/*.md = projects with their product owner and teams
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from ..model import (
    Epic,
    ProductOwner,
    Project,
    Sprint,
    Story,
    Task,
    Team,
    ToDoItem,
    ToDoItemStatus,
)
from .models import Board, BoardFormatError

STATUS_FOLDERS = [
    "0-to-be-defined",
    "1-defined",
    "2-approved",
    "3-in-progress",
    "4-done",
    "5-released",
]

FOLDER_TO_STATUS: dict[str, ToDoItemStatus] = {
    "0-to-be-defined": ToDoItemStatus.TO_BE_DEFINED,
    "1-defined": ToDoItemStatus.DEFINED,
    "2-approved": ToDoItemStatus.APPROVED,
    "3-in-progress": ToDoItemStatus.IN_PROGRESS,
    "4-done": ToDoItemStatus.DONE,
    "5-released": ToDoItemStatus.RELEASED,
}

PROJECTS_FOLDER = "projects"

_ITEM_TYPES = {"item", "epic", "story", "task"}


def parse_frontmatter(filepath: Path) -> dict:
    """Extract YAML frontmatter from a markdown file. A file without frontmatter yields {}."""
    try:
        text = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BoardFormatError(filepath, f"unreadable: {e}") from e

    match = re.match(r"^---\s*\n(.*?)\n---", text, re.DOTALL)
    if not match:
        return {}

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise BoardFormatError(filepath, f"invalid frontmatter: {e}") from e
    if not isinstance(meta, dict):
        raise BoardFormatError(filepath, "frontmatter is not a mapping")
    return meta


def _int_field(meta: dict, key: str, path: Path) -> int | None:
    raw = meta.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BoardFormatError(path, f"'{key}' must be an integer, got {raw!r}") from None


def _bool_field(meta: dict, key: str) -> bool:
    value = meta.get(key)
    if isinstance(value, bool):
        return value
    return str(value or "").lower() in ("true", "yes", "1")


def _list_field(meta: dict, key: str) -> list[str]:
    """Accept both a YAML list and a comma separated string."""
    value = meta.get(key) or []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


def scan_board(kanban_dir: Path) -> Board:
    """Scan the kanban directory and return every project, sprint and item."""
    board = Board()
    _scan_projects(kanban_dir / PROJECTS_FOLDER, board)

    # Relations are resolved once every item is known
    pending: list[tuple[ToDoItem, dict, Path]] = []
    for folder in STATUS_FOLDERS:
        column = kanban_dir / folder
        if not column.is_dir():
            continue
        status = FOLDER_TO_STATUS[folder]
        for path in sorted(column.glob("*.md")):
            meta = parse_frontmatter(path)
            item = _build_item(meta, status, path)
            if item.id in board.items:
                raise BoardFormatError(path, f"duplicate item id {item.id}")
            board.items[item.id] = item
            pending.append((item, meta, path))

    for item, meta, path in pending:
        _link(item, meta, path, board)

    for story in board.stories:
        story.tasks.sort(key=lambda t: t.id)
    return board


def _scan_projects(projects_dir: Path, board: Board) -> None:
    if not projects_dir.is_dir():
        return
    for path in sorted(projects_dir.glob("*.md")):
        meta = parse_frontmatter(path)
        project_id = _int_field(meta, "id", path)
        if project_id is None:
            raise BoardFormatError(path, "project has no 'id'")

        owner = None
        if meta.get("product_owner"):
            first, _, last = str(meta["product_owner"]).partition(" ")
            owner = ProductOwner(
                id=project_id, first_name=first, last_name=last, email=meta.get("owner_email")
            )

        teams = [Team(id=i, name=name) for i, name in enumerate(_list_field(meta, "teams"), start=1)]

        board.projects[project_id] = Project(
            id=project_id,
            name=str(meta.get("name") or path.stem),
            product_owner=owner,
            teams=teams,
        )


def _build_item(meta: dict, status: ToDoItemStatus, path: Path) -> ToDoItem:
    item_id = _int_field(meta, "id", path)
    if item_id is None:
        raise BoardFormatError(path, "item has no 'id'")

    item_type = str(meta.get("type") or "item").lower()
    if item_type not in _ITEM_TYPES:
        raise BoardFormatError(path, f"unknown item type {item_type!r}")

    common = dict(
        id=item_id,
        status=status,
        title=str(meta.get("title") or path.stem),
        description=str(meta.get("description") or ""),
    )
    if item_type == "epic":
        return Epic(**common)
    if item_type == "story":
        return Story(**common, assigned=_bool_field(meta, "assigned"))
    if item_type == "task":
        return Task(**common, subtask=_bool_field(meta, "subtask"))
    return ToDoItem(**common)


def _link(item: ToDoItem, meta: dict, path: Path, board: Board) -> None:
    project_id = _int_field(meta, "project", path)
    if isinstance(item, (Epic, Story)) and project_id is not None:
        if project_id not in board.projects:
            raise BoardFormatError(path, f"unknown project {project_id}")
        item.project = board.projects[project_id]

    if not isinstance(item, Task):
        return

    sprint_id = _int_field(meta, "sprint", path)
    if sprint_id is not None:
        if sprint_id not in board.sprints:
            board.sprints[sprint_id] = Sprint(id=sprint_id, name=f"Sprint {sprint_id}")
        item.current_sprint = board.sprints[sprint_id]

    story_id = _int_field(meta, "story", path)
    if story_id is None:
        if not item.is_subtask:
            raise BoardFormatError(path, f"task {item.id} has no story")
        return

    story = board.items.get(story_id)
    if not isinstance(story, Story):
        raise BoardFormatError(path, f"unknown story {story_id}")
    if item.is_subtask:
        # Subtasks point at a story without joining its task list
        item.story = story
    else:
        story.add_task(item)
