"""Kanban board state built from the board directory."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..model import Project, Sprint, Story, ToDoItem, ToDoItemStatus


class BoardFormatError(ValueError):
    """Raised when the board directory does not describe a consistent set of items."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass
class Board:
    projects: dict[int, Project] = field(default_factory=dict)
    sprints: dict[int, Sprint] = field(default_factory=dict)
    items: dict[int, ToDoItem] = field(default_factory=dict)

    def get_item(self, item_id: int) -> ToDoItem:
        if item_id not in self.items:
            raise KeyError(f"Item not found: {item_id}")
        return self.items[item_id]

    def items_in(self, status: ToDoItemStatus) -> list[ToDoItem]:
        return sorted(
            (i for i in self.items.values() if i.status is status), key=lambda i: i.id
        )

    @property
    def stories(self) -> list[Story]:
        return [i for i in self.items.values() if isinstance(i, Story)]
