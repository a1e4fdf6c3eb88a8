"""Domain entities for projects and work items.

Entities are mutable aggregates and compare by identity. Work items form a
closed union tagged by ``kind``: a plain ``ToDoItem`` is the generic
fallback, ``Epic``, ``Story`` and ``Task`` are the specialised variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .enums import ItemKind, ToDoItemStatus


@dataclass(eq=False)
class ProductOwner:
    id: int
    first_name: str
    last_name: str = ""
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(eq=False)
class Team:
    id: int
    name: str


@dataclass(eq=False)
class Project:
    id: int
    name: str
    product_owner: ProductOwner | None = None
    teams: list[Team] = field(default_factory=list)


@dataclass(eq=False)
class Sprint:
    id: int
    name: str = ""


@dataclass(eq=False)
class ToDoItem:
    kind: ClassVar[ItemKind] = ItemKind.GENERIC

    id: int
    status: ToDoItemStatus
    title: str = ""
    description: str = ""


@dataclass(eq=False)
class Epic(ToDoItem):
    kind: ClassVar[ItemKind] = ItemKind.EPIC

    project: Project | None = None


@dataclass(eq=False)
class Story(ToDoItem):
    kind: ClassVar[ItemKind] = ItemKind.STORY

    project: Project | None = None
    tasks: list[Task] = field(default_factory=list)
    assigned: bool = False
    approved_task_ids: set[int] = field(default_factory=set)

    def add_task(self, task: Task) -> None:
        """Attach a task to this story, keeping both sides of the link."""
        if task not in self.tasks:
            self.tasks.append(task)
        task.story = self

    @property
    def has_tasks(self) -> bool:
        return bool(self.tasks)


@dataclass(eq=False)
class Task(ToDoItem):
    kind: ClassVar[ItemKind] = ItemKind.TASK

    story: Story | None = field(default=None, repr=False)
    current_sprint: Sprint | None = None
    subtask: bool = False

    @property
    def is_subtask(self) -> bool:
        return self.subtask
