from .entities import Epic, ProductOwner, Project, Sprint, Story, Task, Team, ToDoItem
from .enums import ItemKind, ToDoItemStatus

__all__ = [
    "ToDoItem",
    "Epic",
    "Story",
    "Task",
    "Project",
    "ProductOwner",
    "Team",
    "Sprint",
    "ItemKind",
    "ToDoItemStatus",
]
