"""Work item enumerations."""

from enum import Enum


class ToDoItemStatus(Enum):
    TO_BE_DEFINED = "to_be_defined"
    DEFINED = "defined"
    APPROVED = "approved"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    RELEASED = "released"


class ItemKind(Enum):
    """Variant tag of a work item. The set is closed."""

    GENERIC = "item"
    EPIC = "epic"
    STORY = "story"
    TASK = "task"
