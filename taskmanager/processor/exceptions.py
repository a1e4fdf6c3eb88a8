"""Processor exception types."""

from __future__ import annotations

from ..model import ItemKind, ToDoItemStatus


class UnsupportedToDoItemType(Exception):
    """Raised when no action is defined for a work item's kind and status."""

    def __init__(self, item_id: int, kind: ItemKind, status: ToDoItemStatus) -> None:
        self.item_id = item_id
        self.kind = kind
        self.status = status
        super().__init__(
            f"Unsupported to-do item {item_id}: no action for {kind.value} in status {status.value}"
        )
