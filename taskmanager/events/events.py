"""Domain events published by the work item processor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DomainEvent:
    """Marker base class for events that go through an EventsRegistry."""


@dataclass(frozen=True)
class ToDoItemReleasedEvent(DomainEvent):
    to_do_item_id: int


@dataclass(frozen=True)
class StoryApprovedEvent(DomainEvent):
    story_id: int


@dataclass(frozen=True)
class TaskApprovedEvent(DomainEvent):
    task_id: int


@dataclass(frozen=True)
class StoryDoneEvent(DomainEvent):
    story_id: int


@dataclass(frozen=True)
class EpicReadyToPrioritize(DomainEvent):
    epic_id: int
