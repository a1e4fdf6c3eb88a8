from .events import (
    DomainEvent,
    EpicReadyToPrioritize,
    StoryApprovedEvent,
    StoryDoneEvent,
    TaskApprovedEvent,
    ToDoItemReleasedEvent,
)
from .registry import EventsRegistry, InMemoryEventsRegistry

__all__ = [
    "DomainEvent",
    "ToDoItemReleasedEvent",
    "StoryApprovedEvent",
    "TaskApprovedEvent",
    "StoryDoneEvent",
    "EpicReadyToPrioritize",
    "EventsRegistry",
    "InMemoryEventsRegistry",
]
