"""Convenience functions for wiring the processor and running it over a board."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from taskmanager.adapters.memory import (
    InMemoryCommunicationService,
    InMemoryProjectBacklogService,
    InMemorySprintBacklogService,
    InMemoryStoryService,
    Notification,
)
from taskmanager.board import Board
from taskmanager.events import DomainEvent, InMemoryEventsRegistry
from taskmanager.execution.config import RunConfig
from taskmanager.processor import ToDoItemProcessor, UnsupportedToDoItemType

logger = logging.getLogger(__name__)


@dataclass
class InMemoryServices:
    story_service: InMemoryStoryService = field(default_factory=InMemoryStoryService)
    events_registry: InMemoryEventsRegistry = field(default_factory=InMemoryEventsRegistry)
    project_backlog_service: InMemoryProjectBacklogService = field(
        default_factory=InMemoryProjectBacklogService
    )
    communication_service: InMemoryCommunicationService = field(
        default_factory=InMemoryCommunicationService
    )
    sprint_backlog_service: InMemorySprintBacklogService = field(
        default_factory=InMemorySprintBacklogService
    )


@dataclass
class ProcessResult:
    processed: list[int] = field(default_factory=list)
    unsupported: list[int] = field(default_factory=list)
    events: list[DomainEvent] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unsupported


def create_in_memory_services(board: Board | None = None) -> InMemoryServices:
    """Create in-memory collaborators, registering the board's stories."""
    services = InMemoryServices()
    if board is not None:
        for story in board.stories:
            services.story_service.register(story)
    return services


def build_processor(services: InMemoryServices) -> ToDoItemProcessor:
    return ToDoItemProcessor(
        story_service=services.story_service,
        events_registry=services.events_registry,
        project_backlog_service=services.project_backlog_service,
        communication_service=services.communication_service,
        sprint_backlog_service=services.sprint_backlog_service,
    )


def process_board(
    board: Board,
    item_ids: list[int] | None = None,
    config: RunConfig | None = None,
    services: InMemoryServices | None = None,
) -> ProcessResult:
    """Run the processor over items of a board.

    Items are processed in the given order, or by ascending id when item_ids
    is None. Unknown ids raise KeyError before anything is processed. With
    config.keep_going, unsupported items are recorded and skipped; otherwise
    UnsupportedToDoItemType propagates.
    """
    config = config or RunConfig()
    services = services or create_in_memory_services(board)
    processor = build_processor(services)

    if item_ids is None:
        items = [board.items[i] for i in sorted(board.items)]
    else:
        items = [board.get_item(i) for i in item_ids]

    events_before = len(services.events_registry.published)
    notifications_before = len(services.communication_service.notifications)

    result = ProcessResult()
    for item in items:
        try:
            processor.process_for(item)
        except UnsupportedToDoItemType:
            if not config.keep_going:
                raise
            logger.warning("Skipping unsupported %s %s", item.kind.value, item.id)
            result.unsupported.append(item.id)
            continue
        result.processed.append(item.id)

    result.events = services.events_registry.published[events_before:]
    result.notifications = services.communication_service.notifications[notifications_before:]
    return result
