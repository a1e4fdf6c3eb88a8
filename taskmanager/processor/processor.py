"""Status-driven dispatcher for work items.

Routes a work item to collaborating services and publishes domain events
depending on its kind and lifecycle status. The routing lives in
``DISPATCH_TABLE``; a combination without an entry is unsupported.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..events import (
    EpicReadyToPrioritize,
    EventsRegistry,
    StoryApprovedEvent,
    StoryDoneEvent,
    TaskApprovedEvent,
    ToDoItemReleasedEvent,
)
from ..model import Epic, ItemKind, Story, Task, ToDoItem, ToDoItemStatus
from ..services import (
    CommunicationService,
    ProjectBacklogService,
    SprintBacklogService,
    StoryService,
)
from .exceptions import UnsupportedToDoItemType

logger = logging.getLogger(__name__)


class ToDoItemProcessor:
    """Applies the side effects that follow a work item's status change."""

    def __init__(
        self,
        story_service: StoryService,
        events_registry: EventsRegistry,
        project_backlog_service: ProjectBacklogService,
        communication_service: CommunicationService,
        sprint_backlog_service: SprintBacklogService,
    ) -> None:
        self._story_service = story_service
        self._events_registry = events_registry
        self._project_backlog_service = project_backlog_service
        self._communication_service = communication_service
        self._sprint_backlog_service = sprint_backlog_service

    def process_for(self, item: ToDoItem) -> None:
        """Dispatch item by kind and status.

        Raises UnsupportedToDoItemType before touching any collaborator when
        the combination has no action.
        """
        if item.status is ToDoItemStatus.RELEASED:
            logger.debug("Processing released %s %s", item.kind.value, item.id)
            self._process_released(item)
            return

        handler = DISPATCH_TABLE.get((item.kind, item.status))
        if handler is None:
            logger.warning(
                "No action for %s %s in status %s", item.kind.value, item.id, item.status.value
            )
            raise UnsupportedToDoItemType(item.id, item.kind, item.status)

        logger.debug("Processing %s %s in status %s", item.kind.value, item.id, item.status.value)
        handler(self, item)

    # -- released ---------------------------------------------------------

    def _process_released(self, item: ToDoItem) -> None:
        self._events_registry.publish(ToDoItemReleasedEvent(to_do_item_id=item.id))

    # -- approved ---------------------------------------------------------

    def _process_approved_story(self, story: Story) -> None:
        self._events_registry.publish(StoryApprovedEvent(story_id=story.id))

    def _process_approved_task(self, task: Task) -> None:
        if task.is_subtask:
            self._events_registry.publish(TaskApprovedEvent(task_id=task.id))
        else:
            self._story_service.attach_partial_approval_for(task.story.id, task.id)

    # -- done -------------------------------------------------------------

    def _process_done_story(self, story: Story) -> None:
        self._events_registry.publish(StoryDoneEvent(story_id=story.id))

    def _process_done_task(self, task: Task) -> None:
        story = task.story
        story_status = self._story_service.update_progress_of(story, task)
        if story_status is ToDoItemStatus.DONE:
            self._events_registry.publish(StoryDoneEvent(story_id=story.id))

    # -- in progress ------------------------------------------------------

    def _process_in_progress_task(self, task: Task) -> None:
        self._story_service.update_progress_of(task.story, task)

    # -- defined ----------------------------------------------------------

    def _process_defined_epic(self, epic: Epic) -> None:
        self._project_backlog_service.put_on_top(epic)
        self._events_registry.publish(EpicReadyToPrioritize(epic_id=epic.id))
        self._communication_service.notify(epic, epic.project.product_owner)

    def _process_defined_story(self, story: Story) -> None:
        if not story.has_tasks:
            self._project_backlog_service.move_to_ready_for_development(story, story.project)
        elif not story.assigned:
            self._communication_service.notify_teams_about(story, story.project)

    def _process_defined_task(self, task: Task) -> None:
        self._sprint_backlog_service.move_to_ready_for_development(task, task.current_sprint)

    def _ignore(self, item: ToDoItem) -> None:
        logger.debug("Nothing to do for %s %s in status %s", item.kind.value, item.id, item.status.value)


Handler = Callable[[ToDoItemProcessor, ToDoItem], None]

# RELEASED is handled before the lookup for every kind.
DISPATCH_TABLE: dict[tuple[ItemKind, ToDoItemStatus], Handler] = {
    (ItemKind.STORY, ToDoItemStatus.APPROVED): ToDoItemProcessor._process_approved_story,
    (ItemKind.EPIC, ToDoItemStatus.APPROVED): ToDoItemProcessor._ignore,
    (ItemKind.TASK, ToDoItemStatus.APPROVED): ToDoItemProcessor._process_approved_task,
    (ItemKind.EPIC, ToDoItemStatus.DONE): ToDoItemProcessor._ignore,
    (ItemKind.STORY, ToDoItemStatus.DONE): ToDoItemProcessor._process_done_story,
    (ItemKind.TASK, ToDoItemStatus.DONE): ToDoItemProcessor._process_done_task,
    (ItemKind.EPIC, ToDoItemStatus.IN_PROGRESS): ToDoItemProcessor._ignore,
    (ItemKind.STORY, ToDoItemStatus.IN_PROGRESS): ToDoItemProcessor._ignore,
    (ItemKind.TASK, ToDoItemStatus.IN_PROGRESS): ToDoItemProcessor._process_in_progress_task,
    (ItemKind.EPIC, ToDoItemStatus.DEFINED): ToDoItemProcessor._process_defined_epic,
    (ItemKind.STORY, ToDoItemStatus.DEFINED): ToDoItemProcessor._process_defined_story,
    (ItemKind.TASK, ToDoItemStatus.DEFINED): ToDoItemProcessor._process_defined_task,
}


def supports(item: ToDoItem) -> bool:
    """True when process_for has an action for item's kind and status."""
    return item.status is ToDoItemStatus.RELEASED or (item.kind, item.status) in DISPATCH_TABLE
