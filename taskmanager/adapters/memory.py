"""In-memory collaborator implementations. For tests and demos."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..model import Epic, ProductOwner, Project, Sprint, Story, Task, ToDoItem, ToDoItemStatus

logger = logging.getLogger(__name__)

_FINISHED = {ToDoItemStatus.DONE, ToDoItemStatus.RELEASED}
_STARTED = {ToDoItemStatus.IN_PROGRESS} | _FINISHED


class InMemoryStoryService:
    """StoryService backed by a dict of stories keyed by id."""

    def __init__(self, stories: Iterable[Story] = ()) -> None:
        self._stories: dict[int, Story] = {}
        for story in stories:
            self.register(story)

    def register(self, story: Story) -> None:
        self._stories[story.id] = story

    def get_story(self, story_id: int) -> Story:
        if story_id not in self._stories:
            raise KeyError(f"Story not found: {story_id}")
        return self._stories[story_id]

    def attach_partial_approval_for(self, story_id: int, task_id: int) -> None:
        story = self.get_story(story_id)
        story.approved_task_ids.add(task_id)

        tracked = {t.id for t in story.tasks if not t.is_subtask}
        if tracked and tracked <= story.approved_task_ids:
            logger.info("All tasks of story %s approved", story.id)
            story.status = ToDoItemStatus.APPROVED

    def update_progress_of(self, story: Story, task: Task) -> ToDoItemStatus:
        if story is None:
            raise ValueError(f"Task {task.id} does not belong to a story")
        # Subtasks are not part of story progress
        tracked = [t for t in story.tasks if not t.is_subtask]
        if not tracked:
            return story.status

        if all(t.status in _FINISHED for t in tracked):
            story.status = ToDoItemStatus.DONE
        elif any(t.status in _STARTED for t in tracked):
            story.status = ToDoItemStatus.IN_PROGRESS

        logger.info("Story %s is %s after task %s", story.id, story.status.value, task.id)
        return story.status


class InMemoryProjectBacklogService:
    """Per-project backlog and ready-for-development queues."""

    def __init__(self) -> None:
        self._backlogs: dict[int, list[ToDoItem]] = {}
        self._ready: dict[int, list[Story]] = {}

    def backlog_of(self, project: Project) -> list[ToDoItem]:
        return list(self._backlogs.get(project.id, []))

    def ready_for_development_of(self, project: Project) -> list[Story]:
        return list(self._ready.get(project.id, []))

    def add_to_backlog(self, item: ToDoItem, project: Project) -> None:
        backlog = self._backlogs.setdefault(project.id, [])
        if item not in backlog:
            backlog.append(item)

    def put_on_top(self, epic: Epic) -> None:
        if epic.project is None:
            raise ValueError(f"Epic {epic.id} does not belong to a project")
        backlog = self._backlogs.setdefault(epic.project.id, [])
        if epic in backlog:
            backlog.remove(epic)
        backlog.insert(0, epic)

    def move_to_ready_for_development(self, story: Story, project: Project) -> None:
        if project is None:
            raise ValueError(f"Story {story.id} does not belong to a project")
        backlog = self._backlogs.get(project.id, [])
        if story in backlog:
            backlog.remove(story)
        ready = self._ready.setdefault(project.id, [])
        if story not in ready:
            ready.append(story)


class InMemorySprintBacklogService:
    """Per-sprint ready-for-development queues."""

    def __init__(self) -> None:
        self._ready: dict[int, list[Task]] = {}

    def ready_for_development_of(self, sprint: Sprint) -> list[Task]:
        return list(self._ready.get(sprint.id, []))

    def move_to_ready_for_development(self, task: Task, sprint: Sprint) -> None:
        if sprint is None:
            raise ValueError(f"Task {task.id} is not scheduled in a sprint")
        ready = self._ready.setdefault(sprint.id, [])
        if task not in ready:
            ready.append(task)


@dataclass
class Notification:
    recipient: str
    item: ToDoItem
    kind: str


class InMemoryCommunicationService:
    """Records notifications instead of delivering them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, item: ToDoItem, product_owner: ProductOwner) -> None:
        if product_owner is None:
            raise ValueError(f"No product owner to notify about {item.kind.value} {item.id}")
        self._record(product_owner.full_name, item, "product_owner")

    def notify_teams_about(self, story: Story, project: Project) -> None:
        if project is None:
            raise ValueError(f"Story {story.id} does not belong to a project")
        for team in project.teams:
            self._record(team.name, story, "team")

    def _record(self, recipient: str, item: ToDoItem, kind: str) -> None:
        logger.info("Notifying %s about %s %s", recipient, item.kind.value, item.id)
        self.notifications.append(Notification(recipient=recipient, item=item, kind=kind))
