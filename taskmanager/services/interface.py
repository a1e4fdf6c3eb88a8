"""Collaborator protocols consumed by the work item processor."""

from __future__ import annotations

from typing import Protocol

from ..model import Epic, ProductOwner, Project, Sprint, Story, Task, ToDoItem, ToDoItemStatus


class StoryService(Protocol):
    """Tracks how far a story has progressed through its tasks."""

    def attach_partial_approval_for(self, story_id: int, task_id: int) -> None: ...

    def update_progress_of(self, story: Story, task: Task) -> ToDoItemStatus:
        """Recalculate the story's progress after a change to one of its tasks.

        Returns the story's status once the update is applied.
        """
        ...


class ProjectBacklogService(Protocol):
    def put_on_top(self, epic: Epic) -> None: ...

    def move_to_ready_for_development(self, story: Story, project: Project) -> None: ...


class CommunicationService(Protocol):
    def notify(self, item: ToDoItem, product_owner: ProductOwner) -> None: ...

    def notify_teams_about(self, story: Story, project: Project) -> None: ...


class SprintBacklogService(Protocol):
    def move_to_ready_for_development(self, task: Task, sprint: Sprint) -> None: ...
