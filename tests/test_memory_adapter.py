"""Unit tests for the in-memory collaborators."""

import pytest

from taskmanager.adapters.memory import (
    InMemoryCommunicationService,
    InMemoryProjectBacklogService,
    InMemorySprintBacklogService,
    InMemoryStoryService,
    Notification,
)
from taskmanager.model import (
    Epic,
    ProductOwner,
    Project,
    Sprint,
    Story,
    Task,
    Team,
    ToDoItemStatus,
)


@pytest.fixture
def project():
    owner = ProductOwner(id=1, first_name="Ada", last_name="Lovelace")
    return Project(
        id=1, name="Apollo", product_owner=owner, teams=[Team(id=1, name="Core"), Team(id=2, name="Web")]
    )


def _story_with_tasks(*statuses, subtask_statuses=()):
    story = Story(id=10, status=ToDoItemStatus.DEFINED)
    for i, status in enumerate(statuses, start=1):
        story.add_task(Task(id=i, status=status))
    for i, status in enumerate(subtask_statuses, start=100):
        story.tasks.append(Task(id=i, status=status, subtask=True, story=story))
    return story


class TestStoryServiceProgress:
    def test_all_tasks_done_makes_story_done(self):
        story = _story_with_tasks(ToDoItemStatus.DONE, ToDoItemStatus.DONE)
        service = InMemoryStoryService([story])

        status = service.update_progress_of(story, story.tasks[1])

        assert status is ToDoItemStatus.DONE
        assert story.status is ToDoItemStatus.DONE

    def test_released_tasks_count_as_finished(self):
        story = _story_with_tasks(ToDoItemStatus.RELEASED, ToDoItemStatus.DONE)
        service = InMemoryStoryService([story])

        assert service.update_progress_of(story, story.tasks[1]) is ToDoItemStatus.DONE

    def test_partial_progress_makes_story_in_progress(self):
        story = _story_with_tasks(ToDoItemStatus.DONE, ToDoItemStatus.DEFINED)
        service = InMemoryStoryService([story])

        status = service.update_progress_of(story, story.tasks[0])

        assert status is ToDoItemStatus.IN_PROGRESS
        assert story.status is ToDoItemStatus.IN_PROGRESS

    def test_untouched_tasks_leave_status_alone(self):
        story = _story_with_tasks(ToDoItemStatus.DEFINED, ToDoItemStatus.APPROVED)
        service = InMemoryStoryService([story])

        assert service.update_progress_of(story, story.tasks[0]) is ToDoItemStatus.DEFINED

    def test_subtasks_are_ignored(self):
        story = _story_with_tasks(ToDoItemStatus.DONE, subtask_statuses=[ToDoItemStatus.DEFINED])
        service = InMemoryStoryService([story])

        assert service.update_progress_of(story, story.tasks[0]) is ToDoItemStatus.DONE

    def test_story_without_tracked_tasks_is_unchanged(self):
        story = _story_with_tasks(subtask_statuses=[ToDoItemStatus.DONE])
        service = InMemoryStoryService([story])

        assert service.update_progress_of(story, story.tasks[0]) is ToDoItemStatus.DEFINED

    def test_missing_story_raises(self):
        service = InMemoryStoryService()
        with pytest.raises(ValueError, match="does not belong to a story"):
            service.update_progress_of(None, Task(id=1, status=ToDoItemStatus.DONE, subtask=True))


class TestStoryServiceApproval:
    def test_partial_approval_is_recorded(self):
        story = _story_with_tasks(ToDoItemStatus.APPROVED, ToDoItemStatus.DEFINED)
        service = InMemoryStoryService([story])

        service.attach_partial_approval_for(story.id, 1)

        assert story.approved_task_ids == {1}
        assert story.status is ToDoItemStatus.DEFINED

    def test_last_approval_approves_story(self):
        story = _story_with_tasks(
            ToDoItemStatus.APPROVED, ToDoItemStatus.APPROVED, subtask_statuses=[ToDoItemStatus.DEFINED]
        )
        service = InMemoryStoryService([story])

        service.attach_partial_approval_for(story.id, 1)
        service.attach_partial_approval_for(story.id, 2)

        assert story.status is ToDoItemStatus.APPROVED

    def test_unknown_story_raises(self):
        service = InMemoryStoryService()
        with pytest.raises(KeyError, match="Story not found"):
            service.attach_partial_approval_for(99, 1)

    def test_register_and_get(self):
        story = Story(id=3, status=ToDoItemStatus.DEFINED)
        service = InMemoryStoryService()
        service.register(story)
        assert service.get_story(3) is story


class TestProjectBacklogService:
    def test_put_on_top_moves_epic_first(self, project):
        service = InMemoryProjectBacklogService()
        first = Epic(id=1, status=ToDoItemStatus.DEFINED, project=project)
        second = Epic(id=2, status=ToDoItemStatus.DEFINED, project=project)
        service.add_to_backlog(first, project)
        service.add_to_backlog(second, project)

        service.put_on_top(second)

        assert service.backlog_of(project) == [second, first]

    def test_put_on_top_does_not_duplicate(self, project):
        service = InMemoryProjectBacklogService()
        epic = Epic(id=1, status=ToDoItemStatus.DEFINED, project=project)

        service.put_on_top(epic)
        service.put_on_top(epic)

        assert service.backlog_of(project) == [epic]

    def test_put_on_top_requires_project(self):
        service = InMemoryProjectBacklogService()
        with pytest.raises(ValueError, match="does not belong to a project"):
            service.put_on_top(Epic(id=1, status=ToDoItemStatus.DEFINED))

    def test_move_story_to_ready_for_development(self, project):
        service = InMemoryProjectBacklogService()
        story = Story(id=5, status=ToDoItemStatus.DEFINED, project=project)
        service.add_to_backlog(story, project)

        service.move_to_ready_for_development(story, project)
        service.move_to_ready_for_development(story, project)

        assert service.backlog_of(project) == []
        assert service.ready_for_development_of(project) == [story]

    def test_move_story_requires_project(self):
        service = InMemoryProjectBacklogService()
        with pytest.raises(ValueError):
            service.move_to_ready_for_development(Story(id=5, status=ToDoItemStatus.DEFINED), None)

    def test_backlogs_are_per_project(self, project):
        service = InMemoryProjectBacklogService()
        other = Project(id=2, name="Gemini")
        service.put_on_top(Epic(id=1, status=ToDoItemStatus.DEFINED, project=project))
        assert service.backlog_of(other) == []


class TestSprintBacklogService:
    def test_move_task_to_ready_for_development(self):
        service = InMemorySprintBacklogService()
        sprint = Sprint(id=1)
        task = Task(id=1, status=ToDoItemStatus.DEFINED)

        service.move_to_ready_for_development(task, sprint)
        service.move_to_ready_for_development(task, sprint)

        assert service.ready_for_development_of(sprint) == [task]

    def test_requires_sprint(self):
        service = InMemorySprintBacklogService()
        with pytest.raises(ValueError, match="not scheduled in a sprint"):
            service.move_to_ready_for_development(Task(id=1, status=ToDoItemStatus.DEFINED), None)


class TestCommunicationService:
    def test_notify_product_owner(self, project):
        service = InMemoryCommunicationService()
        epic = Epic(id=1, status=ToDoItemStatus.DEFINED, project=project)

        service.notify(epic, project.product_owner)

        assert service.notifications == [
            Notification(recipient="Ada Lovelace", item=epic, kind="product_owner")
        ]

    def test_notify_without_owner_raises(self):
        service = InMemoryCommunicationService()
        with pytest.raises(ValueError, match="No product owner"):
            service.notify(Epic(id=1, status=ToDoItemStatus.DEFINED), None)

    def test_notify_teams_about_story(self, project):
        service = InMemoryCommunicationService()
        story = Story(id=5, status=ToDoItemStatus.DEFINED, project=project)

        service.notify_teams_about(story, project)

        assert [(n.recipient, n.kind) for n in service.notifications] == [
            ("Core", "team"),
            ("Web", "team"),
        ]

    def test_notify_teams_requires_project(self):
        service = InMemoryCommunicationService()
        with pytest.raises(ValueError, match="Story 5 does not belong to a project"):
            service.notify_teams_about(Story(id=5, status=ToDoItemStatus.DEFINED), None)
        assert service.notifications == []

    def test_project_without_teams_notifies_nobody(self):
        service = InMemoryCommunicationService()
        project = Project(id=3, name="Solo")
        service.notify_teams_about(Story(id=5, status=ToDoItemStatus.DEFINED), project)
        assert service.notifications == []
