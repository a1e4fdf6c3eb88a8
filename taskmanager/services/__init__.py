from .interface import (
    CommunicationService,
    ProjectBacklogService,
    SprintBacklogService,
    StoryService,
)

__all__ = [
    "StoryService",
    "ProjectBacklogService",
    "CommunicationService",
    "SprintBacklogService",
]
