"""Integration layer DTOs package.

Contains the persisted documents (queryable dataclasses stored through
MotorRepository) and the response models returned by query and command handlers.
"""

from .access_token_dto import AccessTokenDto
from .task_details_dto import TaskDetailsDto
from .task_dto import SubtaskDto, TaskCommentDto, TaskDto
from .task_statistics_dto import AssigneeWorkloadDto, TaskStatisticsDto
from .user_dto import UserDto, UserReferenceDto, UserSummaryDto

__all__ = [
    "AccessTokenDto",
    "AssigneeWorkloadDto",
    "SubtaskDto",
    "TaskCommentDto",
    "TaskDetailsDto",
    "TaskDto",
    "TaskStatisticsDto",
    "UserDto",
    "UserReferenceDto",
    "UserSummaryDto",
]
