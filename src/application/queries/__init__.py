"""Application queries package."""

from .get_all_tasks_query import GetAllTasksQuery, GetAllTasksQueryHandler
from .get_task_by_id_query import GetTaskByIdQuery, GetTaskByIdQueryHandler
from .get_task_statistics_query import GetTaskStatisticsQuery, GetTaskStatisticsQueryHandler
from .get_tasks_query import GetTasksQuery, GetTasksQueryHandler
from .get_users_query import GetUsersQuery, GetUsersQueryHandler

__all__ = [
    "GetAllTasksQuery",
    "GetAllTasksQueryHandler",
    "GetTaskByIdQuery",
    "GetTaskByIdQueryHandler",
    "GetTaskStatisticsQuery",
    "GetTaskStatisticsQueryHandler",
    "GetTasksQuery",
    "GetTasksQueryHandler",
    "GetUsersQuery",
    "GetUsersQueryHandler",
]
