"""Expansion of task account references for display."""

from domain.repositories import UserDtoRepository
from integration.models import TaskDetailsDto, TaskDto, UserReferenceDto


async def expand_tasks_async(user_repository: UserDtoRepository, tasks: list[TaskDto]) -> list[TaskDetailsDto]:
    """Replace assignee and creator ids with {id, name, email} using one directory lookup."""
    user_ids = {task.assigned_to for task in tasks if task.assigned_to} | {task.created_by for task in tasks if task.created_by}
    users = await user_repository.get_many_async(sorted(user_ids)) if user_ids else []
    references = {user.id: UserReferenceDto.from_user(user) for user in users}
    return [TaskDetailsDto.from_task(task, references) for task in tasks]


async def expand_task_async(user_repository: UserDtoRepository, task: TaskDto) -> TaskDetailsDto:
    return (await expand_tasks_async(user_repository, [task]))[0]
