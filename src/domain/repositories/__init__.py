"""Domain repositories package.

Contains abstract repository interfaces for the task store and the user
directory. Implementations are in src/integration/repositories/.
"""

from .task_dto_repository import TaskDtoRepository
from .user_dto_repository import UserDtoRepository

__all__: list[str] = [
    "TaskDtoRepository",
    "UserDtoRepository",
]
