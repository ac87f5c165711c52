"""Repository implementations for the task store and user directory."""

from .in_memory_task_dto_repository import InMemoryTaskDtoRepository
from .in_memory_user_dto_repository import InMemoryUserDtoRepository
from .motor_task_dto_repository import MotorTaskDtoRepository
from .motor_user_dto_repository import MotorUserDtoRepository

__all__ = [
    "InMemoryTaskDtoRepository",
    "InMemoryUserDtoRepository",
    "MotorTaskDtoRepository",
    "MotorUserDtoRepository",
]
