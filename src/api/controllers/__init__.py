"""API controllers package."""

from .admin_controller import AdminController
from .analytics_controller import AnalyticsController
from .app_controller import AppController
from .auth_controller import AuthController
from .tasks_controller import TasksController

__all__ = [
    "AdminController",
    "AnalyticsController",
    "AppController",
    "AuthController",
    "TasksController",
]
