"""Application commands package."""

from .add_subtask_command import AddSubtaskCommand, AddSubtaskCommandHandler
from .add_task_comment_command import AddTaskCommentCommand, AddTaskCommentCommandHandler
from .change_task_status_command import ChangeTaskStatusCommand, ChangeTaskStatusCommandHandler
from .command_handler_base import CommandHandlerBase
from .create_task_command import CreateTaskCommand, CreateTaskCommandHandler
from .create_user_command import CreateUserCommand, CreateUserCommandHandler
from .delete_task_command import DeleteTaskCommand, DeleteTaskCommandHandler
from .delete_user_command import DeleteUserCommand, DeleteUserCommandHandler
from .issue_token_command import IssueTokenCommand, IssueTokenCommandHandler
from .register_user_command import RegisterUserCommand, RegisterUserCommandHandler
from .toggle_subtask_command import ToggleSubtaskCommand, ToggleSubtaskCommandHandler
from .update_task_command import UpdateTaskCommand, UpdateTaskCommandHandler
from .update_user_role_command import UpdateUserRoleCommand, UpdateUserRoleCommandHandler

__all__ = [
    "CommandHandlerBase",
    # Task commands
    "CreateTaskCommand",
    "CreateTaskCommandHandler",
    "UpdateTaskCommand",
    "UpdateTaskCommandHandler",
    "ChangeTaskStatusCommand",
    "ChangeTaskStatusCommandHandler",
    "AddTaskCommentCommand",
    "AddTaskCommentCommandHandler",
    "AddSubtaskCommand",
    "AddSubtaskCommandHandler",
    "ToggleSubtaskCommand",
    "ToggleSubtaskCommandHandler",
    "DeleteTaskCommand",
    "DeleteTaskCommandHandler",
    # Account commands
    "RegisterUserCommand",
    "RegisterUserCommandHandler",
    "IssueTokenCommand",
    "IssueTokenCommandHandler",
    "CreateUserCommand",
    "CreateUserCommandHandler",
    "UpdateUserRoleCommand",
    "UpdateUserRoleCommandHandler",
    "DeleteUserCommand",
    "DeleteUserCommandHandler",
]
