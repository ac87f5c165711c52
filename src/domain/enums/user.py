"""Account-related enumerations."""

from enum import Enum


class UserRole(str, Enum):
    """Roles an account can hold."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
