"""Services module for todosync - Business logic layer."""

from .account_service import AccountService
from .project_service import ProjectService
from .section_service import SectionService
from .task_service import TaskService

__all__ = [
    "AccountService",
    "TaskService",
    "ProjectService",
    "SectionService",
]
