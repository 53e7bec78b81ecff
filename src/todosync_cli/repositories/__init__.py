"""Repository interfaces for todosync.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal
Architecture; the SQLite adapter lives in todosync_cli.adapters.sqlite.
"""

from .repository import (
    LabelRepository,
    ProjectRepository,
    SectionRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    "TaskRepository",
    "ProjectRepository",
    "SectionRepository",
    "LabelRepository",
    "UserRepository",
]
