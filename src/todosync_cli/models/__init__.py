"""todosync domain models.

This package contains Pydantic models that represent the core domain entities
of the application. They are used for validation at the service boundary and
as the row type returned by every repository.
"""

from .core import (
    ConnectionStatus,
    EnergyLevel,
    Label,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Section,
    SectionCreate,
    SectionUpdate,
    SyncAllResult,
    SyncCounts,
    Task,
    TaskCreate,
    TaskFilters,
    TaskType,
    TaskUpdate,
    User,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskType",
    "EnergyLevel",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    # Section models
    "Section",
    "SectionCreate",
    "SectionUpdate",
    # Label model
    "Label",
    # User models
    "User",
    "ConnectionStatus",
    # Sync results
    "SyncCounts",
    "SyncAllResult",
]
