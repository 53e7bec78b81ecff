"""Repository abstraction layer for todosync.

This module defines the abstract base classes (interfaces) for all repository
types, following the hexagonal architecture (Ports & Adapters) pattern.

The Todoist sync engine only ever talks to these ports: it finds rows by their
Todoist id, creates or updates them, replaces a task's label set and lists the
rows that are already linked. Every method is scoped by the owning user so one
user's rows can never be read or written on behalf of another.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from todosync_cli.models import (
    Label,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Section,
    SectionCreate,
    SectionUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    User,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, user_id: str, filters: TaskFilters) -> list[Task]:
        """List the user's tasks matching *filters*."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, user_id: str, task_id: str) -> Task:
        """Get a task owned by *user_id*.

        Raises:
            NotFoundError: If the task does not exist or belongs to someone else
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def find_by_todoist_id(self, user_id: str, todoist_id: str) -> Task | None:
        """Return the user's task linked to *todoist_id*, or None."""
        raise NotImplementedError(
            "TaskRepository.find_by_todoist_id() must be implemented by adapter"
        )

    @abstractmethod
    async def list_linked(self, user_id: str) -> list[Task]:
        """List the user's tasks that carry a Todoist id."""
        raise NotImplementedError(
            "TaskRepository.list_linked() must be implemented by adapter"
        )

    @abstractmethod
    async def create(
        self,
        user_id: str,
        task_data: TaskCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Task:
        """Create a task, connecting (or creating) its labels by name.

        Args:
            user_id: Owning user
            task_data: Validated task fields
            todoist_id: Todoist id when the task is linked
            synced_at: Sync timestamp when the task is linked

        Returns:
            Created Task with generated ID and timestamps
        """
        raise NotImplementedError(
            "TaskRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self,
        user_id: str,
        task_id: str,
        updates: TaskUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Task:
        """Write the fields explicitly set on *updates*.

        When ``updates.labels`` is set, all label associations are detached and
        the new names are connected (created when missing). A non-None
        *synced_at* refreshes the sync timestamp; None leaves it as is.

        Raises:
            NotFoundError: If the task does not exist or belongs to someone else
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, user_id: str, task_id: str) -> bool:
        """Delete a task. Label rows are kept."""
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations."""

    @abstractmethod
    async def list_all(self, user_id: str) -> list[Project]:
        """List the user's projects ordered by position."""
        raise NotImplementedError(
            "ProjectRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, user_id: str, project_id: str) -> Project:
        """Get a project owned by *user_id*.

        Raises:
            NotFoundError: If the project does not exist or belongs to someone else
        """
        raise NotImplementedError(
            "ProjectRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_todoist_id(
        self, user_id: str, todoist_id: str
    ) -> Project | None:
        """Return the user's project linked to *todoist_id*, or None."""
        raise NotImplementedError(
            "ProjectRepository.find_by_todoist_id() must be implemented by adapter"
        )

    @abstractmethod
    async def list_linked(self, user_id: str) -> list[Project]:
        """List the user's projects that carry a Todoist id."""
        raise NotImplementedError(
            "ProjectRepository.list_linked() must be implemented by adapter"
        )

    @abstractmethod
    async def create(
        self,
        user_id: str,
        project_data: ProjectCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Project:
        """Create a project; ``order`` defaults to the next free position."""
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self,
        user_id: str,
        project_id: str,
        updates: ProjectUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Project:
        """Write the fields explicitly set on *updates*."""
        raise NotImplementedError(
            "ProjectRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, user_id: str, project_id: str) -> bool:
        """Delete a project, its sections, and detach its tasks."""
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )


class SectionRepository(ABC):
    """Abstract base class for section persistence operations.

    Sections are owned through their project; every lookup joins on the
    project's owner.
    """

    @abstractmethod
    async def list_by_project(self, user_id: str, project_id: str) -> list[Section]:
        """List a project's sections ordered by position."""
        raise NotImplementedError(
            "SectionRepository.list_by_project() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, user_id: str, section_id: str) -> Section:
        """Get a section whose project is owned by *user_id*.

        Raises:
            NotFoundError: If the section does not exist or belongs to someone else
        """
        raise NotImplementedError(
            "SectionRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_todoist_id(
        self, user_id: str, todoist_id: str
    ) -> Section | None:
        """Return the user's section linked to *todoist_id*, or None."""
        raise NotImplementedError(
            "SectionRepository.find_by_todoist_id() must be implemented by adapter"
        )

    @abstractmethod
    async def list_linked(self, user_id: str) -> list[Section]:
        """List the user's sections that carry a Todoist id."""
        raise NotImplementedError(
            "SectionRepository.list_linked() must be implemented by adapter"
        )

    @abstractmethod
    async def create(
        self,
        user_id: str,
        section_data: SectionCreate,
        *,
        todoist_id: str | None = None,
        synced_at: datetime | None = None,
    ) -> Section:
        """Create a section; ``order`` defaults to the next free position."""
        raise NotImplementedError(
            "SectionRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self,
        user_id: str,
        section_id: str,
        updates: SectionUpdate,
        *,
        synced_at: datetime | None = None,
    ) -> Section:
        """Write the fields explicitly set on *updates*."""
        raise NotImplementedError(
            "SectionRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, user_id: str, section_id: str) -> bool:
        """Delete a section and detach its tasks."""
        raise NotImplementedError(
            "SectionRepository.delete() must be implemented by adapter"
        )


class LabelRepository(ABC):
    """Abstract base class for the global label table and task associations."""

    @abstractmethod
    async def list_all(self) -> list[Label]:
        """List every label ordered by name."""
        raise NotImplementedError(
            "LabelRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get_or_create(self, name: str) -> Label:
        """Return the label called *name*, creating it on first use."""
        raise NotImplementedError(
            "LabelRepository.get_or_create() must be implemented by adapter"
        )

    @abstractmethod
    async def replace_task_labels(self, task_id: str, label_names: list[str]) -> None:
        """Detach every label from a task, then connect-or-create *label_names*."""
        raise NotImplementedError(
            "LabelRepository.replace_task_labels() must be implemented by adapter"
        )

    @abstractmethod
    async def get_task_labels(self, task_id: str) -> list[str]:
        """Return the names of the labels attached to a task."""
        raise NotImplementedError(
            "LabelRepository.get_task_labels() must be implemented by adapter"
        )


class UserRepository(ABC):
    """Abstract base class for users and their Todoist credentials."""

    @abstractmethod
    async def create(self, email: str, name: str | None = None) -> User:
        """Create a user.

        Raises:
            ValidationError: If the email is already registered
        """
        raise NotImplementedError(
            "UserRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, user_id: str) -> User:
        """Get a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        raise NotImplementedError("UserRepository.get() must be implemented by adapter")

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List every user."""
        raise NotImplementedError(
            "UserRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get_todoist_token(self, user_id: str) -> str | None:
        """Return the user's stored Todoist token, or None."""
        raise NotImplementedError(
            "UserRepository.get_todoist_token() must be implemented by adapter"
        )

    @abstractmethod
    async def set_todoist_token(self, user_id: str, token: str | None) -> None:
        """Store (or clear, with None) the user's Todoist token."""
        raise NotImplementedError(
            "UserRepository.set_todoist_token() must be implemented by adapter"
        )
