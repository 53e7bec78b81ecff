"""Label service - Business logic for label operations."""

from __future__ import annotations

from todosync_cli.exceptions import ValidationError
from todosync_cli.models import Label


class LabelService:
    """Service for label business logic.

    Labels are shared by every user; only the labels attached to one task are
    scoped, through the task's owner.
    """

    def __init__(self, storage):
        """Initialize the label service.

        Args:
            storage: Storage exposing the label and task repositories
        """
        self.repository = storage.label_repository
        self.tasks = storage.task_repository

    async def list_labels(self, search: str | None = None) -> list[Label]:
        """List all labels, optionally keeping names containing *search*."""
        labels = await self.repository.list_all()
        if search:
            needle = search.lower()
            labels = [label for label in labels if needle in label.name.lower()]
        return labels

    async def add_label(self, name: str) -> Label:
        """Return the label called *name*, creating it when missing.

        Raises:
            ValidationError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValidationError("Label name cannot be empty")
        return await self.repository.get_or_create(name)

    async def task_labels(self, user_id: str, task_id: str) -> list[str]:
        """Names of the labels on a task owned by *user_id*.

        Raises:
            NotFoundError: If the task is not the user's
        """
        await self.tasks.get(user_id, task_id)
        return await self.repository.get_task_labels(task_id)


def get_label_service() -> LabelService:
    """Factory function to get a LabelService instance."""
    from todosync_cli.services.storage import get_storage

    return LabelService(get_storage())
