"""Tests for LabelService."""

from __future__ import annotations

import pytest

from todosync_cli.exceptions import NotFoundError, ValidationError
from todosync_cli.models import TaskCreate
from todosync_cli.services.label_service import LabelService


@pytest.fixture
def label_service(storage):
    return LabelService(storage)


@pytest.mark.asyncio
async def test_list_labels_from_every_user(label_service, storage, user_id, other_user_id):
    await storage.task_repository.create(user_id, TaskCreate(title="A", labels=["Work"]))
    await storage.task_repository.create(
        other_user_id, TaskCreate(title="B", labels=["errand", "homework"])
    )

    names = [label.name for label in await label_service.list_labels()]
    matching = [label.name for label in await label_service.list_labels("WORK")]

    assert names == ["Work", "errand", "homework"]
    assert matching == ["Work", "homework"]


@pytest.mark.asyncio
async def test_add_label_reuses_existing(label_service):
    first = await label_service.add_label("  urgent ")
    second = await label_service.add_label("urgent")

    assert first.name == "urgent"
    assert first.id == second.id


@pytest.mark.asyncio
async def test_add_blank_label(label_service):
    with pytest.raises(ValidationError):
        await label_service.add_label("   ")
    assert await label_service.list_labels() == []


@pytest.mark.asyncio
async def test_task_labels_checks_owner(label_service, storage, user_id, other_user_id):
    task = await storage.task_repository.create(
        user_id, TaskCreate(title="Tagged", labels=["work", "errand"])
    )

    assert await label_service.task_labels(user_id, task.id) == ["errand", "work"]
    with pytest.raises(NotFoundError):
        await label_service.task_labels(other_user_id, task.id)
