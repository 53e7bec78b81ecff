"""Pydantic models for Todoist REST v2 resources and request payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _TodoistModel(BaseModel):
    """Base for snapshots: ignores unknown fields, ids are opaque strings."""

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "id", "project_id", "section_id", "parent_id", mode="before", check_fields=False
    )
    @classmethod
    def _coerce_id(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)


class TodoistDue(BaseModel):
    """Due date object from Todoist API."""

    date: str
    datetime: str | None = None
    is_recurring: bool = False
    string: str = ""
    timezone: str | None = None


class TodoistProject(_TodoistModel):
    """A Todoist project."""

    id: str
    name: str
    color: str | None = None
    order: int = 0
    is_favorite: bool = False
    is_inbox_project: bool = False
    view_style: str | None = None
    parent_id: str | None = None


class TodoistSection(_TodoistModel):
    """A Todoist section within a project."""

    id: str
    name: str
    project_id: str
    order: int = 0


class TodoistLabel(_TodoistModel):
    """A Todoist personal label."""

    id: str
    name: str
    color: str | None = None
    order: int = 0
    is_favorite: bool = False


class TodoistTask(_TodoistModel):
    """A Todoist task. ``priority`` is on the remote scale (4 = most urgent)."""

    id: str
    content: str
    description: str = ""
    project_id: str | None = None
    section_id: str | None = None
    priority: int = Field(default=1, ge=1, le=4)
    due: TodoistDue | None = None
    labels: list[str] = Field(default_factory=list)
    is_completed: bool = False
    order: int = 0
    created_at: str | None = None


class TodoistTaskCreate(BaseModel):
    """Body of ``POST /tasks``."""

    content: str
    description: str | None = None
    priority: int | None = Field(default=None, ge=1, le=4)
    due_date: str | None = None
    due_string: str | None = None
    labels: list[str] | None = None
    project_id: str | None = None
    section_id: str | None = None
    order: int | None = None


class TodoistTaskUpdate(BaseModel):
    """Body of ``POST /tasks/{id}``; unset fields are left untouched remotely."""

    content: str | None = None
    description: str | None = None
    priority: int | None = Field(default=None, ge=1, le=4)
    due_date: str | None = None
    due_string: str | None = None
    labels: list[str] | None = None


class TodoistProjectCreate(BaseModel):
    """Body of ``POST /projects``."""

    name: str
    parent_id: str | None = None
    order: int | None = None
    color: str | None = None
    is_favorite: bool | None = None
    view_style: str | None = None


class TodoistProjectUpdate(BaseModel):
    """Body of ``POST /projects/{id}``."""

    name: str | None = None
    order: int | None = None
    color: str | None = None
    is_favorite: bool | None = None
    view_style: str | None = None


class TodoistSectionCreate(BaseModel):
    """Body of ``POST /sections``."""

    name: str
    project_id: str
    order: int | None = None


class TodoistSectionUpdate(BaseModel):
    """Body of ``POST /sections/{id}``."""

    name: str | None = None
    order: int | None = None
