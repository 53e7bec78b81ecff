"""Core domain models: users, projects, sections, tasks and labels."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TaskType(str, Enum):
    """GTD lifecycle bucket of a task."""

    INBOX = "inbox"
    NEXT_ACTION = "next_action"
    PROJECT = "project"
    WAITING = "waiting"
    SOMEDAY = "someday"
    REFERENCE = "reference"


class EnergyLevel(str, Enum):
    """Energy a task needs, used to filter next actions."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class User(BaseModel):
    """User model.

    Attributes:
        id: Unique identifier for the user
        email: Login email, unique
        name: Display name
        todoist_api_token: Personal Todoist token, None when not connected
    """

    id: str
    email: str
    name: str | None = None
    todoist_api_token: str | None = None
    created_at: datetime
    updated_at: datetime


class Label(BaseModel):
    """Label shared by every task that references its name.

    Attributes:
        id: Unique identifier for the label
        name: Globally unique, case-sensitive label name
    """

    id: str
    name: str


class Project(BaseModel):
    """Project model representing a complete project entity.

    Attributes:
        id: Unique identifier for the project
        todoist_id: Linked Todoist project id, None for local-only projects
        name: Project name
        color: Optional color name or hex code
        is_favorite: Whether project is marked as favorite
        is_inbox_project: Whether this is the Todoist inbox project
        view_style: Display hint ("list", "board")
        order: Position among the user's projects
        parent_id: Optional reference to a parent project
        user_id: Owning user
        synced_at: Last successful exchange with Todoist
    """

    id: str
    todoist_id: str | None = None
    name: str
    color: str | None = None
    is_favorite: bool = False
    is_inbox_project: bool = False
    view_style: str | None = None
    order: int = 0
    parent_id: str | None = None
    user_id: str
    synced_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProjectCreate(BaseModel):
    """Model for creating a new project.

    Attributes:
        name: Project name (required)
        color: Optional color
        is_favorite: Whether to mark as favorite
        is_inbox_project: Inbox flag (set by Todoist imports)
        view_style: Optional display hint
        order: Position; the next free slot when omitted
        parent_id: Optional parent project ID
    """

    name: str = Field(min_length=1)
    color: str | None = None
    is_favorite: bool = False
    is_inbox_project: bool = False
    view_style: str | None = None
    order: int | None = None
    parent_id: str | None = None


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    Only fields explicitly set are written.
    """

    name: str | None = Field(default=None, min_length=1)
    color: str | None = None
    is_favorite: bool | None = None
    is_inbox_project: bool | None = None
    view_style: str | None = None
    order: int | None = None
    parent_id: str | None = None


class Section(BaseModel):
    """Section inside a project.

    Attributes:
        id: Unique identifier for the section
        todoist_id: Linked Todoist section id
        name: Section name
        order: Position within the project
        project_id: Owning project
        synced_at: Last successful exchange with Todoist
    """

    id: str
    todoist_id: str | None = None
    name: str
    order: int = 0
    project_id: str
    synced_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SectionCreate(BaseModel):
    """Model for creating a new section."""

    name: str = Field(min_length=1)
    project_id: str
    order: int | None = None


class SectionUpdate(BaseModel):
    """Model for updating a section. Only explicitly set fields are written."""

    name: str | None = Field(default=None, min_length=1)
    order: int | None = None
    project_id: str | None = None


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        todoist_id: Linked Todoist task id, None for local-only tasks
        title: Main task text
        description: Optional detailed description
        is_completed: Completion status
        priority: Priority level on the local scale (1=lowest, 4=most urgent)
        due_date: Optional due date
        synced_at: Last successful exchange with Todoist
        user_id: Owning user
        project_id: Optional parent project
        section_id: Optional section within the project
        order: Position within its list
        labels: Names of attached labels
        task_type: GTD bucket
        waiting_for: Who the task is waiting on
        energy_level: Energy the task needs
        time_estimate: Estimated minutes
        context: Free-text GTD context such as "@home"
    """

    id: str
    todoist_id: str | None = None
    title: str
    description: str | None = None
    is_completed: bool = False
    priority: int = Field(default=1, ge=1, le=4)
    due_date: datetime | None = None
    synced_at: datetime | None = None
    user_id: str
    project_id: str | None = None
    section_id: str | None = None
    order: int = 0
    labels: list[str] = Field(default_factory=list)
    task_type: TaskType = TaskType.INBOX
    waiting_for: str | None = None
    energy_level: EnergyLevel | None = None
    time_estimate: int | None = None
    context: str | None = None
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Main task text (required, non-empty)
        description: Optional detailed description
        priority: Priority level on the local 1-4 scale
        due_date: Optional due date
        labels: Label names, created on first use
        project_id: Optional parent project ID
        section_id: Optional section ID
        is_completed: Initial completion flag (used by imports)
        order: Position; the next free slot when omitted
        task_type: GTD bucket, inbox by default
    """

    title: str = Field(min_length=1)
    description: str | None = None
    priority: int = Field(default=1, ge=1, le=4)
    due_date: datetime | None = None
    labels: list[str] = Field(default_factory=list)
    project_id: str | None = None
    section_id: str | None = None
    is_completed: bool = False
    order: int | None = None
    task_type: TaskType = TaskType.INBOX
    waiting_for: str | None = None
    energy_level: EnergyLevel | None = None
    time_estimate: int | None = Field(default=None, ge=0)
    context: str | None = None


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional. Only fields explicitly set are written, so
    passing ``due_date=None`` clears the due date while omitting it keeps it.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_completed: bool | None = None
    priority: int | None = Field(default=None, ge=1, le=4)
    due_date: datetime | None = None
    labels: list[str] | None = None
    project_id: str | None = None
    section_id: str | None = None
    order: int | None = None
    task_type: TaskType | None = None
    waiting_for: str | None = None
    energy_level: EnergyLevel | None = None
    time_estimate: int | None = Field(default=None, ge=0)
    context: str | None = None


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        status: "active", "completed" or "all"
        project_id: Filter by project ID
        section_id: Filter by section ID
        task_type: Filter by GTD bucket
        context: Exact GTD context match
        energy_level: Exact energy level match
        max_time_estimate: Only tasks estimated at or below this many minutes
        linked: True for tasks with a Todoist id, False for local-only
        search: Substring search over title and description
    """

    status: str | None = Field(default=None, pattern="^(active|completed|all)$")
    project_id: str | None = None
    section_id: str | None = None
    task_type: TaskType | None = None
    context: str | None = None
    energy_level: EnergyLevel | None = None
    max_time_estimate: int | None = Field(default=None, ge=0)
    linked: bool | None = None
    search: str | None = None


class ConnectionStatus(BaseModel):
    """Whether a user has a Todoist token stored."""

    connected: bool


class SyncCounts(BaseModel):
    """Imported vs. updated totals for one entity class."""

    imported: int = 0
    updated: int = 0


class SyncAllResult(BaseModel):
    """Summary of a full reconciliation against Todoist."""

    projects: SyncCounts = Field(default_factory=SyncCounts)
    sections: SyncCounts = Field(default_factory=SyncCounts)
    tasks: SyncCounts = Field(default_factory=SyncCounts)
