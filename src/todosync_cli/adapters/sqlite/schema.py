"""Database schema definitions for the local SQLite store.

Column names follow the domain models except ``display_order``, which backs
the models' ``order`` field (``ORDER`` is an SQL keyword).
"""

from __future__ import annotations

# Users table - one row per account, holding the personal Todoist token
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    name TEXT,
    todoist_api_token TEXT,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# Projects table
CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    todoist_id TEXT,
    name TEXT NOT NULL,
    color TEXT,
    is_favorite BOOLEAN DEFAULT 0,
    is_inbox_project BOOLEAN DEFAULT 0,
    view_style TEXT,
    display_order INTEGER DEFAULT 0,
    parent_id TEXT,
    user_id TEXT NOT NULL,
    synced_at DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (parent_id) REFERENCES projects(id) ON DELETE SET NULL,
    UNIQUE(user_id, todoist_id)
)
"""

# Sections table - owned through their project
CREATE_SECTIONS_TABLE = """
CREATE TABLE IF NOT EXISTS sections (
    id TEXT PRIMARY KEY,
    todoist_id TEXT,
    name TEXT NOT NULL,
    display_order INTEGER DEFAULT 0,
    project_id TEXT NOT NULL,
    synced_at DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE,
    UNIQUE(project_id, todoist_id)
)
"""

# Labels table - global, not per user
CREATE_LABELS_TABLE = """
CREATE TABLE IF NOT EXISTS labels (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    created_at DATETIME NOT NULL
)
"""

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    todoist_id TEXT,
    title TEXT NOT NULL,
    description TEXT,
    is_completed BOOLEAN DEFAULT 0,
    priority INTEGER DEFAULT 1,
    due_date DATETIME,
    synced_at DATETIME,
    user_id TEXT NOT NULL,
    project_id TEXT,
    section_id TEXT,
    display_order INTEGER DEFAULT 0,

    -- GTD fields
    task_type TEXT NOT NULL DEFAULT 'inbox',
    waiting_for TEXT,
    energy_level TEXT,
    time_estimate INTEGER,
    context TEXT,

    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE SET NULL,
    FOREIGN KEY (section_id) REFERENCES sections(id) ON DELETE SET NULL,
    UNIQUE(user_id, todoist_id)
)
"""

# Task-Label junction table (many-to-many)
CREATE_TASK_LABELS_TABLE = """
CREATE TABLE IF NOT EXISTS task_labels (
    task_id TEXT NOT NULL,
    label_id TEXT NOT NULL,
    PRIMARY KEY (task_id, label_id),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    FOREIGN KEY (label_id) REFERENCES labels(id) ON DELETE CASCADE
)
"""

# Indexes for performance

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_section ON tasks(section_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_todoist ON tasks(user_id, todoist_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_type ON tasks(user_id, task_type, is_completed)",
]

CREATE_PROJECT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_user ON projects(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_projects_todoist ON projects(user_id, todoist_id)",
]

CREATE_SECTION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_sections_project ON sections(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_sections_todoist ON sections(todoist_id)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_PROJECTS_TABLE,
    CREATE_SECTIONS_TABLE,
    CREATE_LABELS_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_TASK_LABELS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_PROJECT_INDEXES + CREATE_SECTION_INDEXES
