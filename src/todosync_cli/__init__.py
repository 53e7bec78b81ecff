"""todosync - GTD task manager with two-way Todoist synchronization."""

__version__ = "0.1.0"
