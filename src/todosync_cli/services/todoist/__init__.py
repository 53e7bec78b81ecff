"""Todoist integration service package."""

from .client import TodoistClient, TodoistClientProtocol, create_todoist_client
from .priority import to_local, to_remote
from .reconciler import TodoistReconciliationService, get_reconciliation_service
from .sync_adapter import RemoteResult, TodoistSyncAdapter, attempt

__all__ = [
    "TodoistClient",
    "TodoistClientProtocol",
    "create_todoist_client",
    "to_local",
    "to_remote",
    "TodoistReconciliationService",
    "get_reconciliation_service",
    "RemoteResult",
    "TodoistSyncAdapter",
    "attempt",
]
