"""Todoist REST v2 client.

Defines a Protocol for testability (Dependency Inversion) and a
concrete implementation backed by httpx. Every logical operation is one
HTTP request; failures surface as ``RemoteCallError`` and are never retried.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todosync_cli.exceptions import RemoteCallError
from todosync_cli.utils.logger import get_logger

from .models import (
    TodoistLabel,
    TodoistProject,
    TodoistProjectCreate,
    TodoistProjectUpdate,
    TodoistSection,
    TodoistSectionCreate,
    TodoistSectionUpdate,
    TodoistTask,
    TodoistTaskCreate,
    TodoistTaskUpdate,
)

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.todoist.com/rest/v2"
DEFAULT_TIMEOUT = 30.0

M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class TodoistClientProtocol(Protocol):
    """Abstract interface for talking to Todoist.

    Keeping this as a Protocol (not ABC) means tests can pass any object
    that satisfies the interface without subclassing.
    """

    async def get_tasks(self) -> list[TodoistTask]: ...

    async def get_task(self, task_id: str) -> TodoistTask: ...

    async def create_task(self, task: TodoistTaskCreate) -> TodoistTask: ...

    async def update_task(self, task_id: str, task: TodoistTaskUpdate) -> TodoistTask: ...

    async def delete_task(self, task_id: str) -> None: ...

    async def close_task(self, task_id: str) -> None: ...

    async def reopen_task(self, task_id: str) -> None: ...

    async def get_projects(self) -> list[TodoistProject]: ...

    async def get_project(self, project_id: str) -> TodoistProject: ...

    async def create_project(self, project: TodoistProjectCreate) -> TodoistProject: ...

    async def update_project(
        self, project_id: str, project: TodoistProjectUpdate
    ) -> TodoistProject: ...

    async def delete_project(self, project_id: str) -> None: ...

    async def get_sections(self, project_id: str | None = None) -> list[TodoistSection]: ...

    async def get_section(self, section_id: str) -> TodoistSection: ...

    async def create_section(self, section: TodoistSectionCreate) -> TodoistSection: ...

    async def update_section(
        self, section_id: str, section: TodoistSectionUpdate
    ) -> TodoistSection: ...

    async def delete_section(self, section_id: str) -> None: ...

    async def get_labels(self) -> list[TodoistLabel]: ...

    async def get_label(self, label_id: str) -> TodoistLabel: ...


class TodoistClient:
    """Concrete Todoist REST v2 client using httpx.

    Args:
        api_key: Todoist personal API token.
        base_url: Override API base URL (useful for testing).
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    # Tasks

    async def get_tasks(self) -> list[TodoistTask]:
        """Return all active tasks."""
        return await self._get_all("/tasks", TodoistTask)

    async def get_task(self, task_id: str) -> TodoistTask:
        return await self._request("GET", f"/tasks/{task_id}", model=TodoistTask)

    async def create_task(self, task: TodoistTaskCreate) -> TodoistTask:
        return await self._request(
            "POST", "/tasks", json=_payload(task), model=TodoistTask
        )

    async def update_task(self, task_id: str, task: TodoistTaskUpdate) -> TodoistTask:
        return await self._request(
            "POST", f"/tasks/{task_id}", json=_payload(task), model=TodoistTask
        )

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    async def close_task(self, task_id: str) -> None:
        await self._request("POST", f"/tasks/{task_id}/close")

    async def reopen_task(self, task_id: str) -> None:
        await self._request("POST", f"/tasks/{task_id}/reopen")

    # Projects

    async def get_projects(self) -> list[TodoistProject]:
        return await self._get_all("/projects", TodoistProject)

    async def get_project(self, project_id: str) -> TodoistProject:
        return await self._request("GET", f"/projects/{project_id}", model=TodoistProject)

    async def create_project(self, project: TodoistProjectCreate) -> TodoistProject:
        return await self._request(
            "POST", "/projects", json=_payload(project), model=TodoistProject
        )

    async def update_project(
        self, project_id: str, project: TodoistProjectUpdate
    ) -> TodoistProject:
        return await self._request(
            "POST", f"/projects/{project_id}", json=_payload(project), model=TodoistProject
        )

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    # Sections

    async def get_sections(self, project_id: str | None = None) -> list[TodoistSection]:
        """Return sections of one project, or of every project when omitted."""
        params = {"project_id": project_id} if project_id else None
        return await self._get_all("/sections", TodoistSection, params=params)

    async def get_section(self, section_id: str) -> TodoistSection:
        return await self._request("GET", f"/sections/{section_id}", model=TodoistSection)

    async def create_section(self, section: TodoistSectionCreate) -> TodoistSection:
        return await self._request(
            "POST", "/sections", json=_payload(section), model=TodoistSection
        )

    async def update_section(
        self, section_id: str, section: TodoistSectionUpdate
    ) -> TodoistSection:
        return await self._request(
            "POST", f"/sections/{section_id}", json=_payload(section), model=TodoistSection
        )

    async def delete_section(self, section_id: str) -> None:
        await self._request("DELETE", f"/sections/{section_id}")

    # Labels

    async def get_labels(self) -> list[TodoistLabel]:
        return await self._get_all("/labels", TodoistLabel)

    async def get_label(self, label_id: str) -> TodoistLabel:
        return await self._request("GET", f"/labels/{label_id}", model=TodoistLabel)

    # Transport

    async def _get_all(
        self, path: str, model: type[M], params: dict | None = None
    ) -> list[M]:
        """GET a collection, following ``next_cursor`` when the server pages."""
        params = dict(params or {})
        results: list[M] = []

        while True:
            status_code, data = await self._send("GET", path, params=params or None)
            if isinstance(data, list):
                items = data
            elif isinstance(data, dict) and isinstance(data.get("results"), list):
                items = data["results"]
            else:
                raise RemoteCallError(
                    f"Unexpected response for {path} from Todoist", status_code
                )
            results.extend(_parse(model, item, status_code) for item in items)

            next_cursor = data.get("next_cursor") if isinstance(data, dict) else None
            if not next_cursor or not items:
                break
            params["cursor"] = next_cursor

        return results

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        model: type[BaseModel] | None = None,
    ) -> Any:
        """Execute one request; with *model*, validate the reply as that snapshot."""
        status_code, data = await self._send(method, path, params=params, json=json)
        if model is None:
            return data
        return _parse(model, data, status_code)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
    ) -> tuple[int, Any]:
        """Execute one request, raising RemoteCallError on any failure.

        Returns the status code and the decoded body (None when empty).
        """
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method, url, headers=self._headers, params=params, json=json
                )
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise RemoteCallError(str(e) or type(e).__name__) from e

        if response.status_code == 401:
            raise RemoteCallError(
                "Invalid Todoist API key, check your credentials.", 401
            )
        if response.is_error:
            raise RemoteCallError(
                response.reason_phrase or response.text, response.status_code
            )
        if response.status_code == 204 or not response.content:
            return response.status_code, None
        try:
            return response.status_code, response.json()
        except ValueError as e:
            logger.debug("%s %s returned a non-JSON body: %s", method, path, e)
            raise RemoteCallError(
                "Todoist returned a response that is not JSON", response.status_code
            ) from e


def _parse(model: type[M], data: Any, status_code: int) -> M:
    """Validate one remote object, mapping a shape mismatch to RemoteCallError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise RemoteCallError(
            f"Unexpected {model.__name__} payload from Todoist", status_code
        ) from e


def _payload(model) -> dict:
    return model.model_dump(exclude_none=True)


def create_todoist_client(
    api_key: str | None,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> TodoistClient | None:
    """Build a client, or return None when no usable credential is given."""
    if not api_key or not api_key.strip():
        return None
    return TodoistClient(api_key.strip(), base_url=base_url, timeout=timeout)
