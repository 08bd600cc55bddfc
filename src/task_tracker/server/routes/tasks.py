"""Task endpoints."""

from __future__ import annotations

import asyncio
from typing import List

from fastapi import Depends, FastAPI, Response, status

from task_tracker.tasks import NotFoundError, TaskStore

from ..dependencies import get_task_store, serialize_task
from ..schemas import ErrorResponse, HealthResponse, TaskCreateRequest, TaskResponse


NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}}
BAD_REQUEST_RESPONSES = {400: {"model": ErrorResponse}}


def _parse_task_id(raw_id: str) -> int:
    # only plain decimal ids can match a task
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise NotFoundError(-1)
    return int(raw_id)


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD endpoints."""

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/api/tasks", response_model=List[TaskResponse])
    async def list_tasks(store: TaskStore = Depends(get_task_store)) -> List[TaskResponse]:
        """List tasks in insertion order."""
        tasks = await asyncio.to_thread(store.list)
        return [serialize_task(task) for task in tasks]

    @app.post(
        "/api/tasks",
        response_model=TaskResponse,
        status_code=status.HTTP_201_CREATED,
        responses=BAD_REQUEST_RESPONSES,
    )
    async def create_task(
        request: TaskCreateRequest, store: TaskStore = Depends(get_task_store)
    ) -> TaskResponse:
        """Create a new task."""
        task = await asyncio.to_thread(
            store.create,
            request.title,
            request.priority,
            request.dueDate,
        )
        return serialize_task(task)

    @app.put("/api/tasks/{task_id}/toggle", response_model=TaskResponse, responses=NOT_FOUND_RESPONSES)
    async def toggle_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> TaskResponse:
        """Flip the completed flag of a task."""
        task = await asyncio.to_thread(store.toggle, _parse_task_id(task_id))
        return serialize_task(task)

    @app.delete(
        "/api/tasks/{task_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses=NOT_FOUND_RESPONSES,
    )
    async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)) -> Response:
        """Delete a task."""
        await asyncio.to_thread(store.delete, _parse_task_id(task_id))
        return Response(status_code=status.HTTP_204_NO_CONTENT)
