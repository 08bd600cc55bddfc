"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from task_tracker.config import Config
from task_tracker.tasks import Task, TaskFileStorage, TaskStore

from .schemas import TaskResponse


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Lazily load config/app_config.yaml once per process."""
    return Config.from_yaml()


def build_task_store(config: Config) -> TaskStore:
    """Create the store and load its state from the configured file."""
    return TaskStore(TaskFileStorage(config.data_path))


def get_task_store(request: Request) -> TaskStore:
    """Return the store attached to the running application."""
    return request.app.state.task_store


def serialize_task(task: Task) -> TaskResponse:
    """Convert domain Task to API response."""
    return TaskResponse(**task.to_record())
