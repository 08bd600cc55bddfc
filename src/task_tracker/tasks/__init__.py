"""Task store and file persistence shared by the HTTP server and CLI."""

from .exceptions import NotFoundError, PersistenceError, TaskStoreError, ValidationError
from .models import Task, TaskPriority
from .persistence import LoadedState, TaskFileStorage
from .store import TaskStore

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStore",
    "TaskFileStorage",
    "LoadedState",
    "TaskStoreError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
]
