from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TaskPriority(str, Enum):
    """UIが提示する優先度。Task.priority は任意の文字列を保持できる。"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(slots=True)
class Task:
    """永続化済みタスクの表現。"""

    id: int
    title: str
    priority: str = TaskPriority.MEDIUM.value
    due_date: Optional[str] = None
    completed: bool = False

    def to_record(self) -> Dict[str, Any]:
        """JSONファイル/APIに書き出す辞書形式 (camelCaseキー)"""
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority,
            "dueDate": self.due_date,
            "completed": self.completed,
        }

    @classmethod
    def from_record(cls, record: Any) -> "Task":
        """永続化レコードからTaskを復元する。

        Raises:
            ValueError: レコードの形式が不正な場合
        """
        if not isinstance(record, dict):
            raise ValueError(f"task record must be an object, got {type(record).__name__}")

        task_id = record.get("id")
        # bool is an int subclass
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid task id: {task_id!r}")

        title = record.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"invalid title for task {task_id}")

        due_date = record.get("dueDate")
        if due_date is not None and not isinstance(due_date, str):
            raise ValueError(f"invalid dueDate for task {task_id}")

        priority = record.get("priority")
        if priority is None:
            priority = TaskPriority.MEDIUM.value
        elif not isinstance(priority, str):
            raise ValueError(f"invalid priority for task {task_id}")

        completed = record.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag for task {task_id}")

        return cls(
            id=task_id,
            title=title,
            priority=priority,
            due_date=due_date,
            completed=completed,
        )
