"""Task Store

メモリ上のタスク一覧と採番カウンタを保持し、list/create/toggle/delete を
提供する。変更系の操作はすべて、呼び出し元に結果を返す前に
TaskFileStorage.save() で同期的にファイルへ書き出す。

保存に失敗した場合はメモリ上の変更を取り消して PersistenceError を送出する。
失敗した create で払い出したIDは再利用しない。
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import List, Optional

from .exceptions import NotFoundError, PersistenceError, ValidationError
from .models import Task, TaskPriority
from .persistence import TaskFileStorage

logger = logging.getLogger(__name__)


def _normalize_priority(priority: Optional[str]) -> str:
    if priority is None or priority == "":
        return TaskPriority.MEDIUM.value
    return str(priority)


def _normalize_due_date(due_date: Optional[str]) -> Optional[str]:
    if due_date is None or due_date == "":
        return None
    return str(due_date)


class TaskStore:
    """タスクのインメモリ一覧 + ファイル永続化。スレッドセーフ。"""

    def __init__(self, storage: TaskFileStorage):
        self._storage = storage
        self._lock = threading.RLock()
        state = storage.load()
        self._tasks: List[Task] = state.tasks
        self._next_id = state.next_id
        logger.info(
            "TaskStore ready path=%s total=%d next_id=%d",
            storage.path,
            len(self._tasks),
            self._next_id,
        )

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def list(self) -> List[Task]:
        """全タスクのスナップショットを挿入順で返す"""
        with self._lock:
            return [dataclasses.replace(task) for task in self._tasks]

    def get(self, task_id: int) -> Task:
        with self._lock:
            return dataclasses.replace(self._find(task_id)[1])

    def create(
        self,
        title: Optional[str],
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> Task:
        """新しいタスクを追加して保存する

        Raises:
            ValidationError: タイトルが未指定または空白のみの場合
            PersistenceError: 保存に失敗した場合 (追加は取り消される)
        """
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Task title is required.")
        task_priority = _normalize_priority(priority)
        task_due_date = _normalize_due_date(due_date)

        with self._lock:
            task = Task(
                id=self._next_id,
                title=title.strip(),
                priority=task_priority,
                due_date=task_due_date,
            )
            self._next_id += 1
            self._tasks.append(task)
            try:
                self._save()
            except PersistenceError:
                self._tasks.pop()
                raise
            logger.info("Task created: id=%d", task.id)
            return dataclasses.replace(task)

    def toggle(self, task_id: int) -> Task:
        """完了フラグを反転して保存する

        Raises:
            NotFoundError: 指定IDのタスクが存在しない場合
            PersistenceError: 保存に失敗した場合 (反転は取り消される)
        """
        with self._lock:
            _, task = self._find(task_id)
            task.completed = not task.completed
            try:
                self._save()
            except PersistenceError:
                task.completed = not task.completed
                raise
            logger.info("Task toggled: id=%d completed=%s", task.id, task.completed)
            return dataclasses.replace(task)

    def delete(self, task_id: int) -> None:
        """タスクを削除して保存する

        Raises:
            NotFoundError: 指定IDのタスクが存在しない場合
            PersistenceError: 保存に失敗した場合 (削除は取り消される)
        """
        with self._lock:
            index, task = self._find(task_id)
            del self._tasks[index]
            try:
                self._save()
            except PersistenceError:
                self._tasks.insert(index, task)
                raise
            logger.info("Task deleted: id=%d", task_id)

    def _find(self, task_id: int) -> tuple[int, Task]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index, task
        raise NotFoundError(task_id)

    def _save(self) -> None:
        self._storage.save(self._tasks, self._next_id)
