"""JSONファイルによるタスクの永続化

起動時に一度だけ load() でファイルから状態を復元し、ストアの変更のたびに
save() で全件をファイルへ書き出す。書き込みは一時ファイル + os.replace で
行うため、読み手が書きかけのファイルを見ることはない。

ファイル本体は Task レコードの JSON 配列。削除済みの最大IDを再起動後に
再利用しないよう、採番カウンタは隣接する ``<file>.meta.json`` に保存する。
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .exceptions import PersistenceError
from .models import Task, TaskPriority

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta.json"


def default_seed() -> List[Task]:
    """バッキングファイルが無い/壊れている場合の初期タスク"""
    return [
        Task(
            id=1,
            title="Complete Phase 2",
            priority=TaskPriority.HIGH.value,
            due_date="2025-11-10",
        ),
        Task(
            id=2,
            title="Record Screencast",
            priority=TaskPriority.MEDIUM.value,
            due_date="2025-11-12",
        ),
    ]


@dataclass
class LoadedState:
    """load() の結果"""

    tasks: List[Task] = field(default_factory=list)
    next_id: int = 1


def _next_id_for(tasks: Sequence[Task]) -> int:
    return max((task.id for task in tasks), default=0) + 1


def _parse_tasks(payload: Any) -> List[Task]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
    tasks = [Task.from_record(record) for record in payload]
    seen: set[int] = set()
    for task in tasks:
        if task.id in seen:
            raise ValueError(f"duplicate task id: {task.id}")
        seen.add(task.id)
    return tasks


class TaskFileStorage:
    """JSONファイルベースのタスク永続化アダプタ。"""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.meta_path = self.path.with_name(self.path.name + META_SUFFIX)
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def load(self) -> LoadedState:
        """ファイルから初期状態を読み込む (プロセス起動時に一度だけ)

        Returns:
            LoadedState: タスク一覧と次に払い出すID

        Raises:
            PersistenceError: 既に読み込み済み、ファイルが読めない、
                または初期データの書き込みに失敗した場合
        """
        if self._ready:
            raise PersistenceError(f"{self.path} has already been loaded")

        if not self.path.exists():
            state = LoadedState(
                tasks=default_seed(), next_id=max(3, self._read_meta_next_id() or 0)
            )
            logger.info("Task file %s not found, writing default seed", self.path)
            self._write(state.tasks, state.next_id)
            self._ready = True
            return state

        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc

        try:
            tasks = _parse_tasks(json.loads(raw.decode("utf-8")))
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError are ValueError subclasses
            logger.exception("Task file %s is corrupted, falling back to default seed", self.path)
            self._ready = True
            # ids handed out before the corruption stay retired
            return LoadedState(
                tasks=default_seed(), next_id=max(3, self._read_meta_next_id() or 0)
            )

        next_id = max(_next_id_for(tasks), self._read_meta_next_id() or 0)
        logger.info("Loaded %d tasks from %s (next_id=%d)", len(tasks), self.path, next_id)
        self._ready = True
        return LoadedState(tasks=tasks, next_id=next_id)

    def save(self, tasks: Sequence[Task], next_id: int) -> None:
        """全タスクをファイルへ書き出す

        Raises:
            PersistenceError: load() 前の呼び出し、または書き込み失敗
        """
        if not self._ready:
            raise PersistenceError("save() called before load()")
        self._write(tasks, next_id)

    def _write(self, tasks: Sequence[Task], next_id: int) -> None:
        # counter first: a crash between the two writes can only skip ids
        self._atomic_write(self.meta_path, {"nextId": next_id})
        self._atomic_write(self.path, [task.to_record() for task in tasks])

    def _atomic_write(self, target: Path, payload: Any) -> None:
        tmp_name: Optional[str] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            logger.error("Failed to write %s: %s", target, exc)
            raise PersistenceError(f"Failed to write {target}: {exc}") from exc

    def _read_meta_next_id(self) -> Optional[int]:
        if not self.meta_path.exists():
            return None
        try:
            value = json.loads(self.meta_path.read_text(encoding="utf-8")).get("nextId")
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring unreadable counter file %s: %s", self.meta_path, exc)
            return None
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        logger.warning("Ignoring invalid nextId in %s: %r", self.meta_path, value)
        return None
