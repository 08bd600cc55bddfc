from __future__ import annotations

from pathlib import Path

import pytest

from task_tracker.tasks import TaskFileStorage, TaskStore


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """テスト用の一時タスクファイルパス (未作成)"""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(data_file: Path) -> TaskStore:
    """デフォルトシードで初期化されたTaskStore"""
    return TaskStore(TaskFileStorage(data_file))


@pytest.fixture(autouse=True)
def _clear_data_file_env(monkeypatch):
    monkeypatch.delenv("TASK_TRACKER_DATA_FILE", raising=False)
