#!/usr/bin/env python3
"""
タスク管理CLI - HTTPサーバを介さずにタスクファイルを操作する

Usage:
    python -m task_tracker.tasks list [--format json|text]
    python -m task_tracker.tasks add --title "タイトル" [--priority Low|Medium|High] [--due-date YYYY-MM-DD]
    python -m task_tracker.tasks get --id ID [--format json|text]
    python -m task_tracker.tasks toggle --id ID
    python -m task_tracker.tasks delete --id ID
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from ..config import Config
from .exceptions import NotFoundError, TaskStoreError
from .models import Task
from .persistence import TaskFileStorage
from .store import TaskStore


def format_task_text(task: Task) -> str:
    """タスクをテキスト形式で整形"""
    mark = "x" if task.completed else " "
    due = task.due_date or "-"
    return f"[{mark}] {task.id}: {task.title} | {task.priority} | due: {due}"


def _print_task(task: Task, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(task.to_record(), ensure_ascii=False))
    else:
        print(f"{prefix}{format_task_text(task)}")


def cmd_list(store: TaskStore, output_format: str) -> int:
    """タスク一覧を表示"""
    tasks = store.list()
    if output_format == "json":
        print(json.dumps([task.to_record() for task in tasks], ensure_ascii=False))
    elif not tasks:
        print("No tasks.")
    else:
        for task in tasks:
            print(format_task_text(task))
    return 0


def cmd_add(
    store: TaskStore,
    title: str,
    priority: Optional[str],
    due_date: Optional[str],
    output_format: str,
) -> int:
    """新しいタスクを追加"""
    created = store.create(title, priority=priority, due_date=due_date)
    _print_task(created, output_format, prefix="Added: ")
    return 0


def cmd_get(store: TaskStore, task_id: int, output_format: str) -> int:
    """特定のタスクを表示"""
    _print_task(store.get(task_id), output_format)
    return 0


def cmd_toggle(store: TaskStore, task_id: int, output_format: str) -> int:
    """完了状態を切り替え"""
    updated = store.toggle(task_id)
    _print_task(updated, output_format, prefix="Toggled: ")
    return 0


def cmd_delete(store: TaskStore, task_id: int, output_format: str) -> int:
    """タスクを削除"""
    store.delete(task_id)
    if output_format == "json":
        print(json.dumps({"deleted": True, "id": task_id}))
    else:
        print(f"Deleted: {task_id}")
    return 0


def _add_format_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="タスク管理CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-file",
        type=str,
        help="タスクファイルのパス（デフォルト: config/app_config.yaml の storage.data_file）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    parser_list = subparsers.add_parser("list", help="タスク一覧を表示")
    _add_format_option(parser_list)

    parser_add = subparsers.add_parser("add", help="新しいタスクを追加")
    parser_add.add_argument("--title", required=True, help="タスクのタイトル")
    parser_add.add_argument(
        "--priority",
        help="優先度（Low/Medium/High など、デフォルト: Medium）",
    )
    parser_add.add_argument("--due-date", help="期限日（YYYY-MM-DD形式）")
    _add_format_option(parser_add)

    for name, help_text in (
        ("get", "特定のタスクを表示"),
        ("toggle", "完了状態を切り替え"),
        ("delete", "タスクを削除"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", type=int, required=True, help="対象タスクのID")
        _add_format_option(sub)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)
    data_file = args.data_file or Config.from_yaml().data_path

    try:
        store = TaskStore(TaskFileStorage(data_file))
        if args.command == "list":
            return cmd_list(store, args.format)
        if args.command == "add":
            return cmd_add(store, args.title, args.priority, args.due_date, args.format)
        if args.command == "get":
            return cmd_get(store, args.id, args.format)
        if args.command == "toggle":
            return cmd_toggle(store, args.id, args.format)
        if args.command == "delete":
            return cmd_delete(store, args.id, args.format)
    except NotFoundError as exc:
        print(f"Error: ID {exc.task_id}: {exc}", file=sys.stderr)
        return 1
    except TaskStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Error: unknown command: {args.command}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
