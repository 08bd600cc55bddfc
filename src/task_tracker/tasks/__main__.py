"""タスクCLI実行用エントリポイント

Usage:
    python -m task_tracker.tasks <command> [options]
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
