"""
ロギング設定モジュール

task_tracker パッケージのロガーと uvicorn のロガーに同じハンドラを設定する。
ルートロガーには触れないので、テストやホストアプリのログ設定と干渉しない。
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "task_tracker"
SERVER_LOGGER = "uvicorn"

# handlers installed by the previous setup_logger() call
_installed: List[logging.Handler] = []


def setup_logger(
    log_level: str = "INFO", log_file: Optional[str] = "logs/task_tracker.log"
) -> logging.Logger:
    """
    ロガーのセットアップ（再呼び出し時は前回のハンドラを置き換える）

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス。None の場合は標準エラーのみ

    Returns:
        logging.Logger: task_tracker パッケージのロガー
    """
    level = getattr(logging, log_level.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    for name in (PACKAGE_LOGGER, SERVER_LOGGER):
        target = logging.getLogger(name)
        for old in _installed:
            target.removeHandler(old)
        for handler in handlers:
            target.addHandler(handler)
        target.setLevel(level)

    for old in _installed:
        old.close()
    _installed[:] = handlers
    return logging.getLogger(PACKAGE_LOGGER)
