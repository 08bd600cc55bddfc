"""
設定管理モジュール

関連クラス:
  - server.dependencies: この設定から TaskStore を組み立てる
  - tasks.persistence.TaskFileStorage: storage.data_file を使用
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_FILE_ENV = "TASK_TRACKER_DATA_FILE"

logger = logging.getLogger(__name__)


def resolve_path(value: str) -> Path:
    """相対パスをプロジェクトルート基準で解決（インストール時はカレントディレクトリ基準）"""
    path = Path(value)
    if path.is_absolute():
        return path
    base = PROJECT_ROOT if (PROJECT_ROOT / "config").is_dir() else Path.cwd()
    return base / path


@dataclass
class ServerConfig:
    """HTTPサーバ設定"""

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    static_dir: Optional[str] = "public"


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # タスク保存先
    data_file: str = "data/tasks.json"

    # サーバ設定
    server: ServerConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/task_tracker.log"

    def __post_init__(self):
        """デフォルト値の初期化と環境変数による上書き"""
        if self.server is None:
            self.server = ServerConfig()
        env_path = os.getenv(DATA_FILE_ENV)
        if env_path:
            self.data_file = env_path

    @property
    def data_path(self) -> Path:
        """data_file を絶対パスに解決"""
        return resolve_path(self.data_file)

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（ファイルが無い場合は from_env() の結果）
        """
        if config_path is None:
            config_path = PROJECT_ROOT / "config" / "app_config.yaml"

        if not Path(config_path).is_file():
            logger.warning("Config file %s not found, using environment settings", config_path)
            return cls.from_env()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        storage_data = yaml_data.get("storage", {})
        server_data = yaml_data.get("server", {})
        log_data = yaml_data.get("log", {})

        return cls(
            data_file=storage_data.get("data_file", "data/tasks.json"),
            server=ServerConfig(
                host=server_data.get("host", "0.0.0.0"),
                port=server_data.get("port", 3000),
                cors_origins=server_data.get("cors_origins", ["*"]),
                static_dir=server_data.get("static_dir", "public"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/task_tracker.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        origins = os.getenv("TASK_TRACKER_CORS_ORIGINS", "*")
        return cls(
            data_file=os.getenv(DATA_FILE_ENV, "data/tasks.json"),
            server=ServerConfig(
                host=os.getenv("TASK_TRACKER_HOST", "0.0.0.0"),
                port=int(os.getenv("TASK_TRACKER_PORT", "3000")),
                cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
                static_dir=os.getenv("TASK_TRACKER_STATIC_DIR", "public"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/task_tracker.log"),
        )
