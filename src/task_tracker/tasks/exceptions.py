"""タスクストアのカスタム例外定義

ストアと永続化アダプタが送出する例外クラスを定義します。
HTTP層はこれらをステータスコード (400/404/500) に変換します。
"""


class TaskStoreError(Exception):
    """タスクストア基底例外"""

    pass


class ValidationError(TaskStoreError):
    """入力値が不正 (タイトル未指定など)。状態は変更されない"""

    pass


class NotFoundError(TaskStoreError):
    """指定IDのタスクが存在しない。状態は変更されない"""

    def __init__(self, task_id: int) -> None:
        super().__init__("Task not found.")
        self.task_id = task_id


class PersistenceError(TaskStoreError):
    """バッキングファイルの読み書きに失敗"""

    pass
