"""
クリーンアップイベント定義

クリーンアップ処理の各ステップと結果を表すイベントを定義します。
イベントは発生順にレポーターへ渡され、表示方法はレポーター側で決まります。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .models import CleanupConfig, SummaryContext


@dataclass(frozen=True)
class RunStarted:
    """処理開始"""
    config: CleanupConfig
    quarantine_dir: Path


@dataclass(frozen=True)
class QuarantineCreationFailed:
    """隔離ディレクトリの作成失敗（処理は中断される）"""
    quarantine_dir: Path
    reason: str


@dataclass(frozen=True)
class ScanFailed:
    """画像ディレクトリのスキャン失敗（処理は中断される）"""
    directory: Path
    reason: str


@dataclass(frozen=True)
class ScanCompleted:
    """スキャン完了"""
    regular_file_count: int
    recursive: bool


@dataclass(frozen=True)
class DirectoryStats:
    """ディレクトリごとの集計"""
    directory: Path
    arw_count: int
    jpg_count: int
    unmatched_count: int


@dataclass(frozen=True)
class DryRunMove:
    """ドライラン: 隔離予定"""
    source: Path
    target: Path


@dataclass(frozen=True)
class DryRunDelete:
    """ドライラン: 削除予定"""
    path: Path


@dataclass(frozen=True)
class MoveSucceeded:
    source: Path
    target: Path


@dataclass(frozen=True)
class MoveFailed:
    source: Path
    reason: str


@dataclass(frozen=True)
class DeleteSucceeded:
    path: Path


@dataclass(frozen=True)
class DeleteSkippedMissing:
    """削除対象がスキャン後に消えていた"""
    path: Path


@dataclass(frozen=True)
class DeleteFailed:
    path: Path
    reason: str


@dataclass(frozen=True)
class Summary:
    """処理完了サマリー"""
    context: SummaryContext


CleanupEvent = Union[
    RunStarted,
    QuarantineCreationFailed,
    ScanFailed,
    ScanCompleted,
    DirectoryStats,
    DryRunMove,
    DryRunDelete,
    MoveSucceeded,
    MoveFailed,
    DeleteSucceeded,
    DeleteSkippedMissing,
    DeleteFailed,
    Summary,
]
