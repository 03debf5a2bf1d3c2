"""
データモデル定義

ARW Cleanup Toolで使用するデータクラスを定義します。
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


# 隔離ディレクトリ名（画像ディレクトリ直下に作成される）
QUARANTINE_DIR_NAME = '_arw_quarantine'


class HandlingMode(Enum):
    """対応するJPGがないARWファイルの処理方法"""
    QUARANTINE = 'quarantine'
    DELETE = 'delete'


@dataclass(frozen=True)
class CleanupConfig:
    """1回の実行の設定（実行中は不変）"""
    image_dir: Path
    recursive: bool = False
    dry_run: bool = False
    mode: HandlingMode = HandlingMode.QUARANTINE


@dataclass
class CleanupStats:
    """処理統計情報"""
    total_arw: int = 0
    total_jpg: int = 0
    total_unmatched: int = 0
    deleted: int = 0
    quarantined: int = 0


@dataclass(frozen=True)
class SummaryContext:
    """最終サマリーに必要な情報"""
    directory_count: int
    stats: CleanupStats
    config: CleanupConfig
    quarantine_dir: Path


@dataclass
class DirectoryGroup:
    """同じディレクトリに属するファイルの分類結果"""
    directory: Path
    arw_files: List[Path] = field(default_factory=list)
    jpg_files: List[Path] = field(default_factory=list)
    unmatched: List[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """ARWもJPGも含まない（画像ディレクトリではない）場合True"""
        return not self.arw_files and not self.jpg_files


class OperationStatus(Enum):
    """ファイル操作の結果種別"""
    SUCCEEDED = 'succeeded'
    NOT_FOUND = 'not_found'
    FAILED = 'failed'


@dataclass(frozen=True)
class OperationResult:
    """ファイル操作の結果"""
    status: OperationStatus
    reason: Optional[str] = None  # 失敗時のエラー内容

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCEEDED

    @classmethod
    def succeeded(cls) -> 'OperationResult':
        return cls(OperationStatus.SUCCEEDED)

    @classmethod
    def not_found(cls) -> 'OperationResult':
        return cls(OperationStatus.NOT_FOUND)

    @classmethod
    def failed(cls, reason: str) -> 'OperationResult':
        return cls(OperationStatus.FAILED, reason)
