"""
クリーンアップ処理モジュール

画像ディレクトリをスキャンし、同じディレクトリに対応するJPGがないARWファイルを
隔離（移動）または削除する一連の処理を管理します。
処理の各ステップと結果はイベントとしてレポーターに通知されます。
"""

import dataclasses
import logging
from pathlib import Path
from typing import List, Optional

from .events import (
    DeleteFailed, DeleteSkippedMissing, DeleteSucceeded, DirectoryStats,
    DryRunDelete, DryRunMove, MoveFailed, MoveSucceeded,
    QuarantineCreationFailed, RunStarted, ScanCompleted, ScanFailed, Summary
)
from .exceptions import FileOperationError
from .file_scanner import FileScanner
from .file_system import FileSystem, LocalFileSystem
from .models import (
    CleanupConfig, CleanupStats, HandlingMode, OperationStatus,
    QUARANTINE_DIR_NAME, SummaryContext
)
from .quarantine import normalize, resolve_quarantine_target
from .reporter import CleanupReporter


class CleanupRunner:
    """スキャン・判定・処理を実行するクラス"""

    def __init__(self, reporter: CleanupReporter, file_system: Optional[FileSystem] = None):
        """
        CleanupRunnerを初期化

        Args:
            reporter: イベントの通知先
            file_system: ファイルシステム（省略時は実際のファイルシステム）
        """
        self.reporter = reporter
        self.file_system = file_system or LocalFileSystem()
        self.file_scanner = FileScanner(self.file_system)
        self.logger = logging.getLogger(__name__)

    def run(self, config: CleanupConfig) -> Optional[SummaryContext]:
        """
        クリーンアップを実行

        ファイル単位の失敗はイベントとして通知され、処理は継続します。
        隔離ディレクトリの作成に失敗した場合、またはスキャンに失敗した場合は
        ファイルに一切触れずに終了します。

        Args:
            config: 実行設定

        Returns:
            サマリー情報（処理が中断された場合はNone）
        """
        quarantine_dir = normalize(config.image_dir / QUARANTINE_DIR_NAME)

        if config.mode is HandlingMode.QUARANTINE and not config.dry_run:
            if not self._ensure_quarantine_exists(quarantine_dir):
                return None

        self.reporter.publish(RunStarted(config=config, quarantine_dir=quarantine_dir))

        try:
            files = self.file_scanner.scan_files(
                config.image_dir, config.recursive, excluded=quarantine_dir
            )
        except FileOperationError as e:
            self.reporter.publish(ScanFailed(directory=config.image_dir, reason=str(e)))
            return None

        self.reporter.publish(ScanCompleted(regular_file_count=len(files), recursive=config.recursive))

        stats = CleanupStats()
        files_by_dir = self.file_scanner.group_by_directory(files)
        for directory, dir_files in files_by_dir.items():
            self._process_directory(directory, dir_files, config, quarantine_dir, stats)

        context = SummaryContext(
            directory_count=len(files_by_dir),
            stats=dataclasses.replace(stats),
            config=config,
            quarantine_dir=quarantine_dir
        )
        self.reporter.publish(Summary(context=context))
        return context

    def _ensure_quarantine_exists(self, quarantine_dir: Path) -> bool:
        result = self.file_system.create_directories(quarantine_dir)
        if not result.ok:
            self.reporter.publish(QuarantineCreationFailed(
                quarantine_dir=quarantine_dir, reason=result.reason or "不明なエラー"
            ))
            return False
        return True

    def _process_directory(self, directory: Path, files: List[Path], config: CleanupConfig,
                           quarantine_dir: Path, stats: CleanupStats) -> None:
        group = self.file_scanner.match_directory(directory, files)
        if group.is_empty:
            return

        stats.total_arw += len(group.arw_files)
        stats.total_jpg += len(group.jpg_files)
        stats.total_unmatched += len(group.unmatched)

        self.reporter.publish(DirectoryStats(
            directory=directory,
            arw_count=len(group.arw_files),
            jpg_count=len(group.jpg_files),
            unmatched_count=len(group.unmatched)
        ))

        for file_path in group.unmatched:
            self._handle_file(file_path, config, quarantine_dir, stats)

    def _handle_file(self, file_path: Path, config: CleanupConfig,
                     quarantine_dir: Path, stats: CleanupStats) -> None:
        if config.dry_run:
            if config.mode is HandlingMode.QUARANTINE:
                target = resolve_quarantine_target(quarantine_dir, config.image_dir, file_path)
                self.reporter.publish(DryRunMove(source=file_path, target=target))
            else:
                self.reporter.publish(DryRunDelete(path=file_path))
            return

        if config.mode is HandlingMode.QUARANTINE:
            self._move_to_quarantine(file_path, config.image_dir, quarantine_dir, stats)
        else:
            self._delete_file(file_path, stats)

    def _move_to_quarantine(self, file_path: Path, image_dir: Path,
                            quarantine_dir: Path, stats: CleanupStats) -> None:
        try:
            target = resolve_quarantine_target(quarantine_dir, image_dir, file_path)

            # 再帰モードでは隔離先にサブディレクトリが必要になる
            result = self.file_system.create_directories(target.parent)
            if result.ok:
                result = self.file_system.move(file_path, target, overwrite=True)
        except Exception as e:
            self.logger.debug(f"隔離処理で予期しないエラー: {file_path}", exc_info=e)
            self.reporter.publish(MoveFailed(source=file_path, reason=f"予期しないエラー: {e}"))
            return

        if result.ok:
            stats.quarantined += 1
            self.reporter.publish(MoveSucceeded(source=file_path, target=target))
        else:
            self.reporter.publish(MoveFailed(source=file_path, reason=result.reason or "不明なエラー"))

    def _delete_file(self, file_path: Path, stats: CleanupStats) -> None:
        try:
            result = self.file_system.delete_if_exists(file_path)
        except Exception as e:
            self.logger.debug(f"削除処理で予期しないエラー: {file_path}", exc_info=e)
            self.reporter.publish(DeleteFailed(path=file_path, reason=f"予期しないエラー: {e}"))
            return

        if result.status is OperationStatus.SUCCEEDED:
            stats.deleted += 1
            self.reporter.publish(DeleteSucceeded(path=file_path))
        elif result.status is OperationStatus.NOT_FOUND:
            self.reporter.publish(DeleteSkippedMissing(path=file_path))
        else:
            self.reporter.publish(DeleteFailed(path=file_path, reason=result.reason or "不明なエラー"))
