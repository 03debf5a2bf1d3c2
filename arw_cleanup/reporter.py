"""
イベントレポーター

クリーンアップ処理が発行するイベントを受け取り、表示する機能を提供します。
ConsoleCleanupReporter は各イベントを重要度（情報・警告・エラー）付きの
ログ行に変換します。
"""

from pathlib import Path
from typing import Callable, Dict

from .events import (
    CleanupEvent, DeleteFailed, DeleteSkippedMissing, DeleteSucceeded,
    DirectoryStats, DryRunDelete, DryRunMove, MoveFailed, MoveSucceeded,
    QuarantineCreationFailed, RunStarted, ScanCompleted, ScanFailed, Summary
)
from .logger import ProgressLogger
from .models import HandlingMode, SummaryContext


class CleanupReporter:
    """イベントの受け取り口"""

    def publish(self, event: CleanupEvent) -> None:
        raise NotImplementedError


def _display(path: Path) -> Path:
    return path.absolute()


class ConsoleCleanupReporter(CleanupReporter):
    """イベントをコンソール（およびログファイル）に出力するレポーター"""

    def __init__(self, progress_logger: ProgressLogger):
        """
        ConsoleCleanupReporterを初期化

        Args:
            progress_logger: 出力先のロガー
        """
        self.progress_logger = progress_logger
        self._handlers: Dict[type, Callable] = {
            RunStarted: self._announce_run,
            QuarantineCreationFailed: self._quarantine_creation_failed,
            ScanFailed: self._scan_failed,
            ScanCompleted: self._scan_completed,
            DirectoryStats: self._directory_stats,
            DryRunMove: self._dry_run_move,
            DryRunDelete: self._dry_run_delete,
            MoveSucceeded: self._move_succeeded,
            MoveFailed: self._move_failed,
            DeleteSucceeded: self._delete_succeeded,
            DeleteSkippedMissing: self._delete_skipped_missing,
            DeleteFailed: self._delete_failed,
            Summary: self._summarize,
        }

    def publish(self, event: CleanupEvent) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"未対応のイベント: {event!r}")
        handler(event)

    def _announce_run(self, event: RunStarted):
        config = event.config
        log = self.progress_logger
        log.log_processing_start(config.image_dir)
        if config.dry_run:
            log.log_info("ドライラン: ファイルの削除・移動は行いません")
        if config.recursive:
            log.log_info("再帰モード: サブディレクトリも処理します")
        if config.mode is HandlingMode.QUARANTINE:
            log.log_info(
                f"隔離モード（デフォルト）: 対応するJPGがないARWファイルを "
                f"{_display(event.quarantine_dir)} に移動します"
            )
        else:
            log.log_info("削除モード: 対応するJPGがないARWファイルを完全に削除します")
        log.log_info("")

    def _quarantine_creation_failed(self, event: QuarantineCreationFailed):
        self.progress_logger.log_error(
            _display(event.quarantine_dir), f"隔離ディレクトリを作成できません: {event.reason}"
        )

    def _scan_failed(self, event: ScanFailed):
        self.progress_logger.log_error(
            _display(event.directory), f"スキャンに失敗しました: {event.reason}"
        )

    def _scan_completed(self, event: ScanCompleted):
        suffix = "（再帰）" if event.recursive else ""
        self.progress_logger.log_info(f"スキャン完了: {event.regular_file_count}個のファイル{suffix}")

    def _directory_stats(self, event: DirectoryStats):
        self.progress_logger.log_info(
            f"ディレクトリ: {_display(event.directory)} => ARW: {event.arw_count}, "
            f"JPG: {event.jpg_count}, 処理対象: {event.unmatched_count}"
        )

    def _dry_run_move(self, event: DryRunMove):
        self.progress_logger.log_info(
            f"隔離予定: {_display(event.source)} -> {_display(event.target)}"
        )

    def _dry_run_delete(self, event: DryRunDelete):
        self.progress_logger.log_info(f"削除予定: {_display(event.path)}")

    def _move_succeeded(self, event: MoveSucceeded):
        self.progress_logger.log_info(
            f"隔離完了: {_display(event.source)} -> {_display(event.target)}"
        )

    def _move_failed(self, event: MoveFailed):
        self.progress_logger.log_error(
            _display(event.source), f"隔離ディレクトリへの移動に失敗しました: {event.reason}"
        )

    def _delete_succeeded(self, event: DeleteSucceeded):
        self.progress_logger.log_info(f"削除完了: {_display(event.path)}")

    def _delete_skipped_missing(self, event: DeleteSkippedMissing):
        self.progress_logger.log_warning(
            f"削除できませんでした（ファイルが存在しません）: {_display(event.path)}"
        )

    def _delete_failed(self, event: DeleteFailed):
        self.progress_logger.log_error(
            _display(event.path), f"削除に失敗しました: {event.reason}"
        )

    def _summarize(self, event: Summary):
        context: SummaryContext = event.context
        stats = context.stats
        config = context.config
        log = self.progress_logger

        log.log_info("")
        log.log_info("処理完了サマリー")
        log.log_info(f"  - ディレクトリ数: {context.directory_count}")
        log.log_info(f"  - ARWファイル数: {stats.total_arw}")
        log.log_info(f"  - JPGファイル数: {stats.total_jpg}")

        verb = "隔離" if config.mode is HandlingMode.QUARANTINE else "削除"
        label = f"{verb}候補" if config.dry_run else f"{verb}対象"
        log.log_info(f"  - {label}（同じディレクトリに対応するJPGなし）: {stats.total_unmatched}")

        if not config.dry_run:
            if config.mode is HandlingMode.QUARANTINE:
                log.log_info(f"  - 隔離済み: {stats.quarantined} ({_display(context.quarantine_dir)})")
            else:
                log.log_info(f"  - 削除済み: {stats.deleted}")

        log.log_processing_complete()
