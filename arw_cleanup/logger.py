"""
ロギングシステム

ARW Cleanup Toolのロギング機能を提供します。
標準出力・標準エラー出力とファイル出力をサポートし、処理開始・完了の表示と
エラーログを管理します。
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'arw_cleanup'


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False


class _BelowErrorFilter(logging.Filter):
    """ERROR未満のレコードのみを通すフィルター"""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


class ProgressLogger:
    """処理状況の表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーをクリア
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        console_formatter = logging.Formatter('%(message)s')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # コンソールハンドラー（ERROR未満は標準出力、ERROR以上は標準エラー出力）
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(self.config.console_level)
        stdout_handler.addFilter(_BelowErrorFilter())
        stdout_handler.setFormatter(console_formatter)
        logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(max(self.config.console_level, logging.ERROR))
        stderr_handler.setFormatter(console_formatter)
        logger.addHandler(stderr_handler)

        # ファイルハンドラー（指定されている場合）
        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, image_dir: Path):
        """処理開始時のバナー表示"""
        self._start_time = datetime.now()

        self.logger.info("=" * 60)
        self.logger.info("ARW Cleanup Tool - 処理開始")
        self.logger.info("=" * 60)
        self.logger.info(f"開始時刻: {self._start_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"画像ディレクトリ: {image_dir}")

    def log_processing_complete(self):
        """処理完了時のフッター表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("=" * 60)
        self.logger.info(f"終了時刻: {end_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"総処理時間: {total_time:.2f}秒")
        self.logger.info("=" * 60)

    def log_error(self, file_path: Path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"エラー - {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__}: {str(exception)})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("スタックトレース:", exc_info=exception)

    def log_warning(self, message: str):
        """警告メッセージのログ"""
        self.logger.warning(f"警告: {message}")

    def log_info(self, message: str):
        """情報メッセージのログ"""
        self.logger.info(message)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.arw_cleanup' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'arw_cleanup_{timestamp}.log'
