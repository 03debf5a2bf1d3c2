"""
パス検証ユーティリティ

コマンドラインで指定された画像ディレクトリパスの検証と正規化を提供します。
"""

import os
from pathlib import Path

from .exceptions import ValidationError


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def validate_directory(path: Path) -> None:
        """
        ディレクトリの存在とアクセス権を検証

        Args:
            path: 検証するディレクトリパス

        Raises:
            ValidationError: ディレクトリが存在しない、アクセス不可能、
                           またはディレクトリではない場合
        """
        if not path.exists():
            raise ValidationError(f"ディレクトリが存在しません: {path}")

        if not path.is_dir():
            raise ValidationError(f"指定されたパスはディレクトリではありません: {path}")

        # 読み取り権限の確認
        if not os.access(path, os.R_OK):
            raise ValidationError(f"ディレクトリに読み取り権限がありません: {path}")

    @staticmethod
    def normalize_path(path_str: str) -> Path:
        """
        パス文字列を正規化してPathオブジェクトに変換

        Args:
            path_str: パス文字列

        Returns:
            正規化されたPathオブジェクト

        Raises:
            ValidationError: パスとして解釈できない場合
        """
        if not path_str.strip():
            raise ValidationError("画像ディレクトリのパスが空です")

        try:
            return Path(path_str).expanduser().resolve()
        except (OSError, RuntimeError, ValueError) as e:
            raise ValidationError(f"無効なパス: {path_str} ({e})") from e
