"""
ファイルシステムアダプター

ディレクトリ一覧の取得、ディレクトリ作成、削除、移動といったファイル操作を
抽象化します。実行時は LocalFileSystem を使用し、テストではメモリ上の
偽ファイルシステムに差し替えることができます。

削除・移動・ディレクトリ作成は例外を送出せず、OperationResult で結果を返します。
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional

from .exceptions import FileOperationError
from .models import OperationResult
from .quarantine import is_within


def describe_error(error: OSError) -> str:
    """
    OSErrorを失敗理由の文字列に変換

    Args:
        error: 発生した例外

    Returns:
        失敗理由
    """
    if isinstance(error, PermissionError):
        return f"アクセス権限エラー: {error}"
    return f"ファイル操作エラー: {error}"


class FileSystem:
    """ファイル操作のインターフェース"""

    def create_directories(self, path: Path) -> OperationResult:
        """親ディレクトリを含めてディレクトリを作成（既に存在する場合は何もしない）"""
        raise NotImplementedError

    def list_regular_files(self, directory: Path) -> List[Path]:
        """直下の通常ファイルを列挙（サブディレクトリは含まない）"""
        raise NotImplementedError

    def walk_regular_files(self, directory: Path, excluded: Optional[Path] = None) -> List[Path]:
        """ディレクトリ配下のすべての通常ファイルを列挙（excluded 配下は辿らない）"""
        raise NotImplementedError

    def delete_if_exists(self, path: Path) -> OperationResult:
        """ファイルを削除（存在しない場合は NOT_FOUND）"""
        raise NotImplementedError

    def move(self, source: Path, target: Path, overwrite: bool = False) -> OperationResult:
        """ファイルを移動（overwrite=True の場合は既存ファイルを置き換える）"""
        raise NotImplementedError

    def exists(self, path: Path) -> bool:
        """パスが存在するかを判定"""
        raise NotImplementedError

    def is_directory(self, path: Path) -> bool:
        """パスがディレクトリかを判定"""
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    """実際のファイルシステムを操作する実装"""

    def __init__(self):
        """LocalFileSystemを初期化"""
        self.logger = logging.getLogger(__name__)

    def create_directories(self, path: Path) -> OperationResult:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # 同名のファイルが存在する場合も FileExistsError になる
            self.logger.debug(f"ディレクトリ作成失敗: {path} - {e}")
            return OperationResult.failed(describe_error(e))

        self.logger.debug(f"ディレクトリ作成: {path}")
        return OperationResult.succeeded()

    def list_regular_files(self, directory: Path) -> List[Path]:
        """
        直下の通常ファイルを列挙

        Args:
            directory: 対象ディレクトリ

        Returns:
            通常ファイルのパスのリスト（順序は不定）

        Raises:
            FileOperationError: ディレクトリを読み取れない場合
        """
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise FileOperationError(
                f"ディレクトリを読み取れません: {directory} - {describe_error(e)}"
            ) from e
        return [entry for entry in entries if self._is_regular_file(entry)]

    def _is_regular_file(self, path: Path) -> bool:
        # 状態を取得できないエントリは警告を出して対象外とする
        try:
            return path.is_file()
        except OSError as e:
            self.logger.warning(f"ファイルをスキップ: {path} - {describe_error(e)}")
            return False

    def walk_regular_files(self, directory: Path, excluded: Optional[Path] = None) -> List[Path]:
        """
        ディレクトリ配下のすべての通常ファイルを列挙

        読み取れないサブディレクトリや状態を取得できないファイルは
        警告を出してスキップします。

        Args:
            directory: 起点ディレクトリ
            excluded: 辿らないディレクトリ（隔離ディレクトリ）

        Returns:
            通常ファイルのパスのリスト（順序は不定）

        Raises:
            FileOperationError: 起点ディレクトリを読み取れない場合
        """
        if not directory.is_dir():
            raise FileOperationError(f"ディレクトリが存在しません: {directory}")

        def _on_error(error: OSError) -> None:
            if error.filename is not None and Path(error.filename) == directory:
                raise FileOperationError(
                    f"ディレクトリを読み取れません: {directory} - {describe_error(error)}"
                ) from error
            self.logger.warning(f"サブディレクトリをスキップ: {error.filename} - {describe_error(error)}")

        files = []
        for root, dirs, names in os.walk(directory, onerror=_on_error):
            if excluded is not None:
                dirs[:] = [d for d in dirs if not is_within(Path(root) / d, excluded)]
            for name in names:
                file_path = Path(root) / name
                if self._is_regular_file(file_path):
                    files.append(file_path)
        return files

    def delete_if_exists(self, path: Path) -> OperationResult:
        try:
            path.unlink()
        except FileNotFoundError:
            return OperationResult.not_found()
        except OSError as e:
            self.logger.debug(f"削除失敗: {path} - {e}")
            return OperationResult.failed(describe_error(e))

        self.logger.debug(f"削除成功: {path}")
        return OperationResult.succeeded()

    def move(self, source: Path, target: Path, overwrite: bool = False) -> OperationResult:
        # 親ディレクトリは呼び出し側で作成しておく必要がある
        if not target.parent.is_dir():
            return OperationResult.failed(f"移動先ディレクトリが存在しません: {target.parent}")

        if target.exists():
            if not overwrite:
                return OperationResult.failed(f"移動先ファイルが既に存在します: {target}")
            if target.is_dir():
                return OperationResult.failed(f"移動先がディレクトリです: {target}")

        try:
            os.replace(source, target)
        except OSError as e:
            if e.errno != errno.EXDEV:
                self.logger.debug(f"移動失敗: {source} -> {target} - {e}")
                return OperationResult.failed(describe_error(e))

            # 異なるファイルシステム間ではコピーしてから元ファイルを削除
            try:
                shutil.move(str(source), str(target))
            except OSError as move_error:
                self.logger.debug(f"移動失敗: {source} -> {target} - {move_error}")
                return OperationResult.failed(describe_error(move_error))

        self.logger.debug(f"移動成功: {source} -> {target}")
        return OperationResult.succeeded()

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()
