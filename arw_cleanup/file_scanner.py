"""
ファイルスキャナー

ディレクトリをスキャンしてARWファイルとJPGファイルを検索し、
同じディレクトリに対応するJPGがないARWファイルを判定する機能を提供します。
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .file_system import FileSystem, LocalFileSystem
from .models import DirectoryGroup
from .quarantine import is_within


class FileScanner:
    """ディレクトリをスキャンしてファイルを分類するクラス"""

    # 拡張子（大文字小文字を区別せずに比較する）
    ARW_EXTENSION = 'arw'
    JPG_EXTENSION = 'jpg'

    def __init__(self, file_system: Optional[FileSystem] = None):
        """
        FileScannerを初期化

        Args:
            file_system: ファイルシステム（省略時は実際のファイルシステム）
        """
        self.file_system = file_system or LocalFileSystem()
        self.logger = logging.getLogger(__name__)

    def scan_files(self, directory: Path, recursive: bool = False,
                   excluded: Optional[Path] = None) -> List[Path]:
        """
        ディレクトリをスキャンして通常ファイルを列挙

        Args:
            directory: スキャンするディレクトリ
            recursive: サブディレクトリも検索する場合True
            excluded: スキャン結果から除外するディレクトリ（隔離ディレクトリ）

        Returns:
            見つかったファイルのパスのリスト（ソート済み）

        Raises:
            FileOperationError: ディレクトリを読み取れない場合
        """
        if recursive:
            files = self.file_system.walk_regular_files(directory, excluded)
        else:
            files = self.file_system.list_regular_files(directory)

        if excluded is not None:
            before = len(files)
            files = [f for f in files if not is_within(f, excluded)]
            if len(files) != before:
                self.logger.debug(f"隔離ディレクトリ内のファイルを除外: {before - len(files)}個")

        return sorted(files)

    def group_by_directory(self, files: Iterable[Path]) -> Dict[Path, List[Path]]:
        """
        ファイルを親ディレクトリごとにグループ化

        Args:
            files: ファイルパス

        Returns:
            親ディレクトリ -> ファイルリストの辞書（入力順を保持）
        """
        groups: Dict[Path, List[Path]] = {}
        for file_path in files:
            groups.setdefault(file_path.parent, []).append(file_path)
        return groups

    def match_directory(self, directory: Path, files: Iterable[Path]) -> DirectoryGroup:
        """
        1つのディレクトリ内で対応するJPGがないARWファイルを判定

        同じベース名（大文字小文字を区別しない）のJPGが同じディレクトリに
        あるARWファイルは保持対象になります。同じベース名のARWが複数ある
        場合は、すべて保持対象です。

        Args:
            directory: 対象ディレクトリ
            files: そのディレクトリ直下のファイル

        Returns:
            分類結果
        """
        group = DirectoryGroup(directory=directory)
        for file_path in files:
            if self.is_arw_file(file_path):
                group.arw_files.append(file_path)
            elif self.is_jpg_file(file_path):
                group.jpg_files.append(file_path)

        keep = {self.get_basename(jpg) for jpg in group.jpg_files}
        group.unmatched = [
            arw for arw in group.arw_files
            if self.get_basename(arw) not in keep
        ]

        self.logger.debug(
            f"ディレクトリ分類: {directory} ARW={len(group.arw_files)}, "
            f"JPG={len(group.jpg_files)}, 対応なし={len(group.unmatched)}"
        )
        return group

    def get_extension(self, file_path: Path) -> str:
        """
        ファイル名から拡張子（最後の'.'より後ろ、小文字）を取得

        Args:
            file_path: ファイルパス

        Returns:
            拡張子（'.'を含まない場合は空文字列）
        """
        _, dot, extension = file_path.name.rpartition('.')
        return extension.lower() if dot else ''

    def get_basename(self, file_path: Path) -> str:
        """
        ファイルパスからベース名（拡張子を除いた小文字のファイル名）を取得

        Args:
            file_path: ファイルパス

        Returns:
            ベース名（小文字）
        """
        name = file_path.name
        if '.' in name:
            name = name.rpartition('.')[0]
        return name.lower()

    def is_arw_file(self, file_path: Path) -> bool:
        """ファイルがARWファイルかどうかを判定"""
        return self.get_extension(file_path) == self.ARW_EXTENSION

    def is_jpg_file(self, file_path: Path) -> bool:
        """ファイルがJPGファイルかどうかを判定"""
        return self.get_extension(file_path) == self.JPG_EXTENSION
