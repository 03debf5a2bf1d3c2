"""
隔離先パスの計算

隔離ディレクトリ内での移動先パスを、画像ディレクトリからの相対パスを
保ったまま計算します。
"""

import os
from pathlib import Path


def normalize(path: Path) -> Path:
    """パスを字句的に正規化（'.' や '..' を解決、シンボリックリンクは辿らない）"""
    return Path(os.path.normpath(path))


def is_within(path: Path, root: Path) -> bool:
    """
    パスがrootそのもの、またはroot配下にあるかを判定

    Args:
        path: 判定するパス
        root: 基準ディレクトリ

    Returns:
        root配下にある場合True
    """
    path = normalize(path)
    root = normalize(root)
    return path == root or root in path.parents


def resolve_quarantine_target(quarantine_root: Path, image_root: Path, file_path: Path) -> Path:
    """
    ファイルの隔離先パスを計算

    画像ディレクトリからの相対パスを隔離ディレクトリ配下に再現します。
    ファイルが画像ディレクトリ配下にない場合は、隔離ディレクトリ直下に
    ファイル名だけで配置します（同名ファイルは上書きされる可能性があります）。

    Args:
        quarantine_root: 隔離ディレクトリ
        image_root: 画像ディレクトリ
        file_path: 隔離するファイル

    Returns:
        隔離先のパス
    """
    try:
        relative = normalize(file_path).relative_to(normalize(image_root))
    except ValueError:
        return normalize(quarantine_root / file_path.name)

    if not relative.parts:
        return normalize(quarantine_root / file_path.name)

    return normalize(quarantine_root / relative)
