"""
コマンドラインインターフェース

ARW Cleanup Toolのメインエントリーポイントです。
引数を解析して CleanupConfig を作成し、クリーンアップ処理を実行します。
"""

import argparse
import sys
from typing import List, Optional

from .cleanup_runner import CleanupRunner
from .exceptions import ProcessingError, ValidationError
from .logger import create_default_logger, get_default_log_file
from .models import CleanupConfig, HandlingMode
from .path_validator import PathValidator
from .reporter import ConsoleCleanupReporter

# 認識するオプション（大文字小文字を区別しない）
KNOWN_OPTIONS = {
    '--dry-run', '-n',
    '--recursive', '-r',
    '--delete', '-d',
    '--verbose', '-v',
    '--help', '-h',
}


class _ArgumentParser(argparse.ArgumentParser):
    """解析エラーを ValidationError として送出するパーサー"""

    def error(self, message):
        raise ValidationError(message)


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = _ArgumentParser(
        prog='arw-cleanup',
        description=(
            '同じディレクトリに同名のJPGファイルがないARWファイルを検出し、'
            '隔離ディレクトリ（_arw_quarantine）に移動します。\n'
            '--delete を指定した場合は完全に削除します。\n'
            'ファイル名の比較は大文字小文字を区別しません。'
            'パスに空白を含む場合は引用符で囲んでください。'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
使用例:
  # 対応するJPGがないARWファイルを隔離
  arw-cleanup "/path/to/My Images"

  # サブディレクトリも含めて、処理内容だけを確認
  arw-cleanup --dry-run --recursive /path/to/photos/2025

  # 隔離せずに削除
  arw-cleanup --delete /path/to/photos/2025
        """
    )
    parser.add_argument(
        'image_dir',
        nargs='*',
        metavar='<image_directory_path>',
        help='画像ディレクトリのパス'
    )
    parser.add_argument(
        '--dry-run', '-n',
        action='store_true',
        help='ファイルを変更せずに、削除・移動の予定だけを表示'
    )
    parser.add_argument(
        '--recursive', '-r',
        action='store_true',
        help='サブディレクトリも処理する'
    )
    parser.add_argument(
        '--delete', '-d',
        action='store_true',
        help='隔離せずにARWファイルを削除する'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='詳細ログを表示し、ログファイルにも記録する'
    )
    parser.add_argument(
        '--help', '-h',
        action='store_true',
        help='このヘルプを表示'
    )
    return parser


def normalize_arguments(argv: List[str]) -> List[str]:
    """
    オプションを小文字に揃え、未知のオプションを検出

    Args:
        argv: コマンドライン引数

    Returns:
        正規化された引数

    Raises:
        ValidationError: 未知のオプションが含まれる場合
    """
    normalized = []
    for arg in argv:
        lowered = arg.lower()
        if lowered in KNOWN_OPTIONS:
            normalized.append(lowered)
        elif arg.startswith('-'):
            raise ValidationError(f"不明なオプション: {arg}")
        else:
            normalized.append(arg)
    return normalized


def parse_config(args: argparse.Namespace) -> CleanupConfig:
    """
    解析済みの引数から CleanupConfig を作成

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        実行設定

    Raises:
        ValidationError: パスの指定が不正な場合
    """
    if not args.image_dir:
        raise ValidationError("画像ディレクトリのパスを1つ指定してください")
    if len(args.image_dir) > 1:
        received = ', '.join(args.image_dir)
        raise ValidationError(f"指定できる画像ディレクトリは1つだけです。指定された値: {received}")

    image_dir = PathValidator.normalize_path(args.image_dir[0])
    PathValidator.validate_directory(image_dir)

    return CleanupConfig(
        image_dir=image_dir,
        recursive=args.recursive,
        dry_run=args.dry_run,
        mode=HandlingMode.DELETE if args.delete else HandlingMode.QUARANTINE
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    メインエントリーポイント

    Args:
        argv: コマンドライン引数（省略時は sys.argv[1:]）

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parser.parse_intermixed_args(normalize_arguments(argv))
        if args.help:
            parser.print_help()
            return 0
        config = parse_config(args)
    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        parser.print_help()
        return 1

    try:
        log_file = get_default_log_file() if args.verbose else None
        progress_logger = create_default_logger(verbose=args.verbose, log_file=log_file)
        runner = CleanupRunner(ConsoleCleanupReporter(progress_logger))

        context = runner.run(config)
        return 0 if context is not None else 1

    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
