"""
コマンドラインインターフェースのテスト

引数の解析、ヘルプ表示、入力エラーの処理を検証します。
"""

import sys
from pathlib import Path
import pytest

from arw_cleanup.cli import create_parser, main, normalize_arguments, parse_config
from arw_cleanup.exceptions import ValidationError
from arw_cleanup.models import HandlingMode


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "photos"
    directory.mkdir()
    return directory


def parse(argv):
    parser = create_parser()
    return parse_config(parser.parse_intermixed_args(normalize_arguments(argv)))


class TestArgumentParsing:
    """引数解析のテスト"""

    def test_defaults(self, image_dir):
        config = parse([str(image_dir)])

        assert config.image_dir == image_dir.resolve()
        assert config.recursive is False
        assert config.dry_run is False
        assert config.mode is HandlingMode.QUARANTINE

    @pytest.mark.parametrize("flags", [
        ["--dry-run", "--recursive", "--delete"],
        ["-n", "-r", "-d"],
        ["--DRY-RUN", "--Recursive", "--DELETE"],
    ])
    def test_all_flags(self, image_dir, flags):
        config = parse(flags + [str(image_dir)])

        assert config.dry_run is True
        assert config.recursive is True
        assert config.mode is HandlingMode.DELETE

    def test_flags_are_order_independent(self, image_dir):
        config = parse(["-n", str(image_dir), "--recursive"])

        assert config.dry_run is True
        assert config.recursive is True
        assert config.image_dir == image_dir.resolve()

    @pytest.mark.parametrize("unknown", ["--force", "-x", "-nr", "--", "-"])
    def test_unknown_option_is_rejected(self, unknown):
        with pytest.raises(ValidationError) as exc_info:
            normalize_arguments(["--dry-run", unknown, "photos"])
        assert unknown in str(exc_info.value)

    def test_missing_path_is_rejected(self):
        with pytest.raises(ValidationError):
            parse(["--dry-run"])

    def test_multiple_paths_are_rejected(self, image_dir, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            parse([str(image_dir), str(tmp_path)])
        assert str(tmp_path) in str(exc_info.value)

    def test_non_directory_is_rejected(self, image_dir):
        file_path = image_dir / "a.ARW"
        file_path.write_bytes(b"raw")

        with pytest.raises(ValidationError):
            parse([str(file_path)])

    def test_missing_directory_is_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            parse([str(tmp_path / "missing")])


class TestMain:
    """main() のテスト"""

    def test_help_is_printed(self, capsys):
        exit_code = main(["--help"])

        assert exit_code == 0
        out = capsys.readouterr().out
        for option in ["--dry-run", "-n", "--recursive", "-r", "--delete", "-d", "--help", "-h"]:
            assert option in out
        assert "_arw_quarantine" in out

    def test_help_wins_over_missing_path(self, capsys):
        assert main(["-H"]) == 0
        assert "使用例" in capsys.readouterr().out

    def test_no_arguments_requires_path(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['arw-cleanup'])

        assert main() == 1
        captured = capsys.readouterr()
        assert "入力エラー" in captured.err
        assert "パスを1つ指定してください" in captured.err
        assert "usage" in captured.out

    def test_empty_argument_list_requires_path(self, capsys):
        assert main([]) == 1
        assert "パスを1つ指定してください" in capsys.readouterr().err

    def test_unknown_option_prints_usage_and_fails(self, image_dir, capsys):
        exit_code = main(["--bogus", str(image_dir)])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "--bogus" in captured.err
        assert "usage" in captured.out

    def test_unknown_option_wins_over_help(self, capsys):
        assert main(["--help", "--bogus"]) == 1

    def test_multiple_paths_do_not_run(self, tmp_path, capsys):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "lonely.ARW").write_bytes(b"raw")

        exit_code = main([str(first), str(second)])

        assert exit_code == 1
        assert (first / "lonely.ARW").exists()
        assert not (first / "_arw_quarantine").exists()

    def test_missing_directory_fails(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing")])

        assert exit_code == 1
        assert "存在しません" in capsys.readouterr().err

    def test_run_with_sys_argv(self, image_dir, monkeypatch, capsys):
        (image_dir / "lonely.ARW").write_bytes(b"raw")
        monkeypatch.setattr(sys, 'argv', ['arw-cleanup', '--delete', str(image_dir)])

        exit_code = main()

        assert exit_code == 0
        assert not (image_dir / "lonely.ARW").exists()
        assert "削除済み: 1" in capsys.readouterr().out
