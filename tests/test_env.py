"""Tests for stitch_chart.core.env and core.config — .env loading and settings."""

import os
from pathlib import Path

import pytest
from stitch_chart.core.config import Settings
from stitch_chart.core.env import _find_dotenv, _parse_dotenv, load_env
from stitch_chart.core.errors import ConfigError


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('STITCH_CHART_WIDTH=60\n')
        assert _parse_dotenv(f) == {'STITCH_CHART_WIDTH': '60'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('TITLE="Sunset Bag"\nOTHER=\'single\'\n')
        assert _parse_dotenv(f) == {'TITLE': 'Sunset Bag', 'OTHER': 'single'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# palette size\n\nSTITCH_CHART_COLOURS=6\n\n')
        assert _parse_dotenv(f) == {'STITCH_CHART_COLOURS': '6'}

    def test_line_without_equals_skipped(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export STITCH_CHART_CELL_SIZE=12\n')
        assert _parse_dotenv(f) == {'STITCH_CHART_CELL_SIZE': '12'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'charts'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        (repo / '.git').mkdir(parents=True)
        (tmp_path / '.env').write_text('X=1\n')
        subdir = repo / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        (tmp_path / '.env').write_text('X=1\n')
        assert _find_dotenv(repo) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('STITCH_CHART_TEST_A', 'placeholder')
        monkeypatch.delenv('STITCH_CHART_TEST_A')
        (tmp_path / '.env').write_text('STITCH_CHART_TEST_A=loaded\n')
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('STITCH_CHART_TEST_A') == 'loaded'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('STITCH_CHART_TEST_B', 'original')
        (tmp_path / '.env').write_text('STITCH_CHART_TEST_B=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('STITCH_CHART_TEST_B') == 'original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('STITCH_CHART_TEST_C', 'placeholder')
        monkeypatch.delenv('STITCH_CHART_TEST_C')
        custom = tmp_path / 'custom.env'
        custom.write_text('STITCH_CHART_TEST_C=custom\n')
        assert load_env(env_file=str(custom)) == custom
        assert os.environ.get('STITCH_CHART_TEST_C') == 'custom'

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        assert s == Settings(width=40, colours=8, cell_size=20, sample_step=5, alpha_threshold=128)

    def test_reads_prefixed_vars(self) -> None:
        s = Settings.from_env({'STITCH_CHART_WIDTH': '60', 'STITCH_CHART_COLOURS': '4'})
        assert s.width == 60
        assert s.colours == 4
        assert s.cell_size == 20

    def test_blank_value_uses_default(self) -> None:
        assert Settings.from_env({'STITCH_CHART_WIDTH': '  '}).width == 40

    def test_alpha_threshold_may_be_zero(self) -> None:
        assert Settings.from_env({'STITCH_CHART_ALPHA_THRESHOLD': '0'}).alpha_threshold == 0

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(ConfigError, match='STITCH_CHART_WIDTH'):
            Settings.from_env({'STITCH_CHART_WIDTH': 'wide'})

    def test_zero_width_rejected(self) -> None:
        with pytest.raises(ConfigError, match='>= 1'):
            Settings.from_env({'STITCH_CHART_WIDTH': '0'})

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('STITCH_CHART_CELL_SIZE', '9')
        assert Settings.from_env().cell_size == 9
