"""Тесты демонстрационной команды."""
from pathlib import Path

import pytest

from anthrazit.cli import build_parser, main, resolve_config


ENV_VARS = ("ANTHRAZIT_LOG_DIR", "ANTHRAZIT_FILE_PREFIX", "ANTHRAZIT_EXIT_ON_FATAL", "ANTHRAZIT_DEBUG")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Без переменных ANTHRAZIT_* и без anthrazit.toml в текущем каталоге."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestResolveConfig:
    """Тесты сборки конфигурации из аргументов."""

    def test_demo_defaults(self) -> None:
        config = resolve_config(build_parser().parse_args([]))

        assert config.file_prefix == "anthrazit"
        assert config.exit_on_fatal is True
        assert config.debug is True

    def test_arguments_override_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[anthrazit]\nfile_prefix = "file"\n', encoding="utf-8")

        args = build_parser().parse_args([
            "--config", str(config_file),
            "--prefix", "cli",
            "--no-exit-on-fatal",
            "--no-debug",
        ])
        config = resolve_config(args)

        assert config.file_prefix == "cli"
        assert config.exit_on_fatal is False
        assert config.debug is False


class TestMain:
    """Тесты запуска демонстрации."""

    def test_demo_writes_exception_record(self, log_dir: Path, capsys) -> None:
        code = main(["--log-dir", str(log_dir), "--no-exit-on-fatal"])

        assert code == 0
        files = list(log_dir.glob("anthrazit-*.log"))
        assert len(files) == 1
        content = files[0].read_text(encoding="utf-8")
        assert "{INFO} anthrazit: successfully started" in content
        assert "{DEBUG} anthrazit: file_name:" in content
        assert "{INFO} demo: provoking an I/O error" in content
        assert "{EXCEPTION} demo: " in content
        assert "\t\tat run_demo (" in content
        assert str(files[0]) in capsys.readouterr().out

    def test_demo_creates_missing_directory(self, log_dir: Path) -> None:
        target = log_dir / "nested" / "logs"

        code = main(["--log-dir", str(target)])

        assert code == 0
        assert len(list(target.glob("anthrazit-*.log"))) == 1

    def test_demo_default_directory_in_fresh_cwd(self, tmp_path: Path) -> None:
        """Без аргументов каталог logs создаётся в текущем каталоге."""
        code = main([])

        assert code == 0
        assert len(list((tmp_path / "logs").glob("anthrazit-*.log"))) == 1

    def test_demo_reports_unusable_directory(self, tmp_path: Path, capsys) -> None:
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("", encoding="utf-8")

        code = main(["--log-dir", str(blocker), "--no-exit-on-fatal"])

        assert code == 1
        assert "cannot create log directory" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path: Path, capsys) -> None:
        code = main(["--config", str(tmp_path / "missing.toml")])

        assert code == 2
        assert "config file not found" in capsys.readouterr().err

    def test_invalid_prefix_is_config_error(self, log_dir: Path, capsys) -> None:
        code = main(["--log-dir", str(log_dir), "--prefix", "a/b"])

        assert code == 2
        assert "invalid command line arguments" in capsys.readouterr().err
