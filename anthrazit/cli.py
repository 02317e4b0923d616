"""Демонстрационная команда anthrazit.

Открывает лог, провоцирует ошибку ввода-вывода, записывает её через
log_exception() и закрывает файл.

Примеры использования:
    ```bash
    anthrazit-demo --log-dir /tmp
    anthrazit-demo --config anthrazit.toml --no-exit-on-fatal
    python -m anthrazit --log-dir /tmp --prefix demo --no-debug
    ```
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from anthrazit import __version__
from anthrazit.config import SinkConfig, load_config
from anthrazit.errors import ConfigError
from anthrazit.file_sink import FileLogSink
from anthrazit.logger import TaggedLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anthrazit-demo",
        description="Пишет демонстрационный лог с записью исключения",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="TOML файл с таблицей [anthrazit] (по умолчанию: anthrazit.toml)"
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Каталог для файла лога (создаётся, если его нет)"
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Префикс имени файла лога (по умолчанию: anthrazit)"
    )
    parser.add_argument(
        "--no-exit-on-fatal",
        action="store_true",
        help="Не завершать процесс при FATAL и ошибках ввода-вывода"
    )
    parser.add_argument(
        "--no-debug",
        action="store_true",
        help="Не писать DEBUG записи"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> SinkConfig:
    """Собирает конфигурацию: демо-значения < TOML < окружение < аргументы."""
    config = load_config(args.config, defaults=SinkConfig.for_demo())

    overrides = {}
    if args.log_dir is not None:
        overrides["directory"] = args.log_dir
    if args.prefix is not None:
        overrides["file_prefix"] = args.prefix
    if args.no_exit_on_fatal:
        overrides["exit_on_fatal"] = False
    if args.no_debug:
        overrides["debug"] = False

    if not overrides:
        return config
    try:
        return SinkConfig(**{**config.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigError(f"invalid command line arguments: {e}") from e


def run_demo(sink: FileLogSink, config: SinkConfig) -> int:
    """Выполняет демонстрацию на переданном sink-е.

    Каталог лога создаётся, если его нет.

    Returns:
        0 при успехе, 1 если файл лога не открылся
    """
    try:
        Path(config.directory).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        sys.stderr.write(f"❌ cannot create log directory {config.directory}: {e}\n")
        return 1

    result = sink.initialize(
        directory=config.directory,
        file_prefix=config.file_prefix,
        exit_on_fatal=config.exit_on_fatal,
        debug=config.debug
    )
    if not result.ok:
        return 1

    log = TaggedLogger(sink, "demo")
    log.info("provoking an I/O error by opening %s as a file", config.directory)
    try:
        with open(config.directory, "rb"):
            pass
    except OSError as e:
        log.exception(e)

    sink.close()
    print(sink.path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = resolve_config(args)
    except ConfigError as e:
        sys.stderr.write(f"❌ {e}\n")
        return 2
    return run_demo(FileLogSink(), config)


if __name__ == "__main__":
    sys.exit(main())
