"""Anthrazit - минимальный файловый логгер.

Логгер предоставляет:
- Один файл лога с меткой времени старта в имени
- Уровни DEBUG, INFO, ERROR, FATAL и запись исключений
- Потокобезопасную запись под одной блокировкой
- Опциональное завершение процесса при FATAL
"""
__version__ = "1.0.0"

from anthrazit.errors import (
    CloseError,
    ConfigError,
    InitError,
    SinkClosedError,
    SinkError,
    WriteError,
)
from anthrazit.models import LogRecord, Severity, SinkResult
from anthrazit.sink import LogSink
from anthrazit.config import SinkConfig, load_config
from anthrazit.file_sink import FileLogSink, format_exception, terminate_process
from anthrazit.default import get_sink, reset_default_sink, set_default_sink
from anthrazit.logger import TaggedLogger, get_logger

__all__ = [
    "__version__",
    "CloseError",
    "ConfigError",
    "InitError",
    "SinkClosedError",
    "SinkError",
    "WriteError",
    "LogRecord",
    "Severity",
    "SinkResult",
    "LogSink",
    "SinkConfig",
    "load_config",
    "FileLogSink",
    "format_exception",
    "terminate_process",
    "get_sink",
    "reset_default_sink",
    "set_default_sink",
    "TaggedLogger",
    "get_logger",
]
