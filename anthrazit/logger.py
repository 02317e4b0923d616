"""TaggedLogger - обёртка над sink-ом с фиксированной меткой компонента.

Примеры использования:
    ```python
    from anthrazit import FileLogSink, get_logger

    sink = FileLogSink()
    sink.initialize("/tmp", "myapp")

    log = get_logger("network", sink=sink)
    log.info("connected to %s:%d", host, port)
    try:
        connect()
    except OSError as e:
        log.exception(e)
    ```
"""
from typing import Any, Optional

from anthrazit.default import get_sink
from anthrazit.models import Severity, SinkResult
from anthrazit.sink import LogSink


class TaggedLogger:
    """Логгер компонента: все записи идут в sink с одной меткой."""

    def __init__(self, sink: LogSink, tag: str) -> None:
        self.sink = sink
        self.tag = tag

    def _log(self, severity: Severity, msg: Any, args: tuple) -> SinkResult:
        # Поддержка % форматирования (совместимость со стандартным logging)
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                pass
        return self.sink.write(self.tag, str(msg), severity)

    def debug(self, msg: Any, *args: Any) -> SinkResult:
        return self._log(Severity.DEBUG, msg, args)

    def info(self, msg: Any, *args: Any) -> SinkResult:
        return self._log(Severity.INFO, msg, args)

    def error(self, msg: Any, *args: Any) -> SinkResult:
        return self._log(Severity.ERROR, msg, args)

    def fatal(self, msg: Any, *args: Any) -> SinkResult:
        """Логирует FATAL сообщение.

        При exit_on_fatal sink завершит процесс после записи.
        """
        return self._log(Severity.FATAL, msg, args)

    def exception(self, error: BaseException) -> SinkResult:
        """Логирует исключение с трассировкой стека."""
        return self.sink.log_exception(self.tag, error)


def get_logger(tag: str, sink: Optional[LogSink] = None) -> TaggedLogger:
    """Создаёт TaggedLogger.

    Args:
        tag: Метка компонента
        sink: Sink для записи (None = sink по умолчанию)
    """
    return TaggedLogger(sink if sink is not None else get_sink(), tag)
