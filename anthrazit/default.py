"""Процессный sink по умолчанию.

Основной способ работы - явно созданный FileLogSink, переданный компонентам.
Этот модуль нужен только для удобства: один общий sink на процесс.

Пример:
    ```python
    from anthrazit import get_sink

    sink = get_sink()
    sink.initialize("/var/log/myapp", "myapp", exit_on_fatal=True)
    sink.write("main", "started", "INFO")
    ```
"""
import threading
from typing import Optional

from anthrazit.file_sink import FileLogSink
from anthrazit.sink import LogSink


# Глобальный sink (создаётся лениво)
_default_sink: Optional[LogSink] = None
_default_sink_lock = threading.Lock()


def get_sink() -> LogSink:
    """Возвращает sink по умолчанию (thread-safe).

    При первом обращении создаётся неинициализированный FileLogSink,
    файл открывает вызывающий код через initialize().
    Используется double-check locking.
    """
    global _default_sink

    if _default_sink is not None:
        return _default_sink

    with _default_sink_lock:
        if _default_sink is None:
            _default_sink = FileLogSink()

    return _default_sink


def set_default_sink(sink: LogSink) -> None:
    """Заменяет sink по умолчанию (предыдущий не закрывается)."""
    global _default_sink
    with _default_sink_lock:
        _default_sink = sink


def reset_default_sink() -> None:
    """Закрывает и сбрасывает sink по умолчанию."""
    global _default_sink
    with _default_sink_lock:
        sink, _default_sink = _default_sink, None
    if sink is not None:
        sink.close()
