"""Модели данных для файлового логгера."""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from anthrazit.errors import SinkError


class Severity(str, Enum):
    """Уровни важности записей.

    Порядок не имеет числового смысла: уровень лишь выбирает ветку обработки.
    EXCEPTION используется только внутри log_exception().
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    ERROR = "ERROR"
    FATAL = "FATAL"
    EXCEPTION = "EXCEPTION"

    @classmethod
    def coerce(cls, value: Any) -> Optional['Severity']:
        """Приводит значение к Severity.

        Args:
            value: Член перечисления или его имя (регистр не важен)

        Returns:
            Severity или None, если значение не распознано
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                return None
        return None


def now_ms() -> int:
    """Текущее время в миллисекундах с начала эпохи."""
    return time.time_ns() // 1_000_000


@dataclass
class LogRecord:
    """Одна запись лога (не хранится, только форматируется).

    Атрибуты:
        tag: Короткая метка вызывающего компонента
        message: Текст сообщения (может быть многострочным)
        severity: Уровень важности
        timestamp_ms: Время записи в миллисекундах с начала эпохи
    """
    tag: str
    message: str
    severity: Severity = Severity.INFO
    timestamp_ms: int = field(default_factory=now_ms)

    def to_line(self) -> str:
        """Форматирует запись в строку лога.

        Returns:
            Строка вида "[ts] {SEVERITY} tag: message" с переводом строки
        """
        return f"[{self.timestamp_ms}] {{{self.severity.value}}} {self.tag}: {self.message}\n"


@dataclass(frozen=True)
class SinkResult:
    """Результат операции sink-а.

    Атрибуты:
        ok: Операция выполнена без ошибок
        error: Ошибка, прошедшая через общий путь обработки сбоев
        fatal: Запись FATAL или сбой при включённом exit_on_fatal
    """
    ok: bool = True
    error: Optional[SinkError] = None
    fatal: bool = False

    @classmethod
    def success(cls, fatal: bool = False) -> 'SinkResult':
        return cls(ok=True, error=None, fatal=fatal)

    @classmethod
    def failure(cls, error: SinkError, fatal: bool = False) -> 'SinkResult':
        return cls(ok=False, error=error, fatal=fatal)

    def raise_for_error(self) -> None:
        """Пробрасывает сохранённую ошибку, если она есть."""
        if self.error is not None:
            raise self.error
