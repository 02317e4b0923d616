"""Абстрактный интерфейс sink-а логирования."""
from abc import ABC, abstractmethod
from typing import Any

from anthrazit.models import SinkResult


class LogSink(ABC):
    """Абстрактный базовый класс sink-а.

    Sink - единственный владелец файла лога и точка сериализации всех записей.
    Код приложения работает только с этим интерфейсом.
    """

    @abstractmethod
    def write(self, tag: str, message: str, severity: Any) -> SinkResult:
        """Записывает сообщение с заданным уровнем.

        Args:
            tag: Метка вызывающего компонента
            message: Текст сообщения
            severity: Уровень важности (Severity или его имя)

        Returns:
            Результат записи
        """
        pass

    @abstractmethod
    def log_exception(self, tag: str, error: BaseException) -> SinkResult:
        """Записывает исключение вместе с трассировкой стека.

        Args:
            tag: Метка вызывающего компонента
            error: Исключение для записи
        """
        pass

    @abstractmethod
    def close(self) -> SinkResult:
        """Сбрасывает буферы и закрывает sink.

        После вызова sink не принимает новые записи.
        """
        pass

    def __enter__(self) -> 'LogSink':
        """Поддержка контекстного менеджера."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Автоматическое закрытие при выходе из контекста."""
        self.close()
