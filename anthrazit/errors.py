"""Исключения файлового логгера."""


class SinkError(Exception):
    """Базовая ошибка sink-а."""
    pass


class InitError(SinkError):
    """Файл лога нельзя создать или открыть."""
    pass


class WriteError(SinkError):
    """Запись в открытый файл не удалась."""
    pass


class SinkClosedError(WriteError):
    """Запись в уже закрытый (или не открытый) sink."""
    pass


class CloseError(SinkError):
    """Ошибка flush или закрытия файла."""
    pass


class ConfigError(Exception):
    """Некорректная конфигурация логгера."""
    pass
