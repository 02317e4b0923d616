"""FileLogSink - запись логов в текстовый файл с меткой времени в имени."""
import os
import sys
import threading
import traceback
from pathlib import Path
from typing import Any, Callable, Optional, TextIO, Union

from anthrazit.config import SinkConfig
from anthrazit.errors import CloseError, InitError, SinkClosedError, SinkError, WriteError
from anthrazit.models import LogRecord, Severity, SinkResult, now_ms
from anthrazit.sink import LogSink


LOGTAG = "anthrazit"


def terminate_process(status: int) -> None:
    """Завершает процесс с заданным кодом из любого потока.

    sys.exit() лишь бросает SystemExit, и интерпретатор ждёт остальные
    non-daemon потоки, поэтому используется os._exit(). Стандартные потоки
    сбрасываются заранее; atexit обработчики не вызываются.

    Args:
        status: Код завершения процесса
    """
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(status)


def format_exception(error: BaseException) -> str:
    """Форматирует исключение в многострочное сообщение.

    Первая строка - тип и текст исключения, далее по одной строке на кадр стека,
    каждая с отступом в две табуляции и префиксом "at ".

    Args:
        error: Исключение для форматирования

    Returns:
        Текст сообщения без завершающего перевода строки
    """
    text = " ".join(str(error).splitlines())
    summary = f"{type(error).__name__}: {text}" if text else type(error).__name__
    lines = [summary]
    for frame in traceback.extract_tb(error.__traceback__):
        lines.append(f"\t\tat {frame.name} ({frame.filename}:{frame.lineno})")
    return "\n".join(lines)


class FileLogSink(LogSink):
    """Sink для записи логов в один текстовый файл.

    Особенности:
    - Файл {directory}/{prefix}-{start_ms}.log создаётся эксклюзивно
    - Одна блокировка на весь sink (write, log_exception, initialize, close)
    - DEBUG записи отбрасываются, если debug выключен
    - FATAL при exit_on_fatal закрывает файл и завершает процесс
    - Все ошибки ввода-вывода проходят через общий путь _on_io_failure()
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        exit_handler: Optional[Callable[[int], None]] = None,
        encoding: str = "utf-8"
    ) -> None:
        """Инициализация FileLogSink.

        Файл не открывается до вызова initialize().

        Args:
            clock: Источник времени в миллисекундах (по умолчанию системные часы)
            exit_handler: Функция завершения процесса (по умолчанию terminate_process)
            encoding: Кодировка файла
        """
        self._clock = clock or now_ms
        self._exit_handler = exit_handler or terminate_process
        self.encoding = encoding
        self._lock = threading.RLock()

        self._file_handle: Optional[TextIO] = None
        self._path: Optional[Path] = None
        self._start_time_ms: Optional[int] = None
        self._exit_on_fatal = False
        self._debug = False

    @classmethod
    def from_config(cls, config: SinkConfig, **kwargs: Any) -> 'FileLogSink':
        """Создаёт sink и сразу открывает файл по конфигурации.

        Args:
            config: Конфигурация логгера
            **kwargs: Параметры конструктора (clock, exit_handler, encoding)

        Returns:
            Sink; при ошибке открытия is_open будет False
        """
        sink = cls(**kwargs)
        sink.initialize(
            directory=config.directory,
            file_prefix=config.file_prefix,
            exit_on_fatal=config.exit_on_fatal,
            debug=config.debug
        )
        return sink

    @property
    def is_open(self) -> bool:
        return self._file_handle is not None

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def start_time_ms(self) -> Optional[int]:
        return self._start_time_ms

    @property
    def exit_on_fatal(self) -> bool:
        return self._exit_on_fatal

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    def initialize(
        self,
        directory: Union[str, Path],
        file_prefix: str,
        exit_on_fatal: bool = False,
        debug: bool = False
    ) -> SinkResult:
        """Создаёт файл лога и пишет служебные записи.

        Файл {directory}/{file_prefix}-{start_ms}.log не должен существовать.
        После открытия пишутся INFO запись о старте и DEBUG запись с конфигурацией.

        Args:
            directory: Каталог для файла лога
            file_prefix: Префикс имени файла
            exit_on_fatal: Завершать ли процесс при FATAL и ошибках ввода-вывода
            debug: Писать ли DEBUG записи

        Returns:
            Результат; ошибки не пробрасываются, а проходят через _on_io_failure()
        """
        with self._lock:
            if self._file_handle is not None:
                return self._on_io_failure(InitError(f"log file is already open: {self._path}"))

            self._exit_on_fatal = exit_on_fatal
            self._debug = debug
            self._start_time_ms = self._clock()

            file_name = f"{file_prefix}-{self._start_time_ms}.log"
            path = Path(directory) / file_name
            try:
                self._file_handle = self._open_exclusive(path)
            except InitError as e:
                return self._on_io_failure(e)
            self._path = path

            started = self._emit(LOGTAG, f"successfully started at {self._start_time_ms}", Severity.INFO)
            if not started.ok:
                return started
            return self._emit(
                LOGTAG,
                f"file_name: {file_name}, directory: {directory}, "
                f"exit_on_fatal: {exit_on_fatal}, debug: {debug}",
                Severity.DEBUG
            )

    def _open_exclusive(self, path: Path) -> TextIO:
        """Создаёт новый файл; существующий файл считается ошибкой."""
        try:
            # Строковая буферизация: каждая запись уходит в ОС на своём переводе строки
            return open(path, mode="x", encoding=self.encoding, buffering=1, newline="\n")
        except FileExistsError as e:
            raise InitError(f"log file already exists: {path}") from e
        except OSError as e:
            raise InitError(f"error creating new log file {path}: {e}") from e

    def write(self, tag: str, message: str, severity: Any) -> SinkResult:
        """Записывает сообщение в файл.

        Формат записи:

            [timestamp] {SEVERITY} tag: message

        Нераспознанный уровень (в том числе EXCEPTION, доступный только
        через log_exception) даёт одну диагностическую строку.

        Args:
            tag: Метка вызывающего компонента
            message: Текст сообщения
            severity: Severity или его имя

        Returns:
            Результат записи; fatal=True для записанного FATAL
        """
        level = Severity.coerce(severity)
        with self._lock:
            if level is None or level is Severity.EXCEPTION:
                return self._write_record(LogRecord(
                    tag=LOGTAG,
                    message=f"invalid severity {severity!r} in record from {tag}",
                    severity=Severity.ERROR,
                    timestamp_ms=self._clock()
                ))
            return self._emit(tag, message, level)

    def log_exception(self, tag: str, error: BaseException) -> SinkResult:
        """Записывает исключение с трассировкой под уровнем EXCEPTION."""
        message = format_exception(error)
        with self._lock:
            return self._emit(tag, message, Severity.EXCEPTION)

    def _emit(self, tag: str, message: Any, severity: Severity) -> SinkResult:
        # Вызывается под self._lock
        if severity is Severity.DEBUG and not self._debug:
            return SinkResult.success()

        record = LogRecord(
            tag=tag,
            message=str(message),
            severity=severity,
            timestamp_ms=self._clock()
        )
        result = self._write_record(record)
        if not result.ok or severity is not Severity.FATAL:
            return result

        if self._exit_on_fatal:
            sys.stderr.write(
                f"💀 anthrazit exit on fatal: {record.to_line().rstrip()}. Please check the logs.\n"
            )
            self._bail_out()
        return SinkResult.success(fatal=True)

    def _write_record(self, record: LogRecord) -> SinkResult:
        try:
            self._append(record.to_line())
        except WriteError as e:
            return self._on_io_failure(e)
        return SinkResult.success()

    def _append(self, line: str) -> None:
        if self._file_handle is None:
            raise SinkClosedError("log file is not open")
        try:
            self._file_handle.write(line)
        except (OSError, ValueError) as e:
            raise WriteError(f"error writing to log file {self._path}: {e}") from e

    def close(self) -> SinkResult:
        """Сбрасывает буфер и закрывает файл.

        Повторный вызов ничего не делает. Ошибки закрытия проходят через
        _on_io_failure(), поэтому при exit_on_fatal приводят к завершению процесса.
        """
        with self._lock:
            handle = self._file_handle
            if handle is None:
                return SinkResult.success()
            self._file_handle = None
            try:
                self._release(handle)
            except CloseError as e:
                return self._on_io_failure(e)
            return SinkResult.success()

    def _release(self, handle: TextIO) -> None:
        try:
            try:
                handle.flush()
            finally:
                handle.close()
        except OSError as e:
            raise CloseError(f"error closing log file {self._path}: {e}") from e

    def _on_io_failure(self, error: SinkError) -> SinkResult:
        """Общий путь обработки сбоев initialize, write и close.

        Печатает ошибку в stderr. При exit_on_fatal закрывает файл и завершает
        процесс; иначе при debug печатает полную трассировку.

        Args:
            error: Ошибка sink-а

        Returns:
            Неуспешный результат (если процесс не был завершён)
        """
        sys.stderr.write(f"❌ anthrazit error: {type(error).__name__}: {error}\n")
        if self._exit_on_fatal:
            sys.stderr.write("💀 anthrazit exit on fatal: bailing out...\n")
            self._bail_out()
            return SinkResult.failure(error, fatal=True)
        if self._debug:
            traceback.print_exception(type(error), error, error.__traceback__, file=sys.stderr)
        return SinkResult.failure(error)

    def _bail_out(self) -> None:
        """Закрывает файл и завершает процесс.

        Ошибка закрытия здесь только печатается: повторный проход через
        _on_io_failure() сообщил бы о сбое и вызвал exit_handler второй раз.
        """
        handle, self._file_handle = self._file_handle, None
        if handle is not None:
            try:
                self._release(handle)
            except CloseError as e:
                sys.stderr.write(f"⚠️ anthrazit: {e}\n")
        self._exit_handler(1)
