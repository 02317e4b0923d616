"""Конфигурация файлового логгера.

Приоритет настроек:
    1. Переменные окружения ANTHRAZIT_* (высший приоритет)
    2. Таблица [anthrazit] в TOML файле
    3. Значения по умолчанию

Пример anthrazit.toml:
    ```toml
    [anthrazit]
    directory = "logs"
    file_prefix = "myapp"
    exit_on_fatal = true
    debug = false
    ```
"""
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]  # Fallback для Python < 3.11

from anthrazit.errors import ConfigError


DEFAULT_CONFIG_PATH = Path("anthrazit.toml")


class SinkConfig(BaseModel):
    """Параметры инициализации FileLogSink.

    Атрибуты:
        directory: Каталог для файлов логов
        file_prefix: Префикс имени файла ({prefix}-{start_ms}.log)
        exit_on_fatal: Завершать ли процесс при FATAL и ошибках ввода-вывода
        debug: Писать ли DEBUG записи и трассировки ошибок
    """

    model_config = ConfigDict(extra='ignore', frozen=True)

    directory: Path = Field(default=Path("logs"))
    file_prefix: str = Field(default="anthrazit", min_length=1)
    exit_on_fatal: bool = False
    debug: bool = False

    @field_validator("file_prefix")
    @classmethod
    def _check_file_prefix(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("file_prefix must not contain path separators")
        return value

    @classmethod
    def for_dev(cls) -> 'SinkConfig':
        """Конфигурация для разработки: DEBUG включён, процесс не завершается."""
        return cls(debug=True, exit_on_fatal=False)

    @classmethod
    def for_demo(cls, directory: Optional[Path] = None) -> 'SinkConfig':
        """Конфигурация демонстрационной команды."""
        return cls(
            directory=directory or Path("logs"),
            file_prefix="anthrazit",
            exit_on_fatal=True,
            debug=True,
        )


class EnvironmentOverrides(BaseModel):
    """Переопределения из переменных окружения."""

    model_config = ConfigDict(extra='ignore')

    directory: Optional[Path] = Field(default=None, alias="ANTHRAZIT_LOG_DIR")
    file_prefix: Optional[str] = Field(default=None, alias="ANTHRAZIT_FILE_PREFIX")
    exit_on_fatal: Optional[bool] = Field(default=None, alias="ANTHRAZIT_EXIT_ON_FATAL")
    debug: Optional[bool] = Field(default=None, alias="ANTHRAZIT_DEBUG")


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            document = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"error loading {path}: {e}") from e

    section = document.get("anthrazit", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[anthrazit] in {path} must be a table")
    return section


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    defaults: Optional[SinkConfig] = None
) -> SinkConfig:
    """Загружает конфигурацию логгера.

    Args:
        path: Путь к TOML файлу; должен существовать
            (None = anthrazit.toml в текущем каталоге, если он есть)
        environ: Переменные окружения (None = os.environ)
        defaults: Базовые значения вместо значений SinkConfig по умолчанию

    Returns:
        Проверенная конфигурация

    Raises:
        ConfigError: Файл не читается или значения некорректны
    """
    data: Dict[str, Any] = defaults.model_dump() if defaults is not None else {}

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"config file not found: {config_path}")
        data.update(_read_toml(config_path))
    elif DEFAULT_CONFIG_PATH.exists():
        # Отсутствие anthrazit.toml не ошибка: остаются значения по умолчанию
        data.update(_read_toml(DEFAULT_CONFIG_PATH))

    try:
        overrides = EnvironmentOverrides.model_validate(
            dict(environ if environ is not None else os.environ)
        )
        data.update(overrides.model_dump(exclude_none=True))
        return SinkConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"invalid logger configuration: {e}") from e
