"""Конфигурация для pytest."""
import itertools
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Добавляем корневую директорию в путь
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from anthrazit.default import reset_default_sink  # noqa: E402


FIXED_START_MS = 1_700_000_000_000


def pytest_configure(config):
    """Регистрация кастомных маркеров."""
    config.addinivalue_line(
        "markers", "unit: юнит-тесты"
    )
    config.addinivalue_line(
        "markers", "integration: тесты с запуском отдельного процесса"
    )
    config.addinivalue_line(
        "markers", "slow: медленные тесты"
    )


def pytest_collection_modifyitems(config, items):
    """Автоматическая маркировка тестов по расположению."""
    for item in items:
        try:
            path = str(item.fspath)
        except AttributeError:
            # Для некоторых версий pytest
            path = str(item.path)

        if "subprocess" in path or "test_cli" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


class RecordingExit:
    """Подмена завершения процесса: запоминает коды вместо выхода."""

    def __init__(self) -> None:
        self.calls: List[int] = []

    def __call__(self, status: int) -> None:
        self.calls.append(status)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Пустой каталог для файлов логов."""
    directory = tmp_path / "logs"
    directory.mkdir()
    return directory


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    """Часы, всегда возвращающие одно и то же время."""
    return lambda: FIXED_START_MS


@pytest.fixture
def ticking_clock() -> Callable[[], int]:
    """Часы, увеличивающиеся на 1 мс при каждом вызове."""
    counter = itertools.count(FIXED_START_MS)
    return lambda: next(counter)


@pytest.fixture
def exit_recorder() -> RecordingExit:
    return RecordingExit()


@pytest.fixture
def read_lines() -> Callable[[Path], List[str]]:
    """Читает файл лога построчно (с сохранением переводов строк)."""
    def _read(path: Path) -> List[str]:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.readlines()
    return _read


@pytest.fixture(autouse=True)
def clean_default_sink():
    """Сбрасывает sink по умолчанию между тестами."""
    yield
    reset_default_sink()
