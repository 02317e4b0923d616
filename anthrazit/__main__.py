"""Запуск демонстрации: python -m anthrazit."""
import sys

from anthrazit.cli import main


sys.exit(main())
