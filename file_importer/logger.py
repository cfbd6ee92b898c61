"""
Модуль для настройки и управления логированием приложения.

Журнал пишется в текстовый файл только дозаписью: каждый запуск
обрамляется строками "Start of log for ..." и "End of log for ...".
Каждая строка журнала дублируется в стандартный вывод.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = 'file_importer'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом, не изменяя саму запись."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class AppendOnlyFileHandler(logging.FileHandler):
    """
    Файловый обработчик, который только дописывает в конец файла.

    В отличие от стандартного обработчика ошибка записи не проглатывается:
    журнал обязателен, и без него запуск продолжать нельзя.
    """

    def __init__(self, filename: Path):
        super().__init__(filename, mode='a', encoding='utf-8')

    def handleError(self, record):
        raise


class ImportLogger:
    """Класс для управления логированием утилиты File Importer."""

    def __init__(self, log_file: Path, level: int = logging.INFO):
        """
        Инициализация логгера.

        Args:
            log_file: Путь к файлу журнала
            level: Уровень логирования

        Raises:
            OSError: Если файл журнала не удается открыть на запись
        """
        self.log_file = Path(log_file)
        self.level = level
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(self.level)

        # Очищаем обработчики, оставшиеся от предыдущей настройки
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        # В консоль цвет выводим только для терминала, иначе строки
        # в stdout должны совпадать со строками файла
        if sys.stdout.isatty():
            console_formatter = ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        else:
            console_formatter = formatter

        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = AppendOnlyFileHandler(self.log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(self.level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(self.level)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def close(self) -> None:
        """Закрывает обработчики и освобождает файл журнала."""
        if self.logger is None:
            return
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

    def log_run_start(self, timestamp: str) -> None:
        """
        Логирует начало запуска.

        Args:
            timestamp: Время запуска в формате YYYY-MM-DD_HH-MM-SS
        """
        self.logger.info(f"Start of log for {timestamp}")

    def log_run_end(self, timestamp: str) -> None:
        """
        Логирует завершение запуска.

        Args:
            timestamp: Время завершения в формате YYYY-MM-DD_HH-MM-SS
        """
        self.logger.info(f"End of log for {timestamp}")

    def log_directory_created(self, directory: Path) -> None:
        """Логирует создание каталога по дате."""
        self.logger.info(f"Created folder {directory}")

    def log_quarantine_created(self, directory: Path) -> None:
        """Логирует создание каталога карантина для дубликатов."""
        self.logger.info(f"Created duplicates folder {directory}")

    def log_file_moved(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное перемещение файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"Moved {source_path} to {target_path}")

    def log_duplicate(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует перемещение дубликата в карантин.

        Args:
            source_path: Исходный путь
            target_path: Путь в каталоге карантина
        """
        self.logger.warning(f"Duplicate {source_path.name}, moved {source_path} to {target_path}")

    def log_source_empty(self, source_dir: Path) -> None:
        """Логирует пустой исходный каталог."""
        self.logger.info(f"Source folder {source_dir} is empty, nothing to do")

    def log_source_missing(self, source_dir: Path) -> None:
        """Логирует отсутствие исходного каталога."""
        self.logger.error(f"Source folder {source_dir} does not exist")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"{message}: {error}")
        else:
            self.logger.critical(message)

