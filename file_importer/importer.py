"""
Модуль бизнес-логики импорта файлов.

Объединяет снимок входящего каталога и операции с файловой системой:
каждый файл переносится в каталог по дате изменения, а файл с уже
занятым именем уходит в каталог карантина текущего запуска.
Итог запуска сворачивается в один код возврата.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path
from typing import Callable, List, Optional

from .config_loader import Config
from .file_ops import FileEntry, FileOps
from .logger import ImportLogger


RUN_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class ExitCode(IntEnum):
    """Коды возврата процесса."""
    SUCCESS = 0
    ERROR = 1
    NOTHING_TO_DO = 2
    DUPLICATES_PENDING = 3


class FileStatus(Enum):
    """Результат обработки одного файла."""
    MOVED = "moved"
    QUARANTINED = "quarantined"


@dataclass
class FileResult:
    """Результат обработки одного файла."""
    entry: FileEntry
    status: FileStatus
    target_path: Path


@dataclass
class RunOutcome:
    """Итог одного запуска."""
    run_timestamp: str
    source_missing: bool = False
    files_found: int = 0
    results: List[FileResult] = field(default_factory=list)

    def add_result(self, result: FileResult) -> None:
        """Добавляет результат обработки файла."""
        self.results.append(result)

    @property
    def files_processed(self) -> int:
        return len(self.results)

    @property
    def files_quarantined(self) -> int:
        return sum(1 for r in self.results if r.status is FileStatus.QUARANTINED)

    @property
    def duplicate_seen(self) -> bool:
        return self.files_quarantined > 0

    @property
    def exit_code(self) -> ExitCode:
        """
        Код возврата запуска.

        Приоритет: нет входящего каталога (1), пустой каталог (2),
        были дубликаты (3), иначе успех (0).
        """
        if self.source_missing:
            return ExitCode.ERROR
        if self.files_found == 0:
            return ExitCode.NOTHING_TO_DO
        if self.duplicate_seen:
            return ExitCode.DUPLICATES_PENDING
        return ExitCode.SUCCESS


class Importer:
    """Основной класс для импорта файлов."""

    def __init__(self, config: Config, logger: ImportLogger,
                 file_ops: Optional[FileOps] = None,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Инициализация импортера.

        Args:
            config: Разрешенная конфигурация запуска
            logger: Логгер для записи операций
            file_ops: Операции с файлами (по умолчанию строятся из config)
            clock: Источник текущего времени
        """
        self.config = config
        self.logger = logger
        self.file_ops = file_ops or FileOps(config.dest_dir, config.dupe_dir, logger)
        self.clock = clock

    def process_file(self, entry: FileEntry, batch_timestamp: str) -> FileResult:
        """
        Переносит один файл в каталог по дате или в карантин.

        Дубликатом считается файл, имя которого уже занято в его каталоге
        по дате. Каталог карантина и другие каталоги по датам не
        проверяются.

        Args:
            entry: Файл из снимка входящего каталога
            batch_timestamp: Время начала запуска, имя каталога карантина

        Returns:
            FileResult: Результат обработки

        Raises:
            FileOperationError: Если не удалось создать каталог или
                переместить файл
        """
        date_dir = self.file_ops.ensure_date_directory(entry.modified_date)

        if (date_dir / entry.name).exists():
            batch_dir = self.file_ops.ensure_quarantine_directory(batch_timestamp)
            target_path = self.file_ops.move_file(entry.path, batch_dir)
            self.logger.log_duplicate(entry.path, target_path)
            return FileResult(entry, FileStatus.QUARANTINED, target_path)

        target_path = self.file_ops.move_file(entry.path, date_dir)
        self.logger.log_file_moved(entry.path, target_path)
        return FileResult(entry, FileStatus.MOVED, target_path)

    def run(self) -> RunOutcome:
        """
        Выполняет один запуск импорта.

        Ошибка файловой системы прерывает запуск без строки окончания
        журнала; уже перемещенные файлы остаются на новых местах.

        Returns:
            RunOutcome: Итог запуска
        """
        outcome = RunOutcome(run_timestamp=self.clock().strftime(RUN_TIMESTAMP_FORMAT))
        self.logger.log_run_start(outcome.run_timestamp)

        source_dir = self.config.source_dir
        if not source_dir.is_dir():
            outcome.source_missing = True
            self.logger.log_source_missing(source_dir)
        else:
            entries = self.file_ops.list_source_files(source_dir)
            outcome.files_found = len(entries)

            if not entries:
                self.logger.log_source_empty(source_dir)

            for entry in entries:
                outcome.add_result(self.process_file(entry, outcome.run_timestamp))

        self.logger.log_run_end(outcome.run_timestamp)
        return outcome


def create_importer(config: Config, logger: ImportLogger) -> Importer:
    """
    Удобная функция для создания импортера.

    Args:
        config: Разрешенная конфигурация запуска
        logger: Логгер

    Returns:
        Importer: Объект импортера
    """
    return Importer(config, logger)
