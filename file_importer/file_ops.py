"""
Модуль для операций с файловой системой.

Обеспечивает снимок входящего каталога, создание каталогов по датам
(YYYY-MM-DD) и каталогов карантина, а также перемещение файлов.
Любая ошибка файловой системы оборачивается в FileOperationError
и прерывает запуск.
"""

import shutil
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import List

from .logger import ImportLogger


DATE_DIR_FORMAT = "%Y-%m-%d"


class FileOperationError(Exception):
    """Исключение для ошибок операций с файлами."""
    pass


@dataclass(frozen=True)
class FileEntry:
    """Файл из снимка входящего каталога."""
    path: Path
    name: str
    modified: datetime

    @property
    def modified_date(self) -> date:
        """Дата изменения файла (локальное время, точность до дня)."""
        return self.modified.date()


class FileOps:
    """Класс для операций с файловой системой."""

    def __init__(self, dest_root: Path, dupe_root: Path, logger: ImportLogger):
        """
        Инициализация операций с файлами.

        Args:
            dest_root: Корневой каталог назначения
            dupe_root: Корневой каталог для дубликатов
            logger: Логгер для записи операций
        """
        self.dest_root = Path(dest_root)
        self.dupe_root = Path(dupe_root)
        self.logger = logger

    def list_source_files(self, source_dir: Path) -> List[FileEntry]:
        """
        Делает снимок файлов, лежащих непосредственно во входящем каталоге.

        Подкаталоги не просматриваются. Время изменения фиксируется один
        раз, до любых перемещений.

        Args:
            source_dir: Входящий каталог

        Returns:
            List[FileEntry]: Файлы, отсортированные по имени

        Raises:
            FileOperationError: Если каталог не удается прочитать
        """
        try:
            entries = []
            for path in sorted(Path(source_dir).iterdir()):
                if not path.is_file():
                    continue
                modified = datetime.fromtimestamp(path.stat().st_mtime)
                entries.append(FileEntry(path=path, name=path.name, modified=modified))
            return entries
        except OSError as e:
            raise FileOperationError(f"Failed to scan source folder {source_dir}: {e}") from e

    def get_date_directory(self, day: date) -> Path:
        """
        Получает путь к каталогу по дате в формате YYYY-MM-DD.

        Args:
            day: Дата

        Returns:
            Path: Путь к каталогу по дате
        """
        return self.dest_root / day.strftime(DATE_DIR_FORMAT)

    def get_quarantine_directory(self, batch_timestamp: str) -> Path:
        """Путь к каталогу карантина текущего запуска."""
        return self.dupe_root / batch_timestamp

    def ensure_date_directory(self, day: date) -> Path:
        """
        Создает каталог по дате если он не существует.

        Args:
            day: Дата для создания каталога

        Returns:
            Path: Путь к каталогу по дате
        """
        date_dir = self.get_date_directory(day)
        if self._create_directory(date_dir):
            self.logger.log_directory_created(date_dir)
        return date_dir

    def ensure_quarantine_directory(self, batch_timestamp: str) -> Path:
        """
        Создает каталог карантина если он не существует.

        Args:
            batch_timestamp: Время начала запуска (YYYY-MM-DD_HH-MM-SS)

        Returns:
            Path: Путь к каталогу карантина
        """
        batch_dir = self.get_quarantine_directory(batch_timestamp)
        if self._create_directory(batch_dir):
            self.logger.log_quarantine_created(batch_dir)
        return batch_dir

    def _create_directory(self, directory: Path) -> bool:
        """Создает каталог; возвращает True если каталог был создан."""
        if directory.is_dir():
            return False
        try:
            directory.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            self.logger.log_critical_error(f"Failed to create folder {directory}", e)
            raise FileOperationError(f"Failed to create folder {directory}: {e}") from e

    def move_file(self, source_path: Path, target_dir: Path) -> Path:
        """
        Перемещает файл в каталог с сохранением имени.

        Занятое имя в целевом каталоге не перезаписывается: исходный файл
        остается на месте, а запуск прерывается.

        Args:
            source_path: Исходный путь
            target_dir: Целевой каталог

        Returns:
            Path: Путь к перемещенному файлу

        Raises:
            FileOperationError: Если произошла ошибка при перемещении
        """
        target_path = target_dir / source_path.name

        if target_path.exists():
            error = FileExistsError(f"Target already exists: {target_path}")
            self.logger.log_critical_error(f"Failed to move {source_path}", error)
            raise FileOperationError(f"Failed to move {source_path}: {error}")

        try:
            shutil.move(str(source_path), str(target_path))
        except OSError as e:
            self.logger.log_critical_error(f"Failed to move {source_path}", e)
            raise FileOperationError(f"Failed to move {source_path}: {e}") from e

        return target_path
