"""
Тесты для модуля logger.py
"""

import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from file_importer.logger import (
    AppendOnlyFileHandler,
    ColoredFormatter,
    ImportLogger,
    LOGGER_NAME,
)


class TestColoredFormatter:
    """Тесты для ColoredFormatter."""

    def test_colored_formatter(self):
        """Тест цветного форматтера."""
        formatter = ColoredFormatter(fmt='[%(levelname)s] %(message)s')
        record = logging.LogRecord(
            name='test',
            level=logging.INFO,
            pathname='',
            lineno=0,
            msg='Test message',
            args=(),
            exc_info=None
        )

        formatted = formatter.format(record)

        assert '\033[32m' in formatted  # Зеленый цвет для INFO
        assert '\033[0m' in formatted
        assert 'Test message' in formatted
        # Запись не должна измениться для следующих обработчиков
        assert record.levelname == 'INFO'


@pytest.fixture
def temp_dir():
    """Создает временную директорию для тестов."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def log_file(temp_dir):
    yield temp_dir / "logs" / "import.log"

    # Очистка - закрываем все обработчики логгера
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


class TestImportLogger:
    """Тесты для ImportLogger."""

    def test_logger_initialization(self, log_file):
        """Тест инициализации логгера."""
        logger = ImportLogger(log_file)

        assert logger.logger.name == LOGGER_NAME
        assert logger.logger.level == logging.INFO
        assert logger.logger.propagate is False
        assert log_file.parent.is_dir()

    def test_logger_handlers(self, log_file):
        """Тест обработчиков логгера: файловый и консольный."""
        logger = ImportLogger(log_file)
        handlers = logger.logger.handlers

        assert len(handlers) == 2
        assert isinstance(handlers[0], AppendOnlyFileHandler)
        assert type(handlers[1]) is logging.StreamHandler

    def test_repeated_setup_does_not_duplicate_handlers(self, log_file):
        ImportLogger(log_file)
        logger = ImportLogger(log_file)

        assert len(logger.logger.handlers) == 2

    def test_lines_are_mirrored_to_stdout(self, log_file, capsys):
        """Тест: каждая строка журнала дублируется в stdout без изменений."""
        logger = ImportLogger(log_file)
        logger.log_run_start("2024-03-01_10-00-00")
        logger.log_source_empty(Path("inbox"))
        logger.log_run_end("2024-03-01_10-00-01")
        logger.close()

        file_lines = log_file.read_text(encoding='utf-8').splitlines()
        stdout_lines = capsys.readouterr().out.splitlines()

        assert len(file_lines) == 3
        assert file_lines == stdout_lines
        assert file_lines[0].endswith("[INFO] Start of log for 2024-03-01_10-00-00")
        assert file_lines[2].endswith("[INFO] End of log for 2024-03-01_10-00-01")

    def test_log_file_is_appended(self, log_file):
        """Тест: повторный запуск дописывает журнал, а не перезаписывает."""
        for timestamp in ("2024-03-01_10-00-00", "2024-03-02_10-00-00"):
            logger = ImportLogger(log_file)
            logger.log_run_start(timestamp)
            logger.log_run_end(timestamp)
            logger.close()

        content = log_file.read_text(encoding='utf-8')

        assert content.count("Start of log for") == 2
        assert content.count("End of log for") == 2
        assert "Start of log for 2024-03-01_10-00-00" in content
        assert "Start of log for 2024-03-02_10-00-00" in content

    def test_write_failure_is_fatal(self, log_file):
        """Тест: ошибка записи в журнал не проглатывается."""
        logger = ImportLogger(log_file)
        file_handler = logger.logger.handlers[0]
        original_stream = file_handler.stream
        broken_stream = Mock()
        broken_stream.write.side_effect = OSError("disk full")
        file_handler.stream = broken_stream

        try:
            with pytest.raises(OSError, match="disk full"):
                logger.log_run_start("2024-03-01_10-00-00")
        finally:
            file_handler.stream = original_stream

    def test_unwritable_log_file_fails_on_setup(self, temp_dir):
        """Тест: журнал, который нельзя открыть, - ошибка при настройке."""
        # Каталог на месте файла журнала не открыть на запись
        log_dir_as_file = temp_dir / "import.log"
        log_dir_as_file.mkdir()

        with pytest.raises(OSError):
            ImportLogger(log_dir_as_file)

    def test_log_events(self, log_file):
        """Тест текста событий журнала."""
        logger = ImportLogger(log_file)
        source = Path("inbox") / "photo1.jpg"
        target = Path("photos") / "2024-03-01" / "photo1.jpg"

        with patch.object(logger.logger, 'info') as mock_info:
            logger.log_directory_created(Path("photos") / "2024-03-01")
            logger.log_quarantine_created(Path("dupes") / "2024-03-01_10-00-00")
            logger.log_file_moved(source, target)
            logger.log_source_empty(Path("inbox"))

        calls = [call[0][0] for call in mock_info.call_args_list]
        assert calls[0].startswith("Created folder ")
        assert calls[1].startswith("Created duplicates folder ")
        assert calls[2] == f"Moved {source} to {target}"
        assert calls[3] == "Source folder inbox is empty, nothing to do"

    def test_log_source_missing(self, log_file):
        logger = ImportLogger(log_file)

        with patch.object(logger.logger, 'error') as mock_error:
            logger.log_source_missing(Path("inbox"))

        mock_error.assert_called_once_with("Source folder inbox does not exist")

    def test_log_duplicate(self, log_file):
        logger = ImportLogger(log_file)
        source = Path("inbox") / "photo1.jpg"
        target = Path("dupes") / "2024-03-01_10-00-00" / "photo1.jpg"

        with patch.object(logger.logger, 'warning') as mock_warning:
            logger.log_duplicate(source, target)

        message = mock_warning.call_args[0][0]
        assert message.startswith("Duplicate photo1.jpg")
        assert str(target) in message

    def test_log_critical_error(self, log_file):
        """Тест логирования критической ошибки."""
        logger = ImportLogger(log_file)

        with patch.object(logger.logger, 'critical') as mock_critical:
            logger.log_critical_error("Failed to move a.jpg", PermissionError("denied"))
            logger.log_critical_error("Import aborted")

        calls = [call[0][0] for call in mock_critical.call_args_list]
        assert calls == ["Failed to move a.jpg: denied", "Import aborted"]

    def test_close_releases_handlers(self, log_file):
        logger = ImportLogger(log_file)

        logger.close()

        assert logger.logger.handlers == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
