"""
Главный модуль CLI интерфейса для утилиты импорта файлов.

Разрешает конфигурацию, настраивает журнал, выполняет импорт и
возвращает код возврата:
    0 - успех, 1 - ошибка, 2 - нечего делать, 3 - есть дубликаты.
"""

import argparse
import sys
import traceback
from typing import List, Optional

from .config_loader import Config, ConfigResolutionError, default_config_path, resolve_config
from .file_ops import FileOperationError
from .importer import ExitCode, Importer, create_importer
from .logger import ImportLogger


class ImporterArgumentParser(argparse.ArgumentParser):
    """
    Парсер, сообщающий об ошибках исключением.

    Стандартный argparse завершает процесс с кодом 2, а код 2 здесь
    означает "нечего делать".
    """

    def error(self, message):
        self.print_usage(sys.stderr)
        raise ConfigResolutionError(message)


class FileImporterCLI:
    """Класс для выполнения импорта из командной строки."""

    def __init__(self):
        self.logger: Optional[ImportLogger] = None
        self.importer: Optional[Importer] = None

    def setup(self, config: Config) -> bool:
        """
        Настраивает журнал и импортер.

        Args:
            config: Разрешенная конфигурация запуска

        Returns:
            bool: True если инициализация успешна
        """
        try:
            self.logger = ImportLogger(config.log_file)
            self.importer = create_importer(config, self.logger)
            return True
        except OSError as e:
            print(f"❌ Failed to open log file {config.log_file}: {e}", file=sys.stderr)
            return False

    def cmd_import(self, verbose: bool = False) -> int:
        """
        Команда импорта файлов.

        Args:
            verbose: Печатать трассировку при ошибке

        Returns:
            int: Код возврата
        """
        try:
            outcome = self.importer.run()
            return int(outcome.exit_code)

        except (FileOperationError, OSError) as e:
            print(f"❌ Import aborted: {e}", file=sys.stderr)
            if verbose:
                traceback.print_exc()
            return int(ExitCode.ERROR)
        finally:
            if self.logger:
                self.logger.close()


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = ImporterArgumentParser(
        prog='file-importer',
        description="Move files into date-named folders, quarantining name collisions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # Use a JSON config file
  file-importer --config-file import.json

  # Pass the folders directly
  file-importer --source-dir inbox --dest-dir photos --dupe-dir duplicates

Exit codes:
  0  success
  1  error (bad configuration, missing source folder, file system failure)
  2  nothing to do (source folder is empty)
  3  duplicates need manual processing
        """
    )

    parser.add_argument(
        '--config-file',
        help='Path to a JSON config file with srcDir, dstDir, dupeDir and logFile'
    )
    parser.add_argument('--source-dir', help='Folder to import files from')
    parser.add_argument('--dest-dir', help='Folder that receives the date-named folders')
    parser.add_argument('--dupe-dir', help='Folder that receives duplicate files')
    parser.add_argument(
        '--log-file',
        help='Log file path (default: file_importer.log next to the program)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print tracebacks on errors'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    parser = create_parser()

    try:
        args = parser.parse_args(argv)
        config = resolve_config(args, default_config_path())
    except ConfigResolutionError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return int(ExitCode.ERROR)

    cli = FileImporterCLI()
    if not cli.setup(config):
        return int(ExitCode.ERROR)

    try:
        return cli.cmd_import(args.verbose)
    except KeyboardInterrupt:
        print("\n⚠️ Interrupted by user", file=sys.stderr)
        return int(ExitCode.ERROR)


if __name__ == "__main__":
    sys.exit(main())
