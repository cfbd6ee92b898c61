"""
Модуль для загрузки и разрешения конфигурации приложения.

Четыре пути (источник, назначение, каталог дубликатов, лог-файл) берутся
либо из JSON-файла конфигурации, либо из аргументов командной строки.
Разрешение конфигурации происходит до настройки логирования, поэтому
модуль ничего не пишет в лог.
"""

import json
import sys
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_CONFIG_NAME = "file_importer.json"
DEFAULT_LOG_NAME = "file_importer.log"

# Ключи JSON-файла конфигурации и соответствующие поля Config
CONFIG_KEYS = {
    'srcDir': 'source_dir',
    'dstDir': 'dest_dir',
    'dupeDir': 'dupe_dir',
    'logFile': 'log_file',
}

USAGE = (
    "Specify either --config-file PATH, or all of "
    "--source-dir, --dest-dir and --dupe-dir (optionally --log-file)"
)


class ConfigResolutionError(Exception):
    """Исключение для ошибок разрешения конфигурации."""
    pass


@dataclass
class Config:
    """Разрешенная конфигурация запуска."""
    source_dir: Path
    dest_dir: Path
    dupe_dir: Path
    log_file: Path


class ConfigLoader:
    """Класс для загрузки конфигурации из JSON-файла."""

    def __init__(self, config_path: Path):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)

    def load_config(self) -> Optional[Config]:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config или None: Объект конфигурации, либо None если в файле
            заполнены не все ключи (файл считается ненастроенным)

        Raises:
            ConfigResolutionError: Если файл не найден, не читается или
                не является корректным JSON-объектом
        """
        if not self.config_path.is_file():
            raise ConfigResolutionError(f"Config file not found: {self.config_path}")

        try:
            # utf-8-sig: файлы, сохраненные в Windows, часто начинаются с BOM
            with open(self.config_path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigResolutionError(f"Failed to read config file {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigResolutionError(
                f"Config file {self.config_path} must contain a JSON object"
            )

        values = {}
        for key, field_name in CONFIG_KEYS.items():
            value = data.get(key)
            if not isinstance(value, str) or not value.strip():
                return None
            values[field_name] = Path(value)

        return Config(**values)


def load_config(config_path: Path) -> Optional[Config]:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config или None: Объект конфигурации или None если файл не настроен
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


def get_app_dir() -> Path:
    """Возвращает каталог, в котором лежит запускаемый скрипт."""
    return Path(sys.argv[0]).resolve().parent


def default_config_path() -> Path:
    """Путь к файлу конфигурации по умолчанию (рядом с исполняемым файлом)."""
    return get_app_dir() / DEFAULT_CONFIG_NAME


def resolve_config(args: Namespace, default_config: Path) -> Config:
    """
    Разрешает конфигурацию запуска.

    Порядок:
        1. Явно указанный --config-file
        2. Файл конфигурации по умолчанию, если он существует
        3. Аргументы --source-dir, --dest-dir, --dupe-dir (и --log-file)

    Args:
        args: Разобранные аргументы командной строки
        default_config: Путь к файлу конфигурации по умолчанию

    Returns:
        Config: Разрешенная конфигурация

    Raises:
        ConfigResolutionError: Если конфигурацию разрешить не удалось
    """
    directory_args = (args.source_dir, args.dest_dir, args.dupe_dir, args.log_file)

    if args.config_file:
        if any(value is not None for value in directory_args):
            raise ConfigResolutionError(
                f"--config-file cannot be combined with directory arguments. {USAGE}"
            )
        config = load_config(Path(args.config_file))
        if config is not None:
            return config
    elif Path(default_config).is_file():
        config = load_config(Path(default_config))
        if config is not None:
            return config

    if args.source_dir and args.dest_dir and args.dupe_dir:
        log_file = args.log_file or Path(default_config).with_name(DEFAULT_LOG_NAME)
        return Config(
            source_dir=Path(args.source_dir),
            dest_dir=Path(args.dest_dir),
            dupe_dir=Path(args.dupe_dir),
            log_file=Path(log_file),
        )

    raise ConfigResolutionError(f"Configuration is incomplete. {USAGE}")
