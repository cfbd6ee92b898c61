"""
File Importer Utility

Утилита для переноса файлов из входящего каталога в подкаталоги по датам
(YYYY-MM-DD) с карантином файлов, чьи имена уже заняты.
"""

__version__ = "1.0.0"
__author__ = "File Importer Team"
__description__ = "Utility for importing files into date-based folders with duplicate quarantine"
