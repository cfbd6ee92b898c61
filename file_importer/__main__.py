"""Точка входа для запуска через `python -m file_importer`."""

import sys

from .main import main


if __name__ == "__main__":
    sys.exit(main())
