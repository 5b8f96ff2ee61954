# cms/config.py
"""Настройки приложения: имена файлов, ограничения полей, логирование."""
import os

DB_NAME = "StudentRecords"
DEFAULT_DB_FILE = "P14_8-CMS.txt"

# Переменные окружения переопределяют значения по умолчанию
DB_FILE = os.environ.get("CMS_DB_FILE", DEFAULT_DB_FILE)
LOG_LEVEL = os.environ.get("CMS_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

ID_LENGTH = 7
MAX_NAME_LEN = 30
MAX_PROGRAMME_LEN = 50
MIN_MARKS = 0.0
MAX_MARKS = 100.0

FILE_HEADER_LINES = 5
FIELD_SEPARATOR = ","
CANCEL_SENTINEL = "Q"
