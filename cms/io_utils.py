# cms/io_utils.py
"""Модуль для чтения и записи файла базы данных.

Формат файла: 5 строк заголовка, затем по одной строке на запись:
    id,name,programme,marks,grade
"""
import csv
import logging
from typing import Iterable, List, Optional, Set

from . import config
from .errors import MalformedRecordError, PersistenceUnavailableError
from .models import StudentRecord
from .validators import Accepted, validate_id, validate_marks

logger = logging.getLogger(__name__)

FIELD_COUNT = 5


def build_header(filepath) -> List[str]:
    """Строки заголовка, которые пишутся в начало файла при сохранении."""
    line = "=" * 30
    return [
        line,
        f"File Name: {filepath}",
        f"Database Name: {config.DB_NAME}",
        line,
        "[ID],[Name],[Programme],[Marks],[Grade]",
    ]


def read_records(filepath, errors: Optional[List[MalformedRecordError]] = None) -> List[StudentRecord]:
    """Читает записи из файла базы данных.

    Некорректные строки пропускаются с предупреждением; если передан список
    ``errors``, в него добавляется по исключению на каждую пропущенную строку.
    """
    records: List[StudentRecord] = []
    seen_ids: Set[int] = set()
    try:
        with open(filepath, mode='r', encoding='utf-8', newline='') as file:
            for header_num in range(config.FILE_HEADER_LINES):
                if not file.readline():
                    logger.warning("File %s ended inside header (line %d)", filepath, header_num + 1)
                    return records

            # В формате нет кавычек: каждая физическая строка -- одна запись
            reader = csv.reader(file, quoting=csv.QUOTE_NONE)
            for i, row in enumerate(reader, start=config.FILE_HEADER_LINES + 1):
                try:
                    record = process_row(row, i)
                    if record is None:
                        continue
                    if record.id in seen_ids:
                        raise MalformedRecordError(i, config.FIELD_SEPARATOR.join(row),
                                                   f"повторяющийся ID {record.id}")
                except MalformedRecordError as e:
                    logger.warning("Skipping malformed line %d in %s: %s", e.line_num, filepath, e.reason)
                    if errors is not None:
                        errors.append(e)
                    continue
                seen_ids.add(record.id)
                records.append(record)

    except FileNotFoundError:
        raise PersistenceUnavailableError(f'Файл базы данных "{filepath}" не найден!')
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise PersistenceUnavailableError(f"Не удалось прочитать файл {filepath}: {e}")

    logger.info("Loaded %d records from %s", len(records), filepath)
    return records


def process_row(row: List[str], line_num: int) -> Optional[StudentRecord]:
    """Разбирает одну строку файла. Пустые строки возвращают None."""
    if not row or not "".join(row).strip():
        return None

    line = config.FIELD_SEPARATOR.join(row)
    if len(row) != FIELD_COUNT:
        raise MalformedRecordError(line_num, line, f"ожидалось {FIELD_COUNT} полей, получено {len(row)}")

    raw_id, name, programme, raw_marks, stored_grade = (field.strip() for field in row)
    # Те же правила, что и для ввода с клавиатуры
    parsed_id = validate_id(raw_id)
    if not isinstance(parsed_id, Accepted):
        raise MalformedRecordError(line_num, line, f"некорректный ID {raw_id!r}")
    parsed_marks = validate_marks(raw_marks)
    if not isinstance(parsed_marks, Accepted):
        raise MalformedRecordError(line_num, line, f"некорректные баллы {raw_marks!r}")
    try:
        record = StudentRecord(parsed_id.value, name, programme, parsed_marks.value)
    except ValueError as e:
        raise MalformedRecordError(line_num, line, str(e))

    if stored_grade != record.grade:
        logger.warning("Line %d: stored grade %r does not match marks %.1f, using %r",
                       line_num, stored_grade, record.marks, record.grade)
    return record


def write_records(filepath, records: Iterable[StudentRecord]):
    """Перезаписывает файл базы данных целиком: заголовок и все записи."""
    try:
        with open(filepath, mode='w', encoding='utf-8', newline='') as file:
            for line in build_header(filepath):
                file.write(line + "\n")

            writer = csv.writer(file, lineterminator="\n")
            count = 0
            for record in records:
                writer.writerow(record.to_row())
                count += 1
    except OSError as e:
        raise PersistenceUnavailableError(f"Ошибка записи в файл {filepath}: {e}")
    logger.info("Saved %d records to %s", count, filepath)
