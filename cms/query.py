# cms/query.py
"""Поиск записей по ID, имени, программе или оценке."""
import string
from typing import Iterable, Iterator

from . import config
from .grading import BASE_LETTERS, GRADES, base_letter
from .models import StudentRecord
from .validators import CANCEL, Accepted, Rejected, ValidationResult, is_cancel

BY_ID = "id"
BY_NAME = "name"
BY_PROGRAMME = "programme"
BY_GRADE = "grade"
DIMENSIONS = (BY_ID, BY_NAME, BY_PROGRAMME, BY_GRADE)


def validate_term(dimension: str, raw: str) -> ValidationResult:
    """Проверяет поисковый запрос для выбранного измерения."""
    if dimension not in DIMENSIONS:
        raise ValueError(f"Неизвестное поле поиска: '{dimension}'. Доступно: {', '.join(DIMENSIONS)}.")

    term = raw.strip()
    if is_cancel(term):
        return CANCEL
    if not term:
        return Rejected("Запрос пуст!")

    if dimension == BY_ID:
        if len(term) > config.ID_LENGTH or any(ch not in string.digits for ch in term):
            return Rejected("Для поиска по ID допускаются только цифры (не более 7).")
        return Accepted(term)

    if dimension == BY_GRADE:
        grade = term.upper()
        if grade not in GRADES:
            return Rejected(f"Допустимые оценки: {', '.join(GRADES)}.")
        return Accepted(grade)

    max_len = config.MAX_NAME_LEN if dimension == BY_NAME else config.MAX_PROGRAMME_LEN
    if len(term) > max_len or not all(ch.isalpha() or ch == " " for ch in term):
        return Rejected(f"Допускаются только буквы и пробелы (не более {max_len} символов).")
    return Accepted(term)


def matches(record: StudentRecord, dimension: str, term: str) -> bool:
    if dimension == BY_GRADE:
        grade = term.upper()
        if grade in BASE_LETTERS:
            return base_letter(record.grade) == grade
        return record.grade == grade

    if dimension == BY_ID:
        field = str(record.id)
    elif dimension == BY_NAME:
        field = record.name
    else:
        field = record.programme
    return term.lower() in field.lower()


def run_query(records: Iterable[StudentRecord], dimension: str, term: str) -> Iterator[StudentRecord]:
    """Лениво возвращает подходящие записи в порядке хранилища."""
    for record in records:
        if matches(record, dimension, term):
            yield record
