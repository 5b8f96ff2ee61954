# cms/validators.py
"""Проверка пользовательского ввода.

Каждый валидатор принимает одну строку, введённую пользователем, и возвращает
один из трёх результатов:

    Accepted(value)   -- ввод корректен, value уже приведён к нужному типу
    Rejected(reason)  -- ввод некорректен, reason объясняет почему
    CANCEL            -- пользователь ввёл 'Q' и хочет отменить операцию

Валидаторы ничего не печатают и не бросают исключений: что делать с отказом,
решает вызывающий код (обычно он просит ввести значение ещё раз).
"""
import string
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Union

from . import config
from .models import PROGRAMME_EXTRA_CHARS, collapse_spaces


@dataclass(frozen=True)
class Accepted:
    value: Any


@dataclass(frozen=True)
class Rejected:
    reason: str


class CancelRequested:
    """Пользователь ввёл сигнал отмены."""

    def __repr__(self) -> str:
        return "CancelRequested()"


CANCEL = CancelRequested()

ValidationResult = Union[Accepted, Rejected, CancelRequested]


def is_cancel(text: str) -> bool:
    return text.upper() == config.CANCEL_SENTINEL


def validate_id(raw: str) -> ValidationResult:
    """Проверяет ID: ровно 7 цифр, первая цифра не '0'."""
    text = raw.strip()
    if text.startswith("0"):
        return Rejected('Student ID не может начинаться с "0"!')
    if is_cancel(text):
        return CANCEL
    if not text:
        return Rejected("Student ID не может быть пустым!")
    if len(text) != config.ID_LENGTH or any(ch not in string.digits for ch in text):
        return Rejected(f"Student ID должен состоять ровно из {config.ID_LENGTH} цифр!")
    return Accepted(int(text))


def validate_name(raw: str) -> ValidationResult:
    """Проверяет имя: до 30 символов, только буквы и пробелы."""
    return _validate_text(raw, "Имя студента", config.MAX_NAME_LEN, "")


def validate_programme(raw: str) -> ValidationResult:
    """Проверяет программу: до 50 символов, буквы, пробелы и символы - & . ( )"""
    return _validate_text(raw, "Название программы", config.MAX_PROGRAMME_LEN, PROGRAMME_EXTRA_CHARS)


def _validate_text(raw: str, label: str, max_len: int, extra_chars: str) -> ValidationResult:
    # Длина проверяется до обрезки пробелов
    if len(raw) > max_len:
        return Rejected(f"{label} превышает лимит в {max_len} символов!")
    text = raw.strip()
    if is_cancel(text):
        return CANCEL
    if not text:
        return Rejected(f"{label} не может быть пустым!")
    for ch in text:
        if not (ch.isalpha() or ch.isspace() or ch in extra_chars):
            return Rejected(f'{label} содержит недопустимый символ: "{ch}"!')
    return Accepted(collapse_spaces(text))


def validate_marks(raw: str) -> ValidationResult:
    """Проверяет баллы: число от 0.0 до 100.0, округляется до десятых."""
    text = raw.strip()
    if is_cancel(text):
        return CANCEL
    if not text:
        return Rejected("Баллы не могут быть пустыми!")
    dot_count = 0
    for ch in text:
        if ch == ".":
            dot_count += 1
            if dot_count > 1:
                return Rejected("Баллы не могут содержать несколько десятичных точек!")
        elif ch not in string.digits:
            return Rejected("Неверный формат баллов! Баллы должны быть от 0.0 до 100.0!")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return Rejected("Неверный формат баллов! Баллы должны быть от 0.0 до 100.0!")
    if value < Decimal(str(config.MIN_MARKS)) or value > Decimal(str(config.MAX_MARKS)):
        return Rejected("Баллы должны быть в диапазоне от 0.0 до 100.0!")
    return Accepted(float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)))


def validate_choice(raw: str) -> Union[Accepted, Rejected]:
    """Y -> Accepted(True), N -> Accepted(False). Отмена здесь не поддерживается."""
    text = raw.strip().upper()
    if text == "Y":
        return Accepted(True)
    if text == "N":
        return Accepted(False)
    return Rejected("Неверный ввод! Введите 'Y' или 'N'!")
