# cms/models.py
"""Модуль, определяющий основную модель данных: запись о студенте."""
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from . import config
from .grading import calculate_grade

PROGRAMME_EXTRA_CHARS = "-&.()"


def round_marks(value) -> float:
    """Округляет баллы до одного знака после запятой (половина вверх)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def collapse_spaces(text: str) -> str:
    """Убирает пробелы по краям и схлопывает повторяющиеся пробелы внутри."""
    return " ".join(text.split())


class StudentRecord:
    """Представляет запись о студенте: ID, имя, программа, баллы и оценка.

    Оценка не задаётся напрямую: она пересчитывается при каждом изменении баллов.
    """
    def __init__(self, student_id: int, name: str, programme: str, marks: float):
        if isinstance(student_id, bool) or not isinstance(student_id, int):
            raise ValueError("ID студента должен быть целым числом.")
        if len(str(student_id)) != config.ID_LENGTH or student_id < 0:
            raise ValueError(f"ID студента должен состоять ровно из {config.ID_LENGTH} цифр.")

        self.id = student_id
        self.name = name
        self.programme = programme
        self.marks = marks

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._name = _check_text(value, "Имя", config.MAX_NAME_LEN, "")

    @property
    def programme(self) -> str:
        return self._programme

    @programme.setter
    def programme(self, value: str):
        self._programme = _check_text(value, "Программа", config.MAX_PROGRAMME_LEN, PROGRAMME_EXTRA_CHARS)

    @property
    def marks(self) -> float:
        return self._marks

    @marks.setter
    def marks(self, value: float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Баллы '{value}' должны быть числом.")
        if not config.MIN_MARKS <= value <= config.MAX_MARKS:
            raise ValueError(f"Баллы {value} недопустимы. Разрешен диапазон 0.0-100.0.")
        self._marks = round_marks(value)
        self._grade = calculate_grade(self._marks)

    @property
    def grade(self) -> str:
        """Оценка, вычисленная по текущим баллам."""
        return self._grade

    def to_row(self) -> List[str]:
        """Поля записи в порядке колонок файла базы данных."""
        return [str(self.id), self.name, self.programme, f"{self.marks:.1f}", self.grade]

    def __eq__(self, other) -> bool:
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.to_row() == other.to_row()

    def __repr__(self) -> str:
        """Возвращает строковое представление объекта для отладки."""
        return (f"StudentRecord(id={self.id}, name='{self.name}', programme='{self.programme}', "
                f"marks={self.marks:.1f}, grade='{self.grade}')")

    def __str__(self) -> str:
        """Строка таблицы для вывода на экран."""
        return f"{self.id:<7}  {self.name:<30}  {self.programme:<50}  {self.marks:<10.1f} {self.grade:<10}"


def _check_text(value: str, label: str, max_len: int, extra_chars: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} не может быть пустым.")
    if value != collapse_spaces(value):
        raise ValueError(f"{label} содержит лишние пробелы.")
    if len(value) > max_len:
        raise ValueError(f"{label} превышает {max_len} символов.")
    for ch in value:
        if not (ch.isalpha() or ch == " " or ch in extra_chars):
            raise ValueError(f"{label} содержит недопустимый символ: \"{ch}\".")
    return value
