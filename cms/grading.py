# cms/grading.py
"""Расчёт буквенной оценки по баллам."""
from typing import List, Tuple

# Пороги по убыванию: первый порог, не превышающий балл, определяет оценку
GRADE_THRESHOLDS: List[Tuple[float, str]] = [
    (85, "A+"),
    (80, "A"),
    (75, "A-"),
    (70, "B+"),
    (65, "B"),
    (60, "B-"),
    (55, "C+"),
    (50, "C"),
    (45, "D+"),
    (40, "D"),
]
FAILING_GRADE = "F"

GRADES: Tuple[str, ...] = tuple(label for _, label in GRADE_THRESHOLDS) + (FAILING_GRADE,)
BASE_LETTERS: Tuple[str, ...] = ("A", "B", "C", "D", "F")


def calculate_grade(marks: float) -> str:
    """Возвращает оценку для баллов из диапазона [0, 100]."""
    for threshold, label in GRADE_THRESHOLDS:
        if marks >= threshold:
            return label
    return FAILING_GRADE


def base_letter(grade: str) -> str:
    """Буква оценки без модификатора: 'B+' -> 'B'."""
    return grade[:1].upper()
