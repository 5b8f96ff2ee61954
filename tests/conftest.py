# tests/conftest.py
import pytest
from typing import List
from cms.io_utils import build_header
from cms.models import StudentRecord
from cms.store import RecordStore


@pytest.fixture
def sample_records() -> List[StudentRecord]:
    """Фикстура, предоставляющая тестовый набор записей."""
    return [
        StudentRecord(2301234, "Anna Lee", "Computer Science", 85.0),
        StudentRecord(2305678, "Susan Tan", "Applied AI", 67.5),
        StudentRecord(2309999, "John Smith", "Software Engineering", 72.0),
        StudentRecord(2400001, "Bob Ng", "Digital Art & Design", 61.0),
        StudentRecord(2400002, "Carl Ho", "Mechanical Engineering", 39.9),
    ]


@pytest.fixture
def store(sample_records) -> RecordStore:
    """Открытое хранилище с тестовыми записями и без несохранённых изменений."""
    s = RecordStore()
    s.open(sample_records)
    return s


@pytest.fixture
def feed_input(monkeypatch):
    """Подменяет input(): ответы выдаются по очереди, после последнего -- EOFError."""
    def _feed(*answers):
        sequence = iter(answers)

        def mock_input(prompt=""):
            try:
                return next(sequence)
            except StopIteration:
                raise EOFError("input exhausted")

        monkeypatch.setattr('builtins.input', mock_input)
    return _feed


@pytest.fixture
def data_lines() -> List[str]:
    """Корректные строки данных файла базы в порядке записей."""
    return [
        "2301234,Anna Lee,Computer Science,85.0,A+",
        "2305678,Susan Tan,Applied AI,67.5,B",
        "2309999,John Smith,Software Engineering,72.0,B+",
    ]


@pytest.fixture
def db_file(tmp_path, data_lines):
    """Файл базы данных с заголовком и тремя корректными записями."""
    path = tmp_path / "records.txt"
    path.write_text("\n".join(build_header(path) + data_lines) + "\n", encoding="utf-8")
    return path
