# cms/store.py
"""Хранилище записей в памяти: добавление, поиск, обновление и удаление."""
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import DuplicateKeyError, RecordNotFoundError, StoreClosedError
from .models import StudentRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Упорядоченный набор записей и флаги сессии.

    Записи хранятся в порядке добавления, ID уникален. Флаг ``dirty`` означает,
    что есть несохранённые изменения; ``is_open`` -- что база данных загружена.
    """
    def __init__(self):
        self._records: List[StudentRecord] = []
        self.dirty = False
        self.is_open = False

    def open(self, records: Iterable[StudentRecord]):
        """Заполняет хранилище загруженными записями и открывает сессию."""
        loaded: List[StudentRecord] = []
        seen = set()
        for record in records:
            if record.id in seen:
                raise DuplicateKeyError(f"Запись с ID {record.id} встречается несколько раз.")
            seen.add(record.id)
            loaded.append(record)
        self._records = loaded
        self.is_open = True
        self.dirty = False
        logger.info("Store opened with %d records", len(loaded))

    def close(self):
        """Очищает хранилище и закрывает сессию, несохранённые изменения теряются."""
        self._records = []
        self.is_open = False
        self.dirty = False
        logger.info("Store closed")

    def mark_saved(self):
        self.dirty = False

    def _require_open(self):
        if not self.is_open:
            raise StoreClosedError("База данных не открыта. Используйте OPEN.")

    def insert(self, record: StudentRecord) -> StudentRecord:
        """Добавляет запись в конец, проверяя уникальность ID."""
        self._require_open()
        if self.find(record.id) is not None:
            raise DuplicateKeyError(f"Запись с ID {record.id} уже существует.")
        self._records.append(record)
        self.dirty = True
        logger.debug("Inserted record %d", record.id)
        return record

    def find(self, student_id: int) -> Optional[StudentRecord]:
        self._require_open()
        return next((r for r in self._records if r.id == student_id), None)

    def update(self, student_id: int, name: Optional[str] = None,
               programme: Optional[str] = None, marks: Optional[float] = None) -> StudentRecord:
        """Изменяет переданные поля записи на месте. Оценка пересчитывается вместе с баллами."""
        record = self.find(student_id)
        if record is None:
            raise RecordNotFoundError(f"Запись с ID {student_id} не найдена.")

        # Сначала проверяем все новые значения, чтобы не применить изменения частично
        candidate = StudentRecord(
            record.id,
            record.name if name is None else name,
            record.programme if programme is None else programme,
            record.marks if marks is None else marks,
        )
        record.name = candidate.name
        record.programme = candidate.programme
        record.marks = candidate.marks
        self.dirty = True
        logger.debug("Updated record %d", student_id)
        return record

    def delete(self, student_id: int) -> StudentRecord:
        """Удаляет запись по ID, сохраняя порядок остальных."""
        record = self.find(student_id)
        if record is None:
            raise RecordNotFoundError(f"Запись с ID {student_id} не найдена.")
        self._records.remove(record)
        self.dirty = True
        logger.debug("Deleted record %d", student_id)
        return record

    def all(self) -> Tuple[StudentRecord, ...]:
        """Снимок всех записей в порядке добавления."""
        self._require_open()
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(self.all())

    def __contains__(self, student_id) -> bool:
        return any(r.id == student_id for r in self._records)
