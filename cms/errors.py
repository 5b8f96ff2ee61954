# cms/errors.py
"""Модуль для определения пользовательских исключений приложения."""


class CmsError(Exception):
    """Базовый класс для всех исключений в этом приложении."""
    pass


class DuplicateKeyError(CmsError):
    """Исключение при попытке добавить запись с уже существующим ID."""
    pass


class RecordNotFoundError(CmsError):
    """Исключение, когда запись с заданным ID не найдена."""
    pass


class PersistenceUnavailableError(CmsError):
    """Файл базы данных отсутствует или недоступен для чтения/записи."""
    pass


class MalformedRecordError(CmsError):
    """Строка файла базы данных не может быть разобрана в запись."""

    def __init__(self, line_num: int, line: str, reason: str):
        self.line_num = line_num
        self.line = line
        self.reason = reason
        super().__init__(f"Ошибка в строке {line_num}: {line!r}. Детали: {reason}")


class StoreClosedError(CmsError):
    """Операция требует открытой базы данных."""
    pass


class OperationCancelled(CmsError):
    """Пользователь отменил многошаговую операцию вводом 'Q'."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Операция {operation} отменена.")
