# cms/guided.py
"""Пошаговый ввод с подтверждением для операций INSERT, UPDATE и DELETE.

Операция запрашивает поля по одному. Некорректный ввод запрашивается повторно,
'Q' на любом шаге отменяет всю операцию, в конце пользователь подтверждает
изменение ответом Y/N. Изменение применяется вызывающим кодом только после
успешного ``confirm``.
"""
import logging
from typing import Any, Callable, Dict, Optional

from .errors import OperationCancelled
from .validators import Accepted, CancelRequested, Rejected, ValidationResult, validate_choice

logger = logging.getLogger(__name__)

PROMPTING = "prompting"
CONFIRMING = "confirming"
COMMITTED = "committed"
CANCELLED = "cancelled"

INPUT_MARK = ">> CMS: "


class GuidedInput:
    """Состояние одной многошаговой операции."""
    def __init__(self, operation: str):
        self.operation = operation
        self.state = PROMPTING
        self.field: Optional[str] = None
        self.values: Dict[str, Any] = {}

    def ask(self, field: str, prompt: str, validator: Callable[[str], ValidationResult],
            check: Optional[Callable[[Any], Optional[str]]] = None) -> Any:
        """Запрашивает поле, пока не получит корректное значение.

        ``check`` -- дополнительная проверка принятого значения (например,
        уникальность ID); она возвращает текст ошибки или None.
        """
        self.state = PROMPTING
        self.field = field
        while True:
            result = validator(input(f"{prompt}\n{INPUT_MARK}"))
            if isinstance(result, CancelRequested):
                self.cancel()
            if isinstance(result, Rejected):
                print(f"\n❌ Ошибка: {result.reason} Попробуйте ещё раз.")
                continue
            value = result.value
            problem = check(value) if check else None
            if problem:
                print(f"\n❌ {problem}")
                continue
            self.values[field] = value
            return value

    def confirm(self, prompt: str) -> bool:
        """Спрашивает Y/N. Y фиксирует операцию, N отменяет её."""
        self.state = CONFIRMING
        self.field = None
        while True:
            result = validate_choice(input(f"{prompt} (Y/N)\n{INPUT_MARK}"))
            if isinstance(result, Accepted):
                break
            print(f"\n❌ Ошибка: {result.reason}")

        if result.value:
            self.state = COMMITTED
            logger.debug("%s committed", self.operation)
            return True
        self._abort()
        return False

    def cancel(self):
        """Отмена по вводу 'Q': сбрасывает собранные значения и прерывает операцию."""
        self._abort()
        raise OperationCancelled(self.operation)

    def _abort(self):
        self.state = CANCELLED
        self.values.clear()
        logger.debug("%s cancelled", self.operation)
        print(f"\nCMS <{self.operation}>: Операция отменена!")
