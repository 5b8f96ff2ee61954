# cms/commands.py
"""Команды консольного интерфейса: каждая работает с хранилищем через пошаговый ввод."""
from typing import Any, Iterable, Optional

from . import config, io_utils
from .errors import OperationCancelled
from .guided import INPUT_MARK, GuidedInput
from .models import StudentRecord
from .query import BY_GRADE, BY_ID, BY_NAME, BY_PROGRAMME, run_query, validate_term
from .store import RecordStore
from .validators import (CancelRequested, Rejected, validate_id, validate_marks, validate_name,
                         validate_programme)

TABLE_LINE = "=" * 111

QUERY_OPTIONS = {
    "1": (BY_ID, "Student ID", "Введите цифры для поиска по Student ID"),
    "2": (BY_NAME, "имени", "Введите имя для поиска"),
    "3": (BY_PROGRAMME, "программе", "Введите программу для поиска"),
    "4": (BY_GRADE, "оценке", "Введите оценку для поиска (например, 'A+', 'B')"),
}

# поле -> (название, приглашение, валидатор)
UPDATE_FIELDS = {
    "name": ("Имя", "Введите новое имя студента", validate_name),
    "programme": ("Программа", "Введите новую программу", validate_programme),
    "marks": ("Баллы", "Введите новые баллы", validate_marks),
}
UPDATE_OPTIONS = {"1": "name", "2": "programme", "3": "marks"}


def _fmt(value: Any) -> str:
    return f"{value:.1f}" if isinstance(value, float) else str(value)


def print_table(records: Iterable[StudentRecord]):
    """Выводит записи таблицей."""
    print(f"\n{'[ID]':<7}  {'[Name]':<30}  {'[Programme]':<50}  {'[Marks]':<10} {'[Grade]':<10}")
    print(TABLE_LINE)
    for record in records:
        print(record)
    print(TABLE_LINE)


def print_record_card(title: str, record: StudentRecord, grade_note: str = ""):
    print(f"{' ' + title + ' ':=^52}")
    print(f"{'Student ID:':>11} {record.id}")
    print(f"{'Name:':>11} {record.name}")
    print(f"{'Programme:':>11} {record.programme}")
    print(f"{'Marks:':>11} {record.marks:.1f}")
    print(f"{'Grade:':>11} {record.grade}{grade_note}")
    print("=" * 52)


def open_db(store: RecordStore, filepath=None):
    """Загружает файл базы данных в хранилище."""
    filepath = filepath or config.DB_FILE
    skipped = []
    records = io_utils.read_records(filepath, skipped)
    store.open(records)
    print(f'\n✅ Файл базы данных "{filepath}" открыт! Найдено записей: {len(store)}.')
    if skipped:
        print(f"⚠️ Пропущено некорректных строк: {len(skipped)}.")


def show_all_records(store: RecordStore):
    records = store.all()
    if not records:
        print("\nℹ️ Записей нет. Используйте INSERT, чтобы добавить запись.")
        return
    print_table(records)
    print(f'CMS <SHOW ALL>: Найдено записей в базе "{config.DB_NAME}": {len(records)}.')


def insert_record(store: RecordStore) -> Optional[StudentRecord]:
    """Добавляет новую запись: ID, имя, программа, баллы и подтверждение."""
    print("\n" + " INSERT ".center(54, "="))
    print("Будут запрошены следующие данные:")
    print(f"{'- Student ID':<12} ({config.ID_LENGTH} цифр)")
    print(f"{'- Name':<12} (до {config.MAX_NAME_LEN} символов)")
    print(f"{'- Programme':<12} (до {config.MAX_PROGRAMME_LEN} символов)")
    print(f"{'- Marks':<12} (от 0.0 до 100.0)")
    print("=" * 54)

    def check_unique(student_id: int) -> Optional[str]:
        if student_id in store:
            return f'Запись с Student ID="{student_id}" уже существует! Попробуйте ещё раз.'
        return None

    flow = GuidedInput("INSERT")
    try:
        student_id = flow.ask("id", "CMS <INSERT 1/4>: Введите 7-значный Student ID ('Q' - отмена)",
                              validate_id, check=check_unique)
        name = flow.ask("name", "CMS <INSERT 2/4>: Введите имя студента ('Q' - отмена)", validate_name)
        programme = flow.ask("programme", "CMS <INSERT 3/4>: Введите программу ('Q' - отмена)",
                             validate_programme)
        marks = flow.ask("marks", "CMS <INSERT 4/4>: Введите баллы ('Q' - отмена)", validate_marks)
    except OperationCancelled:
        return None

    record = StudentRecord(student_id, name, programme, marks)
    print_record_card("CONFIRM INSERT", record, " (вычислена автоматически)")
    if not flow.confirm("CMS <INSERT>: Подтвердить добавление?"):
        return None

    store.insert(record)
    print("\n✅ CMS <INSERT>: Запись успешно добавлена!")
    return record


def query_records(store: RecordStore):
    """Меню поиска: выбор поля, затем запрос. 'Q' возвращает в главное меню."""
    if not len(store):
        print(f'\nℹ️ CMS <QUERY>: Искать нечего, база "{config.DB_NAME}" пуста!')
        return

    while True:
        print(" QUERY ".center(47, "="))
        print("[1] Student ID [2] Name [3] Programme [4] Grade")
        print("=" * 47)
        option = input(f"CMS <QUERY>: Выберите поле поиска [1-4] ('Q' - отмена)\n{INPUT_MARK}").strip()

        if option.upper() == config.CANCEL_SENTINEL:
            print("\nCMS <QUERY>: Возврат в главное меню...")
            return
        if option not in QUERY_OPTIONS:
            print("\n❌ Ошибка: Неверный ввод! Введите номер от 1 до 4.")
            continue

        dimension, label, prompt = QUERY_OPTIONS[option]
        _query_by(store, dimension, label, prompt)


def _query_by(store: RecordStore, dimension: str, label: str, prompt: str):
    while True:
        result = validate_term(dimension, input(f"CMS <QUERY>: {prompt} ('Q' - отмена)\n{INPUT_MARK}"))
        if isinstance(result, CancelRequested):
            print(f"\nCMS <QUERY>: Поиск по {label} отменён! Возврат в меню поиска.")
            return
        if isinstance(result, Rejected):
            print(f"\n❌ Ошибка: {result.reason} Попробуйте ещё раз.")
            continue

        found = list(run_query(store.all(), dimension, result.value))
        if not found:
            print(f'\nℹ️ CMS <QUERY>: По {label} "{result.value}" ничего не найдено. Попробуйте ещё раз.')
            continue
        print_table(found)
        print(f"CMS <QUERY>: Найдено записей: {len(found)}.")
        return


def _ask_existing_id(store: RecordStore, operation: str) -> Optional[StudentRecord]:
    """Запрашивает ID, пока не найдётся запись. None означает отмену."""
    while True:
        flow = GuidedInput(operation)
        try:
            student_id = flow.ask("id", f"CMS <{operation}>: Введите 7-значный Student ID ('Q' - отмена)",
                                  validate_id)
        except OperationCancelled:
            return None
        record = store.find(student_id)
        if record is not None:
            return record
        print(f'\nℹ️ CMS <{operation}>: Запись с Student ID="{student_id}" не найдена!')


def update_record(store: RecordStore):
    """Изменяет одно поле записи или сразу имя, программу и баллы."""
    if not len(store):
        print(f'\nℹ️ CMS <UPDATE>: Обновлять нечего, база "{config.DB_NAME}" пуста!')
        return

    record = _ask_existing_id(store, "UPDATE")
    if record is None:
        return

    while True:
        print_record_card("STUDENT FOUND", record)
        print("[1] Update Name [2] Update Programme [3] Update Marks [4] Update All")
        print("=" * 52)
        option = input(f"CMS <UPDATE>: Выберите действие [1-4] ('Q' - отмена)\n{INPUT_MARK}").strip()

        if option in UPDATE_OPTIONS:
            _update_field(store, record, UPDATE_OPTIONS[option])
        elif option == "4":
            if _update_all(store, record):
                return
        elif option.upper() == config.CANCEL_SENTINEL:
            print("\nCMS <UPDATE>: Обновление завершено.")
            return
        else:
            print("\n❌ Ошибка: Неверный выбор. Введите 1-4 или 'Q' для отмены.")


def _update_field(store: RecordStore, record: StudentRecord, field: str) -> bool:
    label, prompt, validator = UPDATE_FIELDS[field]
    flow = GuidedInput("UPDATE")
    try:
        value = flow.ask(field, f"CMS <UPDATE>: {prompt} ('Q' - отмена)", validator)
    except OperationCancelled:
        return False

    old = getattr(record, field)
    if not flow.confirm(f'CMS <UPDATE>: Изменить поле "{label}" с "{_fmt(old)}" на "{_fmt(value)}"?'):
        return False
    store.update(record.id, **{field: value})
    print(f'\n✅ CMS <UPDATE>: Поле "{label}" успешно обновлено!')
    return True


def _update_all(store: RecordStore, record: StudentRecord) -> bool:
    flow = GuidedInput("UPDATE")
    try:
        for field, (_, prompt, validator) in UPDATE_FIELDS.items():
            flow.ask(field, f"CMS <UPDATE>: {prompt} ('Q' - отмена)", validator)
    except OperationCancelled:
        return False

    new = dict(flow.values)
    print(" CONFIRM UPDATE ".center(58, "="))
    for field, (label, _, _) in UPDATE_FIELDS.items():
        print(f"{label + ':':>10} {_fmt(getattr(record, field))} -> {_fmt(new[field])}")
    print("=" * 58)
    if not flow.confirm("CMS <UPDATE>: Подтвердить обновление?"):
        return False
    store.update(record.id, **new)
    print("\n✅ CMS <UPDATE>: Запись успешно обновлена!")
    return True


def delete_record(store: RecordStore) -> Optional[StudentRecord]:
    """Удаляет запись после подтверждения."""
    if not len(store):
        print(f'\nℹ️ CMS <DELETE>: Удалять нечего, база "{config.DB_NAME}" пуста!')
        return None

    record = _ask_existing_id(store, "DELETE")
    if record is None:
        return None

    print_record_card("STUDENT FOUND", record)
    if not GuidedInput("DELETE").confirm("CMS <DELETE>: Подтвердить удаление?"):
        return None
    store.delete(record.id)
    print(f'\n✅ CMS <DELETE>: Запись с Student ID="{record.id}" успешно удалена!')
    return record


def save_db(store: RecordStore, filepath=None):
    """Перезаписывает файл базы данных текущими записями."""
    filepath = filepath or config.DB_FILE
    io_utils.write_records(filepath, store.all())
    store.mark_saved()
    print(f'\n✅ Данные успешно сохранены в "{filepath}".')


def close_db(store: RecordStore) -> bool:
    """Закрывает базу. При несохранённых изменениях требует подтверждения."""
    if store.dirty:
        confirmed = GuidedInput("CLOSE").confirm(
            "⚠️ CMS <CLOSE>: Есть несохранённые изменения! Всё равно закрыть базу данных?")
        if not confirmed:
            print("CMS <CLOSE>: Несохранённые изменения остались в памяти.")
            return False
    store.close()
    print("\n✅ База данных закрыта. Возврат в главное меню.")
    return True
