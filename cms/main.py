# cms/main.py
"""Главный модуль, реализующий консольный интерфейс (CLI) системы учёта студентов."""
import argparse
import logging
import sys
from typing import List, Optional

from . import commands, config, errors
from .guided import INPUT_MARK
from .store import RecordStore

logger = logging.getLogger(__name__)

EXIT = "EXIT"

# (номер, команда, описание) для закрытой и открытой базы
CLOSED_MENU = [
    ("1", "OPEN", "Открыть файл базы данных"),
    ("2", EXIT, "Выйти из программы"),
    ("3", "HELP", "Показать список команд"),
]
OPEN_MENU = [
    ("1", "SHOW ALL", "Показать все записи"),
    ("2", "INSERT", "Добавить новую запись"),
    ("3", "QUERY", "Найти записи по ID, имени, программе или оценке"),
    ("4", "UPDATE", "Изменить существующую запись"),
    ("5", "DELETE", "Удалить существующую запись"),
    ("6", "SAVE", "Сохранить изменения в файл"),
    ("7", "CLOSE", "Закрыть базу данных и вернуться в главное меню"),
    ("8", EXIT, "Выйти из программы"),
    ("9", "HELP", "Показать список команд"),
]


def current_menu(store: RecordStore):
    return OPEN_MENU if store.is_open else CLOSED_MENU


def print_menu(store: RecordStore):
    """Выводит на экран главное меню."""
    menu = current_menu(store)
    print("\n" + "=" * 41)
    print("     Class Management System (CMS)")
    print("=" * 41)
    for i in range(0, len(menu), 3):
        print("   " + " ".join(f"{f'[{num}] {name}':<12}" for num, name, _ in menu[i:i + 3]))
    print("=" * 41)


def print_help(store: RecordStore):
    print("\nCMS: Доступные команды")
    for _, name, description in current_menu(store):
        print(f"  {name:<8} - {description}")


def resolve_command(store: RecordStore, choice: str) -> Optional[str]:
    """Переводит номер пункта или имя команды (без учёта регистра) в имя команды."""
    choice = " ".join(choice.split()).upper()
    for num, name, _ in current_menu(store):
        if choice in (num, name):
            return name
    return None


def run_command(store: RecordStore, command: str, filepath):
    if command == "OPEN":
        commands.open_db(store, filepath)
    elif command == "SHOW ALL":
        commands.show_all_records(store)
    elif command == "INSERT":
        commands.insert_record(store)
    elif command == "QUERY":
        commands.query_records(store)
    elif command == "UPDATE":
        commands.update_record(store)
    elif command == "DELETE":
        commands.delete_record(store)
    elif command == "SAVE":
        commands.save_db(store, filepath)
    elif command == "CLOSE":
        commands.close_db(store)
    elif command == "HELP":
        print_help(store)


def main_cli(filepath=None, store: Optional[RecordStore] = None) -> int:
    """Основной цикл консольного приложения. Возвращает код завершения."""
    filepath = filepath or config.DB_FILE
    store = store if store is not None else RecordStore()

    while True:
        print_menu(store)
        try:
            choice = input(f"CMS: Введите номер пункта или команду:\n{INPUT_MARK}")
            command = resolve_command(store, choice)

            if command is None:
                print(f"❌ Неверный ввод! Введите номер от 1 до {len(current_menu(store))} или команду.")
            elif command == EXIT:
                break
            else:
                run_command(store, command, filepath)

        except EOFError:
            print()
            break
        except errors.CmsError as e:
            print(f"❌ Ошибка: {e}")
        except Exception as e:
            logger.exception("Unexpected error")
            print(f"❌ Произошла непредвиденная ошибка: {e}")

    if store.dirty:
        logger.warning("Exiting with unsaved changes")
    print("\n" + "=" * 41)
    print("   👋 До свидания!")
    print("=" * 41)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="cms", description="Class Management System: учёт записей о студентах.")
    parser.add_argument("-f", "--file", default=config.DB_FILE,
                        help=f"Путь к файлу базы данных (по умолчанию {config.DB_FILE})")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper,
                        help="Уровень логирования")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=config.LOG_FORMAT)

    try:
        return main_cli(args.file)
    except KeyboardInterrupt:
        print("\nПрограмма принудительно остановлена.")
        return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
