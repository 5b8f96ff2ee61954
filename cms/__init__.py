# cms/__init__.py
"""Class Management System: консольный учёт записей о студентах."""

__version__ = "1.0.0"
