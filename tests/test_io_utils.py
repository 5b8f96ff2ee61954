# tests/test_io_utils.py
import logging
import pytest
from cms.errors import PersistenceUnavailableError
from cms.io_utils import build_header, read_records, write_records


def body_lines(path):
    return path.read_text(encoding="utf-8").splitlines()[5:]


def test_csv_roundtrip(sample_records, tmp_path):
    """Тестирует полный цикл: запись в файл и чтение обратно."""
    filepath = tmp_path / "test.txt"
    write_records(filepath, sample_records)
    assert read_records(filepath) == sample_records


def test_load_then_save_reproduces_data_lines(db_file, data_lines, tmp_path):
    target = tmp_path / "copy.txt"
    write_records(target, read_records(db_file))
    assert body_lines(target) == data_lines


def test_written_file_has_header(sample_records, tmp_path):
    filepath = tmp_path / "test.txt"
    write_records(filepath, sample_records)
    lines = filepath.read_text(encoding="utf-8").splitlines()
    assert lines[:5] == build_header(filepath)
    assert lines[5] == "2301234,Anna Lee,Computer Science,85.0,A+"
    assert lines[-1] == "2400002,Carl Ho,Mechanical Engineering,39.9,F"


def test_malformed_lines_are_skipped(tmp_path, data_lines, caplog):
    filepath = tmp_path / "bad.txt"
    lines = build_header(filepath) + [
        data_lines[0],
        "2305678,Susan Tan,Applied AI",
        "",
        "abc,Bad Id,History,50.0,C",
        "2309999,John Smith,Software Engineering,lots,B+",
        "2301234,Anna Again,Computer Science,70.0,B+",
        data_lines[2],
    ]
    filepath.write_text("\n".join(lines) + "\n", encoding="utf-8")

    errors = []
    with caplog.at_level(logging.WARNING, logger="cms.io_utils"):
        records = read_records(filepath, errors)

    assert [r.id for r in records] == [2301234, 2309999]
    assert [e.line_num for e in errors] == [7, 9, 10, 11]
    assert "Skipping malformed line 7" in caplog.text


def test_stored_grade_is_recomputed(tmp_path, caplog):
    filepath = tmp_path / "grade.txt"
    filepath.write_text("\n".join(build_header(filepath) + ["2301234,Anna Lee,Computer Science,85.0,C"]) + "\n",
                        encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="cms.io_utils"):
        records = read_records(filepath)
    assert records[0].grade == "A+"
    assert "does not match" in caplog.text


def test_short_header_gives_empty_list(tmp_path):
    filepath = tmp_path / "short.txt"
    filepath.write_text("only\ntwo lines\n", encoding="utf-8")
    assert read_records(filepath) == []


def test_missing_file(tmp_path):
    with pytest.raises(PersistenceUnavailableError):
        read_records(tmp_path / "missing.txt")


def test_write_to_missing_directory(sample_records, tmp_path):
    with pytest.raises(PersistenceUnavailableError):
        write_records(tmp_path / "no" / "such.txt", sample_records)


def test_stray_quote_skips_only_its_own_line(tmp_path, data_lines):
    filepath = tmp_path / "quote.txt"
    lines = build_header(filepath) + ['2301234,"Anna Lee,Computer Science,85.0,A+'] + data_lines[1:]
    filepath.write_text("\n".join(lines) + "\n", encoding="utf-8")

    errors = []
    records = read_records(filepath, errors)
    assert [r.id for r in records] == [2305678, 2309999]
    assert [e.line_num for e in errors] == [6]


@pytest.mark.parametrize("line", [
    "２３０１２３４,Anna Lee,CS,85.0,A+",
    "1_234_567,Bob Ng,CS,10.0,F",
    "+234567,Bob Ng,CS,10.0,F",
    "1234567,Bob Ng,CS,1e1,F",
    "1234567,Bob Ng,CS,-0.0,F",
    "1234567,Bob Ng,CS,q,F",
])
def test_load_uses_input_rules_for_id_and_marks(tmp_path, line):
    filepath = tmp_path / "odd.txt"
    filepath.write_text("\n".join(build_header(filepath) + [line]) + "\n", encoding="utf-8")
    errors = []
    assert read_records(filepath, errors) == []
    assert len(errors) == 1
