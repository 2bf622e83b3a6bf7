import pytest

from crossbench.logger import (
    HEADER,
    SEPARATOR,
    TITLE,
    BenchmarkLogError,
    BenchmarkLogger,
    BenchmarkResults,
    clean_lines,
    format_row,
)


def _results(base=1.0):
    return BenchmarkResults(*(base + i for i in range(8)))


def test_results_values_in_column_order():
    results = BenchmarkResults(1, 2, 3, 4, 5, 6, 7, 8)
    assert results.values() == (1, 2, 3, 4, 5, 6, 7, 8)


def test_clean_lines_empty_gives_fresh_header():
    assert clean_lines([]) == [TITLE, "", HEADER, SEPARATOR]


def test_clean_lines_keeps_rows_and_drops_noise():
    row = "| 2024 | box | Linux | cpu | 8 GB | g++ | 1 ms | 2 ms |"
    lines = [TITLE, "", HEADER, SEPARATOR, "random text", "\\ No newline at end", row, ""]
    assert clean_lines(lines) == [TITLE, HEADER, SEPARATOR, row]


def test_clean_lines_missing_separator_rebuilds():
    row = "| 2024 | box | 1 ms |"
    assert clean_lines([TITLE, HEADER, row]) == [TITLE, "", HEADER, SEPARATOR]


def test_format_row_layout():
    row = format_row(
        "2024-01-01 00:00:00", "box", "Linux", "cpu", "8 GB", "flags",
        BenchmarkResults(1.5, 2.0, 3.25, 4.0, 5.0, 6.0, 7.0, 8.0),
    )
    assert row.startswith("| 2024-01-01 00:00:00 | box | Linux | cpu | 8 GB | flags | ")
    assert "| 1.5 ms | 2 ms | 3.25 ms |" in row
    assert row.endswith("| 8 ms |")
    assert row.count(" ms |") == 8


def test_format_row_uses_six_significant_digits():
    row = format_row("t", "m", "o", "c", "mem", "f", BenchmarkResults(12.3456789, 0, 0, 0, 0, 0, 0, 0))
    assert "| 12.3457 ms |" in row


def test_log_results_creates_file(tmp_path):
    target = tmp_path / "results.md"
    logger = BenchmarkLogger(target)
    assert logger.log_results("box", "flags", _results()) == target
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[:4] == [TITLE, "", HEADER, SEPARATOR]
    assert len(lines) == 5
    assert " | box | " in lines[4]
    assert lines[4].endswith(" ms |")
    assert not (tmp_path / "results.md.tmp").exists()


def test_log_results_appends_rows(tmp_path):
    target = tmp_path / "results.md"
    logger = BenchmarkLogger(target)
    logger.log_results("first", "flags", _results())
    logger.log_results("second", "flags", _results(10.0))
    lines = target.read_text(encoding="utf-8").splitlines()
    data = [line for line in lines if " ms |" in line]
    assert len(data) == 2
    assert " | first | " in data[0]
    assert " | second | " in data[1]
    assert lines[:3] == [TITLE, HEADER, SEPARATOR]


def test_log_results_cleans_existing_garbage(tmp_path):
    target = tmp_path / "results.md"
    old_row = "| 2023-05-05 10:00:00 | old | Linux | cpu | 4 GB | g++ | 1 ms |"
    target.write_text(
        "\n".join([TITLE, "", HEADER, SEPARATOR, "junk line", old_row, ""]),
        encoding="utf-8",
    )
    BenchmarkLogger(target).log_results("new", "flags", _results())
    lines = target.read_text(encoding="utf-8").splitlines()
    assert "junk line" not in lines
    assert old_row in lines
    assert " | new | " in lines[-1]


def test_log_results_failure_raises_and_leaves_no_temp(tmp_path):
    target = tmp_path / "missing_dir" / "results.md"
    with pytest.raises(BenchmarkLogError):
        BenchmarkLogger(target).log_results("box", "flags", _results())
    assert not target.exists()
    assert not (tmp_path / "missing_dir").exists()