"""Append benchmark results as rows of a Markdown table."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import astuple, dataclass
from pathlib import Path

from crossbench.sysinfo import (
    cpu_info_compact,
    current_datetime,
    memory_info_compact,
    os_info_compact,
)

TITLE = "# Benchmark Results"
HEADER = (
    "| Date | Machine | OS | CPU | Memory | Compiler | Mandelbrot Full | "
    "Mandelbrot Zoom1 | Mandelbrot Zoom2 | Mandelbrot Deep | WaveFront 50x50 | "
    "WaveFront 100x100 | WaveFront 200x200 | WaveFront 400x400 |"
)
SEPARATOR = (
    "|------|---------|----|----|---------|----------|-----------------|"
    "------------------|------------------|-----------------|-----------------|"
    "-------------------|-------------------|-------------------|"
)
DEFAULT_RESULTS_FILE = "benchmark_results.md"


class BenchmarkLogError(Exception):
    """The results file could not be updated; the original is left untouched."""


@dataclass(frozen=True)
class BenchmarkResults:
    """Timings in milliseconds, in table column order."""

    mandelbrot_full: float
    mandelbrot_zoom1: float
    mandelbrot_zoom2: float
    mandelbrot_deep: float
    wavefront_50: float
    wavefront_100: float
    wavefront_200: float
    wavefront_400: float

    def values(self) -> tuple[float, ...]:
        return astuple(self)


def clean_lines(lines: Iterable[str]) -> list[str]:
    """Keep the title, header, separator and data rows; rebuild a broken header."""
    kept: list[str] = []
    has_header = False
    has_separator = False
    for line in lines:
        if not line or "No newline" in line:
            continue
        if line.startswith(TITLE):
            kept.append(line)
        elif line.startswith("| Date |"):
            kept.append(line)
            has_header = True
        elif line.startswith("|------|"):
            kept.append(line)
            has_separator = True
        elif line.startswith("|") and " ms |" in line:
            kept.append(line)
    if not kept or not has_header or not has_separator:
        return [TITLE, "", HEADER, SEPARATOR]
    return kept


def format_row(
    timestamp: str,
    machine_name: str,
    os_info: str,
    cpu_info: str,
    memory_info: str,
    compiler_flags: str,
    results: BenchmarkResults,
) -> str:
    """One Markdown table row for a benchmark run."""
    cells = [timestamp, machine_name, os_info, cpu_info, memory_info, compiler_flags]
    cells.extend(f"{value:g} ms" for value in results.values())
    return "| " + " | ".join(cells) + " |"


class BenchmarkLogger:
    """Maintains the Markdown results file."""

    def __init__(self, filename: str | os.PathLike[str] = DEFAULT_RESULTS_FILE) -> None:
        self.results_file = Path(filename)

    def log_results(
        self, machine_name: str, compiler_flags: str, results: BenchmarkResults
    ) -> Path:
        """Append a row for this host, replacing the file atomically.

        Raises BenchmarkLogError if the file cannot be rewritten.
        """
        temp_file = Path(str(self.results_file) + ".tmp")
        try:
            existing: list[str] = []
            if self.results_file.exists():
                existing = self.results_file.read_text(encoding="utf-8").split("\n")
            lines = clean_lines(existing)
            row = format_row(
                current_datetime(),
                machine_name,
                os_info_compact(),
                cpu_info_compact(),
                memory_info_compact(),
                compiler_flags,
                results,
            )
            with temp_file.open("w", encoding="utf-8") as handle:
                for line in (*lines, row):
                    handle.write(line + "\n")

            with temp_file.open(encoding="utf-8") as handle:
                table_rows = sum(1 for line in handle if line.startswith("|"))
            if table_rows < 3:
                raise BenchmarkLogError("Temporary file validation failed")

            os.replace(temp_file, self.results_file)
        except (OSError, BenchmarkLogError) as error:
            try:
                temp_file.unlink()
            except OSError:
                pass
            if isinstance(error, BenchmarkLogError):
                raise
            raise BenchmarkLogError(str(error)) from error

        print(f"\nResults logged to {self.results_file}")
        return self.results_file