"""Wavefront (breadth-first) grid path planner and its benchmark command."""

from __future__ import annotations

import argparse
import platform
import sys
import time
from collections import deque
from collections.abc import Iterator
from datetime import date
from typing import TextIO

from crossbench.sysinfo import system_info_report

_CLEAR_SCREEN = "\033[2J\033[H"
_RESET = "\033[0m"
_WALL = "█"
_PATH_CURRENT = "\033[1;33m*" + _RESET
_PATH_DONE = "\033[1;32m#" + _RESET
_DIM = "\033[2m"
_STEP_DELAY = 0.05
_PATH_DELAY = 0.1
_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))  # (dx, dy): left, right, up, down

BENCHMARK_SIZES = (50, 100, 200, 400)


def _elapsed_ms(start_ns: int) -> float:
    """Milliseconds since *start_ns*, truncated to whole microseconds."""
    return ((time.perf_counter_ns() - start_ns) // 1000) / 1000.0


def _fmt(value: float) -> str:
    return f"{value:g}"


def _compile_date(today: date) -> str:
    return f"{today:%b} {today.day:2d} {today.year}"


def _distance_char(distance: int) -> str:
    """Digit for distances under 10, then letters A-F cycling."""
    if distance >= 10:
        return chr(ord("A") + (distance - 10) % 6)
    return chr(ord("0") + distance % 10)


class WaveFrontPlanner:
    """A bordered grid with scattered obstacles and a wavefront distance map."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._obstacles = [
            [
                y in (0, height - 1)
                or x in (0, width - 1)
                or (y % 4 == 2 and x % 4 == 2)
                for x in range(width)
            ]
            for y in range(height)
        ]
        self._distance = self._blank_distances()

    def _blank_distances(self) -> list[list[int]]:
        return [[-1] * self.width for _ in range(self.height)]

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self._in_bounds(x, y):
            raise ValueError(
                f"cell ({x}, {y}) is outside the {self.width}x{self.height} grid"
            )

    def _neighbours(self, x: int, y: int) -> Iterator[tuple[int, int]]:
        for dx, dy in _NEIGHBOURS:
            nx, ny = x + dx, y + dy
            if self._in_bounds(nx, ny):
                yield nx, ny

    def is_obstacle(self, x: int, y: int) -> bool:
        """True if the cell at column *x*, row *y* is blocked."""
        self._check(x, y)
        return self._obstacles[y][x]

    def distance_at(self, x: int, y: int) -> int:
        """Steps from the last goal to the cell, or -1 if it was not reached."""
        self._check(x, y)
        return self._distance[y][x]

    def render_grid(self) -> str:
        """The grid as text: walls, blanks for unreached cells, distance marks."""
        lines = []
        for obstacle_row, distance_row in zip(self._obstacles, self._distance):
            lines.append(
                "".join(
                    _WALL if blocked else (" " if d == -1 else _distance_char(d))
                    for blocked, d in zip(obstacle_row, distance_row)
                )
            )
        return "".join(line + "\n" for line in lines)

    def display_grid(self, out: TextIO | None = None) -> None:
        """Clear the terminal and draw the grid."""
        stream = out if out is not None else sys.stdout
        stream.write(_CLEAR_SCREEN)
        stream.write(self.render_grid())
        stream.flush()

    def plan_path(
        self,
        start_x: int,
        start_y: int,
        goal_x: int,
        goal_y: int,
        visualize: bool = True,
        out: TextIO | None = None,
    ) -> float:
        """Spread distances outward from the goal; return the time in ms."""
        self._check(goal_x, goal_y)
        if visualize:
            self._check(start_x, start_y)
        stream = out if out is not None else sys.stdout
        start = time.perf_counter_ns()

        self._distance = self._blank_distances()
        distance = self._distance
        queue = deque([(goal_x, goal_y)])
        distance[goal_y][goal_x] = 0

        while queue:
            x, y = queue.popleft()
            if visualize:
                self.display_grid(stream)
                time.sleep(_STEP_DELAY)
            for nx, ny in self._neighbours(x, y):
                if not self._obstacles[ny][nx] and distance[ny][nx] == -1:
                    distance[ny][nx] = distance[y][x] + 1
                    queue.append((nx, ny))

        elapsed = _elapsed_ms(start)

        if visualize:
            self._show_result(start_x, start_y, goal_x, goal_y, stream)
        return elapsed

    def trace_path(
        self, start_x: int, start_y: int, goal_x: int, goal_y: int
    ) -> list[tuple[int, int]]:
        """Cells (x, y) from start to goal down the distance map; [] if unreachable."""
        self._check(start_x, start_y)
        self._check(goal_x, goal_y)
        if self._distance[start_y][start_x] == -1:
            return []
        distance = self._distance
        current = (start_x, start_y)
        path = [current]
        while current != (goal_x, goal_y):
            x, y = current
            here = distance[y][x]
            step = next(
                (
                    (nx, ny)
                    for nx, ny in self._neighbours(x, y)
                    if distance[ny][nx] != -1 and distance[ny][nx] < here
                ),
                None,
            )
            if step is None:
                break
            current = step
            path.append(current)
        return path

    def _path_frame(self, path: list[tuple[int, int]], step: int) -> str:
        shown = {cell: index for index, cell in enumerate(path[: step + 1])}
        lines = []
        for y in range(self.height):
            cells = []
            for x in range(self.width):
                d = self._distance[y][x]
                if self._obstacles[y][x]:
                    cells.append(_WALL)
                elif (x, y) in shown:
                    cells.append(_PATH_CURRENT if shown[(x, y)] == step else _PATH_DONE)
                elif d == -1:
                    cells.append(" ")
                else:
                    cells.append(_DIM + _distance_char(d) + _RESET)
            lines.append("".join(cells) + "\n")
        return "".join(lines)

    def _show_result(
        self, start_x: int, start_y: int, goal_x: int, goal_y: int, stream: TextIO
    ) -> None:
        self.display_grid(stream)
        length = self._distance[start_y][start_x]
        stream.write("\nPath planning completed!\n")
        stream.write(f"Path length from start to goal: {length}\n")
        if length == -1:
            return

        stream.write("\nTracing optimal path (goal to start)...\n")
        stream.flush()
        time.sleep(_PATH_DELAY)

        path = self.trace_path(start_x, start_y, goal_x, goal_y)
        for step, (x, y) in enumerate(path):
            stream.write(_CLEAR_SCREEN)
            stream.write(self._path_frame(path, step))
            stream.write(f"Path step {step + 1}/{len(path)} at ({x},{y})\n")
            stream.flush()
            time.sleep(_PATH_DELAY)

        stream.write("\nOptimal path completed!\n")
        stream.flush()


def main(argv: list[str] | None = None) -> int:
    """Run the interactive wavefront planner benchmark."""
    parser = argparse.ArgumentParser(description="WaveFront planner benchmark")
    parser.parse_args(argv)

    print("WaveFront Planner Benchmark")
    print("===========================")

    print("\n1. Visual demonstration (30x15 grid):")
    small = WaveFrontPlanner(30, 15)
    small_time = small.plan_path(1, 1, 28, 13, True)
    print(f"Time: {_fmt(small_time)} ms")

    try:
        input("\nPress Enter to continue to benchmark...")
    except EOFError:
        pass

    print("\n2. Performance benchmark:")
    benchmark_times = []
    for size in BENCHMARK_SIZES:
        print(f"Grid size: {size}x{size} - ", end="", flush=True)
        planner = WaveFrontPlanner(size, size)
        elapsed = planner.plan_path(1, 1, size - 2, size - 2, False)
        benchmark_times.append(elapsed)
        print(f"Time: {_fmt(elapsed)} ms")

    rule = "=" * 50
    print(f"\n{rule}")
    print("BENCHMARK RESULTS (Copy-Paste Format)")
    print(rule)
    print(system_info_report(), end="")
    print(f"Compiler: {platform.python_implementation()} {platform.python_version()}")
    print(f"Date: {_compile_date(date.today())}")

    print("\nWaveFront Planner Benchmark Results:")
    for size, elapsed in zip(BENCHMARK_SIZES, benchmark_times):
        print(f"- Grid {size}x{size}: {_fmt(elapsed)} ms")
    print(f"- Visual demo time: {_fmt(small_time)} ms")

    print("\nSystem information detected automatically")
    return 0


if __name__ == "__main__":
    sys.exit(main())