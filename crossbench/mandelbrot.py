"""Mandelbrot set renderer and its benchmark command."""

from __future__ import annotations

import argparse
import platform
import sys
import time
from dataclasses import dataclass
from datetime import date
from typing import TextIO

from crossbench.sysinfo import system_info_report

_RESET = "\033[0m"
_CLEAR_SCREEN = "\033[2J\033[H"
_IN_SET_COLOR = "\033[40m " + _RESET
_GRADIENT_COLORS = (
    "\033[44m ",  # blue
    "\033[46m ",  # cyan
    "\033[42m ",  # green
    "\033[43m ",  # yellow
    "\033[41m ",  # red
    "\033[45m ",  # magenta
)
_SHADES = " .:-=+*#%@"
_PROGRESSIVE_DELAY = 0.05


@dataclass(frozen=True)
class ZoomLevel:
    """A named view of the complex plane with its benchmark settings."""

    name: str
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    resolution: int
    iterations: int


ZOOM_LEVELS = (
    ZoomLevel("Full view", -2.5, 1.0, -1.25, 1.25, 200, 100),
    ZoomLevel("Zoom 1x", -1.0, 0.0, -0.5, 0.5, 200, 150),
    ZoomLevel("Zoom 2x", -0.75, -0.25, -0.25, 0.25, 200, 200),
    ZoomLevel("Deep zoom", -0.7463, -0.7453, 0.1102, 0.1112, 200, 500),
)

RESOLUTIONS = (100, 200, 400, 800)


def _elapsed_ms(start_ns: int) -> float:
    """Milliseconds since *start_ns*, truncated to whole microseconds."""
    return ((time.perf_counter_ns() - start_ns) // 1000) / 1000.0


def _fmt(value: float) -> str:
    return f"{value:g}"


class MandelbrotRenderer:
    """Renders a rectangular region of the Mandelbrot set."""

    def __init__(self, width: int, height: int, max_iterations: int) -> None:
        self.width = width
        self.height = height
        self.max_iterations = max_iterations

    def iterations(self, c: complex) -> int:
        """Number of iterations before |z| exceeds 2, capped at max_iterations."""
        z = 0j
        for i in range(self.max_iterations):
            if abs(z) > 2.0:
                return i
            z = z * z + c
        return self.max_iterations

    def colored_char(self, iterations: int) -> str:
        """A coloured cell for an iteration count."""
        if iterations >= self.max_iterations:
            return _IN_SET_COLOR
        index = min((iterations * len(_GRADIENT_COLORS)) // self.max_iterations,
                    len(_GRADIENT_COLORS) - 1)
        return _GRADIENT_COLORS[index] + _RESET

    def shade_char(self, iterations: int) -> str:
        """A plain character for an iteration count."""
        if iterations >= self.max_iterations:
            return "#"
        return _SHADES[iterations * (len(_SHADES) - 1) // self.max_iterations]

    def render(
        self,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        visualize: bool = True,
        progressive: bool = False,
        use_color: bool = False,
        out: TextIO | None = None,
    ) -> float:
        """Compute the region, optionally drawing it; return the time in ms."""
        stream = out if out is not None else sys.stdout
        start = time.perf_counter_ns()

        if visualize:
            stream.write(_CLEAR_SCREEN)

        x_scale = (x_max - x_min) / self.width
        y_scale = (y_max - y_min) / self.height
        cell = self.colored_char if use_color else self.shade_char

        for row in range(self.height):
            y = y_min + row * y_scale
            counts = (
                self.iterations(complex(x_min + col * x_scale, y))
                for col in range(self.width)
            )
            if visualize:
                stream.write("".join(cell(n) for n in counts))
                stream.write("\n")
                stream.flush()
                if progressive and row % 2 == 0:
                    time.sleep(_PROGRESSIVE_DELAY)
            else:
                for _ in counts:
                    pass

        return _elapsed_ms(start)


def _compile_date(today: date) -> str:
    return f"{today:%b} {today.day:2d} {today.year}"


def main(argv: list[str] | None = None) -> int:
    """Run the interactive Mandelbrot benchmark."""
    parser = argparse.ArgumentParser(description="Mandelbrot set benchmark")
    parser.parse_args(argv)

    print("Mandelbrot Set Benchmark")
    print("========================")

    print("\n1. Visual demonstration (80x40, color):")
    print("Rendering colorful Mandelbrot view...")
    small = MandelbrotRenderer(80, 40, 100)
    small_time = small.render(-2.5, 1.0, -1.25, 1.25, True, False, True)
    print(f"\nTime: {_fmt(small_time)} ms")
    try:
        input("\nPress Enter to continue to benchmark...")
    except EOFError:
        pass

    print("\n2. Performance benchmark (different zoom levels):")
    zoom_times = []
    for zoom in ZOOM_LEVELS:
        print(
            f"{zoom.name} ({zoom.resolution}x{zoom.resolution}, "
            f"{zoom.iterations} iter) - ",
            end="",
            flush=True,
        )
        renderer = MandelbrotRenderer(zoom.resolution, zoom.resolution, zoom.iterations)
        elapsed = renderer.render(zoom.x_min, zoom.x_max, zoom.y_min, zoom.y_max, False)
        zoom_times.append(elapsed)
        print(f"Time: {_fmt(elapsed)} ms")

    print("\n3. Resolution scaling test:")
    resolution_times = []
    for res in RESOLUTIONS:
        print(f"{res}x{res} resolution - ", end="", flush=True)
        renderer = MandelbrotRenderer(res, res, 100)
        elapsed = renderer.render(-2.5, 1.0, -1.25, 1.25, False)
        resolution_times.append(elapsed)
        print(f"Time: {_fmt(elapsed)} ms")

    rule = "=" * 50
    print(f"\n{rule}")
    print("BENCHMARK RESULTS (Copy-Paste Format)")
    print(rule)
    print(system_info_report(), end="")
    print(f"Compiler: {platform.python_implementation()} {platform.python_version()}")
    print(f"Date: {_compile_date(date.today())}")

    print("\nMandelbrot Benchmark Results:")
    for zoom, elapsed in zip(ZOOM_LEVELS, zoom_times):
        print(
            f"- {zoom.name} ({zoom.resolution}x{zoom.resolution}, "
            f"{zoom.iterations} iter): {_fmt(elapsed)} ms"
        )
    for res, elapsed in zip(RESOLUTIONS, resolution_times):
        print(f"- Resolution {res}x{res}: {_fmt(elapsed)} ms")

    print("\nSystem information detected automatically")
    return 0


if __name__ == "__main__":
    sys.exit(main())