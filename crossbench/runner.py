"""Run every benchmark, log the results and publish them to a Gist."""

from __future__ import annotations

import argparse
import platform
import sys

from crossbench.gist import GistError, GistManager
from crossbench.logger import (
    DEFAULT_RESULTS_FILE,
    BenchmarkLogError,
    BenchmarkLogger,
    BenchmarkResults,
)
from crossbench.mandelbrot import MandelbrotRenderer
from crossbench.wavefront import WaveFrontPlanner

GIST_DESCRIPTION = "Cross-Platform Benchmark Results"


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return ""


def run_benchmarks() -> BenchmarkResults:
    """Time the four Mandelbrot views and the four wavefront grids."""
    print("Running Mandelbrot benchmarks...")
    mandelbrot = [
        MandelbrotRenderer(200, 200, iterations).render(*view, visualize=False)
        for iterations, view in (
            (100, (-2.5, 1.0, -1.25, 1.25)),
            (150, (-1.0, 0.0, -0.5, 0.5)),
            (200, (-0.75, -0.25, -0.25, 0.25)),
            (500, (-0.7463, -0.7453, 0.1102, 0.1112)),
        )
    ]

    print("Running WaveFront benchmarks...")
    wavefront = [
        WaveFrontPlanner(size, size).plan_path(1, 1, size - 2, size - 2, visualize=False)
        for size in (50, 100, 200, 400)
    ]
    return BenchmarkResults(*mandelbrot, *wavefront)


def main(argv: list[str] | None = None) -> int:
    """Ask for the machine and Gist details, benchmark, log and upload."""
    parser = argparse.ArgumentParser(description="Automated benchmark runner")
    parser.parse_args(argv)

    print("Automated Benchmark Runner")
    print("===========================")

    machine_name = _ask("Enter machine name (e.g., 'MacBook Pro M3'): ")
    gist_id = _ask("Enter existing Gist ID (leave empty for new): ")
    github_token = _ask("Enter GitHub token (leave empty for anonymous): ")

    gist_manager = GistManager(gist_id, github_token)
    if gist_id:
        gist_manager.download_existing_gist()

    print("\nRunning benchmarks...")
    results = run_benchmarks()

    compiler = f"{platform.python_implementation()} {platform.python_version()}"
    try:
        BenchmarkLogger().log_results(machine_name, compiler, results)
    except BenchmarkLogError as error:
        print(f"\nError logging results: {error}")
        print("Original file preserved.")

    print("\nBenchmark completed!")
    print(f"Results saved to {DEFAULT_RESULTS_FILE}")

    print("\nUploading results to GitHub Gist...")
    try:
        gist_manager.upload_to_gist(GIST_DESCRIPTION)
    except GistError as error:
        print(f"Error: {error}")
        print("Upload failed. Results are still saved locally.")
    else:
        print("Upload successful!")
        if not gist_id and gist_manager.gist_id:
            rule = "=" * 50
            print(f"\n{rule}")
            print(f"★ GIST ID FOR OTHER MACHINES: {gist_manager.gist_id}")
            print("★ Copy this ID to use on other computers!")
            print(rule)
    return 0


if __name__ == "__main__":
    sys.exit(main())