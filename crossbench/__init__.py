"""Mandelbrot and wavefront benchmarks, a Markdown results log and Gist sync."""

__version__ = "0.1.0"