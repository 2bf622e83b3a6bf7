[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crossbench"
version = "0.1.0"
description = "Cross-platform Mandelbrot and wavefront path-planning benchmarks with a shared Markdown results log"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "mandelbrot", "wavefront", "path-planning", "gist"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
crossbench = "crossbench.runner:main"
crossbench-mandelbrot = "crossbench.mandelbrot:main"
crossbench-wavefront = "crossbench.wavefront:main"

[tool.hatch.build.targets.wheel]
packages = ["crossbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
