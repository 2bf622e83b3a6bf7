# crossbench

A small set of CPU benchmarks that you run on several machines and then
compare. Each run adds one row to a shared Markdown table.

- **Mandelbrot**: renders the Mandelbrot set at four zoom levels: full view,
  zoom 1x, zoom 2x and a deep zoom. Each level uses a higher iteration limit.
- **WaveFront**: breadth-first wavefront path planning outward from the goal,
  on square grids of 50, 100, 200 and 400 cells per side. Every grid has
  border walls and scattered obstacles.

No third-party libraries are needed.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Commands

### `crossbench`

Runs every benchmark once and appends one row to `benchmark_results.md` in
the current directory. Before it starts, it asks for three things:

1. a machine name, such as `MacBook Pro M3`;
2. an existing Gist ID, or nothing to create a new Gist;
3. a GitHub token, or nothing to upload without one.

Each row records the following:

- the local date and time;
- the machine name;
- the OS;
- the CPU model;
- the total memory;
- the Python implementation and version;
- every timing, in milliseconds.

Before a row is added, lines in the file that are not the title, the table
header, the separator or a data row are dropped. If the header is missing,
the table is rebuilt from scratch. The new file is first written to a
temporary file, which is checked and then moved into place. If that fails,
the original file is left untouched and an error is printed.

If you give a Gist ID, the command first replaces the local results file with
the content of the Gist's first file. After the benchmarks have run, it
uploads the file to GitHub's Gist API:

- **No Gist ID**: a new public Gist is created, with the token if you gave
  one. The new Gist's ID is printed. Enter that ID on your other machines so
  that all their results go into the same table.
- **A Gist ID**: that Gist is updated, and a token is required.

If the upload fails, the results stay in the local file.

### `crossbench-mandelbrot`

Draws a coloured 80x40 view of the set in the terminal and waits for Enter.
It then runs two tests:

- the four zoom-level benchmarks, at 200x200;
- a resolution scaling test, at 100, 200, 400 and 800 pixels per side.

It ends with a copy-paste summary that includes the OS, CPU and memory.

### `crossbench-wavefront`

Animates the wavefront as it spreads over a 30x15 grid. It then animates the
shortest path from start to goal and waits for Enter. After that it
benchmarks the four grid sizes and prints a copy-paste summary.

## Library use

```python
from crossbench.mandelbrot import MandelbrotRenderer
from crossbench.wavefront import WaveFrontPlanner
from crossbench.logger import BenchmarkLogger, BenchmarkResults

ms = MandelbrotRenderer(200, 200, 100).render(-2.5, 1.0, -1.25, 1.25, visualize=False)

planner = WaveFrontPlanner(50, 50)
planner.plan_path(1, 1, 48, 48, visualize=False)
print(planner.distance_at(1, 1), planner.trace_path(1, 1, 48, 48)[:3])
print(planner.render_grid())
```

### `MandelbrotRenderer`

`render` returns the elapsed time in milliseconds. With `visualize=True` it
also draws the view to `out` (standard output by default), in colour when
`use_color=True`.

### `WaveFrontPlanner`

- `plan_path` fills the distance map and returns the elapsed time.
- `distance_at` gives a cell's distance from the goal, or `-1` if the cell
  was not reached.
- `trace_path` returns the cells `(x, y)` from start to goal.

### Results, system information and Gists

- `crossbench.runner.run_benchmarks()` runs the full set and returns a
  `BenchmarkResults`.
- `BenchmarkLogger(filename).log_results(machine, compiler, results)` appends
  a row. It raises `BenchmarkLogError` on failure.
- `crossbench.sysinfo` provides the date, OS, CPU and memory descriptions
  used in the rows.
- `crossbench.gist.GistManager` provides `download_existing_gist` and
  `upload_to_gist`. `upload_to_gist` returns the Gist's web address and
  raises `GistError` on failure.

## What it does not do

- Each benchmark runs once per command. There are no repeated runs, no
  averages and no warm-up.
- OS, CPU and memory are detected only on macOS and Linux. Elsewhere they are
  reported as unknown.