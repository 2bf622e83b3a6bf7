"""Host information: date, OS, CPU and memory descriptions."""

from __future__ import annotations

import platform
import subprocess
import sys
from datetime import datetime
from pathlib import Path

_CPUINFO = Path("/proc/cpuinfo")
_MEMINFO = Path("/proc/meminfo")


def _is_macos() -> bool:
    return sys.platform == "darwin"


def _is_linux() -> bool:
    return sys.platform.startswith("linux")


def _first_line(text: str) -> str | None:
    """Return the first line of *text*, or None if there is no line at all."""
    if not text:
        return None
    return text.split("\n", 1)[0]


def _run(*args: str) -> str:
    """Run a command and return its standard output, or '' if it cannot run."""
    try:
        completed = subprocess.run(
            args, capture_output=True, text=True, check=False
        )
    except OSError:
        return ""
    return completed.stdout


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def _format_gb(value: float) -> str:
    return f"{value:.6g} GB"


def _cpu_from_cpuinfo(text: str) -> str | None:
    """Extract the first 'model name' value from /proc/cpuinfo text."""
    for line in text.splitlines():
        if "model name" in line:
            fields = line.split(":")
            value = fields[1] if len(fields) > 1 else line
            return value.lstrip(" ")
    return None


def _to_number(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return 0.0


def _mem_from_meminfo(text: str) -> str | None:
    """Turn the MemTotal line of /proc/meminfo (in kB) into a GB string."""
    for line in text.splitlines():
        if "MemTotal" in line:
            fields = line.split()
            kilobytes = _to_number(fields[1]) if len(fields) > 1 else 0.0
            return _format_gb(kilobytes / 1024 / 1024)
    return None


def _mem_from_memsize(text: str) -> str | None:
    """Turn a byte count as printed by sysctl into a GB string."""
    line = _first_line(text)
    if line is None:
        return None
    fields = line.split()
    total = _to_number(fields[0]) if fields else 0.0
    return _format_gb(total / 1024 / 1024 / 1024)


def _macos_version() -> str | None:
    version = platform.mac_ver()[0]
    return version or _first_line(_run("sw_vers", "-productVersion"))


def _cpu_name() -> str | None:
    if _is_macos():
        return _first_line(_run("sysctl", "-n", "machdep.cpu.brand_string"))
    if _is_linux():
        return _cpu_from_cpuinfo(_read(_CPUINFO))
    return None


def _memory() -> str | None:
    if _is_macos():
        return _mem_from_memsize(_run("sysctl", "-n", "hw.memsize"))
    if _is_linux():
        return _mem_from_meminfo(_read(_MEMINFO))
    return None


def current_datetime() -> str:
    """Local time as 'YYYY-MM-DD HH:MM:SS'."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def os_info_compact() -> str:
    """Short OS name, e.g. 'macOS 14.2' or 'Linux'."""
    if _is_macos():
        version = _macos_version()
        return f"macOS {version}" if version is not None else "macOS"
    if _is_linux():
        return "Linux"
    return "Unknown"


def cpu_info_compact() -> str:
    """CPU model name, or 'Unknown CPU'."""
    cpu = _cpu_name()
    return cpu if cpu is not None else "Unknown CPU"


def memory_info_compact() -> str:
    """Total memory such as '16 GB', or 'Unknown'."""
    memory = _memory()
    return memory if memory is not None else "Unknown"


def system_info_report() -> str:
    """Three 'OS:', 'CPU:' and 'Memory:' lines, each ending in a newline."""
    if _is_macos():
        os_line = "OS: macOS " + (_macos_version() or "")
    elif _is_linux():
        os_line = "OS: Linux " + (platform.release() or "")
    else:
        return "OS: Unknown\nCPU: Unknown\nMemory: Unknown\n"
    cpu_line = "CPU: " + (_cpu_name() or "")
    memory_line = "Memory: " + (_memory() or "")
    return f"{os_line}\n{cpu_line}\n{memory_line}\n"