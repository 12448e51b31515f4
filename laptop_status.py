#!/usr/bin/env python

from __future__ import annotations

import argparse
import platform
import re
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

__version__ = "1.0"

BATTERY_PATH = Path("/sys/class/power_supply/BAT0")
BACKLIGHT_PATH = Path("/sys/class/backlight/amdgpu_bl1")
MEMINFO_PATH = Path("/proc/meminfo")

# Requires alsa-utils
AMIXER_COMMAND = ("amixer", "get", "Master")

UNKNOWN = "Unknown"
NO_MEMORY_INFO = "Unable to retrieve memory info"

READ_ERRORS = (OSError, UnicodeDecodeError)

INT_RE = re.compile(r"[+-]?[0-9]+")

USAGE = (
    "Usage: \n"
    "        --battery        Output battery status and capacity.\n"
    "        --battery-state  Output battery status only.\n"
    "        --battery-level  Output battery capacity only.\n"
    "        --volume-level   Output volume level.\n"
    "        --backlight      Output backlight"
)

def read_file(path: str | Path) -> str:
    """
    @brief Reads a sysfs/procfs pseudo-file.
    @param path The file to read.
    @return The file contents with surrounding whitespace stripped.
    @throws OSError If the file is missing or unreadable.
    @throws UnicodeDecodeError If the file is not valid UTF-8.
    """
    return Path(path).read_text(encoding="utf-8").strip()

def parse_int(text: str, default: int, bits: int = 32) -> int:
    """Parse a signed ASCII decimal that fits in `bits` bits, else return default."""
    if not INT_RE.fullmatch(text):
        return default
    value = int(text)
    if not -(1 << (bits - 1)) <= value < 1 << (bits - 1):
        return default
    return value

def div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient

def get_battery_capacity(battery_path: Path = BATTERY_PATH) -> str:
    """
    @brief Reads the battery charge level.
    @param battery_path The power_supply device directory.
    @return The capacity exactly as the kernel reports it, e.g. "47".
    """
    return read_file(battery_path / "capacity")

def get_battery_status(battery_path: Path = BATTERY_PATH) -> str:
    """
    @brief Reads the battery charging state.
    @param battery_path The power_supply device directory.
    @return The status string, e.g. "Discharging".
    """
    return read_file(battery_path / "status")

def parse_volume_level(output: str) -> str:
    """
    @brief Summarises `amixer get` output.
    @param output The mixer's standard output.
    @return "MUTED", "VOL: <n>%" or "Unknown".
    """
    lines = output.splitlines()

    if any("[off]" in line for line in lines):
        return "MUTED"

    for line in lines:
        if "Mono:" not in line and "Front Left:" not in line:
            continue
        start = line.find("[")
        end = line.find("%")
        if start != -1 and end != -1:
            # "[65%]" -> "65%"
            return f"VOL: {line[start + 1:end + 1]}"

    return UNKNOWN

def get_volume_level(command: tuple[str, ...] = AMIXER_COMMAND) -> str:
    """
    @brief Queries the master volume through amixer.
    @param command The mixer command line.
    @return The volume summary.
    @throws OSError If the mixer command cannot be started.
    """
    result = subprocess.run(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        encoding="utf-8",
        errors="replace",
    )
    return parse_volume_level(result.stdout)

def get_brightness(backlight_path: Path = BACKLIGHT_PATH) -> str:
    """
    @brief Computes the backlight level as a percentage of its maximum.
    @param backlight_path The backlight device directory.
    @return "BL: <n>%". Not clamped, so it can exceed 100.
    @throws OSError If either brightness file cannot be read.
    """
    current = parse_int(read_file(backlight_path / "brightness"), 0)
    maximum = parse_int(read_file(backlight_path / "max_brightness"), 1)
    if maximum == 0:
        maximum = 1

    return f"BL: {div_trunc(current * 100, maximum)}%"

def parse_meminfo_value(line: str) -> int:
    """Return the kB value of a meminfo line, or 0 if it has none."""
    fields = line.split()
    if len(fields) < 2:
        return 0
    return parse_int(fields[1], 0, bits=64)

def get_memory(meminfo_path: Path = MEMINFO_PATH) -> str:
    """
    @brief Reports used memory (total minus available) in megabytes.
    @param meminfo_path Path to a meminfo-formatted file.
    @return "MEM: <n>M", or NO_MEMORY_INFO when MemTotal is absent.
    @throws OSError If the file cannot be read.
    """
    total_memory = 0
    available_memory = 0

    for line in read_file(meminfo_path).splitlines():
        if line.startswith("MemTotal:"):
            total_memory = parse_meminfo_value(line)
        elif line.startswith("MemAvailable:"):
            available_memory = parse_meminfo_value(line)

    if total_memory == 0:
        return NO_MEMORY_INFO

    used_memory = div_trunc(total_memory - available_memory, 1024)
    return f"MEM: {used_memory}M"

def read_or_unknown(query: Callable[[], str], field: str) -> str:
    """
    @brief Runs a query, falling back to the placeholder on I/O errors.
    @param query Zero-argument callable performing the read.
    @param field Name used in the diagnostic.
    @return The query result, or "Unknown".
    """
    try:
        return query()
    except READ_ERRORS as e:
        print(f"Error reading {field}: {e}", file=sys.stderr)
        return UNKNOWN

def print_help() -> None:
    """
    @brief Prints the usage text shown when no query is requested.
    """
    print(USAGE)

def build_parser() -> argparse.ArgumentParser:
    """
    @brief Builds the command line parser.
    @return The parser.
    """
    parser = argparse.ArgumentParser(
        prog="laptop-status",
        description="Retrieve laptop battery status and level",
        allow_abbrev=False,
    )
    parser.add_argument("--version", action="version", version=f"Battery Info {__version__}")
    parser.add_argument("--battery", action="store_true", help="Output battery status and capacity")
    parser.add_argument("--battery-state", action="store_true", help="Output battery status only")
    parser.add_argument("--battery-capacity", action="store_true", help="Output battery capacity only")
    parser.add_argument("--volume-level", action="store_true", help="Output volume level")
    parser.add_argument("--backlight", action="store_true", help="Output backlight percentage")
    parser.add_argument("--memory", action="store_true", help="Output Memory")
    return parser

def main(argv: list[str] | None = None) -> None:
    """
    @brief Main function. Runs the highest-priority requested query.
    @param argv Command line arguments, defaults to sys.argv[1:].
    """
    if platform.system() != "Linux":
        print("This script is designed for Linux systems.", file=sys.stderr)
        sys.exit(1)

    args = build_parser().parse_args(argv)

    if args.battery:
        capacity = read_or_unknown(lambda: get_battery_capacity(BATTERY_PATH), "battery capacity")
        status = read_or_unknown(lambda: get_battery_status(BATTERY_PATH), "battery status")
        print(f"{status}: {capacity}%")
    elif args.battery_state:
        print(read_or_unknown(lambda: get_battery_status(BATTERY_PATH), "battery status"))
    elif args.battery_capacity:
        capacity = read_or_unknown(lambda: get_battery_capacity(BATTERY_PATH), "battery capacity")
        print(f"{capacity}%")
    elif args.volume_level:
        print(read_or_unknown(lambda: get_volume_level(AMIXER_COMMAND), "volume level"))
    elif args.backlight:
        print(read_or_unknown(lambda: get_brightness(BACKLIGHT_PATH), "backlight"))
    elif args.memory:
        print(read_or_unknown(lambda: get_memory(MEMINFO_PATH), "memory"))
    else:
        print_help()

if __name__ == "__main__":
    main()
