#!/usr/bin/env python3

from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
from pathlib import Path

import laptop_status

SCRIPT = Path(__file__).resolve().parent / "laptop_status.py"
COMMAND_NAME = "laptop-status"
DEFAULT_DEST = Path("/usr/local/bin")


def run_command(cmd: list[str], check: bool = True):
    """Run a command and return the result."""
    return subprocess.run(cmd, check=check, capture_output=True, text=True)

def check_python() -> None:
    """Check that the running interpreter is Python 3.10 or newer."""
    if sys.version_info < (3, 10):
        print("Error: Python 3.10 or newer is required.")
        sys.exit(1)

def check_system_deps() -> bool:
    """Check that amixer is installed. Returns True if it was found."""
    if shutil.which(laptop_status.AMIXER_COMMAND[0]):
        print("amixer found.")
        return True

    print("amixer not found; --volume-level will print 'Unknown'. Install alsa-utils:")
    print("For Debian/Ubuntu: sudo apt install alsa-utils")
    print("For Arch Linux: sudo pacman -S alsa-utils")
    print("For Fedora: sudo dnf install alsa-utils")
    print("For openSUSE: sudo zypper install alsa-utils")
    return False

def check_sensors() -> list[Path]:
    """Report which sensor files exist on this machine. Returns the missing ones."""
    sensors = [
        laptop_status.BATTERY_PATH / "capacity",
        laptop_status.BATTERY_PATH / "status",
        laptop_status.BACKLIGHT_PATH / "brightness",
        laptop_status.BACKLIGHT_PATH / "max_brightness",
        laptop_status.MEMINFO_PATH,
    ]

    missing = [sensor for sensor in sensors if not sensor.exists()]
    for sensor in missing:
        print(f"Warning: {sensor} not found; the matching query will print 'Unknown'.")

    if not missing:
        print("All sensor files found.")
    return missing

def install_script(dest_dir: Path) -> Path:
    """Install laptop_status.py as dest_dir/laptop-status."""
    if not SCRIPT.exists():
        print(f"Error: {SCRIPT.name} not found.")
        sys.exit(1)

    # Make executable
    os.chmod(SCRIPT, 0o755)

    dest = dest_dir / COMMAND_NAME
    try:
        if os.access(dest_dir, os.W_OK):
            shutil.copy2(SCRIPT, dest)
        else:
            run_command(["sudo", "cp", str(SCRIPT), str(dest)])
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Error installing {COMMAND_NAME}: {e}")
        sys.exit(1)

    print(f"Installed {dest}")
    return dest

def main(argv: list[str] | None = None) -> None:
    """Main installer function."""
    parser = argparse.ArgumentParser(description="laptop-status installer")
    parser.add_argument("--dest", type=Path, default=DEFAULT_DEST, help="Install directory (default: /usr/local/bin)")
    parser.add_argument("--skip-checks", action="store_true", help="Skip amixer and sensor checks")

    args = parser.parse_args(argv)

    check_python()

    if not args.skip_checks:
        check_system_deps()
        check_sensors()

    install_script(args.dest.expanduser())

    print("Installation finished!")
    print(f"Try: {COMMAND_NAME} --battery")

if __name__ == "__main__":
    main()
