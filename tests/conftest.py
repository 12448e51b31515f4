"""Pytest configuration for laptop-status tests."""

import sys
from pathlib import Path

import pytest

# Make laptop_status.py and install.py importable without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import laptop_status  # noqa: E402


@pytest.fixture
def battery_dir(tmp_path, monkeypatch):
    """A fake BAT0 power_supply directory holding capacity 47, Discharging."""
    path = tmp_path / "BAT0"
    path.mkdir()
    (path / "capacity").write_text("47\n")
    (path / "status").write_text("Discharging\n")
    monkeypatch.setattr(laptop_status, "BATTERY_PATH", path)
    return path


@pytest.fixture
def backlight_dir(tmp_path, monkeypatch):
    """A fake backlight directory; tests write brightness values into it."""
    path = tmp_path / "amdgpu_bl1"
    path.mkdir()
    monkeypatch.setattr(laptop_status, "BACKLIGHT_PATH", path)
    return path


@pytest.fixture
def meminfo_file(tmp_path, monkeypatch):
    """A fake /proc/meminfo path; tests write its contents."""
    path = tmp_path / "meminfo"
    monkeypatch.setattr(laptop_status, "MEMINFO_PATH", path)
    return path
