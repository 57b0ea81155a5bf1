"""Core data models used across locator, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    adb_path: str = "adb"
    package_suffix: str = ".apk"
    preferred_keyword: str | None = "signed"
    install_flags: tuple[str, ...] = ()
    timeout_s: float | None = None


@dataclass(frozen=True)
class InstallResult:
    package: Path
    device: str
    command: tuple[str, ...]
    returncode: int
