"""Stable public API for building tooling on top of apkinstall.

This module is the supported integration surface for third-party callers.
Avoid importing from internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from pathlib import Path

from apkinstall.bridge.adb import AdbBridge, parse_device_listing
from apkinstall.bridge.base import Bridge
from apkinstall.core.config import load_settings
from apkinstall.core.errors import (
    ApkInstallError,
    BridgeError,
    BridgeUnavailableError,
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    DeviceSelectionError,
    InstallError,
    PackageError,
    PackageNotFoundError,
    PackageSelectionError,
    PackageValidationError,
)
from apkinstall.core.model import InstallResult, Settings
from apkinstall.core.selector import Console, TerminalConsole
from apkinstall.core.service import InstallerService

__all__ = [
    "ApkInstallError",
    "BridgeError",
    "BridgeUnavailableError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "DeviceSelectionError",
    "InstallError",
    "PackageError",
    "PackageNotFoundError",
    "PackageSelectionError",
    "PackageValidationError",
    "InstallResult",
    "Settings",
    "AdbBridge",
    "Bridge",
    "Console",
    "TerminalConsole",
    "load_settings",
    "parse_device_listing",
    "Client",
]


class Client:
    """Public client for locating and installing APKs.

    A `Client` wraps settings loading, package lookup, selection prompts and
    the adb bridge behind a stable API intended for scripts and other
    frontends. Pass a custom `console` to answer selection prompts
    programmatically.
    """

    def __init__(
        self,
        *,
        bridge: Bridge | None = None,
        console: Console | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._service = InstallerService(bridge=bridge, console=console, settings=settings)

    @property
    def settings(self) -> Settings:
        return self._service.settings

    def find_packages(self, directory: str | Path) -> list[Path]:
        return self._service.find_packages(directory)

    def list_devices(self) -> list[str]:
        return self._service.list_devices()

    def install_file(self, path: str | Path) -> InstallResult:
        return self._service.install_file(path)

    def install_directory(self, directory: str | Path) -> InstallResult:
        return self._service.install_directory(directory)
