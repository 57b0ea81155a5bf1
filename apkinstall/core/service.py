"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
from pathlib import Path

from apkinstall.bridge.adb import AdbBridge
from apkinstall.bridge.base import Bridge
from apkinstall.core.config import load_settings
from apkinstall.core.errors import DeviceSelectionError, InstallError, PackageSelectionError
from apkinstall.core.locator import find_packages, validate_package_file
from apkinstall.core.model import InstallResult, Settings
from apkinstall.core.selector import Console, TerminalConsole, select_device, select_package

LOGGER = logging.getLogger(__name__)


class InstallerService:
    def __init__(
        self,
        *,
        bridge: Bridge | None = None,
        console: Console | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.bridge = bridge or AdbBridge(
            self.settings.adb_path,
            install_flags=self.settings.install_flags,
            timeout_s=self.settings.timeout_s,
        )
        self.console = console or TerminalConsole()

    def find_packages(self, directory: str | Path) -> list[Path]:
        return find_packages(directory, self.settings.package_suffix)

    def list_devices(self) -> list[str]:
        self.bridge.ensure_available()
        return self.bridge.list_devices()

    def install_file(self, path: str | Path) -> InstallResult:
        package = validate_package_file(path, self.settings.package_suffix)
        self.console.echo(f"Using APK file: {package}")
        return self.install_package(package)

    def install_directory(self, directory: str | Path) -> InstallResult:
        packages = self.find_packages(directory)
        package = select_package(
            packages,
            self.console,
            preferred_keyword=self.settings.preferred_keyword,
        )
        if package is None:
            raise PackageSelectionError("No APK selected.")

        self.console.echo(f"Using APK file: {package}")
        return self.install_package(package)

    def resolve_device(self) -> str:
        devices = self.list_devices()
        if not devices:
            raise DeviceSelectionError("No adb devices found.")

        device = select_device(devices, self.console)
        if device is None:
            raise DeviceSelectionError("No device selected.")
        return device

    def install_package(self, package: Path) -> InstallResult:
        device = self.resolve_device()

        self.console.echo(f'Running: {self.bridge.executable} -s "{device}" install "{package}"')
        command, returncode = self.bridge.install(device, package)
        if returncode != 0:
            raise InstallError(
                f"adb install of {package} on {device} failed with exit code {returncode}",
                returncode=returncode,
            )

        LOGGER.info("Installed %s on %s", package, device)
        return InstallResult(package=package, device=device, command=command, returncode=returncode)
