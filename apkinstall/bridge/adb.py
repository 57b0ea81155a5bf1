"""adb bridge implementation using subprocess argument vectors."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from apkinstall.core.errors import BridgeError, BridgeUnavailableError

LOGGER = logging.getLogger(__name__)

LOCAL_WINDOWS_ADB = "adb.exe"
INSTALL_HINT = (
    "adb is not installed or not in PATH.\n"
    "Please install Android Platform Tools.\n"
    "  - Linux: sudo apt install adb\n"
    "  - macOS: brew install android-platform-tools\n"
    "  - Windows: Install from https://developer.android.com/studio/releases/platform-tools"
)


def parse_device_listing(output: str) -> list[str]:
    """Extract device serials from `adb devices` output.

    Data lines look like ``<serial>\\tdevice``; the header line
    ``List of devices attached`` is skipped.
    """
    devices: list[str] = []
    for line in output.splitlines():
        if "device" in line and "List" not in line:
            devices.append(line.split("\t", 1)[0])
    return devices


def _is_windows() -> bool:
    return sys.platform == "win32"


class AdbBridge:
    def __init__(
        self,
        executable: str = "adb",
        *,
        install_flags: Sequence[str] = (),
        timeout_s: float | None = None,
    ) -> None:
        self.executable = executable
        self.install_flags = tuple(install_flags)
        self.timeout_s = timeout_s

    def _run(self, args: Sequence[str], **kwargs) -> subprocess.CompletedProcess:
        cmd = [self.executable, *args]
        LOGGER.debug("Running %s", cmd)
        try:
            return subprocess.run(cmd, check=False, timeout=self.timeout_s, **kwargs)
        except subprocess.TimeoutExpired as exc:
            raise BridgeError(f"'{' '.join(cmd)}' timed out after {self.timeout_s}s") from exc

    def _probe(self, executable: str) -> bool:
        try:
            result = subprocess.run(
                [executable, "version"],
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            LOGGER.debug("adb probe with %s failed: %s", executable, exc)
            return False
        return result.returncode == 0

    def ensure_available(self) -> None:
        if self._probe(self.executable):
            return

        if _is_windows():
            local_adb = Path.cwd() / LOCAL_WINDOWS_ADB
            if local_adb.is_file() and self._probe(str(local_adb)):
                LOGGER.info("Using %s from the current directory", local_adb)
                self.executable = str(local_adb)
                return

        raise BridgeUnavailableError(INSTALL_HINT)

    def list_devices(self) -> list[str]:
        try:
            result = self._run(["devices"], stdout=subprocess.PIPE, text=True)
        except OSError as exc:
            LOGGER.error("Failed to run adb devices: %s", exc)
            return []
        return parse_device_listing(result.stdout or "")

    def install(self, serial: str, package: Path) -> tuple[tuple[str, ...], int]:
        args = ("-s", serial, "install", *self.install_flags, str(package))
        try:
            result = self._run(args)
        except OSError as exc:
            raise BridgeError(f"Failed to run adb install: {exc}") from exc
        return (self.executable, *args), result.returncode
