"""Bridge interfaces."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class Bridge(Protocol):
    executable: str

    def ensure_available(self) -> None:
        """Raise BridgeUnavailableError unless the bridge tool can be run."""

    def list_devices(self) -> list[str]:
        """Return serials of attached devices."""

    def install(self, serial: str, package: Path) -> tuple[tuple[str, ...], int]:
        """Install *package* on *serial*; return the command run and its exit status."""
