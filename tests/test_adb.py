from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from apkinstall.bridge import adb
from apkinstall.bridge.adb import AdbBridge, parse_device_listing
from apkinstall.core.errors import BridgeError, BridgeUnavailableError

LISTING = (
    "* daemon started successfully\n"
    "List of devices attached\n"
    "emulator-5554\tdevice\n"
    "R58M12ABCDE\tdevice product:beyond1 model:SM_G973F device:beyond1\n"
    "0123456789\tunauthorized\n"
    "\n"
)


def _cp(cmd: list[str], rc: int, stdout: str | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(cmd, rc, stdout=stdout, stderr=None)


def test_parse_device_listing_skips_header() -> None:
    assert parse_device_listing(LISTING) == ["emulator-5554", "R58M12ABCDE"]


def test_parse_device_listing_without_tab_keeps_whole_line() -> None:
    assert parse_device_listing("List of devices attached\nodd device line\n") == ["odd device line"]


def test_parse_device_listing_handles_crlf() -> None:
    assert parse_device_listing("List of devices attached\r\nserial1\tdevice\r\n") == ["serial1"]


def test_list_devices_parses_stdout(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        assert kwargs["text"] is True
        return _cp(cmd, 0, stdout=LISTING)

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert AdbBridge().list_devices() == ["emulator-5554", "R58M12ABCDE"]
    assert calls == [["adb", "devices"]]


def test_list_devices_spawn_failure_returns_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert AdbBridge("/nowhere/adb").list_devices() == []


def test_ensure_available_succeeds_on_zero_exit(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        assert cmd == ["adb", "version"]
        assert kwargs["stdout"] == subprocess.DEVNULL
        return _cp(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)

    bridge = AdbBridge()
    bridge.ensure_available()
    assert bridge.executable == "adb"


def test_ensure_available_raises_with_install_hint(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.setattr(adb, "_is_windows", lambda: False)

    with pytest.raises(BridgeUnavailableError) as exc:
        AdbBridge().ensure_available()
    assert "sudo apt install adb" in str(exc.value)
    assert "brew install android-platform-tools" in str(exc.value)


def test_windows_falls_back_to_local_adb_exe(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "adb.exe").write_bytes(b"MZ")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(adb, "_is_windows", lambda: True)

    def fake_run(cmd, **kwargs):
        if cmd[0] == "adb":
            raise FileNotFoundError("adb")
        if Path(cmd[0]).name == "adb.exe":
            return _cp(cmd, 0)
        raise AssertionError(f"Unexpected cmd: {cmd}")

    monkeypatch.setattr(subprocess, "run", fake_run)

    bridge = AdbBridge()
    bridge.ensure_available()
    assert Path(bridge.executable).resolve() == (tmp_path / "adb.exe").resolve()


def test_local_adb_exe_ignored_off_windows(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "adb.exe").write_bytes(b"MZ")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(adb, "_is_windows", lambda: False)

    def fake_run(cmd, **kwargs):
        return _cp(cmd, 1)

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(BridgeUnavailableError):
        AdbBridge().ensure_available()


def test_install_uses_argument_vector(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return _cp(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)

    package = Path("my apps") / "app; rm -rf.apk"
    command, returncode = AdbBridge(install_flags=["-r"]).install("emulator-5554", package)

    assert returncode == 0
    assert calls == [["adb", "-s", "emulator-5554", "install", "-r", str(package)]]
    assert command == ("adb", "-s", "emulator-5554", "install", "-r", str(package))


def test_install_reports_nonzero_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda cmd, **kwargs: _cp(cmd, 1))

    _, returncode = AdbBridge().install("serial", Path("app.apk"))
    assert returncode == 1


def test_timeout_raises_bridge_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        assert kwargs["timeout"] == 5.0
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(BridgeError, match="timed out"):
        AdbBridge(timeout_s=5.0).install("serial", Path("app.apk"))
