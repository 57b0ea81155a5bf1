"""Domain-specific errors for apkinstall."""


class ApkInstallError(Exception):
    """Base error for apkinstall."""


class ConfigError(ApkInstallError):
    """Base settings error."""


class ConfigLoadError(ConfigError):
    """Raised when the settings file exists but cannot be read."""


class ConfigValidationError(ConfigError):
    """Raised when the settings file does not conform to schema or semantics."""


class PackageError(ApkInstallError):
    """Base package lookup error."""


class PackageNotFoundError(PackageError):
    """Raised when a package path is missing or a scan finds no packages."""


class PackageValidationError(PackageError):
    """Raised when a path is not a package file or not a directory."""


class PackageSelectionError(PackageError):
    """Raised when no package could be chosen among several candidates."""


class DeviceSelectionError(ApkInstallError):
    """Raised when device resolution cannot settle on a single target."""


class BridgeError(ApkInstallError):
    """Base adb bridge error."""


class BridgeUnavailableError(BridgeError):
    """Raised when the adb executable cannot be found or run."""


class InstallError(BridgeError):
    """Raised when `adb install` exits with a non-zero status."""

    def __init__(self, message: str, *, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
