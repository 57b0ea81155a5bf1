"""Install Android packages onto adb-connected devices."""

__version__ = "0.1.0"
