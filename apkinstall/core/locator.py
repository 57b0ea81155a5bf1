"""Package file lookup: single-file validation and recursive directory scans."""

from __future__ import annotations

import os
from pathlib import Path

from apkinstall.core.errors import PackageNotFoundError, PackageValidationError

DEFAULT_SUFFIX = ".apk"


def is_package_file(path: Path, suffix: str = DEFAULT_SUFFIX) -> bool:
    return path.suffix.lower() == suffix.lower()


def validate_package_file(path: str | Path, suffix: str = DEFAULT_SUFFIX) -> Path:
    file = Path(path)
    if not file.exists():
        raise PackageNotFoundError(f"File does not exist: {file}")
    if not file.is_file() or not is_package_file(file, suffix):
        raise PackageValidationError(f"Not an APK file: {file}")
    return file


def find_packages(directory: str | Path, suffix: str = DEFAULT_SUFFIX) -> list[Path]:
    """Return every package file below *directory*, sorted by full path."""
    root = Path(directory)
    if not root.is_dir():
        raise PackageValidationError(f"Not a directory: {root}")

    packages: list[Path] = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if candidate.is_file() and is_package_file(candidate, suffix):
                packages.append(candidate)

    if not packages:
        raise PackageNotFoundError(f"No APK files found in directory: {root}")
    return sorted(packages)
