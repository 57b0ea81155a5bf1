"""Numbered-menu selection among package files or devices."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, TypeVar

import typer

T = TypeVar("T")


class Console(Protocol):
    def echo(self, message: str, *, err: bool = False) -> None:
        """Write one line of user-facing output."""

    def ask(self, prompt: str) -> str:
        """Show *prompt* and return one line of input (empty on EOF)."""


class TerminalConsole:
    def echo(self, message: str, *, err: bool = False) -> None:
        typer.echo(message, err=err)

    def ask(self, prompt: str) -> str:
        typer.echo(prompt, nl=False)
        return sys.stdin.readline()


def parse_choice(raw: str, count: int) -> int | None:
    """Return the 1-based choice in *raw* if it is within ``1..count``."""
    tokens = raw.split()
    # Plain ASCII digits only: "1_0", "+2", "2abc" and "²" are all rejected.
    if not tokens or not (tokens[0].isascii() and tokens[0].isdigit()):
        return None
    choice = int(tokens[0])
    if choice < 1 or choice > count:
        return None
    return choice


def select_candidate(
    candidates: Sequence[T],
    console: Console,
    *,
    heading: str,
    what: str,
    prefer: Callable[[T], bool] | None = None,
) -> T | None:
    if not candidates:
        raise ValueError("select_candidate() needs at least one candidate")

    if len(candidates) == 1:
        return candidates[0]

    if prefer is not None:
        for candidate in candidates:
            if prefer(candidate):
                return candidate

    console.echo(heading)
    for index, candidate in enumerate(candidates, start=1):
        console.echo(f"  [{index}] {candidate}")

    choice = parse_choice(console.ask(f"Select {what} (1-{len(candidates)}): "), len(candidates))
    if choice is None:
        console.echo("Invalid choice.", err=True)
        return None
    return candidates[choice - 1]


def select_package(
    packages: Sequence[Path],
    console: Console,
    *,
    preferred_keyword: str | None = "signed",
) -> Path | None:
    """Pick one package, favouring the first whose name contains *preferred_keyword*."""
    keyword = (preferred_keyword or "").lower()

    def has_keyword(path: Path) -> bool:
        return keyword in path.name.lower()

    return select_candidate(
        packages,
        console,
        heading="Multiple APK files found:",
        what="APK to use",
        prefer=has_keyword if keyword else None,
    )


def select_device(devices: Sequence[str], console: Console) -> str | None:
    return select_candidate(
        devices,
        console,
        heading="Multiple devices detected:",
        what="device",
    )
