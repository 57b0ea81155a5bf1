"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import os

import click
import typer
from typer.core import TyperCommand

from apkinstall.core.errors import ApkInstallError
from apkinstall.core.service import InstallerService

PROG = "apkinstall"

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_UNKNOWN_FLAG = 2
EXIT_FAILED = 3

USAGE = f"""Usage:
  {PROG} -f <apk-file>
  {PROG} -d <directory>

Options:
  -f <apk-file>    Path to a single APK file to install
  -d <directory>   Path to a directory which contains one or more APKs

Note:
  You must provide either the path to an APK file with -f, or the path to a
  directory with -d where at least one APK file is located."""

app = typer.Typer(add_completion=False, help="Install an APK onto an adb-connected device")

_RAW_ARGS = "apkinstall.raw_args"


class RawArgsCommand(TyperCommand):
    """Command that records its argument list before Click consumes ``--``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta[_RAW_ARGS] = list(args)
        return super().parse_args(ctx, args)


# The mode flag and path are dispatched by hand so that exit codes stay
# 1 for bad arity and 2 for an unknown flag.
@app.command(
    cls=RawArgsCommand,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def main(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(None, metavar="MODE PATH"),
) -> None:
    """Install the APK given with -f, or one found under the directory given with -d."""
    tokens = ctx.meta.get(_RAW_ARGS, list(args or ()))
    if len(tokens) != 2:
        typer.echo(USAGE)
        raise typer.Exit(code=EXIT_USAGE)

    option, path = tokens
    if option not in ("-f", "-d"):
        typer.echo(USAGE)
        raise typer.Exit(code=EXIT_UNKNOWN_FLAG)

    try:
        service = InstallerService()
        if option == "-f":
            service.install_file(path)
        else:
            service.install_directory(path)
    except ApkInstallError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_FAILED) from None


def log_level() -> str:
    """Level name from APKINSTALL_LOG_LEVEL, or WARNING when unset or unknown."""
    level = os.environ.get("APKINSTALL_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


def run() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    app()


if __name__ == "__main__":
    run()
