"""Command-line driver for ``basketcase``.

Global options come before the command name; everything after the
command name is parsed by the command itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler

from basketcase import __version__
from basketcase.cleartool import Cleartool
from basketcase.config import Settings, load_settings
from basketcase.errors import ExternalToolFailure, UsageError
from basketcase.registry import DEFAULT_REGISTRY, PROGRAM, CommandRegistry
from basketcase.reporting import ConsoleReporter

EXIT_USAGE = 1
EXIT_TOOL_FAILURE = 2
EXIT_INTERRUPTED = 130


def configure_logging(debug: bool, console: Console) -> None:
    """Route the package loggers to stderr through rich."""
    package_logger = logging.getLogger("basketcase")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)


class CommandLine:
    """Resolves, configures and executes one command."""

    def __init__(
        self,
        *,
        registry: CommandRegistry = DEFAULT_REGISTRY,
        console: Console | None = None,
        err_console: Console | None = None,
        cleartool_factory: Callable[[Settings], Cleartool] = Cleartool,
    ):
        self.registry = registry
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.cleartool_factory = cleartool_factory

    def run(
        self,
        args: Sequence[str],
        *,
        test_mode: bool = False,
        debug_mode: bool = False,
        cwd: Path | None = None,
    ) -> int:
        """Run ``args`` (command name first) and return the exit status."""
        configure_logging(debug_mode, self.err_console)
        remaining = list(args)
        try:
            if remaining and remaining[0].startswith("-"):
                raise UsageError(f"Unrecognised global argument: {remaining[0]}")
            settings = load_settings(test_mode=test_mode, debug_mode=debug_mode, cwd=cwd)
            name = remaining.pop(0) if remaining else None
            command = self.registry.create(
                name,
                settings,
                cleartool=self.cleartool_factory(settings),
                reporter=ConsoleReporter(self.console),
            )
            command.accept_args(remaining)
            command.execute()
        except UsageError as usage:
            self.err_console.print(f"ERROR: {usage}", markup=False, soft_wrap=True)
            self.err_console.print()
            self.err_console.print(f"try '{PROGRAM} help' for usage info", markup=False)
            return EXIT_USAGE
        except ExternalToolFailure as failure:
            self.err_console.print(f"ERROR: {failure}", markup=False, soft_wrap=True)
            return EXIT_TOOL_FAILURE
        except KeyboardInterrupt:
            self.err_console.print("Interrupted", markup=False)
            return EXIT_INTERRUPTED
        return 0


app = typer.Typer(
    name=PROGRAM,
    help="CVS/Subversion-style front end for ClearCase cleartool.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGRAM} {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
    epilog=f"Run '{PROGRAM} help' for the list of commands.",
)
def run(
    ctx: typer.Context,
    test: bool = typer.Option(False, "--test", "-t", help="Dry-run: don't change anything."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Trace cleartool interaction."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Run a basketcase command."""
    status = CommandLine().run(ctx.args, test_mode=test, debug_mode=debug)
    if status:
        raise typer.Exit(status)


def main() -> None:
    app(prog_name=PROGRAM)


if __name__ == "__main__":
    main()
