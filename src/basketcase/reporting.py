"""Reporters consume the StatusEvents produced by commands."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from basketcase.models import Status, StatusEvent, render_status_row

STATUS_STYLES: dict[Status, str] = {
    Status.LOCAL: "yellow",
    Status.CO: "green",
    Status.HIJACK: "magenta",
    Status.MISSING: "red",
    Status.MERGE: "bold red",
    Status.COMMIT: "cyan",
    Status.ADDED: "green",
    Status.REMOVED: "red",
    Status.KEPT: "dim",
}


@runtime_checkable
class Reporter(Protocol):
    """Sink for status events and free-text output."""

    def report(self, event: StatusEvent) -> None: ...

    def echo(self, line: str) -> None: ...


class ConsoleReporter:
    """Prints events as fixed-width ``status version path`` rows."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)

    def report(self, event: StatusEvent) -> None:
        row = Text(render_status_row(event), style=STATUS_STYLES.get(event.status, ""))
        self.console.print(row, soft_wrap=True, highlight=False)

    def echo(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, soft_wrap=True)


class CollectingReporter:
    """Keeps events in memory so other commands can reuse them."""

    def __init__(self) -> None:
        self.events: list[StatusEvent] = []
        self.lines: list[str] = []

    def report(self, event: StatusEvent) -> None:
        self.events.append(event)

    def echo(self, line: str) -> None:
        self.lines.append(line)

    def paths_with_status(self, *statuses: Status) -> list[Path]:
        return [e.path for e in self.events if e.status in statuses]
