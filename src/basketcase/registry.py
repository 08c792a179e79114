"""Command names and aliases.

The registry is built once at import time and never changes afterwards.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Sequence

from basketcase.cleartool import Cleartool
from basketcase.commands import (
    AddCommand,
    AutoCheckinCommand,
    AutoSyncCommand,
    AutoUncheckoutCommand,
    CheckinCommand,
    CheckoutCommand,
    Command,
    DiffCommand,
    HelpCommand,
    ListCommand,
    LogCommand,
    MoveCommand,
    RemoveCommand,
    UncheckoutCommand,
    UpdateCommand,
    VersionTreeCommand,
)
from basketcase.config import Settings
from basketcase.errors import UnknownCommand
from basketcase.reporting import Reporter

PROGRAM = "basketcase"

USAGE_HEADER = f"""\
usage: {PROGRAM} [<global-options>] <command> [<options>] [<element> ...]

GLOBAL OPTIONS

    -t/--test   test/dry-run/simulate mode
                (ie. don't actually do anything)

    -d/--debug  debug cleartool interaction

COMMANDS        (type '{PROGRAM} help <command>' for details)

"""

COMMANDS: tuple[tuple[type[Command], tuple[str, ...]], ...] = (
    (ListCommand, ("list", "ls", "status", "stat")),
    (DiffCommand, ("diff",)),
    (LogCommand, ("log", "history")),
    (VersionTreeCommand, ("tree", "vtree")),
    (UpdateCommand, ("update", "up")),
    (CheckinCommand, ("checkin", "ci", "commit")),
    (CheckoutCommand, ("checkout", "co", "edit")),
    (UncheckoutCommand, ("uncheckout", "unco", "revert")),
    (AddCommand, ("add",)),
    (RemoveCommand, ("remove", "rm", "delete", "del")),
    (MoveCommand, ("move", "mv", "rename")),
    (AutoCheckinCommand, ("auto-checkin", "auto-ci", "auto-commit")),
    (AutoUncheckoutCommand, ("auto-uncheckout", "auto-unco", "auto-revert")),
    (AutoSyncCommand, ("auto-sync", "auto-addrm")),
    (HelpCommand, ("help",)),
)


class CommandRegistry:
    """Read-only mapping from command names and aliases to command classes."""

    def __init__(self, entries: Sequence[tuple[type[Command], Sequence[str]]]):
        by_name: dict[str, type[Command]] = {}
        for command_class, names in entries:
            for name in names:
                if name in by_name:
                    raise ValueError(f"Command name registered twice: {name}")
                by_name[name] = command_class
        self._entries = tuple((cls, tuple(names)) for cls, names in entries)
        self._by_name = MappingProxyType(by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return list(self._by_name)

    def entries(self) -> tuple[tuple[type[Command], tuple[str, ...]], ...]:
        return self._entries

    def lookup(self, name: str | None) -> type[Command]:
        if name is None or name not in self._by_name:
            raise UnknownCommand(name)
        return self._by_name[name]

    def create(
        self,
        name: str | None,
        settings: Settings,
        *,
        cleartool: Cleartool | None = None,
        reporter: Reporter | None = None,
    ) -> Command:
        command_class = self.lookup(name)
        return command_class(settings, cleartool=cleartool, reporter=reporter, registry=self)

    def usage(self) -> str:
        lines = [f"    % {', '.join(names)}" for _, names in self._entries]
        return USAGE_HEADER + "\n".join(lines) + "\n"


DEFAULT_REGISTRY = CommandRegistry(COMMANDS)
