"""Command variants."""

from basketcase.commands.auto import AutoCheckinCommand, AutoCommand, AutoSyncCommand, AutoUncheckoutCommand, SyncPlan
from basketcase.commands.base import Command, OptionSpec
from basketcase.commands.checkin import CheckinCommand, CheckoutCommand, UncheckoutCommand
from basketcase.commands.help import HelpCommand
from basketcase.commands.listing import DiffCommand, ListCommand, LogCommand, VersionTreeCommand
from basketcase.commands.modify import AddCommand, DirectoryModificationCommand, MoveCommand, RemoveCommand
from basketcase.commands.update import UpdateCommand

__all__ = [
    "AddCommand",
    "AutoCheckinCommand",
    "AutoCommand",
    "AutoSyncCommand",
    "AutoUncheckoutCommand",
    "CheckinCommand",
    "CheckoutCommand",
    "Command",
    "DiffCommand",
    "DirectoryModificationCommand",
    "HelpCommand",
    "ListCommand",
    "LogCommand",
    "MoveCommand",
    "OptionSpec",
    "RemoveCommand",
    "SyncPlan",
    "UncheckoutCommand",
    "UpdateCommand",
    "VersionTreeCommand",
]
