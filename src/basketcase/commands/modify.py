"""Commands that change directory contents: add, remove and move.

Parent directories must be checked out before an element can be added
to, removed from or moved between them, so these commands first check
out any parent directory that is currently checked in. That checkout is
not undone if the primary action then fails.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from basketcase.commands.base import Command
from basketcase.errors import WrongArgumentCount
from basketcase.models import Status
from basketcase.paths import TargetList
from basketcase.reporting import CollectingReporter
from basketcase.translate import AddTranslator, MoveTranslator, RemoveTranslator

logger = logging.getLogger(__name__)


class DirectoryModificationCommand(Command):
    mutating = True

    def find_locked_elements(self, paths: TargetList) -> list[Path]:
        """Elements among ``paths`` that are checked in (reported OK)."""
        collector = CollectingReporter()
        ls = self.spawn("ls", reporter=collector)
        ls.option("all")
        ls.option("directory")
        ls.targets = paths
        ls.execute()
        return collector.paths_with_status(Status.OK)

    def checkout(self, paths: Sequence[Path]) -> None:
        if not paths:
            return
        co = self.spawn("checkout")
        co.targets = paths
        co.execute()

    def unlock_parent_directories(self, targets: TargetList) -> None:
        locked = self.find_locked_elements(targets.parents())
        logger.debug("locked parent directories: %s", ", ".join(map(str, locked)) or "none")
        self.checkout(locked)


class RemoveCommand(DirectoryModificationCommand):
    synopsis = "<element> ..."
    help = """\
Mark an element as deleted.
(Parent directories are checked-out automatically)
"""

    def execute(self) -> None:
        targets = self.specified_targets()
        self.unlock_parent_directories(targets)
        lines = self.cleartool.run_unsafe("rmname", "-ncomment", *targets.as_args())
        self.translate(lines, RemoveTranslator())


class AddCommand(DirectoryModificationCommand):
    synopsis = "<element> ..."
    help = """\
Add elements to the repository.
(Parent directories are checked-out automatically)
"""

    def execute(self) -> None:
        targets = self.specified_targets()
        self.unlock_parent_directories(targets)
        lines = self.cleartool.run_unsafe("mkelem", "-ncomment", *targets.as_args())
        self.translate(lines, AddTranslator())


class MoveCommand(DirectoryModificationCommand):
    synopsis = "<from> <to>"
    help = """\
Move/rename an element.
(Parent directories are checked-out automatically)
"""

    def execute(self) -> None:
        targets = self.specified_targets()
        if len(targets) != 2:
            raise WrongArgumentCount(2, len(targets))
        self.unlock_parent_directories(targets)
        lines = self.cleartool.run_unsafe("move", "-ncomment", *targets.as_args())
        self.translate(lines, MoveTranslator())
