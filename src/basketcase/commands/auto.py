"""Bulk commands that derive their targets from a recursive listing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from basketcase.commands.base import Command
from basketcase.models import Status, StatusEvent
from basketcase.prompt import edit_file
from basketcase.reporting import CollectingReporter

logger = logging.getLogger(__name__)

CONTROL_FILENAME = "basketcase-autosync.tmp"

CONTROL_HEADER = """\
# basketcase auto-sync
#
# Uncomment the lines for the actions you want, save, and close the editor.
#   ADD     add an untracked file
#   RM      remove a missing element
#   UPDATE  check out a hijacked element, keeping the hijacked copy
#
"""

# Status of a listed element -> control file tag
SYNC_TAGS: dict[Status, str] = {
    Status.LOCAL: "ADD",
    Status.MISSING: "RM",
    Status.HIJACK: "UPDATE",
}

CONTROL_LINE = re.compile(r"^(ADD|RM|UPDATE)\s+(.*\S)")


class AutoCommand(Command):
    synopsis = "[<element> ...]"

    def list_elements(self) -> list[StatusEvent]:
        collector = CollectingReporter()
        ls = self.spawn("ls", reporter=collector)
        ls.option("recurse")
        ls.targets = self.effective_targets()
        ls.execute()
        return collector.events

    def find_checkouts(self) -> list[Path]:
        return [e.path for e in self.list_elements() if e.status is Status.CO]


class AutoCheckinCommand(AutoCommand):
    help = """\
Bulk commit: check-in all checked-out elements.

-m <comment>  Use <comment> rather than opening an editor.
"""

    def execute(self) -> None:
        checked_out = self.find_checkouts()
        if not checked_out:
            self.echo("Nothing to check-in")
            return
        ci = self.spawn("checkin")
        ci.comment = self.comment
        ci.targets = checked_out
        ci.execute()


class AutoUncheckoutCommand(AutoCommand):
    help = """\
Bulk revert: revert all checked-out elements.
"""

    def execute(self) -> None:
        checked_out = self.find_checkouts()
        if not checked_out:
            self.echo("Nothing to revert")
            return
        unco = self.spawn("uncheckout")
        unco.option("remove")
        unco.targets = checked_out
        unco.execute()


@dataclass
class SyncPlan:
    """Paths the user approved in the auto-sync control file."""

    add: list[str] = field(default_factory=list)
    remove: list[str] = field(default_factory=list)
    update: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> SyncPlan:
        plan = cls()
        buckets = {"ADD": plan.add, "RM": plan.remove, "UPDATE": plan.update}
        for line in text.splitlines():
            match = CONTROL_LINE.match(line)
            if match:
                buckets[match.group(1)].append(match.group(2))
        return plan

    def is_empty(self) -> bool:
        return not (self.add or self.remove or self.update)


def render_control_file(elements: Sequence[StatusEvent]) -> str:
    lines = [CONTROL_HEADER]
    for element in elements:
        tag = SYNC_TAGS.get(element.status)
        if tag:
            lines.append(f"#{tag}\t{element.path}\n")
    return "".join(lines)


class AutoSyncCommand(AutoCommand):
    help = """\
Bulk add/remove: offer to add new elements, and remove missing ones.
Hijacked elements may be checked out, keeping the hijacked copy.
"""

    @property
    def control_file(self) -> Path:
        return self.settings.cwd / CONTROL_FILENAME

    def generate_control_file(self) -> None:
        self.control_file.write_text(render_control_file(self.list_elements()), encoding="utf-8")

    def edit_control_file(self) -> None:
        edit_file(self.control_file, self.settings)

    def read_control_file(self) -> SyncPlan:
        return SyncPlan.parse(self.control_file.read_text(encoding="utf-8"))

    def process(self, plan: SyncPlan) -> None:
        logger.debug(
            "auto-sync: %d to add, %d to check out, %d to remove",
            len(plan.add),
            len(plan.update),
            len(plan.remove),
        )
        # add and re-checkout first, so remove acts on the confirmed state
        self.apply("add", plan.add)
        self.apply("checkout", plan.update, "hijack")
        self.apply("remove", plan.remove)

    def apply(self, name: str, targets: Sequence[str], *options: str) -> None:
        if not targets:
            return
        command = self.spawn(name)
        for option in options:
            command.option(option)
        command.targets = targets
        command.execute()

    def execute(self) -> None:
        try:
            self.generate_control_file()
            self.edit_control_file()
            plan = self.read_control_file()
        finally:
            self.control_file.unlink(missing_ok=True)
        if plan.is_empty():
            self.echo("Nothing to sync")
            return
        self.process(plan)
