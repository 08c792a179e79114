"""Update a snapshot view, then look for checkouts needing a merge."""

from __future__ import annotations

from basketcase.cleartool import NULL_LOG
from basketcase.commands.base import Command
from basketcase.translate import MergeTranslator, UpdateTranslator, view_relative


class UpdateCommand(Command):
    synopsis = "[-nomerge] [-g] [<element> ...]"
    help = """\
Update your (snapshot) view.

-nomerge      Don't attempt to merge in changes to checked-out files.
-g(raphical)  Merge using the graphical merge tool only.
"""

    def __init__(self, *args, **kwargs):
        self.nomerge = False
        super().__init__(*args, **kwargs)

    def define_options(self) -> None:
        super().define_options()
        self.add_option(("nomerge",), self.option_nomerge)

    def option_nomerge(self) -> None:
        self.nomerge = True

    def execute_update(self) -> None:
        args = ["-log", NULL_LOG, "-force"]
        if self.settings.test_mode:
            args.append("-print")
        relative = view_relative(self.cleartool.view_root(), self.settings.cwd)
        lines = self.cleartool.run("update", *args, *self.effective_targets().as_args())
        self.translate(lines, UpdateTranslator(relative))

    def execute_merge(self) -> None:
        args = ["-log", NULL_LOG, "-flatest"]
        if self.settings.test_mode:
            args.append("-print")
        elif self.graphical:
            args.append("-gmerge")
        else:
            args.extend(["-merge", "-gmerge"])
        lines = self.cleartool.run("findmerge", *self.effective_targets().as_args(), *args)
        self.translate(lines, MergeTranslator())

    def execute(self) -> None:
        self.execute_update()
        if not self.nomerge:
            self.execute_merge()
