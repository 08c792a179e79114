"""Read-only commands: list, diff, log and version tree."""

from __future__ import annotations

from basketcase.commands.base import Command
from basketcase.translate import ListTranslator


class ListCommand(Command):
    synopsis = "[-a] [-r] [-d] [<element> ...]"
    help = """\
List element status.

-a(ll)        Show all files.
              (by default, up-to-date files are not reported)

-r(ecurse)    Recursively list sub-directories.
              (by default, just lists current directory)

-d(irectory)  List directories themselves, not their contents.
"""

    def __init__(self, *args, **kwargs):
        self.include_all = False
        self.directory_only = False
        super().__init__(*args, **kwargs)

    def define_options(self) -> None:
        super().define_options()
        self.add_option(("all", "a"), self.option_all)
        self.add_option(("directory", "d"), self.option_directory)

    def option_all(self) -> None:
        self.include_all = True

    def option_directory(self) -> None:
        self.directory_only = True

    def translator(self) -> ListTranslator:
        return ListTranslator(
            include_all=self.include_all,
            ignore=self.settings.ignore,
            exists=self.exists,
        )

    def execute(self) -> None:
        args: list[str] = []
        if self.recursive:
            args.append("-recurse")
        if self.directory_only:
            args.append("-directory")
        lines = self.cleartool.run("ls", *args, *self.effective_targets().as_args())
        self.translate(lines, self.translator())


class DiffCommand(Command):
    synopsis = "[-g] <element> ..."
    help = """\
Compare a file to the latest checked-in version.

-g(raphical)  Graphical display.
"""

    def execute(self) -> None:
        args = ["-graphical"] if self.graphical else []
        for target in self.specified_targets().as_args():
            for line in self.cleartool.run("diff", *args, "-predecessor", target):
                self.echo(line)


class LogCommand(Command):
    synopsis = "[-r] [-d] [-g] [<element> ...]"
    help = """\
List the history of specified elements.

-r(ecurse)    Include sub-directories.
-d(irectory)  History of the directory itself, not its contents.
-g(raphical)  Graphical display.
"""

    def __init__(self, *args, **kwargs):
        self.directory_only = False
        super().__init__(*args, **kwargs)

    def define_options(self) -> None:
        super().define_options()
        self.add_option(("directory", "d"), self.option_directory)

    def option_directory(self) -> None:
        self.directory_only = True

    def execute(self) -> None:
        args: list[str] = []
        if self.recursive:
            args.append("-recurse")
        if self.directory_only:
            args.append("-directory")
        if self.graphical:
            args.append("-graphical")
        for line in self.cleartool.run("lshistory", *args, *self.effective_targets().as_args()):
            self.echo(line)


class VersionTreeCommand(Command):
    synopsis = "[-g] [<element> ...]"
    help = """\
Display a version-tree of specified elements.

-g(raphical)  Graphical display.
"""

    def execute(self) -> None:
        args = ["-graphical"] if self.graphical else []
        for line in self.cleartool.run("lsvtree", *args, *self.effective_targets().as_args()):
            self.echo(line)
