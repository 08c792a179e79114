"""Check-in, check-out and undo check-out."""

from __future__ import annotations

from basketcase.commands.base import Command
from basketcase.prompt import COMMENT_FILENAME, comment_file
from basketcase.translate import CheckinTranslator, CheckoutTranslator, UncheckoutTranslator


class CheckinCommand(Command):
    synopsis = "[-m <comment>] <element> ..."
    help = """\
Check-in elements, prompting for a check-in message.

-m <comment>  Use <comment> rather than opening an editor.
"""
    mutating = True

    def execute(self) -> None:
        targets = self.specified_targets()
        self.echo("Checking-in:")
        for path in targets:
            self.echo(f"  {path}")
        if self.settings.test_mode:
            # dry run: no comment prompt
            self.cleartool.run_unsafe("checkin", "-cfile", COMMENT_FILENAME, *targets.as_args())
            return
        with comment_file(self.settings, self.comment) as cfile:
            lines = self.cleartool.run_unsafe("checkin", "-cfile", str(cfile), *targets.as_args())
            self.translate(lines, CheckinTranslator())


class CheckoutCommand(Command):
    synopsis = "[-h] <element> ..."
    help = """\
Check-out elements (unreserved).
By default, any hijacked version is discarded.

-h(ijack)     Retain the hijacked version.
"""
    mutating = True

    def __init__(self, *args, **kwargs):
        self.keep_or_revert = "-nquery"
        super().__init__(*args, **kwargs)

    def define_options(self) -> None:
        super().define_options()
        self.add_option(("hijack", "h"), self.option_hijack)

    def option_hijack(self) -> None:
        self.keep_or_revert = "-usehijack"

    def execute(self) -> None:
        lines = self.cleartool.run_unsafe(
            "checkout", "-unreserved", "-ncomment", self.keep_or_revert, *self.specified_targets().as_args()
        )
        self.translate(lines, CheckoutTranslator())


class UncheckoutCommand(Command):
    """Undo a checkout; keeps a ``.keep`` copy unless ``-remove`` is given."""

    synopsis = "[-r] <element> ..."
    help = """\
Undo a checkout, reverting to the checked-in version.

-r(emove)     Don't retain the existing version in a '.keep' file.
"""
    mutating = True

    def __init__(self, *args, **kwargs):
        self.action = "-keep"
        super().__init__(*args, **kwargs)

    def define_options(self) -> None:
        super().define_options()
        # -r means remove here, not recurse
        self.add_option(("remove", "r"), self.option_remove)

    def option_remove(self) -> None:
        self.action = "-rm"

    def execute(self) -> None:
        lines = self.cleartool.run_unsafe("uncheckout", self.action, *self.specified_targets().as_args())
        self.translate(lines, UncheckoutTranslator())
