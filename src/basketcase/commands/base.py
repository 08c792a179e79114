"""Base command: option table, target resolution and output translation.

Every command variant declares the options it understands in
:meth:`Command.define_options`; option dispatch is therefore per command
rather than through one global flag table.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from basketcase.cleartool import Cleartool
from basketcase.config import Settings
from basketcase.errors import ExternalToolFailure, MissingOptionArgument, NoTargetSpecified, UnrecognizedOption
from basketcase.models import Status, StatusEvent
from basketcase.paths import TargetList
from basketcase.reporting import ConsoleReporter, Reporter
from basketcase.translate import OutputTranslator, TranslationGap

if TYPE_CHECKING:
    from basketcase.registry import CommandRegistry

logger = logging.getLogger(__name__)

OPTION_SHAPE = re.compile(r"^-+(.+)")


@dataclass(frozen=True)
class OptionSpec:
    """A command option: its names, how many arguments it takes and its handler."""

    names: tuple[str, ...]
    handler: Callable[..., None]
    arity: int = 0


class Command:
    """A configured cleartool operation, executed once then discarded."""

    synopsis = ""
    help = "Sorry, no help provided ..."
    mutating = False

    def __init__(
        self,
        settings: Settings,
        *,
        cleartool: Cleartool | None = None,
        reporter: Reporter | None = None,
        registry: CommandRegistry | None = None,
    ):
        self.settings = settings
        self.cleartool = cleartool or Cleartool(settings)
        self.reporter: Reporter = reporter or ConsoleReporter()
        self.registry = registry
        self.recursive = False
        self.graphical = False
        self.comment: str | None = None
        self._targets: list[str] = []
        self.gaps: list[TranslationGap] = []
        self._options: dict[str, OptionSpec] = {}
        self.define_options()

    # -- options -----------------------------------------------------------

    def define_options(self) -> None:
        self.add_option(("recurse", "r"), self.option_recurse)
        self.add_option(("graphical", "g"), self.option_graphical)
        self.add_option(("comment", "m"), self.option_comment, arity=1)

    def add_option(self, names: Sequence[str], handler: Callable[..., None], arity: int = 0) -> None:
        spec = OptionSpec(tuple(names), handler, arity)
        for name in spec.names:
            self._options[name] = spec

    @property
    def option_names(self) -> list[str]:
        return sorted(self._options)

    def option(self, name: str, *args: str) -> Command:
        """Apply an option by name, as if given on the command line."""
        spec = self._options.get(name)
        if spec is None:
            raise UnrecognizedOption(f"-{name}", type(self).__name__)
        if len(args) != spec.arity:
            raise MissingOptionArgument(f"-{name}", spec.arity)
        spec.handler(*args)
        return self

    def option_recurse(self) -> None:
        self.recursive = True

    def option_graphical(self) -> None:
        self.graphical = True

    def option_comment(self, comment: str) -> None:
        self.comment = comment

    def accept_args(self, args: Sequence[str]) -> Command:
        """Apply leading ``-option`` tokens; everything after them becomes the targets."""
        remaining = list(args)
        while remaining:
            match = OPTION_SHAPE.match(remaining[0])
            if not match:
                break
            token = remaining.pop(0)
            spec = self._options.get(match.group(1))
            if spec is None:
                raise UnrecognizedOption(token, type(self).__name__)
            if len(remaining) < spec.arity:
                raise MissingOptionArgument(token, spec.arity)
            option_args, remaining = remaining[: spec.arity], remaining[spec.arity :]
            spec.handler(*option_args)
        self._targets = remaining
        return self

    # -- targets -----------------------------------------------------------

    @property
    def targets(self) -> list[str]:
        return list(self._targets)

    @targets.setter
    def targets(self, targets: Iterable[str | os.PathLike[str]]) -> None:
        self._targets = [os.fspath(t) for t in targets]

    def effective_targets(self) -> TargetList:
        """The given targets, or the current directory when none were given."""
        return TargetList(self._targets or ["."])

    def specified_targets(self) -> TargetList:
        """The given targets; at least one is required."""
        if not self._targets:
            raise NoTargetSpecified()
        return TargetList(self._targets)

    # -- output ------------------------------------------------------------

    def report(self, status: Status, path: Path, version: str | None = None) -> None:
        self.reporter.report(StatusEvent(path, status, version))

    def echo(self, line: str) -> None:
        self.reporter.echo(line)

    def cannot_deal_with(self, translator: OutputTranslator, line: str) -> None:
        gap = TranslationGap(translator.name, line)
        self.gaps.append(gap)
        logger.warning("unrecognised output: %s", line)

    def translate(
        self,
        lines: Iterable[str],
        translator: OutputTranslator,
        *,
        expect_output: bool | None = None,
    ) -> int:
        """Feed tool output through ``translator`` one line at a time.

        A non-zero exit is not a failure when every line of output was
        recognised: cleartool exits with status 1 for routine outcomes such
        as re-checking-out an element, and the output already says so.

        Returns the number of recognised lines.

        Raises:
            ExternalToolFailure: If the tool could not be started or was
                killed, or exited non-zero leaving output unrecognised or
                printing nothing recognisable.
        """
        if expect_output is None:
            expect_output = self.mutating
        recognised = 0
        unrecognised = 0
        try:
            for line in lines:
                result = translator.feed(line)
                if result is None:
                    unrecognised += 1
                    self.cannot_deal_with(translator, line)
                    continue
                recognised += 1
                for event in result.events:
                    self.reporter.report(event)
                if result.echo is not None:
                    self.reporter.echo(result.echo)
        except ExternalToolFailure as exc:
            if exc.abnormal or unrecognised or not recognised:
                raise
            logger.debug("%s; all output recognised", exc)
        if expect_output and recognised == 0 and not self.settings.test_mode:
            logger.warning("cleartool %s produced no recognisable output", translator.name)
        return recognised

    def exists(self, path: Path) -> bool:
        return (self.settings.cwd / path).exists()

    # -- composition -------------------------------------------------------

    def spawn(self, name: str, *, reporter: Reporter | None = None) -> Command:
        """A fresh inner command sharing this command's settings and tool runner."""
        registry = self.registry
        if registry is None:
            from basketcase.registry import DEFAULT_REGISTRY

            registry = DEFAULT_REGISTRY
        return registry.create(
            name,
            self.settings,
            cleartool=self.cleartool,
            reporter=reporter or self.reporter,
        )

    def execute(self) -> None:
        raise NotImplementedError
