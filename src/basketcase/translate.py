"""Translate cleartool's human-readable output into StatusEvents.

Each translator holds an ordered rule set. ``feed()`` consumes one line
and returns a :class:`Translation` for the first matching rule, or
``None`` when no rule recognises the line. Translators keep no state
between lines, so they can be tested against captured transcripts.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

from basketcase.ignore import IgnoreMatcher
from basketcase.models import Status, StatusEvent
from basketcase.paths import normalize_path

logger = logging.getLogger(__name__)

Emitter = Callable[[re.Match[str]], Iterable[StatusEvent]]


@dataclass(frozen=True)
class Translation:
    """Outcome of feeding one line: events to report and/or text to echo."""

    events: tuple[StatusEvent, ...] = ()
    echo: str | None = None


SUPPRESSED = Translation()


@dataclass(frozen=True)
class Rule:
    pattern: re.Pattern[str]
    emit: Emitter | None = None
    echo: bool = False

    def apply(self, match: re.Match[str]) -> Translation:
        if self.echo:
            return Translation(echo=match.string)
        if self.emit is None:
            return SUPPRESSED
        return Translation(events=tuple(self.emit(match)))


def emit(regex: str, emitter: Emitter, flags: int = re.IGNORECASE) -> Rule:
    return Rule(re.compile(regex, flags), emitter)


def suppress(regex: str, flags: int = re.IGNORECASE) -> Rule:
    return Rule(re.compile(regex, flags))


def echo(regex: str = r"", flags: int = 0) -> Rule:
    return Rule(re.compile(regex, flags), echo=True)


@dataclass(frozen=True)
class TranslationGap:
    """A line no rule recognised."""

    translator: str
    line: str


class OutputTranslator:
    """Base translator; subclasses supply :meth:`build_rules`."""

    name = "output"

    def __init__(self) -> None:
        self.rules: tuple[Rule, ...] = tuple(self.build_rules())

    def build_rules(self) -> Sequence[Rule]:
        return ()

    def feed(self, line: str) -> Translation | None:
        for rule in self.rules:
            match = rule.pattern.match(line)
            if match:
                return rule.apply(match)
        return None


def _path(text: str) -> Path:
    return normalize_path(text.strip())


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class ListTranslator(OutputTranslator):
    """``cleartool ls`` output.

    Checked-out elements are re-checked on disk: the tool still reports a
    checkout whose file was deleted by hand.
    """

    name = "ls"

    def __init__(
        self,
        *,
        include_all: bool = False,
        ignore: IgnoreMatcher | None = None,
        exists: Callable[[Path], bool] | None = None,
    ):
        self.include_all = include_all
        self.ignore = ignore
        self.exists = exists or (lambda path: path.exists())
        super().__init__()

    def build_rules(self) -> Sequence[Rule]:
        return (
            emit(r"^(.+)@@(\S+) \[hijacked", self._hijacked),
            emit(r"^(.+)@@(\S+) \[loaded but missing\]", self._missing),
            emit(r"^(.+)@@\S+[\\/]CHECKEDOUT(?: from (\S+))?", self._checked_out),
            emit(r"^(.+)@@(\S+) +Rule: ", self._up_to_date),
            # a bare path: no version extended name, no tool diagnostic
            emit(r"^(?!.*@@)(?!cleartool: )(.*\S)", self._local, flags=0),
        )

    def _hijacked(self, m: re.Match[str]) -> Iterable[StatusEvent]:
        yield StatusEvent(_path(m.group(1)), Status.HIJACK, m.group(2))

    def _missing(self, m: re.Match[str]) -> Iterable[StatusEvent]:
        yield StatusEvent(_path(m.group(1)), Status.MISSING, m.group(2))

    def _checked_out(self, m: re.Match[str]) -> Iterable[StatusEvent]:
        path = _path(m.group(1))
        status = Status.CO if self.exists(path) else Status.MISSING
        yield StatusEvent(path, status, m.group(2) or "new")

    def _up_to_date(self, m: re.Match[str]) -> Iterable[StatusEvent]:
        if self.include_all:
            yield StatusEvent(_path(m.group(1)), Status.OK, m.group(2))

    def _local(self, m: re.Match[str]) -> Iterable[StatusEvent]:
        path = _path(m.group(1))
        if self.ignore is not None and self.ignore.ignored(path):
            logger.debug("ignoring %s", path)
            return
        yield StatusEvent(path, Status.LOCAL)


# ---------------------------------------------------------------------------
# Update and merge
# ---------------------------------------------------------------------------


class UpdateTranslator(OutputTranslator):
    """``cleartool update`` output; paths are reported relative to the view root."""

    name = "update"

    def __init__(self, relative: Callable[[str], Path]):
        self.relative = relative
        super().__init__()

    def build_rules(self) -> Sequence[Rule]:
        rel = self.relative
        return (
            suppress(r'^Processing dir "'),
            suppress(r"^\.*$"),
            emit(r'^Making dir "(.+?)"', lambda m: [StatusEvent(rel(m.group(1)), Status.NEW)]),
            emit(r'^Loading "(.+?)"', lambda m: [StatusEvent(rel(m.group(1)), Status.UPDATED)]),
            emit(r'^Unloaded "(.+?)"', lambda m: [StatusEvent(rel(m.group(1)), Status.REMOVED)]),
            emit(
                r'^Keeping hijacked object "(.+?)" - base "(.+?)"',
                lambda m: [StatusEvent(rel(m.group(1)), Status.HIJACK, m.group(2))],
            ),
            suppress(r'^Keeping "'),
            suppress(r"^End dir"),
            suppress(r"^Done loading"),
        )


class MergeTranslator(OutputTranslator):
    """``cleartool findmerge`` output.

    Merge candidates become MERGE events; the progress and merge-tool
    chatter the user needs to see during a merge is echoed.
    """

    name = "findmerge"

    def build_rules(self) -> Sequence[Rule]:
        return (
            emit(
                r'^Needs Merge "(.+)" \[to \S+ from (\S+) base (\S+)\]',
                lambda m: [StatusEvent(_path(m.group(1)), Status.MERGE, m.group(2))],
            ),
            echo(r"^\s*$"),
            echo(r"^\*+$"),
            echo(r"^[<>]{3} (?:file|directory) \d+: "),
            echo(r"^-+\["),
            echo(r"^Trivial merge: "),
            echo(r"^Moved contributor "),
            echo(r"^Output of merge is in "),
            echo(r"^Recorded merge of "),
            echo(r'^Checked out ".+" from version '),
            echo(r"^(?:A 'findmerge' log|Log) has been written to "),
        )


def view_relative(view_root: Path, cwd: Path) -> Callable[[str], Path]:
    """Map view-rooted paths printed by the tool to paths relative to ``cwd``."""

    def relative(text: str) -> Path:
        full = view_root / normalize_path(text)
        return normalize_path(os.path.relpath(full, cwd))

    return relative


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

_LOADING_NOISE = (suppress(r"^Loading "), suppress(r"^Making dir "))


class CheckinTranslator(OutputTranslator):
    name = "checkin"

    def build_rules(self) -> Sequence[Rule]:
        return (
            *_LOADING_NOISE,
            emit(
                r'^Checked in "(.+)" version "(\S+)"\.',
                lambda m: [StatusEvent(_path(m.group(1)), Status.COMMIT, m.group(2))],
            ),
        )


class CheckoutTranslator(OutputTranslator):
    """Re-checking-out an element is reported as ``CO [already]``."""

    name = "checkout"

    def build_rules(self) -> Sequence[Rule]:
        return (
            *_LOADING_NOISE,
            emit(
                r'^Checked out "(.+)" from version "(\S+)"\.',
                lambda m: [StatusEvent(_path(m.group(1)), Status.CO, m.group(2))],
            ),
            emit(
                r'^(?:cleartool: Error: )?Element "(.+)" is already checked out',
                lambda m: [StatusEvent(_path(m.group(1)), Status.CO, "already")],
            ),
        )


class UncheckoutTranslator(OutputTranslator):
    name = "uncheckout"

    def build_rules(self) -> Sequence[Rule]:
        return (
            *_LOADING_NOISE,
            emit(r'^Checkout cancelled for "(.+)"\.', lambda m: [StatusEvent(_path(m.group(1)), Status.UNCO)]),
            emit(r'^Private version .* saved in "(.+)"\.', lambda m: [StatusEvent(_path(m.group(1)), Status.KEPT)]),
        )


class RemoveTranslator(OutputTranslator):
    name = "rmname"

    def build_rules(self) -> Sequence[Rule]:
        return (
            suppress(r"^Unloaded "),
            emit(r'^Removed "(.+)"\.', lambda m: [StatusEvent(_path(m.group(1)), Status.REMOVED)]),
        )


class AddTranslator(OutputTranslator):
    name = "mkelem"

    def build_rules(self) -> Sequence[Rule]:
        return (
            suppress(r"^Created element "),
            emit(
                r'^Checked out "(.+)" from version "(\S+)"\.',
                lambda m: [StatusEvent(_path(m.group(1)), Status.ADDED, m.group(2))],
            ),
        )


class MoveTranslator(OutputTranslator):
    """A move is reported as the removal of the source then the addition of the destination."""

    name = "move"

    def build_rules(self) -> Sequence[Rule]:
        return (
            emit(
                r'^Moved "(.+)" to "(.+)"\.',
                lambda m: [
                    StatusEvent(_path(m.group(1)), Status.REMOVED),
                    StatusEvent(_path(m.group(2)), Status.ADDED),
                ],
            ),
        )
