from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping, Sequence, Union

import pytest

from basketcase.cleartool import Cleartool
from basketcase.commands import Command
from basketcase.config import Settings
from basketcase.errors import ExternalToolFailure
from basketcase.ignore import build_ignore_matcher
from basketcase.registry import DEFAULT_REGISTRY
from basketcase.reporting import CollectingReporter

Transcript = Union[Sequence[str], Callable[[list[str]], Iterable[str]]]


class FakeCleartool(Cleartool):
    """Replays canned output per verb and records every invocation.

    ``exit_codes`` maps a verb to the status it exits with once its
    output has been consumed.
    """

    def __init__(
        self,
        settings: Settings,
        transcripts: Mapping[str, Transcript] | None = None,
        exit_codes: Mapping[str, int] | None = None,
    ):
        super().__init__(settings)
        self.transcripts: dict[str, Transcript] = dict(transcripts or {})
        self.exit_codes: dict[str, int] = dict(exit_codes or {})
        self.calls: list[list[str]] = []

    def run(self, verb: str, *args: str) -> Iterator[str]:
        self.calls.append([verb, *args])
        output = self.transcripts.get(verb, [])
        if callable(output):
            output = output(list(args))
        return self._replay(list(output), self.argv(verb, *args), self.exit_codes.get(verb, 0))

    @staticmethod
    def _replay(lines: list[str], argv: list[str], returncode: int) -> Iterator[str]:
        yield from lines
        if returncode:
            raise ExternalToolFailure(argv, returncode)

    def verbs(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_settings(cwd: Path, *, test_mode: bool = False) -> Settings:
    return Settings(
        cwd=cwd,
        test_mode=test_mode,
        ignore=build_ignore_matcher(cwd, load_project=False),
    )


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture()
def dry_settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path, test_mode=True)


@pytest.fixture()
def run_command():
    """Build, configure and execute a command against a fake cleartool.

    Returns ``(command, reporter, tool)``.
    """

    def _run(
        settings: Settings,
        name: str,
        args: Sequence[str] = (),
        transcripts: Mapping[str, Transcript] | None = None,
        exit_codes: Mapping[str, int] | None = None,
    ) -> tuple[Command, CollectingReporter, FakeCleartool]:
        tool = FakeCleartool(settings, transcripts, exit_codes)
        reporter = CollectingReporter()
        command = DEFAULT_REGISTRY.create(name, settings, cleartool=tool, reporter=reporter)
        command.accept_args(list(args))
        command.execute()
        return command, reporter, tool

    return _run


@pytest.fixture()
def fake_tool():
    return FakeCleartool
