"""Run configuration shared by every command of one invocation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from basketcase.ignore import IgnoreMatcher, build_ignore_matcher

DEFAULT_EXECUTABLE = "cleartool"
EXECUTABLE_ENV = "BASKETCASE_CLEARTOOL"


@dataclass(frozen=True)
class Settings:
    """Created once at start-up and read-only afterwards."""

    cwd: Path
    test_mode: bool = False
    debug_mode: bool = False
    ignore: IgnoreMatcher = field(default_factory=IgnoreMatcher)
    executable: str = DEFAULT_EXECUTABLE
    editor: str | None = None


def load_settings(
    *,
    test_mode: bool = False,
    debug_mode: bool = False,
    cwd: Path | None = None,
    load_project_ignores: bool = True,
) -> Settings:
    """Build the settings for a run from flags, environment and ``.bcignore`` files."""
    base = (cwd or Path.cwd()).absolute()
    executable = os.environ.get(EXECUTABLE_ENV, "").strip() or DEFAULT_EXECUTABLE
    editor = (os.environ.get("VISUAL") or os.environ.get("EDITOR") or "").strip() or None
    return Settings(
        cwd=base,
        test_mode=test_mode,
        debug_mode=debug_mode,
        ignore=build_ignore_matcher(base, load_project=load_project_ignores),
        executable=executable,
        editor=editor,
    )
