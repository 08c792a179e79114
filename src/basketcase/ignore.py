"""Ignore patterns for untracked files.

Patterns are anchored to absolute paths. A path is ignored when it
matches any pattern; the set only ever grows.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".bcignore"
REGEX_PREFIX = "re:"

STANDARD_IGNORE_PATTERNS: tuple[str, ...] = (
    "**/*.hijacked",
    "**/*.keep",
    "**/*.keep.[0-9]",
    "**/#*#",
    "**/*~",
    "**/basketcase-*.tmp",
    "**/*.o",
    "**/*.obj",
    "**/*.class",
    "**/*.pyc",
)


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a path glob into a compiled regular expression.

    ``*`` and ``?`` stay within one path component, ``**/`` spans any
    number of directories (including none) and dot-files are matched.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**/", i):
                parts.append("(?:.*/)?")
                i += 3
                continue
            if pattern.startswith("**", i) and i + 2 == n:
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 2 if pattern.startswith("[!", i) or pattern.startswith("[]", i) else i + 1)
            if end == -1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append("[" + body.replace("\\", "\\\\") + "]")
                i = end
        else:
            parts.append(re.escape(c))
        i += 1
    return re.compile("".join(parts) + r"\Z")


def _absolute(path: str | os.PathLike[str], base: Path) -> str:
    text = os.fspath(path).replace("\\", "/")
    return os.path.normpath(os.path.join(str(base), text)).replace("\\", "/")


class IgnoreMatcher:
    """Union of glob and regex patterns over absolute paths.

    Relative patterns and paths are resolved against ``base``.
    """

    def __init__(self, base: Path | None = None):
        self.base = Path(base) if base is not None else Path.cwd()
        self._patterns: dict[str, re.Pattern[str]] = {}

    def __len__(self) -> int:
        return len(self._patterns)

    @property
    def patterns(self) -> list[str]:
        return list(self._patterns)

    def add(self, pattern: str) -> None:
        """Add a glob; a trailing ``/`` ignores the directory and its contents."""
        if pattern.endswith("/"):
            self._add_glob(pattern.rstrip("/"))
            self._add_glob(pattern + "**/*")
        else:
            self._add_glob(pattern)

    def _add_glob(self, pattern: str) -> None:
        if not pattern:
            return
        absolute = pattern.replace("\\", "/")
        if not absolute.startswith("/"):
            absolute = self.base.as_posix().rstrip("/") + "/" + absolute
        logger.debug("ignore %s", absolute)
        self._patterns[absolute] = glob_to_regex(absolute)

    def add_regex(self, pattern: str) -> None:
        """Add a regular expression matched against the whole absolute path."""
        logger.debug("ignore /%s/", pattern)
        self._patterns[REGEX_PREFIX + pattern] = re.compile(f"(?:{pattern})\\Z")

    def ignored(self, path: str | os.PathLike[str]) -> bool:
        absolute = _absolute(path, self.base)
        return any(regex.match(absolute) for regex in self._patterns.values())


def load_project_ignore_patterns(matcher: IgnoreMatcher, start: Path) -> list[Path]:
    """Add patterns from ``.bcignore`` files in ``start`` and its ancestors.

    The filesystem root itself is not consulted. Returns the files read.
    """
    loaded: list[Path] = []
    directory = start.absolute()
    while directory.parent != directory:
        ignore_file = directory / IGNORE_FILENAME
        if ignore_file.is_file():
            for raw in ignore_file.read_text(encoding="utf-8", errors="replace").splitlines():
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith(REGEX_PREFIX):
                    matcher.add_regex(line[len(REGEX_PREFIX) :].strip())
                    continue
                relative = line.lstrip("/")
                trailing = "/" if line.endswith("/") and relative else ""
                matcher.add(directory.as_posix().rstrip("/") + "/" + relative.rstrip("/") + trailing)
            loaded.append(ignore_file)
        directory = directory.parent
    return loaded


def build_ignore_matcher(cwd: Path, *, load_project: bool = True) -> IgnoreMatcher:
    """Standard patterns plus any project ``.bcignore`` patterns."""
    matcher = IgnoreMatcher(cwd)
    for pattern in STANDARD_IGNORE_PATTERNS:
        matcher.add(pattern)
    if load_project:
        load_project_ignore_patterns(matcher, cwd)
    return matcher
