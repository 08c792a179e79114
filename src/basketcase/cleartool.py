"""Subprocess boundary to the cleartool executable.

Output is consumed line by line while the process runs; nothing is
reordered or buffered beyond a single line. stderr is merged into stdout
so error messages reach the translators in order.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterator

from basketcase.config import Settings
from basketcase.errors import ExternalToolFailure
from basketcase.paths import normalize_path

logger = logging.getLogger(__name__)

NULL_LOG = "NUL" if os.name == "nt" else "/dev/null"


class Cleartool:
    """Runs cleartool verbs for one basketcase invocation."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._view_root: Path | None = None

    def argv(self, verb: str, *args: str) -> list[str]:
        return [self.settings.executable, verb, *args]

    def run(self, verb: str, *args: str) -> Iterator[str]:
        """Yield output lines of ``cleartool <verb> <args>`` as they arrive.

        Raises:
            ExternalToolFailure: If the process cannot be started, is killed,
                or exits with a non-zero status. Callers that translate the
                output decide whether a non-zero status is a failure.
        """
        argv = self.argv(verb, *args)
        logger.debug("RUNNING: %s", " ".join(argv))
        try:
            process = subprocess.Popen(
                argv,
                cwd=str(self.settings.cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise ExternalToolFailure(argv, reason=exc.strerror or str(exc)) from exc

        try:
            assert process.stdout is not None
            for raw in process.stdout:
                line = raw.replace("\r", "").rstrip("\n")
                logger.debug("<<< %s", line)
                yield line
            returncode = process.wait()
        except BaseException:
            process.kill()
            process.wait()
            raise
        finally:
            if process.stdout is not None:
                process.stdout.close()
        if returncode != 0:
            raise ExternalToolFailure(argv, returncode)

    def run_unsafe(self, verb: str, *args: str) -> Iterator[str]:
        """Like :meth:`run` for mutating verbs; a no-op in test mode."""
        if self.settings.test_mode:
            logger.debug("WOULD RUN: %s", " ".join(self.argv(verb, *args)))
            return iter(())
        return self.run(verb, *args)

    def view_root(self) -> Path:
        """Root of the current view, queried once via ``pwv -root``."""
        if self._view_root is None:
            lines = [line for line in self.run("pwv", "-root") if line.strip()]
            if not lines:
                raise ExternalToolFailure(self.argv("pwv", "-root"), reason="no view root reported")
            self._view_root = normalize_path(lines[0].strip())
            logger.debug("view_root = %s", self._view_root)
        return self._view_root
