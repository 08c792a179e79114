"""Transient files the user edits: check-in comments and auto-sync plans."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer

from basketcase.config import Settings

logger = logging.getLogger(__name__)

COMMENT_FILENAME = "basketcase-comment.tmp"


def edit_file(path: Path, settings: Settings) -> None:
    """Open ``path`` in the user's editor and wait for it to close."""
    logger.debug("editing %s", path)
    typer.edit(filename=str(path), editor=settings.editor)


@contextmanager
def comment_file(settings: Settings, comment: str | None) -> Iterator[Path]:
    """Yield a file holding the check-in comment, removed afterwards.

    A given ``comment`` is written directly; otherwise the editor is opened
    on an empty file.
    """
    path = settings.cwd / COMMENT_FILENAME
    try:
        if comment is not None:
            path.write_text(comment + "\n", encoding="utf-8")
        else:
            path.touch()
            edit_file(path, settings)
        yield path
    finally:
        path.unlink(missing_ok=True)
