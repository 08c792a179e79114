"""Status events reported for version-controlled elements.

Defines the closed ``Status`` code set, the immutable ``StatusEvent``
value and the fixed-width row format used to print events.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Status(StrEnum):
    """Element status codes."""

    LOCAL = "LOCAL"  # on disk, not tracked
    OK = "OK"
    CO = "CO"
    HIJACK = "HIJACK"
    MISSING = "MISSING"
    NEW = "NEW"
    UPDATED = "UPDATED"
    REMOVED = "REMOVED"
    MERGE = "MERGE"
    COMMIT = "COMMIT"
    ADDED = "ADDED"
    UNCO = "UNCO"
    KEPT = "KEPT"


# Purely local or structural statuses never carry a version label.
UNVERSIONED_STATUSES = frozenset({Status.LOCAL, Status.REMOVED, Status.UNCO, Status.KEPT})

STATUS_WIDTH = 7
VERSION_WIDTH = 15


@dataclass(frozen=True)
class StatusEvent:
    """One reported element: path, status code and optional version."""

    path: Path
    status: Status
    version: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.status, Status):
            object.__setattr__(self, "status", Status(self.status))
        if self.version is not None and self.status in UNVERSIONED_STATUSES:
            raise ValueError(f"{self.status} events carry no version (got {self.version!r})")

    def __str__(self) -> str:
        s = f"{self.path} ({self.status})"
        if self.version:
            s += f" [{self.version}]"
        return s


def render_status_row(event: StatusEvent) -> str:
    """Format an event as a ``status version path`` row."""
    return f"{event.status:<{STATUS_WIDTH}} {event.version or '':<{VERSION_WIDTH}} {event.path}"


def parse_status_row(line: str) -> StatusEvent:
    """Recover a StatusEvent from a row produced by :func:`render_status_row`.

    Raises:
        ValueError: If the line is not a status row.
    """
    line = line.rstrip("\r\n")
    head, sep, rest = line.partition(" ")
    if not sep:
        raise ValueError(f"Not a status row: {line!r}")
    status = Status(head.strip())
    rest = line[STATUS_WIDTH + 1 :]
    blank_version = " " * (VERSION_WIDTH + 1)
    if rest.startswith(blank_version):
        version = None
        path = rest[len(blank_version) :]
    else:
        fields = rest.split(None, 1)
        if len(fields) != 2:
            raise ValueError(f"Not a status row: {line!r}")
        version, path = fields
    if not path:
        raise ValueError(f"Status row has no path: {line!r}")
    return StatusEvent(Path(path), status, version)
