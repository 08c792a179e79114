"""Tests for status events and the printed row format."""

from __future__ import annotations

from pathlib import Path

import pytest

from basketcase.models import Status, StatusEvent, parse_status_row, render_status_row


class TestStatusEvent:
    def test_versioned_event(self):
        event = StatusEvent(Path("src/foo.c"), Status.HIJACK, "/main/3")
        assert event.version == "/main/3"
        assert str(event) == "src/foo.c (HIJACK) [/main/3]"

    def test_status_coerced_from_string(self):
        event = StatusEvent(Path("a.txt"), "CO", "new")
        assert event.status is Status.CO

    @pytest.mark.parametrize("status", [Status.LOCAL, Status.REMOVED, Status.UNCO, Status.KEPT])
    def test_local_statuses_reject_version(self, status):
        with pytest.raises(ValueError):
            StatusEvent(Path("a.txt"), status, "/main/1")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            StatusEvent(Path("a.txt"), "BOGUS")

    def test_events_are_immutable(self):
        event = StatusEvent(Path("a.txt"), Status.LOCAL)
        with pytest.raises(AttributeError):
            event.status = Status.OK  # type: ignore[misc]


class TestStatusRow:
    def test_fixed_width_layout(self):
        row = render_status_row(StatusEvent(Path("a.txt"), Status.LOCAL))
        assert row == "LOCAL" + " " * 3 + " " * 15 + " a.txt"

    def test_versioned_row(self):
        row = render_status_row(StatusEvent(Path("dir/b.c"), Status.CO, "/main/4"))
        assert row.startswith("CO      /main/4 ")
        assert row.endswith(" dir/b.c")

    @pytest.mark.parametrize(
        "event",
        [
            StatusEvent(Path("a.txt"), Status.LOCAL),
            StatusEvent(Path("dir/b.c"), Status.HIJACK, "3"),
            StatusEvent(Path("deep/path/c.h"), Status.COMMIT, "/main/branch/LATEST/17"),
            StatusEvent(Path("with space.txt"), Status.UPDATED),
        ],
    )
    def test_rendered_row_parses_back(self, event):
        assert parse_status_row(render_status_row(event)) == event

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_status_row("garbage")
