"""Shared test fixtures."""

from pathlib import Path

import pytest

from csvloader.destination import Destination, create_destination


class RecordingDestination(Destination):
    """In-memory destination that records every apply() call."""

    def __init__(self, fail_with: Exception | None = None):
        self.applied: list[list] = []
        self.connected = False
        self.closed = False
        self._fail_with = fail_with

    def connect(self) -> None:
        self.connected = True

    def close(self) -> None:
        self.closed = True

    def apply(self, mutations) -> None:
        if self._fail_with is not None:
            raise self._fail_with
        self.applied.append(list(mutations))


@pytest.fixture
def recording_destination():
    return RecordingDestination()


@pytest.fixture
def sqlite_destination(tmp_path):
    """Provide a fresh, connected SQLite destination for each test."""
    db_path = tmp_path / "test.db"
    destination = create_destination(f"sqlite:///{db_path}")
    destination.connect()
    yield destination
    destination.close()


@pytest.fixture
def write_csv(tmp_path):
    """Write lines of text to a CSV file and return its path."""

    def _write(lines: list[str], name: str = "input.csv") -> Path:
        csv_file = tmp_path / name
        csv_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return csv_file

    return _write
