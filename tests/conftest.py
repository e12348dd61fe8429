from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from androidtranslations.errors import ProvenanceError
from androidtranslations.vcs import VersionControl

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeVersionControl(VersionControl):
    """In-memory stand-in for git.

    ``ignored`` holds path suffixes treated as ignored. ``times`` maps
    ``(basename, line)`` to a timestamp; unknown lines fall back to ``EPOCH``.
    """

    def __init__(self, ignored=(), times=None, fail=False):
        self.ignored = tuple(ignored)
        self.times = times or {}
        self.fail = fail
        self.blame_calls = []

    def is_ignored(self, working_dir, path):
        return any(Path(path).as_posix().endswith(suffix) for suffix in self.ignored)

    def last_modified(self, file_path, line_start, line_count):
        self.blame_calls.append((file_path, line_start, line_count))
        if self.fail:
            raise ProvenanceError("blame failed")
        name = Path(file_path).name
        return max(
            self.times.get((name, line), EPOCH)
            for line in range(line_start, line_start + line_count)
        )


def days(n):
    return EPOCH + timedelta(days=n)


@pytest.fixture
def fake_vcs():
    return FakeVersionControl()


@pytest.fixture
def write_catalog(tmp_path):
    def _write(relative, body):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            '<?xml version="1.0" encoding="utf-8"?>\n<resources>\n'
            + body
            + "</resources>\n",
            encoding="utf-8",
        )
        return path

    return _write
