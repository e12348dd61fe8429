import logging
import os
import subprocess
from datetime import datetime, timezone

from androidtranslations.errors import ProvenanceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class VersionControl:
    """What the audit needs to know from version control.

    ``is_ignored`` answers whether ``path`` is excluded from tracking, as seen
    from ``working_dir``. ``last_modified`` returns the most recent time any
    line in ``[line_start, line_start + line_count)`` of ``file_path`` changed.
    """

    def is_ignored(self, working_dir: str, path: str) -> bool:
        raise NotImplementedError

    def last_modified(
        self, file_path: str, line_start: int, line_count: int
    ) -> datetime:
        raise NotImplementedError


class GitVersionControl(VersionControl):
    def __init__(self, git: str = "git", timeout: float | None = DEFAULT_TIMEOUT):
        self.git = git
        self.timeout = timeout

    def is_ignored(self, working_dir: str, path: str) -> bool:
        rel_path = os.path.relpath(path, working_dir)
        try:
            result = subprocess.run(
                [self.git, "check-ignore", "--quiet", rel_path],
                cwd=working_dir,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as ex:
            logger.debug(f"git check-ignore failed for {path}: {ex}")
            return False
        return result.returncode == 0

    def last_modified(
        self, file_path: str, line_start: int, line_count: int
    ) -> datetime:
        where = f"file: {file_path!r}, start: {line_start}, count: {line_count}"
        try:
            result = subprocess.run(
                [
                    self.git,
                    "blame",
                    "-p",
                    "-L",
                    f"{line_start},+{line_count}",
                    "--",
                    os.path.basename(file_path),
                ],
                cwd=os.path.dirname(os.path.abspath(file_path)),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as ex:
            raise ProvenanceError(
                f"unable to find last modified time, {where}: {ex}"
            ) from ex

        if result.returncode != 0:
            raise ProvenanceError(
                f"unable to find last modified time, {where}: {result.stderr.strip()}"
            )
        return parse_committer_time(result.stdout, where)


def parse_committer_time(porcelain: str, where: str = "") -> datetime:
    # a multi-line range can touch several commits
    latest = None
    for line in porcelain.splitlines():
        if not line.startswith("committer-time "):
            continue
        raw = line.split(" ", 1)[1].strip()
        try:
            timestamp = int(raw)
        except ValueError as ex:
            raise ProvenanceError(
                f"unparseable committer-time {raw!r}, {where}"
            ) from ex
        if latest is None or timestamp > latest:
            latest = timestamp

    if latest is None:
        raise ProvenanceError(f"no committer-time in blame output, {where}")
    return datetime.fromtimestamp(latest, tz=timezone.utc)
