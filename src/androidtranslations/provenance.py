from datetime import datetime

from androidtranslations.errors import NotFoundError
from androidtranslations.vcs import VersionControl


def get_line_range(content: str, search_term: str) -> tuple[int, int]:
    """Return ``(start, count)`` for the first occurrence of ``search_term``.

    ``start`` is the 1-based line the occurrence begins on and ``count`` the
    number of lines ``search_term`` itself spans.
    """
    index = content.find(search_term)
    if index == -1:
        raise NotFoundError(f"searchTerm: {search_term!r} is not found")

    start = 1 + content.count("\n", 0, index)
    count = 1 + search_term.count("\n")
    return start, count


class ProvenanceResolver:
    def __init__(self, vcs: VersionControl):
        self.vcs = vcs

    def resolve_timestamp(
        self, file_path: str, content: str, search_term: str
    ) -> datetime:
        start, count = get_line_range(content, search_term)
        return self.vcs.last_modified(file_path, start, count)
