import logging
import os
import pathlib

from androidtranslations.errors import CatalogIOError
from androidtranslations.vcs import VersionControl

logger = logging.getLogger(__name__)

# Recognised by the Android Developer Tools as the home of non-translatable strings
DO_NOT_TRANSLATE_FILENAME = "donottranslate.xml"
VALUES_PREFIX = "values"


def is_catalog_file(path: str) -> bool:
    if os.path.basename(path) == DO_NOT_TRANSLATE_FILENAME:
        return False

    parent = os.path.basename(os.path.dirname(path))
    extension = os.path.splitext(path)[1]
    return parent.startswith(VALUES_PREFIX) and extension.lower() == ".xml"


def _walk(path: str, vcs: VersionControl) -> list[str]:
    try:
        children = sorted(os.scandir(path), key=lambda child: child.name)
    except OSError as ex:
        raise CatalogIOError(f"unable to read directory {path}: {ex}") from ex

    found = []
    for child in children:
        if vcs.is_ignored(path, child.path):
            logger.debug(f"Skipping ignored {child.path}")
            continue

        # symlinked directories are not followed
        if child.is_dir(follow_symlinks=False):
            found.extend(_walk(child.path, vcs))
        elif is_catalog_file(child.path):
            found.append(child.path)
    return found


def locate(root_path: str, vcs: VersionControl) -> list[str]:
    # by path component, so values/ comes before values-fr/
    catalogs = sorted(_walk(root_path, vcs), key=lambda p: pathlib.PurePath(p).parts)
    logger.info(f"Found {len(catalogs)} catalog files under {root_path}")
    return catalogs
