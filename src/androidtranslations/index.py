import logging

from androidtranslations.classes import LocaleIndex, ParsedCatalog

logger = logging.getLogger(__name__)


def build_index(catalogs: list[ParsedCatalog]) -> LocaleIndex:
    locale_index: LocaleIndex = {}
    sources: dict[tuple[str, str], str] = {}

    for catalog in catalogs:
        if catalog.locale not in locale_index and catalog.resource_count > 0:
            locale_index[catalog.locale] = {}

        for entry in catalog.entries:
            key = (catalog.locale, entry.name)
            # Last catalog wins. Duplicates are probably a mistake in the project,
            # but they are reported as-is rather than merged.
            if key in sources:
                logger.debug(
                    f'"{entry.name}" ({catalog.locale}) in {catalog.path} '
                    f"overrides the one in {sources[key]}"
                )
            sources[key] = catalog.path
            locale_index[catalog.locale][entry.name] = entry

    return locale_index
