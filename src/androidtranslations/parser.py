from datetime import datetime, timezone
import logging
import os
import pathlib

from lxml import etree

from androidtranslations import index, locator, report
from androidtranslations.classes import (
    DEFAULT_LOCALE,
    AuditConfig,
    DiscrepancyRecord,
    Entry,
    ParsedCatalog,
)
from androidtranslations.errors import (
    CatalogIOError,
    NotFoundError,
    ParseError,
    ProvenanceError,
)
from androidtranslations.provenance import ProvenanceResolver
from androidtranslations.vcs import VersionControl

logger = logging.getLogger(__name__)


def locale_for_path(path: str) -> str:
    parent = os.path.basename(os.path.dirname(path))
    if parent.lower() == "values":
        return DEFAULT_LOCALE

    # values-zh-rCN is locale zh-rCN, only the first hyphen separates
    split = parent.split("-", 1)
    if len(split) < 2:
        return DEFAULT_LOCALE
    return split[1]


def is_translatable(element) -> bool:
    return element.get("translatable", "").lower() != "false"


def _chardata(element) -> str:
    # the element's own text, not that of nested markup like <xliff:g>
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _resolve(
    path: str,
    text: str,
    raw: str,
    resolver: ProvenanceResolver | None,
    fallback: datetime,
) -> datetime | None:
    if resolver is None:
        return None
    try:
        return resolver.resolve_timestamp(path, text, raw)
    except (NotFoundError, ProvenanceError) as ex:
        logger.warning(f"{path}: {ex}")
        return fallback


def parse_catalog(
    path: str,
    content: bytes,
    resolver: ProvenanceResolver | None = None,
    fallback: datetime | None = None,
) -> ParsedCatalog:
    """Parse one ``<resources>`` catalog.

    Entries whose provenance cannot be resolved get ``fallback``, which
    defaults to the current time. Callers parsing several catalogs should pass
    the same value to all of them so unresolved entries compare equal.
    """
    if fallback is None:
        fallback = datetime.now(timezone.utc)

    # external entities would leak local files into the published report
    xml_parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content, xml_parser)
    except (etree.XMLSyntaxError, ValueError) as ex:
        raise ParseError(f"unable to parse XML file at {path}: {ex}") from ex

    if root.tag != "resources":
        raise ParseError(
            f"unable to parse XML file at {path}: expected <resources>, got <{root.tag}>"
        )

    text = content.decode("utf-8", errors="replace")
    strings = [child for child in root if child.tag == "string"]
    string_arrays = [child for child in root if child.tag == "string-array"]

    entries = []
    for element in strings:
        if not is_translatable(element):
            continue

        raw = _chardata(element)
        entries.append(
            Entry(
                name=element.get("name", ""),
                value=raw.strip(),
                raw_value=raw,
                last_modified=_resolve(path, text, raw, resolver, fallback),
            )
        )

    for array in string_arrays:
        if not is_translatable(array):
            continue

        items = [child for child in array if child.tag == "item"]
        for i, item in enumerate(items):
            raw = _chardata(item)
            entries.append(
                Entry(
                    name=f"{array.get('name', '')}[{i}]",
                    value=raw.strip(),
                    raw_value=raw,
                    last_modified=_resolve(path, text, raw, resolver, fallback),
                )
            )

    return ParsedCatalog(
        path=path,
        locale=locale_for_path(path),
        entries=entries,
        resource_count=len(strings) + len(string_arrays),
    )


def read_catalog(path: str) -> bytes:
    try:
        return pathlib.Path(path).read_bytes()
    except OSError as ex:
        raise CatalogIOError(f"unable to read file at {path}: {ex}") from ex


def run(config: AuditConfig, vcs: VersionControl) -> list[DiscrepancyRecord]:
    logger.info(f"Scanning {config.root_path} for string resources...")
    catalog_paths = locator.locate(config.root_path, vcs)

    resolver = ProvenanceResolver(vcs) if config.include_outdated_check else None
    # one fallback per run, an unresolved string never looks newer than another
    fallback = datetime.now(timezone.utc)
    catalogs = []
    for path in catalog_paths:
        logger.debug(f"Parsing {path}")
        catalogs.append(parse_catalog(path, read_catalog(path), resolver, fallback))

    locale_index = index.build_index(catalogs)
    logger.info(f"Available locales: {len(locale_index)}")

    records = report.compute_discrepancies(locale_index, config)
    if records:
        logger.info(f"Found {len(records)} strings with issues")
    else:
        logger.info("No issues found")
    return records
