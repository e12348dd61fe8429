import json
import logging
import os
import uuid

from androidtranslations.classes import AuditConfig, DiscrepancyRecord, LocaleIndex
from androidtranslations.errors import ConfigError

logger = logging.getLogger(__name__)

MARKDOWN_FOOTER = (
    "_Generated using [Android Translations][1] GitHub action._\n"
    "\n"
    "[1]: https://github.com/ashutoshgngwr/android-translations\n"
)


def compute_discrepancies(
    locale_index: LocaleIndex, config: AuditConfig
) -> list[DiscrepancyRecord]:
    canonical = config.canonical_locale_name
    if canonical not in locale_index:
        raise ConfigError(
            f'unable to find string resources for the "{canonical}" locale'
        )

    records = []
    for name, entry in locale_index[canonical].items():
        missing = []
        outdated = []
        for locale in sorted(locale_index):
            other = locale_index[locale].get(name)
            if other is None:
                missing.append(locale)
            elif (
                config.include_outdated_check
                and other.last_modified is not None
                and entry.last_modified is not None
                and other.last_modified < entry.last_modified
            ):
                outdated.append(locale)

        if missing or outdated:
            records.append(
                DiscrepancyRecord(name, entry.value, tuple(missing), tuple(outdated))
            )

    records.sort(key=lambda record: record.name)
    return records


def render_json(records: list[DiscrepancyRecord]) -> str:
    return json.dumps([record.as_dict() for record in records], indent=2)


def _cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def render_markdown(
    title: str, records: list[DiscrepancyRecord], outdated_on: bool = True
) -> str:
    markdown = f"# {title}\n\n"
    if not records:
        if outdated_on:
            markdown += "No missing or outdated translations found.\n"
        else:
            markdown += "No missing translations found.\n"
        return markdown + MARKDOWN_FOOTER

    header = ["#", "Name", "Default Value", "Missing Locales"]
    if outdated_on:
        header.append("Potentially Outdated Locales")
    markdown += "| " + " | ".join(header) + " |\n"
    markdown += "|" + "|".join("---" for _ in header) + "|\n"

    for i, record in enumerate(records, start=1):
        row = [
            str(i),
            f"`{record.name}`",
            _cell(record.value),
            record.missing_locales_string(),
        ]
        if outdated_on:
            row.append(record.outdated_locales_string())
        markdown += "| " + " | ".join(row) + " |\n"

    return markdown + "\n" + MARKDOWN_FOOTER


def set_github_actions_output(key: str, value: str) -> None:
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(output_file, "a", encoding="utf-8") as file:
            file.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        logger.debug(f"Wrote {key} to {output_file}")
        return

    value = value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::set-output name={key}::{value}")
