from dataclasses import dataclass
from datetime import datetime

DEFAULT_LOCALE = "default"


@dataclass
class Entry:
    name: str
    value: str
    raw_value: str
    last_modified: datetime | None = None
    translatable: bool = True


@dataclass
class ParsedCatalog:
    path: str
    locale: str
    entries: list[Entry]
    resource_count: int


@dataclass(frozen=True)
class DiscrepancyRecord:
    name: str
    value: str
    missing_locales: tuple[str, ...] = ()
    outdated_locales: tuple[str, ...] = ()

    def missing_locales_string(self) -> str:
        return ", ".join(self.missing_locales) or "-"

    def outdated_locales_string(self) -> str:
        return ", ".join(self.outdated_locales) or "-"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "missing_locales": list(self.missing_locales),
            "outdated_locales": list(self.outdated_locales),
        }


@dataclass
class AuditConfig:
    root_path: str
    include_outdated_check: bool = True
    canonical_locale_name: str = DEFAULT_LOCALE


LocaleIndex = dict[str, dict[str, Entry]]
