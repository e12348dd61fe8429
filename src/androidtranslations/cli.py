import logging
import os
import sys
from typing import Any

import yaml

import click
from androidtranslations import parser, report
from androidtranslations.classes import DEFAULT_LOCALE, AuditConfig
from androidtranslations.errors import AuditError, ConfigError
from androidtranslations.vcs import DEFAULT_TIMEOUT, GitVersionControl

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "git": {"timeout": DEFAULT_TIMEOUT},
}


def load_config(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.join(os.path.abspath(config_folder), "config.yml")

    loaded: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"{config_file_path} not found, using defaults.")

    if not isinstance(loaded, dict):
        raise ConfigError(f"{config_file_path} must be a mapping of sections")

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in loaded.items():
        if values is not None and not isinstance(values, dict):
            raise ConfigError(
                f'{config_file_path}: section "{section}" must be a mapping'
            )
        config.setdefault(section, {}).update(values or {})
    return config


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("check")
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option("--project-dir", default=".", help="Android project's root directory.")
@click.option(
    "--outdated-locales/--no-outdated-locales",
    default=True,
    help="Find potentially outdated translations.",
)
@click.option(
    "--output-format",
    type=click.Choice(["json", "markdown"]),
    default="json",
    help="Output format.",
)
@click.option(
    "--markdown-title",
    default="Android Translations",
    help="Title for the Markdown content.",
)
@click.option(
    "--canonical-locale",
    default=DEFAULT_LOCALE,
    help="Locale the other locales are compared against.",
)
@click.option(
    "--github-actions",
    is_flag=True,
    help="Also set the report as a GitHub Actions step output.",
)
def check(
    config_folder: str,
    project_dir: str,
    outdated_locales: bool,
    output_format: str,
    markdown_title: str,
    canonical_locale: str,
    github_actions: bool,
) -> None:
    try:
        config = load_config(config_folder)
    except (yaml.YAMLError, ConfigError) as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )

    audit_config = AuditConfig(
        root_path=os.path.abspath(project_dir),
        include_outdated_check=outdated_locales,
        canonical_locale_name=canonical_locale,
    )
    vcs = GitVersionControl(timeout=config["git"]["timeout"])

    try:
        records = parser.run(audit_config, vcs)
    except (AuditError, OSError) as exc:
        logger.error(f"error: {exc}")
        sys.exit(1)

    if output_format == "markdown":
        output = report.render_markdown(markdown_title, records, outdated_locales)
    else:
        output = report.render_json(records)

    if github_actions:
        report.set_github_actions_output("report", output)

    click.echo(output)
