import json
import os
import shutil
import subprocess

import pytest
from click.testing import CliRunner

from androidtranslations import cli, parser
from androidtranslations.classes import AuditConfig
from androidtranslations.errors import ConfigError
from androidtranslations.vcs import GitVersionControl

APP_NAME = '    <string name="app_name">Demo</string>\n'
COLORS = '    <string-array name="colors">\n        <item>Red</item>\n        <item>Green</item>\n    </string-array>\n'


@pytest.fixture
def config_folder(tmp_path):
    folder = tmp_path / "config"
    folder.mkdir()
    (folder / "config.yml").write_text(
        "logging:\n  level: DEBUG\n  format: '%(message)s'\n  datefmt: '%H:%M:%S'\ngit:\n  timeout: 5\n"
    )
    return str(folder)


def invoke(*args):
    return CliRunner().invoke(cli.cli, ["check", *args])


def test_check_reports_missing_translations_as_json(write_catalog, tmp_path, config_folder):
    write_catalog("project/res/values/strings.xml", APP_NAME + COLORS)
    write_catalog(
        "project/res/values-de/strings.xml",
        '    <string name="app_name">Demo</string>\n'
        '    <string-array name="colors">\n        <item>Rot</item>\n    </string-array>\n',
    )
    write_catalog("project/res/values-fr/strings.xml", COLORS)

    result = invoke(
        "--config-folder", config_folder,
        "--project-dir", str(tmp_path / "project"),
        "--no-outdated-locales",
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {"name": "app_name", "value": "Demo", "missing_locales": ["fr"], "outdated_locales": []},
        {"name": "colors[1]", "value": "Green", "missing_locales": ["de"], "outdated_locales": []},
    ]


def test_check_markdown_when_nothing_missing(write_catalog, tmp_path, config_folder):
    write_catalog("project/res/values/strings.xml", APP_NAME)
    write_catalog("project/res/values-fr/strings.xml", APP_NAME)

    result = invoke(
        "--config-folder", config_folder,
        "--project-dir", str(tmp_path / "project"),
        "--no-outdated-locales",
        "--output-format", "markdown",
        "--markdown-title", "My App",
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("# My App\n\nNo missing translations found.\n")


def test_check_without_default_locale_fails(write_catalog, tmp_path, config_folder):
    write_catalog("project/res/values-fr/strings.xml", APP_NAME)

    result = invoke("--config-folder", config_folder, "--project-dir", str(tmp_path / "project"))

    assert result.exit_code == 1


def test_check_with_malformed_catalog_fails(tmp_path, config_folder):
    values = tmp_path / "project" / "values"
    values.mkdir(parents=True)
    (values / "strings.xml").write_text("<resources><string>")

    result = invoke("--config-folder", config_folder, "--project-dir", str(tmp_path / "project"))

    assert result.exit_code == 1


def test_check_rejects_unknown_output_format(config_folder):
    result = invoke("--config-folder", config_folder, "--output-format", "yaml")

    assert result.exit_code == 2


def test_load_config_falls_back_to_defaults(tmp_path):
    config = cli.load_config(str(tmp_path / "nowhere"))

    assert config == cli.DEFAULT_CONFIG


def test_load_config_merges_sections(config_folder):
    config = cli.load_config(config_folder)

    assert config["logging"]["level"] == "DEBUG"
    assert config["git"]["timeout"] == 5


def git(cwd, *args, date="2024-01-01T00:00:00+00:00"):
    env = dict(os.environ, GIT_AUTHOR_DATE=date, GIT_COMMITTER_DATE=date)
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        env=env,
        check=True,
        capture_output=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_outdated_translation_in_git_repository(write_catalog, tmp_path):
    write_catalog("res/values/strings.xml", APP_NAME)
    write_catalog("res/values-fr/strings.xml", '    <string name="app_name">Démo</string>\n')
    write_catalog("build/values-it/strings.xml", '    <string name="other">x</string>\n')
    (tmp_path / ".gitignore").write_text("build/\n")
    git(tmp_path, "init", "-q")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "initial", date="2024-01-01T00:00:00+00:00")

    write_catalog("res/values/strings.xml", '    <string name="app_name">Demo App</string>\n')
    git(tmp_path, "commit", "-q", "-am", "rename", date="2024-02-01T00:00:00+00:00")

    records = parser.run(AuditConfig(root_path=str(tmp_path)), GitVersionControl())

    assert [record.as_dict() for record in records] == [
        {"name": "app_name", "value": "Demo App", "missing_locales": [], "outdated_locales": ["fr"]}
    ]


@pytest.mark.parametrize("content", ["- just\n- a list\n", "plain scalar\n", "logging: INFO\n"])
def test_load_config_rejects_non_mapping(tmp_path, content):
    (tmp_path / "config.yml").write_text(content)

    with pytest.raises(ConfigError):
        cli.load_config(str(tmp_path))


def test_check_with_non_mapping_config_fails(tmp_path):
    folder = tmp_path / "config"
    folder.mkdir()
    (folder / "config.yml").write_text("- logging\n")

    result = invoke("--config-folder", str(folder), "--project-dir", str(tmp_path))

    assert result.exit_code == 1
