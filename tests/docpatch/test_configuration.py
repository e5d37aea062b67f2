from pathlib import Path

import pytest

from docpatch.configuration import (
    DEFAULT_FILES,
    ArchiveFlagConfig,
    Configuration,
    RuleConfig,
    load_properties,
    parse_assignments,
)
from docpatch.project import Project
from docpatch.versions import BranchPolicy, MissingVersionError


def test__load_properties__reads_gradle_properties(tmp_path: Path):
    path = tmp_path / "gradle.properties"
    path.write_text(
        "# versions used in the docs\n"
        "kotlinVersion=1.6.0\n"
        "\n"
        "! another comment\n"
        "  kspVersion = 1.6.0-1.0.1  \n"
        "komapperVersion: 0.19.0\n"
        "org.gradle.jvmargs=-Xmx2g -Dfile.encoding=UTF-8\n"
        "garbage\n"
    )

    assert load_properties(path) == {
        "kotlinVersion": "1.6.0",
        "kspVersion": "1.6.0-1.0.1",
        "komapperVersion": "0.19.0",
        "org.gradle.jvmargs": "-Xmx2g -Dfile.encoding=UTF-8",
    }


def test__load_properties__skips_entries_outside_the_supported_subset(tmp_path: Path):
    path = tmp_path / "gradle.properties"
    path.write_text("kotlinVersion 1.6.0\nkspVersion=1.6.0-\\\n    1.0.1\n")

    assert load_properties(path) == {"kspVersion": "1.6.0-\\"}


def test__load_properties__missing_file_is_empty(tmp_path: Path):
    assert load_properties(tmp_path / "gradle.properties") == {}


def test__parse_assignments():
    assert parse_assignments(["kotlinVersion=1.6.0", " kspVersion = 1.6.0-1.0.1"]) == {
        "kotlinVersion": "1.6.0",
        "kspVersion": "1.6.0-1.0.1",
    }
    with pytest.raises(ValueError):
        parse_assignments(["kotlinVersion"])
    with pytest.raises(ValueError):
        parse_assignments(["=1.6.0"])


def test__Configuration__defaults_without_configuration_file(tmp_path: Path):
    config = Configuration(tmp_path).config()

    assert config.encoding is None
    assert config.content_directory == "content"
    assert config.config_file == "config.toml"
    assert config.branch_policy == BranchPolicy.SUFFIX
    assert [r.version for r in config.rules] == ["kotlinVersion", "kspVersion", "komapperVersion", "komapperVersion"]
    assert all(r.files == DEFAULT_FILES for r in config.rules)
    assert [f.key for f in config.archive_flags] == ["archived_version", "algolia_docsearch", "offlineSearch"]


def test__Configuration__reads_docpatch_toml_before_pyproject_toml(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[tool.docpatch]\ncontent-directory = "from-pyproject"\n')
    (tmp_path / "docpatch.toml").write_text(
        'content-directory = "site/content"\n'
        'branch-policy = "major-minor"\n'
        "\n"
        "[versions]\n"
        'kotlinVersion = "1.6.0"\n'
        "\n"
        "[[rules]]\n"
        'version = "kotlinVersion"\n'
        "prefix = 'kotlin\\(\"jvm\"\\) version \"'\n"
        'files = ["en/_index.md"]\n'
        "\n"
        "[[archive-flags]]\n"
        'key = "archived_version"\n'
        'from = "false"\n'
        'to = "true"\n'
    )

    config = Configuration(tmp_path).config()

    assert config.content_directory == "site/content"
    assert config.branch_policy == BranchPolicy.MAJOR_MINOR
    assert config.versions == {"kotlinVersion": "1.6.0"}
    assert config.rules == [RuleConfig("kotlinVersion", 'kotlin\\("jvm"\\) version "', ["en/_index.md"], '"')]
    assert config.archive_flags == [ArchiveFlagConfig("archived_version", "false", "true")]


def test__Configuration__reads_tool_section_of_pyproject_toml(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "docs"\n\n[tool.docpatch]\nencoding = "ISO-8859-1"\n')

    assert Configuration(tmp_path).config().encoding == "ISO-8859-1"


def test__Project__version_set_precedence(tmp_path: Path):
    (tmp_path / "gradle.properties").write_text("kotlinVersion=1.5.31\nkspVersion=1.5.31-1.0.0\nkomapperVersion=0.18.0\n")
    (tmp_path / "docpatch.toml").write_text('[versions]\nkspVersion = "1.6.0-1.0.1"\nkomapperVersion = "0.19.0"\n')
    project = Project(tmp_path)

    versions = project.versions({"komapperVersion": "1.0.0-RC1"})

    assert dict(versions) == {"kotlinVersion": "1.5.31", "kspVersion": "1.6.0-1.0.1", "komapperVersion": "1.0.0-RC1"}
    assert project.branch_name(versions) == "v1.0-RC1"
    assert project.branch_name(versions, BranchPolicy.MAJOR_MINOR) == "v1.0"


def test__Project__encoding_falls_back_to_build_property(tmp_path: Path):
    assert Project(tmp_path).encoding() == "UTF-8"

    (tmp_path / "gradle.properties").write_text("encoding=UTF-16\n")
    assert Project(tmp_path).encoding() == "UTF-16"

    (tmp_path / "docpatch.toml").write_text('encoding = "ISO-8859-1"\n')
    assert Project(tmp_path).encoding() == "ISO-8859-1"


def test__Project__version_rules_cover_every_file_of_every_rule(tmp_path: Path):
    project = Project(tmp_path)
    versions = project.versions({"kotlinVersion": "1.6.0", "kspVersion": "1.6.0-1.0.1", "komapperVersion": "0.19.0"})

    rules = project.version_rules(versions)

    assert len(rules) == 4 * len(DEFAULT_FILES)
    assert rules[0].file == tmp_path / "content" / DEFAULT_FILES[0]
    assert rules[0].replacement == r"\g<1>1.6.0\g<2>"
    assert {r.encoding for r in rules} == {"UTF-8"}


def test__Project__version_rules_fail_on_missing_version(tmp_path: Path):
    project = Project(tmp_path)

    with pytest.raises(MissingVersionError):
        project.version_rules(project.versions({"kotlinVersion": "1.6.0"}))


def test__Project__stamp_and_archive_rules_target_config_file(tmp_path: Path):
    project = Project(tmp_path)
    versions = project.versions({"komapperVersion": "0.19.0"})

    stamp_rules = project.stamp_rules(versions)
    archive_rules = project.archive_rules()

    assert {r.file for r in stamp_rules + archive_rules} == {tmp_path / "config.toml"}
    assert [r.replacement for r in stamp_rules] == [r"\g<1>0.19.0\g<2>", r"\g<1>v0.19\g<2>"]
    assert [r.replacement for r in archive_rules] == [
        "archived_version = true",
        "algolia_docsearch = false",
        "offlineSearch = true",
    ]
