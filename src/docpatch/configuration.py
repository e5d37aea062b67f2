from __future__ import annotations

import dataclasses
import logging
import typing as t
from pathlib import Path

from databind.core.settings import Alias, ExtraKeys

from docpatch.util.toml_file import TomlFile
from docpatch.versions import BranchPolicy

logger = logging.getLogger(__name__)

#: The documentation pages that contain build script snippets with version numbers.
DEFAULT_FILES = [
    "en/docs/Quickstart/_index.md",
    "ja/docs/Quickstart/_index.md",
    "en/docs/Reference/gradle-plugin.md",
    "ja/docs/Reference/gradle-plugin.md",
    "en/docs/Reference/annotation-processing.md",
    "ja/docs/Reference/annotation-processing.md",
]


@dataclasses.dataclass
class RuleConfig:
    #: The name of the version in the version set that is written between *prefix* and *suffix*.
    version: str

    #: A regular expression matching the text right before the version number.
    prefix: str

    #: The files to patch, relative to the content directory.
    files: list[str] = dataclasses.field(default_factory=lambda: list(DEFAULT_FILES))

    #: A regular expression matching the text right after the version number.
    suffix: str = '"'


@dataclasses.dataclass
class ArchiveFlagConfig:
    key: str
    from_: t.Annotated[str, Alias("from")]
    to: str


def get_default_rules() -> list[RuleConfig]:
    return [
        RuleConfig("kotlinVersion", r'kotlin\("jvm"\) version "'),
        RuleConfig("kspVersion", r'id\("com.google.devtools.ksp"\) version "'),
        RuleConfig("komapperVersion", r'val komapperVersion = "'),
        RuleConfig("komapperVersion", r'id\("org.komapper.gradle"\) version "'),
    ]


def get_default_archive_flags() -> list[ArchiveFlagConfig]:
    return [
        ArchiveFlagConfig("archived_version", "false", "true"),
        ArchiveFlagConfig("algolia_docsearch", "true", "false"),
        ArchiveFlagConfig("offlineSearch", "false", "true"),
    ]


@ExtraKeys(True)
@dataclasses.dataclass
class DocpatchConfig:
    #: The encoding of all files that are patched. Falls back to the `encoding` build property, then `UTF-8`.
    encoding: str | None = None

    #: The directory that the files of the version #rules are relative to.
    content_directory: t.Annotated[str, Alias("content-directory")] = "content"

    #: The site configuration file that is stamped and archived.
    config_file: t.Annotated[str, Alias("config-file")] = "config.toml"

    #: A file with `key=value` build properties that provide versions. It is fine if it does not exist.
    properties_file: t.Annotated[str, Alias("properties-file")] = "gradle.properties"

    #: The name of the version that the documentation branch is derived from.
    branch_version: t.Annotated[str, Alias("branch-version")] = "komapperVersion"

    branch_policy: t.Annotated[BranchPolicy, Alias("branch-policy")] = BranchPolicy.SUFFIX

    #: The keys in the site configuration file that receive the version and the branch name.
    version_key: t.Annotated[str, Alias("version-key")] = "version"
    branch_key: t.Annotated[str, Alias("branch-key")] = "github_branch"

    #: Versions defined inline. They take precedence over the build properties.
    versions: dict[str, str] = dataclasses.field(default_factory=dict)

    rules: list[RuleConfig] = dataclasses.field(default_factory=get_default_rules)

    archive_flags: t.Annotated[list[ArchiveFlagConfig], Alias("archive-flags")] = dataclasses.field(
        default_factory=get_default_archive_flags
    )


class Configuration:
    """Represents the configuration stored in a directory, which is either read from `docpatch.toml` or the
    `[tool.docpatch]` section of `pyproject.toml`."""

    #: The directory that all configured paths are relative to.
    directory: Path

    pyproject_toml: TomlFile
    docpatch_toml: TomlFile

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.pyproject_toml = TomlFile(directory / "pyproject.toml")
        self.docpatch_toml = TomlFile(directory / "docpatch.toml")
        self._config: DocpatchConfig | None = None

    def __repr__(self) -> str:
        return f'{type(self).__name__}(directory="{self.directory}")'

    def get_raw_configuration(self) -> dict[str, t.Any]:
        """Loads the raw configuration from `docpatch.toml` or `pyproject.toml`. If neither of the files exist or the
        section in the pyproject does not exist, an empty dictionary is returned."""

        if self.docpatch_toml.exists():
            logger.debug("Reading configuration for <subj>%s</subj> from <val>%s</val>", self, self.docpatch_toml.path)
            return self.docpatch_toml.load()
        if self.pyproject_toml.exists():
            logger.debug("Reading configuration for <subj>%s</subj> from <val>%s</val>", self, self.pyproject_toml.path)
            return self.pyproject_toml.load().get("tool", {}).get("docpatch", {})
        logger.debug("No configuration file for <subj>%s</subj>, using defaults", self)
        return {}

    def config(self) -> DocpatchConfig:
        """Returns the deserialized configuration. It is loaded once and cached afterwards."""

        if self._config is None:
            import databind.json

            self._config = databind.json.load(self.get_raw_configuration(), DocpatchConfig)
        return self._config


def load_properties(path: Path, encoding: str = "ISO-8859-1") -> dict[str, str]:
    """Reads `key=value` (or `key: value`) pairs from a build properties file such as `gradle.properties`. Blank lines
    and lines starting with `#` or `!` are skipped. Returns an empty dictionary if the file does not exist.

    Only this subset of the Java properties format is understood: backslash line continuations and escapes are not
    interpreted, and `key value` entries separated by whitespace alone are skipped with a warning."""

    if not path.is_file():
        logger.debug("Properties file <subj>%s</subj> does not exist", path)
        return {}

    result: dict[str, str] = {}
    for lineno, line in enumerate(path.read_text(encoding).splitlines(), 1):
        line = line.strip()
        if not line or line[0] in "#!":
            continue
        positions = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if not positions:
            logger.warning("Ignoring line %d in <subj>%s</subj>: <val>%s</val>", lineno, path, line)
            continue
        index = min(positions)
        result[line[:index].strip()] = line[index + 1 :].strip()
    return result


def parse_assignments(values: t.Iterable[str]) -> dict[str, str]:
    """Parses `name=value` strings as given to the `--set` option."""

    result: dict[str, str] = {}
    for value in values:
        name, sep, version = value.partition("=")
        if not sep or not name.strip():
            raise ValueError(f'expected "name=value", got "{value}"')
        result[name.strip()] = version.strip()
    return result
