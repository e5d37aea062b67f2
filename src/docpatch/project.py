""" Turns the configuration of a documentation site into the version set and the patch rules for a run. """

from __future__ import annotations

import logging
import typing as t
from pathlib import Path

from docpatch.configuration import Configuration, DocpatchConfig, load_properties
from docpatch.patcher import PatchRule, config_line_rule, config_value_rule, version_rule
from docpatch.versions import BranchPolicy, VersionSet, get_branch_name

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"


class Project(Configuration):
    """A documentation site rooted in #directory."""

    def __init__(self, directory: Path) -> None:
        super().__init__(directory)
        self._properties: dict[str, str] | None = None

    @property
    def content_directory(self) -> Path:
        return self.directory / self.config().content_directory

    @property
    def config_file(self) -> Path:
        return self.directory / self.config().config_file

    def properties(self) -> dict[str, str]:
        """Returns the build properties read from the configured properties file."""

        if self._properties is None:
            self._properties = load_properties(self.directory / self.config().properties_file)
        return self._properties

    def encoding(self) -> str:
        return self.config().encoding or self.properties().get("encoding") or DEFAULT_ENCODING

    def versions(self, overrides: t.Mapping[str, str] | None = None) -> VersionSet:
        """Returns the version set. Build properties are overridden by the `versions` configured inline, which are in
        turn overridden by the *overrides*."""

        return VersionSet(self.properties()).merge(self.config().versions, overrides or {})

    def branch_name(self, versions: VersionSet, policy: BranchPolicy | None = None) -> str:
        config = self.config()
        return get_branch_name(versions[config.branch_version], policy or config.branch_policy)

    def version_rules(self, versions: VersionSet) -> list[PatchRule]:
        """Returns the rules that write the version numbers into the content files, in configured order."""

        config = self.config()
        encoding = self.encoding()
        rules = []
        for rule in config.rules:
            version = versions[rule.version]
            for filename in rule.files:
                rules.append(version_rule(self.content_directory / filename, rule.prefix, version, rule.suffix, encoding))
        return rules

    def stamp_rules(self, versions: VersionSet, policy: BranchPolicy | None = None) -> list[PatchRule]:
        """Returns the rules that write the current version and branch name into the site configuration file."""

        config = self.config()
        encoding = self.encoding()
        return [
            config_value_rule(self.config_file, config.version_key, versions[config.branch_version], encoding),
            config_value_rule(self.config_file, config.branch_key, self.branch_name(versions, policy), encoding),
        ]

    def archive_rules(self) -> list[PatchRule]:
        """Returns the rules that flip the archive flags in the site configuration file."""

        encoding = self.encoding()
        return [
            config_line_rule(self.config_file, flag.key, flag.from_, flag.to, encoding)
            for flag in self.config().archive_flags
        ]
