from __future__ import annotations

from databind.core.converter import ConversionError

from docpatch.application import option
from docpatch.ext.application.base import PatchCommand
from docpatch.versions import MissingVersionError


class UpdateVersionCommandPlugin(PatchCommand):
    """Write the current version numbers into the documentation pages.

    Every rule configured under <fg=green>[tool.docpatch.rules]</fg> (or <fg=green>[[rules]]</fg> in
    <u>docpatch.toml</u>) replaces the text between a <b>prefix</b> and a <b>suffix</b> pattern with
    a version from the version set, in all of its <b>files</b>:

      <fg=green>[[rules]]</fg>
      <fg=dark_gray>version</fg> = <fg=yellow>"kotlinVersion"</fg>
      <fg=dark_gray>prefix</fg> = <fg=yellow>'kotlin\\("jvm"\\) version "'</fg>
      <fg=dark_gray>files</fg> = [<fg=yellow>"en/docs/Quickstart/_index.md"</fg>]

    The version set is read from <u>gradle.properties</u>, the <fg=green>versions</fg> table
    of the configuration and the <opt>--set</opt> option, in that order of precedence.

    Afterwards, the version and the branch name derived from it are written into the
    site configuration file, unless <opt>--no-stamp</opt> is given. Files that already
    contain the current versions are not touched.
    """

    name = "update-version"
    aliases = ["updateVersion"]
    options = PatchCommand.options + [
        option("no-stamp", None, "Do not write the version and branch name into the site configuration file."),
    ]

    def handle(self) -> int:
        try:
            versions = self.get_versions()
            rules = self.project.version_rules(versions)
            if not self.option("no-stamp"):
                rules += self.project.stamp_rules(versions, self.get_branch_policy())
        except (ConversionError, MissingVersionError, ValueError) as exc:
            self.line_error(f"error: {exc}", "error")
            return 1

        return self.apply(rules)
