from __future__ import annotations

from databind.core.converter import ConversionError

from docpatch.application import option
from docpatch.ext.application.base import PatchCommand
from docpatch.versions import MissingVersionError


class ArchiveCommandPlugin(PatchCommand):
    """Mark the documentation of this version as archived.

    Flips the flags in the site configuration file that distinguish a live version
    of the documentation from an archived snapshot. By default:

      <fg=dark_gray>archived_version</fg>  = <fg=yellow>false</fg> → <fg=yellow>true</fg>   show the "archived" banner
      <fg=dark_gray>algolia_docsearch</fg> = <fg=yellow>true</fg>  → <fg=yellow>false</fg>  stop using the live search index
      <fg=dark_gray>offlineSearch</fg>     = <fg=yellow>false</fg> → <fg=yellow>true</fg>   bundle the search index

    Only lines that read exactly <b>key = value</b> are changed. The flags can be configured
    with <fg=green>archive-flags</fg>. Pass <opt>--stamp</opt> to also write the version and branch
    name into the configuration file.
    """

    name = "archive"
    options = PatchCommand.options + [
        option("stamp", None, "Also write the version and branch name into the site configuration file."),
    ]

    def handle(self) -> int:
        try:
            rules = self.project.archive_rules()
            if self.option("stamp"):
                rules += self.project.stamp_rules(self.get_versions(), self.get_branch_policy())
        except (ConversionError, MissingVersionError, ValueError) as exc:
            self.line_error(f"error: {exc}", "error")
            return 1

        return self.apply(rules)
