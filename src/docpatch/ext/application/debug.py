from __future__ import annotations

from databind.core.converter import ConversionError

from docpatch.application import option
from docpatch.ext.application.base import ProjectCommand
from docpatch.versions import MissingVersionError


class DebugCommandPlugin(ProjectCommand):
    """Print the documentation branch name derived from the current version.

    No files are changed. With <opt>--versions</opt>, the whole version set is printed
    before the branch name.
    """

    name = "debug"
    options = ProjectCommand.options + [
        option("versions", None, "Print the version set as well."),
    ]

    def handle(self) -> int:
        try:
            versions = self.get_versions()
            branch_name = self.project.branch_name(versions, self.get_branch_policy())
        except (ConversionError, MissingVersionError, ValueError) as exc:
            self.line_error(f"error: {exc}", "error")
            return 1

        if self.option("versions"):
            for name, version in versions.items():
                self.line(f"<comment>{name}</comment> = {version}")
        self.line(branch_name)
        return 0
