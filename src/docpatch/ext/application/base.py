from __future__ import annotations

import os
import typing as t
from pathlib import Path

from docpatch.application import Application, Command, option
from docpatch.plugins import ApplicationPlugin
from docpatch.versions import BranchPolicy, VersionSet

if t.TYPE_CHECKING:
    from docpatch.patcher import PatchResult, PatchRule
    from docpatch.project import Project


class ProjectCommand(Command, ApplicationPlugin):
    """Base for commands that read the version set of the project in the current directory."""

    app: Application

    options = [
        option(
            "set",
            "s",
            "Override a version of the version set, e.g. <opt>--set komapperVersion=1.0.0</opt>.",
            flag=False,
            multiple=True,
        ),
        option(
            "branch-policy",
            None,
            "How to derive the branch name from the version: <u>suffix</u> or <u>major-minor</u>.",
            flag=False,
        ),
    ]

    def __init__(self, app: Application) -> None:
        Command.__init__(self)
        ApplicationPlugin.__init__(self, app)

    def load_configuration(self, app: Application) -> None:
        return None

    def activate(self, app: Application, config: None) -> None:
        app.cleo.add(self)

    @property
    def project(self) -> Project:
        return self.app.project

    def get_versions(self) -> VersionSet:
        """Returns the version set of the project with the `--set` overrides applied. Raises a #ValueError if an
        override is malformed."""

        from docpatch.configuration import parse_assignments

        return self.project.versions(parse_assignments(self.option("set") or []))

    def get_branch_policy(self) -> BranchPolicy | None:
        """Returns the policy given with `--branch-policy`, or `None` to use the configured one."""

        value = self.option("branch-policy")
        if value is None:
            return None
        try:
            return BranchPolicy(value)
        except ValueError:
            choices = ", ".join(p.value for p in BranchPolicy)
            raise ValueError(f'invalid branch policy "{value}" (choose from {choices})')


class PatchCommand(ProjectCommand):
    """Base for commands that patch files of the project."""

    options = ProjectCommand.options + [
        option("dry", "d", "Do not commit changes to disk."),
    ]

    def apply(self, rules: t.Sequence[PatchRule]) -> int:
        """Applies the *rules* and shows the results. Returns the exit code for the command."""

        from docpatch.patcher import PatchError, VersionPatcher

        dry = self.option("dry")
        if dry:
            self.line("dry mode enabled, no changes will be committed to disk", "comment")

        try:
            results = VersionPatcher(dry).apply_patches(rules)
        except PatchError as exc:
            self.line_error(f"error: {exc}", "error")
            return 1

        self._show_results(results, dry)
        return 0

    def _show_results(self, results: t.Sequence[PatchResult], dry: bool) -> None:
        """Internal. Prints one line per file with the number of replacements and whether the file changed."""

        per_file: dict[Path, tuple[int, bool]] = {}
        for result in results:
            count, changed = per_file.get(result.file, (0, False))
            per_file[result.file] = (count + result.replacements, changed or result.changed)

        if not per_file:
            self.line("<info>no files to patch</info>")
            return

        names = {file: os.path.relpath(file, self.project.directory) + ":" for file in per_file}
        max_w = max(len(name) for name in names.values())
        for file, (count, changed) in per_file.items():
            status = ("would change" if dry else "changed") if changed else "unchanged"
            plural = "" if count == 1 else "s"
            self.line(f"  <fg=cyan>{names[file].ljust(max_w)}</fg> {count} replacement{plural}, <b>{status}</b>")
