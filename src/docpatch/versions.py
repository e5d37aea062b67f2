""" The named version numbers that drive a patch run and the documentation branch name derived from them. """

from __future__ import annotations

import enum
import re
import typing as t

import typing_extensions as te
from databind.core.settings import Alias


class MissingVersionError(KeyError):
    """Raised when a #VersionSet does not contain the requested version name."""

    def __init__(self, name: str, available: t.Sequence[str]) -> None:
        super().__init__(name)
        self.name = name
        self.available = list(available)

    def __str__(self) -> str:
        return f'no version "{self.name}" defined (available: {", ".join(self.available) or "none"})'


class VersionSet(t.Mapping[str, str]):
    """An ordered, read-only mapping of symbolic names (e.g. `kotlinVersion`) to version strings. Later sources given
    to #merge() take precedence over earlier ones, but the order of first appearance is kept."""

    def __init__(self, versions: t.Mapping[str, str] | t.Iterable[tuple[str, str]] = ()) -> None:
        self._versions: dict[str, str] = dict(versions)

    def __repr__(self) -> str:
        return f"VersionSet({self._versions!r})"

    def __getitem__(self, name: str) -> str:
        try:
            return self._versions[name]
        except KeyError:
            raise MissingVersionError(name, list(self._versions))

    def __iter__(self) -> t.Iterator[str]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def merge(self, *others: t.Mapping[str, str]) -> VersionSet:
        result = dict(self._versions)
        for other in others:
            result.update(other)
        return VersionSet(result)


class BranchPolicy(enum.Enum):
    """How the documentation branch name is derived from a version number. In the configuration, members are
    written by their value (e.g. `major-minor`)."""

    #: Drop the patch number but keep a pre-release suffix: `1.2.3-RC1` becomes `v1.2-RC1`.
    SUFFIX: te.Annotated[str, Alias("suffix")] = "suffix"

    #: Keep only the major and minor number: `1.2.3-RC1` becomes `v1.2`.
    MAJOR_MINOR: te.Annotated[str, Alias("major-minor")] = "major-minor"


BRANCH_VERSION_REGEX = re.compile(r"(\d+\.\d+)(\.\d+)(-.+)?")


def get_branch_name(version: str, policy: BranchPolicy = BranchPolicy.SUFFIX) -> str:
    """Derive the name of the documentation branch for *version*.

    Arguments:
      version: A version number such as `0.19.0` or `1.2.3-RC1`.
      policy: The #BranchPolicy to apply.
    Raises:
      ValueError: If *policy* is #BranchPolicy.SUFFIX and *version* contains no `major.minor.patch`.
    """

    if policy == BranchPolicy.SUFFIX:
        match = BRANCH_VERSION_REGEX.search(version)
        if not match:
            raise ValueError(f'version "{version}" does not match "{BRANCH_VERSION_REGEX.pattern}"')
        return "v" + match.group(1) + (match.group(3) or "")
    elif policy == BranchPolicy.MAJOR_MINOR:
        return "v" + ".".join(version.split(".")[:2])
    else:
        raise ValueError(f"unknown branch policy: {policy!r}")
