""" Apply regular expression substitutions to files in place. """

from __future__ import annotations

import codecs
import dataclasses
import logging
import re
import typing as t
from pathlib import Path

logger = logging.getLogger(__name__)


class PatchError(Exception):
    """Base class for errors that abort a patch run. Files patched before the error stay patched."""

    def __init__(self, file: Path, message: str) -> None:
        super().__init__(file, message)
        self.file = file
        self.message = message

    def __str__(self) -> str:
        return f"{self.file}: {self.message}"


class TargetFileNotFoundError(PatchError):
    pass


class TargetEncodingError(PatchError):
    pass


@dataclasses.dataclass(frozen=True)
class PatchRule:
    """Replaces all matches of *pattern* in *file* with *replacement*. The *pattern* is compiled with #re.M and the
    *replacement* is a template as accepted by #re.sub() that may refer to the groups of *pattern*."""

    file: Path
    pattern: str
    replacement: str
    encoding: str = "UTF-8"

    def __post_init__(self) -> None:
        assert isinstance(self.file, Path), self


@dataclasses.dataclass(frozen=True)
class PatchResult:
    file: Path
    replacements: int
    changed: bool


def _escape_replacement(text: str) -> str:
    return text.replace("\\", "\\\\")


def version_rule(file: Path, prefix: str, version: str, suffix: str = '"', encoding: str = "UTF-8") -> PatchRule:
    """Create a rule that replaces the text between *prefix* and *suffix* (both regular expressions) with *version*.
    The replaced text may be anything that does not contain a double quote, so for example the prefix
    `kotlin\\("jvm"\\) version "` turns `kotlin("jvm") version "1.5.31"` into `kotlin("jvm") version "1.6.0"`."""

    return PatchRule(
        file=file,
        pattern=f'({prefix})[^"]*({suffix})',
        replacement=r"\g<1>" + _escape_replacement(version) + r"\g<2>",
        encoding=encoding,
    )


def config_line_rule(file: Path, key: str, old: str, new: str, encoding: str = "UTF-8") -> PatchRule:
    """Create a rule that rewrites a line that reads exactly `key = old` to `key = new`. Lines may end with `\\n`
    or `\\r\\n`; the line ending is kept."""

    return PatchRule(
        file=file,
        pattern=f"^{re.escape(key)} = {re.escape(old)}(?=\\r?$)",
        replacement=_escape_replacement(f"{key} = {new}"),
        encoding=encoding,
    )


def config_value_rule(file: Path, key: str, value: str, encoding: str = "UTF-8") -> PatchRule:
    """Create a rule that stamps the quoted string *value* into a line of the form `key = "..."`."""

    return PatchRule(
        file=file,
        pattern=f'^({re.escape(key)} = ")[^"\\n]*(")(?=\\r?$)',
        replacement=r"\g<1>" + _escape_replacement(value) + r"\g<2>",
        encoding=encoding,
    )


class VersionPatcher:
    """Applies #PatchRule#s one after another. Reading or writing a file that fails raises a #PatchError which aborts
    the run. A pattern that does not match is not an error; the file is left as is. With *dry* enabled, the results
    are computed but nothing is written to disk."""

    def __init__(self, dry: bool = False) -> None:
        self.dry = dry

    def apply_patches(self, rules: t.Iterable[PatchRule]) -> list[PatchResult]:
        # Rules targeting the same file see the output of the previous rule, also in dry mode.
        pending: dict[Path, str] = {}
        results = []
        for rule in rules:
            content = pending[rule.file] if rule.file in pending else self._read(rule)
            try:
                new_content, count = re.subn(rule.pattern, rule.replacement, content, flags=re.M)
            except re.error as exc:
                raise PatchError(rule.file, f"invalid pattern {rule.pattern!r} or replacement ({exc})")
            if count == 0:
                logger.debug("Pattern <val>%s</val> does not match in <subj>%s</subj>", rule.pattern, rule.file)
            changed = new_content != content
            if changed:
                if self.dry:
                    pending[rule.file] = new_content
                else:
                    self._write(rule, new_content)
            results.append(PatchResult(rule.file, count, changed))
        return results

    def _read(self, rule: PatchRule) -> str:
        self._check_encoding(rule)
        try:
            with rule.file.open(encoding=rule.encoding, newline="") as fp:
                return fp.read()
        except FileNotFoundError:
            raise TargetFileNotFoundError(rule.file, "file not found")
        except UnicodeDecodeError as exc:
            raise TargetEncodingError(rule.file, f"cannot decode with encoding {rule.encoding!r} ({exc.reason})")
        except OSError as exc:
            raise PatchError(rule.file, f"cannot read file ({exc.strerror or exc})")

    def _write(self, rule: PatchRule, content: str) -> None:
        from docpatch.util.fs import atomic_write

        logger.info("Writing <subj>%s</subj>", rule.file)
        try:
            with atomic_write(rule.file, rule.encoding) as fp:
                fp.write(content)
        except UnicodeEncodeError as exc:
            raise TargetEncodingError(rule.file, f"cannot encode with encoding {rule.encoding!r} ({exc.reason})")
        except OSError as exc:
            raise PatchError(rule.file, f"cannot write file ({exc.strerror or exc})")

    @staticmethod
    def _check_encoding(rule: PatchRule) -> None:
        try:
            codecs.lookup(rule.encoding)
        except LookupError:
            raise TargetEncodingError(rule.file, f"unknown encoding {rule.encoding!r}")


def apply_patches(rules: t.Iterable[PatchRule], dry: bool = False) -> list[PatchResult]:
    """Shorthand for `VersionPatcher(dry).apply_patches(rules)`."""

    return VersionPatcher(dry).apply_patches(rules)
