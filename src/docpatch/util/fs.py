from __future__ import annotations

import contextlib
import os
import tempfile
import typing as t
from pathlib import Path

import typing_extensions as te

StrPath: te.TypeAlias = "str | Path"


@contextlib.contextmanager
def atomic_write(
    path: StrPath,
    encoding: str,
    newline: str | None = "",
    rename_mode: te.Literal["posix", "windows"] | None = None,
) -> t.Iterator[t.TextIO]:
    """Write text to a temporary file next to *path*, then rename it over *path* when the context exits. If an error
    occurs while the context manager is active, the temporary file is deleted and the original file stays untouched.
    On Windows, the file cannot be replaced in an atomic operation, so it is deleted first.

    The default *newline* disables newline translation so that the written bytes match the text exactly."""

    path = Path(path)
    if rename_mode is None:
        rename_mode = "windows" if os.name == "nt" else "posix"

    fp = tempfile.NamedTemporaryFile(
        "w",
        encoding=encoding,
        newline=newline,
        prefix=path.name + "~",
        dir=path.parent,
        delete=False,
    )
    try:
        with fp:
            yield t.cast(t.TextIO, fp)
            fp.flush()
            os.fsync(fp.fileno())
    except BaseException:
        os.remove(fp.name)
        raise

    if path.is_file():
        # Keep the permissions of the file that is being replaced.
        os.chmod(fp.name, path.stat().st_mode)
        if rename_mode == "windows":
            os.remove(path)
    os.rename(fp.name, path)
