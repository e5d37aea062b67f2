from pathlib import Path

import pytest

from docpatch.util.fs import atomic_write


def test__atomic_write__replaces_file_with_encoding(tmp_path: Path):
    path = tmp_path / "_index.md"
    path.write_text("old")

    with atomic_write(path, "UTF-16") as fp:
        fp.write("neue Version\r\n")

    assert path.read_bytes() == "neue Version\r\n".encode("UTF-16")
    assert list(tmp_path.iterdir()) == [path]


def test__atomic_write__keeps_original_on_error(tmp_path: Path):
    path = tmp_path / "_index.md"
    path.write_text("old")

    with pytest.raises(RuntimeError):
        with atomic_write(path, "UTF-8") as fp:
            fp.write("new")
            raise RuntimeError

    assert path.read_text() == "old"
    assert list(tmp_path.iterdir()) == [path]
