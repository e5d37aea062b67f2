import os
from pathlib import Path

from docpatch.application import Application


def main() -> None:
    cwd = os.getenv("DOCPATCH_DIR")
    if cwd:
        os.chdir(cwd)
        os.unsetenv("DOCPATCH_DIR")
    Application(Path.cwd()).run()


if __name__ == "__main__":
    main()
